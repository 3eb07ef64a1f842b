"""pytest integration.

Enable with ``pytest_plugins = ["jobmatchers.pytest_plugin"]`` in the root
``conftest.py``. Settings come from the YAML file named by the
``jobmatchers_config`` ini option.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from .config import ConfigManager
from .container import MatchersContainer, create_container
from .logging import configure_logging
from .queue import QueueAdapter, use_queue_adapter
from .schemas import MatcherSettings, load_settings

settings_key = pytest.StashKey[MatcherSettings]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        "jobmatchers_config",
        help="YAML file with job matcher settings, relative to the rootdir.",
        default="",
    )


def pytest_configure(config: pytest.Config) -> None:
    raw: dict = {}
    config_path = config.getini("jobmatchers_config")
    if config_path:
        path = Path(config.rootpath) / config_path
        raw = ConfigManager(path.parent).load(path.stem)
    settings = load_settings(raw)
    config.stash[settings_key] = settings
    configure_logging(settings.log_level)


@pytest.fixture
def job_container(request: pytest.FixtureRequest) -> MatchersContainer:
    return create_container(settings=request.config.stash.get(settings_key, None))


@pytest.fixture
def queue_adapter(job_container: MatchersContainer) -> Iterator[QueueAdapter]:
    """Install a fresh adapter for the test and restore the previous one."""
    with use_queue_adapter(job_container.queue_adapter()) as adapter:
        yield adapter
