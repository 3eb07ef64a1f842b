"""In-memory job queue used as the subject of job matchers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import structlog

from .adapters import (
    InlineQueueAdapter,
    QueueAdapter,
    QueueAdapterRegistry,
    RecordingQueueAdapter,
    TestQueueAdapter,
    default_registry,
)
from .arguments import ArgumentSerializer
from .global_id import GlobalID, GlobalIdentification, GlobalIdLocator
from .job import ConfiguredJob, Job

_logger = structlog.get_logger(__name__)


def get_queue_adapter() -> QueueAdapter | None:
    """Return the adapter jobs are currently submitted to."""
    return Job.queue_adapter


def set_queue_adapter(
    adapter: QueueAdapter | str | None,
    *,
    registry: QueueAdapterRegistry | None = None,
) -> QueueAdapter | None:
    """Install ``adapter`` (an instance or a registered name) for all jobs."""
    if isinstance(adapter, str):
        adapter = (registry or default_registry()).create(adapter)
    Job.queue_adapter = adapter
    _logger.debug(
        "queue_adapter.installed",
        adapter=type(adapter).__name__ if adapter is not None else None,
    )
    return adapter


@contextmanager
def use_queue_adapter(adapter: QueueAdapter | str) -> Iterator[QueueAdapter]:
    """Install ``adapter`` for the duration of the block."""
    previous = get_queue_adapter()
    installed = set_queue_adapter(adapter)
    try:
        yield installed
    finally:
        set_queue_adapter(previous)


__all__ = [
    "ArgumentSerializer",
    "ConfiguredJob",
    "GlobalID",
    "GlobalIdLocator",
    "GlobalIdentification",
    "InlineQueueAdapter",
    "Job",
    "QueueAdapter",
    "QueueAdapterRegistry",
    "RecordingQueueAdapter",
    "TestQueueAdapter",
    "default_registry",
    "get_queue_adapter",
    "set_queue_adapter",
    "use_queue_adapter",
]
