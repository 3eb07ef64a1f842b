"""YAML settings files read by the pytest plugin."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class ConfigManager:
    """Reads ``<name>.yaml`` files from one settings directory."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Return the mapping stored in ``<name>.yaml``; an empty file gives ``{}``."""
        path = self._base_path / f"{name}.yaml"
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}


__all__ = ["ConfigManager"]
