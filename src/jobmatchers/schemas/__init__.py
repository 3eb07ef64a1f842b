"""Pydantic schema definitions for job records and settings."""

from __future__ import annotations

from .config import MatcherSettings, load_settings
from .job import JobRecord

__all__ = [
    "JobRecord",
    "MatcherSettings",
    "load_settings",
]
