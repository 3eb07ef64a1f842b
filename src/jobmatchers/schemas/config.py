"""Pydantic schema for matcher settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

AdapterName = Literal["test", "inline"]


class MatcherSettings(BaseModel):
    default_queue_name: str = "default"
    queue_adapter: AdapterName = "test"
    log_level: str = "WARNING"

    model_config = ConfigDict(extra="forbid")


def load_settings(raw: Any) -> MatcherSettings:
    if raw is None:
        return MatcherSettings()
    if isinstance(raw, MatcherSettings):
        return raw
    return MatcherSettings.model_validate(raw)
