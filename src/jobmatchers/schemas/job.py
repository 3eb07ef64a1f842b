"""Captured job events."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JobRecord(BaseModel):
    """One job submission as recorded by a queue adapter.

    ``arguments`` hold the serialized form; readers deserialize them before
    comparing.
    """

    job_class: Any
    job_id: str
    arguments: list[Any] = Field(default_factory=list)
    queue_name: str
    scheduled_at: datetime | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def job_name(self) -> str:
        return getattr(self.job_class, "__name__", str(self.job_class))
