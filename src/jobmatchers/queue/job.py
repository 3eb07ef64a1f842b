"""Job base class."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, ClassVar
from uuid import uuid4

import pendulum

from ..errors import ConfigurationError

if TYPE_CHECKING:
    from .adapters import QueueAdapter


class Job:
    """Base class for background jobs.

    Subclasses implement ``perform``. ``queue_adapter`` is shared by every
    subclass unless a subclass assigns its own.
    """

    queue_name: str | None = None
    queue_adapter: ClassVar[QueueAdapter | None] = None

    def __init__(self, *arguments: Any) -> None:
        self.arguments = list(arguments)
        self.job_id = uuid4().hex
        self.queue_name = type(self).queue_name
        self.scheduled_at: datetime | None = None

    def perform(self, *arguments: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement perform()")

    def perform_now(self) -> Any:
        return self.perform(*self.arguments)

    @classmethod
    def set(
        cls,
        *,
        queue: str | None = None,
        wait: timedelta | None = None,
        wait_until: datetime | None = None,
    ) -> ConfiguredJob:
        return ConfiguredJob(cls, queue=queue, wait=wait, wait_until=wait_until)

    @classmethod
    def perform_later(cls, *arguments: Any) -> Job:
        return ConfiguredJob(cls).perform_later(*arguments)

    def enqueue(
        self,
        *,
        queue: str | None = None,
        wait: timedelta | None = None,
        wait_until: datetime | None = None,
    ) -> Job:
        adapter = type(self).queue_adapter
        if adapter is None:
            raise ConfigurationError(
                "No queue adapter configured, call set_queue_adapter() first"
            )
        if queue is not None:
            self.queue_name = queue
        if wait_until is not None:
            self.scheduled_at = pendulum.instance(wait_until)
        elif wait is not None:
            self.scheduled_at = pendulum.now("UTC") + wait
        adapter.enqueue(self)
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} job_id={self.job_id!r} arguments={self.arguments!r}>"


class ConfiguredJob:
    """A job class bound to submission options, as returned by ``Job.set``."""

    def __init__(
        self,
        job_class: type[Job],
        *,
        queue: str | None = None,
        wait: timedelta | None = None,
        wait_until: datetime | None = None,
    ) -> None:
        self._job_class = job_class
        self._options = {"queue": queue, "wait": wait, "wait_until": wait_until}

    def perform_later(self, *arguments: Any) -> Job:
        return self._job_class(*arguments).enqueue(**self._options)


__all__ = ["ConfiguredJob", "Job"]
