"""Queue adapters that receive submitted jobs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, Protocol, runtime_checkable

import structlog

from ..errors import ConfigurationError
from ..schemas import JobRecord
from .arguments import ArgumentSerializer

if TYPE_CHECKING:
    from .job import Job

_logger = structlog.get_logger(__name__)


@runtime_checkable
class QueueAdapter(Protocol):
    """Adapter contract for job submission."""

    def enqueue(self, job: Job) -> None:
        """Accept a job for execution, now or at ``job.scheduled_at``."""


@runtime_checkable
class RecordingQueueAdapter(Protocol):
    """Adapter that keeps every submission for later inspection.

    Job matchers only work against adapters satisfying this contract.
    """

    enqueued_jobs: list[JobRecord]
    performed_jobs: list[JobRecord]
    serializer: ArgumentSerializer

    def enqueue(self, job: Job) -> None:
        """Record (and optionally execute) a job."""

    def clear(self) -> None:
        """Forget every recorded job."""


class TestQueueAdapter:
    """In-memory adapter recording enqueued and performed jobs."""

    __test__ = False

    name = "test"

    def __init__(
        self,
        *,
        default_queue_name: str = "default",
        serializer: ArgumentSerializer | None = None,
    ) -> None:
        self.default_queue_name = default_queue_name
        self.serializer = serializer or ArgumentSerializer()
        self.enqueued_jobs: list[JobRecord] = []
        self.performed_jobs: list[JobRecord] = []
        self._performing = False

    def enqueue(self, job: Job) -> None:
        record = JobRecord(
            job_class=type(job),
            job_id=job.job_id,
            arguments=self.serializer.serialize(job.arguments),
            queue_name=job.queue_name or self.default_queue_name,
            scheduled_at=job.scheduled_at,
        )
        if not self._performing:
            self.enqueued_jobs.append(record)
            _logger.info(
                "job.enqueued",
                job_class=record.job_name,
                job_id=record.job_id,
                queue=record.queue_name,
                scheduled_at=record.scheduled_at,
            )
            return

        self.performed_jobs.append(record)
        arguments = self.serializer.deserialize(record.arguments)
        record.job_class(*arguments).perform_now()
        _logger.info(
            "job.performed",
            job_class=record.job_name,
            job_id=record.job_id,
            queue=record.queue_name,
        )

    @contextmanager
    def perform_enqueued_jobs(self) -> Iterator[TestQueueAdapter]:
        """Execute jobs as soon as they are submitted inside the block."""
        previous = self._performing
        self._performing = True
        try:
            yield self
        finally:
            self._performing = previous

    def clear(self) -> None:
        self.enqueued_jobs.clear()
        self.performed_jobs.clear()


class InlineQueueAdapter:
    """Adapter executing jobs immediately without recording them."""

    name = "inline"

    def __init__(
        self,
        *,
        default_queue_name: str = "default",
        serializer: ArgumentSerializer | None = None,
    ) -> None:
        self.default_queue_name = default_queue_name
        self._serializer = serializer or ArgumentSerializer()

    def enqueue(self, job: Job) -> None:
        if job.scheduled_at is not None:
            raise NotImplementedError(
                "Use a queueing backend to enqueue jobs in the future"
            )
        arguments = self._serializer.deserialize(self._serializer.serialize(job.arguments))
        type(job)(*arguments).perform_now()
        _logger.info(
            "job.performed",
            job_class=type(job).__name__,
            job_id=job.job_id,
            queue=job.queue_name or self.default_queue_name,
        )


class QueueAdapterRegistry:
    """Registry mapping adapter names to adapter factories."""

    def __init__(self, factories: dict[str, Callable[[], QueueAdapter]]):
        self._factories = dict(factories)

    def create(self, name: str) -> QueueAdapter:
        try:
            factory = self._factories[name]
        except KeyError as exc:
            raise ConfigurationError(f"Unsupported queue adapter: {name!r}") from exc
        return factory()

    def names(self) -> list[str]:
        return list(self._factories.keys())


def default_registry() -> QueueAdapterRegistry:
    """Return the default adapter registry."""
    return QueueAdapterRegistry({"test": TestQueueAdapter, "inline": InlineQueueAdapter})


__all__ = [
    "InlineQueueAdapter",
    "QueueAdapter",
    "QueueAdapterRegistry",
    "RecordingQueueAdapter",
    "TestQueueAdapter",
    "default_registry",
]
