"""Job expectation matchers."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable

from ..errors import ConfigurationError, InnerAssertionFailure, UsageError
from ..queue import Job, RecordingQueueAdapter, get_queue_adapter
from ..schemas import JobRecord
from .arguments import check_argument_list
from .evaluation import ENQUEUE, PERFORM, JobActivity, Verdict, evaluate
from .spec import CountKind, MatcherSpec, resolve_count

ADAPTER_REQUIRED_MESSAGE = (
    'To use job matchers set the queue adapter to TestQueueAdapter (set_queue_adapter("test"))'
)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Recorded-job count taken before a block runs."""

    adapter: RecordingQueueAdapter
    before_count: int


class JobMatcher:
    """Shared builder for job matchers.

    Every builder method returns a new matcher; the receiver is never changed.
    Subclasses provide ``evaluate`` and so satisfy the ``Matcher`` protocol.
    """

    activity: JobActivity = ENQUEUE

    def __init__(
        self,
        spec: MatcherSpec | None = None,
        *,
        queue_adapter: RecordingQueueAdapter | None = None,
    ) -> None:
        self.spec = spec or MatcherSpec()
        self._queue_adapter = queue_adapter

    def with_args(self, *arguments: Any) -> JobMatcher:
        check_argument_list(arguments)
        return self._derive(arguments=arguments or None)

    def satisfying(self, block: Callable[..., Any]) -> JobMatcher:
        """Run ``block`` with the deserialized arguments of each candidate job."""
        if not callable(block):
            raise UsageError(f"satisfying() expects a callable, got {block!r}")
        return self._derive(block=block)

    def on_queue(self, queue_name: str) -> JobMatcher:
        return self._derive(queue_name=queue_name)

    def at(self, scheduled_at: datetime) -> JobMatcher:
        if not isinstance(scheduled_at, datetime):
            raise UsageError(f"at() expects a datetime, got {scheduled_at!r}")
        return self._derive(scheduled_at=scheduled_at)

    def exactly(self, count: int | str) -> JobMatcher:
        return self._count("exactly", count)

    def at_least(self, count: int | str) -> JobMatcher:
        return self._count("at_least", count)

    def at_most(self, count: int | str) -> JobMatcher:
        return self._count("at_most", count)

    def once(self) -> JobMatcher:
        return self.exactly("once")

    def twice(self) -> JobMatcher:
        return self.exactly("twice")

    def thrice(self) -> JobMatcher:
        return self.exactly("thrice")

    @property
    def times(self) -> JobMatcher:
        return self

    def and_(self, other: Any) -> AllOf:
        return AllOf(self, other)

    __and__ = and_

    def _count(self, kind: CountKind, count: int | str) -> JobMatcher:
        return self._derive(count=resolve_count(kind, count))

    def _derive(self, **changes: Any) -> JobMatcher:
        return type(self)(replace(self.spec, **changes), queue_adapter=self._queue_adapter)

    def _recording_adapter(self) -> RecordingQueueAdapter:
        adapter = self._queue_adapter if self._queue_adapter is not None else get_queue_adapter()
        if not isinstance(adapter, RecordingQueueAdapter):
            raise ConfigurationError(ADAPTER_REQUIRED_MESSAGE)
        return adapter

    def _records(self, adapter: RecordingQueueAdapter) -> list[JobRecord]:
        return getattr(adapter, self.activity.records_attr)

    def _verdict(self, snapshot: Snapshot, negated: bool) -> Verdict:
        adapter = snapshot.adapter
        return evaluate(
            snapshot.before_count,
            self._records(adapter),
            self.spec,
            activity=self.activity,
            deserialize=adapter.serializer.deserialize,
            negated=negated,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec!r})"


class BlockJobMatcher(JobMatcher):
    """Counts jobs recorded while a callable runs."""

    def evaluate(self, subject: Any, *, negated: bool = False) -> Verdict:
        require_block(subject, self)
        snapshot = self.snapshot()
        subject()
        return self.conclude(snapshot, negated=negated)

    def snapshot(self) -> Snapshot:
        adapter = self._recording_adapter()
        return Snapshot(adapter=adapter, before_count=len(self._records(adapter)))

    def conclude(self, snapshot: Snapshot, *, negated: bool = False) -> Verdict:
        return self._verdict(snapshot, negated)


class SubjectJobMatcher(JobMatcher):
    """Counts every recorded job of the subject job class."""

    def evaluate(self, subject: Any, *, negated: bool = False) -> Verdict:
        if not (inspect.isclass(subject) and issubclass(subject, Job)):
            raise UsageError(
                f"{type(self).__name__} expects a Job subclass as subject, got {subject!r}"
            )
        adapter = self._recording_adapter()
        matcher = self._derive(job_class=subject)
        return matcher._verdict(Snapshot(adapter=adapter, before_count=0), negated)


class HaveEnqueuedJob(BlockJobMatcher):
    activity = ENQUEUE


class HavePerformedJob(BlockJobMatcher):
    activity = PERFORM


class HaveBeenEnqueued(SubjectJobMatcher):
    activity = ENQUEUE


class HaveBeenPerformed(SubjectJobMatcher):
    activity = PERFORM


class AllOf:
    """Conjunction of block matchers sharing a single run of the block.

    Each matcher keeps its own before-count and filters the same delta.
    """

    def __init__(self, *matchers: Any) -> None:
        for matcher in matchers:
            if not isinstance(matcher, (BlockJobMatcher, AllOf)):
                raise UsageError(f"Only block job matchers can be combined, got {matcher!r}")
        self.matchers: list[BlockJobMatcher] = []
        for matcher in matchers:
            self.matchers.extend(matcher.matchers if isinstance(matcher, AllOf) else [matcher])

    def and_(self, other: Any) -> AllOf:
        return AllOf(self, other)

    __and__ = and_

    def evaluate(self, subject: Any, *, negated: bool = False) -> Verdict:
        if negated:
            raise UsageError("Compound job expectations cannot be negated")
        require_block(subject, self)
        snapshots = [matcher.snapshot() for matcher in self.matchers]
        subject()

        verdicts: list[Verdict] = []
        for matcher, snapshot in zip(self.matchers, snapshots):
            try:
                verdicts.append(matcher.conclude(snapshot))
            except InnerAssertionFailure as exc:
                verdicts.append(Verdict(passed=False, message=str(exc)))

        failures = [verdict.message for verdict in verdicts if not verdict.passed]
        return Verdict(
            passed=not failures,
            message="\n\n...and:\n\n".join(failures),
            matched=sum(verdict.matched for verdict in verdicts),
        )

    def __repr__(self) -> str:
        return " & ".join(repr(matcher) for matcher in self.matchers)


def require_block(subject: Any, matcher: Any) -> None:
    if inspect.isclass(subject) or not callable(subject):
        raise UsageError(
            f"{type(matcher).__name__} only supports block expectations, "
            f"pass a callable instead of {subject!r}"
        )


def have_enqueued_job(
    job_class: type[Job] | None = None,
    *,
    queue_adapter: RecordingQueueAdapter | None = None,
) -> HaveEnqueuedJob:
    """Expect the block to enqueue jobs (exactly one by default)."""
    return HaveEnqueuedJob(MatcherSpec(job_class=job_class), queue_adapter=queue_adapter)


def have_performed_job(
    job_class: type[Job] | None = None,
    *,
    queue_adapter: RecordingQueueAdapter | None = None,
) -> HavePerformedJob:
    """Expect the block to perform jobs (exactly one by default)."""
    return HavePerformedJob(MatcherSpec(job_class=job_class), queue_adapter=queue_adapter)


def have_been_enqueued(*, queue_adapter: RecordingQueueAdapter | None = None) -> HaveBeenEnqueued:
    """Expect the subject job class to have been enqueued."""
    return HaveBeenEnqueued(queue_adapter=queue_adapter)


def have_been_performed(
    *, queue_adapter: RecordingQueueAdapter | None = None
) -> HaveBeenPerformed:
    """Expect the subject job class to have been performed."""
    return HaveBeenPerformed(queue_adapter=queue_adapter)


enqueue_job = have_enqueued_job
perform_job = have_performed_job


__all__ = [
    "ADAPTER_REQUIRED_MESSAGE",
    "AllOf",
    "BlockJobMatcher",
    "HaveBeenEnqueued",
    "HaveBeenPerformed",
    "HaveEnqueuedJob",
    "HavePerformedJob",
    "JobMatcher",
    "SubjectJobMatcher",
    "enqueue_job",
    "have_been_enqueued",
    "have_been_performed",
    "have_enqueued_job",
    "have_performed_job",
    "perform_job",
]
