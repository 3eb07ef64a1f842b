"""Job expectation matching components."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# NOTE: keep imports explicit for export clarity.
from .arguments import any_args, anything, hash_including, instance_of, kind_of, no_args
from .evaluation import ENQUEUE, PERFORM, JobActivity, Verdict, evaluate
from .matchers import (
    AllOf,
    HaveBeenEnqueued,
    HaveBeenPerformed,
    HaveEnqueuedJob,
    HavePerformedJob,
    JobMatcher,
    enqueue_job,
    have_been_enqueued,
    have_been_performed,
    have_enqueued_job,
    have_performed_job,
    perform_job,
)
from .spec import CountSpec, MatcherSpec


@runtime_checkable
class Matcher(Protocol):
    """Matcher contract used by ``expect``."""

    def evaluate(self, subject: Any, *, negated: bool = False) -> Verdict:
        """Return the verdict for ``subject``."""


__all__ = [
    "AllOf",
    "CountSpec",
    "ENQUEUE",
    "HaveBeenEnqueued",
    "HaveBeenPerformed",
    "HaveEnqueuedJob",
    "HavePerformedJob",
    "JobActivity",
    "JobMatcher",
    "Matcher",
    "MatcherSpec",
    "PERFORM",
    "Verdict",
    "any_args",
    "anything",
    "enqueue_job",
    "evaluate",
    "hash_including",
    "have_been_enqueued",
    "have_been_performed",
    "have_enqueued_job",
    "have_performed_job",
    "instance_of",
    "kind_of",
    "no_args",
    "perform_job",
]
