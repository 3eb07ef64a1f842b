"""Assertion matchers for jobs recorded by an in-memory queue."""

from __future__ import annotations

__version__ = "0.1.0"

from .core import (
    any_args,
    anything,
    enqueue_job,
    hash_including,
    have_been_enqueued,
    have_been_performed,
    have_enqueued_job,
    have_performed_job,
    instance_of,
    kind_of,
    no_args,
    perform_job,
)
from .errors import (
    ConfigurationError,
    ExpectationFailure,
    InnerAssertionFailure,
    UsageError,
)
from .expectations import eq, expect
from .queue import (
    GlobalIdentification,
    Job,
    TestQueueAdapter,
    set_queue_adapter,
    use_queue_adapter,
)

__all__ = [
    "ConfigurationError",
    "ExpectationFailure",
    "GlobalIdentification",
    "InnerAssertionFailure",
    "Job",
    "TestQueueAdapter",
    "UsageError",
    "__version__",
    "any_args",
    "anything",
    "enqueue_job",
    "eq",
    "expect",
    "hash_including",
    "have_been_enqueued",
    "have_been_performed",
    "have_enqueued_job",
    "have_performed_job",
    "instance_of",
    "kind_of",
    "no_args",
    "perform_job",
    "set_queue_adapter",
    "use_queue_adapter",
]
