"""Error taxonomy for job matchers and the in-memory queue."""

from __future__ import annotations


class JobMatchersError(Exception):
    """Base class for every error raised by this package."""


class UsageError(JobMatchersError, ValueError):
    """Raised when a matcher is used in a way its mode does not support."""


class ConfigurationError(JobMatchersError, RuntimeError):
    """Raised when the queue is not set up for recording jobs."""


class ExpectationFailure(JobMatchersError, AssertionError):
    """Raised when observed job activity does not match the expectation."""


class InnerAssertionFailure(ExpectationFailure):
    """Raised when an argument callback fails its own assertion.

    The message is the callback's message, unchanged; the original error is
    kept as ``__cause__``.
    """


class SerializationError(JobMatchersError, TypeError):
    """Raised when a job argument cannot be serialized."""


class DeserializationError(JobMatchersError, ValueError):
    """Raised when a serialized job argument cannot be restored."""


__all__ = [
    "ConfigurationError",
    "DeserializationError",
    "ExpectationFailure",
    "InnerAssertionFailure",
    "JobMatchersError",
    "SerializationError",
    "UsageError",
]
