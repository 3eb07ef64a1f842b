"""Evaluation of a job expectation against recorded jobs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

import pendulum
import structlog

from ..errors import InnerAssertionFailure
from ..schemas import JobRecord
from .arguments import args_match
from .spec import MatcherSpec, same_instant

Deserializer = Callable[[Sequence[Any]], list[Any]]

_logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class JobActivity:
    """Which recorded list a matcher reads, and how messages name it."""

    verb: str
    past: str
    records_attr: str
    listing_header: str


ENQUEUE = JobActivity(
    verb="enqueue",
    past="enqueued",
    records_attr="enqueued_jobs",
    listing_header="Enqueued jobs:",
)
PERFORM = JobActivity(
    verb="perform",
    past="performed",
    records_attr="performed_jobs",
    listing_header="Performed jobs:",
)


@dataclass(slots=True)
class Verdict:
    """Outcome of one expectation."""

    passed: bool
    message: str
    matched: int = 0


def evaluate(
    before_count: int,
    records: Sequence[JobRecord],
    spec: MatcherSpec,
    *,
    activity: JobActivity,
    deserialize: Deserializer,
    negated: bool = False,
) -> Verdict:
    """Count the records after ``before_count`` that satisfy ``spec``."""
    window = list(records[before_count:])
    matching: list[JobRecord] = []
    unmatching: list[JobRecord] = []
    for record in window:
        if _record_matches(record, spec, deserialize):
            matching.append(record)
        else:
            unmatching.append(record)

    matched = len(matching)
    passed = spec.count.satisfied_by(matched) != negated

    _logger.debug(
        "matcher.evaluated",
        activity=activity.verb,
        expected=spec.count.describe(),
        matched=matched,
        window=len(window),
        negated=negated,
        passed=passed,
    )

    message = _expectation_message(spec, activity, matched, negated)
    if not passed and not negated and unmatching:
        lines = [activity.listing_header]
        lines.extend(f"  {describe_record(record, deserialize)}" for record in unmatching)
        message = "\n".join([message, *lines])
    return Verdict(passed=passed, message=message, matched=matched)


def _record_matches(record: JobRecord, spec: MatcherSpec, deserialize: Deserializer) -> bool:
    if spec.job_class is not None and record.job_class is not spec.job_class:
        return False
    if spec.queue_name is not None and record.queue_name != spec.queue_name:
        return False
    if spec.scheduled_at is not None and (
        record.scheduled_at is None or not same_instant(record.scheduled_at, spec.scheduled_at)
    ):
        return False
    if not spec.filters_arguments:
        return True

    arguments = deserialize(record.arguments)
    if spec.arguments is not None and not args_match(spec.arguments, arguments):
        return False
    if spec.block is not None:
        _run_block(spec.block, arguments)
    return True


def _run_block(block: Callable[..., Any], arguments: list[Any]) -> None:
    try:
        block(*arguments)
    except InnerAssertionFailure:
        raise
    except AssertionError as exc:
        raise InnerAssertionFailure(str(exc)) from exc


def _expectation_message(
    spec: MatcherSpec,
    activity: JobActivity,
    matched: int,
    negated: bool,
) -> str:
    parts = [f"{spec.count.describe()} jobs"]
    if spec.arguments is not None:
        parts.append(f"with {list(spec.arguments)!r}")
    if spec.queue_name is not None:
        parts.append(f"on queue {spec.queue_name}")
    if spec.scheduled_at is not None:
        parts.append(f"at {pendulum.instance(spec.scheduled_at)}")
    parts.append(f"but {activity.past} {matched}")
    prefix = "expected not to" if negated else "expected to"
    return f"{prefix} {activity.verb} " + ", ".join(parts)


def describe_record(record: JobRecord, deserialize: Deserializer) -> str:
    details: list[str] = []
    if record.arguments:
        details.append(f"with {deserialize(record.arguments)!r}")
    details.append(f"on queue {record.queue_name}")
    if record.scheduled_at is not None:
        details.append(f"at {pendulum.instance(record.scheduled_at)}")
    return f"{record.job_name} job " + ", ".join(details)


__all__ = ["ENQUEUE", "PERFORM", "JobActivity", "Verdict", "describe_record", "evaluate"]
