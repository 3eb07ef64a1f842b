"""Immutable description of a job expectation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Literal

import pendulum

from ..errors import UsageError

CountKind = Literal["exactly", "at_least", "at_most"]

NAMED_COUNTS: dict[str, int] = {"once": 1, "twice": 2, "thrice": 3}


@dataclass(frozen=True, slots=True)
class CountSpec:
    """How many matching jobs an expectation requires."""

    kind: CountKind = "exactly"
    number: int = 1

    def satisfied_by(self, count: int) -> bool:
        if self.kind == "exactly":
            return count == self.number
        if self.kind == "at_least":
            return count >= self.number
        return count <= self.number

    def describe(self) -> str:
        return f"{self.kind.replace('_', ' ')} {self.number}"


@dataclass(frozen=True, slots=True)
class MatcherSpec:
    """Conjunctive filters plus the count policy for one expectation."""

    job_class: type | None = None
    arguments: tuple[Any, ...] | None = None
    block: Callable[..., Any] | None = None
    queue_name: str | None = None
    scheduled_at: datetime | None = None
    count: CountSpec = CountSpec()

    @property
    def filters_arguments(self) -> bool:
        return self.arguments is not None or self.block is not None


def resolve_count(kind: CountKind, value: int | str) -> CountSpec:
    """Build a count from an integer or one of ``once``, ``twice``, ``thrice``."""
    if isinstance(value, str):
        try:
            number = NAMED_COUNTS[value]
        except KeyError as exc:
            raise UsageError(
                f"Unsupported count {value!r}, use an integer or one of {sorted(NAMED_COUNTS)}"
            ) from exc
        return CountSpec(kind=kind, number=number)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise UsageError(f"Job count must be a non-negative integer, got {value!r}")
    return CountSpec(kind=kind, number=value)


def same_instant(left: datetime, right: datetime) -> bool:
    return pendulum.instance(left).timestamp() == pendulum.instance(right).timestamp()


__all__ = ["CountSpec", "MatcherSpec", "NAMED_COUNTS", "resolve_count", "same_instant"]
