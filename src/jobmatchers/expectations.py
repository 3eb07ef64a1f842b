"""``expect(...)`` entry point and the equality primitive."""

from __future__ import annotations

from typing import Any

from .core import Matcher, Verdict
from .errors import ExpectationFailure, UsageError


class Expectation:
    """Binds a subject to matchers; failed verdicts raise ``ExpectationFailure``."""

    def __init__(self, subject: Any) -> None:
        self._subject = subject

    def to(self, matcher: Matcher) -> Verdict:
        return self._check(matcher, negated=False)

    def not_to(self, matcher: Matcher) -> Verdict:
        return self._check(matcher, negated=True)

    to_not = not_to

    def _check(self, matcher: Matcher, *, negated: bool) -> Verdict:
        if not isinstance(matcher, Matcher):
            raise UsageError(f"Expected a matcher, got {matcher!r}")
        verdict = matcher.evaluate(self._subject, negated=negated)
        if not verdict.passed:
            raise ExpectationFailure(verdict.message)
        return verdict


class EqualityMatcher:
    def __init__(self, expected: Any) -> None:
        self._expected = expected

    def evaluate(self, subject: Any, *, negated: bool = False) -> Verdict:
        equal = bool(subject == self._expected)
        expected = f"value != {self._expected!r}" if negated else repr(self._expected)
        message = f"expected: {expected}\n     got: {subject!r}\n\n(compared using ==)"
        return Verdict(passed=equal != negated, message=message, matched=int(equal))

    def __repr__(self) -> str:
        return f"eq({self._expected!r})"


def expect(subject: Any) -> Expectation:
    return Expectation(subject)


def eq(expected: Any) -> EqualityMatcher:
    return EqualityMatcher(expected)


__all__ = ["EqualityMatcher", "Expectation", "eq", "expect"]
