"""Positional argument matchers."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..errors import UsageError


class ArgumentMatcher:
    """Base class for argument matchers; subclasses implement ``matches``."""

    def matches(self, value: Any) -> bool:
        raise NotImplementedError


class _Anything(ArgumentMatcher):
    def matches(self, value: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return "anything"


class InstanceOf(ArgumentMatcher):
    def __init__(self, cls: type) -> None:
        self._cls = cls

    def matches(self, value: Any) -> bool:
        return type(value) is self._cls

    def __repr__(self) -> str:
        return f"instance_of({self._cls.__name__})"


class KindOf(ArgumentMatcher):
    def __init__(self, cls: type | tuple[type, ...]) -> None:
        self._cls = cls

    def matches(self, value: Any) -> bool:
        return isinstance(value, self._cls)

    def __repr__(self) -> str:
        if isinstance(self._cls, tuple):
            names = ", ".join(cls.__name__ for cls in self._cls)
            return f"kind_of(({names}))"
        return f"kind_of({self._cls.__name__})"


class HashIncluding(ArgumentMatcher):
    def __init__(self, expected: Mapping[str, Any]) -> None:
        self._expected = dict(expected)

    def matches(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        return all(
            key in value and value_matches(expected, value[key])
            for key, expected in self._expected.items()
        )

    def __repr__(self) -> str:
        return f"hash_including({self._expected!r})"


class _AnyArgs(ArgumentMatcher):
    """Stands for any number of positional arguments, including none."""

    def matches(self, value: Any) -> bool:
        return True

    def __repr__(self) -> str:
        return "any_args"


class _NoArgs(ArgumentMatcher):
    def matches(self, value: Any) -> bool:
        return False

    def __repr__(self) -> str:
        return "no_args"


_ANYTHING = _Anything()
_ANY_ARGS = _AnyArgs()
_NO_ARGS = _NoArgs()


def anything() -> ArgumentMatcher:
    return _ANYTHING


def instance_of(cls: type) -> ArgumentMatcher:
    return InstanceOf(cls)


def kind_of(cls: type | tuple[type, ...]) -> ArgumentMatcher:
    return KindOf(cls)


def hash_including(mapping: Mapping[str, Any] | None = None, **items: Any) -> ArgumentMatcher:
    expected = dict(mapping or {})
    expected.update(items)
    return HashIncluding(expected)


def any_args() -> ArgumentMatcher:
    return _ANY_ARGS


def no_args() -> ArgumentMatcher:
    return _NO_ARGS


def value_matches(expected: Any, actual: Any) -> bool:
    """Match one value against an argument matcher or by equality."""
    if isinstance(expected, ArgumentMatcher):
        return expected.matches(actual)
    # PyHamcrest-style matchers
    if callable(getattr(expected, "matches", None)) and hasattr(expected, "describe_to"):
        return bool(expected.matches(actual))
    return bool(expected == actual)


def check_argument_list(expected: Sequence[Any]) -> list[int]:
    """Return the positions of ``any_args`` in ``expected``, allowing at most one."""
    markers = [index for index, item in enumerate(expected) if item is _ANY_ARGS]
    if len(markers) > 1:
        raise UsageError("any_args() may appear only once in an argument list")
    return markers


def args_match(expected: Sequence[Any], actual: Sequence[Any]) -> bool:
    """Match a positional argument list against expected values and matchers."""
    if len(expected) == 1 and expected[0] is _NO_ARGS:
        return len(actual) == 0

    markers = check_argument_list(expected)
    if not markers:
        return len(expected) == len(actual) and all(
            value_matches(want, got) for want, got in zip(expected, actual)
        )
    head = expected[: markers[0]]
    tail = expected[markers[0] + 1:]
    if len(actual) < len(head) + len(tail):
        return False
    tail_actual = actual[len(actual) - len(tail):]
    return all(value_matches(want, got) for want, got in zip(head, actual)) and all(
        value_matches(want, got) for want, got in zip(tail, tail_actual)
    )


__all__ = [
    "ArgumentMatcher",
    "any_args",
    "anything",
    "args_match",
    "check_argument_list",
    "hash_including",
    "instance_of",
    "kind_of",
    "no_args",
    "value_matches",
]
