from __future__ import annotations

from typing import Any
from unittest import mock

import pytest

from jobmatchers import UsageError
from jobmatchers.core.arguments import (
    any_args,
    anything,
    args_match,
    hash_including,
    instance_of,
    kind_of,
    no_args,
)


class StartsWith:
    """Minimal stand-in for a PyHamcrest matcher."""

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix

    def matches(self, item: Any) -> bool:
        return isinstance(item, str) and item.startswith(self._prefix)

    def describe_to(self, description: Any) -> None:
        description.append_text(f"a string starting with {self._prefix!r}")


def test_plain_values_compare_by_equality():
    assert args_match([42, "David"], [42, "David"])
    assert not args_match([42, "David"], [42, "Wrong"])


def test_arity_must_match():
    assert not args_match([42], [42, "David"])
    assert not args_match([42, "David"], [42])


def test_instance_of_requires_exact_type():
    assert args_match([instance_of(int)], [42])
    assert not args_match([instance_of(int)], [True])
    assert not args_match([instance_of(int)], ["42"])


def test_kind_of_accepts_subclasses():
    assert args_match([kind_of(int)], [True])
    assert args_match([kind_of((int, str))], ["42"])


def test_anything_matches_any_value():
    assert args_match([anything(), 2], [None, 2])


def test_hash_including_matches_subset():
    matcher = hash_including({"name": "David"}, age=instance_of(int))

    assert args_match([matcher], [{"name": "David", "age": 42, "role": "admin"}])
    assert not args_match([matcher], [{"name": "David"}])
    assert not args_match([matcher], ["David"])


def test_any_args_absorbs_remaining_positions():
    assert args_match([any_args()], [])
    assert args_match([1, any_args()], [1, 2, 3])
    assert args_match([any_args(), 3], [1, 2, 3])
    assert not args_match([1, any_args(), 3], [1])


def test_any_args_may_appear_once():
    with pytest.raises(UsageError):
        args_match([any_args(), any_args()], [1])


def test_no_args_requires_empty_arguments():
    assert args_match([no_args()], [])
    assert not args_match([no_args()], [1])


def test_mock_any_is_honoured():
    assert args_match([mock.ANY, "David"], [object(), "David"])


def test_hamcrest_style_matchers_are_honoured():
    assert args_match([StartsWith("Da")], ["David"])
    assert not args_match([StartsWith("Da")], ["Wrong"])


def test_matchers_have_readable_repr():
    assert repr([instance_of(int), anything()]) == "[instance_of(int), anything]"
    assert repr(kind_of((int, str))) == "kind_of((int, str))"
