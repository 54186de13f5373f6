"""Strict JSON value comparison and conflict predicates."""

from __future__ import annotations

from typing import Any


def values_equal(a: Any, b: Any) -> bool:
    """Compare two JSON values, keeping booleans, integers and floats apart."""
    if isinstance(a, dict):
        return (
            isinstance(b, dict)
            and a.keys() == b.keys()
            and all(values_equal(value, b[key]) for key, value in a.items())
        )
    if isinstance(a, list):
        return (
            isinstance(b, list)
            and len(a) == len(b)
            and all(values_equal(x, y) for x, y in zip(a, b))
        )
    return type(a) is type(b) and a == b


def is_conflict(base: Any, mine: Any, theirs: Any) -> bool:
    """True if both sides changed from base to different values."""
    return (
        not values_equal(mine, base)
        and not values_equal(theirs, base)
        and not values_equal(mine, theirs)
    )


def both_same(mine: Any, theirs: Any) -> bool:
    """True if both sides hold the same value (safe to auto-merge)."""
    return values_equal(mine, theirs)