"""Two-way and three-way structural diffs of JSON documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .conflict import both_same, is_conflict, values_equal
from .types import (
    Added,
    ArrayChange,
    DiffNode,
    DiffResult,
    Modified,
    ObjectDiff,
    Removed,
    Unchanged,
)

_MISSING = object()


@dataclass
class _Tally:
    conflicts: int = 0
    auto_merged: int = 0


def diff_three(base: Any, mine: Any, theirs: Any) -> DiffResult:
    """Diff two descendants of a common base, classifying conflicts."""
    tally = _Tally()
    root = _diff_three_values(base, mine, theirs, tally)
    return DiffResult(root, tally.conflicts, tally.auto_merged)


def _diff_three_values(base: Any, mine: Any, theirs: Any, tally: _Tally) -> DiffNode:
    if not all(isinstance(doc, dict) for doc in (base, mine, theirs)):
        return _classify_scalar(base, mine, theirs, tally)
    children = {
        key: _diff_three_member(
            base.get(key, _MISSING),
            mine.get(key, _MISSING),
            theirs.get(key, _MISSING),
            tally,
        )
        for key in dict.fromkeys([*base, *mine, *theirs])
    }
    return ObjectDiff(children)


def _diff_three_member(base: Any, mine: Any, theirs: Any, tally: _Tally) -> DiffNode:
    if mine is _MISSING and theirs is _MISSING:
        return Removed(base)

    if base is _MISSING:
        if theirs is _MISSING:
            return Added(mine)
        if mine is _MISSING:
            return Added(theirs)
        if both_same(mine, theirs):
            return Added(mine)
        tally.conflicts += 1
        return Modified(base=None, mine=mine, theirs=theirs, conflict=True)

    if mine is not _MISSING and theirs is not _MISSING:
        return _diff_three_values(base, mine, theirs, tally)

    if mine is _MISSING:
        # Mine deleted: accept the deletion if theirs left the value alone.
        if values_equal(theirs, base):
            return Removed(base)
        tally.conflicts += 1
        return Modified(base=base, mine=None, theirs=theirs, conflict=True)

    # Theirs deleted: accept the deletion if mine left the value alone.
    if values_equal(mine, base):
        return Removed(base)
    tally.conflicts += 1
    return Modified(base=base, mine=mine, theirs=None, conflict=True)


def _classify_scalar(base: Any, mine: Any, theirs: Any, tally: _Tally) -> DiffNode:
    all_equal = values_equal(base, mine) and values_equal(mine, theirs)

    # Arrays are opaque: any difference makes the whole array a change.
    if any(isinstance(doc, list) for doc in (base, mine, theirs)) and not all_equal:
        if values_equal(mine, theirs):
            tally.auto_merged += 1
        else:
            tally.conflicts += 1
        return ArrayChange(base, mine, theirs)

    if all_equal:
        return Unchanged(base)
    if both_same(mine, theirs):
        tally.auto_merged += 1
        return Modified(base, mine, theirs, conflict=False)
    if is_conflict(base, mine, theirs):
        tally.conflicts += 1
        return Modified(base, mine, theirs, conflict=True)
    tally.auto_merged += 1
    return Modified(base, mine, theirs, conflict=False)


def diff_two(base: Any, mine: Any) -> DiffResult:
    """Diff a document against its base; two-way diffs never conflict."""
    return DiffResult(_diff_two_values(base, mine), 0, 0)


def _diff_two_values(base: Any, mine: Any) -> DiffNode:
    if isinstance(base, dict) and isinstance(mine, dict):
        children: dict[str, DiffNode] = {
            key: _diff_two_values(value, mine[key]) if key in mine else Removed(value)
            for key, value in base.items()
        }
        children.update(
            (key, Added(value)) for key, value in mine.items() if key not in base
        )
        return ObjectDiff(children)
    if values_equal(base, mine):
        return Unchanged(base)
    if isinstance(base, list) or isinstance(mine, list):
        return ArrayChange(base, mine)
    return Modified(base, mine, conflict=False)