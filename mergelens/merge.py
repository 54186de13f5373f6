"""Apply conflict resolutions to a diff tree to build the merged document."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .conflict import values_equal
from .types import (
    Added,
    ArrayChange,
    Choice,
    Custom,
    DiffNode,
    DiffResult,
    JsonPath,
    Key,
    MergeResult,
    Modified,
    ObjectDiff,
    Removed,
    Resolution,
    Unchanged,
)

_OMIT = object()


def apply_resolutions(
    diff: DiffResult, resolutions: Mapping[JsonPath, Choice]
) -> MergeResult:
    """Build the merged document; unresolved conflicts become null and are listed."""
    unresolved: list[JsonPath] = []
    merged = _apply_node(diff.root, resolutions, (), unresolved)
    return MergeResult(None if merged is _OMIT else merged, unresolved)


def _apply_node(
    node: DiffNode,
    resolutions: Mapping[JsonPath, Choice],
    path: JsonPath,
    unresolved: list[JsonPath],
) -> Any:
    match node:
        case Unchanged(value=value) | Added(value=value):
            return value
        case Removed():
            return _OMIT
        case Modified(conflict=False):
            return _auto_resolve(node)
        case Modified():
            match resolutions.get(path):
                case Resolution.MINE:
                    return node.mine
                case Resolution.THEIRS:
                    return node.theirs if node.three_way else node.base
                case Resolution.BASE:
                    return node.base
                case Custom(value=value):
                    return value
                case _:
                    unresolved.append(path)
                    return None
        case ArrayChange():
            return _apply_array(node, resolutions.get(path), path, unresolved)
        case ObjectDiff(children=children):
            merged = {}
            for key, child in children.items():
                value = _apply_node(child, resolutions, (*path, Key(key)), unresolved)
                if value is not _OMIT:
                    merged[key] = value
            return merged
    raise TypeError(f"not a diff node: {node!r}")


def _apply_array(
    node: ArrayChange,
    choice: Choice | None,
    path: JsonPath,
    unresolved: list[JsonPath],
) -> Any:
    if not node.three_way:
        match choice:
            case Resolution.BASE:
                return node.base
            case Custom(value=value):
                return value
            case _:
                return node.mine
    match choice:
        case Resolution.MINE:
            return node.mine
        case Resolution.THEIRS:
            return node.theirs
        case Resolution.BASE:
            return node.base
        case Custom(value=value):
            return value
    if values_equal(node.mine, node.theirs):
        return node.mine
    unresolved.append(path)
    return None


def _auto_resolve(node: Modified) -> Any:
    """Pick the changed side of a non-conflicting modification."""
    if not node.three_way:
        return node.mine
    if values_equal(node.mine, node.base):
        return node.theirs
    return node.mine