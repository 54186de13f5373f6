"""Text presentation of diff trees and conflict resolution helpers."""

from __future__ import annotations

import json
from typing import Any

from .conflict import values_equal
from .types import (
    ABSENT,
    Added,
    ArrayChange,
    Choice,
    Custom,
    DiffNode,
    Modified,
    ObjectDiff,
    Removed,
    Resolution,
    Unchanged,
)

_INDENT = "  "


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def format_value(value: Any) -> str:
    """Render a value for the tree: strings quoted verbatim, others as compact JSON."""
    if isinstance(value, str):
        return f'"{value}"'
    return _to_json(value)


def auto_resolve_display(base: Any, mine: Any, theirs: Any) -> Any:
    """The value a non-conflicting modification resolves to."""
    if theirs is ABSENT:
        return mine
    return theirs if values_equal(mine, base) else mine


def count_conflicts(node: DiffNode) -> int:
    """Number of conflicts within a node and its descendants."""
    match node:
        case Modified(conflict=True):
            return 1
        case ArrayChange() if node.three_way and not values_equal(node.theirs, node.mine):
            return 1
        case ObjectDiff(children=children):
            return sum(count_conflicts(child) for child in children.values())
    return 0


def describe_resolution(resolution: Choice | None) -> str:
    """Status line for the resolution chosen at a path, empty if none."""
    match resolution:
        case Resolution.BASE:
            return "✓ Base accepted"
        case Resolution.MINE:
            return "✓ Mine accepted"
        case Resolution.THEIRS:
            return "✓ Theirs accepted"
        case Custom():
            return "✓ Custom value accepted"
    return ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON: invalid number {name}")


def parse_custom(text: str) -> Custom:
    """Parse user-typed JSON into a custom resolution; raise ValueError if invalid."""
    try:
        return Custom(json.loads(text, parse_constant=_reject_constant))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON: {exc}") from exc


def _conflict_line(label: str, base: Any, mine: Any, theirs: Any) -> str:
    sides = [f"Base: {_to_json(base)}", f"Mine: {_to_json(mine)}"]
    if theirs is not ABSENT:
        sides.append(f"Theirs: {_to_json(theirs)}")
    return f"[{label}] " + " | ".join(sides)


def _lines(node: DiffNode) -> list[str]:
    match node:
        case Unchanged(value=value):
            return [format_value(value)]
        case Added(value=value):
            return [f"+ {format_value(value)}"]
        case Removed(value=value):
            return [f"- {format_value(value)}"]
        case Modified(conflict=True):
            return [_conflict_line("conflict", node.base, node.mine, node.theirs)]
        case Modified():
            resolved = auto_resolve_display(node.base, node.mine, node.theirs)
            return [f"→ {format_value(resolved)}"]
        case ArrayChange():
            return [_conflict_line("array conflict", node.base, node.mine, node.theirs)]
        case ObjectDiff(children=children):
            body: list[str] = []
            for key, child in children.items():
                head = f'"{key}":'
                conflicts = count_conflicts(child)
                if conflicts:
                    head += f" [{conflicts} conflicts]"
                first, *rest = _lines(child)
                body.append(f"{head} {first}")
                body.extend(rest)
            return ["{", *(_INDENT + line for line in body), "}"]
    raise TypeError(f"not a diff node: {node!r}")


def render_tree(node: DiffNode) -> str:
    """Render a diff tree as indented text, one member per line."""
    return "\n".join(_lines(node))