"""JSON text interface: diff and merge documents given and returned as JSON strings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .diff import diff_three, diff_two
from .merge import apply_resolutions
from .types import (
    ABSENT,
    Added,
    ArrayChange,
    Choice,
    Custom,
    DiffNode,
    DiffResult,
    Index,
    JsonPath,
    Key,
    MergeResult,
    Modified,
    ObjectDiff,
    PathSegment,
    Removed,
    Resolution,
    Resolutions,
    Unchanged,
)


class CodecError(ValueError):
    """Raised when JSON text, or the structure it decodes to, is malformed."""


def _reject_constant(name: str) -> Any:
    raise CodecError(f"invalid JSON number: {name}")


def _loads(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise CodecError(str(exc)) from exc


def _dumps(data: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise CodecError(str(exc)) from exc


def _single_variant(data: Any, what: str) -> tuple[str, Any]:
    if not isinstance(data, dict) or len(data) != 1:
        raise CodecError(f"expected a single-variant object for {what}, got {data!r}")
    ((tag, body),) = data.items()
    return tag, body


def _field(body: Any, name: str, variant: str) -> Any:
    if not isinstance(body, dict):
        raise CodecError(f"expected an object for variant {variant}")
    if name not in body:
        raise CodecError(f"missing field `{name}` in {variant}")
    return body[name]


def _optional(body: dict[str, Any], name: str) -> Any:
    value = body.get(name)
    return ABSENT if value is None else value


def _count(data: dict[str, Any], name: str) -> int:
    if name not in data:
        raise CodecError(f"missing field `{name}`")
    value = data[name]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CodecError(f"field `{name}` must be a non-negative integer")
    return value


def _side(value: Any) -> Any:
    return None if value is ABSENT else value


def _node_to_data(node: DiffNode) -> Any:
    match node:
        case Unchanged(value=value):
            return {"Unchanged": value}
        case Added(value=value):
            return {"Added": value}
        case Removed(value=value):
            return {"Removed": value}
        case Modified():
            return {
                "Modified": {
                    "base": node.base,
                    "mine": node.mine,
                    "theirs": _side(node.theirs),
                    "conflict": node.conflict,
                }
            }
        case ObjectDiff(children=children):
            return {"Object": {key: _node_to_data(child) for key, child in children.items()}}
        case ArrayChange():
            return {
                "ArrayChange": {
                    "base": node.base,
                    "mine": node.mine,
                    "theirs": _side(node.theirs),
                }
            }
    raise TypeError(f"not a diff node: {node!r}")


def _node_from_data(data: Any) -> DiffNode:
    tag, body = _single_variant(data, "a diff node")
    match tag:
        case "Unchanged":
            return Unchanged(body)
        case "Added":
            return Added(body)
        case "Removed":
            return Removed(body)
        case "Modified":
            conflict = _field(body, "conflict", tag)
            if not isinstance(conflict, bool):
                raise CodecError("field `conflict` must be a boolean")
            return Modified(
                base=_field(body, "base", tag),
                mine=_field(body, "mine", tag),
                theirs=_optional(body, "theirs"),
                conflict=conflict,
            )
        case "Object":
            if not isinstance(body, dict):
                raise CodecError("expected an object for variant Object")
            return ObjectDiff({key: _node_from_data(child) for key, child in body.items()})
        case "ArrayChange":
            return ArrayChange(
                base=_field(body, "base", tag),
                mine=_field(body, "mine", tag),
                theirs=_optional(body, "theirs"),
            )
    raise CodecError(f"unknown diff node variant `{tag}`")


def _segment_to_data(segment: PathSegment) -> dict[str, Any]:
    match segment:
        case Key(name=name):
            return {"Key": name}
        case Index(position=position):
            return {"Index": position}
    raise TypeError(f"not a path segment: {segment!r}")


def _segment_from_data(data: Any) -> PathSegment:
    tag, body = _single_variant(data, "a path segment")
    if tag == "Key":
        if not isinstance(body, str):
            raise CodecError("a Key segment must hold a string")
        return Key(body)
    if tag == "Index":
        if isinstance(body, bool) or not isinstance(body, int) or body < 0:
            raise CodecError("an Index segment must hold a non-negative integer")
        return Index(body)
    raise CodecError(f"unknown path segment variant `{tag}`")


def _path_to_data(path: JsonPath) -> list[dict[str, Any]]:
    return [_segment_to_data(segment) for segment in path]


def _path_from_data(data: Any) -> JsonPath:
    if not isinstance(data, list):
        raise CodecError("a path must be an array of segments")
    return tuple(_segment_from_data(segment) for segment in data)


def _choice_to_data(choice: Choice) -> Any:
    match choice:
        case Resolution():
            return choice.value
        case Custom(value=value):
            return {"Custom": value}
    raise TypeError(f"not a resolution: {choice!r}")


def _choice_from_data(data: Any) -> Choice:
    if isinstance(data, str):
        try:
            return Resolution(data)
        except ValueError:
            raise CodecError(f"unknown resolution `{data}`") from None
    tag, body = _single_variant(data, "a resolution")
    if tag != "Custom":
        raise CodecError(f"unknown resolution variant `{tag}`")
    return Custom(body)


def diff_result_to_data(result: DiffResult) -> dict[str, Any]:
    """Convert a diff result into plain JSON-compatible data."""
    return {
        "root": _node_to_data(result.root),
        "conflict_count": result.conflict_count,
        "auto_merged_count": result.auto_merged_count,
    }


def diff_result_from_data(data: Any) -> DiffResult:
    """Rebuild a diff result from plain data; a null "theirs" reads as absent."""
    if not isinstance(data, dict):
        raise CodecError("a diff result must be an object")
    if "root" not in data:
        raise CodecError("missing field `root`")
    return DiffResult(
        root=_node_from_data(data["root"]),
        conflict_count=_count(data, "conflict_count"),
        auto_merged_count=_count(data, "auto_merged_count"),
    )


def resolutions_to_data(resolutions: Mapping[JsonPath, Choice]) -> list[list[Any]]:
    """Convert resolutions into a list of ``[path, resolution]`` pairs."""
    return [[_path_to_data(path), _choice_to_data(choice)] for path, choice in resolutions.items()]


def resolutions_from_data(data: Any) -> Resolutions:
    """Rebuild resolutions from ``[path, resolution]`` pairs; later pairs win."""
    if not isinstance(data, list):
        raise CodecError("resolutions must be an array of [path, resolution] pairs")
    resolutions: Resolutions = {}
    for pair in data:
        if not isinstance(pair, list) or len(pair) != 2:
            raise CodecError(f"expected a [path, resolution] pair, got {pair!r}")
        path, choice = pair
        resolutions[_path_from_data(path)] = _choice_from_data(choice)
    return resolutions


def merge_result_to_data(result: MergeResult) -> dict[str, Any]:
    """Convert a merge result into plain JSON-compatible data."""
    return {
        "merged": result.merged,
        "unresolved": [_path_to_data(path) for path in result.unresolved],
    }


def diff_two_json(base: str, mine: str) -> str:
    """Two-way diff of JSON texts, returned as serialised diff result."""
    result = diff_two(_loads(base), _loads(mine))
    return _dumps(diff_result_to_data(result))


def diff_three_json(base: str, mine: str, theirs: str) -> str:
    """Three-way diff of JSON texts, returned as serialised diff result."""
    result = diff_three(_loads(base), _loads(mine), _loads(theirs))
    return _dumps(diff_result_to_data(result))


def apply_merge_json(diff_json: str, resolutions_json: str) -> str:
    """Apply serialised resolutions to a serialised diff; return the merge result."""
    diff = diff_result_from_data(_loads(diff_json))
    resolutions = resolutions_from_data(_loads(resolutions_json))
    return _dumps(merge_result_to_data(apply_resolutions(diff, resolutions)))