"""Core data types for JSON diffing and merging."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Final, Union


class Mode(enum.Enum):
    """Whether documents are compared two-way or merged three-way."""

    TWO_WAY = "TwoWay"
    THREE_WAY = "ThreeWay"


class _Absent(enum.Enum):
    ABSENT = "ABSENT"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent.ABSENT
"""Marks a missing "theirs" side, as in a two-way diff. Distinct from JSON null."""


@dataclass(frozen=True)
class Key:
    """Path segment addressing an object member."""

    name: str


@dataclass(frozen=True)
class Index:
    """Path segment addressing an array element."""

    position: int


PathSegment = Union[Key, Index]
JsonPath = tuple[PathSegment, ...]


@dataclass(frozen=True)
class Unchanged:
    """A value equal in every document."""

    value: Any


@dataclass(frozen=True)
class Added:
    """A value present only in the newer document(s)."""

    value: Any


@dataclass(frozen=True)
class Removed:
    """A value deleted from the base document."""

    value: Any


@dataclass(frozen=True)
class Modified:
    """A scalar (or mixed-type) value that changed."""

    base: Any
    mine: Any
    theirs: Any = ABSENT
    conflict: bool = False

    @property
    def three_way(self) -> bool:
        """True when a "theirs" side is present."""
        return self.theirs is not ABSENT


@dataclass(frozen=True)
class ObjectDiff:
    """An object whose members are diffed individually."""

    children: dict[str, "DiffNode"] = field(default_factory=dict)


@dataclass(frozen=True)
class ArrayChange:
    """An array that changed; arrays are compared as opaque wholes."""

    base: Any
    mine: Any
    theirs: Any = ABSENT

    @property
    def three_way(self) -> bool:
        """True when a "theirs" side is present."""
        return self.theirs is not ABSENT


DiffNode = Union[Unchanged, Added, Removed, Modified, ObjectDiff, ArrayChange]


@dataclass(frozen=True)
class DiffResult:
    """The diff tree together with conflict and auto-merge counts."""

    root: DiffNode
    conflict_count: int = 0
    auto_merged_count: int = 0


class Resolution(enum.Enum):
    """Which document version to take for a conflicted path."""

    MINE = "Mine"
    THEIRS = "Theirs"
    BASE = "Base"


@dataclass(frozen=True)
class Custom:
    """A user-supplied JSON value taken instead of any document version."""

    value: Any


Choice = Union[Resolution, Custom]
Resolutions = dict[JsonPath, Choice]


@dataclass
class MergeResult:
    """The merged document and the paths still awaiting a resolution."""

    merged: Any
    unresolved: list[JsonPath] = field(default_factory=list)