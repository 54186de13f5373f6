"""Interactive merge session: documents, mode, diff, resolutions and output."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .diff import diff_three, diff_two
from .display import parse_custom
from .merge import apply_resolutions
from .types import (
    Choice,
    Custom,
    DiffResult,
    JsonPath,
    MergeResult,
    Mode,
    PathSegment,
    Resolution,
    Resolutions,
)

ROLES = ("base", "mine", "theirs")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid number {name}")


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ValueError(str(exc)) from exc


@dataclass
class MergeSession:
    """Holds the documents being compared and the state of their merge."""

    mode: Mode = Mode.TWO_WAY
    documents: dict[str, Any] = field(default_factory=dict)
    diff_result: DiffResult | None = None
    resolutions: Resolutions = field(default_factory=dict)
    _show_merged: bool = field(default=False, repr=False)

    def set_mode(self, mode: Mode | str) -> None:
        """Switch mode, discarding any diff and resolutions."""
        self.mode = Mode(mode)
        self._reset_diff(None)

    def load_document(self, role: str, text: str) -> None:
        """Load JSON text as the base, mine or theirs document.

        Blank text unloads the document. Invalid JSON unloads it and raises
        ValueError.
        """
        key = role.lower()
        if key not in ROLES:
            raise ValueError(f"unknown document role {role!r}; expected one of {ROLES}")
        self.documents.pop(key, None)
        if not text.strip():
            return
        self.documents[key] = _parse_json(text)

    def can_run(self) -> bool:
        """True when every document the current mode needs is loaded."""
        needed = ROLES if self.mode is Mode.THREE_WAY else ROLES[:2]
        return all(role in self.documents for role in needed)

    def run_diff(self) -> DiffResult:
        """Diff the loaded documents, clearing previous resolutions."""
        if not self.can_run():
            missing = [
                role
                for role in (ROLES if self.mode is Mode.THREE_WAY else ROLES[:2])
                if role not in self.documents
            ]
            raise ValueError(f"missing document(s): {', '.join(missing)}")
        docs = self.documents
        if self.mode is Mode.THREE_WAY:
            result = diff_three(docs["base"], docs["mine"], docs["theirs"])
        else:
            result = diff_two(docs["base"], docs["mine"])
        self._reset_diff(result)
        return result

    def _reset_diff(self, result: DiffResult | None) -> None:
        self.diff_result = result
        self.resolutions = {}
        self._show_merged = False

    def resolve(self, path: Iterable[PathSegment], resolution: Choice) -> None:
        """Choose a resolution for a path, replacing any earlier one."""
        if not isinstance(resolution, (Resolution, Custom)):
            raise TypeError(f"not a resolution: {resolution!r}")
        self.resolutions[tuple(path)] = resolution

    def apply_custom(self, path: Iterable[PathSegment], text: str) -> Custom:
        """Resolve a path with user-typed JSON; raise ValueError if it is invalid."""
        custom = parse_custom(text)
        self.resolutions[tuple(path)] = custom
        return custom

    def merge_result(self) -> MergeResult | None:
        """The merge under the current resolutions, or None before a diff is run."""
        if self.diff_result is None:
            return None
        return apply_resolutions(self.diff_result, self.resolutions)

    def unresolved_count(self) -> int:
        """Number of conflicts still awaiting a resolution."""
        result = self.merge_result()
        return len(result.unresolved) if result is not None else 0

    def unresolved_paths(self) -> list[JsonPath]:
        """Paths of conflicts still awaiting a resolution."""
        result = self.merge_result()
        return list(result.unresolved) if result is not None else []

    def merged_json(self) -> str | None:
        """Pretty-printed merged document, or None while conflicts remain."""
        result = self.merge_result()
        if result is None or result.unresolved:
            return None
        return json.dumps(result.merged, indent=2, ensure_ascii=False)

    def reveal(self) -> None:
        """Ask to see the merged document in two-way mode."""
        self._show_merged = True

    def can_view(self) -> bool:
        """Whether the merged output is shown: on request two-way, once resolved three-way."""
        if self.mode is Mode.TWO_WAY:
            return self._show_merged
        return self.unresolved_count() == 0