"""Command line front end: diff JSON files and write the merged result."""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from .display import parse_custom, render_tree
from .session import MergeSession
from .types import Choice, Index, JsonPath, Key, Mode, PathSegment, Resolution

_INDEX = re.compile(r"\[(\d+)\]")
_CUSTOM_PREFIX = "custom:"


def parse_path(text: str) -> JsonPath:
    """Parse a dotted path such as ``user.name`` or ``items.[2]``.

    A backslash escapes the next character; an empty string is the root.
    """
    if text == "":
        return ()
    pieces: list[tuple[str, bool]] = []
    current: list[str] = []
    had_escape = escaped = False
    for char in text:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = had_escape = True
        elif char == ".":
            pieces.append(("".join(current), had_escape))
            current, had_escape = [], False
        else:
            current.append(char)
    if escaped:
        raise ValueError(f"path ends with a dangling escape: {text!r}")
    pieces.append(("".join(current), had_escape))

    segments: list[PathSegment] = []
    for piece, was_escaped in pieces:
        if not piece:
            raise ValueError(f"empty segment in path {text!r}")
        match = None if was_escaped else _INDEX.fullmatch(piece)
        segments.append(Index(int(match.group(1))) if match else Key(piece))
    return tuple(segments)


def _format_path(path: JsonPath) -> str:
    parts = []
    for segment in path:
        if isinstance(segment, Index):
            parts.append(f"[{segment.position}]")
            continue
        escaped = segment.name.replace("\\", "\\\\").replace(".", "\\.")
        if _INDEX.fullmatch(segment.name):
            escaped = "\\" + escaped
        parts.append(escaped)
    return ".".join(parts)


def parse_resolution(spec: str) -> tuple[JsonPath, Choice]:
    """Parse ``PATH=CHOICE`` where CHOICE is mine, theirs, base or custom:JSON."""
    path_text, sep, choice_text = spec.partition("=")
    if not sep:
        raise ValueError(f"expected PATH=CHOICE, got {spec!r}")
    path = parse_path(path_text)
    if choice_text.startswith(_CUSTOM_PREFIX):
        return path, parse_custom(choice_text[len(_CUSTOM_PREFIX):])
    named = {member.value.lower(): member for member in Resolution}
    try:
        return path, named[choice_text.strip().lower()]
    except KeyError:
        raise ValueError(
            f"unknown resolution {choice_text!r}; use mine, theirs, base or custom:JSON"
        ) from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mergelens",
        description="Diff two JSON documents, or merge two descendants of a common base.",
    )
    parser.add_argument("base", type=Path, help="base document")
    parser.add_argument("mine", type=Path, help="changed document")
    parser.add_argument(
        "theirs", type=Path, nargs="?", help="second changed document (three-way merge)"
    )
    parser.add_argument(
        "-r",
        "--resolve",
        action="append",
        default=[],
        metavar="PATH=CHOICE",
        help="resolve a conflict: mine, theirs, base or custom:JSON",
    )
    parser.add_argument("--tree", action="store_true", help="print the diff tree")
    parser.add_argument("-o", "--output", type=Path, help="write merged JSON here")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command; 0 on success, 1 if conflicts remain, 2 on bad input."""
    args = _build_parser().parse_args(argv)
    session = MergeSession()
    session.set_mode(Mode.THREE_WAY if args.theirs is not None else Mode.TWO_WAY)

    files = [("base", args.base), ("mine", args.mine)]
    if args.theirs is not None:
        files.append(("theirs", args.theirs))
    try:
        choices = [parse_resolution(spec) for spec in args.resolve]
        for role, path in files:
            try:
                session.load_document(role, path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise ValueError(f"{path}: {exc}") from exc
        diff = session.run_diff()
    except ValueError as exc:
        print(f"mergelens: {exc}", file=sys.stderr)
        return 2

    for path, choice in choices:
        session.resolve(path, choice)

    if args.tree:
        print(render_tree(diff.root))
    if diff.conflict_count:
        print(f"{diff.conflict_count} conflicts", file=sys.stderr)
    if session.mode is Mode.TWO_WAY:
        session.reveal()

    if not session.can_view():
        print(f"{session.unresolved_count()} conflicts remaining", file=sys.stderr)
        for path in session.unresolved_paths():
            print(_format_path(path), file=sys.stderr)
        return 1

    merged = session.merged_json() or "null"
    if args.output is not None:
        try:
            args.output.write_text(merged + "\n", encoding="utf-8")
        except OSError as exc:
            print(f"mergelens: {args.output}: {exc}", file=sys.stderr)
            return 2
    else:
        print(merged)
    return 0