# mergelens

mergelens compares JSON documents structurally. It offers two modes:

- **Two-way diff** (`base` against `mine`). Every key is reported as unchanged, added, removed or modified. A two-way diff never has conflicts.
- **Three-way merge** (`base`, `mine` and `theirs`). Some changes merge on their own:
  - only one side changed a value;
  - both sides changed a value to the same thing;
  - one side deleted a key that the other side left alone.

  Two cases are flagged as conflicts:
  - both sides changed a value to different things;
  - one side deleted a key that the other side changed.

  You resolve a conflict by choosing base, mine, theirs or a custom JSON value.

How values are compared:

- Objects are compared key by key, recursively. Their keys keep the order in which they first appear.
- Arrays are compared as a whole. If any version of an array differs, the whole array is reported as a single change.
- Equality is strict. `true`, `1` and `1.0` are three different values.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
mergelens BASE MINE [THEIRS] [-r PATH=CHOICE ...] [--tree] [-o OUTPUT]
```

How the command behaves:

- **Two-way.** Give two files. The command writes the merged document to standard output, pretty-printed.
- **Three-way.** Give three files. The command writes the merged document only once every conflict has been resolved.
- **`-r` / `--resolve PATH=CHOICE`** resolves the conflict at `PATH`. You can repeat the option.
  - `CHOICE` is one of `mine`, `theirs` or `base`, or `custom:` followed by any JSON value, for example `-r 'user.name=custom:"Dave"'`.
  - Paths are dotted, for example `user.name`.
  - An array index is written `[n]`, for example `items.[2]`.
  - A backslash escapes the next character, for example `a\.b` for the key `a.b`.
- **`--tree`** prints the diff tree before the merged output.
- **`-o` / `--output FILE`** writes the merged JSON to a file instead of standard output.

The conflict count is reported on standard error. If conflicts remain, the command does not print a merged document. Instead it writes the unresolved paths to standard error.

Exit status:

| Status | Meaning |
| --- | --- |
| 0 | The merged document was written. |
| 1 | Conflicts remain unresolved. |
| 2 | Bad input: an unreadable file, invalid JSON, or a malformed `--resolve`. |

## Library use

```python
from mergelens.diff import diff_three
from mergelens.merge import apply_resolutions
from mergelens.types import Key, Resolution

base = {"user": {"name": "Alice", "age": 30}}
mine = {"user": {"name": "Bob", "age": 31}}
theirs = {"user": {"name": "Carol", "age": 30}}

result = diff_three(base, mine, theirs)
result.conflict_count        # 1: "name" conflicts, "age" merges on its own

merged = apply_resolutions(result, {})
merged.unresolved            # [(Key("user"), Key("name"))]
merged.merged                # {"user": {"name": None, "age": 31}}

merged = apply_resolutions(result, {(Key("user"), Key("name")): Resolution.THEIRS})
merged.merged                # {"user": {"name": "Carol", "age": 31}}
```

`mergelens.diff.diff_two(base, mine)` produces a two-way diff.

### The diff tree

Both diff functions return a `DiffResult`. It holds a tree built from the node types in `mergelens.types`:

- `Unchanged`
- `Added`
- `Removed`
- `Modified`, with a `conflict` flag
- `ArrayChange`
- `ObjectDiff`

In a two-way diff, the `theirs` side of `Modified` and `ArrayChange` is the `ABSENT` marker. `ABSENT` is distinct from JSON null.

### Resolutions

- A resolution set maps a path to a choice.
- A path is a tuple of `Key` and `Index` segments.
- A choice is either `Resolution.MINE`, `Resolution.THEIRS` or `Resolution.BASE`, or a `Custom` that holds any JSON value.
- A conflict without a resolution is listed in `MergeResult.unresolved`. Its place in `merged` holds `None`.
- Removed keys are left out of the merged document.

### Display helpers

`mergelens.display` has these helpers:

- `render_tree(node)` renders a diff tree as indented text.
- `count_conflicts(node)` counts the conflicts under a node.
- `parse_custom(text)` turns user-typed JSON into a `Custom`. It raises `ValueError` on invalid JSON.
- `describe_resolution(choice)` gives a short status line for a choice.

### Sessions

`mergelens.session.MergeSession` keeps everything an interactive front end needs:

- the mode, set with `set_mode`;
- the loaded documents, set with `load_document(role, text)`, where `role` is `base`, `mine` or `theirs`;
- the current diff, computed by `run_diff`;
- the resolutions, set with `resolve` or `apply_custom`;
- the merged output, read with `merge_result`, `unresolved_count` and `merged_json`.

Both switching mode and running a new diff clear the existing resolutions.

When the merged output can be viewed depends on the mode:

- In two-way mode, `can_view()` becomes true only after `reveal()` is called.
- In three-way mode, `can_view()` becomes true once no conflicts remain.

### JSON in, JSON out

`mergelens.codec` works directly with JSON text:

- `diff_two_json(base, mine)` and `diff_three_json(base, mine, theirs)` take JSON strings. They return a serialised diff result, `{"root": ..., "conflict_count": ..., "auto_merged_count": ...}`. Each node in it is written as a single-key object named after its variant, for example `{"Added": 1}` or `{"Object": {...}}`.
- `apply_merge_json(diff_json, resolutions_json)` takes a serialised diff and a serialised resolution set. It returns `{"merged": ..., "unresolved": [...]}`.
  - A resolution set is a list of `[path, choice]` pairs.
  - A path is a list such as `[{"Key": "user"}, {"Index": 0}]`.
  - A choice is `"Mine"`, `"Theirs"`, `"Base"` or `{"Custom": value}`.
- Malformed input raises `CodecError`, which is a subclass of `ValueError`.
- The helper functions `diff_result_to_data`, `diff_result_from_data`, `resolutions_to_data`, `resolutions_from_data` and `merge_result_to_data` convert between these structures and plain Python data.

## What it does not do

mergelens has no graphical or browser interface. It has no clipboard or download integration. Interactive resolution is left to a program built on `MergeSession`, or to repeated `--resolve` options on the command line. Arrays are never merged element by element.