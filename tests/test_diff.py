from mergelens.diff import diff_three, diff_two
from mergelens.types import (
    ABSENT,
    Added,
    ArrayChange,
    Modified,
    ObjectDiff,
    Removed,
    Unchanged,
)


# two-way: added

def test_key_added_in_mine():
    result = diff_two({}, {"name": "Alice"})
    assert result.conflict_count == 0
    assert isinstance(result.root, ObjectDiff)
    assert result.root.children["name"] == Added("Alice")


def test_multiple_keys_added():
    result = diff_two({"a": 1}, {"a": 1, "b": 2, "c": 3})
    children = result.root.children
    assert children["a"] == Unchanged(1)
    assert children["b"] == Added(2)
    assert children["c"] == Added(3)


# two-way: removed

def test_key_removed_in_mine():
    result = diff_two({"name": "Alice", "age": 30}, {"name": "Alice"})
    children = result.root.children
    assert isinstance(children["name"], Unchanged)
    assert children["age"] == Removed(30)


# two-way: modified

def test_scalar_value_changed():
    result = diff_two({"age": 30}, {"age": 31})
    node = result.root.children["age"]
    assert isinstance(node, Modified)
    assert node.base == 30
    assert node.mine == 31
    assert node.theirs is ABSENT
    assert node.conflict is False


def test_unchanged_value():
    result = diff_two({"name": "Alice"}, {"name": "Alice"})
    assert result.root.children["name"] == Unchanged("Alice")


# two-way: nested

def test_nested_object_change():
    base = {"user": {"name": "Alice", "age": 30}}
    mine = {"user": {"name": "Alice", "age": 31}}
    result = diff_two(base, mine)
    user = result.root.children["user"]
    assert isinstance(user, ObjectDiff)
    assert isinstance(user.children["name"], Unchanged)
    age = user.children["age"]
    assert isinstance(age, Modified) and age.conflict is False


# two-way: arrays

def test_array_changed_is_opaque():
    result = diff_two({"items": [1, 2, 3]}, {"items": [1, 2, 4]})
    node = result.root.children["items"]
    assert isinstance(node, ArrayChange)
    assert node.base == [1, 2, 3]
    assert node.mine == [1, 2, 4]
    assert node.theirs is ABSENT


def test_identical_arrays_are_unchanged():
    result = diff_two({"items": [1, 2, 3]}, {"items": [1, 2, 3]})
    assert result.root.children["items"] == Unchanged([1, 2, 3])


def test_two_way_key_order_base_first_then_additions():
    result = diff_two({"b": 1, "a": 2}, {"c": 3, "a": 2})
    assert list(result.root.children) == ["b", "a", "c"]


def test_two_way_int_and_float_differ():
    result = diff_two({"n": 1}, {"n": 1.0})
    node = result.root.children["n"]
    assert node == Modified(base=1, mine=1.0, theirs=ABSENT, conflict=False)
    assert type(node.base) is int
    assert type(node.mine) is float


# three-way: no conflict

def test_mine_changed_theirs_unchanged():
    result = diff_three({"age": 30}, {"age": 31}, {"age": 30})
    assert result.conflict_count == 0
    assert result.auto_merged_count == 1
    node = result.root.children["age"]
    assert isinstance(node, Modified)
    assert node.conflict is False
    assert node.mine == 31
    assert node.theirs == 30


def test_theirs_changed_mine_unchanged():
    result = diff_three({"age": 30}, {"age": 30}, {"age": 32})
    assert result.conflict_count == 0
    assert result.auto_merged_count == 1
    node = result.root.children["age"]
    assert isinstance(node, Modified) and node.conflict is False


def test_both_changed_to_same_value():
    result = diff_three({"name": "Alice"}, {"name": "Alicia"}, {"name": "Alicia"})
    assert result.conflict_count == 0
    assert result.auto_merged_count == 1


def test_key_only_in_mine():
    result = diff_three({}, {"new_key": 42}, {})
    assert result.conflict_count == 0
    assert isinstance(result.root.children["new_key"], Added)


def test_key_only_in_theirs():
    result = diff_three({}, {}, {"new_key": 99})
    assert result.conflict_count == 0
    assert isinstance(result.root.children["new_key"], Added)


def test_both_added_same_key_same_value():
    result = diff_three({}, {"x": 1}, {"x": 1})
    assert result.conflict_count == 0
    assert isinstance(result.root.children["x"], Added)


# three-way: conflicts

def test_both_changed_differently():
    result = diff_three({"age": 30}, {"age": 31}, {"age": 32})
    assert result.conflict_count == 1
    node = result.root.children["age"]
    assert isinstance(node, Modified) and node.conflict is True


def test_both_added_same_key_different_values():
    result = diff_three({}, {"x": 1}, {"x": 2})
    assert result.conflict_count == 1
    node = result.root.children["x"]
    assert isinstance(node, Modified) and node.conflict is True


def test_array_conflict():
    result = diff_three(
        {"tags": ["a", "b"]}, {"tags": ["a", "c"]}, {"tags": ["a", "d"]}
    )
    assert result.conflict_count == 1
    node = result.root.children["tags"]
    assert isinstance(node, ArrayChange)
    assert node.three_way is True


def test_conflict_inside_nested_object():
    base = {"user": {"name": "Alice", "age": 30}}
    mine = {"user": {"name": "Bob", "age": 31}}
    theirs = {"user": {"name": "Carol", "age": 30}}
    result = diff_three(base, mine, theirs)
    assert result.conflict_count == 1
    user = result.root.children["user"]
    assert isinstance(user, ObjectDiff)
    name = user.children["name"]
    age = user.children["age"]
    assert isinstance(name, Modified) and name.conflict is True
    assert isinstance(age, Modified) and age.conflict is False


# three-way: deletions

def test_deleted_by_both_is_removed():
    result = diff_three({"a": 1, "b": 2}, {"a": 1}, {"a": 1})
    assert result.root.children["b"] == Removed(2)
    assert result.conflict_count == 0


def test_mine_deleted_theirs_unchanged_accepts_deletion():
    result = diff_three({"b": 2}, {}, {"b": 2})
    assert result.root.children["b"] == Removed(2)
    assert result.conflict_count == 0


def test_mine_deleted_theirs_modified_conflicts():
    result = diff_three({"b": 2}, {}, {"b": 3})
    assert result.conflict_count == 1
    assert result.root.children["b"] == Modified(base=2, mine=None, theirs=3, conflict=True)


def test_theirs_deleted_mine_modified_conflicts():
    result = diff_three({"b": 2}, {"b": 5}, {})
    assert result.conflict_count == 1
    node = result.root.children["b"]
    assert node == Modified(base=2, mine=5, theirs=None, conflict=True)
    assert node.three_way is True


def test_theirs_deleted_mine_unchanged_accepts_deletion():
    result = diff_three({"b": 2}, {"b": 2}, {})
    assert result.root.children["b"] == Removed(2)


def test_arrays_changed_identically_are_auto_merged():
    result = diff_three({"t": [1]}, {"t": [2]}, {"t": [2]})
    assert result.conflict_count == 0
    assert result.auto_merged_count == 1
    assert isinstance(result.root.children["t"], ArrayChange)


def test_three_way_key_order_follows_base_mine_theirs():
    result = diff_three({"b": 1}, {"a": 1, "b": 1}, {"c": 1, "b": 1})
    assert list(result.root.children) == ["b", "a", "c"]


def test_identical_documents_have_no_changes():
    doc = {"a": [1, 2], "b": {"c": None}}
    result = diff_three(doc, doc, doc)
    assert result.conflict_count == 0
    assert result.auto_merged_count == 0
    assert result.root.children["a"] == Unchanged([1, 2])