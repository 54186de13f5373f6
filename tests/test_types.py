from mergelens.types import (
    ABSENT,
    Added,
    ArrayChange,
    Custom,
    DiffResult,
    Index,
    Key,
    MergeResult,
    Mode,
    Modified,
    ObjectDiff,
    Resolution,
)


def test_path_segments_work_as_dict_keys():
    resolutions = {(Key("a"), Index(0)): Resolution.MINE}
    assert resolutions[(Key("a"), Index(0))] is Resolution.MINE
    assert (Key("a"), Index(1)) not in resolutions


def test_key_and_index_are_distinct():
    assert Key("0") != Index(0)
    assert Key("x") == Key("x")


def test_mode_round_trips_through_value():
    for mode in Mode:
        assert Mode(mode.value) is mode


def test_resolution_round_trips_through_value():
    for choice in Resolution:
        assert Resolution(choice.value) is choice


def test_modified_three_way_flag_distinguishes_null_from_absent():
    two = Modified(base=1, mine=2)
    three_null = Modified(base=1, mine=2, theirs=None, conflict=True)
    assert two.three_way is False
    assert two.theirs is ABSENT
    assert three_null.three_way is True
    assert three_null.theirs is None


def test_array_change_three_way_flag():
    assert ArrayChange([1], [2]).three_way is False
    assert ArrayChange([1], [2], [3]).three_way is True


def test_custom_equality_uses_value():
    assert Custom({"a": [1]}) == Custom({"a": [1]})
    assert Custom(1) != Custom(2)


def test_diff_result_holds_tree():
    tree = ObjectDiff({"k": Added(5)})
    result = DiffResult(tree, conflict_count=2)
    assert result.root.children["k"] == Added(5)
    assert result.conflict_count == 2
    assert result.auto_merged_count == 0


def test_merge_result_unresolved_lists_are_independent():
    first = MergeResult(merged={})
    second = MergeResult(merged={})
    first.unresolved.append((Key("x"),))
    assert second.unresolved == []