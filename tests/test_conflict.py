import pytest

from mergelens.conflict import both_same, is_conflict, values_equal


@pytest.mark.parametrize(
    "a, b",
    [
        (1, 1.0),
        (True, 1),
        (False, 0),
        (None, False),
        ("1", 1),
        ([1, 2], [2, 1]),
        ({"a": 1}, {"a": 1, "b": 2}),
        ({"a": 1}, [("a", 1)]),
    ],
)
def test_values_equal_rejects_different_json(a, b):
    assert values_equal(a, b) is False
    assert values_equal(b, a) is False


@pytest.mark.parametrize(
    "value",
    [None, True, 0, 2.5, "text", [], [1, [2, {"x": None}]], {"a": {"b": [True]}}],
)
def test_values_equal_is_reflexive(value):
    assert values_equal(value, value) is True


def test_values_equal_ignores_object_key_order():
    assert values_equal({"a": 1, "b": 2}, {"b": 2, "a": 1}) is True


def test_is_conflict_when_both_changed_differently():
    assert is_conflict(30, 31, 32) is True


@pytest.mark.parametrize(
    "base, mine, theirs",
    [(30, 31, 30), (30, 30, 32), (30, 31, 31), (30, 30, 30)],
)
def test_is_not_conflict_when_one_side_unchanged_or_converged(base, mine, theirs):
    assert is_conflict(base, mine, theirs) is False


def test_is_conflict_treats_int_and_float_as_different():
    assert is_conflict(1, 1.0, 1) is False
    assert is_conflict(0, 1.0, 1) is True


def test_both_same():
    assert both_same({"x": [1]}, {"x": [1]}) is True
    assert both_same(1, True) is False