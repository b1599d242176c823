import pytest

from barky.flat import flatten_map, flatten_value, to_string

_BLANK_NAMES = ("nil_arr", "nil_map", "empty_arr", "empty_map")


def _blank_members():
    """Members whose values are empty containers, keyed by their names."""
    return dict(zip(_BLANK_NAMES, ([], {}, [], {})))


def _blanks(prefix=""):
    return {prefix + name: "" for name in _BLANK_NAMES}


def _nested_input():
    inner = {"a": "123", "b": "456", "arr": ["abc", "def"], "nil": None}
    inner.update(_blank_members())
    top = {
        "arr": ["abc", "def", {"a": "123", "b": "456"}, None, [], {}, [], {}],
        "map": inner,
        "nil": None,
    }
    top.update(_blank_members())
    return top


def _nested_expected():
    expected = _blanks()
    expected.update(_blanks("map."))
    expected.update(
        [
            ("map.a", "123"),
            ("map.b", "456"),
            ("map.arr[0]", "abc"),
            ("map.arr[1]", "def"),
            ("arr[0]", "abc"),
            ("arr[1]", "def"),
            ("arr[2].a", "123"),
            ("arr[2].b", "456"),
        ]
    )
    expected.update((f"arr[{i}]", "") for i in range(3, 8))
    return expected


def test_scalars_become_strings():
    flat = flatten_map(dict(int=123, str="abc"))
    assert flat == dict(int="123", str="abc")


def test_nested_maps_lists_and_empties():
    assert flatten_map(_nested_input()) == _nested_expected()


def test_scalar_kinds():
    flat = flatten_map(
        dict(bool=True, int=42, float=3.14, string="text", complex=1 + 2j)
    )
    assert flat == dict(bool="true", int="42", float="3.14", string="text", complex="")


def test_many_levels_of_maps():
    value = "deep"
    for name in ("value", "level3", "level2", "level1"):
        value = {name: value}
    assert flatten_map(value) == {"level1.level2.level3.value": "deep"}


def test_tuples_lists_and_empty_containers():
    flat = flatten_map(
        dict(
            arr=("first", "second", dict(inner="value")),
            slice=["a", None, "c"],
            empty=[],
            empty2={},
        )
    )
    assert flat == {
        "arr[0]": "first",
        "arr[1]": "second",
        "arr[2].inner": "value",
        "slice[0]": "a",
        "slice[1]": "",
        "slice[2]": "c",
        "empty": "",
        "empty2": "",
    }


def test_none_in_map_is_dropped():
    assert flatten_map({"gone": None, "kept": 1}) == {"kept": "1"}


def test_flatten_value_fills_given_mapping():
    result = {"existing": "1"}
    flatten_value("k", [1, {"z": 2.5}], result)
    assert result == {"existing": "1", "k[0]": "1", "k[1].z": "2.5"}


def test_flatten_value_skips_none():
    result = {}
    flatten_value("k", None, result)
    assert result == {}


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("abc", "abc"),
        (False, "false"),
        (-7, "-7"),
        (1.0, "1"),
        (0.5, "0.5"),
        (1e20, "100000000000000000000"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
        (float("nan"), "NaN"),
        (b"bytes", "bytes"),
        (ValueError("boom"), "boom"),
        (object(), ""),
    ],
)
def test_to_string(value, expected):
    assert to_string(value) == expected