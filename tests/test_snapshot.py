"""
tests/test_snapshot.py
Unit tests for the depth-bounded snapshot serializer.
"""
import json
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from dirkit.snapshot import DEFAULT_MAX_DEPTH, snapshot


class Color(Enum):
    RED = "red"


@dataclass
class Point:
    x: int
    y: int


class Slotted:
    __slots__ = ("a", "_hidden")

    def __init__(self):
        self.a = 1
        self._hidden = 2


def _depth(value) -> int:
    """Nesting depth of a plain dict/list structure."""
    if isinstance(value, dict):
        return 1 + max((_depth(v) for v in value.values()), default=0)
    if isinstance(value, list):
        return 1 + max((_depth(v) for v in value), default=0)
    return 0


def test_primitives_pass_through() -> None:
    for value in ("text", 1, 2.5, True, False, None):
        assert snapshot(value) == value


def test_lists_and_tuples_become_lists() -> None:
    assert snapshot([1, (2, 3), "a"]) == [1, [2, 3], "a"]


def test_functions_are_stripped_from_records() -> None:
    shot = snapshot({"func": lambda: None, "method": "x".upper, "keep": 1})
    assert shot == {"keep": 1}


def test_functions_in_lists_become_none() -> None:
    assert snapshot([len, 1]) == [None, 1]


def test_top_level_function_is_none() -> None:
    assert snapshot(print) is None


def test_mapping_values_are_captured() -> None:
    shot = json.loads(json.dumps(snapshot(OrderedDict(key="value"))))
    assert shot["key"] == "value"


def test_non_string_keys_are_stringified() -> None:
    assert snapshot({1: "a", (2, 3): "b"}) == {"1": "a", "(2, 3)": "b"}


def test_sets_become_records_of_their_members() -> None:
    assert snapshot({"a", "b"}) == {"a": "a", "b": "b"}


def test_objects_with_items_are_flattened() -> None:
    class Headers:
        def items(self):
            return [("content-type", "text/plain"), ("x-count", 2)]

    assert snapshot(Headers()) == {"content-type": "text/plain", "x-count": 2}


def test_items_methods_that_are_not_pairs_fall_back_to_attributes() -> None:
    class Basket:
        def __init__(self):
            self.owner = "ana"

        def items(self, category):
            return [category]

    class Inventory:
        def __init__(self):
            self.count = 3

        def items(self):
            return ["apple", "pear", "fig"]

    assert snapshot(Basket()) == {"owner": "ana"}
    assert snapshot(Inventory()) == {"count": 3}


def test_error_details_are_captured() -> None:
    try:
        raise ValueError("Test Error")
    except ValueError as e:
        shot = snapshot(e)

    assert shot["message"] == "Test Error"
    assert shot["name"] == "ValueError"
    assert "Traceback" in shot["traceback"]
    assert "Test Error" in shot["traceback"]
    json.dumps(shot)


def test_error_cause_is_captured() -> None:
    try:
        try:
            raise KeyError("inner")
        except KeyError as inner:
            raise RuntimeError("outer") from inner
    except RuntimeError as e:
        shot = snapshot(e)

    assert shot["message"] == "outer"
    assert shot["cause"]["name"] == "KeyError"


def test_custom_error_attributes_are_kept() -> None:
    class HttpError(Exception):
        def __init__(self, status):
            super().__init__(f"status {status}")
            self.status = status

    shot = snapshot(HttpError(404))
    assert shot["status"] == 404
    assert shot["message"] == "status 404"


def test_plain_objects_use_public_attributes() -> None:
    assert snapshot(Point(1, 2)) == {"x": 1, "y": 2}
    assert snapshot(Slotted()) == {"a": 1}
    assert snapshot(object()) == {}


def test_scalar_like_values_become_text() -> None:
    moment = datetime(2024, 1, 15, 10, 30)
    shot = snapshot({"when": moment, "color": Color.RED, "path": Path("a/b"), "raw": b"hi"})
    assert shot == {
        "when": "2024-01-15T10:30:00",
        "color": "red",
        "path": str(Path("a/b")),
        "raw": "hi",
    }


def test_self_referencing_dict_terminates() -> None:
    data = {"name": "loop"}
    data["self"] = data
    shot = snapshot(data, DEFAULT_MAX_DEPTH, 0)
    json.dumps(shot)
    assert _depth(shot) <= DEFAULT_MAX_DEPTH + 1


def test_indirect_cycles_terminate() -> None:
    a = {"name": "a"}
    b = {"name": "b", "items": [a]}
    a["next"] = b
    shot = snapshot(a, 10, 0)
    json.dumps(shot)
    assert _depth(shot) <= 11


def test_depth_limit_truncates_containers() -> None:
    nested = {"a": {"b": {"c": [1]}}}
    assert snapshot(nested, max_depth=2) == {"a": {"b": {}}}
    assert snapshot([[1]], max_depth=1) == [[]]


def test_primitives_survive_depth_limit() -> None:
    assert snapshot({"a": 1}, max_depth=1) == {"a": 1}
    assert snapshot("text", max_depth=0) == "text"
