"""
Cycle-safe snapshot serializer for dirkit.

Converts arbitrary runtime values into plain, JSON-safe data so they can be
handed to ``json.dumps`` (or any other external encoder) without a custom
``default`` hook. Special objects are flattened along the way:

- Mappings, sets and anything exposing an ``items()`` enumeration become records
- Exceptions keep their message and traceback
- Functions, methods and classes are stripped
- Dates, enums, paths and other scalar-like values are turned into text

Traversal is bounded by depth rather than by tracking visited objects, so a
self-referential graph is truncated to an empty list/record once the depth
limit is hit instead of being reproduced faithfully.
"""

from collections.abc import Mapping
import functools
import inspect
import traceback
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, Dict
from uuid import UUID

DEFAULT_MAX_DEPTH = 50

# Marks values that must be dropped from the enclosing record
_OMIT = object()

_PRIMITIVES = (str, int, float, bool, type(None))


def snapshot(value: Any, max_depth: int = DEFAULT_MAX_DEPTH, depth: int = 0) -> Any:
    """
    Convert ``value`` into a JSON-safe plain structure.

    Args:
        value: Any Python value
        max_depth: Nesting level at which containers are truncated
        depth: Current nesting level, normally left at 0 by callers

    Returns:
        Any: Lists, dicts with string keys, and primitives only. A stripped
        top-level value (e.g. a function) is returned as None.
    """
    result = _visit(value, max_depth, depth)
    return None if result is _OMIT else result


def _visit(value: Any, max_depth: int, depth: int) -> Any:
    # 1. sequences
    if isinstance(value, (list, tuple)):
        if depth >= max_depth:
            return []
        return [_in_sequence(_visit(item, max_depth, depth + 1)) for item in value]

    # 2. functions
    if _is_function(value):
        return _OMIT

    # 3. primitives
    if isinstance(value, _PRIMITIVES):
        return value
    scalar = _scalar(value, max_depth, depth)
    if scalar is not _OMIT:
        return scalar

    # 4. depth limit
    if depth >= max_depth:
        return {}

    # 5. key/value enumerations
    pairs = _pairs(value)
    if pairs is not None:
        output: Dict[str, Any] = {}
        for key, item in pairs:
            _put(output, key, _visit(item, max_depth, depth + 1))
        return output

    # 6. everything else
    return _object_fields(value, max_depth, depth)


def _in_sequence(item: Any) -> Any:
    # Stripped list members keep their slot, like JSON.stringify does
    return None if item is _OMIT else item


def _put(output: Dict[str, Any], key: Any, item: Any) -> None:
    if item is _OMIT:
        return
    output[key if isinstance(key, str) else str(key)] = item


def _is_function(value: Any) -> bool:
    return (
        inspect.isroutine(value)
        or inspect.isclass(value)
        or isinstance(value, functools.partial)
    )


def _scalar(value: Any, max_depth: int, depth: int) -> Any:
    """Map scalar-like Python values onto JSON primitives, or _OMIT if not scalar."""
    if isinstance(value, Enum):
        return _visit(value.value, max_depth, depth)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (PurePath, UUID, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return _OMIT


def _pairs(value: Any):
    """
    Return (key, value) pairs for map-like or set-like input, or None.

    Objects that only look map-like (an ``items`` method) count when
    ``items()`` takes no arguments and yields pairs; otherwise they are
    treated as plain objects.
    """
    if isinstance(value, (set, frozenset)):
        return ((item, item) for item in value)
    if isinstance(value, Mapping):
        return value.items()
    items = getattr(value, "items", None)
    if not callable(items):
        return None
    try:
        return [(key, item) for key, item in items()]
    except (TypeError, ValueError):
        return None


def _object_fields(value: Any, max_depth: int, depth: int) -> Dict[str, Any]:
    output: Dict[str, Any] = {}

    # Regular attributes: instance __dict__ plus __slots__ declared anywhere in the MRO
    for key, item in _public_attributes(value).items():
        _put(output, key, _visit(item, max_depth, depth + 1))

    if isinstance(value, BaseException):
        for key, item in _exception_fields(value).items():
            _put(output, key, _visit(item, max_depth, depth + 1))

    return output


def _public_attributes(value: Any) -> Dict[str, Any]:
    attributes: Dict[str, Any] = {}
    for cls in reversed(type(value).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith("_") or not hasattr(value, name):
                continue
            attributes[name] = getattr(value, name)

    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name, item in instance_dict.items():
            if not name.startswith("_"):
                attributes[name] = item
    return attributes


def _exception_fields(error: BaseException) -> Dict[str, Any]:
    """Fields Python keeps off an exception's __dict__ but that callers need to see."""
    if error.__traceback__ is not None:
        trace = traceback.format_exception(type(error), error, error.__traceback__)
    else:
        trace = traceback.format_exception_only(type(error), error)

    fields: Dict[str, Any] = {
        "name": type(error).__name__,
        "message": str(error),
        "args": list(error.args),
        "traceback": "".join(trace),
    }
    cause = error.__cause__ or error.__context__
    if cause is not None:
        fields["cause"] = cause
    return fields
