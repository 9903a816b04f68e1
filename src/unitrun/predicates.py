"""Predicates for use with ``ASSERT``.

Every predicate returns ``""`` when its condition holds, otherwise a
two-line diagnostic::

      Actual: <actual value>
    Expected: <expected condition>

Binary predicates take ``(expected, actual)``; the diagnostic shows the
second argument as the actual value.
"""

from __future__ import annotations

import operator
from collections.abc import Mapping, Sequence
from typing import Any, Callable

from unitrun.coercion import (
    compare,
    is_missing,
    is_nan,
    is_truthy,
    loose_equals,
    strict_equals,
    undefined,
)


def _message(expected: Any, actual: Any) -> str:
    return f"  Actual: {actual}\nExpected: {expected}"


def _check(ok: bool, expected: Any, actual: Any) -> str:
    return "" if ok else _message(expected, actual)


# Truthiness. These do not tell False apart from other falsy values;
# use STRICT_EQ(False, x) for that.


def TRUE(arg: Any) -> str:
    return _check(is_truthy(arg), "true equivalent", arg)


def FALSE(arg: Any) -> str:
    return _check(not is_truthy(arg), "false equivalent", arg)


# Nullity. None and undefined are interchangeable here.


def NULL(arg: Any) -> str:
    return _check(is_missing(arg), "null", arg)


def NOT_NULL(arg: Any) -> str:
    return _check(not is_missing(arg), "not null", arg)


def UNDEFINED(arg: Any) -> str:
    return _check(loose_equals(arg, undefined), "undefined", arg)


def NOT_UNDEFINED(arg: Any) -> str:
    return _check(not loose_equals(arg, undefined), "not undefined", arg)


def NAN(arg: Any) -> str:
    return _check(is_nan(arg), "NaN", arg)


def NOT_NAN(arg: Any) -> str:
    return _check(not is_nan(arg), "not NaN", arg)


# Equality


def EQ(arg1: Any, arg2: Any) -> str:
    return _check(loose_equals(arg1, arg2), arg1, arg2)


def NE(arg1: Any, arg2: Any) -> str:
    return _check(not loose_equals(arg1, arg2), f"!={arg1}", arg2)


def STRICT_EQ(arg1: Any, arg2: Any) -> str:
    return _check(strict_equals(arg1, arg2), arg1, arg2)


def STRICT_NE(arg1: Any, arg2: Any) -> str:
    return _check(not strict_equals(arg1, arg2), f"!=={arg1}", arg2)


# Ordering: each checks ``arg1 <op> arg2``.


def LT(arg1: Any, arg2: Any) -> str:
    return _check(compare(arg1, arg2, operator.lt), f"<{arg1}", arg2)


def LE(arg1: Any, arg2: Any) -> str:
    return _check(compare(arg1, arg2, operator.le), f"<= {arg1}", arg2)


def GT(arg1: Any, arg2: Any) -> str:
    return _check(compare(arg1, arg2, operator.gt), f">{arg1}", arg2)


def GE(arg1: Any, arg2: Any) -> str:
    return _check(compare(arg1, arg2, operator.ge), f">={arg1}", arg2)


# Sequences


def _sequence_equals(
    seq1: Sequence[Any], seq2: Sequence[Any], equals: Callable[[Any, Any], bool]
) -> bool:
    if len(seq1) != len(seq2):
        return False
    return all(equals(a, b) for a, b in zip(seq1, seq2))


def ARRAY_EQ(array1: Sequence[Any], array2: Sequence[Any]) -> str:
    return _check(
        _sequence_equals(array1, array2, loose_equals), f"ARRAY=={array1}", array2
    )


def ARRAY_NE(array1: Sequence[Any], array2: Sequence[Any]) -> str:
    return _check(
        not _sequence_equals(array1, array2, loose_equals), f"ARRAY!={array1}", array2
    )


def ARRAY_STRICT_EQ(array1: Sequence[Any], array2: Sequence[Any]) -> str:
    return _check(
        _sequence_equals(array1, array2, strict_equals), f"ARRAY==={array1}", array2
    )


def ARRAY_STRICT_NE(array1: Sequence[Any], array2: Sequence[Any]) -> str:
    return _check(
        not _sequence_equals(array1, array2, strict_equals),
        f"ARRAY!=={array1}",
        array2,
    )


# Objects. Only the keys of the first operand are compared: keys that
# exist only in the second operand are ignored.


def _fields(obj: Any) -> Mapping[Any, Any]:
    """Own fields of ``obj``: mapping items, sequence indices or attributes."""
    if isinstance(obj, Mapping):
        return obj
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        return dict(enumerate(obj))
    fields = dict(getattr(obj, "__dict__", {}))
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__") or name in fields:
                continue
            if hasattr(obj, name):
                fields[name] = getattr(obj, name)
    return fields


def _object_equals(
    object1: Any, object2: Any, equals: Callable[[Any, Any], bool]
) -> bool:
    fields2 = _fields(object2)
    return all(
        equals(value, fields2.get(key, undefined))
        for key, value in _fields(object1).items()
    )


def OBJECT_EQ(object1: Any, object2: Any) -> str:
    return _check(
        _object_equals(object1, object2, loose_equals), f"OBJECT=={object1}", object2
    )


def OBJECT_NE(object1: Any, object2: Any) -> str:
    return _check(
        not _object_equals(object1, object2, loose_equals),
        f"OBJECT!={object1}",
        object2,
    )


def OBJECT_STRICT_EQ(object1: Any, object2: Any) -> str:
    return _check(
        _object_equals(object1, object2, strict_equals),
        f"OBJECT==={object1}",
        object2,
    )


def OBJECT_STRICT_NE(object1: Any, object2: Any) -> str:
    return _check(
        not _object_equals(object1, object2, strict_equals),
        f"OBJECT!=={object1}",
        object2,
    )


__all__ = [
    "TRUE",
    "FALSE",
    "NULL",
    "NOT_NULL",
    "UNDEFINED",
    "NOT_UNDEFINED",
    "NAN",
    "NOT_NAN",
    "EQ",
    "NE",
    "STRICT_EQ",
    "STRICT_NE",
    "LT",
    "LE",
    "GT",
    "GE",
    "ARRAY_EQ",
    "ARRAY_NE",
    "ARRAY_STRICT_EQ",
    "ARRAY_STRICT_NE",
    "OBJECT_EQ",
    "OBJECT_NE",
    "OBJECT_STRICT_EQ",
    "OBJECT_STRICT_NE",
]
