"""Loose value model used by the predicate library.

Loose equality treats ``None`` and :data:`undefined` as the same "missing"
value and coerces between numbers, booleans and numeric strings. Strict
equality never coerces.
"""

from __future__ import annotations

import math
import re
from typing import Any, Callable


class _Undefined:
    """Singleton standing in for a value that was never set."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "undefined"


undefined = _Undefined()

# Numeric string grammar: decimal literals, 0x/0o/0b integers and
# signed Infinity. Python-only spellings ("1_000", "inf", "nan") are not numbers.
_DECIMAL_LITERAL = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z"
)
_RADIX_LITERALS = (
    (re.compile(r"0[xX]([0-9a-fA-F]+)\Z"), 16),
    (re.compile(r"0[oO]([0-7]+)\Z"), 8),
    (re.compile(r"0[bB]([01]+)\Z"), 2),
)
_INFINITIES = {
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}


def is_missing(value: Any) -> bool:
    return value is None or value is undefined


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any) -> int | float:
    """Coerce ``value`` to a number, returning NaN when it has no numeric reading."""
    if isinstance(value, bool):
        return int(value)
    if _is_number(value):
        return value
    if value is None:
        return 0
    if isinstance(value, str):
        return _parse_number(value)
    return math.nan


def _parse_number(value: str) -> int | float:
    text = value.strip()
    if not text:
        return 0
    if text in _INFINITIES:
        return _INFINITIES[text]
    for pattern, base in _RADIX_LITERALS:
        match = pattern.match(text)
        if match:
            return int(match.group(1), base)
    if not _DECIMAL_LITERAL.match(text):
        return math.nan
    if "." in text or "e" in text or "E" in text:
        return float(text)
    return int(text)


def is_nan(value: Any) -> bool:
    number = to_number(value)
    return isinstance(number, float) and math.isnan(number)


def is_truthy(value: Any) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def loose_equals(left: Any, right: Any) -> bool:
    """Coercive equality.

    - ``None`` and ``undefined`` equal each other and nothing else.
    - Booleans compare as the numbers 0 and 1.
    - A number and a string compare after coercing the string to a number.
    - Everything else falls back to ``==``.
    """
    if is_missing(left) or is_missing(right):
        return is_missing(left) and is_missing(right)
    if isinstance(left, bool):
        return loose_equals(int(left), right)
    if isinstance(right, bool):
        return loose_equals(left, int(right))
    if _is_number(left) and isinstance(right, str):
        return left == to_number(right)
    if isinstance(left, str) and _is_number(right):
        return to_number(left) == right
    return bool(left == right)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion: same kind of value and equal."""
    if left is undefined or right is undefined:
        return left is right
    if left is None or right is None:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if _is_number(left) and _is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return bool(left == right)


def compare(left: Any, right: Any, op: Callable[[Any, Any], bool]) -> bool:
    """Relational comparison; strings compare lexically, everything else numerically."""
    if isinstance(left, str) and isinstance(right, str):
        return op(left, right)
    x = to_number(left)
    y = to_number(right)
    if is_nan(x) or is_nan(y):
        return False
    return op(x, y)

