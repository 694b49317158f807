"""Numeric coercion for integer attributes.

Upstream systems may emit large identifiers in exponential notation
(`1.774766e+06`). Integer attributes therefore accept integer, float and
exponential literals and resolve them to an exact signed 64-bit integer.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from formwire.errors import CoercionFailure

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# JSON number grammar: no underscores, no surrounding whitespace, no leading "+".
_NUMBER_LITERAL = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?\Z")
_INTEGER_LITERAL = re.compile(r"-?[0-9]+\Z")


def _check_range(value: int, literal: object) -> int:
    if value < INT64_MIN or value > INT64_MAX:
        raise CoercionFailure(f"{literal!r} is outside the 64-bit integer range")
    return value


def to_int64(literal: object) -> int:
    """Return `literal` as an exact int64.

    Policy: exact integer parse first; otherwise parse as a decimal floating
    literal and truncate toward zero. Booleans, non-finite numbers and
    non-numeric text raise `CoercionFailure`.
    """
    if isinstance(literal, bool):
        raise CoercionFailure(f"expected a number, got boolean {literal!r}")
    if isinstance(literal, int):
        return _check_range(literal, literal)
    if isinstance(literal, float):
        if not math.isfinite(literal):
            raise CoercionFailure(f"{literal!r} is not a finite number")
        return _check_range(int(literal), literal)
    if isinstance(literal, Decimal):
        if not literal.is_finite():
            raise CoercionFailure(f"{literal!r} is not a finite number")
        if literal.adjusted() > 19:
            raise CoercionFailure(f"{literal!r} is outside the 64-bit integer range")
        return _check_range(int(literal), literal)
    if isinstance(literal, (str, bytes)):
        text = literal.decode("ascii", errors="replace") if isinstance(literal, bytes) else literal
        if not _NUMBER_LITERAL.match(text):
            raise CoercionFailure(f"{literal!r} is neither an integer nor a float literal")
        if _INTEGER_LITERAL.match(text):
            return _check_range(int(text, 10), literal)
        return to_int64(Decimal(text))
    raise CoercionFailure(f"expected a number, got {type(literal).__name__}")


__all__ = ["INT64_MIN", "INT64_MAX", "to_int64"]
