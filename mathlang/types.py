"""Helpers for the runtime values produced by the evaluator.

Evaluation produces `fractions.Fraction` for expressions and `bool` for
comparisons. This module converts those values to and from the text shown
to (or typed by) users.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Union

Value = Union[Fraction, bool]

# Python refuses int<->str conversions past a few thousand digits, so long
# numbers are converted in fixed-size chunks.
_CHUNK = 1000
_CHUNK_BASE = 10 ** _CHUNK


def digits_to_int(digits: str) -> int:
    """Convert a string of decimal digits of any length to an int."""
    if len(digits) <= _CHUNK:
        return int(digits)
    result = 0
    for i in range(0, len(digits), _CHUNK):
        chunk = digits[i:i + _CHUNK]
        result = result * 10 ** len(chunk) + int(chunk)
    return result


def int_to_digits(n: int) -> str:
    """Format an int of any size in decimal."""
    if n < 0:
        return '-' + int_to_digits(-n)
    if n < _CHUNK_BASE:
        return str(n)
    chunks = []
    while n >= _CHUNK_BASE:
        n, low = divmod(n, _CHUNK_BASE)
        chunks.append(str(low).zfill(_CHUNK))
    chunks.append(str(n))
    return ''.join(reversed(chunks))


def to_string(value: Value) -> str:
    """Format a value for display: `7`, `-2/3`, `true`."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return int_to_digits(value)
    if isinstance(value, Fraction):
        if value.denominator == 1:
            return int_to_digits(value.numerator)
        return f"{int_to_digits(value.numerator)}/{int_to_digits(value.denominator)}"
    raise TypeError(f"not a mathlang value: {value!r}")


def parse_value(text: str) -> Fraction:
    """Parse an integer or `p/q` literal such as `-3` or `22/7`.

    Floats are rejected: every value is exact.
    """
    raw = text.strip()
    numerator, sep, denominator = raw.partition('/')
    try:
        if sep:
            return Fraction(_parse_int(numerator), _parse_int(denominator))
        return Fraction(_parse_int(numerator))
    except ZeroDivisionError:
        raise ValueError(f"zero denominator in {text!r}")
    except ValueError:
        raise ValueError(f"cannot parse rational from {text!r}")


def _parse_int(text: str) -> int:
    text = text.strip()
    sign = -1 if text[:1] == '-' else 1
    digits = text[1:] if text[:1] in '+-' and text else text
    if not digits.isascii() or not digits.isdigit():
        raise ValueError(text)
    return sign * digits_to_int(digits)
