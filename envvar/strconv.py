# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Conversions between text and the native types of the built-in kinds.

Integer literals follow the prefix-inferred grammar of a general-purpose
integer parser: ``0x`` hexadecimal, ``0o`` or a bare leading ``0`` octal,
``0b`` binary, otherwise decimal. Underscores may separate digits.
Numbers that do not fit the requested width raise ``OutOfRangeError``
instead of wrapping.
"""

import math
import re
import struct
from decimal import Decimal

from .errors import InvalidSyntaxError, OutOfRangeError

# Width in bits of the platform's native integer
INT_SIZE = struct.calcsize("P") * 8

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_TRUE_TOKENS = frozenset(("1", "t", "T", "true", "TRUE", "True"))
_FALSE_TOKENS = frozenset(("0", "f", "F", "false", "FALSE", "False"))

_BASE_PREFIXES = {"b": 2, "o": 8, "x": 16}

_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9_]+\.?[0-9_]*|\.[0-9_]+)(?:[eE][+-]?[0-9_]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F_]+\.?[0-9a-fA-F_]*|\.[0-9a-fA-F_]+)[pP][+-]?[0-9_]+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?inf(?:inity)?|nan", re.IGNORECASE)


def signed_bounds(bit_size: int) -> tuple[int, int]:
    """Return the inclusive (min, max) of a signed integer of bit_size bits."""
    return -(1 << (bit_size - 1)), (1 << (bit_size - 1)) - 1


def unsigned_bounds(bit_size: int) -> tuple[int, int]:
    """Return the inclusive (min, max) of an unsigned integer of bit_size bits."""
    return 0, (1 << bit_size) - 1


def parse_bool(text: str) -> bool:
    """Parse one of the twelve accepted boolean tokens.

    Args:
        text: One of 1, t, T, true, TRUE, True, 0, f, F, false, FALSE, False

    Returns:
        The boolean value

    Raises:
        InvalidSyntaxError: If text is any other token
    """
    if text in _TRUE_TOKENS:
        return True
    if text in _FALSE_TOKENS:
        return False
    raise InvalidSyntaxError("parse_bool", text)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def _underscores_ok(text: str) -> bool:
    """Report whether underscores in text only separate digits.

    An underscore must follow a digit or a base prefix, and must be
    followed by a digit.
    """
    saw = "^"
    i = 0
    if text[:1] in ("+", "-"):
        text = text[1:]

    is_hex = False
    if len(text) >= 2 and text[0] == "0" and text[1].lower() in _BASE_PREFIXES:
        i = 2
        saw = "0"
        is_hex = text[1].lower() == "x"

    while i < len(text):
        c = text[i]
        i += 1
        if c.isdigit() or (is_hex and c.lower() in "abcdef"):
            saw = "0"
            continue
        if c == "_":
            if saw != "0":
                return False
            saw = "_"
            continue
        if saw == "_":
            return False
        saw = "!"
    return saw != "_"


def _parse_magnitude(func: str, original: str, digits: str) -> int:
    """Parse an unsigned literal, inferring the base from its prefix.

    Raises:
        InvalidSyntaxError: If digits is empty or malformed
    """
    if not digits:
        raise InvalidSyntaxError(func, original)

    body = digits
    base = 10
    if body[0] == "0":
        if len(body) >= 3 and body[1].lower() in _BASE_PREFIXES:
            base = _BASE_PREFIXES[body[1].lower()]
            body = body[2:]
        else:
            base = 8
            body = body[1:]

    value = 0
    underscores = False
    for c in body:
        if c == "_":
            underscores = True
            continue
        if c.isascii() and c.isdigit():
            d = ord(c) - ord("0")
        elif c.isascii() and c.lower() in "abcdef":
            d = ord(c.lower()) - ord("a") + 10
        else:
            raise InvalidSyntaxError(func, original)
        if d >= base:
            raise InvalidSyntaxError(func, original)
        value = value * base + d

    if underscores and not _underscores_ok(digits):
        raise InvalidSyntaxError(func, original)
    return value


def parse_uint(text: str, bit_size: int = 64) -> int:
    """Parse an unsigned integer literal bounded to bit_size bits.

    No sign is accepted.

    Raises:
        InvalidSyntaxError: If text is not an unsigned integer literal
        OutOfRangeError: If the value exceeds 2**bit_size - 1
    """
    value = _parse_magnitude("parse_uint", text, text)
    _, maximum = unsigned_bounds(bit_size)
    if value > maximum:
        raise OutOfRangeError("parse_uint", text)
    return value


def parse_int(text: str, bit_size: int = 64) -> int:
    """Parse a signed integer literal bounded to bit_size bits.

    Args:
        text: Literal with an optional leading sign
        bit_size: Width of the target integer

    Returns:
        The parsed integer

    Raises:
        InvalidSyntaxError: If text is not an integer literal
        OutOfRangeError: If the value does not fit in bit_size bits
    """
    if not text:
        raise InvalidSyntaxError("parse_int", text)

    negative = text[0] == "-"
    digits = text[1:] if text[0] in ("+", "-") else text
    magnitude = _parse_magnitude("parse_int", text, digits)

    value = -magnitude if negative else magnitude
    minimum, maximum = signed_bounds(bit_size)
    if not minimum <= value <= maximum:
        raise OutOfRangeError("parse_int", text)
    return value


def parse_float(text: str) -> float:
    """Parse a 64-bit floating point literal.

    Accepts decimal and exponent notation, hexadecimal mantissas with a
    binary exponent (``0x1p-2``), and the special values ``inf``,
    ``infinity`` and ``nan`` in any letter case. Underscores may separate
    digits, as in integer literals.

    Raises:
        InvalidSyntaxError: If text is not a float literal
        OutOfRangeError: If a finite literal overflows to infinity
    """
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)

    if "_" in text and not _underscores_ok(text):
        raise InvalidSyntaxError("parse_float", text)
    digits = text.replace("_", "")

    if _DECIMAL_FLOAT.fullmatch(text):
        value = float(digits)
    elif _HEX_FLOAT.fullmatch(text):
        try:
            value = float.fromhex(digits)
        except OverflowError as e:
            raise OutOfRangeError("parse_float", text) from e
    else:
        raise InvalidSyntaxError("parse_float", text)

    if math.isinf(value):
        raise OutOfRangeError("parse_float", text)
    return value


def format_float(value: float) -> str:
    """Format a float with the fewest digits that round-trip.

    Uses exponent notation when the decimal exponent is below -4 or at
    least 6, positional notation otherwise.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return sign + "0"

    # repr() yields the shortest round-tripping digits
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    raw = "".join(map(str, digit_tuple))
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)
    # Position of the decimal point relative to the first digit
    point = len(digits) + exponent
    exp = point - 1

    if exp < -4 or exp >= 6:
        mantissa = digits[0]
        if len(digits) > 1:
            mantissa += "." + digits[1:]
        exp_sign = "-" if exp < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp):02d}"

    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return sign + digits + "0" * (point - len(digits))
    return f"{sign}{digits[:point]}.{digits[point:]}"
