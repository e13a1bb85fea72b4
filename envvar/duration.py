# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Duration type with nanosecond resolution.

A Duration is a signed 64-bit count of nanoseconds. Its text form is a
sequence of decimal numbers, each with an optional fraction and a unit
suffix, such as "300ms", "-1.5h" or "2h45m".
"""

from datetime import timedelta

from .errors import InvalidSyntaxError, OutOfRangeError, quote
from .strconv import INT64_MAX, INT64_MIN

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # Greek letter mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

# Fraction digits beyond this are consumed but ignored
_FRACTION_LIMIT = INT64_MAX // 10


class Duration(int):
    """Elapsed time between two instants as an int64 nanosecond count."""

    def __new__(cls, nanoseconds: int = 0) -> "Duration":
        if not INT64_MIN <= nanoseconds <= INT64_MAX:
            raise OverflowError(f"duration {nanoseconds}ns out of int64 range")
        return super().__new__(cls, nanoseconds)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        """Convert a timedelta (microsecond resolution) to a Duration."""
        micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(micros * MICROSECOND)

    def to_timedelta(self) -> timedelta:
        """Convert to a timedelta, truncating below one microsecond."""
        micros = abs(int(self)) // MICROSECOND
        return timedelta(microseconds=-micros if self < 0 else micros)

    def hours(self) -> float:
        return self / HOUR

    def minutes(self) -> float:
        return self / MINUTE

    def seconds(self) -> float:
        return self / SECOND

    def __repr__(self) -> str:
        return f"Duration({str(self)!r})"

    def __str__(self) -> str:
        return format_duration(self)


def _format_fraction(value: int, precision: int) -> tuple[int, str]:
    """Split value into value // 10**precision and its trimmed fraction text.

    The fraction text is empty when the fraction is zero, otherwise it
    includes the leading decimal point.
    """
    whole, fraction = divmod(value, 10 ** precision)
    digits = f"{fraction:0{precision}d}".rstrip("0")
    return whole, ("." + digits) if digits else ""


def format_duration(nanoseconds: int) -> str:
    """Render nanoseconds in canonical form, e.g. "72h3m0.5s" or "1.5ms".

    Durations under one second use the smallest unit (ns, µs, ms) that
    keeps the leading digit non-zero. The zero duration formats as "0s".
    """
    sign = "-" if nanoseconds < 0 else ""
    u = abs(nanoseconds)

    if u < SECOND:
        if u == 0:
            return "0s"
        if u < MICROSECOND:
            return f"{sign}{u}ns"
        if u < MILLISECOND:
            whole, fraction = _format_fraction(u, 3)
            return f"{sign}{whole}{fraction}µs"
        whole, fraction = _format_fraction(u, 6)
        return f"{sign}{whole}{fraction}ms"

    seconds, fraction = _format_fraction(u, 9)
    text = f"{seconds % 60}{fraction}s"
    minutes = seconds // 60
    if minutes > 0:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours > 0:
            text = f"{hours}h{text}"
    return sign + text


def _leading_int(s: str) -> tuple[int, str]:
    """Consume leading decimal digits, returning (value, rest)."""
    i = 0
    while i < len(s) and "0" <= s[i] <= "9":
        i += 1
    return (int(s[:i]) if i else 0), s[i:]


def _leading_fraction(s: str) -> tuple[int, float, str]:
    """Consume leading fraction digits, returning (value, scale, rest)."""
    i = 0
    value = 0
    scale = 1.0
    overflow = False
    while i < len(s) and "0" <= s[i] <= "9":
        if not overflow:
            shifted = value * 10 + int(s[i])
            if value > _FRACTION_LIMIT or shifted > 1 << 63:
                overflow = True
            else:
                value = shifted
                scale *= 10
        i += 1
    return value, scale, s[i:]


def parse_duration(text: str) -> Duration:
    """Parse a duration string such as "2m", "1h30m" or "-1.5s".

    A duration string is an optionally signed sequence of decimal numbers,
    each with an optional fraction and a unit suffix. Valid units are
    "ns", "us" (or "µs"), "ms", "s", "m", "h". The bare literal "0" is
    also accepted.

    Args:
        text: Duration text

    Returns:
        Parsed Duration

    Raises:
        InvalidSyntaxError: If text is malformed or uses an unknown unit
        OutOfRangeError: If the total does not fit in int64 nanoseconds
    """
    func = "parse_duration"
    s = text
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]

    if s == "0":
        return Duration(0)
    if not s:
        raise InvalidSyntaxError(func, text, "invalid duration")

    total = 0
    while s:
        if not (s[0] == "." or "0" <= s[0] <= "9"):
            raise InvalidSyntaxError(func, text, "invalid duration")

        before = len(s)
        value, s = _leading_int(s)
        has_int = before != len(s)

        fraction, scale, has_fraction = 0, 1.0, False
        if s.startswith("."):
            s = s[1:]
            before = len(s)
            fraction, scale, s = _leading_fraction(s)
            has_fraction = before != len(s)
        if not has_int and not has_fraction:
            raise InvalidSyntaxError(func, text, "invalid duration")

        i = 0
        while i < len(s) and s[i] != "." and not "0" <= s[i] <= "9":
            i += 1
        unit_text, s = s[:i], s[i:]
        if not unit_text:
            raise InvalidSyntaxError(func, text, "missing unit")
        unit = _UNITS.get(unit_text)
        if unit is None:
            raise InvalidSyntaxError(func, text, f"unknown unit {quote(unit_text)}")

        value *= unit
        if fraction > 0:
            value += int(float(fraction) * (unit / scale))
        total += value
        if total > 1 << 63:
            raise OutOfRangeError(func, text)

    if negative:
        return Duration(-total)
    if total > INT64_MAX:
        raise OutOfRangeError(func, text)
    return Duration(total)
