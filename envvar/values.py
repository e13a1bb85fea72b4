# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Built-in value kinds.

Each kind is constructed from a default native value and a storage slot.
Construction writes the default into the slot immediately; every
successful ``set()`` writes the parsed value into the same slot. A failed
``set()`` leaves the slot untouched.
"""

from datetime import timedelta
from typing import Any

from .duration import Duration, format_duration, parse_duration
from .strconv import (
    INT_SIZE,
    format_bool,
    format_float,
    parse_bool,
    parse_float,
    parse_int,
    parse_uint,
    signed_bounds,
    unsigned_bounds,
)
from .value import Getter, Ref


class BoolValue(Getter):
    """Boolean value accepting 1, 0, t, f, T, F, true, false, TRUE, FALSE, True, False."""

    def __init__(self, value: bool, ref: Ref[bool]):
        ref.value = bool(value)
        self._ref = ref

    def set(self, text: str) -> None:
        self._ref.value = parse_bool(text)

    def get(self) -> bool:
        return self._ref.value

    def __str__(self) -> str:
        return format_bool(self._ref.value)


class _IntegerValue(Getter):
    """Shared behaviour of the fixed-width integer kinds."""

    signed = True
    bit_size = 64

    def __init__(self, value: int, ref: Ref[int]):
        """Bind ref and store the default.

        Args:
            value: Default value
            ref: Storage slot receiving the default and later updates

        Raises:
            ValueError: If the default does not fit the kind's width
        """
        minimum, maximum = self.bounds()
        if not minimum <= value <= maximum:
            raise ValueError(
                f"default {value} out of range for {type(self).__name__} "
                f"[{minimum}, {maximum}]"
            )
        ref.value = int(value)
        self._ref = ref

    @classmethod
    def bounds(cls) -> tuple[int, int]:
        if cls.signed:
            return signed_bounds(cls.bit_size)
        return unsigned_bounds(cls.bit_size)

    def set(self, text: str) -> None:
        if self.signed:
            self._ref.value = parse_int(text, self.bit_size)
        else:
            self._ref.value = parse_uint(text, self.bit_size)

    def get(self) -> int:
        return self._ref.value

    def __str__(self) -> str:
        return str(self._ref.value)


class IntValue(_IntegerValue):
    """Signed integer bounded to the platform's native width."""

    signed = True
    bit_size = INT_SIZE


class Int64Value(_IntegerValue):
    signed = True
    bit_size = 64


class UintValue(_IntegerValue):
    """Unsigned integer bounded to the platform's native width."""

    signed = False
    bit_size = INT_SIZE


class Uint64Value(_IntegerValue):
    signed = False
    bit_size = 64


class StringValue(Getter):
    """Text value stored without transformation."""

    def __init__(self, value: str, ref: Ref[str]):
        ref.value = value
        self._ref = ref

    def set(self, text: str) -> None:
        self._ref.value = text

    def get(self) -> str:
        return self._ref.value

    def __str__(self) -> str:
        return self._ref.value


class Float64Value(Getter):
    """64-bit floating point value."""

    def __init__(self, value: float, ref: Ref[float]):
        ref.value = float(value)
        self._ref = ref

    def set(self, text: str) -> None:
        self._ref.value = parse_float(text)

    def get(self) -> float:
        return self._ref.value

    def __str__(self) -> str:
        return format_float(self._ref.value)


class DurationValue(Getter):
    """Duration value accepting compound unit expressions such as "1h30m"."""

    def __init__(self, value: Any, ref: Ref[Duration]):
        """Bind ref and store the default.

        Args:
            value: Default as a Duration, a nanosecond count or a timedelta
            ref: Storage slot receiving the default and later updates
        """
        if isinstance(value, timedelta):
            ref.value = Duration.from_timedelta(value)
        else:
            ref.value = Duration(value)
        self._ref = ref

    def set(self, text: str) -> None:
        self._ref.value = parse_duration(text)

    def get(self) -> Duration:
        return self._ref.value

    def __str__(self) -> str:
        return format_duration(self._ref.value)
