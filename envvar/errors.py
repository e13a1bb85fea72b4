# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exceptions for environment variable registration and parsing."""

import json


def quote(text: str) -> str:
    """Return text in double quotes with quotes and control characters escaped."""
    return json.dumps(text, ensure_ascii=False)


class EnvVarError(Exception):
    """Base exception for recoverable environment variable errors."""
    pass


class ValueParseError(EnvVarError, ValueError):
    """Raised when text cannot be converted to a value's native type."""

    def __init__(self, func: str, text: str, reason: str):
        """Initialize ValueParseError with context.

        Args:
            func: Name of the conversion that failed (e.g. "parse_int")
            text: The offending text
            reason: Short description of the failure
        """
        super().__init__(f"{func}: parsing {quote(text)}: {reason}")
        self.func = func
        self.text = text
        self.reason = reason


class InvalidSyntaxError(ValueParseError):
    """Raised when text does not match the grammar of the target kind."""

    def __init__(self, func: str, text: str, reason: str = "invalid syntax"):
        super().__init__(func, text, reason)


class OutOfRangeError(ValueParseError):
    """Raised when a well-formed literal does not fit the target kind."""

    def __init__(self, func: str, text: str, reason: str = "value out of range"):
        super().__init__(func, text, reason)


class NoSuchEnvVarError(EnvVarError, KeyError):
    """Raised when setting a name that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"no such environment variable {name}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidValueError(EnvVarError):
    """Raised by a parse pass when an entry's value is rejected."""

    def __init__(self, name: str, value: str, cause: Exception):
        """Initialize InvalidValueError.

        Args:
            name: Environment variable name
            value: Raw text that was rejected
            cause: Error raised by the value's set()
        """
        super().__init__(f"invalid value {quote(value)} for env var {name}: {cause}")
        self.name = name
        self.value = value


class EnvVarRedefinedError(RuntimeError):
    """Raised when a name is registered twice in the same set.

    This signals a programming error. It is not an EnvVarError, so
    handlers for recoverable errors do not catch it.
    """

    def __init__(self, message: str, name: str, set_name: str = ""):
        super().__init__(message)
        self.name = name
        self.set_name = set_name


class EnvVarPanic(RuntimeError):
    """Raised by a parse pass under PANIC_ON_ERROR."""
    pass
