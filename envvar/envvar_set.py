# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Registry of typed environment variables and the parse pass over it."""

import logging
import sys
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Callable, Iterable, Optional, TextIO, Union

from .duration import Duration
from .errors import (
    EnvVarPanic,
    EnvVarRedefinedError,
    InvalidValueError,
    NoSuchEnvVarError,
)
from .value import Ref, Value
from .values import (
    BoolValue,
    DurationValue,
    Float64Value,
    Int64Value,
    IntValue,
    StringValue,
    Uint64Value,
    UintValue,
)

logger = logging.getLogger(__name__)

# Exit status used by EXIT_ON_ERROR
EXIT_STATUS = 2


class ErrorHandling(Enum):
    """How EnvVarSet.parse behaves when a value is rejected."""

    CONTINUE_ON_ERROR = 0  # raise InvalidValueError to the caller
    EXIT_ON_ERROR = 1  # sys.exit(2)
    PANIC_ON_ERROR = 2  # raise EnvVarPanic


@dataclass(frozen=True)
class EnvVar:
    """Binding between an environment variable name and its value."""
    name: str
    value: Value


class EnvVarSet:
    """A named set of registered environment variables.

    Variables are registered with the ``define_*``, ``*_var`` and ``var``
    methods, then populated by ``parse()`` from ``NAME=VALUE`` strings or
    individually by ``set()``.

    The set is not synchronized. Register and parse from a single thread
    before other threads start reading bound slots; concurrent reads via
    ``visit``, ``visit_all`` and ``lookup`` are safe once no further
    registration or parsing happens.
    """

    def __init__(
        self,
        name: str = "",
        error_handling: ErrorHandling = ErrorHandling.CONTINUE_ON_ERROR,
        output: Optional[TextIO] = None,
    ):
        """Initialize an empty set.

        Args:
            name: Display name used in redefinition messages
            error_handling: Policy applied when parse() rejects a value
            output: Stream for diagnostics (defaults to sys.stderr)
        """
        self._name = name
        self._error_handling = error_handling
        self._output = output
        self._parsed = False
        self._formal: dict[str, EnvVar] = {}
        self._actual: dict[str, EnvVar] = {}

    def init(self, name: str, error_handling: ErrorHandling) -> None:
        """Set the name and error handling policy of the set."""
        self._name = name
        self._error_handling = error_handling

    @property
    def name(self) -> str:
        return self._name

    @property
    def error_handling(self) -> ErrorHandling:
        return self._error_handling

    @property
    def output(self) -> TextIO:
        """Stream receiving diagnostics; sys.stderr unless set_output() was called."""
        if self._output is None:
            return sys.stderr
        return self._output

    def set_output(self, output: Optional[TextIO]) -> None:
        """Set the destination for diagnostics. None restores sys.stderr."""
        self._output = output

    def _report(self, message: str) -> None:
        print(message, file=self.output)

    # Introspection

    def visit_all(self, fn: Callable[[EnvVar], None]) -> None:
        """Call fn for every registered variable in lexicographical order of name."""
        for name in sorted(self._formal):
            fn(self._formal[name])

    def visit(self, fn: Callable[[EnvVar], None]) -> None:
        """Call fn for every variable that has been set, in lexicographical order."""
        for name in sorted(self._actual):
            fn(self._actual[name])

    def lookup(self, name: str) -> Optional[EnvVar]:
        """Return the registered EnvVar for name, or None."""
        return self._formal.get(name)

    def n_env_var(self) -> int:
        """Return the number of variables that have been set."""
        return len(self._actual)

    def parsed(self) -> bool:
        """Report whether parse() has been called."""
        return self._parsed

    # Registration

    def var(self, value: Value, name: str) -> None:
        """Register a value under name.

        The value is typically a user-defined implementation of Value.
        Its default is whatever state it holds at registration.

        Args:
            value: Value implementation holding the variable's state
            name: Environment variable name

        Raises:
            EnvVarRedefinedError: If name is already registered in this set.
                This is a programming error, not a runtime condition.
        """
        if name in self._formal:
            if self._name:
                message = f"{self._name} sets EnvVar redefined: {name}"
            else:
                message = f"EnvVar redefined: {name}"
            self._report(message)
            raise EnvVarRedefinedError(message, name=name, set_name=self._name)
        self._formal[name] = EnvVar(name, value)
        logger.debug("Registered env var %s (%s)", name, type(value).__name__)

    def bool_var(self, ref: Ref[bool], name: str, value: bool = False) -> None:
        """Register a bool variable stored in ref."""
        self.var(BoolValue(value, ref), name)

    def define_bool(self, name: str, value: bool = False) -> Ref[bool]:
        """Register a bool variable and return the slot holding its value."""
        ref = Ref(value)
        self.bool_var(ref, name, value)
        return ref

    def int_var(self, ref: Ref[int], name: str, value: int = 0) -> None:
        """Register a platform-width signed integer variable stored in ref."""
        self.var(IntValue(value, ref), name)

    def define_int(self, name: str, value: int = 0) -> Ref[int]:
        """Register a platform-width signed integer variable and return its slot."""
        ref = Ref(value)
        self.int_var(ref, name, value)
        return ref

    def int64_var(self, ref: Ref[int], name: str, value: int = 0) -> None:
        """Register a 64-bit signed integer variable stored in ref."""
        self.var(Int64Value(value, ref), name)

    def define_int64(self, name: str, value: int = 0) -> Ref[int]:
        """Register a 64-bit signed integer variable and return its slot."""
        ref = Ref(value)
        self.int64_var(ref, name, value)
        return ref

    def uint_var(self, ref: Ref[int], name: str, value: int = 0) -> None:
        """Register a platform-width unsigned integer variable stored in ref."""
        self.var(UintValue(value, ref), name)

    def define_uint(self, name: str, value: int = 0) -> Ref[int]:
        """Register a platform-width unsigned integer variable and return its slot."""
        ref = Ref(value)
        self.uint_var(ref, name, value)
        return ref

    def uint64_var(self, ref: Ref[int], name: str, value: int = 0) -> None:
        """Register a 64-bit unsigned integer variable stored in ref."""
        self.var(Uint64Value(value, ref), name)

    def define_uint64(self, name: str, value: int = 0) -> Ref[int]:
        """Register a 64-bit unsigned integer variable and return its slot."""
        ref = Ref(value)
        self.uint64_var(ref, name, value)
        return ref

    def string_var(self, ref: Ref[str], name: str, value: str = "") -> None:
        """Register a string variable stored in ref."""
        self.var(StringValue(value, ref), name)

    def define_string(self, name: str, value: str = "") -> Ref[str]:
        """Register a string variable and return the slot holding its value."""
        ref = Ref(value)
        self.string_var(ref, name, value)
        return ref

    def float64_var(self, ref: Ref[float], name: str, value: float = 0.0) -> None:
        """Register a float variable stored in ref."""
        self.var(Float64Value(value, ref), name)

    def define_float64(self, name: str, value: float = 0.0) -> Ref[float]:
        """Register a float variable and return the slot holding its value."""
        ref = Ref(value)
        self.float64_var(ref, name, value)
        return ref

    def duration_var(
        self,
        ref: Ref[Duration],
        name: str,
        value: Union[Duration, int, timedelta] = 0,
    ) -> None:
        """Register a Duration variable stored in ref.

        The variable accepts any text accepted by parse_duration().
        """
        self.var(DurationValue(value, ref), name)

    def define_duration(
        self,
        name: str,
        value: Union[Duration, int, timedelta] = 0,
    ) -> Ref[Duration]:
        """Register a Duration variable and return the slot holding its value."""
        ref: Ref[Duration] = Ref(Duration())
        self.duration_var(ref, name, value)
        return ref

    # Mutation

    def set(self, name: str, value: str) -> None:
        """Set the named variable from text.

        Independent of the error handling policy, failures are always
        raised to the caller.

        Raises:
            NoSuchEnvVarError: If name is not registered
            ValueParseError: If the value rejects the text
        """
        env_var = self._formal.get(name)
        if env_var is None:
            raise NoSuchEnvVarError(name)
        env_var.value.set(value)
        self._actual[name] = env_var

    def _parse_one(self, env_string: str) -> None:
        """Apply one NAME=VALUE entry. Unregistered names are skipped.

        The separator search starts at index 1, so a name is never empty.
        An entry without a separator yields an empty name and is skipped.

        Raises:
            InvalidValueError: If the registered value rejects the text
        """
        name = ""
        value = ""
        separator = env_string.find("=", 1)
        if separator != -1:
            name = env_string[:separator]
            value = env_string[separator + 1:]

        env_var = self._formal.get(name)
        if env_var is None:
            return

        try:
            env_var.value.set(value)
        except Exception as e:
            error = InvalidValueError(name, value, e)
            self._report(str(error))
            raise error from e

        self._actual[name] = env_var
        logger.debug("Applied env var %s", name)

    def parse(self, environment: Iterable[str]) -> None:
        """Parse NAME=VALUE entries in order into the registered variables.

        Must be called after all variables are registered and before the
        program reads them. Entries for unregistered names are ignored.

        Args:
            environment: Entries such as those built from os.environ

        Raises:
            InvalidValueError: Under CONTINUE_ON_ERROR, for the first
                rejected entry; later entries are not applied
            SystemExit: Under EXIT_ON_ERROR, with status 2
            EnvVarPanic: Under PANIC_ON_ERROR
        """
        self._parsed = True
        for env_string in environment:
            try:
                self._parse_one(env_string)
            except InvalidValueError as e:
                if self._error_handling is ErrorHandling.EXIT_ON_ERROR:
                    logger.debug("Exiting with status %d after %s", EXIT_STATUS, e.name)
                    sys.exit(EXIT_STATUS)
                if self._error_handling is ErrorHandling.PANIC_ON_ERROR:
                    raise EnvVarPanic(str(e)) from e
                raise
        logger.debug("Parse complete: %d env var(s) set", len(self._actual))
