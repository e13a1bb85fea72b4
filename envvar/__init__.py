# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Typed environment variable parsing.

Register variables with ``define_string()``, ``define_bool()``,
``define_int()`` and friends, then call ``parse()`` once to populate them
from the process environment.

Example:
    >>> import envvar
    >>> port = envvar.define_int("PORT", 8080)
    >>> timeout = envvar.define_duration("TIMEOUT", 30 * envvar.SECOND)
    >>> envvar.parse(["PORT=9090", "HOME=/root"])
    >>> port.value
    9090
    >>> str(timeout.value)
    '30s'

Variables can also be bound to caller-owned slots with the ``*_var``
functions, or to user-defined ``Value`` implementations with ``var()``.
Independent sets of variables are built with ``EnvVarSet``.
"""

__version__ = "0.1.0"

from .default import (
    bool_var,
    define_bool,
    define_duration,
    define_float64,
    define_int,
    define_int64,
    define_string,
    define_uint,
    define_uint64,
    duration_var,
    environ_entries,
    float64_var,
    get_default_set,
    int64_var,
    int_var,
    lookup,
    n_env_var,
    parse,
    parsed,
    reset_for_testing,
    set,
    set_output,
    string_var,
    uint64_var,
    uint_var,
    var,
    visit,
    visit_all,
)
from .duration import (
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    Duration,
    format_duration,
    parse_duration,
)
from .envvar_set import EnvVar, EnvVarSet, ErrorHandling
from .errors import (
    EnvVarError,
    EnvVarPanic,
    EnvVarRedefinedError,
    InvalidSyntaxError,
    InvalidValueError,
    NoSuchEnvVarError,
    OutOfRangeError,
    ValueParseError,
)
from .value import Getter, Ref, Value
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

__all__ = [
    # Version
    "__version__",
    # Value interface
    "Value",
    "Getter",
    "Ref",
    "BoolValue",
    "IntValue",
    "Int64Value",
    "UintValue",
    "Uint64Value",
    "StringValue",
    "Float64Value",
    "DurationValue",
    # Durations
    "Duration",
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "format_duration",
    "parse_duration",
    # Sets
    "EnvVar",
    "EnvVarSet",
    "ErrorHandling",
    # Errors
    "EnvVarError",
    "ValueParseError",
    "InvalidSyntaxError",
    "OutOfRangeError",
    "NoSuchEnvVarError",
    "InvalidValueError",
    "EnvVarRedefinedError",
    "EnvVarPanic",
    # Default set
    "get_default_set",
    "reset_for_testing",
    "environ_entries",
    "set_output",
    # envvar.set stays out of __all__ so star imports keep the builtin set
    "var",
    "bool_var",
    "define_bool",
    "int_var",
    "define_int",
    "int64_var",
    "define_int64",
    "uint_var",
    "define_uint",
    "uint64_var",
    "define_uint64",
    "string_var",
    "define_string",
    "float64_var",
    "define_float64",
    "duration_var",
    "define_duration",
    "lookup",
    "n_env_var",
    "parse",
    "parsed",
    "visit",
    "visit_all",
]
