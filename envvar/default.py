# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Process-wide default EnvVarSet and functions operating on it.

The default set is named after the running program and uses
EXIT_ON_ERROR, so a bad value in the environment terminates the process
with status 2 after printing a diagnostic to stderr.
"""

import logging
import os
import sys
from datetime import timedelta
from typing import Callable, Iterable, Mapping, Optional, TextIO, Union

from .duration import Duration
from .envvar_set import EnvVar, EnvVarSet, ErrorHandling
from .value import Ref, Value

logger = logging.getLogger(__name__)

_default_set: Optional[EnvVarSet] = None


def _program_name() -> str:
    return sys.argv[0] if sys.argv else ""


def get_default_set() -> EnvVarSet:
    """Return the default set, creating it on first use."""
    global _default_set
    if _default_set is None:
        _default_set = EnvVarSet(_program_name(), ErrorHandling.EXIT_ON_ERROR)
    return _default_set


def reset_for_testing() -> EnvVarSet:
    """Replace the default set with a fresh CONTINUE_ON_ERROR set.

    After this call, parse errors on the default set raise instead of
    exiting the process.

    Returns:
        The new default set
    """
    global _default_set
    _default_set = EnvVarSet(_program_name(), ErrorHandling.CONTINUE_ON_ERROR)
    logger.debug("Default env var set reset")
    return _default_set


def environ_entries(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Render an environment mapping as NAME=VALUE strings.

    Args:
        environ: Mapping to render (defaults to os.environ)
    """
    if environ is None:
        environ = os.environ
    return [f"{key}={value}" for key, value in environ.items()]


def set_output(output: Optional[TextIO]) -> None:
    get_default_set().set_output(output)


def visit_all(fn: Callable[[EnvVar], None]) -> None:
    """Call fn for every registered variable of the default set, sorted by name."""
    get_default_set().visit_all(fn)


def visit(fn: Callable[[EnvVar], None]) -> None:
    """Call fn for every variable of the default set that has been set, sorted by name."""
    get_default_set().visit(fn)


def lookup(name: str) -> Optional[EnvVar]:
    return get_default_set().lookup(name)


def set(name: str, value: str) -> None:
    """Set the named variable of the default set from text."""
    get_default_set().set(name, value)


def n_env_var() -> int:
    return get_default_set().n_env_var()


def var(value: Value, name: str) -> None:
    get_default_set().var(value, name)


def bool_var(ref: Ref[bool], name: str, value: bool = False) -> None:
    get_default_set().bool_var(ref, name, value)


def define_bool(name: str, value: bool = False) -> Ref[bool]:
    return get_default_set().define_bool(name, value)


def int_var(ref: Ref[int], name: str, value: int = 0) -> None:
    get_default_set().int_var(ref, name, value)


def define_int(name: str, value: int = 0) -> Ref[int]:
    return get_default_set().define_int(name, value)


def int64_var(ref: Ref[int], name: str, value: int = 0) -> None:
    get_default_set().int64_var(ref, name, value)


def define_int64(name: str, value: int = 0) -> Ref[int]:
    return get_default_set().define_int64(name, value)


def uint_var(ref: Ref[int], name: str, value: int = 0) -> None:
    get_default_set().uint_var(ref, name, value)


def define_uint(name: str, value: int = 0) -> Ref[int]:
    return get_default_set().define_uint(name, value)


def uint64_var(ref: Ref[int], name: str, value: int = 0) -> None:
    get_default_set().uint64_var(ref, name, value)


def define_uint64(name: str, value: int = 0) -> Ref[int]:
    return get_default_set().define_uint64(name, value)


def string_var(ref: Ref[str], name: str, value: str = "") -> None:
    get_default_set().string_var(ref, name, value)


def define_string(name: str, value: str = "") -> Ref[str]:
    return get_default_set().define_string(name, value)


def float64_var(ref: Ref[float], name: str, value: float = 0.0) -> None:
    get_default_set().float64_var(ref, name, value)


def define_float64(name: str, value: float = 0.0) -> Ref[float]:
    return get_default_set().define_float64(name, value)


def duration_var(
    ref: Ref[Duration], name: str, value: Union[Duration, int, timedelta] = 0
) -> None:
    get_default_set().duration_var(ref, name, value)


def define_duration(name: str, value: Union[Duration, int, timedelta] = 0) -> Ref[Duration]:
    return get_default_set().define_duration(name, value)


def parse(environment: Optional[Iterable[str]] = None) -> None:
    """Parse the process environment into the default set.

    Must be called after all variables are registered and before the
    program reads them.

    Args:
        environment: NAME=VALUE entries; defaults to the entries of os.environ
    """
    if environment is None:
        environment = environ_entries()
    get_default_set().parse(environment)


def parsed() -> bool:
    """Report whether the default set has been parsed."""
    return get_default_set().parsed()
