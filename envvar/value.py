# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Value interface for typed environment variables."""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """Mutable storage slot that a value writes its native state into.

    The slot belongs to whoever created it; a registered value only keeps
    a reference, so reads of ``ref.value`` observe every later update.
    """

    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


class Value(ABC):
    """Abstract base class for the dynamic value stored in an EnvVar.

    Implementations parse text into their internal state with ``set()``
    and render that state back with ``str()``. ``str()`` must work at any
    time, including before ``set()`` was ever called.
    """

    @abstractmethod
    def set(self, text: str) -> None:
        """Parse text and store it.

        Any exception raised here rejects the text. A parse pass reports it
        and applies the set's error handling policy.

        Args:
            text: Raw text from the environment

        Raises:
            ValueParseError: If text cannot be converted
        """
        raise NotImplementedError

    @abstractmethod
    def __str__(self) -> str:
        """Return the canonical text form of the current state."""
        raise NotImplementedError


class Getter(Value):
    """A Value whose state can also be read as its native type.

    All built-in kinds implement this interface.
    """

    @abstractmethod
    def get(self) -> Any:
        """Return the current state as its native type."""
        raise NotImplementedError
