"""
Causes — structured reasons carried on the failure track.

A Failure holds exactly one Cause. The built-in causes cover the ways the
Result API itself produces failures; application code subclasses Cause to
carry its own payloads alongside them:

    @dataclass(frozen=True, slots=True)
    class HttpError(Cause):
        status: int
        method: str
        url: str

        def describe(self) -> str:
            return f"{self.method} {self.url} -> {self.status}"

    Result.failure(HttpError(404, "GET", "/users/7"))

Enum + frozen dataclass gives every cause __eq__, __hash__ and __repr__ for
free, and CauseKind members are singleton-comparable with `is`.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum, unique
from typing import ClassVar


class AbsentValueError(TypeError):
    """Raised (or carried in a NullCause) when None shows up where a value is required."""


@unique
class CauseKind(Enum):
    """Category of a Cause, usable for dispatch without isinstance chains."""

    EXCEPTION = "EXCEPTION"
    """A wrapped operation raised an exception."""

    SIMPLE = "SIMPLE"
    """Plain textual reason."""

    FILTER = "FILTER"
    """A predicate rejected the value."""

    ABSENT = "ABSENT"
    """An operation produced None where a value was required."""

    CUSTOM = "CUSTOM"
    """Application-defined cause."""


class Cause:
    """
    Base capability for failure causes.

    Subclasses are expected to be immutable. Nothing is required beyond
    being a Cause; override `kind` and `describe()` to integrate with
    logging and assertions.
    """

    __slots__ = ()

    kind: ClassVar[CauseKind] = CauseKind.CUSTOM

    def describe(self) -> str:
        """Human-readable one-line description of this cause."""
        return repr(self)


@dataclass(frozen=True, slots=True)
class ExceptionCause(Cause):
    """
    Wraps an exception raised by a wrapped operation.

    >>> cause = ExceptionCause(ZeroDivisionError("division by zero"))
    >>> cause.describe()
    'ZeroDivisionError: division by zero'
    """

    kind: ClassVar[CauseKind] = CauseKind.EXCEPTION

    exception: BaseException

    def describe(self) -> str:
        return f"{type(self.exception).__name__}: {self.exception}"

    def full_stack_trace(self) -> str:
        """Formatted traceback of the wrapped exception, chain included."""
        return "".join(
            traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            )
        )


@dataclass(frozen=True, slots=True)
class NullCause(ExceptionCause):
    """An operation that must not yield None did so."""

    kind: ClassVar[CauseKind] = CauseKind.ABSENT

    @staticmethod
    def create(where: str) -> NullCause:
        return NullCause(AbsentValueError(f"{where} produced None"))


@dataclass(frozen=True, slots=True)
class SimpleCause(Cause):
    kind: ClassVar[CauseKind] = CauseKind.SIMPLE

    message: str

    def describe(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class FilterCause(Cause):
    """Produced by Result.filter when the predicate rejects the value."""

    kind: ClassVar[CauseKind] = CauseKind.FILTER

    reason: str

    def describe(self) -> str:
        return self.reason


FILTERED_NO_REASON = FilterCause("Filtered reason is not provided")
