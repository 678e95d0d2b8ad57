"""
xresult — explicit, composable success/failure values for Python.

A Result is either Success(value) or Failure(cause). Operations that may
fail return a Result instead of None or raising:

    from xresult import Result

    def parse_age(raw: str) -> Result[int]:
        return (
            Result.from_callable(lambda: int(raw))
            .filter(lambda age: age >= 0, lambda age: f"{age} is negative")
        )

    message = parse_age("42").map(lambda age: f"age {age}").fold(
        lambda text: text,
        lambda cause: f"invalid: {cause.describe()}",
    )
"""

from xresult.causes import (
    FILTERED_NO_REASON,
    AbsentValueError,
    Cause,
    CauseKind,
    ExceptionCause,
    FilterCause,
    NullCause,
    SimpleCause,
)
from xresult.result import Result, Success, Failure, ScopedResource, SupportsClose
from xresult.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
    ComposableExecutionContext,
    with_context,
)
from xresult.config import LoggingSettings, configure_structlog
from xresult.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ScopedResource",
    "SupportsClose",
    "Cause",
    "CauseKind",
    "ExceptionCause",
    "NullCause",
    "SimpleCause",
    "FilterCause",
    "FILTERED_NO_REASON",
    "AbsentValueError",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ComposableExecutionContext",
    "with_context",
    "LoggingSettings",
    "configure_structlog",
    "ResultAssertions",
]

__version__ = "1.0.0"
