"""
Execution contexts — separate WHAT a Result pipeline computes from HOW it runs.

The core Result type never logs and never raises. Observability and other
run-time concerns are layered on at the edge through an execution context:

    def import_record(raw: str) -> Result[Record]:
        return (
            Result.success(raw)
            .flat_map(parse)
            .map(normalize)
        )

    # Execute with logging around it
    result = import_record(raw).within(LoggingExecutionContext(operation="ImportRecord"))

    # Or using the decorator
    @with_context(LoggingExecutionContext(operation="ImportRecord"))
    def handle(raw: str) -> Result[Record]:
        return import_record(raw)
"""

from __future__ import annotations

import functools
import time
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

import structlog

from xresult.causes import ExceptionCause
from xresult.result import Failure, Result

T = TypeVar("T")

_LEVELS = ("debug", "info", "warning", "error", "critical")


# ──────────────────────── Protocol (Interface) ────────────────────────


@runtime_checkable
class ExecutionContext(Protocol):
    """
    Protocol for execution contexts.

    Any class implementing execute(computation) satisfies this protocol
    via structural typing — no explicit inheritance needed.
    """

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        """Execute a Result-returning computation within this context."""
        ...


# ──────────────────────── NoOp (Testing) ────────────────────────


class NoOpExecutionContext:
    """
    Passthrough execution context — runs computation without any wrapper.

    Use for unit tests and for code paths that need a context argument but
    no behaviour around it.
    """

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        return computation()


# ──────────────────────── Logging ────────────────────────


class LoggingExecutionContext:
    """
    Execution context that logs entry, exit, duration and outcome.

    Wraps another context (decorator pattern) to add observability. A
    computation that raises is logged and turned into
    Failure(ExceptionCause(...)) instead of propagating.

        ctx = LoggingExecutionContext(operation="ImportRecord")
    """

    def __init__(
        self,
        inner: ExecutionContext | None = None,
        operation: str = "unknown",
        log_level: str = "info",
    ) -> None:
        if log_level.lower() not in _LEVELS:
            raise ValueError(f"log_level must be one of {_LEVELS}, got {log_level!r}")
        self._inner = inner or NoOpExecutionContext()
        self._operation = operation
        self._log_level = log_level.lower()

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        logger = structlog.get_logger("xresult.execution").bind(operation=self._operation)
        self._emit(logger, "execution_started")
        start = time.monotonic()

        try:
            result = self._inner.execute(computation)
        except Exception as e:
            logger.error(
                "execution_raised",
                elapsed_s=round(time.monotonic() - start, 3),
                error=str(e),
                exc_info=True,
            )
            return Failure(ExceptionCause(e))

        elapsed = round(time.monotonic() - start, 3)
        return result.consume(
            lambda _: self._emit(
                logger, "execution_completed", elapsed_s=elapsed, outcome="ok"
            ),
            lambda cause: self._emit(
                logger,
                "execution_completed",
                elapsed_s=elapsed,
                outcome="err",
                cause_kind=cause.kind.value,
                cause=cause.describe(),
            ),
        )

    def _emit(self, logger: Any, event: str, **fields: Any) -> None:
        getattr(logger, self._log_level)(event, **fields)


# ──────────────────────── Composable ────────────────────────


class ComposableExecutionContext:
    """
    Compose multiple execution contexts into a single one.

    The first context is the outermost:

        composed = ComposableExecutionContext(
            LoggingExecutionContext(operation="ImportRecord"),
            TimingBudgetContext(seconds=2),
        )
        # Logging wraps TimingBudget wraps computation
    """

    def __init__(self, *contexts: ExecutionContext) -> None:
        if not contexts:
            raise ValueError("At least one execution context is required")
        self._contexts = list(contexts)

    def execute(self, computation: Callable[[], Result[T]]) -> Result[T]:
        # Build the onion: innermost context wraps the computation first
        wrapped = computation
        for ctx in reversed(self._contexts):
            prev = wrapped
            wrapped = lambda _ctx=ctx, _prev=prev: _ctx.execute(_prev)
        return wrapped()


# ──────────────────────── Decorator Helper ────────────────────────


def with_context(ctx: ExecutionContext) -> Callable:
    """
    Decorator running a Result-returning function inside an execution context.

        @with_context(LoggingExecutionContext(operation="LoadUser"))
        def load_user(user_id: int) -> Result[User]:
            return Result.from_callable(lambda: repo.find(user_id))

    Equivalent to:
        def load_user(user_id):
            return ctx.execute(lambda: Result.from_callable(lambda: repo.find(user_id)))
    """

    def decorator(fn: Callable[..., Result[T]]) -> Callable[..., Result[T]]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Result[T]:
            return ctx.execute(lambda: fn(*args, **kwargs))

        return wrapper

    return decorator
