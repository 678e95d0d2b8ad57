"""Tests for ExecutionContext implementations."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from xresult import (
    ComposableExecutionContext,
    ExceptionCause,
    ExecutionContext,
    LoggingExecutionContext,
    NoOpExecutionContext,
    Result,
    Success,
    with_context,
)


class TestNoOpExecutionContext:
    def test_passthrough(self):
        ctx = NoOpExecutionContext()
        assert ctx.execute(lambda: Result.success(42)) == Success(42)

    def test_passthrough_failure(self):
        ctx = NoOpExecutionContext()
        assert ctx.execute(lambda: Result.failure("gone")).is_err()

    def test_satisfies_protocol(self):
        assert isinstance(NoOpExecutionContext(), ExecutionContext)


class TestLoggingExecutionContext:
    def test_logs_success(self):
        ctx = LoggingExecutionContext(operation="TestOp")
        with capture_logs() as logs:
            result = ctx.execute(lambda: Result.success("ok"))
        assert result == Success("ok")
        assert [entry["event"] for entry in logs] == ["execution_started", "execution_completed"]
        completed = logs[-1]
        assert completed["operation"] == "TestOp"
        assert completed["outcome"] == "ok"
        assert completed["log_level"] == "info"
        assert "elapsed_s" in completed

    def test_logs_failure_with_cause(self):
        ctx = LoggingExecutionContext(operation="TestOp")
        with capture_logs() as logs:
            result = ctx.execute(lambda: Result.failure("missing"))
        assert result.is_err()
        completed = logs[-1]
        assert completed["outcome"] == "err"
        assert completed["cause_kind"] == "SIMPLE"
        assert completed["cause"] == "missing"

    def test_returns_same_result_object(self):
        original = Result.success(1)
        result = LoggingExecutionContext().execute(lambda: original)
        assert result is original

    def test_converts_raising_computation_to_failure(self):
        def failing() -> Result[int]:
            raise RuntimeError("exploded")

        ctx = LoggingExecutionContext(operation="Boom")
        with capture_logs() as logs:
            result = ctx.execute(failing)
        cause = result.fold(lambda _: None, lambda c: c)
        assert isinstance(cause, ExceptionCause)
        assert isinstance(cause.exception, RuntimeError)
        raised = logs[-1]
        assert raised["event"] == "execution_raised"
        assert raised["log_level"] == "error"
        assert raised["error"] == "exploded"

    def test_custom_log_level(self):
        ctx = LoggingExecutionContext(operation="Quiet", log_level="DEBUG")
        with capture_logs() as logs:
            ctx.execute(lambda: Result.success(1))
        assert {entry["log_level"] for entry in logs} == {"debug"}

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValueError, match="log_level"):
            LoggingExecutionContext(log_level="verbose")

    def test_wraps_inner_context(self):
        ctx = LoggingExecutionContext(inner=NoOpExecutionContext(), operation="Wrapped")
        assert ctx.execute(lambda: Result.success(99)) == Success(99)


class TestComposableExecutionContext:
    def test_composes_multiple_contexts(self):
        order: list[str] = []

        class TrackingContext:
            def __init__(self, name: str):
                self.name = name

            def execute(self, computation):
                order.append(f"before-{self.name}")
                result = computation()
                order.append(f"after-{self.name}")
                return result

        composed = ComposableExecutionContext(
            TrackingContext("outer"),
            TrackingContext("inner"),
        )
        assert composed.execute(lambda: Result.success("done")) == Success("done")
        assert order == ["before-outer", "before-inner", "after-inner", "after-outer"]

    def test_requires_at_least_one_context(self):
        with pytest.raises(ValueError, match="(?i)at least one"):
            ComposableExecutionContext()


class TestWithContextDecorator:
    def test_decorator_wraps_function(self):
        @with_context(NoOpExecutionContext())
        def handle(x: int) -> Result[int]:
            return Result.success(x * 2)

        assert handle(5) == Success(10)

    def test_decorator_preserves_name(self):
        @with_context(NoOpExecutionContext())
        def my_handler(x: int) -> Result[int]:
            """Handler docstring."""
            return Result.success(x)

        assert my_handler.__name__ == "my_handler"
        assert my_handler.__doc__ == "Handler docstring."


class TestWithinMethod:
    def test_pipeline_within_context(self):
        result = (
            Result.success(5)
            .map(lambda x: x * 2)
            .flat_map(lambda x: Result.success(x + 1))
            .within(NoOpExecutionContext())
        )
        assert result == Success(11)

    def test_within_logging_context(self):
        with capture_logs() as logs:
            Result.failure("bad").within(LoggingExecutionContext(operation="Chain"))
        assert logs[-1]["outcome"] == "err"
