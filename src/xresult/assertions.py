"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages:

    from xresult import CauseKind, ResultAssertions

    def test_load_user():
        user = ResultAssertions.assert_ok(load_user(7))
        assert user.name == "Andy"

    def test_missing_user():
        result = load_user(404)
        ResultAssertions.assert_err(result, CauseKind.ABSENT)
        ResultAssertions.assert_cause_message_contains(result, "none")
"""

from __future__ import annotations

from typing import Any, TypeVar

from xresult.causes import Cause, CauseKind
from xresult.result import Result

T = TypeVar("T")
C = TypeVar("C", bound=Cause)


def _describe(result: Result[Any]) -> str:
    return result.fold(
        lambda value: f"Success({value!r})",
        lambda cause: f"Failure({cause.kind.value}: {cause.describe()!r})",
    )


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_ok(result: Result[T], message: str = "") -> T:
        """
        Assert the Result is a Success and return the value.

            value = ResultAssertions.assert_ok(result)
        """
        context = f" — {message}" if message else ""
        assert result.is_ok(), f"Expected Success but got {_describe(result)}{context}"
        return result.fold(lambda value: value, lambda _: None)  # type: ignore[return-value]

    @staticmethod
    def assert_ok_value(result: Result[T], expected_value: Any) -> None:
        """Assert the Result is a Success holding exactly expected_value."""
        value = ResultAssertions.assert_ok(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )

    @staticmethod
    def assert_err(
        result: Result[T],
        expected_kind: CauseKind | None = None,
        message: str = "",
    ) -> Cause:
        """
        Assert the Result is a Failure, optionally checking the cause kind.

            cause = ResultAssertions.assert_err(result, CauseKind.FILTER)
        """
        context = f" — {message}" if message else ""
        assert result.is_err(), f"Expected Failure but got {_describe(result)}{context}"
        cause: Cause = result.fold(lambda _: None, lambda c: c)  # type: ignore[arg-type,return-value]
        if expected_kind is not None:
            assert cause.kind is expected_kind, (
                f"Expected cause kind {expected_kind.value} "
                f"but got {cause.kind.value}: {cause.describe()!r}{context}"
            )
        return cause

    @staticmethod
    def assert_cause_type(result: Result[T], cause_type: type[C]) -> C:
        """Assert the Result is a Failure whose cause is an instance of cause_type."""
        cause = ResultAssertions.assert_err(result)
        assert isinstance(cause, cause_type), (
            f"Expected cause of type {cause_type.__name__} "
            f"but got {type(cause).__name__}: {cause.describe()!r}"
        )
        return cause

    @staticmethod
    def assert_cause_message_contains(result: Result[T], substring: str) -> None:
        """Assert that the cause description contains substring (case-insensitive)."""
        cause = ResultAssertions.assert_err(result)
        description = cause.describe()
        assert substring.lower() in description.lower(), (
            f"Expected cause to contain {substring!r} but it was: {description!r}"
        )
