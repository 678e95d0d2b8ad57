"""
Result — a value that is either Success(value) or Failure(cause).

Every combinator returns a new Result instead of raising, so a chain only
describes the success path and failures ride along untouched:

    ┌───────────┐    map     ┌───────────┐  flat_map  ┌──────────┐
    │  parse    │──Success───│ normalize │──Success───│  lookup  │──→ Result[T]
    └─────┬─────┘            └─────┬─────┘            └─────┬────┘
          │ Failure                │ Failure                │ Failure
          └────────────────────────┴────────────────────────┴──→ Result[T]

fold() is the only method that looks at the variant; everything else is
expressed through it. Exceptions raised by caller-supplied functions are
caught at that boundary and become Failure(ExceptionCause(...)).

Construction policies:
  - Result.success(value) is strict: None is a contract violation and
    raises AbsentValueError.
  - Result.of_nullable(value) is permissive: None becomes
    Failure(NullCause(...)).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Iterator,
    Optional,
    Protocol,
    TypeVar,
    cast,
    runtime_checkable,
)

from xresult.causes import (
    FILTERED_NO_REASON,
    AbsentValueError,
    Cause,
    ExceptionCause,
    FilterCause,
    NullCause,
    SimpleCause,
)

if TYPE_CHECKING:
    from xresult.execution import ExecutionContext

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


@runtime_checkable
class SupportsClose(Protocol):
    """Anything with a close() method: files, sockets, clients, generators."""

    def close(self) -> Any: ...


class Result(Generic[T]):
    """
    Two-variant outcome of an operation.

    Usage:
        >>> Result.success(4).map(lambda x: x * 2).flat_map(lambda x: Result.success(x + 1))
        Success(value=9)

        >>> Result.failure("bad input").map(lambda x: x * 2).is_err()
        True
    """

    __slots__ = ()

    # ──────────────────────── Elimination ────────────────────────

    def fold(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Cause], R],
    ) -> R:
        """
        Apply one of two functions depending on the variant and return its result.

            result.fold(
                lambda user: f"Hello {user.name}",
                lambda cause: f"Error: {cause.describe()}",
            )
        """
        match self:
            case Success(value):
                return on_success(value)
            case Failure(cause):
                return on_failure(cause)
        raise TypeError("unreachable")  # pragma: no cover

    def is_ok(self) -> bool:
        return self.fold(lambda _: True, lambda _: False)

    def is_err(self) -> bool:
        return not self.is_ok()

    # ──────────────────────── Transformations ────────────────────────

    def map(self, mapper: Callable[[T], U]) -> Result[U]:
        """
        Transform the success value.

        A raising mapper yields Failure(ExceptionCause), a mapper returning
        None yields Failure(NullCause). A Failure is returned as-is.

            Result.success(5).map(lambda x: x * 2)   # → Success(10)
            Result.success(5).map(lambda x: 1 / 0)   # → Failure(ExceptionCause(ZeroDivisionError))
        """
        return self.fold(
            Result.safe_mapper(mapper),
            lambda _: cast(Result[U], self),
        )

    def flat_map(self, mapper: Callable[[T], Result[U]]) -> Result[U]:
        """
        Chain a Result-returning function. A Failure is returned as-is.

            def positive(x: int) -> Result[int]:
                return Result.success(x) if x > 0 else Result.failure("must be positive")

            Result.success(5).flat_map(positive)    # → Success(5)
            Result.success(-1).flat_map(positive)   # → Failure(SimpleCause('must be positive'))
        """

        def apply(value: T) -> Result[U]:
            try:
                applied = mapper(value)
            except Exception as e:
                return Failure(ExceptionCause(e))
            if applied is None:
                return Failure(NullCause.create("flat_map"))
            if not isinstance(applied, Result):
                return Failure(
                    ExceptionCause(
                        TypeError(f"flat_map expected a Result, got {type(applied).__name__}")
                    )
                )
            return applied

        return self.fold(apply, lambda _: cast(Result[U], self))

    def filter(
        self,
        predicate: Callable[[T], bool],
        message_mapper: Optional[Callable[[T], str]] = None,
    ) -> Result[T]:
        """
        Keep the success value only if it satisfies the predicate.

        Rejection yields Failure(FilterCause(message_mapper(value))), or
        Failure(FILTERED_NO_REASON) when no mapper is given.

            Result.success(7).filter(lambda x: x % 2 == 0, lambda x: f"{x} is odd")
            # → Failure(FilterCause(reason='7 is odd'))
        """

        def check(value: T) -> Result[T]:
            try:
                if predicate(value):
                    return self
                if message_mapper is None:
                    return Failure(FILTERED_NO_REASON)
                return Failure(FilterCause(message_mapper(value)))
            except Exception as e:
                return Failure(ExceptionCause(e))

        return self.fold(check, lambda _: self)

    # ──────────────────────── Side Effects ────────────────────────

    def consume(
        self,
        on_success: Callable[[T], Any],
        on_failure: Callable[[Cause], Any],
    ) -> Result[T]:
        """
        Run the callback matching the variant and return this Result unchanged.

            result.consume(
                lambda user: logger.info("user_loaded", user_id=user.id),
                lambda cause: logger.warning("user_missing", cause=cause.describe()),
            ).map(render)
        """
        self.fold(on_success, on_failure)
        return self

    on = consume

    # ──────────────────────── Views ────────────────────────

    def to_optional(self) -> Optional[T]:
        """The success value, or None on failure."""
        return self.fold(lambda value: value, lambda _: None)

    def to_sequence(self) -> Iterator[T]:
        """A fresh iterator: one element on success, empty on failure."""
        return self.fold(lambda value: iter((value,)), lambda _: iter(()))

    def get_or_default(self, supplier: Callable[[], T]) -> T:
        """The success value, or supplier() on failure. supplier is not called on success."""
        return self.fold(lambda value: value, lambda _: supplier())

    def as_scoped_resource(self) -> ScopedResource:
        """
        Context manager that closes the success value on scope exit.

            with Result.from_callable(lambda: open(path)).as_scoped_resource() as scope:
                data = scope.resource.read() if scope.resource else b""

        Values without close() and failures get a no-op scope.
        """
        return self.fold(
            lambda value: ScopedResource(value if isinstance(value, SupportsClose) else None),
            lambda _: ScopedResource(None),
        )

    # ──────────────────────── Execution Context ────────────────────────

    def within(self, execution_context: ExecutionContext) -> Result[T]:
        """
        Hand this Result to an execution context.

            result = (
                Result.success(raw)
                .flat_map(parse)
                .map(normalize)
                .within(LoggingExecutionContext(operation="ImportRecord"))
            )
        """
        return execution_context.execute(lambda: self)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Result[T]:
        """Create a Success. Raises AbsentValueError if value is None."""
        return Success(value)

    @staticmethod
    def of_nullable(value: Optional[T]) -> Result[T]:
        """Create a Success, or Failure(NullCause) if value is None. Never raises."""
        if value is None:
            return Failure(NullCause.create("of_nullable"))
        return Success(value)

    @staticmethod
    def failure(reason: Cause | Exception | str) -> Result[Any]:
        """
        Create a Failure.

            Result.failure(HttpError(404, "GET", "/users/7"))   # custom cause as-is
            Result.failure(ValueError("bad"))                    # → ExceptionCause
            Result.failure("HTTP 404")                           # → SimpleCause
        """
        match reason:
            case Cause():
                return Failure(reason)
            case Exception():
                return Failure(ExceptionCause(reason))
            case str():
                return Failure(SimpleCause(reason))
        raise TypeError(
            f"Result.failure expects a Cause, an Exception or a str, got {type(reason).__name__}"
        )

    @staticmethod
    def from_callable(computation: Callable[[], T]) -> Result[T]:
        """
        Run a zero-argument callable and capture its outcome.

        Before:
            try:
                user = repo.find(user_id)
            except Exception as e:
                ...
            if user is None:
                ...

        After:
            user = Result.from_callable(lambda: repo.find(user_id))
        """
        return _capture(computation, "from_callable")

    @staticmethod
    def safe_mapper(function: Callable[[T], U]) -> Callable[[T], Result[U]]:
        """Turn a raising function into one returning Result, with from_callable's rules."""

        def mapped(value: T) -> Result[U]:
            return _capture(lambda: function(value), "map")

        return mapped

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """`if result: ...` holds only on Success."""
        return self.is_ok()

    def __iter__(self) -> Iterator[T]:
        return self.to_sequence()


@dataclass(frozen=True, slots=True)
class Success(Result[T]):
    """The success track — wraps a value of type T that is never None."""

    value: T

    def __post_init__(self) -> None:
        if self.value is None:
            raise AbsentValueError("Success value must not be None")


@dataclass(frozen=True, slots=True)
class Failure(Result[T]):
    """The failure track — wraps a Cause."""

    cause: Cause

    def __post_init__(self) -> None:
        if not isinstance(self.cause, Cause):
            raise TypeError(
                f"Failure cause must be a Cause, got {type(self.cause).__name__}"
            )


def _capture(computation: Callable[[], T], where: str) -> Result[T]:
    try:
        value = computation()
    except Exception as e:
        return Failure(ExceptionCause(e))
    if value is None:
        return Failure(NullCause.create(where))
    return Success(value)


class ScopedResource:
    """
    Scope handle returned by Result.as_scoped_resource().

    release() closes the held resource at most once and never raises; an
    exception from close() is kept on release_error. Exceptions raised in
    the with-body are never suppressed.
    """

    __slots__ = ("resource", "released", "release_error")

    def __init__(self, resource: Optional[SupportsClose]) -> None:
        self.resource = resource
        self.released = False
        self.release_error: Optional[Exception] = None

    def release(self) -> None:
        if self.released:
            return
        self.released = True
        if self.resource is None:
            return
        try:
            self.resource.close()
        except Exception as e:
            self.release_error = e

    def __enter__(self) -> ScopedResource:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> bool:
        self.release()
        return False
