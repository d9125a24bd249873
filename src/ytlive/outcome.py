"""Tri-state call outcomes.

Every attempt at a remote call resolves to exactly one of:

- ``Success(value)`` - the call produced a usable value.
- ``Retryable(reason)`` - a transient failure; re-issuing the call may succeed.
- ``Failure(reason)`` - a permanent failure for this attempt.

Reasons are diagnostic traces for logs. Callers decide on the variant and
never parse the text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class OutcomeError(RuntimeError):
    """Raised when a value is demanded from a non-success outcome."""

    def __init__(self, outcome: "Retryable | Failure") -> None:
        super().__init__(f"{type(outcome).__name__}: {outcome.reason}")
        self.outcome = outcome


class OutcomeMatchError(AssertionError):
    """Raised when dispatch meets something that is not an outcome variant."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"unmatched outcome variant: {type(value).__name__}")
        self.value = value


def _check_reason(reason: str) -> str:
    if not isinstance(reason, str) or not reason.strip():
        raise ValueError("outcome reason must be a non-empty string")
    return reason


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_retryable(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))

    def and_then(self, fn: Callable[[T], "Outcome[U]"]) -> "Outcome[U]":
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Retryable:
    reason: str

    def __post_init__(self) -> None:
        _check_reason(self.reason)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_retryable(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> "Retryable":
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> "Retryable":
        return self

    def unwrap(self) -> NoReturn:
        raise OutcomeError(self)


@dataclass(frozen=True)
class Failure:
    reason: str

    def __post_init__(self) -> None:
        _check_reason(self.reason)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_retryable(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> "Failure":
        return self

    def unwrap(self) -> NoReturn:
        raise OutcomeError(self)


Outcome = Union[Success[T], Retryable, Failure]


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful half of a binary result."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed half of a binary result."""

    message: str


Result = Union[Ok[T], Err]


def succeed(value: T) -> Success[T]:
    return Success(value)


def retry_with_trace(reason: str) -> Retryable:
    return Retryable(reason)


def fail_with_trace(reason: str) -> Failure:
    return Failure(reason)


def match(
    outcome: "Outcome[T]",
    *,
    success: Callable[[T], R],
    retryable: Callable[[str], R],
    failure: Callable[[str], R],
) -> R:
    """Dispatch on the outcome variant.

    All three handlers are required. Anything that is not one of the three
    variants raises ``OutcomeMatchError``.
    """
    match outcome:
        case Success(value=value):
            return success(value)
        case Retryable(reason=reason):
            return retryable(reason)
        case Failure(reason=reason):
            return failure(reason)
        case _:
            raise OutcomeMatchError(outcome)


def from_result(result: "Result[T]") -> "Outcome[T]":
    """Lift a binary result: ``Ok`` becomes Success, ``Err`` becomes Failure."""
    match result:
        case Ok(value=value):
            return Success(value)
        case Err(message=message):
            return Failure(message or "unknown error")
        case _:
            raise OutcomeMatchError(result)


def prefix(outcome: "Outcome[T]", text: str) -> "Outcome[T]":
    """Prepend ``text`` to the reason of a non-success outcome."""
    return match(
        outcome,
        success=lambda _: outcome,
        retryable=lambda reason: Retryable(f"{text} -> {reason}"),
        failure=lambda reason: Failure(f"{text} -> {reason}"),
    )
