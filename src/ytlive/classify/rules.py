"""Ordered exception-to-outcome rules.

Rules are evaluated top to bottom and the first match wins, so specific
causes must come before the generic fallbacks.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, Sequence

import httpx

from ..outcome import Failure, Retryable
from ..request import CallCancelled
from ..util.error import describe_error

ErrorPredicate = Callable[[BaseException], bool]
ReasonFormatter = Callable[[BaseException], str]


def caught(*types: type[BaseException]) -> ErrorPredicate:
    """Predicate matching instances of any of ``types``."""
    return lambda error: isinstance(error, types)


def _retry_reason(error: BaseException) -> str:
    return f"Retryable because -> {describe_error(error)}"


def _failure_reason(error: BaseException) -> str:
    return f"Failure because -> {describe_error(error)}"


@dataclass(frozen=True)
class ErrorRule:
    """One ``(predicate, variant, formatter)`` classification rule."""

    predicate: ErrorPredicate
    variant: type[Retryable] | type[Failure]
    format: ReasonFormatter

    @classmethod
    def retry(cls, *types: type[BaseException]) -> "ErrorRule":
        return cls(caught(*types), Retryable, _retry_reason)

    @classmethod
    def fail(cls, *types: type[BaseException]) -> "ErrorRule":
        return cls(caught(*types), Failure, _failure_reason)

    def apply(self, error: BaseException) -> Retryable | Failure:
        return self.variant(self.format(error))


TRANSPORT_RULES: tuple[ErrorRule, ...] = (
    # Local misconfiguration, even though httpx files these as transport errors.
    ErrorRule.fail(httpx.UnsupportedProtocol, httpx.LocalProtocolError),
    ErrorRule.retry(httpx.TransportError, ConnectionError, OSError),
    ErrorRule.retry(CallCancelled, TimeoutError, asyncio.TimeoutError),
    ErrorRule.fail(Exception),
)


def classify_error(
    error: BaseException,
    rules: Sequence[ErrorRule] = TRANSPORT_RULES,
) -> Retryable | Failure:
    """Map an exception to an outcome using the first matching rule."""
    for rule in rules:
        if rule.predicate(error):
            return rule.apply(error)
    return Failure(_failure_reason(error))
