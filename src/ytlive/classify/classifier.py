"""Classify one remote call attempt into an outcome.

The checks run in a fixed order and never loop:

    precheck -> transport -> status check -> body parse -> outcome

Retrying is left to the caller; ``classify`` only decides whether the
attempt succeeded, may be retried, or failed for good.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol, Sequence, TypeVar

from ..outcome import Failure, Outcome, Result, Retryable, Success, from_result, prefix
from ..request import CallRequest
from ..util.log import Log
from .rules import TRANSPORT_RULES, ErrorRule, classify_error
from .status import classify_status

T = TypeVar("T")

log = Log.create({"service": "classify"})


class ResponseEnvelope(Protocol):
    """A received response: status code plus a readable body."""

    status_code: int

    async def read_text(self) -> str: ...


@dataclass(frozen=True)
class BufferedResponse:
    """Response whose body has already been read into memory."""

    status_code: int
    body: str = ""

    async def read_text(self) -> str:
        return self.body


Transport = Callable[[CallRequest], Awaitable[ResponseEnvelope]]
Parser = Callable[[str], Result[Sequence[T]]]


def _finish(request: CallRequest, outcome: Outcome[T], stage: str) -> Outcome[T]:
    if isinstance(outcome, Success):
        log.debug("call succeeded", {"id": request.id, "stage": stage})
    else:
        log.info(
            "call not successful",
            {
                "id": request.id,
                "stage": stage,
                "outcome": type(outcome).__name__.lower(),
                "reason": outcome.reason,
            },
        )
    return outcome


async def classify(
    request: CallRequest,
    send: Transport,
    parse: Parser[T],
    *,
    rules: Sequence[ErrorRule] = TRANSPORT_RULES,
) -> Outcome[T]:
    """Run one attempt and classify its result.

    Args:
        request: Identifier and cancellation signal for this attempt.
        send: Transport capability; awaited at most once.
        parse: Deserializer returning the collection of result items.
        rules: Ordered exception rules for transport and body-read errors.

    Returns:
        ``Success`` holding the first parsed item, ``Retryable`` for transient
        conditions, or ``Failure`` for permanent ones.
    """
    if not request.id:
        return _finish(request, Failure("Failed because the identifier is null or empty."), "precheck")

    if request.cancellation.requested:
        return _finish(
            request,
            Retryable("Retryable because cancellation has been already requested."),
            "precheck",
        )

    try:
        response = await send(request)
    except Exception as error:
        return _finish(request, classify_error(error, rules), "transport")

    status = classify_status(response.status_code)
    if status is not None:
        return _finish(request, status, "status")

    try:
        text = await response.read_text()
    except Exception as error:
        return _finish(request, classify_error(error, rules), "body")

    if not text:
        return _finish(request, Failure("Failed because the response body was empty."), "body")

    parsed = from_result(parse(text))
    if not isinstance(parsed, Success):
        return _finish(request, prefix(parsed, "Failed to deserialize response body because"), "parse")

    items = parsed.value
    if len(items) == 0:
        return _finish(request, Failure("Failed because the response had no matching items."), "parse")

    # The API returns at most one relevant record per identifier.
    return _finish(request, Success(items[0]), "parse")
