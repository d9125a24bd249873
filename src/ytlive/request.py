"""Per-attempt call request and cooperative cancellation."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field


class CallCancelled(Exception):
    """Raised by a transport when the cancellation signal fires mid-call."""


class Cancellation:
    """Cooperative cancellation flag.

    The caller sets it with ``cancel()`` from any coroutine on the same loop.
    The classifier reads ``requested`` before sending, and transports may
    ``await wait()`` to abandon an in-flight request.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def requested(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def __repr__(self) -> str:
        return f"Cancellation(requested={self.requested})"


@dataclass(frozen=True)
class CallRequest:
    """Identifying parameters of one call attempt."""

    id: str | None
    cancellation: Cancellation = field(default_factory=Cancellation)
