"""HTTP status-code policy."""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional

from ..outcome import Failure, Retryable

TOO_MANY_REQUESTS = 429


def _status_text(code: int) -> str:
    try:
        phrase = HTTPStatus(code).phrase
    except ValueError:
        phrase = ""
    return f"status code:({code}){phrase}"


def is_success(code: int) -> bool:
    return 200 <= code <= 299


def is_retryable(code: int) -> bool:
    return code == TOO_MANY_REQUESTS or 500 <= code <= 599


def classify_status(code: int) -> Optional[Retryable | Failure]:
    """Return ``None`` for 2xx, otherwise the outcome for the status code.

    429 and 5xx are transient. Every other non-2xx code is permanent.
    """
    if is_success(code):
        return None
    if is_retryable(code):
        return Retryable(f"Retryable because the API returned {_status_text(code)}.")
    return Failure(f"Failed because the API returned {_status_text(code)}.")
