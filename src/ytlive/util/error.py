"""Error formatting utilities.

Turns exceptions into the one-line diagnostic text carried by outcome
reasons and log records.
"""

import json
from typing import Any

_MAX_CAUSE_DEPTH = 10


def describe_error(error: Any) -> str:
    """Format an error as ``Type: message`` followed by its cause chain.

    Non-exception values are rendered as JSON where possible.
    """
    if isinstance(error, BaseException):
        parts = []
        current: BaseException | None = error
        depth = 0
        while current is not None and depth < _MAX_CAUSE_DEPTH:
            text = str(current)
            name = current.__class__.__name__
            parts.append(f"{name}: {text}" if text else name)
            current = current.__cause__ or (
                None if current.__suppress_context__ else current.__context__
            )
            depth += 1
        return " Caused by: ".join(parts)

    if isinstance(error, (dict, list)):
        try:
            return json.dumps(error, ensure_ascii=False)
        except (TypeError, ValueError):
            return "Unexpected error (unserializable)"

    return str(error)
