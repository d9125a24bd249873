"""ytlive - YouTube live streaming details client.

Every API call resolves to one of three outcomes: Success, Retryable or
Failure. Callers decide whether to re-issue a call from the outcome variant.
"""

__version__ = "0.1.0"

# Lazy imports keep ``import ytlive`` free of httpx/pydantic start-up cost.
def __getattr__(name: str):
    """Lazy import module components."""
    if name in ("Outcome", "Success", "Retryable", "Failure", "match"):
        from . import outcome
        return getattr(outcome, name)
    if name in ("CallRequest", "Cancellation"):
        from . import request
        return getattr(request, name)
    if name == "classify":
        from .classify import classify
        return classify
    if name in ("LiveStreamingDetails", "get_live_streaming_details"):
        from . import api
        return getattr(api, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "Outcome",
    "Success",
    "Retryable",
    "Failure",
    "match",
    "CallRequest",
    "Cancellation",
    "classify",
    "LiveStreamingDetails",
    "get_live_streaming_details",
]
