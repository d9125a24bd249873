"""Call classification: transport errors, status codes and payloads to outcomes."""

from .classifier import BufferedResponse, Parser, ResponseEnvelope, Transport, classify
from .rules import TRANSPORT_RULES, ErrorRule, classify_error
from .status import classify_status

__all__ = [
    "BufferedResponse",
    "ErrorRule",
    "Parser",
    "ResponseEnvelope",
    "TRANSPORT_RULES",
    "Transport",
    "classify",
    "classify_error",
    "classify_status",
]
