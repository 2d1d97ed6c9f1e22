# src/certificate_checker/core.py

"""
Core greeting logic for the Certificate Checker function.

Kept free of Powertools wiring so it can be exercised directly: the handler
in `app.py` only adds logging, tracing and metrics around these calls.
"""

import logging
import sys
from typing import Any, TextIO

from .exceptions import InvocationContextError, get_error_context
from .schemas import InvocationContext

logger = logging.getLogger(__name__)

GREETING_TEMPLATE = "Hello {request_id}n"


def resolve_invocation(context: Any) -> InvocationContext:
    """
    Reads the invocation context. When the metadata cannot be read, falls
    back to a snapshot holding only the request id (or "" if that is
    unusable too). Never raises.
    """
    try:
        return InvocationContext.from_lambda_context(context)
    except InvocationContextError as e:
        fallback = InvocationContext.from_request_id_only(context)
        logger.warning(
            "Invocation context unreadable; continuing with the request id only.",
            extra={
                "error": get_error_context(e),
                "request_id_present": bool(fallback.aws_request_id),
            },
        )
        return fallback


def extract_request_id(context: Any) -> str:
    """Returns the invocation's request id, or an empty string."""
    return resolve_invocation(context).aws_request_id


def format_greeting(request_id: str) -> str:
    # The trailing "n" is part of the published output format.
    return GREETING_TEMPLATE.format(request_id=request_id)


def emit_greeting(request_id: str, stream: TextIO | None = None) -> str:
    """Writes the greeting as a single line and returns it."""
    greeting = format_greeting(request_id)
    print(greeting, file=stream if stream is not None else sys.stdout, flush=True)
    return greeting
