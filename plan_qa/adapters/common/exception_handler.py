"""Exception formatting shared by the HTTP API and the CLI.

Both inbound adapters turn exceptions into the same structured dictionary,
log them the same way, and (for HTTP) pick the status from the error kind.
"""

import json
import logging
import traceback
from typing import Any

from ...core.domain.exceptions import ErrorKind, PlanQAError

logger = logging.getLogger(__name__)


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Format any exception as structured JSON.

    Works with both :class:`PlanQAError` and standard Python exceptions.

    Args:
        exc: The exception to format.
        include_trace: If True, include the full stack trace.
        extra_context: Additional context to include in output.

    Returns:
        Dictionary with structured error information.
    """
    if isinstance(exc, PlanQAError):
        result = exc.to_dict(include_trace=include_trace)
        if extra_context:
            result["context"] = {**result.get("context", {}), **extra_context}
        return result

    tb = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last_frame = tb[-1] if tb else None

    result: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": "PYTHON_ERR",
            "kind": ErrorKind.INTERNAL.value,
            "message": str(exc),
        },
        "location": {
            "class": "<unknown>",
            "method": last_frame.name if last_frame else "<unknown>",
            "file": (
                last_frame.filename.split("\\")[-1].split("/")[-1] if last_frame else "<unknown>"
            ),
            "line": last_frame.lineno if last_frame else 0,
        },
    }

    if extra_context:
        result["context"] = extra_context

    if include_trace:
        result["stack_trace"] = [
            line.strip()
            for line in traceback.format_exception(type(exc), exc, exc.__traceback__)
            if line.strip()
        ]

    return result


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int | None = None,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log an exception as structured JSON.

    Invalid input is logged at WARNING, everything else at ERROR, unless
    ``level`` is given.
    """
    log_instance = log or logger
    if level is None:
        level = logging.WARNING if get_error_kind(exc) is ErrorKind.INVALID_INPUT else logging.ERROR

    exc_data = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    log_instance.log(level, json.dumps(exc_data, indent=2))


def get_error_kind(exc: Exception) -> ErrorKind:
    if isinstance(exc, PlanQAError):
        return exc.kind
    if isinstance(exc, ValueError):
        return ErrorKind.INVALID_INPUT
    return ErrorKind.INTERNAL


def get_error_code(exc: Exception) -> str:
    """Error code of an exception (``"PYTHON_ERR"`` for standard ones)."""
    if isinstance(exc, PlanQAError):
        return exc.error_code
    return "PYTHON_ERR"


def get_http_status_code(exc: Exception) -> int:
    """Map an exception to an HTTP status code.

    Invalid input maps to 4xx; missing configuration and upstream failures
    map to 5xx (429/504 for rate limits and timeouts).
    """
    if isinstance(exc, PlanQAError):
        return exc.http_status
    if isinstance(exc, ValueError):
        return 400
    if isinstance(exc, ConnectionError | TimeoutError):
        return 503
    return 500
