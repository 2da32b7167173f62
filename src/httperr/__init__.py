"""
httperr

Let HTTP handlers return errors instead of writing error responses, and turn
those errors into responses with the status code they carry.
"""

from __future__ import annotations

from httperr.common.errors import (
    HTTPStatusError,
    RouteConflictError,
    StatusError,
    bad_request,
    forbidden,
    internal,
    new,
    not_found,
    unauthorized,
    with_status,
)
from httperr.common.responses import (
    DEFAULT_ERROR_WRITER,
    ErrorWriter,
    get_error_writer,
    json_error_writer,
    text_error_writer,
)
from httperr.common.sink import ResponseSink
from httperr.common.status import resolve_status
from httperr.handlers.adapter import ErrorHandler, std_handler, wrap_handler
from httperr.handlers.router import ErrorRouter
from httperr.settings import Settings

__all__ = [
    "DEFAULT_ERROR_WRITER",
    "ErrorHandler",
    "ErrorRouter",
    "ErrorWriter",
    "HTTPStatusError",
    "ResponseSink",
    "RouteConflictError",
    "Settings",
    "StatusError",
    "__version__",
    "bad_request",
    "forbidden",
    "get_error_writer",
    "internal",
    "json_error_writer",
    "new",
    "not_found",
    "resolve_status",
    "std_handler",
    "text_error_writer",
    "unauthorized",
    "with_status",
]

__version__ = "0.1.0"
