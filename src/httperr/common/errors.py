from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HTTPStatusError(Protocol):
    """
    Capability of an error that declares the HTTP status to respond with.

    Any exception exposing an integer `status_code` qualifies, including
    FastAPI/Starlette `HTTPException`.
    """
    status_code: int


class StatusError(Exception):
    """
    Error carrying the HTTP status code used when it is written as a response.

    status_code is not range-checked:
      - Use 4xx for client errors.
      - Use 5xx for server errors.
    """

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status_code={self.status_code})"


class RouteConflictError(ValueError):
    """Raised when a route pattern conflicts with one already registered."""


def with_status(err: BaseException, code: int) -> StatusError:
    """
    Embed an HTTP status code into an existing error.

    The message of `err` is kept and `err` stays reachable as `__cause__`.
    """
    wrapped = StatusError(str(err), code)
    wrapped.__cause__ = err
    return wrapped


def new(message: str, code: int) -> StatusError:
    """Create a new error with a custom HTTP status code."""
    return StatusError(message, code)


# Convenience constructors
def bad_request(message: str) -> StatusError:
    return StatusError(message, 400)


def unauthorized(message: str) -> StatusError:
    return StatusError(message, 401)


def forbidden(message: str) -> StatusError:
    return StatusError(message, 403)


def not_found(message: str) -> StatusError:
    return StatusError(message, 404)


def internal(message: str) -> StatusError:
    return StatusError(message, 500)
