from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from fastapi import Request, Response
from fastapi.concurrency import run_in_threadpool

from httperr.common.responses import DEFAULT_ERROR_WRITER, ErrorWriter, text_error_writer
from httperr.common.sink import ResponseSink
from httperr.common.status import resolve_status

logger = logging.getLogger(__name__)

HandlerResult = Optional[BaseException]

# (sink, request) -> optional error; may be sync or async
ErrorHandler = Callable[
    [ResponseSink, Request],
    Union[HandlerResult, Awaitable[HandlerResult]],
]
StatusResolver = Callable[[Optional[BaseException]], int]
Endpoint = Callable[[Request], Awaitable[Response]]


def _handler_name(handler: ErrorHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


def wrap_handler(
    handler: ErrorHandler,
    error_writer: ErrorWriter = DEFAULT_ERROR_WRITER,
    *,
    resolver: StatusResolver = resolve_status,
) -> Endpoint:
    """
    Convert an error-returning handler into a standard Starlette endpoint.

    - Handler returns None: its own writes to the sink are the response.
    - Handler returns an error: `error_writer` writes it with the resolved status.

    Exceptions raised by the handler are not caught here.
    """
    is_async = inspect.iscoroutinefunction(handler)
    name = _handler_name(handler)

    async def endpoint(request: Request) -> Response:
        sink = ResponseSink()
        if is_async:
            err = await handler(sink, request)
        else:
            err = await run_in_threadpool(handler, sink, request)
            # callable objects with an async __call__
            if inspect.isawaitable(err):
                err = await err

        if err is not None:
            if not isinstance(err, BaseException):
                raise TypeError(f"Handler {name} returned {type(err).__name__}, expected an exception or None.")
            code = resolver(err)
            level = logging.ERROR if code >= 500 else logging.INFO
            logger.log(level, "%s %s -> %d: %s", request.method, name, code, err)
            error_writer(sink, err, code)

        return sink.to_response()

    endpoint.__name__ = getattr(handler, "__name__", "endpoint")
    endpoint.__doc__ = handler.__doc__
    return endpoint


def std_handler(handler: ErrorHandler) -> Endpoint:
    """Wrap `handler` with the default resolver and the plain-text writer."""
    return wrap_handler(handler, text_error_writer)
