from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from fastapi import APIRouter
from starlette.routing import BaseRoute
from starlette.types import Receive, Scope, Send

from httperr.common.errors import RouteConflictError
from httperr.common.responses import DEFAULT_ERROR_WRITER, ErrorWriter, get_error_writer
from httperr.common.status import resolve_status
from httperr.handlers.adapter import ErrorHandler, StatusResolver, wrap_handler
from httperr.settings import Settings

logger = logging.getLogger(__name__)

_METHOD_RE = re.compile(r"^[A-Z]+$")
# "{name}" or "{name:convertor}"; the name does not affect matching
_PARAM_RE = re.compile(r"\{[^}:]*(?::([^}]*))?\}")

# Methods a method-less pattern answers to
ANY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]

RouteKey = Tuple[Optional[str], str]


def parse_pattern(pattern: str) -> Tuple[Optional[str], str]:
    """
    Split "[METHOD ]/path" into (method or None, path).

    >>> parse_pattern("GET /items/{id}")
    ('GET', '/items/{id}')
    """
    parts = pattern.strip().split(None, 1)
    if not parts:
        raise ValueError("Empty route pattern.")

    if len(parts) == 2:
        method, path = parts[0], parts[1].strip()
        if not _METHOD_RE.match(method):
            raise ValueError(f"Invalid method {method!r} in route pattern {pattern!r}.")
    else:
        method, path = None, parts[0]

    if not path.startswith("/"):
        raise ValueError(f"Route path must start with '/': {pattern!r}.")
    return method, path


def _route_key(method: Optional[str], path: str) -> RouteKey:
    # a bare placeholder uses the default "str" convertor
    return method, _PARAM_RE.sub(lambda m: "{:" + (m.group(1) or "str") + "}", path)


class ErrorRouter:
    """
    Routing table whose handlers return errors instead of writing them.

    Every registered handler is wrapped with the same error writer. The table
    is an ASGI app: matching, 404 and 405 are left to the underlying
    APIRouter. Register all routes before serving requests.
    """

    def __init__(
        self,
        error_writer: ErrorWriter = DEFAULT_ERROR_WRITER,
        *,
        resolver: StatusResolver = resolve_status,
    ) -> None:
        self._router = APIRouter()
        self._error_writer = error_writer
        self._resolver = resolver
        self._patterns: Dict[RouteKey, str] = {}
        # routes created here, in registration order
        self._entries: List[Tuple[BaseRoute, RouteKey]] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "ErrorRouter":
        resolver = functools.partial(resolve_status, max_depth=settings.MAX_UNWRAP_DEPTH)
        return cls(get_error_writer(settings.ERROR_WRITER), resolver=resolver)

    @property
    def router(self) -> APIRouter:
        """Underlying APIRouter, e.g. for `app.include_router(...)`."""
        return self._router

    @property
    def error_writer(self) -> ErrorWriter:
        return self._error_writer

    @property
    def patterns(self) -> List[str]:
        return list(self._patterns.values())

    def add_route(self, pattern: str, handler: ErrorHandler, *, name: Optional[str] = None) -> None:
        """
        Register `handler` under `pattern` ("GET /items/{id}" or "/items/{id}").

        A pattern without a method answers every method. For the same path,
        method-specific routes are tried before the method-less one whatever
        the registration order, and an explicit "HEAD" route is tried before
        the "GET" route that would otherwise answer HEAD too.

        Raises RouteConflictError if an equivalent pattern is already registered.
        """
        method, path = parse_pattern(pattern)
        key = _route_key(method, path)
        if key in self._patterns:
            raise RouteConflictError(
                f"Pattern {pattern!r} conflicts with registered pattern {self._patterns[key]!r}."
            )

        endpoint = wrap_handler(handler, self._error_writer, resolver=self._resolver)
        self._router.add_route(
            path,
            endpoint,
            methods=[method] if method else ANY_METHODS,
            name=name or getattr(handler, "__name__", None),
        )
        route = self._router.routes[-1]
        position = self._insert_position(key)
        if position is not None:
            self._router.routes.pop()
            self._router.routes.insert(position, route)

        self._entries.append((route, key))
        self._patterns[key] = pattern
        logger.debug("Registered route %r -> %s", pattern, endpoint.__name__)

    def _insert_position(self, key: RouteKey) -> Optional[int]:
        """Index of the first registered route `key` must precede, if any."""
        method, shape = key
        if method is None:
            return None
        ahead = [
            route
            for route, (other_method, other_shape) in self._entries
            if other_shape == shape
            and (other_method is None or (method == "HEAD" and other_method == "GET"))
        ]
        positions = [i for i, r in enumerate(self._router.routes) if any(r is route for route in ahead)]
        return min(positions) if positions else None

    def route(self, pattern: str, *, name: Optional[str] = None) -> Callable[[ErrorHandler], ErrorHandler]:
        """Decorator form of `add_route`."""

        def decorator(handler: ErrorHandler) -> ErrorHandler:
            self.add_route(pattern, handler, name=name)
            return handler

        return decorator

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._router(scope, receive, send)
