from __future__ import annotations

import logging
from typing import Optional, Union

from fastapi import Response
from starlette.datastructures import MutableHeaders

logger = logging.getLogger(__name__)


class ResponseSink:
    """
    Per-request response object handlers write into.

    Mirrors a classic response writer:
      - `headers` may be edited until the status is committed.
      - `write_header(code)` commits status and headers; later calls are ignored.
      - `write(data)` appends to the body, committing 200 first if needed.

    `to_response()` turns the collected state into a Starlette Response.
    """

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self._status_code: Optional[int] = None
        self._committed_headers: Optional[MutableHeaders] = None
        self._body = bytearray()

    @property
    def status_code(self) -> Optional[int]:
        """Committed status code, or None while nothing has been written."""
        return self._status_code

    @property
    def committed(self) -> bool:
        return self._status_code is not None

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status_code: int) -> None:
        if self._status_code is not None:
            logger.warning(
                "Superfluous write_header(%d) call; status %d already committed",
                status_code,
                self._status_code,
            )
            return
        self._status_code = status_code
        self._committed_headers = MutableHeaders(raw=list(self.headers.raw))

    def write(self, data: Union[bytes, str]) -> int:
        if not self.committed:
            self.write_header(200)
        chunk = data.encode("utf-8", "replace") if isinstance(data, str) else bytes(data)
        self._body.extend(chunk)
        return len(chunk)

    def to_response(self) -> Response:
        """
        Build the Response sent to the client.

        A sink that was never written to yields an empty 200 response.
        """
        headers = self._committed_headers if self._committed_headers is not None else self.headers
        status_code = self._status_code or 200
        response = Response(content=bytes(self._body), status_code=status_code)

        raw = [(k, v) for k, v in headers.raw if k != b"content-length"]
        # No body length on informational, 204 and 304 responses
        if status_code >= 200 and status_code not in (204, 304):
            raw.append((b"content-length", str(len(self._body)).encode("latin-1")))
        response.raw_headers = raw
        return response
