from __future__ import annotations

import re
from typing import Any, Callable, Dict

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from httperr.common.sink import ResponseSink

# Writes one error response: (sink, error, status code) -> None
ErrorWriter = Callable[[ResponseSink, BaseException, int], None]

# Lone surrogates (e.g. from os.fsdecode) have no UTF-8 encoding
_SURROGATES = re.compile("[\ud800-\udfff]")


def error_message(err: BaseException) -> str:
    """
    Message of `err` safe to encode as UTF-8; unencodable characters become U+FFFD.
    """
    return _SURROGATES.sub("\ufffd", str(err))


def error_payload(err: BaseException, code: int) -> Dict[str, Any]:
    """
    Standard JSON error body.
    """
    return {"error": error_message(err), "status": code}


def text_error_writer(sink: ResponseSink, err: BaseException, code: int) -> None:
    """
    Reply with the error message as plain text followed by a newline.
    """
    h = sink.headers
    if "content-length" in h:
        del h["content-length"]
    h["Content-Type"] = "text/plain; charset=utf-8"
    h["X-Content-Type-Options"] = "nosniff"
    sink.write_header(code)
    sink.write(f"{error_message(err)}\n")


def json_error_writer(sink: ResponseSink, err: BaseException, code: int) -> None:
    """
    Reply with {"error": <message>, "status": <code>} and a trailing newline.
    """
    h = sink.headers
    # Body size is unknown until encoded
    if "content-length" in h:
        del h["content-length"]
    h["Content-Type"] = "application/json; charset=utf-8"
    h["X-Content-Type-Options"] = "nosniff"
    sink.write_header(code)
    rendered = JSONResponse(content=jsonable_encoder(error_payload(err, code)))
    sink.write(rendered.body + b"\n")


DEFAULT_ERROR_WRITER: ErrorWriter = text_error_writer

_WRITERS: Dict[str, ErrorWriter] = {
    "text": text_error_writer,
    "json": json_error_writer,
}


def get_error_writer(name: str) -> ErrorWriter:
    """Get an error writer by name."""
    if name not in _WRITERS:
        raise ValueError(f"Unknown error writer: {name}. Available: {', '.join(_WRITERS)}")
    return _WRITERS[name]
