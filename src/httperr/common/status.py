from __future__ import annotations

from typing import Iterator, List, Optional, Set

from httperr.common.errors import HTTPStatusError

NO_STATUS = 0
DEFAULT_STATUS = 500
DEFAULT_MAX_DEPTH = 100


def _causes(err: BaseException) -> Iterator[BaseException]:
    """Errors directly wrapped by `err`, outermost relation first."""
    if err.__cause__ is not None:
        yield err.__cause__
    if isinstance(err, BaseExceptionGroup):
        yield from err.exceptions


def _carried_status(err: BaseException) -> Optional[int]:
    if not isinstance(err, HTTPStatusError):
        return None
    code = err.status_code
    # bool is an int subclass but never a status
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return None


def resolve_status(err: Optional[BaseException], *, max_depth: int = DEFAULT_MAX_DEPTH) -> int:
    """
    Extract the HTTP status code from `err`.

    - None -> 0 (no error, no status).
    - The first error in the wrap chain carrying a status code wins; the chain
      is searched depth-first through __cause__ and exception group members.
      __context__ ("raised while handling") is not a wrap and is not followed.
    - Otherwise 500.

    Each error is visited once and at most `max_depth` errors are inspected,
    so cyclic chains terminate.
    """
    if err is None:
        return NO_STATUS

    stack: List[BaseException] = [err]
    seen: Set[int] = set()
    while stack and len(seen) < max_depth:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))

        code = _carried_status(current)
        if code is not None:
            return code

        # reversed so the first cause is popped first
        stack.extend(reversed(list(_causes(current))))

    return DEFAULT_STATUS
