"""
Request context management for correlating log lines of one engine call.
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional
import structlog

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str = None) -> str:
    """
    Set the request ID for the current context.

    Args:
        request_id: Optional ID to use. If None, generates a UUID.

    Returns:
        The request ID that was set.
    """
    if request_id is None:
        request_id = str(uuid.uuid4())

    request_id_var.set(request_id)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    return request_id


def clear_request_context():
    """Clear the request context at end of request."""
    request_id_var.set(None)
    structlog.contextvars.clear_contextvars()


@contextmanager
def request_scope(request_id: str = None) -> Iterator[str]:
    """
    Bind a request ID for the duration of a block.

    Usage:
        with request_scope() as request_id:
            engine.analyze(text, "en")
    """
    request_id = set_request_id(request_id)
    try:
        yield request_id
    finally:
        clear_request_context()
