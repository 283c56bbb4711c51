"""Scoped logging context.

Fields pushed here (reseller_id, notification_type, channel...) are attached to
every record emitted inside the scope by ``ContextualFilter``. Storage uses
``contextvars`` so nested scopes restore cleanly.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the active context.

    Returns:
        Token for ``pop_log_context`` to restore the previous state
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context saved by ``push_log_context``."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field (used by tests)."""
    LogContextVar.set({})


class log_context:
    """Context manager pushing fields for the duration of a block.

    Example:
        >>> with log_context(reseller_id=1, notification_type="CHANGE"):
        ...     logger.info("Dispatching")
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
