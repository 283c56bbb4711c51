"""Structured logging helpers shared by every layer of the notifier."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that keeps the component field next to per-call extras."""

    def process(self, msg, kwargs):
        """Merge the adapter's fields with the ``extra`` of a single call.

        Fields passed on the call win over the adapter defaults.
        """
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a logger, tagged with ``component`` when one is given.

    Args:
        name: Logger name (usually ``__name__``)
        component: Component label added to every record (e.g. "dispatch")

    Returns:
        A plain logger, or a ComponentLoggerAdapter when component is set

    Example:
        >>> logger = get_logger(__name__, component="operation")
        >>> logger.info("Operation started", extra={"event": "operation.started"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
