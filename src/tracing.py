"""Optional trace hook for the layout engine."""

import logging
from typing import Any, Callable

Tracer = Callable[[str, dict[str, Any]], None]

logger = logging.getLogger("famlayout")


def logging_tracer(event: str, fields: dict[str, Any]) -> None:
    """Default tracer: one DEBUG record per engine event."""
    if logger.isEnabledFor(logging.DEBUG):
        detail = " ".join(f"{k}={v!r}" for k, v in fields.items())
        logger.debug("%s %s", event, detail)


def emit(tracer: Tracer | None, event: str, **fields: Any) -> None:
    if tracer is not None:
        tracer(event, fields)
