"""Logging setup shared by the API server and the console."""

import logging
from typing import Optional

from tasktracker.app.config import get_settings

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s "
    "entity=%(entity)s id=%(entity_id)s op=%(op)s elapsed_ms=%(elapsed_ms)s "
    "%(message)s"
)
ENTITY_FIELDS = ("entity", "entity_id", "op", "elapsed_ms")
FOLLOWER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_configured = False


class EntityFormatter(logging.Formatter):
    """Renders entity extras, printing "-" for the ones a record did not set."""

    def format(self, record: logging.LogRecord) -> str:
        for name in ENTITY_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, "-")
        return super().format(record)


def resolve_level(level: Optional[str] = None) -> int:
    name = (level or get_settings().log_level).upper()
    value = getattr(logging, name, None)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> None:
    """Install the entity-aware handler once; ``level`` overrides the configured one."""

    global _configured
    if _configured:
        return

    resolved = resolve_level(level)
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(EntityFormatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(resolved)

    for name in FOLLOWER_LOGGERS:
        follower = logging.getLogger(name)
        follower.setLevel(resolved)
        follower.propagate = False

    _configured = True
