"""Helpers shared by the API routers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

from tasktracker.app.core.errors import ApiError, RecordNotFoundError
from tasktracker.app.core.ids import parse_row_id

logger = logging.getLogger(__name__)


def parse_id(raw: str, message: str) -> int:
    """Parse a path id; anything that is not an in-range integer is a 400."""

    value = parse_row_id(raw)
    if value is None:
        raise ApiError(400, message)
    return value


def require_text(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise ApiError(400, message)
    return value


@contextmanager
def store_call(message: str) -> Iterator[None]:
    """Turn store failures raised inside the block into a 500 carrying the raw error."""

    try:
        yield
    except (SQLAlchemyError, RecordNotFoundError) as exc:
        logger.exception(message)
        raise ApiError(500, message, details=str(exc)) from exc
