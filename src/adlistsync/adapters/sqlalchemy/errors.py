"""Translation of SQLAlchemy failures into the domain error taxonomy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from adlistsync.domain.errors import StoreError

if TYPE_CHECKING:
    from collections.abc import Iterator


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreError(f"{action} failed: {exc}") from exc
