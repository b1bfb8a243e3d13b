from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from core.exceptions import ConcurrencyError, NotFoundError

logger = logging.getLogger(__name__)


def update_with_version_check(
    session: Session,
    orm_type: type[Any],
    row_id: str,
    expected_version: int,
    values: dict[str, Any],
    *,
    not_found_message: str,
    stale_message: str,
    not_found_code: str = "NOT_FOUND",
) -> int:
    """Compare-and-set on the version column; returns the new version."""
    next_version = int(expected_version) + 1
    stmt = (
        update(orm_type)
        .where(orm_type.id == row_id, orm_type.version == expected_version)
        .values(**values, version=next_version)
    )
    result = session.execute(stmt)
    if result.rowcount == 1:
        return next_version

    current = session.get(orm_type, row_id)
    if current is None:
        raise NotFoundError(not_found_message, code=not_found_code)
    logger.warning(
        "Stale write on %s %s: expected version %s, stored %s",
        orm_type.__tablename__,
        row_id,
        expected_version,
        current.version,
    )
    raise ConcurrencyError(stale_message, code="STALE_WRITE")
