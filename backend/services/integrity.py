# backend/services/integrity.py
import logging
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from utils.errors import DuplicateEntry

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation on PostgreSQL
PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    # SQLite: "UNIQUE constraint failed: users.email"
    return "unique constraint" in str(exc.orig).lower()


def violated_field(exc: IntegrityError, fields: Iterable[str]) -> Optional[str]:
    """Best-effort name of the column behind a unique violation.

    PostgreSQL reports ``Key (email)=(...)``, SQLite ``table.email``.
    """
    text = str(exc.orig).lower()
    for field in fields:
        if f"({field})" in text or f".{field}" in text:
            return field
    return None


def commit_or_duplicate(db: Session, message: str, fields: Iterable[str]) -> None:
    """Commit, turning a unique-constraint failure into ``DuplicateEntry``.

    The store decides uniqueness races; there is no existence pre-check.
    """
    fields = tuple(fields)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not is_unique_violation(exc):
            raise
        field = violated_field(exc, fields)
        logger.info("duplicate rejected on %s", field or "unknown field")
        raise DuplicateEntry(message, field=field) from exc
