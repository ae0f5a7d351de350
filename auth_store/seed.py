"""
Idempotent seeding of the configuration store.
A category is seeded only when it has no rows at all; populated categories are never touched.
"""
import logging
from typing import Iterable, Protocol

import bcrypt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from auth_store.errors import SeedWriteFailure

logger = logging.getLogger(__name__)


class SeedItem(Protocol):
    def to_row(self): ...


def hash_secret(secret: str) -> str:
    # Bcrypt has a 72-byte limit
    raw = secret.encode("utf-8")
    if len(raw) > 72:
        raw = raw[:72]
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def category_name(category) -> str:
    return getattr(category, "__tablename__", category.__name__)


def has_rows(db: Session, category) -> bool:
    return db.query(category).first() is not None


def seed_if_empty(db: Session, category, items: Iterable[SeedItem]) -> int:
    """
    Insert every item of the baseline sequence in one commit if the category is empty.
    Returns the number of rows inserted (0 when the category already had rows).
    An emptied category is indistinguishable from a never-seeded one and is seeded again.
    """
    name = category_name(category)
    try:
        if has_rows(db, category):
            logger.debug("Category %s already populated; skipping seed", name)
            return 0
        rows = [item.to_row() for item in items]
        db.add_all(rows)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise SeedWriteFailure(name, str(e)) from e
    logger.info("Seeded %d %s", len(rows), name)
    return len(rows)
