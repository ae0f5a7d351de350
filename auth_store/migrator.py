"""
Schema migration for the two stores. Each store has its own Alembic script directory and
version table, so both can live on one database and still be migrated independently.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.orm import Session

from auth_store.errors import MigrationFailure

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


class Store(str, Enum):
    OPERATIONAL = "operational"
    CONFIGURATION = "configuration"

    @property
    def script_location(self) -> str:
        return str(MIGRATIONS_DIR / self.value)

    @property
    def version_table(self) -> str:
        return f"alembic_version_{self.value}"


class SchemaMigrator(Protocol):
    def migrate(self, db: Session, store: Store) -> None:
        """Apply every pending migration for the store, in order. No-op when already at head."""
        ...


def alembic_config(store: Store, connection=None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", store.script_location)
    if connection is not None:
        # env.py runs on this connection instead of opening its own engine
        cfg.attributes["connection"] = connection
    return cfg


def head_revision(store: Store) -> str | None:
    return ScriptDirectory.from_config(alembic_config(store)).get_current_head()


def _revision_on(connection, store: Store) -> str | None:
    context = MigrationContext.configure(connection, opts={"version_table": store.version_table})
    return context.get_current_revision()


def current_revision(db: Session, store: Store) -> str | None:
    """Revision recorded in the store's version table (None = nothing applied yet)."""
    return _revision_on(db.connection(), store)


class AlembicMigrator:
    """
    Upgrades a store to head on a dedicated connection. Each revision runs in its own
    transaction together with its version stamp, so a failing revision leaves the store
    at the previous revision and a later run resumes from there.
    """

    def migrate(self, db: Session, store: Store) -> None:
        # Release the session's connection; Alembic must not run inside its transaction
        db.commit()
        try:
            target = head_revision(store)
            with db.get_bind().connect() as connection:
                before = _revision_on(connection, store)
                connection.rollback()
                if before == target:
                    logger.debug("%s store already at %s", store.value, target)
                    return
                command.upgrade(alembic_config(store, connection), "head")
        except Exception as e:
            raise MigrationFailure(store.value, str(e)) from e
        logger.info("Migrated %s store: %s -> %s", store.value, before or "<empty>", target)
