"""
Store bootstrap: migrate the operational store, migrate the configuration store, then seed
clients, identity resources and API scopes. Runs once per process start, before the host
accepts traffic. Any failure is fatal and propagates to the host.

    python -m auth_store.bootstrap    # same routine, exit status 1 on failure
"""
import logging
import sys
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from auth_store import config
from auth_store.catalog import BaselineCatalog, build_catalog
from auth_store.database import SessionLocal, ping
from auth_store.errors import BootstrapError, ConnectivityFailure, MigrationFailure
from auth_store.migrator import AlembicMigrator, SchemaMigrator, Store
from auth_store.models import ApiScope, Client, IdentityResource
from auth_store.seed import seed_if_empty

logger = logging.getLogger(__name__)


class BootstrapState(str, Enum):
    NOT_STARTED = "not_started"
    MIGRATING_OPERATIONAL = "migrating_operational"
    MIGRATING_CONFIGURATION = "migrating_configuration"
    SEEDING_CLIENTS = "seeding_clients"
    SEEDING_IDENTITY_RESOURCES = "seeding_identity_resources"
    SEEDING_API_SCOPES = "seeding_api_scopes"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class BootstrapReport:
    """Rows inserted per category by one run (0 = category was already populated)."""

    clients: int = 0
    identity_resources: int = 0
    api_scopes: int = 0

    @property
    def total(self) -> int:
        return self.clients + self.identity_resources + self.api_scopes


class Bootstrapper:
    """
    Owns one session for the whole run and closes it on every exit path.
    Not re-entrant: a Bootstrapper runs at most once.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        catalog: BaselineCatalog,
        migrator: SchemaMigrator | None = None,
    ):
        self.session_factory = session_factory
        self.catalog = catalog
        self.migrator = migrator or AlembicMigrator()
        self.state = BootstrapState.NOT_STARTED
        self.report: BootstrapReport | None = None

    def _enter(self, state: BootstrapState) -> None:
        logger.debug("Bootstrap: %s -> %s", self.state.value, state.value)
        self.state = state

    def _check_connectivity(self, db: Session) -> None:
        try:
            ping(db)
        except SQLAlchemyError as e:
            raise ConnectivityFailure(str(db.get_bind().url)) from e
        db.rollback()

    def _migrate(self, db: Session, state: BootstrapState, store: Store) -> None:
        self._enter(state)
        try:
            self.migrator.migrate(db, store)
        except BootstrapError:
            raise
        except Exception as e:
            # Pluggable migrators may raise anything; it is still a migration failure
            raise MigrationFailure(store.value, str(e)) from e

    def run(self) -> BootstrapReport:
        if self.state is not BootstrapState.NOT_STARTED:
            raise RuntimeError(f"Bootstrap already ran (state={self.state.value})")

        db = self.session_factory()
        try:
            self._check_connectivity(db)
            self._migrate(db, BootstrapState.MIGRATING_OPERATIONAL, Store.OPERATIONAL)
            self._migrate(db, BootstrapState.MIGRATING_CONFIGURATION, Store.CONFIGURATION)

            self._enter(BootstrapState.SEEDING_CLIENTS)
            clients = seed_if_empty(db, Client, self.catalog.clients())
            self._enter(BootstrapState.SEEDING_IDENTITY_RESOURCES)
            identity_resources = seed_if_empty(db, IdentityResource, self.catalog.identity_resources())
            self._enter(BootstrapState.SEEDING_API_SCOPES)
            api_scopes = seed_if_empty(db, ApiScope, self.catalog.api_scopes())
        except Exception:
            logger.exception("Store bootstrap failed during %s", self.state.value)
            self.state = BootstrapState.FAILED
            raise
        finally:
            db.close()

        self.report = BootstrapReport(
            clients=clients,
            identity_resources=identity_resources,
            api_scopes=api_scopes,
        )
        self._enter(BootstrapState.READY)
        logger.info(
            "Store bootstrap complete: seeded %d clients, %d identity resources, %d api scopes",
            clients,
            identity_resources,
            api_scopes,
        )
        return self.report


def bootstrap(
    session_factory: sessionmaker[Session],
    catalog: BaselineCatalog,
    migrator: SchemaMigrator | None = None,
) -> BootstrapReport:
    """Single entry point for the host. Raises BootstrapError if the stores are not usable."""
    return Bootstrapper(session_factory, catalog, migrator).run()


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        bootstrap(SessionLocal, build_catalog())
    except BootstrapError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
