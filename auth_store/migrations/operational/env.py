"""Alembic environment for the operational store (persisted grants, device codes)."""
from alembic import context
from sqlalchemy import create_engine, pool

from auth_store.config import DATABASE_URL
from auth_store.migrator import Store
from auth_store.models import OperationalBase

config = context.config

target_metadata = OperationalBase.metadata
VERSION_TABLE = Store.OPERATIONAL.version_table


def include_object(obj, name, type_, reflected, compare_to):
    # The configuration store shares this database; leave its tables alone
    if type_ == "table" and reflected and compare_to is None:
        return name in target_metadata.tables
    return True


def _database_url() -> str:
    return config.get_main_option("sqlalchemy.url") or DATABASE_URL


def run_migrations_offline() -> None:
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        version_table=VERSION_TABLE,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def _run_on(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        version_table=VERSION_TABLE,
        include_object=include_object,
        transaction_per_migration=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_on(connection)
        return

    connectable = create_engine(_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _run_on(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
