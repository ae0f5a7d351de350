"""
Database engine and session factory for both stores. One connection target, two schemas.
"""
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from auth_store.config import DATABASE_URL


def _transactional_sqlite_ddl(engine: Engine) -> None:
    """pysqlite commits DDL on its own; hand BEGIN/COMMIT to SQLAlchemy so a failed migration rolls back."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def make_engine(url: str = DATABASE_URL) -> Engine:
    """Build an engine for the store connection target."""
    if not url.startswith("sqlite"):
        return create_engine(url)
    # SQLite: in-memory needs StaticPool so all connections share the same DB (for tests)
    # File-based SQLite needs check_same_thread=False for FastAPI
    if url in ("sqlite://", "sqlite:///:memory:") or url.startswith("sqlite:///:memory:"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, connect_args={"check_same_thread": False})
    _transactional_sqlite_ddl(engine)
    return engine


def make_session_factory(bind: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = make_engine(DATABASE_URL)
SessionLocal = make_session_factory(engine)


def ping(db: Session) -> None:
    """Round-trip to the store. Raises the driver error if it is unreachable."""
    db.execute(text("SELECT 1"))


def get_db():
    """Dependency: yield a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
