"""
Pytest configuration for auth_store. Use in-memory SQLite so tests don't touch the filesystem.
"""
import os

import pytest
from sqlalchemy import event

# In-memory SQLite; database.py uses StaticPool so all connections share the same DB
os.environ["AUTH_DATABASE_URL"] = "sqlite:///:memory:"
# Client secrets are hashed with bcrypt at catalog build time; keep tests fast and deterministic
for _name in ("OAUTH_M2M_CLIENT_SECRET", "OAUTH_INTERACTIVE_CLIENT_SECRET"):
    if _name in os.environ:
        del os.environ[_name]

from auth_store.catalog import build_catalog  # noqa: E402
from auth_store.database import make_engine, make_session_factory  # noqa: E402


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    eng = make_engine("sqlite://")
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog():
    return build_catalog(m2m_client_secret=None, interactive_client_secret=None)


@pytest.fixture
def statements(engine):
    """Every SQL statement sent to the engine, in order."""
    seen: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    yield seen
    event.remove(engine, "before_cursor_execute", _record)


@pytest.fixture
def writes(statements):
    """INSERT/UPDATE/DELETE statements that touched a given table."""

    def _writes(table: str) -> list[str]:
        out = []
        for s in statements:
            head = s.lstrip().upper()
            if head.startswith(("INSERT", "UPDATE", "DELETE")) and table.upper() in head:
                out.append(s)
        return out

    return _writes
