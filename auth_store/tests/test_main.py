"""
Tests for the host startup path: bootstrap runs in the lifespan and a failure aborts startup.
"""
import pytest
from fastapi.testclient import TestClient

from auth_store import main as main_module
from auth_store.database import SessionLocal, make_engine, make_session_factory
from auth_store.errors import ConnectivityFailure
from auth_store.main import app
from auth_store.migrator import Store, head_revision
from auth_store.models import ApiScope, Client, IdentityResource


def test_startup_bootstraps_and_reports_ready():
    with TestClient(app) as client:
        r = client.get("/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "ok"
        assert data["bootstrap"] == "ready"
        assert data["schema"] == {
            "operational": head_revision(Store.OPERATIONAL),
            "configuration": head_revision(Store.CONFIGURATION),
        }

    db = SessionLocal()
    try:
        assert db.query(Client).count() == 2
        assert db.query(IdentityResource).count() == 3
        assert db.query(ApiScope).count() == 2
    finally:
        db.close()


def test_restart_does_not_duplicate_baseline():
    for _ in range(2):
        with TestClient(app) as client:
            assert client.get("/health").json()["bootstrap"] == "ready"
    db = SessionLocal()
    try:
        assert db.query(Client).count() == 2
    finally:
        db.close()


def test_bootstrap_failure_aborts_startup(tmp_path, monkeypatch):
    """The app never serves when the store is unreachable."""
    unreachable = make_session_factory(make_engine(f"sqlite:///{tmp_path / 'nope' / 'auth.db'}"))
    monkeypatch.setattr(main_module, "SessionLocal", unreachable)
    with pytest.raises(ConnectivityFailure):
        with TestClient(app):
            pass
    assert app.state.bootstrapper.state.value == "failed"
