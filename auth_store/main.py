"""
Authorization server host. Only the startup path lives here: the stores are migrated and seeded
in the lifespan handler before the app accepts requests. A bootstrap failure aborts startup.
"""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from sqlalchemy.orm import Session

from auth_store.bootstrap import BootstrapState, Bootstrapper
from auth_store.catalog import build_catalog
from auth_store.database import SessionLocal, get_db
from auth_store.migrator import Store, current_revision


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Migrate both stores and seed the baseline configuration on startup."""
    bootstrapper = Bootstrapper(SessionLocal, build_catalog())
    app.state.bootstrapper = bootstrapper
    # Raises on failure; the server must not listen with an unusable store
    bootstrapper.run()
    yield


app = FastAPI(title="Auth Server", version="0.5.0", lifespan=lifespan)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    """Health check with bootstrap state and applied schema revision per store."""
    bootstrapper = getattr(app.state, "bootstrapper", None)
    state = bootstrapper.state if bootstrapper is not None else BootstrapState.NOT_STARTED
    return {
        "status": "ok" if state is BootstrapState.READY else "unavailable",
        "service": "auth_server",
        "bootstrap": state.value,
        "schema": {store.value: current_revision(db, store) for store in Store},
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "auth_store.main:app",
        host="127.0.0.1",
        port=9000,
        reload=True,
    )
