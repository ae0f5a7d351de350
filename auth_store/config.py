"""
Store bootstrap configuration. One database URL backs both the configuration and operational stores.
No secrets in this file; client secrets come from env and are hashed before they reach the store.
"""
import os


def _normalize_database_url(raw: str) -> str:
    raw = raw.strip()
    # Some platforms still provide postgres://; SQLAlchemy expects postgresql://
    if raw.startswith("postgres://"):
        raw = raw.replace("postgres://", "postgresql://", 1)
    return raw


def _split_uris(value: str) -> tuple[str, ...]:
    return tuple(u.strip() for u in value.split(",") if u.strip())


# Shared connection target for both stores (SQLite for development)
DATABASE_URL = _normalize_database_url(os.environ.get("AUTH_DATABASE_URL", "sqlite:///./auth_server.db"))

# Machine-to-machine client (client_credentials)
M2M_CLIENT_ID = os.environ.get("OAUTH_M2M_CLIENT_ID", "m2m.client")
M2M_CLIENT_SECRET = os.environ.get("OAUTH_M2M_CLIENT_SECRET") or None

# Interactive web client (authorization_code + PKCE); redirect URIs comma-separated
INTERACTIVE_CLIENT_ID = os.environ.get("OAUTH_INTERACTIVE_CLIENT_ID", "interactive")
INTERACTIVE_CLIENT_SECRET = os.environ.get("OAUTH_INTERACTIVE_CLIENT_SECRET") or None
INTERACTIVE_REDIRECT_URIS = _split_uris(
    os.environ.get("OAUTH_INTERACTIVE_REDIRECT_URIS", "http://127.0.0.1:8000/callback")
)
INTERACTIVE_POST_LOGOUT_REDIRECT_URIS = _split_uris(
    os.environ.get("OAUTH_INTERACTIVE_POST_LOGOUT_REDIRECT_URIS", "http://127.0.0.1:8000/logged-out")
)

# Used by the command-line entry point only; the web host leaves logging to uvicorn
LOG_LEVEL = os.environ.get("AUTH_LOG_LEVEL", "INFO").strip().upper()
