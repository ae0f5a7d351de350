"""
SQLAlchemy models for the two stores behind the authorization server.
Configuration store: clients, identity resources, API scopes.
Operational store: persisted grants and device codes written by the token runtime.
Each store has its own declarative base so it is migrated as an independent unit.
"""
import json
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ConfigurationBase(DeclarativeBase):
    pass


class OperationalBase(DeclarativeBase):
    pass


class Client(ConfigurationBase):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    client_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    # JSON arrays stored as text; order of redirect URIs is preserved
    allowed_grant_types: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    allowed_scopes: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    redirect_uris: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    post_logout_redirect_uris: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    # bcrypt hashes only; empty list = public client
    client_secret_hashes: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    require_pkce: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    allow_offline_access: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    def get_grant_types_list(self) -> list[str]:
        return json.loads(self.allowed_grant_types)

    def get_scopes_list(self) -> list[str]:
        return json.loads(self.allowed_scopes)

    def get_redirect_uris_list(self) -> list[str]:
        return json.loads(self.redirect_uris)

    def get_secret_hashes_list(self) -> list[str]:
        return json.loads(self.client_secret_hashes)

    @property
    def is_confidential(self) -> bool:
        return len(self.get_secret_hashes_list()) > 0


class IdentityResource(ConfigurationBase):
    __tablename__ = "identity_resources"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    display_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    claims: Mapped[str] = mapped_column(Text, nullable=False, default="[]")  # JSON array of claim types
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    def get_claims_list(self) -> list[str]:
        return json.loads(self.claims)


class ApiScope(ConfigurationBase):
    __tablename__ = "api_scopes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    display_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)


class PersistedGrant(OperationalBase):
    """Refresh tokens, consents and similar artifacts. Written by the token runtime, never by bootstrap."""
    __tablename__ = "persisted_grants"
    __table_args__ = (
        Index("ix_persisted_grants_subject_client_type", "subject_id", "client_id", "type"),
    )

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    subject_id: Mapped[str | None] = mapped_column(String(200), nullable=True)
    session_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    client_id: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    creation_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utc_now)
    expiration: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)
    consumed_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    data: Mapped[str] = mapped_column(Text, nullable=False)  # serialized artifact


class DeviceCode(OperationalBase):
    __tablename__ = "device_codes"

    user_code: Mapped[str] = mapped_column(String(200), primary_key=True)
    device_code: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    subject_id: Mapped[str | None] = mapped_column(String(200), nullable=True)
    client_id: Mapped[str] = mapped_column(String(200), nullable=False)
    creation_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utc_now)
    expiration: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    data: Mapped[str] = mapped_column(Text, nullable=False)
