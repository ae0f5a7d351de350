"""Tests for the baseline catalog: default contents, validation, no plaintext secrets."""
import dataclasses

import bcrypt
import pytest

from auth_store.catalog import (
    ApiScopeDefinition,
    BaselineCatalog,
    ClientDefinition,
    GrantType,
    IdentityResourceDefinition,
    build_catalog,
)


def test_default_catalog_shape(catalog):
    assert [c.client_id for c in catalog.clients()] == ["m2m.client", "interactive"]
    assert [r.name for r in catalog.identity_resources()] == ["openid", "profile", "email"]
    assert [s.name for s in catalog.api_scopes()] == ["api.read", "api.admin"]


def test_default_clients(catalog):
    m2m, interactive = catalog.clients()
    assert m2m.allowed_grant_types == {GrantType.CLIENT_CREDENTIALS}
    assert m2m.require_pkce is False
    assert GrantType.AUTHORIZATION_CODE in interactive.allowed_grant_types
    assert interactive.allow_offline_access is True
    assert interactive.redirect_uris == ("http://127.0.0.1:8000/callback",)
    # Client scopes refer to catalog resources and scopes by name
    known = {r.name for r in catalog.identity_resources()} | {s.name for s in catalog.api_scopes()}
    assert interactive.allowed_scopes <= known


def test_missing_secrets_leave_clients_without_secrets(catalog):
    assert all(c.secret_hashes == frozenset() for c in catalog.clients())


def test_secrets_are_hashed():
    cat = build_catalog(m2m_client_secret="m2m-secret", interactive_client_secret=None)
    m2m = cat.clients()[0]
    (hashed,) = m2m.secret_hashes
    assert hashed != "m2m-secret"
    assert bcrypt.checkpw(b"m2m-secret", hashed.encode("utf-8"))


def test_catalog_is_immutable(catalog):
    with pytest.raises(dataclasses.FrozenInstanceError):
        catalog.client_definitions = ()
    with pytest.raises(dataclasses.FrozenInstanceError):
        catalog.api_scopes()[0].name = "other"


def test_lists_are_stored_as_tuples():
    cat = BaselineCatalog(api_scope_definitions=[ApiScopeDefinition(name="a", display_name="A")])
    assert isinstance(cat.api_scopes(), tuple)


@pytest.mark.parametrize(
    "kwargs",
    [
        {
            "client_definitions": [
                ClientDefinition(client_id="c", allowed_grant_types=frozenset(), allowed_scopes=frozenset()),
                ClientDefinition(client_id="c", allowed_grant_types=frozenset(), allowed_scopes=frozenset()),
            ]
        },
        {
            "identity_resource_definitions": [
                IdentityResourceDefinition(name="openid", display_name="a", claims=frozenset({"sub"})),
                IdentityResourceDefinition(name="openid", display_name="b", claims=frozenset({"sub"})),
            ]
        },
        {
            "api_scope_definitions": [
                ApiScopeDefinition(name="api.read", display_name="a"),
                ApiScopeDefinition(name="api.read", display_name="b"),
            ]
        },
    ],
)
def test_duplicate_natural_keys_rejected(kwargs):
    with pytest.raises(ValueError, match="Duplicate"):
        BaselineCatalog(**kwargs)
