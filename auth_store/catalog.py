"""
Baseline configuration the deployment needs on first boot: clients, identity resources, API scopes.
Built once at startup by build_catalog() and passed explicitly to bootstrap. Pure data.
"""
import json
import logging
from dataclasses import dataclass
from enum import Enum

from auth_store import config
from auth_store.models import ApiScope, Client, IdentityResource
from auth_store.seed import hash_secret

logger = logging.getLogger(__name__)


class GrantType(str, Enum):
    AUTHORIZATION_CODE = "authorization_code"
    CLIENT_CREDENTIALS = "client_credentials"
    REFRESH_TOKEN = "refresh_token"
    DEVICE_CODE = "urn:ietf:params:oauth:grant-type:device_code"


@dataclass(frozen=True)
class ClientDefinition:
    client_id: str
    allowed_grant_types: frozenset[GrantType]
    allowed_scopes: frozenset[str]
    redirect_uris: tuple[str, ...] = ()
    post_logout_redirect_uris: tuple[str, ...] = ()
    secret_hashes: frozenset[str] = frozenset()
    client_name: str | None = None
    require_pkce: bool = True
    allow_offline_access: bool = False

    def to_row(self) -> Client:
        return Client(
            client_id=self.client_id,
            client_name=self.client_name,
            # Sets are written sorted so the stored JSON is stable across runs
            allowed_grant_types=json.dumps(sorted(g.value for g in self.allowed_grant_types)),
            allowed_scopes=json.dumps(sorted(self.allowed_scopes)),
            redirect_uris=json.dumps(list(self.redirect_uris)),
            post_logout_redirect_uris=json.dumps(list(self.post_logout_redirect_uris)),
            client_secret_hashes=json.dumps(sorted(self.secret_hashes)),
            require_pkce=self.require_pkce,
            allow_offline_access=self.allow_offline_access,
        )


@dataclass(frozen=True)
class IdentityResourceDefinition:
    name: str
    display_name: str
    claims: frozenset[str]

    def to_row(self) -> IdentityResource:
        return IdentityResource(
            name=self.name,
            display_name=self.display_name,
            claims=json.dumps(sorted(self.claims)),
        )


@dataclass(frozen=True)
class ApiScopeDefinition:
    name: str
    display_name: str

    def to_row(self) -> ApiScope:
        return ApiScope(name=self.name, display_name=self.display_name)


def _check_unique(kind: str, keys: list[str]) -> None:
    seen = set()
    for key in keys:
        if key in seen:
            raise ValueError(f"Duplicate {kind} in baseline catalog: {key}")
        seen.add(key)


@dataclass(frozen=True)
class BaselineCatalog:
    """Immutable baseline. Order within each category is the insertion order."""

    client_definitions: tuple[ClientDefinition, ...] = ()
    identity_resource_definitions: tuple[IdentityResourceDefinition, ...] = ()
    api_scope_definitions: tuple[ApiScopeDefinition, ...] = ()

    def __post_init__(self):
        # Accept any sequence but store tuples
        object.__setattr__(self, "client_definitions", tuple(self.client_definitions))
        object.__setattr__(self, "identity_resource_definitions", tuple(self.identity_resource_definitions))
        object.__setattr__(self, "api_scope_definitions", tuple(self.api_scope_definitions))
        _check_unique("client_id", [c.client_id for c in self.client_definitions])
        _check_unique("identity resource", [r.name for r in self.identity_resource_definitions])
        _check_unique("api scope", [s.name for s in self.api_scope_definitions])

    def clients(self) -> tuple[ClientDefinition, ...]:
        return self.client_definitions

    def identity_resources(self) -> tuple[IdentityResourceDefinition, ...]:
        return self.identity_resource_definitions

    def api_scopes(self) -> tuple[ApiScopeDefinition, ...]:
        return self.api_scope_definitions


# Standard OIDC identity resources
OPENID = IdentityResourceDefinition(name="openid", display_name="Your user identifier", claims=frozenset({"sub"}))
PROFILE = IdentityResourceDefinition(
    name="profile",
    display_name="User profile",
    claims=frozenset({"name", "family_name", "given_name", "preferred_username", "updated_at"}),
)
EMAIL = IdentityResourceDefinition(
    name="email", display_name="Your email address", claims=frozenset({"email", "email_verified"})
)

SCOPE_READ = ApiScopeDefinition(name="api.read", display_name="Read access to the API")
SCOPE_ADMIN = ApiScopeDefinition(name="api.admin", display_name="Administrative access to the API")


def _secret_hashes(client_id: str, secret: str | None) -> frozenset[str]:
    if not secret:
        logger.warning("No secret configured for client %s; it will be seeded without secrets", client_id)
        return frozenset()
    return frozenset({hash_secret(secret)})


def build_catalog(
    *,
    m2m_client_secret: str | None = config.M2M_CLIENT_SECRET,
    interactive_client_secret: str | None = config.INTERACTIVE_CLIENT_SECRET,
) -> BaselineCatalog:
    """Default deployment baseline: 2 clients, 3 identity resources, 2 API scopes."""
    m2m = ClientDefinition(
        client_id=config.M2M_CLIENT_ID,
        client_name="Machine to machine client",
        allowed_grant_types=frozenset({GrantType.CLIENT_CREDENTIALS}),
        allowed_scopes=frozenset({SCOPE_READ.name}),
        secret_hashes=_secret_hashes(config.M2M_CLIENT_ID, m2m_client_secret),
        require_pkce=False,
    )
    interactive = ClientDefinition(
        client_id=config.INTERACTIVE_CLIENT_ID,
        client_name="Interactive web client",
        allowed_grant_types=frozenset({GrantType.AUTHORIZATION_CODE, GrantType.REFRESH_TOKEN}),
        allowed_scopes=frozenset({OPENID.name, PROFILE.name, EMAIL.name, SCOPE_READ.name, SCOPE_ADMIN.name}),
        redirect_uris=config.INTERACTIVE_REDIRECT_URIS,
        post_logout_redirect_uris=config.INTERACTIVE_POST_LOGOUT_REDIRECT_URIS,
        secret_hashes=_secret_hashes(config.INTERACTIVE_CLIENT_ID, interactive_client_secret),
        allow_offline_access=True,
    )
    return BaselineCatalog(
        client_definitions=(m2m, interactive),
        identity_resource_definitions=(OPENID, PROFILE, EMAIL),
        api_scope_definitions=(SCOPE_READ, SCOPE_ADMIN),
    )
