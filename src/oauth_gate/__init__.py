"""oauth-gate: identity-provider authorization adapters for an OAuth2 reverse proxy."""

from oauth_gate.config import ProviderConfig, resolve_endpoints
from oauth_gate.errors import (
    DecodeError,
    MissingAccountIdError,
    NotInGroupError,
    ProviderError,
    RequestBuildError,
    TransportError,
)
from oauth_gate.models.identity import SessionState
from oauth_gate.providers import BitbucketProvider, IdentityProvider

__version__ = "0.1.0"

__all__ = [
    "BitbucketProvider",
    "DecodeError",
    "IdentityProvider",
    "MissingAccountIdError",
    "NotInGroupError",
    "ProviderConfig",
    "ProviderError",
    "RequestBuildError",
    "SessionState",
    "TransportError",
    "resolve_endpoints",
]
