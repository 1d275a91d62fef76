"""Identity providers that authorize sessions against remote identity APIs."""

from oauth_gate.providers.base import IdentityProvider
from oauth_gate.providers.bitbucket import BitbucketProvider
from oauth_gate.providers.client import RemoteIdentityClient, redact_url
from oauth_gate.providers.membership import MembershipVerifier

__all__ = [
    "BitbucketProvider",
    "IdentityProvider",
    "MembershipVerifier",
    "RemoteIdentityClient",
    "redact_url",
]
