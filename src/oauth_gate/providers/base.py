"""Pluggable identity provider interface.

Identity providers turn an access token into an authorized email address.
Bitbucket, GitHub, GitLab, etc. would each implement this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from oauth_gate.config import ProviderConfig
from oauth_gate.models.identity import SessionState


class IdentityProvider(ABC):
    """Abstract interface for authorizing a session against a provider."""

    @abstractmethod
    def data(self) -> ProviderConfig:
        """The resolved configuration this provider runs with."""

    @abstractmethod
    def set_team(self, team: str) -> None:
        """Restrict authorization to members of ``team``."""

    @abstractmethod
    def set_group(self, group: str) -> None:
        """Restrict authorization to members of ``group`` within the team."""

    @abstractmethod
    async def resolve_authorized_email(self, session: SessionState) -> str:
        """Return the session's primary email if it passes every filter.

        An empty string with no exception means the user is not authorized
        or has no primary email. Provider malfunctions raise ProviderError.
        """
