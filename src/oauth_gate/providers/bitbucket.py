"""Bitbucket provider: primary email discovery with team and group filters.

The authorization chain runs strictly in order and stops at the first
failure:

1. fetch the account's email list
2. if a team is configured, deny (return ``""``) unless the account is in it
3. if a group is also configured, raise unless the account is in it
4. return the primary email, or ``""`` when none is flagged
"""

from __future__ import annotations

import logging

from oauth_gate.config import ApiEndpoints, ProviderConfig, resolve_endpoints
from oauth_gate.models.identity import EmailList, SessionState
from oauth_gate.providers.base import IdentityProvider
from oauth_gate.providers.client import RemoteIdentityClient
from oauth_gate.providers.membership import MembershipVerifier


class BitbucketProvider(IdentityProvider):
    """Authorizes sessions against the Bitbucket REST API."""

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        client: RemoteIdentityClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = resolve_endpoints(config or ProviderConfig())
        self._log = logger or logging.getLogger(__name__)
        self._client = client or RemoteIdentityClient(logger=self._log)

    def data(self) -> ProviderConfig:
        return self._config

    def set_team(self, team: str) -> None:
        self._config = self._config.model_copy(update={"team": team})

    def set_group(self, group: str) -> None:
        self._config = self._config.model_copy(update={"group": group})

    @property
    def endpoints(self) -> ApiEndpoints:
        return ApiEndpoints(self._config.validate_url)

    async def resolve_authorized_email(self, session: SessionState) -> str:
        # set_team/set_group swap self._config; a running check keeps its copy
        config = self._config
        endpoints = ApiEndpoints(config.validate_url)
        token = session.access_token.get_secret_value()

        emails = await self._client.fetch_json(endpoints.emails, token, EmailList)

        if config.team:
            verifier = MembershipVerifier(self._client, endpoints, logger=self._log)
            if not await verifier.is_team_member(token, config.team):
                return ""
            if config.group:
                await verifier.check_group_membership(token, config.team, config.group)

        return emails.primary()
