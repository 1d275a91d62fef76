"""Team and group membership checks against the Bitbucket API."""

from __future__ import annotations

import logging

from oauth_gate.config import ApiEndpoints
from oauth_gate.errors import MissingAccountIdError, NotInGroupError
from oauth_gate.models.identity import GroupMember, TeamList, UserIdentity
from oauth_gate.providers.client import RemoteIdentityClient


class MembershipVerifier:
    """Answers team and group membership questions for one access token.

    A failed team check is a plain ``False``. A failed group check raises
    ``NotInGroupError``, so callers can tell it apart from an empty result.
    """

    def __init__(
        self,
        client: RemoteIdentityClient,
        endpoints: ApiEndpoints,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self._endpoints = endpoints
        self._log = logger or logging.getLogger(__name__)

    async def is_team_member(self, token: str, team: str) -> bool:
        """True iff ``team`` is one of the account's teams (exact match)."""
        self._log.info("Filtering against membership in team %s", team)
        teams = await self._client.fetch_json(
            self._endpoints.teams, token, TeamList, params={"role": "member"}
        )
        names = teams.names()
        self._log.debug("teams for account: %s", names)
        if team not in names:
            self._log.info("team membership test failed, access denied")
            return False
        return True

    async def check_group_membership(self, token: str, team: str, group: str) -> None:
        """Raise unless the account belongs to ``group`` within ``team``."""
        self._log.info("Checking if user belongs to group %s", group)
        user = await self.resolve_account(token)
        roster = await self.group_roster(token, team, group)

        if user.account_id in {member.account_id for member in roster}:
            self._log.info("Found user in group member list")
            return

        error = NotInGroupError(details={"team": team, "group": group})
        self._log.info("%s", error)
        raise error

    async def resolve_account(self, token: str) -> UserIdentity:
        user = await self._client.fetch_json(self._endpoints.user, token, UserIdentity)
        self._log.info(
            "Bitbucket authed username=%s account_id=%s", user.username, user.account_id
        )
        if not user.account_id:
            raise MissingAccountIdError(details={"username": user.username})
        return user

    async def group_roster(self, token: str, team: str, group: str) -> list[GroupMember]:
        roster = await self._client.fetch_json(
            self._endpoints.group_members(team, group), token, list[GroupMember]
        )
        self._log.debug("Got group members %s", [member.account_id for member in roster])
        return roster
