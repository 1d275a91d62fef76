"""Wire records returned by the Bitbucket REST API, and the caller's session.

Every field has an empty default: a payload missing a field, or carrying
``null`` for it, decodes the same way an empty value would, and unknown
fields are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, SecretStr, model_validator


class SessionState(BaseModel):
    """The caller's session. Only ``access_token`` is read by providers."""

    access_token: SecretStr
    email: str = ""
    user: str = ""


class WireRecord(BaseModel):
    """Base for API records; ``null`` fields fall back to their defaults."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class EmailRecord(WireRecord):
    email: str = ""
    is_primary: bool = False


class EmailList(WireRecord):
    """``GET /2.0/user/emails``"""

    values: list[EmailRecord] = []

    def primary(self) -> str:
        """Address of the first entry flagged primary, or ``""``."""
        for record in self.values:
            if record.is_primary:
                return record.email
        return ""


class TeamRecord(WireRecord):
    username: str = ""


class TeamList(WireRecord):
    """``GET /2.0/teams?role=member``"""

    values: list[TeamRecord] = []

    def names(self) -> list[str]:
        return [team.username for team in self.values]


class UserIdentity(WireRecord):
    """``GET /2.0/user``"""

    username: str = ""
    account_id: str = ""


class GroupMember(WireRecord):
    """One entry of ``GET /1.0/groups/{team}/{group}/members``."""

    account_id: str = ""
