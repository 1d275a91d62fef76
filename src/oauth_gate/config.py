"""Provider configuration and endpoint resolution.

``resolve_endpoints`` fills empty fields with the Bitbucket defaults and
returns a new config; a configured value is never overwritten.
"""

from __future__ import annotations

from pathlib import Path

import httpx
import yaml
from pydantic import BaseModel, ConfigDict

from oauth_gate.errors import RequestBuildError

PROVIDER_NAME = "Bitbucket"
DEFAULT_LOGIN_URL = "https://bitbucket.org/site/oauth2/authorize"
DEFAULT_REDEEM_URL = "https://bitbucket.org/site/oauth2/access_token"
DEFAULT_VALIDATE_URL = "https://api.bitbucket.org/2.0/user/emails"
DEFAULT_SCOPE = "account team"

TEAMS_PATH = "/2.0/teams"
USER_PATH = "/2.0/user"
GROUP_MEMBERS_PATH = "/1.0/groups/{team}/{group}/members"


class ProviderConfig(BaseModel):
    """Immutable configuration for one provider instance.

    ``team`` and ``group`` are authorization filters; an empty string
    disables them. ``group`` is only consulted once ``team`` has passed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider_name: str = ""
    login_url: str = ""
    redeem_url: str = ""
    profile_url: str = ""
    validate_url: str = ""
    scope: str = ""
    team: str = ""
    group: str = ""

    @classmethod
    def from_yaml(cls, path: Path) -> ProviderConfig:
        data = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(data)

    def merged(self, **overrides: str | None) -> ProviderConfig:
        """Copy with every non-empty override applied."""
        update = {key: value for key, value in overrides.items() if value}
        return self.model_copy(update=update)


def resolve_endpoints(config: ProviderConfig) -> ProviderConfig:
    """Apply provider defaults to every empty field of ``config``."""
    return config.model_copy(
        update={
            "provider_name": PROVIDER_NAME,
            "login_url": config.login_url or DEFAULT_LOGIN_URL,
            "redeem_url": config.redeem_url or DEFAULT_REDEEM_URL,
            "validate_url": config.validate_url or DEFAULT_VALIDATE_URL,
            "scope": config.scope or DEFAULT_SCOPE,
        }
    )


class ApiEndpoints:
    """REST endpoints derived from the validate URL.

    The emails endpoint is the validate URL itself; the others keep its
    scheme and host and replace the path.
    """

    def __init__(self, validate_url: str) -> None:
        self.validate_url = validate_url

    @property
    def emails(self) -> str:
        return self.validate_url

    @property
    def teams(self) -> str:
        return self._with_path(TEAMS_PATH)

    @property
    def user(self) -> str:
        return self._with_path(USER_PATH)

    def group_members(self, team: str, group: str) -> str:
        return self._with_path(GROUP_MEMBERS_PATH.format(team=team, group=group))

    def _with_path(self, path: str) -> str:
        try:
            return str(httpx.URL(self.validate_url).copy_with(path=path))
        except httpx.InvalidURL as exc:
            raise RequestBuildError(
                f"Cannot derive {path} from validate URL",
                details={"validate_url": self.validate_url},
            ) from exc
