"""Shared fixtures: an in-process fake of the Bitbucket REST API."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from oauth_gate.providers.client import RemoteIdentityClient

ACCESS_TOKEN = "imaginary_access_token"

EMAILS_PATH = "/2.0/user/emails"
TEAMS_PATH = "/2.0/teams"
USER_PATH = "/2.0/user"


def group_path(team: str, group: str) -> str:
    return f"/1.0/groups/{team}/{group}/members"


class FakeBitbucket:
    """Serves canned payloads by path; rejects any other token with 403."""

    def __init__(self, routes: dict[str, object]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payload = self.routes.get(request.url.path)
        if payload is None:
            return httpx.Response(404)
        if request.url.params.get("access_token") != ACCESS_TOKEN:
            return httpx.Response(403)
        if isinstance(payload, str):
            return httpx.Response(200, text=payload)
        return httpx.Response(200, json=payload)

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def client(self, **kwargs) -> RemoteIdentityClient:
        return RemoteIdentityClient(transport=httpx.MockTransport(self), **kwargs)


@pytest.fixture
def bitbucket() -> Callable[[dict[str, object]], FakeBitbucket]:
    return FakeBitbucket
