"""Tests for the oauth-gate CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from oauth_gate import cli
from oauth_gate.providers import client as client_module

runner = CliRunner()

TOKEN = "imaginary_access_token"
EMAILS = {"values": [{"email": "michael.bland@gsa.gov", "is_primary": True}]}


@pytest.fixture
def backend(bitbucket, monkeypatch: pytest.MonkeyPatch):
    fake = bitbucket({"/2.0/user/emails": EMAILS, "/2.0/teams": {"values": []}})
    monkeypatch.setattr(
        client_module, "RemoteIdentityClient", lambda timeout=30.0: fake.client(timeout=timeout)
    )
    return fake


def test_defaults_command() -> None:
    result = runner.invoke(cli.app, ["defaults"])
    assert result.exit_code == 0
    assert "https://api.bitbucket.org/2.0/user/emails" in result.output
    assert "https://api.bitbucket.org/2.0/teams" in result.output
    assert "account team" in result.output


def test_defaults_command_with_config(tmp_path: Path) -> None:
    path = tmp_path / "provider.yaml"
    path.write_text(
        "validate_url: https://bitbucket.test/2.0/user/emails\nteam: bio\ngroup: devs\n"
    )
    result = runner.invoke(cli.app, ["defaults", "--config", str(path)])
    assert result.exit_code == 0
    assert "https://bitbucket.test/2.0/teams" in result.output
    assert "https://bitbucket.test/1.0/groups/bio/devs/members" in result.output


def test_check_prints_email(backend) -> None:
    result = runner.invoke(cli.app, ["check", "--token", TOKEN])
    assert result.exit_code == 0
    assert "michael.bland@gsa.gov" in result.output
    assert backend.paths == ["/2.0/user/emails"]


def test_check_denied(backend) -> None:
    result = runner.invoke(cli.app, ["check", "--token", TOKEN, "--team", "bioinformatics"])
    assert result.exit_code == cli.EXIT_DENIED
    assert "denied" in result.output


def test_check_provider_error(backend) -> None:
    result = runner.invoke(cli.app, ["check", "--token", "unexpected_access_token"])
    assert result.exit_code == cli.EXIT_ERROR
    assert "TRANSPORT_FAILED" in result.output
    assert "unexpected_access_token" not in result.output


def test_check_token_from_environment(backend) -> None:
    result = runner.invoke(cli.app, ["check"], env={"OAUTH_GATE_TOKEN": TOKEN})
    assert result.exit_code == 0
    assert "michael.bland@gsa.gov" in result.output


def _json_line(output: str) -> dict:
    lines = [line for line in output.splitlines() if line.startswith("{")]
    return json.loads(lines[-1])


def test_check_json_success(backend) -> None:
    result = runner.invoke(cli.app, ["check", "--token", TOKEN, "--json"])
    assert result.exit_code == 0
    assert _json_line(result.output) == {"email": "michael.bland@gsa.gov", "authorized": True}


def test_check_json_denied(backend) -> None:
    result = runner.invoke(
        cli.app, ["check", "--token", TOKEN, "--team", "bioinformatics", "--json"]
    )
    assert result.exit_code == cli.EXIT_DENIED
    assert _json_line(result.output) == {"email": "", "authorized": False}


def test_check_json_error(backend) -> None:
    result = runner.invoke(cli.app, ["check", "--token", "unexpected_access_token", "--json"])
    assert result.exit_code == cli.EXIT_ERROR
    payload = _json_line(result.output)
    assert payload["error"] == "TRANSPORT_FAILED"
    assert payload["message"].endswith("returned 403")
    assert payload["details"] == {
        "url": "https://api.bitbucket.org/2.0/user/emails?access_token=REDACTED"
    }
    assert "unexpected_access_token" not in result.output
