"""CLI entry point for operators troubleshooting provider configuration."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from oauth_gate.config import ProviderConfig

app = typer.Typer(
    name="oauth-gate",
    help="oauth-gate: inspect provider defaults and run authorization checks.",
    no_args_is_help=True,
)
console = Console()

EXIT_DENIED = 1
EXIT_ERROR = 2


def _load_config(config: Path | None, **overrides: str | None) -> ProviderConfig:
    base = ProviderConfig.from_yaml(config) if config else ProviderConfig()
    return base.merged(**overrides)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def defaults(
    config: Path | None = typer.Option(None, help="YAML provider configuration"),
) -> None:
    """Show the resolved provider configuration and API endpoints."""
    from oauth_gate.providers.bitbucket import BitbucketProvider

    provider = BitbucketProvider(_load_config(config))
    data = provider.data()

    table = Table(title=f"{data.provider_name} provider")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in data.model_dump().items():
        table.add_row(key, value or "[dim]-[/dim]")
    console.print(table)

    endpoints = provider.endpoints
    console.print("\n[bold]API endpoints[/bold]")
    console.print(f"  emails: {endpoints.emails}")
    console.print(f"  teams:  {endpoints.teams}")
    console.print(f"  user:   {endpoints.user}")
    if data.team and data.group:
        console.print(f"  group:  {endpoints.group_members(data.team, data.group)}")


@app.command()
def check(
    token: str = typer.Option(..., help="OAuth2 access token", envvar="OAUTH_GATE_TOKEN"),
    team: str | None = typer.Option(None, help="Require membership in this team"),
    group: str | None = typer.Option(None, help="Require membership in this group of the team"),
    validate_url: str | None = typer.Option(None, help="Override the emails endpoint"),
    config: Path | None = typer.Option(None, help="YAML provider configuration"),
    timeout: float = typer.Option(30.0, help="HTTP timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log diagnostics"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Run one authorization check and print the authorized email."""
    from oauth_gate.errors import ProviderError
    from oauth_gate.models.identity import SessionState
    from oauth_gate.providers.bitbucket import BitbucketProvider
    from oauth_gate.providers.client import RemoteIdentityClient

    _setup_logging(verbose)
    provider_config = _load_config(config, team=team, group=group, validate_url=validate_url)
    provider = BitbucketProvider(
        provider_config, client=RemoteIdentityClient(timeout=timeout)
    )
    session = SessionState(access_token=token)

    try:
        email = asyncio.run(provider.resolve_authorized_email(session))
    except ProviderError as e:
        if as_json:
            typer.echo(json.dumps(e.to_dict()))
        else:
            console.print(f"[red]Error ({e.code}): {e.message}[/red]")
        raise typer.Exit(EXIT_ERROR)

    if as_json:
        typer.echo(json.dumps({"email": email, "authorized": bool(email)}))
    elif email:
        console.print(f"[green]{email}[/green]")
    else:
        console.print("[yellow]denied: no authorized primary email[/yellow]")

    if not email:
        raise typer.Exit(EXIT_DENIED)


if __name__ == "__main__":
    app()
