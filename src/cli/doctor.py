"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.connection import open_session
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import CollabError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_site(settings: AppSettings) -> tuple[bool, str]:
    try:
        with open_session(settings) as session:
            data = session.client.get_json(f"sites/{settings.site_id}", params={"$select": "id,displayName"})
        return True, str(data.get("displayName") or data.get("id"))
    except CollabError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="collabkit doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.graph_base_url)
    table.add_row("Site", "OK", settings.site_id)
    if settings.access_token:
        table.add_row("Access token", "OK", "Token configured")
        ok_site, detail_site = _check_site(settings)
        table.add_row("Site reachable", "OK" if ok_site else "FAIL", detail_site)
    else:
        table.add_row("Access token", "MISSING", "Run `collabkit doctor setup-auth`")

    _console.print(table)


@app.command(name="setup-auth")
def setup_auth() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.graph_base_url, show_default=True).strip()
    site_id = typer.prompt("Site id", default=settings.site_id, show_default=True).strip()
    token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not site_id or not token:
        raise typer.BadParameter("base_url, site id and token are required")

    env_path = write_user_env_vars(
        {
            "COLLABKIT_GRAPH_BASE_URL": base_url,
            "COLLABKIT_SITE_ID": site_id,
            "COLLABKIT_ACCESS_TOKEN": token,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
