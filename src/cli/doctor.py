"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import CZDSTransport
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import CZDSError
from core.services import CatalogReader

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_terms(settings: AppSettings) -> tuple[bool, str]:
    """Fetch the public terms endpoint to prove the API is reachable."""

    try:
        with CZDSTransport.from_settings(settings) as transport:
            terms = CatalogReader(transport).get_current_terms()
        return True, f"terms version {terms.version}"
    except CZDSError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="CZDS Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.base_url)
    if settings.access_token:
        table.add_row("Access token", "OK", "Bearer token configured")
    else:
        table.add_row("Access token", "MISSING", "Run `czds doctor setup` or set CZDS_ACCESS_TOKEN")
    table.add_row("Default reason", "OK" if settings.default_reason else "OPTIONAL", settings.default_reason or "-")

    ok_terms, detail_terms = _check_terms(settings)
    table.add_row("API connectivity", "OK" if ok_terms else "FAIL", detail_terms)

    _console.print(table)

    if not settings.access_token:
        _console.print(
            "\n[yellow]Note:[/yellow] Listing, requesting and reports need an access token "
            "from the ICANN account service."
        )


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = AppSettings()
    base_url = typer.prompt("CZDS API base URL", default=current.base_url, show_default=True).strip()
    token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()
    reason = typer.prompt("Default request reason", default=current.default_reason or "", show_default=False).strip()

    if not base_url or not token:
        raise typer.BadParameter("base URL and access token are required")

    values = {
        "CZDS_BASE_URL": base_url,
        "CZDS_ACCESS_TOKEN": token,
    }
    if reason:
        values["CZDS_DEFAULT_REASON"] = reason
    env_path = write_user_env_vars(values)

    _console.print(f"[green]Saved config to:[/green] {env_path}")
