"""CZDS command-line interface (Typer + Rich).

The commands are thin: they build the services, call one operation and
render the result as a Rich table or as JSON.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.html_text import html_to_text
from adapters.http_client import CZDSTransport
from adapters.json_exporter import dumps
from cli import doctor
from cli.ui_components import (
    build_detail_panel,
    build_requests_table,
    build_terms_panel,
    build_tlds_table,
)
from core.config import AppSettings
from core.domain.errors import BulkRequestError, CZDSError
from core.domain.models import FilterQuery, Pagination, Sort
from core.domain.status import RequestStatus, SortDirection, SortField
from core.services import CZDSServices

logger = logging.getLogger(__name__)

ERROR_EXIT_CODE = 1
USAGE_EXIT_CODE = 2

_console = Console()
_err_console = Console(stderr=True)

app = typer.Typer(no_args_is_help=True, help="Query and submit ICANN CZDS zone requests.")
app.add_typer(doctor.app, name="doctor")


@dataclass
class CliState:
    settings: AppSettings
    as_json: bool = False


def configure_logging(level: int | str) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(RichHandler(console=_err_console, show_path=False, rich_tracebacks=False))
    root.setLevel(level)


def build_transport(settings: AppSettings) -> CZDSTransport:
    return CZDSTransport.from_settings(settings)


@contextmanager
def _services(ctx: typer.Context) -> Iterator[CZDSServices]:
    state = _require_state(ctx)
    with build_transport(state.settings) as transport:
        try:
            yield CZDSServices.from_invoker(transport)
        except BulkRequestError as exc:
            _err_console.print(f"[red]Error:[/red] {exc}")
            _err_console.print(f"Attempted TLDs: {', '.join(exc.tlds)}")
            raise typer.Exit(code=ERROR_EXIT_CODE) from exc
        except CZDSError as exc:
            _err_console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=ERROR_EXIT_CODE) from exc
        except ValidationError as exc:
            _err_console.print(f"[red]Invalid input:[/red] {exc}")
            raise typer.Exit(code=USAGE_EXIT_CODE) from exc


def _require_state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        raise RuntimeError("CLI state not initialized")
    return state


def _resolve_reason(state: CliState, reason: str | None) -> str:
    value = (reason or "").strip() or (state.settings.default_reason or "").strip()
    if not value:
        raise typer.BadParameter("a reason is required (--reason or CZDS_DEFAULT_REASON)")
    return value


def _parse_status(value: str | None) -> RequestStatus:
    if value is None:
        return RequestStatus.UNSET
    try:
        return RequestStatus(value)
    except ValueError as exc:
        choices = ", ".join(s.value for s in RequestStatus if s.value)
        raise typer.BadParameter(f"unknown status {value!r} (choose from {choices})") from exc


@app.callback()
def main(
    ctx: typer.Context,
    base_url: str | None = typer.Option(None, "--base-url", help="CZDS API root URL."),
    token: str | None = typer.Option(None, "--token", help="Bearer access token."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of tables."),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v for info, -vv for debug."),
) -> None:
    """Store global options for every command."""

    overrides: dict[str, str] = {}
    if base_url:
        overrides["base_url"] = base_url
    if token:
        overrides["access_token"] = token
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=USAGE_EXIT_CODE) from exc

    if verbose >= 2:
        configure_logging(logging.DEBUG)
    elif verbose == 1:
        configure_logging(logging.INFO)
    else:
        configure_logging(settings.log_level)

    logger.debug("Using CZDS API at %s", settings.base_url)
    ctx.obj = CliState(settings=settings, as_json=as_json)


@app.command()
def status(
    ctx: typer.Context,
    request_status: str | None = typer.Option(None, "--status", help="Only requests in this state."),
    text_filter: str = typer.Option("", "--filter", help="Substring of the zone name."),
    page: int = typer.Option(0, min=0, help="Zero-based page index."),
    size: int = typer.Option(0, min=0, help="Page size (0 = portal default)."),
    sort: SortField | None = typer.Option(None, case_sensitive=False, help="Sort field."),
    direction: SortDirection | None = typer.Option(None, case_sensitive=False, help="Sort direction."),
) -> None:
    """List zone requests."""

    state = _require_state(ctx)
    query = FilterQuery(
        status=_parse_status(request_status),
        text_filter=text_filter,
        pagination=Pagination(size=size, page=page),
        sort=Sort(field=sort, direction=direction),
    )
    with _services(ctx) as services:
        requests = services.catalog.list_requests(query)

    if state.as_json:
        typer.echo(dumps(requests), nl=False)
    else:
        _console.print(build_requests_table(requests))


@app.command()
def info(ctx: typer.Context, request_id: str = typer.Argument(..., help="Request identifier.")) -> None:
    """Show one request and its history."""

    state = _require_state(ctx)
    with _services(ctx) as services:
        detail = services.catalog.get_request_detail(request_id)

    if state.as_json:
        typer.echo(dumps(detail), nl=False)
    else:
        _console.print(build_detail_panel(detail))


@app.command()
def tlds(
    ctx: typer.Context,
    eligible: bool = typer.Option(False, "--eligible", help="Only TLDs a new request can be made for."),
) -> None:
    """Show the availability of every TLD."""

    state = _require_state(ctx)
    with _services(ctx) as services:
        availability = services.catalog.list_tld_availability()

    if eligible:
        availability = [tld for tld in availability if tld.current_status.is_requestable]

    if state.as_json:
        typer.echo(dumps(availability), nl=False)
    else:
        _console.print(build_tlds_table(availability))


@app.command()
def terms(ctx: typer.Context) -> None:
    """Show the current terms and conditions."""

    state = _require_state(ctx)
    with _services(ctx) as services:
        current = services.catalog.get_current_terms()

    if state.as_json:
        typer.echo(dumps(current), nl=False)
    else:
        _console.print(build_terms_panel(current, html_to_text(current.content)))


@app.command()
def request(
    ctx: typer.Context,
    tld_names: list[str] = typer.Argument(..., metavar="TLD...", help="TLDs to request."),
    reason: str | None = typer.Option(None, "--reason", "-r", help="Reason shown to the registries."),
) -> None:
    """Request access to specific TLDs, accepting the current terms."""

    state = _require_state(ctx)
    reason = _resolve_reason(state, reason)
    with _services(ctx) as services:
        services.orchestrator.request_specific_tlds(tld_names, reason)

    if state.as_json:
        typer.echo(dumps({"requested": tld_names}), nl=False)
    else:
        _console.print(f"[green]Requested:[/green] {', '.join(tld_names)}")


@app.command(name="request-all")
def request_all(
    ctx: typer.Context,
    reason: str | None = typer.Option(None, "--reason", "-r", help="Reason shown to the registries."),
) -> None:
    """Request access to every TLD that is currently eligible."""

    state = _require_state(ctx)
    reason = _resolve_reason(state, reason)
    with _services(ctx) as services:
        requested = services.orchestrator.request_all_eligible_tlds(reason)

    if state.as_json:
        typer.echo(dumps({"requested": requested}), nl=False)
    elif requested:
        _console.print(f"[green]Requested {len(requested)} TLD(s):[/green] {', '.join(requested)}")
    else:
        _console.print("[yellow]No TLDs are currently eligible for a new request.[/yellow]")


@app.command()
def report(
    ctx: typer.Context,
    output: str = typer.Argument(..., help="CSV destination file, or '-' for stdout."),
) -> None:
    """Download the report of all requests as CSV."""

    if output == "-":
        with _services(ctx) as services:
            services.reports.export_all_requests_report(typer.get_binary_stream("stdout"))
        return

    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("wb") as sink, _services(ctx) as services:
            written = services.reports.export_all_requests_report(sink)
    except typer.Exit:
        path.unlink(missing_ok=True)
        raise
    _err_console.print(f"[green]Saved report ({written} bytes) to:[/green] {path}")


def run() -> None:
    app()
