"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables and panels can be reused across commands.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import RequestDetail, RequestList, TermsAndConditions, TLDAvailability
from core.domain.status import AvailabilityStatus, RequestStatus

_REQUEST_STATUS_STYLES: dict[RequestStatus, str] = {
    RequestStatus.APPROVED: "green",
    RequestStatus.PENDING: "yellow",
    RequestStatus.SUBMITTED: "yellow",
    RequestStatus.DENIED: "red",
    RequestStatus.REVOKED: "red",
    RequestStatus.EXPIRED: "dim",
}

_AVAILABILITY_STYLES: dict[AvailabilityStatus, str] = {
    AvailabilityStatus.AVAILABLE: "bright_green",
    AvailabilityStatus.APPROVED: "green",
    AvailabilityStatus.PENDING: "yellow",
    AvailabilityStatus.SUBMITTED: "yellow",
    AvailabilityStatus.DENIED: "red",
    AvailabilityStatus.REVOKED: "red",
    AvailabilityStatus.EXPIRED: "dim",
}


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "never"
    return value.strftime("%Y-%m-%d %H:%M")


def _label(tld: str, u_label: str) -> str:
    if u_label and u_label != tld:
        return f"{tld} ({u_label})"
    return tld


def build_requests_table(requests: RequestList) -> Table:
    table = Table(title=f"Zone Requests ({len(requests.items)} of {requests.total_matching})")
    table.add_column("TLD", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")
    table.add_column("Expires")
    table.add_column("SFTP")
    table.add_column("Request ID", style="magenta")

    for item in requests.items:
        table.add_row(
            _label(item.tld, item.u_label),
            Text(item.status.value, style=_REQUEST_STATUS_STYLES.get(item.status, "white")),
            format_timestamp(item.created),
            format_timestamp(item.last_updated),
            format_timestamp(item.expires),
            "yes" if item.sftp_enabled else "",
            item.request_id,
        )
    return table


def build_tlds_table(tlds: Iterable[TLDAvailability], *, title: str = "TLD Availability") -> Table:
    table = Table(title=title)
    table.add_column("TLD", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Requestable")
    table.add_column("SFTP")

    for tld in tlds:
        status = tld.current_status
        table.add_row(
            _label(tld.tld, tld.u_label),
            Text(status.value, style=_AVAILABILITY_STYLES.get(status, "white")),
            "yes" if status.is_requestable else "",
            "yes" if tld.sftp_enabled else "",
        )
    return table


def build_detail_panel(detail: RequestDetail) -> Panel:
    """Panel with the request fields followed by its history."""

    fields = Table.grid(padding=(0, 2))
    fields.add_column(style="bold")
    fields.add_column()

    tld = detail.tld_ref
    fields.add_row("TLD", _label(tld.tld, tld.u_label) if tld else "-")
    if tld is not None:
        fields.add_row("TLD status", tld.current_status.value)
    fields.add_row("Status", Text(detail.status.value, style=_REQUEST_STATUS_STYLES.get(detail.status, "white")))
    fields.add_row("Created", format_timestamp(detail.created))
    fields.add_row("Updated", format_timestamp(detail.last_updated))
    fields.add_row("Expires", format_timestamp(detail.expires))
    fields.add_row("Terms version", detail.tc_version or "-")
    fields.add_row("Requesting IP", detail.requesting_ip or "-")
    fields.add_row("FTP IPs", ", ".join(detail.ftp_ips) or "-")
    fields.add_row("Reason", detail.reason or "-")
    fields.add_row("Private data error", "yes" if detail.private_data_error else "no")
    ftp_error = detail.ftp_private_data_error
    if ftp_error is not None:
        fields.add_row("FTP private data error", "yes" if ftp_error else "no")

    history = Table(title="History", show_edge=False)
    history.add_column("When", style="dim")
    history.add_column("Action")
    for entry in detail.history:
        history.add_row(format_timestamp(entry.timestamp), entry.action)

    title = Text(f"Request {detail.request_id}", style="bold cyan")
    return Panel(Group(fields, Text(""), history), title=title, border_style="cyan")


def build_terms_panel(terms: TermsAndConditions, text: str) -> Panel:
    body = Text()
    body.append(f"Version: {terms.version}\n", style="bold")
    body.append(f"Published: {format_timestamp(terms.created)}\n", style="dim")
    if terms.content_url:
        body.append(f"URL: {terms.content_url}\n", style="dim")
    if text:
        body.append("\n" + text)

    return Panel(body, title=Text("Terms and Conditions", style="bold yellow"), border_style="yellow")
