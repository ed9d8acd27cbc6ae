"""Main CLI application."""

import asyncio
import json
import sys
from datetime import datetime
from typing import Any, NoReturn, Optional, TypeVar

import click
import httpx
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from harvest_client import __version__
from harvest_client.api.auth import access_token_from_redirect, auth_url
from harvest_client.api.endpoints import account, clients, invoices, projects, reports, timesheet
from harvest_client.api.filters import InvoiceFilter, ProjectFilter, UserEntryFilter
from harvest_client.api.models import DayEntry
from harvest_client.cli.config_commands import config, load_config
from harvest_client.core.config import ConfigManager
from harvest_client.core.errors import ConfigurationError, DecodeError, TokenExtractionError
from harvest_client.core.logging import setup_logging
from harvest_client.core.request import Call
from harvest_client.core.transport import create_client, send

console = Console()
error_console = Console(stderr=True)

T = TypeVar("T")


def fail(message: Any) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


def make_client(config_mgr: ConfigManager) -> httpx.AsyncClient:
    """HTTP client used by every command."""
    return create_client(config_mgr)


def run(config_mgr: ConfigManager, call: Call[T]) -> Any:
    """Send one call and exit with a readable error if it fails."""

    async def _send() -> Any:
        async with make_client(config_mgr) as http:
            return await send(call, http)

    try:
        return asyncio.run(_send())
    except httpx.HTTPStatusError as e:
        fail(f"Harvest returned HTTP {e.response.status_code} for {call.request.method} request")
    except httpx.HTTPError as e:
        fail(f"Request failed: {e.__class__.__name__}")
    except DecodeError as e:
        fail(f"Unexpected response: {e}")


def credentials(config_mgr: ConfigManager) -> tuple[str, str]:
    try:
        return config_mgr.credentials()
    except ConfigurationError as e:
        fail(e)


def format_hours(hours: Optional[float]) -> str:
    """Format decimal hours as h:mm."""
    if hours is None:
        return "-"
    minutes = int(round(hours * 60))
    return f"{minutes // 60}:{minutes % 60:02d}"


def entries_table(title: str, entries: list[DayEntry]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Project", style="cyan")
    table.add_column("Task")
    table.add_column("Hours", justify="right", style="green")
    table.add_column("Notes")

    for entry in entries:
        hours = format_hours(entry.hours)
        if entry.is_running:
            hours = f"{hours} ▶"
        table.add_row(
            str(entry.id),
            entry.spent_at.isoformat(),
            entry.project or str(entry.project_id),
            entry.task or str(entry.task_id),
            hours,
            entry.notes or "",
        )
    return table


def dump_json(records: list[Any]) -> None:
    click.echo(json.dumps([record.model_dump(mode="json") for record in records], indent=2))


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP requests to stderr")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], no_color: bool, verbose: bool) -> None:
    """Harvest client - work with a Harvest account from the command line.

    Configure the account first:

        harvest config set harvest.account acme
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if no_color:
        console.no_color = True

    setup_logging(load_config(ctx), "DEBUG" if verbose else None)


cli.add_command(config)


# ============================================================================
# Authentication
# ============================================================================


@cli.group()
def auth() -> None:
    """Authorize this client against a Harvest account."""
    pass


@auth.command("url")
@click.option("--account", "account_name", help="Account subdomain (default: from config)")
@click.option("--client-id", help="OAuth client id (default: from config)")
@click.option("--redirect-uri", help="OAuth redirect URI (default: from config)")
@click.pass_context
def auth_url_command(
    ctx: click.Context,
    account_name: Optional[str],
    client_id: Optional[str],
    redirect_uri: Optional[str],
) -> None:
    """Print the URL that asks the user to authorize this client.

    Example:
        harvest auth url --client-id abc --redirect-uri https://example.com/cb
    """
    config_mgr = load_config(ctx)
    account_name = account_name or config_mgr.get("harvest.account")
    client_id = client_id or config_mgr.get("harvest.oauth.client_id")
    redirect_uri = redirect_uri or config_mgr.get("harvest.oauth.redirect_uri")

    if not (account_name and client_id and redirect_uri):
        fail("account, client id and redirect URI are required (flags or config)")

    click.echo(auth_url(account_name, client_id, redirect_uri))


@auth.command("token")
@click.argument("redirect")
@click.option("--save", is_flag=True, help="Store the token in the config file")
@click.pass_context
def auth_token(ctx: click.Context, redirect: str, save: bool) -> None:
    """Read the access token out of the URL Harvest redirected to.

    REDIRECT is the full redirect URL or just its '#access_token=...' fragment.

    Example:
        harvest auth token "https://example.com/cb#access_token=abc&token_type=bearer" --save
    """
    config_mgr = load_config(ctx)
    account_name = config_mgr.get("harvest.account")
    client_id = config_mgr.get("harvest.oauth.client_id")
    redirect_uri = config_mgr.get("harvest.oauth.redirect_uri")
    retry_url = (
        auth_url(account_name, client_id, redirect_uri)
        if account_name and client_id and redirect_uri
        else ""
    )

    try:
        token = access_token_from_redirect(redirect, retry_url)
    except TokenExtractionError as e:
        message = "No access token in redirect."
        if e.auth_url:
            message += f" Authorize again at: {e.auth_url}"
        fail(message)

    if save:
        config_mgr.set("harvest.access_token", token)
        console.print("[green]✓[/green] Access token saved")
    else:
        click.echo(token)


@cli.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the account and user behind the configured token."""
    config_mgr = load_config(ctx)
    account_name, token = credentials(config_mgr)
    identity = run(config_mgr, account.who_am_i(account_name, token))

    content = f"""[bold]{identity.user.first_name} {identity.user.last_name}[/bold]

[dim]Email:[/dim] {identity.user.email}
[dim]Company:[/dim] {identity.company.name}
[dim]URL:[/dim] {identity.company.base_uri}"""
    if identity.user.admin:
        content += "\n[dim]Role:[/dim] Administrator"

    console.print(Panel(content, title="Harvest Account", border_style="green"))


# ============================================================================
# Time entries
# ============================================================================


@cli.group()
def entries() -> None:
    """Show time entries."""
    pass


@entries.command("today")
@click.option("--user-id", type=int, help="Show another user's timesheet")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def entries_today(ctx: click.Context, user_id: Optional[int], as_json: bool) -> None:
    """Show today's timesheet.

    Example:
        harvest entries today
    """
    config_mgr = load_config(ctx)
    account_name, token = credentials(config_mgr)
    sheet = run(config_mgr, timesheet.daily(account_name, token, user_id))

    if as_json:
        dump_json(sheet.day_entries)
        return

    if not sheet.day_entries:
        console.print(f"[yellow]No time logged on {sheet.for_day.isoformat()}[/yellow]")
        return

    console.print(entries_table(f"Timesheet for {sheet.for_day.isoformat()}", sheet.day_entries))
    console.print(f"\n[bold]Total:[/bold] {format_hours(sheet.total_hours)}")


@entries.command("report")
@click.argument("user_id", type=int)
@click.option("--from", "from_date", required=True, type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--to", "to_date", required=True, type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("-p", "--project-id", type=int, help="Only entries for this project")
@click.option("--billable", type=click.Choice(["yes", "no"]), help="Filter on billable entries")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def entries_report(
    ctx: click.Context,
    user_id: int,
    from_date: datetime,
    to_date: datetime,
    project_id: Optional[int],
    billable: Optional[str],
    as_json: bool,
) -> None:
    """Show a user's entries between two dates.

    Example:
        harvest entries report 508343 --from 2017-03-01 --to 2017-03-31
    """
    config_mgr = load_config(ctx)
    account_name, token = credentials(config_mgr)

    try:
        call = reports.entries_for_user(
            account_name,
            token,
            user_id,
            from_date.date(),
            to_date.date(),
            UserEntryFilter(
                billable=None if billable is None else billable == "yes",
                project_id=project_id,
            ),
        )
    except ValueError as e:
        fail(e)

    found = run(config_mgr, call)

    if as_json:
        dump_json(found)
        return

    title = f"Entries {from_date.date().isoformat()} to {to_date.date().isoformat()}"
    console.print(entries_table(title, found))
    console.print(f"\n[bold]Total:[/bold] {format_hours(sum(e.hours for e in found))}")


# ============================================================================
# Projects, clients and invoices
# ============================================================================


@cli.group("projects")
def projects_group() -> None:
    """Show projects."""
    pass


@projects_group.command("list")
@click.option("--client", "client_id", type=int, help="Only projects for this client")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def projects_list(ctx: click.Context, client_id: Optional[int], as_json: bool) -> None:
    """List projects."""
    config_mgr = load_config(ctx)
    account_name, token = credentials(config_mgr)
    found = run(config_mgr, projects.list_projects(account_name, token, ProjectFilter(client=client_id)))

    if as_json:
        dump_json(found)
        return

    table = Table(title="Projects")
    table.add_column("ID", style="dim")
    table.add_column("Code")
    table.add_column("Name", style="cyan")
    table.add_column("Client")
    table.add_column("Status")

    for project in found:
        status = "[green]active[/green]" if project.active else "[dim]archived[/dim]"
        table.add_row(str(project.id), project.code or "", project.name, str(project.client_id), status)

    console.print(table)


@cli.group("clients")
def clients_group() -> None:
    """Show clients."""
    pass


@clients_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def clients_list(ctx: click.Context, as_json: bool) -> None:
    """List clients."""
    config_mgr = load_config(ctx)
    account_name, token = credentials(config_mgr)
    found = run(config_mgr, clients.list_clients(account_name, token))

    if as_json:
        dump_json(found)
        return

    table = Table(title="Clients")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Currency")
    table.add_column("Status")

    for client in found:
        status = "[green]active[/green]" if client.active else "[dim]inactive[/dim]"
        table.add_row(str(client.id), client.name, client.currency or "", status)

    console.print(table)


@cli.group("invoices")
def invoices_group() -> None:
    """Show invoices."""
    pass


@invoices_group.command("list")
@click.option(
    "--status",
    type=click.Choice(["open", "partial", "draft", "paid", "unpaid", "pastdue"]),
    help="Only invoices in this state",
)
@click.option("--client", "client_id", type=int, help="Only invoices for this client")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def invoices_list(
    ctx: click.Context, status: Optional[str], client_id: Optional[int], as_json: bool
) -> None:
    """List invoices.

    Example:
        harvest invoices list --status unpaid
    """
    config_mgr = load_config(ctx)
    account_name, token = credentials(config_mgr)
    call = invoices.list_invoices(
        account_name, token, InvoiceFilter(status=status, client=client_id)
    )
    found = run(config_mgr, call)

    if as_json:
        dump_json(found)
        return

    table = Table(title="Invoices")
    table.add_column("Number", style="cyan")
    table.add_column("Client")
    table.add_column("Issued")
    table.add_column("Amount", justify="right")
    table.add_column("Due", justify="right", style="yellow")
    table.add_column("State")

    for invoice in found:
        table.add_row(
            invoice.number,
            str(invoice.client_id),
            invoice.issued_at.isoformat() if invoice.issued_at else "",
            f"{invoice.amount:.2f}",
            f"{invoice.due_amount:.2f}" if invoice.due_amount is not None else "",
            invoice.state or "",
        )

    console.print(table)


if __name__ == "__main__":
    cli(obj={})
