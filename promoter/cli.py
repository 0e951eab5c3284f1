"""
Command line front end for the Promoter API.

Usage:
    promoter consultants --sort rating --filter chat=on
    promoter invite "Jane Doe" 1000 --note "met at the fair"
    promoter status <consultant-token> available

The promoter token and endpoint come from --token/--endpoint or from
PROMOTER_API_TOKEN/PROMOTER_API_ENDPOINT (a .env file is honoured).
`status` authenticates with the consultant token only, so it does not
need a promoter token.
"""

import os
import sys
from typing import Any, Dict, List, NoReturn, Optional, Tuple, Union

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from promoter.config import ENDPOINT_ENV, PromoterSettings, create_promoter_client
from promoter.exceptions import PromoterError
from promoter.logging_config import setup_logging
from promoter.models import DEFAULT_ENDPOINT, ConsultantStatus, SortOption

logger = structlog.get_logger("cli")
console = Console()


def parse_filter(raw: str) -> Tuple[str, str]:
    """Split a KEY=VALUE filter option."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint="--filter")
    return key.strip(), value.strip()


def parse_status(raw: str) -> Union[int, str]:
    """
    Turn a status argument into what the client expects.

    Accepts the numeric value ("1") or the name ("available", "fake_busy").
    Anything else is passed through so the client rejects it.
    """
    candidate = raw.strip()
    if candidate.lstrip("-").isdigit():
        return int(candidate)
    try:
        return ConsultantStatus[candidate.upper()]
    except KeyError:
        return candidate


def render_consultants(consultants: List[Dict[str, Any]]) -> None:
    """Print consultant records as a table, one column per field seen."""
    if not consultants:
        console.print("[yellow]No consultants found[/yellow]")
        return

    columns: List[str] = []
    for record in consultants:
        for key in record:
            if key not in columns:
                columns.append(key)

    table = Table(title="Promoted consultants")
    for column in columns:
        table.add_column(str(column), overflow="fold")
    for record in consultants:
        table.add_row(*(escape(str(record.get(column, ""))) for column in columns))

    console.print(table)
    console.print(f"[dim]{len(consultants)} consultant(s)[/dim]")


def _fail(error: Exception) -> NoReturn:
    logger.error("command_failed", error_type=type(error).__name__, error=str(error))
    console.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    sys.exit(1)


def _settings(ctx: click.Context, require_token: bool = True) -> PromoterSettings:
    token: Optional[str] = ctx.obj.get("token")
    endpoint: Optional[str] = ctx.obj.get("endpoint")

    if token:
        return PromoterSettings(api_token=token, endpoint=endpoint or DEFAULT_ENDPOINT)

    try:
        settings = PromoterSettings.from_env()
    except ValueError as e:
        if require_token:
            raise click.UsageError(f"{e} (use --token or the environment)")
        # from_env has already loaded .env at this point
        settings = PromoterSettings(
            api_token="",
            endpoint=os.getenv(ENDPOINT_ENV) or DEFAULT_ENDPOINT,
        )

    if endpoint:
        settings = settings.model_copy(update={"endpoint": endpoint})
    return settings


@click.group()
@click.option("--token", help="Promoter API token (default: $PROMOTER_API_TOKEN)")
@click.option("--endpoint", help="API base URL (default: $PROMOTER_API_ENDPOINT or production)")
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Minimum log level",
)
@click.pass_context
def main(ctx: click.Context, token: Optional[str], endpoint: Optional[str], log_level: str):
    """Manage promoted consultants through the Promoter API."""
    setup_logging("cli", level=log_level)
    ctx.ensure_object(dict)
    ctx.obj["token"] = token
    ctx.obj["endpoint"] = endpoint


@main.command()
@click.option(
    "--sort",
    "-s",
    default=SortOption.STATUS.value,
    show_default=True,
    help="status, rating or rate",
)
@click.option("--filter", "-f", "filters", multiple=True, help="chat=on|off or premium=on|off (repeatable)")
@click.pass_context
def consultants(ctx: click.Context, sort: str, filters: Tuple[str, ...]):
    """List promoted consultants."""
    pairs = [parse_filter(raw) for raw in filters]

    with create_promoter_client(_settings(ctx)) as client:
        try:
            records = client.list_consultants(sort=sort, filters=pairs)
        except PromoterError as e:
            _fail(e)

    render_consultants(records)


@main.command()
@click.argument("profile_name")
@click.argument("rate", type=int)
@click.option("--note", "-n", default="", help="Note attached to the invite")
@click.pass_context
def invite(ctx: click.Context, profile_name: str, rate: int, note: str):
    """Invite a consultant. RATE is in euro cents."""
    with create_promoter_client(_settings(ctx)) as client:
        try:
            registration_url = client.create_consultant_invite(profile_name, rate, note)
        except PromoterError as e:
            _fail(e)

    if not registration_url:
        console.print("[yellow]The API did not accept the invite[/yellow]")
        sys.exit(1)

    console.print("[green]✓ Invite created[/green]")
    console.print(escape(registration_url), soft_wrap=True)


@main.command()
@click.argument("consultant_token")
@click.argument("new_status")
@click.pass_context
def status(ctx: click.Context, consultant_token: str, new_status: str):
    """Change a consultant's status (available, unavailable, paused, fake_busy)."""
    target = parse_status(new_status)

    with create_promoter_client(_settings(ctx, require_token=False)) as client:
        try:
            changed = client.change_consultant_status(consultant_token, target)
        except PromoterError as e:
            _fail(e)

    if not changed:
        console.print("[yellow]The API did not confirm the status change[/yellow]")
        sys.exit(1)

    console.print(f"[green]✓ Status changed to {escape(new_status)}[/green]")


if __name__ == "__main__":
    main()
