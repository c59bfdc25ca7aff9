"""CLI commands for managing hosted apps."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from ..._sync import StackrSync
from ...auth import get_token
from ...constants import TOKEN_ENV_VAR
from ...exceptions import StackrError
from ...models import App
from ..utils import format_timestamp, parse_fields, report_error

STATUS_COLORS = {
    "running": "green",
    "stopped": "white",
    "building": "yellow",
    "starting": "cyan",
    "stopping": "cyan",
    "error": "red",
}


def _get_client(ctx: click.Context) -> StackrSync:
    """Build a client from the global options, or exit if no token is set."""
    options = ctx.obj or {}
    token = get_token(options.get("token"))
    if not token:
        click.echo("Error: No API token found.", err=True)
        click.echo(f"Hint: Set {TOKEN_ENV_VAR} or pass --token.", err=True)
        sys.exit(1)

    try:
        return StackrSync(
            token=token,
            base_url=options.get("base_url"),
            timeout=options.get("timeout"),
            debug=options.get("debug"),
        )
    except StackrError as e:
        report_error(e)
        sys.exit(1)


def _run(ctx: click.Context, operation: Callable[[Any], Any]) -> Any:
    """Run one SDK call against ``client.apps``, exiting 1 on SDK errors."""
    client = _get_client(ctx)
    try:
        with client:
            return operation(client.apps)
    except StackrError as e:
        report_error(e)
        sys.exit(1)


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


def _echo_app(app: App) -> None:
    color = STATUS_COLORS.get(app.status, "white")

    click.echo(f"\n{click.style(app.name, bold=True)}")
    click.echo(f"  ID:      {app.id}")
    click.echo(f"  Status:  {click.style(app.status, fg=color)}")
    if app.created_at:
        click.echo(f"  Created: {format_timestamp(app.created_at)}")
    if app.updated_at:
        click.echo(f"  Updated: {format_timestamp(app.updated_at)}")
    click.echo()


@click.group()
def apps():
    """Manage hosted apps."""
    pass


@apps.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_apps(ctx: click.Context, as_json: bool):
    """List all apps in your account."""
    app_list = _run(ctx, lambda a: a.list())

    if as_json:
        click.echo(json.dumps([_dump(app) for app in app_list], indent=2))
        return

    if not app_list:
        click.echo("No apps found. Deploy one with: stackr apps upload <archive.zip>")
        return

    click.echo(f"{'ID':<24} {'NAME':<25} {'STATUS':<10} {'UPDATED':<15}")
    click.echo("-" * 77)

    for app in app_list:
        color = STATUS_COLORS.get(app.status, "white")
        status = click.style(f"{app.status:<10}", fg=color)
        updated = format_timestamp(app.updated_at, short=True)
        click.echo(f"{app.id:<24} {app.name:<25} {status} {updated:<15}")


@apps.command("get")
@click.argument("app_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def get_app(ctx: click.Context, app_id: str, as_json: bool):
    """Show details of an app."""
    app = _run(ctx, lambda a: a.get(app_id))

    if as_json:
        click.echo(json.dumps(_dump(app), indent=2))
    else:
        _echo_app(app)


@apps.command("logs")
@click.argument("app_id")
@click.pass_context
def app_logs(ctx: click.Context, app_id: str):
    """Print the logs of an app."""
    result = _run(ctx, lambda a: a.logs(app_id))
    click.echo(result.logs)


@apps.command("stats")
@click.argument("app_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def app_stats(ctx: click.Context, app_id: str, as_json: bool):
    """Show CPU, memory and network usage of an app."""
    stats = _run(ctx, lambda a: a.stats(app_id))

    if as_json:
        click.echo(json.dumps(_dump(stats), indent=2))
        return

    click.echo(f"CPU:     {stats.cpu}%")
    click.echo(f"Memory:  {stats.memory}MB")
    click.echo(f"Network: in {stats.network.in_} / out {stats.network.out}")
    if stats.uptime is not None:
        click.echo(f"Uptime:  {stats.uptime}")


@apps.command("upload")
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", default=None, help="Display name for the app")
@click.option(
    "--field",
    "fields",
    multiple=True,
    metavar="KEY=VALUE",
    help="Extra form field to send (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def upload_app(
    ctx: click.Context,
    archive: Path,
    name: str | None,
    fields: tuple[str, ...],
    as_json: bool,
):
    """Upload a .zip archive and deploy it."""
    try:
        extra = parse_fields(fields)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--field") from e

    name = name or extra.pop("name", None)
    for reserved in ("file", "name", "filename"):
        extra.pop(reserved, None)

    app = _run(ctx, lambda a: a.upload(archive, name=name, **extra))

    if as_json:
        click.echo(json.dumps(_dump(app), indent=2))
        return

    click.echo(f"Deployed! ID: {app.id}")
    _echo_app(app)


def _action_command(action: str, summary: str, done: str) -> click.Command:
    @click.argument("app_id")
    @click.option("--json", "as_json", is_flag=True, help="Output as JSON")
    @click.pass_context
    def command(ctx: click.Context, app_id: str, as_json: bool):
        app = _run(ctx, lambda a: getattr(a, action)(app_id))

        if as_json:
            click.echo(json.dumps(_dump(app), indent=2))
            return

        click.echo(f"App '{app.name}' {done} (status: {app.status}).")

    command.__doc__ = summary
    return apps.command(action)(command)


_action_command("start", "Start a stopped app.", "starting")
_action_command("stop", "Stop a running app.", "stopping")
_action_command("restart", "Restart an app.", "restarting")
_action_command("rebuild", "Rebuild the app's container from scratch.", "rebuilding")


@apps.command("delete")
@click.argument("app_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_app(ctx: click.Context, app_id: str, force: bool):
    """Permanently delete an app.

    This cannot be undone. The app and all its data are lost.
    """
    if not force:
        click.confirm(
            f"Are you sure you want to delete app '{app_id}'?",
            abort=True,
        )

    result = _run(ctx, lambda a: a.delete(app_id))

    if result.success:
        click.echo(f"App '{app_id}' deleted.")
    else:
        click.echo(f"Error: App '{app_id}' was not deleted.", err=True)
        sys.exit(1)
