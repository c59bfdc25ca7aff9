#!/usr/bin/env python3
"""Stackr CLI - Deploy and control apps hosted on Stackr

Usage:
    stackr apps list
    stackr apps get|logs|stats <app-id>
    stackr apps upload <archive.zip> [--name NAME] [--field KEY=VALUE]
    stackr apps start|stop|restart|rebuild <app-id>
    stackr apps delete <app-id> [--force]

The API token is read from --token or the STACKR_TOKEN environment variable.
"""

import logging
import sys
from importlib.metadata import version

import click

from ..constants import BASE_URL_ENV_VAR, TOKEN_ENV_VAR
from ..exceptions import StackrError
from .commands.apps import apps
from .utils import report_error


@click.group()
@click.version_option(version=version("stackr-sdk"))
@click.option(
    "--token",
    default=None,
    help=f"API token (defaults to ${TOKEN_ENV_VAR})",
)
@click.option(
    "--base-url",
    envvar=BASE_URL_ENV_VAR,
    default=None,
    help="Override the API base URL",
)
@click.option("--timeout", type=int, default=None, help="Request timeout in milliseconds")
@click.option("--debug", is_flag=True, help="Log every request and response")
@click.pass_context
def cli(ctx: click.Context, token, base_url, timeout, debug):
    """Stackr CLI - Deploy and control apps hosted on Stackr"""
    if debug:
        logging.basicConfig(level=logging.INFO, format="[stackr] %(message)s")

    ctx.obj = {
        "token": token,
        "base_url": base_url,
        "timeout": timeout,
        "debug": debug,
    }


cli.add_command(apps)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except StackrError as e:
        report_error(e)
        sys.exit(1)
    except (click.Abort, KeyboardInterrupt):
        click.echo(err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
