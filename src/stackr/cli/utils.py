"""Shared utility functions for CLI commands."""

from datetime import datetime

import click

from ..exceptions import APIError, StackrError, TimeoutError, TransportError

API_HINTS = {
    401: "Hint: Check your API token (Dashboard → Settings → API Token).",
    403: "Hint: Your token doesn't have permission for this action.",
    404: "Hint: Run 'stackr apps list' to see your apps.",
    409: "Hint: The app is busy. Wait for the current operation to finish.",
    413: "Hint: The archive is too large.",
    422: "Hint: Check your input and try again.",
    429: "Hint: Too many requests. Please wait and try again.",
    500: "Hint: This is a server issue. Please try again later.",
    502: "Hint: The server is temporarily unavailable. Please try again later.",
    503: "Hint: The service is temporarily unavailable. Please try again later.",
}


def report_error(error: StackrError) -> None:
    """Print an SDK error and a hint for it to stderr."""
    click.echo(f"Error: {error.message}", err=True)

    hint = None
    if isinstance(error, APIError):
        hint = API_HINTS.get(error.status_code)
    elif isinstance(error, TimeoutError):
        hint = "Hint: The server may be busy. Try again or raise --timeout."
    elif isinstance(error, TransportError):
        hint = "Hint: Check your internet connection and try again."

    if hint:
        click.echo(hint, err=True)


def format_timestamp(ts: str, short: bool = False) -> str:
    """Format ISO timestamp to readable local time.

    Args:
        ts: ISO 8601 timestamp string.
        short: If True, omit seconds (for list views).

    Returns:
        Formatted local time string.
    """
    if not ts:
        return ""
    try:
        utc = datetime.fromisoformat(ts.replace("Z", "+00:00"))
        local = utc.astimezone()
        if short:
            return local.strftime("%b %d %H:%M")
        return local.strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return ts[:16]


def parse_fields(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated KEY=VALUE options into a dict.

    Raises:
        ValueError: If a pair has no '=' or an empty key.
    """
    fields: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
        fields[key] = value
    return fields
