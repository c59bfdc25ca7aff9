"""Authentication helpers for the Stackr SDK.

The clients never look up a token on their own. Callers pass one in
explicitly, optionally using :func:`get_token` to read it from the
environment first.
"""

from __future__ import annotations

import os

from .constants import TOKEN_ENV_VAR, USER_AGENT


def get_token(token: str | None = None, env_var: str = TOKEN_ENV_VAR) -> str | None:
    """Get the API token from an explicit value or the environment.

    Checks in order of priority:
    1. Explicitly provided token parameter
    2. The STACKR_TOKEN environment variable (or ``env_var``)

    Args:
        token: Explicitly provided token.
        env_var: Environment variable to read when no token is given.

    Returns:
        The token if found, None otherwise.
    """
    if token:
        return token

    return os.environ.get(env_var) or None


def build_headers(token: str) -> dict[str, str]:
    """Build the headers sent with every request.

    Args:
        token: API token.

    Returns:
        Authorization, User-Agent and Accept headers.
    """
    return {
        "Authorization": f"Bearer {token}",
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }
