"""Client configuration for the Stackr SDK."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS
from .exceptions import ValidationError


class ClientConfig(BaseModel):
    """Resolved configuration used by a client instance.

    Frozen: assigning to a field raises. Build a new client to change it.
    """

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., min_length=1, repr=False, description="API token (sk_live_...)")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base URL")
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, description="Timeout in ms")
    debug: bool = Field(default=False, description="Log every request and response")

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        value = value.rstrip("/")
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"not a valid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("must be an absolute http(s) URL")
        return value

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted for httpx, which takes seconds."""
        return self.timeout / 1000

    @classmethod
    def resolve(
        cls,
        token: Any,
        base_url: str | None = None,
        timeout: int | None = None,
        debug: bool | None = None,
    ) -> ClientConfig:
        """Validate user input and fill in defaults.

        Args:
            token: API token. Must be a non-empty string.
            base_url: Base URL override. Must be an absolute http(s) URL;
                trailing slashes are stripped.
            timeout: Timeout override in milliseconds.
            debug: Enable request/response logging.

        Returns:
            The resolved configuration.

        Raises:
            ValidationError: If the token is missing or any value is invalid.
        """
        if not token or not isinstance(token, str):
            raise ValidationError(
                "token is required. Generate one at: Dashboard → Settings → API Token"
            )

        try:
            return cls(
                token=token,
                base_url=DEFAULT_BASE_URL if base_url is None else base_url,
                timeout=DEFAULT_TIMEOUT_MS if timeout is None else timeout,
                debug=False if debug is None else debug,
            )
        except PydanticValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ValidationError(f"invalid client configuration ({errors})") from e
