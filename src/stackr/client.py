"""Async HTTP client for the Stackr API."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .apps import AppsClient
from .auth import build_headers
from .config import ClientConfig
from .exceptions import APIError, TimeoutError, TransportError, raise_for_status

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _adapter(response_model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_model)


class Stackr:
    """Async client for the Stackr API.

    This is the main entry point for managing apps hosted on Stackr.

    Example:
        ```python
        import asyncio
        import os

        from stackr import Stackr

        async def main():
            async with Stackr(token=os.environ["STACKR_TOKEN"]) as client:
                for app in await client.apps.list():
                    print(app.name, app.status)

                await client.apps.restart("app_abc123")

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: int | None = None,
        debug: bool | None = None,
    ) -> None:
        """Initialize the Stackr client.

        Args:
            token: API token (``sk_live_...``). Generate one at
                Dashboard → Settings → API Token.
            base_url: Override the base URL. Defaults to https://api.stackr.lat/v1.
            timeout: Request timeout in milliseconds. Defaults to 30000.
            debug: Log every request and response through the ``stackr`` logger.

        Raises:
            ValidationError: If the token is missing or empty.
        """
        self._config = ClientConfig.resolve(
            token, base_url=base_url, timeout=timeout, debug=debug
        )
        self._client: httpx.AsyncClient | None = None
        self.apps = AppsClient(self)

    @property
    def config(self) -> ClientConfig:
        """Resolved configuration used by this client (read-only)."""
        return self._config

    async def __aenter__(self) -> Stackr:
        """Enter async context manager."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure the HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=httpx.Timeout(self._config.timeout_seconds),
                headers=build_headers(self._config.token),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Any = None,
        files: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: int | None = None,
        response_model: Any = None,
    ) -> Any:
        """Make exactly one request to the API.

        Args:
            method: HTTP method.
            path: API path relative to the base URL, with a leading slash.
            json_data: JSON body data.
            files: Files for a multipart upload.
            data: Form fields sent alongside ``files``.
            headers: Headers merged over the client defaults for this call.
            timeout: Timeout override for this call, in milliseconds.
            response_model: Type to validate the decoded body against.

        Returns:
            The decoded JSON body (None for an empty body), validated against
            ``response_model`` when one is given.

        Raises:
            APIError: On a non-2xx response, or a 2xx body that can't be decoded.
            TimeoutError: When the timeout elapses before a response arrives.
            TransportError: On any other network failure.
        """
        client = await self._ensure_client()
        method = method.upper()
        timeout_ms = timeout if timeout is not None else self._config.timeout

        if self._config.debug:
            logger.info(f"→ {method} {path}")

        try:
            response = await client.request(
                method,
                path,
                json=json_data,
                files=files,
                data=data,
                headers=headers,
                timeout=(
                    httpx.Timeout(timeout_ms / 1000)
                    if timeout is not None
                    else httpx.USE_CLIENT_DEFAULT
                ),
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(path, timeout_ms) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(path, str(e) or type(e).__name__, e) from e

        if not response.is_success:
            raise_for_status(response.status_code, _error_body(response), path, method)

        if self._config.debug:
            logger.info(f"← {response.status_code} {path}")

        body = _success_body(response, method, path)
        if response_model is None:
            return body

        try:
            return _adapter(response_model).validate_python(body)
        except PydanticValidationError as e:
            raise APIError(
                response.status_code,
                body,
                path,
                f"[stackr] Unexpected response format on {method} {path}: "
                f"{e.error_count()} validation error(s)",
            ) from e


def _error_body(response: httpx.Response) -> Any:
    """Decode an error body, falling back to the raw text."""
    if not response.content:
        return ""
    try:
        return response.json()
    except ValueError:
        return response.text


def _success_body(response: httpx.Response, method: str, path: str) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise APIError(
            response.status_code,
            response.text,
            path,
            f"[stackr] Invalid JSON in {response.status_code} response on {method} {path}",
        ) from e
