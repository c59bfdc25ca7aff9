"""Synchronous wrapper for the Stackr client."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, TypeVar

from .apps import AppsClient, UploadFile
from .client import Stackr
from .config import ClientConfig
from .constants import DEFAULT_UPLOAD_FILENAME
from .models import App, AppLogs, AppStats, DeleteResult

T = TypeVar("T")


def _run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine synchronously.

    This handles the case where we may or may not already be in an event loop.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is None:
        return asyncio.run(coro)

    # Called from inside a running loop: run on a fresh loop in a worker thread
    result: Any = None
    exception: BaseException | None = None

    def run_in_thread() -> None:
        nonlocal result, exception
        try:
            result = asyncio.run(coro)
        except BaseException as e:
            exception = e

    thread = threading.Thread(target=run_in_thread)
    thread.start()
    thread.join()

    if exception is not None:
        raise exception
    return result


class StackrSync:
    """Synchronous client for the Stackr API.

    This is a blocking wrapper around the async :class:`Stackr` client. Each
    call opens its own connection on its own event loop and closes it when
    done, so one instance can be shared between threads.

    Example:
        ```python
        from stackr import StackrSync

        with StackrSync(token="sk_live_...") as client:
            for app in client.apps.list():
                print(app.name, app.status)
        ```
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: int | None = None,
        debug: bool | None = None,
    ) -> None:
        """Initialize the synchronous Stackr client.

        Args:
            token: API token (``sk_live_...``).
            base_url: Override the base URL.
            timeout: Request timeout in milliseconds.
            debug: Log every request and response.

        Raises:
            ValidationError: If the token is missing or any value is invalid.
        """
        self._config = ClientConfig.resolve(
            token, base_url=base_url, timeout=timeout, debug=debug
        )
        self.apps = AppsClientSync(self)

    @property
    def config(self) -> ClientConfig:
        """Resolved configuration used by this client (read-only)."""
        return self._config

    def __enter__(self) -> StackrSync:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager."""
        self.close()

    def close(self) -> None:
        """Close the client.

        Connections never outlive a call, so there is nothing left to release.
        """

    def _call(self, operation: Callable[[AppsClient], Awaitable[T]]) -> T:
        async def scoped() -> T:
            async with Stackr(
                token=self._config.token,
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                debug=self._config.debug,
            ) as client:
                return await operation(client.apps)

        return _run_sync(scoped())


class AppsClientSync:
    """Blocking counterpart of :class:`stackr.apps.AppsClient`."""

    def __init__(self, client: StackrSync) -> None:
        self._client = client

    def list(self) -> list[App]:
        """List all apps in your account."""
        return self._client._call(lambda apps: apps.list())

    def get(self, app_id: str) -> App:
        """Get details of a specific app."""
        return self._client._call(lambda apps: apps.get(app_id))

    def logs(self, app_id: str) -> AppLogs:
        """Fetch the logs of an app."""
        return self._client._call(lambda apps: apps.logs(app_id))

    def stats(self, app_id: str) -> AppStats:
        """Get current CPU, memory and network stats for an app."""
        return self._client._call(lambda apps: apps.stats(app_id))

    def upload(
        self,
        file: UploadFile | None = None,
        name: str | None = None,
        filename: str = DEFAULT_UPLOAD_FILENAME,
        **fields: Any,
    ) -> App:
        """Upload a ``.zip`` archive and deploy it as an app.

        Args:
            file: The archive, as bytes, a path, or a binary file object.
            name: Display name for the app.
            filename: Filename sent with the archive part.
            **fields: Extra form fields. None values are skipped.

        Returns:
            The deployed app.
        """
        return self._client._call(
            lambda apps: apps.upload(file=file, name=name, filename=filename, **fields)
        )

    def start(self, app_id: str) -> App:
        """Start a stopped app."""
        return self._client._call(lambda apps: apps.start(app_id))

    def stop(self, app_id: str) -> App:
        """Stop a running app."""
        return self._client._call(lambda apps: apps.stop(app_id))

    def restart(self, app_id: str) -> App:
        """Restart an app."""
        return self._client._call(lambda apps: apps.restart(app_id))

    def rebuild(self, app_id: str) -> App:
        """Rebuild the app's container from scratch."""
        return self._client._call(lambda apps: apps.rebuild(app_id))

    def delete(self, app_id: str) -> DeleteResult:
        """Permanently delete an app."""
        return self._client._call(lambda apps: apps.delete(app_id))
