"""App management operations, exposed as ``client.apps``."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO, Union
from urllib.parse import quote

from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_UPLOAD_FILENAME, UPLOAD_CONTENT_TYPE
from .exceptions import ValidationError
from .models import App, AppLogs, AppStats, DeleteResult, UploadRequest

if TYPE_CHECKING:
    from .client import Stackr

UploadFile = Union[bytes, bytearray, memoryview, str, Path, BinaryIO]

_APP_LIST = list[App]


def require_id(app_id: Any, method: str) -> str:
    """Check that ``app_id`` is a non-empty string.

    Raises:
        ValidationError: Otherwise.
    """
    if not app_id or not isinstance(app_id, str):
        raise ValidationError(f"{method} requires a valid app id")
    return app_id


def _app_path(app_id: str, *segments: str) -> str:
    """Build `/apps/{id}/...` with the id encoded as a single path segment."""
    return "/".join(["/apps", quote(app_id, safe=""), *segments])


class AppsClient:
    """Deploy, control and monitor apps.

    Every method makes exactly one request. Nothing is retried.
    """

    def __init__(self, client: Stackr) -> None:
        self._client = client

    # ==================== QUERIES ====================

    async def list(self) -> list[App]:
        """List all apps in your account.

        ``GET /apps``

        Returns:
            List of apps.
        """
        return await self._client._request("GET", "/apps", response_model=_APP_LIST)

    async def get(self, app_id: str) -> App:
        """Get details of a specific app.

        ``GET /apps/{id}``

        Args:
            app_id: App ID.

        Returns:
            The app.

        Raises:
            ValidationError: If app_id is empty or not a string.
            APIError: If the app doesn't exist (status 404) or the call fails.
        """
        require_id(app_id, "apps.get")
        return await self._client._request("GET", _app_path(app_id), response_model=App)

    async def logs(self, app_id: str) -> AppLogs:
        """Fetch the logs of an app.

        ``GET /apps/{id}/logs``
        """
        require_id(app_id, "apps.logs")
        return await self._client._request(
            "GET", _app_path(app_id, "logs"), response_model=AppLogs
        )

    async def stats(self, app_id: str) -> AppStats:
        """Get current CPU, memory and network stats for an app.

        ``GET /apps/{id}/stats``
        """
        require_id(app_id, "apps.stats")
        return await self._client._request(
            "GET", _app_path(app_id, "stats"), response_model=AppStats
        )

    # ==================== ACTIONS ====================

    async def upload(
        self,
        file: UploadFile | None = None,
        name: str | None = None,
        filename: str = DEFAULT_UPLOAD_FILENAME,
        **fields: Any,
    ) -> App:
        """Upload a ``.zip`` archive and deploy it as an app.

        ``POST /apps/upload`` (multipart/form-data)

        Args:
            file: The archive, as bytes, a path, or a file object opened in binary mode.
            name: Display name for the app. Omitted from the form when empty.
            filename: Filename sent with the archive part.
            **fields: Extra form fields. None values are skipped.

        Returns:
            The deployed app.

        Raises:
            ValidationError: If no usable file is given, the path doesn't exist,
                or the archive can't be read.

        Example:
            ```python
            app = await client.apps.upload(Path("my-app.zip"), name="my-api")
            print("Deployed! ID:", app.id)
            ```
        """
        if file is None:
            raise ValidationError("apps.upload requires a file (.zip)")

        if isinstance(file, str):
            file = Path(file)
        if isinstance(file, Path) and not file.is_file():
            raise ValidationError(f"apps.upload file not found: {file}")

        try:
            request = UploadRequest(file=file, name=name, filename=filename, **fields)
        except PydanticValidationError as e:
            raise ValidationError(
                f"apps.upload received invalid fields: {e.error_count()} error(s)"
            ) from e

        content = request.read_file()
        return await self._client._request(
            "POST",
            "/apps/upload",
            files={"file": (request.filename, content, UPLOAD_CONTENT_TYPE)},
            data=request.form_fields(),
            response_model=App,
        )

    async def start(self, app_id: str) -> App:
        """Start a stopped app.

        ``POST /apps/{id}/start``
        """
        require_id(app_id, "apps.start")
        return await self._action(app_id, "start")

    async def stop(self, app_id: str) -> App:
        """Stop a running app.

        ``POST /apps/{id}/stop``
        """
        require_id(app_id, "apps.stop")
        return await self._action(app_id, "stop")

    async def restart(self, app_id: str) -> App:
        """Restart an app.

        ``POST /apps/{id}/restart``
        """
        require_id(app_id, "apps.restart")
        return await self._action(app_id, "restart")

    async def rebuild(self, app_id: str) -> App:
        """Rebuild the app's container from scratch.

        ``POST /apps/{id}/rebuild``
        """
        require_id(app_id, "apps.rebuild")
        return await self._action(app_id, "rebuild")

    async def delete(self, app_id: str) -> DeleteResult:
        """Permanently delete an app.

        ``POST /apps/{id}/delete``

        This cannot be undone. The app and all its data are lost.
        """
        require_id(app_id, "apps.delete")
        return await self._client._request(
            "POST", _app_path(app_id, "delete"), response_model=DeleteResult
        )

    async def _action(self, app_id: str, action: str) -> App:
        return await self._client._request(
            "POST", _app_path(app_id, action), response_model=App
        )
