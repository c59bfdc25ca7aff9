"""Pydantic models for the Stackr SDK.

Resources are owned by the server. Every model keeps unknown fields in
``model_extra`` so that ``model_dump(by_alias=True)`` gives back what the API
sent.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_UPLOAD_FILENAME
from .exceptions import ValidationError

KnownAppStatus = Literal["running", "stopped", "building", "error", "starting", "stopping"]

# Statuses outside KnownAppStatus are kept as plain strings
AppStatus = Union[KnownAppStatus, str]

KNOWN_APP_STATUSES: frozenset[str] = frozenset(
    {"running", "stopped", "building", "error", "starting", "stopping"}
)


class _Resource(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class App(_Resource):
    """Application resource returned from the API."""

    id: str = Field(..., description="App ID")
    name: str = Field(..., description="Display name")
    status: AppStatus = Field(..., description="Lifecycle status")
    created_at: str = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: str = Field(..., alias="updatedAt", description="Last update timestamp")

    @property
    def is_known_status(self) -> bool:
        """Whether the status is one this SDK version knows about."""
        return self.status in KNOWN_APP_STATUSES

    @property
    def is_running(self) -> bool:
        return self.status == "running"


class NetworkStats(_Resource):
    """Network counters for an app."""

    in_: float = Field(..., alias="in", description="Inbound traffic")
    out: float = Field(..., description="Outbound traffic")


class AppStats(_Resource):
    """Resource usage snapshot for an app."""

    cpu: float = Field(..., description="CPU usage in percent")
    memory: float = Field(..., description="Memory usage (server-defined unit)")
    network: NetworkStats = Field(..., description="Network counters")
    uptime: float | None = Field(None, description="Uptime, when reported")


class AppLogs(_Resource):
    """Log output for an app."""

    logs: str = Field(..., description="Log text")


class DeleteResult(_Resource):
    """Acknowledgement returned by the delete action."""

    success: bool = Field(..., description="Whether the app was deleted")


class UploadRequest(BaseModel):
    """Deployment archive plus the form fields sent alongside it.

    Extra keyword fields are sent as additional form fields.
    """

    model_config = ConfigDict(extra="allow")

    # bytes-like, a Path, or a binary file object
    file: Any = Field(..., description="Deployment archive")
    name: str | None = Field(None, description="Display name for the app")
    filename: str = Field(
        default=DEFAULT_UPLOAD_FILENAME, description="Filename of the archive part"
    )

    def read_file(self) -> bytes:
        """Return the archive contents as bytes.

        Raises:
            ValidationError: If ``file`` isn't bytes, a path or a binary file
                object, or can't be read.
        """
        if isinstance(self.file, (bytes, bytearray, memoryview)):
            return bytes(self.file)
        if not isinstance(self.file, Path) and not hasattr(self.file, "read"):
            raise ValidationError("apps.upload requires a file (.zip)")

        try:
            content = (
                self.file.read_bytes() if isinstance(self.file, Path) else self.file.read()
            )
        except (OSError, ValueError) as e:
            raise ValidationError(f"apps.upload could not read the file: {e}") from e

        if not isinstance(content, (bytes, bytearray, memoryview)):
            raise ValidationError("apps.upload requires a binary file (open it with 'rb')")
        return bytes(content)

    def form_fields(self) -> dict[str, str]:
        """Build the non-file form fields.

        ``name`` is only included when non-empty, extra fields only when not
        None. Booleans are sent as ``true``/``false``.
        """
        fields: dict[str, str] = {}
        if self.name:
            fields["name"] = self.name

        for key, value in (self.model_extra or {}).items():
            if value is None:
                continue
            fields[key] = _form_value(value)

        return fields


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

