"""Stackr Python SDK.

This SDK provides a typed client for the Stackr API: list, inspect, deploy
and control the apps hosted in your account.

Basic Usage:
    ```python
    import os

    from stackr import Stackr

    # Async usage
    async with Stackr(token=os.environ["STACKR_TOKEN"]) as client:
        apps = await client.apps.list()
        app = await client.apps.upload(Path("my-app.zip"), name="my-api")
        await client.apps.restart(app.id)

    # Sync usage
    from stackr import StackrSync

    with StackrSync(token=os.environ["STACKR_TOKEN"]) as client:
        stats = client.apps.stats("app_abc123")
        print(f"CPU: {stats.cpu}% | RAM: {stats.memory}MB")
    ```

Errors:
    ```python
    from stackr import StackrError

    try:
        await client.apps.get("bad-id")
    except StackrError as err:
        if err.kind == "api":
            print(err.status_code, err.body, err.path)
    ```
"""

from ._sync import AppsClientSync, StackrSync
from .apps import AppsClient
from .auth import build_headers, get_token
from .client import Stackr
from .config import ClientConfig
from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, USER_AGENT
from .exceptions import (
    APIError,
    ErrorKind,
    StackrError,
    TimeoutError,
    TransportError,
    ValidationError,
)
from .models import (
    KNOWN_APP_STATUSES,
    App,
    AppLogs,
    AppStats,
    AppStatus,
    DeleteResult,
    NetworkStats,
    UploadRequest,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Main clients
    "Stackr",
    "StackrSync",
    "AppsClient",
    "AppsClientSync",
    # Configuration
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "USER_AGENT",
    # Models
    "App",
    "AppStatus",
    "KNOWN_APP_STATUSES",
    "AppStats",
    "NetworkStats",
    "AppLogs",
    "DeleteResult",
    "UploadRequest",
    # Auth
    "get_token",
    "build_headers",
    # Exceptions
    "StackrError",
    "ErrorKind",
    "ValidationError",
    "APIError",
    "TimeoutError",
    "TransportError",
]
