"""Exception classes for the Stackr SDK.

Every error the SDK raises is a :class:`StackrError`. The ``kind`` attribute
identifies which of the four failure kinds occurred, so callers can catch the
base class once and branch on ``err.kind`` instead of on the class.
"""

from __future__ import annotations

from typing import Any, Literal

ErrorKind = Literal["validation", "api", "timeout", "transport"]


class StackrError(Exception):
    """Base exception for all Stackr SDK errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(StackrError):
    """A required argument was missing or malformed.

    Raised before any network call is made. Always fixable by the caller.
    """

    kind: ErrorKind = "validation"

    def __init__(self, message: str) -> None:
        super().__init__(f"[stackr] {message}")


class APIError(StackrError):
    """The Stackr API answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code returned by the API.
        body: Response body as the server sent it. Decoded JSON when the body
            parses, otherwise the raw text ("" for an empty body).
        path: Request path that triggered the error, e.g. ``/apps/abc``.
    """

    kind: ErrorKind = "api"

    def __init__(
        self,
        status_code: int,
        body: Any,
        path: str,
        message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.path = path
        super().__init__(message or f"[stackr] {status_code} on {path}")

    @property
    def is_retryable(self) -> bool:
        """Check if retrying the same request could succeed.

        The SDK never retries on its own; this is a hint for callers.

        Returns:
            True for 429 Too Many Requests and 5xx server errors.
        """
        return self.status_code == 429 or self.status_code >= 500


class TimeoutError(StackrError):
    """The request exceeded its timeout and was aborted.

    Attributes:
        path: Request path that timed out.
        timeout_ms: The timeout that was exceeded, in milliseconds.
    """

    kind: ErrorKind = "timeout"

    def __init__(self, path: str, timeout_ms: int) -> None:
        self.path = path
        self.timeout_ms = timeout_ms
        super().__init__(f'[stackr] Request to "{path}" timed out after {timeout_ms}ms')


class TransportError(StackrError):
    """The request could not complete for a reason other than a timeout.

    This covers DNS failures, refused or reset connections and TLS errors.

    Attributes:
        path: Request path that failed.
        description: Human-readable description of the underlying failure.
        cause: The underlying exception, if any.
    """

    kind: ErrorKind = "transport"

    def __init__(
        self,
        path: str,
        description: str,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.description = description
        self.cause = cause
        super().__init__(f"[stackr] Network error on {path}: {description}")


def raise_for_status(
    status_code: int,
    body: Any,
    path: str,
    method: str | None = None,
) -> None:
    """Raise :class:`APIError` for any status outside the 2xx range.

    Args:
        status_code: HTTP status code.
        body: Decoded response body, kept verbatim on the error.
        path: Request path.
        method: HTTP method, included in the error message when given.

    Raises:
        APIError: For 1xx, 3xx, 4xx and 5xx status codes.
    """
    if 200 <= status_code < 300:
        return

    target = f"{method.upper()} {path}" if method else path
    raise APIError(status_code, body, path, f"[stackr] {status_code} on {target}")
