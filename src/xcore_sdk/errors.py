"""SDK exception hierarchy."""

from __future__ import annotations

import httpx

from xcore_sdk.models.responses import RespError


class XCoreHTTPError(Exception):
    """Raised when the homeserver returns a non-2xx response.

    ``error`` holds the decoded ``{"errcode", "error"}`` body when the server
    sent one. Otherwise the raw body is kept in ``contents`` and appended to
    the message, so proxy error pages are not lost.
    """

    def __init__(
        self,
        status: int,
        error: RespError | None = None,
        contents: bytes = b"",
        message: str = "",
        response: httpx.Response | None = None,
    ) -> None:
        self.status = status
        self.error = error
        self.contents = contents
        self.message = message or f"HTTP {status}"
        self.response = response
        detail = str(error) if error else self.message
        super().__init__(f"[{status}] {detail}")

    @classmethod
    def from_response(
        cls, response: httpx.Response, method: str = "", path: str = ""
    ) -> XCoreHTTPError:
        """Build from an httpx response, attempting to parse the error body."""
        contents = response.content
        error: RespError | None = None
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("errcode"):
                error = RespError.model_validate(body)
        except ValueError:
            pass

        message = f"Failed to {method} JSON to {path}" if method else f"HTTP {response.status_code}"
        if error is None and contents:
            message = f"{message}: {contents.decode(errors='replace')}"
        return cls(
            status=response.status_code,
            error=error,
            contents=contents,
            message=message,
            response=response,
        )

    @property
    def errcode(self) -> str | None:
        return self.error.errcode if self.error else None


class XCoreNetworkError(Exception):
    """Raised when a transport-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class SyncProcessingError(Exception):
    """Raised when processing a sync response fails, including listener faults.

    Fatal to the sync loop. The failing batch's ``next_batch`` has already
    been stored, so restarting the loop moves past it.
    """

    def __init__(self, user_id: str, since: str, cause: BaseException) -> None:
        self.user_id = user_id
        self.since = since
        self.cause = cause
        super().__init__(
            f"processing sync response failed: user_id={user_id} since={since} "
            f"error={cause!r}"
        )
