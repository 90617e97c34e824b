"""HTTP client wrapping httpx with auth headers and homeserver URL building."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

import httpx

from xcore_sdk.errors import XCoreHTTPError, XCoreNetworkError

DEFAULT_PREFIX = "/_matrix/client/r0"

# Characters left unescaped inside a path segment. Room and user IDs keep
# their sigils and server names readable; "#" and "?" are escaped.
_PATH_SAFE = "/!:@$&'()*+,;="


class HTTPClient:
    """Async HTTP client for the client-server API.

    Requests are single-shot: a failed request raises and is never retried
    here. Retrying a failed sync is the syncer's decision.
    """

    def __init__(
        self,
        homeserver_url: str,
        access_token: str | None = None,
        *,
        user_id: str = "",
        prefix: str = DEFAULT_PREFIX,
        app_service_user_id: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.homeserver_url = homeserver_url.rstrip("/")
        self.prefix = prefix
        self.user_id = user_id
        # Must be set before a request is built; sent as ?user_id= on every URL.
        self.app_service_user_id = app_service_user_id
        self._token = access_token
        self._client = httpx.AsyncClient(timeout=timeout)

    @property
    def token(self) -> str | None:
        return self._token

    @token.setter
    def token(self, value: str | None) -> None:
        self._token = value

    def _headers(self) -> dict[str, str]:
        h: dict[str, str] = {}
        if self._token:
            h["Authorization"] = f"Bearer {self._token}"
        return h

    # --- URL building ---

    def build_url(self, *parts: str) -> str:
        """Build a URL under the API prefix, e.g. ``build_url("rooms", room_id, "leave")``."""
        return self.build_base_url(self.prefix, *parts)

    def build_base_url(self, *parts: str) -> str:
        """Build a URL from the homeserver root. The caller supplies any prefix.

        A trailing slash on the last part is kept.
        """
        return self._with_query(self._join_path(parts), {})

    def build_url_with_query(self, parts: list[str], query: dict[str, str]) -> str:
        """Like :meth:`build_url`, plus query parameters."""
        return self._with_query(self._join_path([self.prefix, *parts]), query)

    def _join_path(self, parts: tuple[str, ...] | list[str]) -> str:
        segments = [p.strip("/") for p in parts if p.strip("/")]
        path = "/" + "/".join(quote(s, safe=_PATH_SAFE) for s in segments)
        if parts and parts[-1].endswith("/") and path != "/":
            path += "/"
        return self.homeserver_url + path

    def _with_query(self, url: str, query: dict[str, str]) -> str:
        params: dict[str, str] = {}
        if self.app_service_user_id:
            params["user_id"] = self.app_service_user_id
        params.update(query)
        if not params:
            return url
        return f"{url}?{urlencode(params)}"

    # --- Requests ---

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Response:
        """Make a request to a URL built by one of the ``build_*`` methods.

        Raises :class:`XCoreHTTPError` for non-2xx responses and
        :class:`XCoreNetworkError` when the request never completes or its
        body cannot be read (bad content-encoding, redirect loops).
        """
        merged_headers = self._headers()
        if headers:
            merged_headers.update(headers)

        try:
            response = await self._client.request(
                method,
                url,
                json=json,
                content=content,
                headers=merged_headers,
                timeout=timeout,
            )
        except httpx.RequestError as exc:
            raise XCoreNetworkError(str(exc)) from exc

        if not response.is_success:
            raise XCoreHTTPError.from_response(response, method, httpx.URL(url).path)
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def close(self) -> None:
        await self._client.aclose()
