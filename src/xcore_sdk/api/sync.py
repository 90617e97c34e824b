"""Filter upload and the raw /sync request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from xcore_sdk.models.filter import Filter
from xcore_sdk.models.responses import RespCreateFilter, RespSync

if TYPE_CHECKING:
    from xcore_sdk.http import HTTPClient

# Extra seconds the HTTP read may take beyond the server-side long-poll wait.
_LONG_POLL_SLACK = 30.0


class SyncAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def create_filter(self, filter_json: dict[str, Any] | Filter) -> RespCreateFilter:
        if isinstance(filter_json, Filter):
            filter_json = filter_json.to_json()
        url = self._http.build_url("user", self._http.user_id, "filter")
        r = await self._http.post(url, json=filter_json)
        return RespCreateFilter.model_validate(r.json())

    async def sync_request(
        self,
        timeout: int,
        since: str = "",
        filter_id: str = "",
        full_state: bool = False,
        set_presence: str = "",
    ) -> RespSync:
        """One long-poll request. ``timeout`` is the server-side wait in milliseconds."""
        query = {"timeout": str(timeout)}
        if since:
            query["since"] = since
        if filter_id:
            query["filter"] = filter_id
        if set_presence:
            query["set_presence"] = set_presence
        if full_state:
            query["full_state"] = "true"
        url = self._http.build_url_with_query(["sync"], query)
        r = await self._http.get(url, timeout=timeout / 1000.0 + _LONG_POLL_SLACK)
        return RespSync.model_validate(r.json())
