"""Server-level queries: versions, TURN, room directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from xcore_sdk.models.responses import RespPublicRooms, RespTurnServer, RespVersions

if TYPE_CHECKING:
    from xcore_sdk.http import HTTPClient


class ServerAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def versions(self) -> RespVersions:
        """Protocol versions the homeserver supports. Not under the API prefix."""
        r = await self._http.get(self._http.build_base_url("_matrix", "client", "versions"))
        return RespVersions.model_validate(r.json())

    async def turn_server(self) -> RespTurnServer:
        r = await self._http.get(self._http.build_url("voip", "turnServer"))
        return RespTurnServer.model_validate(r.json())

    async def public_rooms(
        self, *, limit: int = 0, since: str = "", server: str = ""
    ) -> RespPublicRooms:
        query: dict[str, str] = {}
        if limit:
            query["limit"] = str(limit)
        if since:
            query["since"] = since
        if server:
            query["server"] = server
        r = await self._http.get(self._http.build_url_with_query(["publicRooms"], query))
        return RespPublicRooms.model_validate(r.json())

    async def public_rooms_filtered(
        self, *, limit: int = 0, since: str = "", server: str = "", filter: str = ""
    ) -> RespPublicRooms:
        """Public rooms filtered on the server side."""
        payload: dict[str, Any] = {}
        if limit:
            payload["limit"] = limit
        if since:
            payload["since"] = since
        if filter:
            payload["filter"] = filter
        if server:
            url = self._http.build_url_with_query(["publicRooms"], {"server": server})
        else:
            url = self._http.build_url("publicRooms")
        r = await self._http.post(url, json=payload)
        return RespPublicRooms.model_validate(r.json())
