"""Profile and presence."""

from __future__ import annotations

from typing import TYPE_CHECKING

from xcore_sdk.models.responses import RespUserDisplayName, RespUserStatus

if TYPE_CHECKING:
    from xcore_sdk.http import HTTPClient


class ProfileAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    async def get_display_name(self, user_id: str) -> RespUserDisplayName:
        r = await self._http.get(self._http.build_url("profile", user_id, "displayname"))
        return RespUserDisplayName.model_validate(r.json())

    async def get_own_display_name(self) -> RespUserDisplayName:
        return await self.get_display_name(self._http.user_id)

    async def set_display_name(self, display_name: str) -> None:
        url = self._http.build_url("profile", self._http.user_id, "displayname")
        await self._http.put(url, json={"displayname": display_name})

    async def get_avatar_url(self) -> str:
        url = self._http.build_url("profile", self._http.user_id, "avatar_url")
        r = await self._http.get(url)
        return r.json().get("avatar_url", "")

    async def set_avatar_url(self, avatar_url: str) -> None:
        url = self._http.build_url("profile", self._http.user_id, "avatar_url")
        await self._http.put(url, json={"avatar_url": avatar_url})

    async def get_status(self, user_id: str) -> RespUserStatus:
        r = await self._http.get(self._http.build_url("presence", user_id, "status"))
        return RespUserStatus.model_validate(r.json())

    async def get_own_status(self) -> RespUserStatus:
        return await self.get_status(self._http.user_id)

    async def set_status(self, presence: str, status_msg: str) -> None:
        url = self._http.build_url("presence", self._http.user_id, "status")
        await self._http.put(url, json={"presence": presence, "status_msg": status_msg})
