"""Room membership, messaging and state."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from xcore_sdk.models.base import XCoreModel
from xcore_sdk.models.events import ImageMessage, TextMessage, VideoMessage
from xcore_sdk.models.requests import (
    ReqBanUser,
    ReqCreateRoom,
    ReqInvite3PID,
    ReqInviteUser,
    ReqKickUser,
    ReqRedact,
    ReqTyping,
    ReqUnbanUser,
)
from xcore_sdk.models.responses import (
    RespCreateRoom,
    RespJoinedMembers,
    RespJoinedRooms,
    RespJoinRoom,
    RespMessages,
    RespSendEvent,
)
from xcore_sdk.pagination import MessageIterator

if TYPE_CHECKING:
    from xcore_sdk.http import HTTPClient

MESSAGE_EVENT = "m.room.message"
HTML_FORMAT = "org.matrix.custom.html"


def txn_id() -> str:
    """A transaction ID unique to this client process."""
    return f"py{time.time_ns()}"


def _body(content: Any) -> Any:
    if isinstance(content, XCoreModel):
        return content.to_json()
    return content


class RoomsAPI:
    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    # --- Membership ---

    async def create(self, req: ReqCreateRoom) -> RespCreateRoom:
        """Create a room, e.g. ``await rooms.create(ReqCreateRoom(preset="public_chat"))``."""
        r = await self._http.post(self._http.build_url("createRoom"), json=req.to_json())
        return RespCreateRoom.model_validate(r.json())

    async def join(
        self, room_id_or_alias: str, *, server_name: str = "", content: Any = None
    ) -> RespJoinRoom:
        """Join a room by ID or alias.

        ``server_name`` asks the homeserver to join via that server.
        ``content``, if given, is sent as the request body.
        """
        if server_name:
            url = self._http.build_url_with_query(
                ["join", room_id_or_alias], {"server_name": server_name}
            )
        else:
            url = self._http.build_url("join", room_id_or_alias)
        r = await self._http.post(url, json=_body(content))
        return RespJoinRoom.model_validate(r.json())

    async def leave(self, room_id: str) -> None:
        await self._http.post(self._http.build_url("rooms", room_id, "leave"), json={})

    async def forget(self, room_id: str) -> None:
        await self._http.post(self._http.build_url("rooms", room_id, "forget"), json={})

    async def invite(self, room_id: str, req: ReqInviteUser | ReqInvite3PID) -> None:
        """Invite a user, or a third-party identifier, to a room."""
        await self._http.post(self._http.build_url("rooms", room_id, "invite"), json=req.to_json())

    async def kick(self, room_id: str, req: ReqKickUser) -> None:
        await self._http.post(self._http.build_url("rooms", room_id, "kick"), json=req.to_json())

    async def ban(self, room_id: str, req: ReqBanUser) -> None:
        await self._http.post(self._http.build_url("rooms", room_id, "ban"), json=req.to_json())

    async def unban(self, room_id: str, req: ReqUnbanUser) -> None:
        await self._http.post(self._http.build_url("rooms", room_id, "unban"), json=req.to_json())

    async def typing(self, room_id: str, typing: bool, timeout: int = 0) -> None:
        """Set our typing status. ``timeout`` is in milliseconds."""
        url = self._http.build_url("rooms", room_id, "typing", self._http.user_id)
        await self._http.put(url, json=ReqTyping(typing=typing, timeout=timeout).to_json())

    # --- Events ---

    async def send_message_event(
        self, room_id: str, event_type: str, content: Any
    ) -> RespSendEvent:
        url = self._http.build_url("rooms", room_id, "send", event_type, txn_id())
        r = await self._http.put(url, json=_body(content))
        return RespSendEvent.model_validate(r.json())

    async def send_state_event(
        self, room_id: str, event_type: str, state_key: str, content: Any
    ) -> RespSendEvent:
        url = self._http.build_url("rooms", room_id, "state", event_type, state_key)
        r = await self._http.put(url, json=_body(content))
        return RespSendEvent.model_validate(r.json())

    async def send_text(self, room_id: str, text: str) -> RespSendEvent:
        return await self.send_message_event(room_id, MESSAGE_EVENT, TextMessage(body=text))

    async def send_formatted_text(
        self, room_id: str, text: str, formatted_text: str
    ) -> RespSendEvent:
        """Send ``m.text`` with an HTML ``formatted_body``."""
        content = TextMessage(body=text, format=HTML_FORMAT, formatted_body=formatted_text)
        return await self.send_message_event(room_id, MESSAGE_EVENT, content)

    async def send_image(self, room_id: str, body: str, url: str) -> RespSendEvent:
        return await self.send_message_event(
            room_id, MESSAGE_EVENT, ImageMessage(body=body, url=url)
        )

    async def send_video(self, room_id: str, body: str, url: str) -> RespSendEvent:
        return await self.send_message_event(
            room_id, MESSAGE_EVENT, VideoMessage(body=body, url=url)
        )

    async def send_notice(self, room_id: str, text: str) -> RespSendEvent:
        return await self.send_message_event(
            room_id, MESSAGE_EVENT, TextMessage(msgtype="m.notice", body=text)
        )

    async def redact_event(
        self, room_id: str, event_id: str, req: ReqRedact | None = None
    ) -> RespSendEvent:
        url = self._http.build_url("rooms", room_id, "redact", event_id, txn_id())
        r = await self._http.put(url, json=(req or ReqRedact()).to_json())
        return RespSendEvent.model_validate(r.json())

    async def mark_read(self, room_id: str, event_id: str) -> None:
        """Mark ``event_id``, and everything before it, as read."""
        await self._http.post(self._http.build_url("rooms", room_id, "receipt", "m.read", event_id))

    async def state_event(self, room_id: str, event_type: str, state_key: str = "") -> dict[str, Any]:
        """The content of one state event, as sent by the server."""
        r = await self._http.get(self._http.build_url("rooms", room_id, "state", event_type, state_key))
        return r.json()

    # --- Queries ---

    async def joined_members(self, room_id: str) -> RespJoinedMembers:
        """Members currently joined to a room.

        Prefer the state kept by the syncer: this call can race with incoming
        membership changes.
        """
        r = await self._http.get(self._http.build_url("rooms", room_id, "joined_members"))
        return RespJoinedMembers.model_validate(r.json())

    async def joined_rooms(self) -> RespJoinedRooms:
        r = await self._http.get(self._http.build_url("joined_rooms"))
        return RespJoinedRooms.model_validate(r.json())

    async def messages(
        self, room_id: str, from_token: str, *, to_token: str = "", direction: str = "b", limit: int = 0
    ) -> RespMessages:
        """One page of room history starting at ``from_token``."""
        query = {"from": from_token, "dir": direction}
        if to_token:
            query["to"] = to_token
        if limit:
            query["limit"] = str(limit)
        url = self._http.build_url_with_query(["rooms", room_id, "messages"], query)
        r = await self._http.get(url)
        return RespMessages.model_validate(r.json())

    def iter_messages(
        self, room_id: str, from_token: str, *, direction: str = "b", limit: int = 50
    ) -> MessageIterator:
        """Iterate events across pages of room history."""
        return MessageIterator(self, room_id, from_token, direction=direction, limit=limit)
