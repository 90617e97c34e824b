"""Request bodies."""

from typing import Any

from xcore_sdk.models.base import XCoreModel
from xcore_sdk.models.events import Event


class ReqRegister(XCoreModel):
    username: str | None = None
    bind_email: bool | None = None
    password: str | None = None
    device_id: str | None = None
    initial_device_display_name: str = ""
    auth: Any = None


class Identifier(XCoreModel):
    type: str
    user: str | None = None
    medium: str | None = None
    address: str | None = None


class ReqLogin(XCoreModel):
    type: str
    identifier: Identifier | None = None
    password: str | None = None
    medium: str | None = None
    user: str | None = None
    address: str | None = None
    token: str | None = None
    device_id: str | None = None
    initial_device_display_name: str | None = None


class ReqInvite3PID(XCoreModel):
    id_server: str
    medium: str
    address: str


class ReqCreateRoom(XCoreModel):
    visibility: str | None = None
    room_alias_name: str | None = None
    name: str | None = None
    topic: str | None = None
    invite: list[str] | None = None
    invite_3pid: list[ReqInvite3PID] | None = None
    creation_content: dict[str, Any] | None = None
    initial_state: list[Event] | None = None
    preset: str | None = None
    is_direct: bool | None = None


class ReqRedact(XCoreModel):
    reason: str | None = None


class ReqInviteUser(XCoreModel):
    user_id: str


class ReqKickUser(XCoreModel):
    user_id: str
    reason: str | None = None


class ReqBanUser(XCoreModel):
    user_id: str
    reason: str | None = None


class ReqUnbanUser(XCoreModel):
    user_id: str


class ReqTyping(XCoreModel):
    typing: bool
    timeout: int = 0
