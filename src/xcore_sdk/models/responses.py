"""Response bodies."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from xcore_sdk.models.base import XCoreModel
from xcore_sdk.models.events import Event
from xcore_sdk.models.room import PublicRoom


class RespError(XCoreModel):
    """The standard error body: ``{"errcode": ..., "error": ...}``."""

    errcode: str
    error: str = ""

    def __str__(self) -> str:
        return f"{self.errcode}: {self.error}"


class RespCreateFilter(XCoreModel):
    filter_id: str


class RespVersions(XCoreModel):
    versions: list[str] = []


class RespPublicRooms(XCoreModel):
    total_room_count_estimate: int = 0
    prev_batch: str = ""
    next_batch: str = ""
    chunk: list[PublicRoom] = []


class RespJoinRoom(XCoreModel):
    room_id: str


class RespCreateRoom(XCoreModel):
    room_id: str


class RespJoinedRooms(XCoreModel):
    joined_rooms: list[str] = []


class JoinedMember(XCoreModel):
    display_name: str | None = None
    avatar_url: str | None = None


class RespJoinedMembers(XCoreModel):
    joined: dict[str, JoinedMember] = {}


class RespMessages(XCoreModel):
    start: str = ""
    chunk: list[Event] = []
    end: str = ""


class RespSendEvent(XCoreModel):
    event_id: str


class AuthFlow(XCoreModel):
    stages: list[str] = []


class RespUserInteractive(XCoreModel):
    flows: list[AuthFlow] = []
    params: dict[str, Any] = {}
    session: str = ""
    completed: list[str] = []
    errcode: str = ""
    error: str = ""

    def has_single_stage_flow(self, stage_name: str) -> bool:
        """True if some flow consists of exactly ``stage_name``."""
        return any(f.stages == [stage_name] for f in self.flows)


class RespUserDisplayName(XCoreModel):
    displayname: str = ""


class RespUserStatus(XCoreModel):
    presence: str = ""
    status_msg: str = ""
    last_active_ago: int = 0
    currently_active: bool = False


class RespRegister(XCoreModel):
    access_token: str = ""
    device_id: str = ""
    home_server: str = ""
    refresh_token: str = ""
    user_id: str = ""


class ServerBaseURL(XCoreModel):
    base_url: str = ""


class DiscoveryInformation(XCoreModel):
    homeserver: ServerBaseURL = Field(default_factory=ServerBaseURL, alias="m.homeserver")
    identity_server: ServerBaseURL = Field(
        default_factory=ServerBaseURL, alias="m.identity_server"
    )


class RespLogin(XCoreModel):
    access_token: str = ""
    device_id: str = ""
    home_server: str = ""
    user_id: str = ""
    well_known: DiscoveryInformation = Field(default_factory=DiscoveryInformation)


class RespTurnServer(XCoreModel):
    username: str = ""
    password: str = ""
    ttl: int = 0
    uris: list[str] = []


# --- /sync ---

class EventList(XCoreModel):
    events: list[Event] = []


class Timeline(EventList):
    limited: bool = False
    prev_batch: str = ""


class JoinedRoom(XCoreModel):
    state: EventList = Field(default_factory=EventList)
    timeline: Timeline = Field(default_factory=Timeline)
    ephemeral: EventList = Field(default_factory=EventList)


class InvitedRoom(XCoreModel):
    state: EventList = Field(default_factory=EventList, alias="invite_state")


class LeftRoom(XCoreModel):
    state: EventList = Field(default_factory=EventList)
    timeline: Timeline = Field(default_factory=Timeline)


class SyncRooms(XCoreModel):
    join: dict[str, JoinedRoom] = {}
    invite: dict[str, InvitedRoom] = {}
    leave: dict[str, LeftRoom] = {}


class RespSync(XCoreModel):
    """One incremental update batch."""

    next_batch: str = ""
    account_data: EventList = Field(default_factory=EventList)
    presence: EventList = Field(default_factory=EventList)
    rooms: SyncRooms = Field(default_factory=SyncRooms)
