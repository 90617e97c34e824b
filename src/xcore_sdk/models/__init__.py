"""SDK request/response models."""

from xcore_sdk.models.base import XCoreModel
from xcore_sdk.models.events import (
    Event,
    FileInfo,
    HTMLMessage,
    ImageInfo,
    ImageMessage,
    TextMessage,
    VideoInfo,
    VideoMessage,
)
from xcore_sdk.models.filter import (
    Filter,
    FilterPart,
    FilterValidationError,
    RoomFilter,
    default_filter,
    default_filter_part,
)
from xcore_sdk.models.requests import (
    Identifier,
    ReqBanUser,
    ReqCreateRoom,
    ReqInvite3PID,
    ReqInviteUser,
    ReqKickUser,
    ReqLogin,
    ReqRedact,
    ReqRegister,
    ReqTyping,
    ReqUnbanUser,
)
from xcore_sdk.models.responses import (
    DiscoveryInformation,
    EventList,
    InvitedRoom,
    JoinedMember,
    JoinedRoom,
    LeftRoom,
    RespCreateFilter,
    RespCreateRoom,
    RespError,
    RespJoinedMembers,
    RespJoinedRooms,
    RespJoinRoom,
    RespLogin,
    RespMessages,
    RespPublicRooms,
    RespRegister,
    RespSendEvent,
    RespSync,
    RespTurnServer,
    RespUserDisplayName,
    RespUserInteractive,
    RespUserStatus,
    RespVersions,
    SyncRooms,
    Timeline,
)
from xcore_sdk.models.room import PublicRoom, Room
from xcore_sdk.models.tags import TagContent, TagProperties

__all__ = [
    "XCoreModel",
    # events
    "Event",
    "FileInfo",
    "HTMLMessage",
    "ImageInfo",
    "ImageMessage",
    "TextMessage",
    "VideoInfo",
    "VideoMessage",
    # filter
    "Filter",
    "FilterPart",
    "FilterValidationError",
    "RoomFilter",
    "default_filter",
    "default_filter_part",
    # requests
    "Identifier",
    "ReqBanUser",
    "ReqCreateRoom",
    "ReqInvite3PID",
    "ReqInviteUser",
    "ReqKickUser",
    "ReqLogin",
    "ReqRedact",
    "ReqRegister",
    "ReqTyping",
    "ReqUnbanUser",
    # responses
    "DiscoveryInformation",
    "EventList",
    "InvitedRoom",
    "JoinedMember",
    "JoinedRoom",
    "LeftRoom",
    "RespCreateFilter",
    "RespCreateRoom",
    "RespError",
    "RespJoinedMembers",
    "RespJoinedRooms",
    "RespJoinRoom",
    "RespLogin",
    "RespMessages",
    "RespPublicRooms",
    "RespRegister",
    "RespSendEvent",
    "RespSync",
    "RespTurnServer",
    "RespUserDisplayName",
    "RespUserInteractive",
    "RespUserStatus",
    "RespVersions",
    "SyncRooms",
    "Timeline",
    # rooms
    "PublicRoom",
    "Room",
    # tags
    "TagContent",
    "TagProperties",
]
