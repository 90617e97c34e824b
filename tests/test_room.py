"""Tests for the per-room state table."""

import pytest

from xcore_sdk.models.events import Event
from xcore_sdk.models.room import Room


def member(user_id: str, membership, **content) -> Event:
    return Event(
        type="m.room.member",
        state_key=user_id,
        sender=user_id,
        content={"membership": membership, **content},
    )


def test_update_state_clobbers():
    room = Room("!r:hs.test")
    room.update_state(member("@a:x", "join", displayname="first"))
    second = member("@a:x", "join", displayname="second")
    room.update_state(second)

    assert room.get_state_event("m.room.member", "@a:x") is second
    assert list(room.state["m.room.member"]) == ["@a:x"]


def test_update_state_keeps_other_keys():
    room = Room("!r:hs.test")
    room.update_state(member("@a:x", "join"))
    room.update_state(member("@b:x", "invite"))
    room.update_state(Event(type="m.room.topic", state_key="", content={"topic": "t"}))

    assert room.get_membership_state("@a:x") == "join"
    assert room.get_membership_state("@b:x") == "invite"
    assert room.get_state_event("m.room.topic", "").content == {"topic": "t"}


def test_update_state_requires_state_key():
    room = Room("!r:hs.test")
    with pytest.raises(ValueError):
        room.update_state(Event(type="m.room.message", content={"body": "hi"}))
    assert room.state == {}


def test_get_state_event_missing():
    room = Room("!r:hs.test")
    assert room.get_state_event("m.room.name", "") is None
    room.update_state(member("@a:x", "join"))
    assert room.get_state_event("m.room.member", "@b:x") is None


def test_membership_defaults_to_leave():
    room = Room("!r:hs.test")
    assert room.get_membership_state("@nobody:x") == "leave"


def test_membership_non_string_is_leave():
    room = Room("!r:hs.test")
    room.update_state(member("@a:x", None))
    assert room.get_membership_state("@a:x") == "leave"
