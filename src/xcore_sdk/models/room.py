"""Per-room current state and public directory entries."""

from __future__ import annotations

from dataclasses import dataclass, field

from xcore_sdk.models.base import XCoreModel
from xcore_sdk.models.events import Event

MEMBER_EVENT = "m.room.member"


@dataclass
class Room:
    """A room and its current state, keyed by event type then state key."""

    id: str
    state: dict[str, dict[str, Event]] = field(default_factory=dict)

    def update_state(self, event: Event) -> None:
        """Replace the entry for the event's type/state_key pair."""
        if event.state_key is None:
            raise ValueError(f"event {event.type!r} has no state_key")
        self.state.setdefault(event.type, {})[event.state_key] = event

    def get_state_event(self, event_type: str, state_key: str) -> Event | None:
        return self.state.get(event_type, {}).get(state_key)

    def get_membership_state(self, user_id: str) -> str:
        """Membership of ``user_id`` here. Unknown members count as "leave"."""
        event = self.get_state_event(MEMBER_EVENT, user_id)
        if event is None:
            return "leave"
        return event.membership() or "leave"


class PublicRoom(XCoreModel):
    room_id: str
    canonical_alias: str | None = None
    name: str | None = None
    topic: str | None = None
    world_readable: bool = False
    guest_can_join: bool = False
    num_joined_members: int = 0
    avatar_url: str | None = None
    aliases: list[str] = []
