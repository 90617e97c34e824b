"""Persistence for sync positions, filter IDs and room state."""

from __future__ import annotations

from typing import Protocol

from xcore_sdk.models.room import Room


class Storer(Protocol):
    """What the client needs persisted between syncs.

    Implement this to keep data on disk or in a database. Methods are only
    called from the task running :meth:`Client.sync`.
    """

    def save_filter_id(self, user_id: str, filter_id: str) -> None: ...

    def load_filter_id(self, user_id: str) -> str: ...

    def save_next_batch(self, user_id: str, next_batch_token: str) -> None: ...

    def load_next_batch(self, user_id: str) -> str: ...

    def save_room(self, room: Room) -> None: ...

    def load_room(self, room_id: str) -> Room | None: ...


class InMemoryStore:
    """Keeps everything in dicts; lost on restart.

    Not safe to use from any task other than the one running the sync loop.
    """

    def __init__(self) -> None:
        self.filters: dict[str, str] = {}
        self.next_batch: dict[str, str] = {}
        self.rooms: dict[str, Room] = {}

    def save_filter_id(self, user_id: str, filter_id: str) -> None:
        self.filters[user_id] = filter_id

    def load_filter_id(self, user_id: str) -> str:
        return self.filters.get(user_id, "")

    def save_next_batch(self, user_id: str, next_batch_token: str) -> None:
        self.next_batch[user_id] = next_batch_token

    def load_next_batch(self, user_id: str) -> str:
        return self.next_batch.get(user_id, "")

    def save_room(self, room: Room) -> None:
        self.rooms[room.id] = room

    def load_room(self, room_id: str) -> Room | None:
        return self.rooms.get(room_id)
