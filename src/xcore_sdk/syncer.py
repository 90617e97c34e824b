"""Turning /sync responses into room state and listener callbacks."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any, Protocol

from xcore_sdk.errors import SyncProcessingError
from xcore_sdk.models.events import Event
from xcore_sdk.models.responses import RespSync
from xcore_sdk.models.room import MEMBER_EVENT, Room
from xcore_sdk.store import Storer

log = logging.getLogger(__name__)

EventListener = Callable[[Event], Any]

DEFAULT_RETRY_DELAY = 10.0


class Syncer(Protocol):
    """Everything :meth:`Client.sync` delegates to.

    ``since`` is the position the response was requested with, so an empty
    string marks the initial sync. Raising from :meth:`process_response` or
    :meth:`on_failed_sync` stops the sync loop and the exception is raised
    from :meth:`Client.sync`.
    """

    async def process_response(self, resp: RespSync, since: str) -> None: ...

    def on_failed_sync(self, resp: RespSync | None, error: Exception) -> float:
        """Seconds to wait before retrying the failed request."""
        ...

    def get_filter_json(self, user_id: str) -> dict[str, Any]:
        """The filter definition to upload for ``user_id`` (not the filter ID)."""
        ...


class DefaultSyncer:
    """Processes sync responses as a stream of non-repeating events.

    Listeners are registered per event type and called in registration
    order, inline on the sync task. A listener may be a coroutine function;
    it is awaited before the next event is dispatched. A slow listener
    stalls the whole loop.

    Usage::

        syncer = DefaultSyncer("@bot:example.org", store)

        @syncer.on("m.room.message")
        async def on_message(event):
            print(event.sender, event.body())
    """

    def __init__(self, user_id: str, store: Storer) -> None:
        self.user_id = user_id
        self.store = store
        self._listeners: dict[str, list[EventListener]] = {}

    def on_event_type(self, event_type: str, callback: EventListener) -> None:
        """Register a callback for ``event_type``. Duplicates are not checked."""
        self._listeners.setdefault(event_type, []).append(callback)

    def on(self, event_type: str) -> Callable[[EventListener], EventListener]:
        """Decorator form of :meth:`on_event_type`."""
        def decorator(func: EventListener) -> EventListener:
            self.on_event_type(event_type, func)
            return func
        return decorator

    async def process_response(self, resp: RespSync, since: str) -> None:
        """Apply one response: update room state, then notify listeners.

        Rooms are handled joined, then invited, then left. Any failure,
        including a listener raising, becomes a :class:`SyncProcessingError`.
        """
        if not self._should_process_response(resp, since):
            return

        try:
            for room_id, room_data in resp.rooms.join.items():
                room = self._get_or_create_room(room_id)
                for event in room_data.state.events:
                    event.room_id = room_id
                    room.update_state(event)
                    await self._notify_listeners(event)
                for event in room_data.timeline.events:
                    event.room_id = room_id
                    await self._notify_listeners(event)
                for event in room_data.ephemeral.events:
                    event.room_id = room_id
                    await self._notify_listeners(event)

            for room_id, room_data in resp.rooms.invite.items():
                room = self._get_or_create_room(room_id)
                for event in room_data.state.events:
                    event.room_id = room_id
                    room.update_state(event)
                    await self._notify_listeners(event)

            for room_id, room_data in resp.rooms.leave.items():
                room = self._get_or_create_room(room_id)
                for event in room_data.timeline.events:
                    # Only membership-relevant entries of a left room's timeline.
                    if event.state_key is None:
                        continue
                    event.room_id = room_id
                    room.update_state(event)
                    await self._notify_listeners(event)
        except Exception as exc:
            log.error("Failed to process sync response for %s since=%r: %s", self.user_id, since, exc)
            raise SyncProcessingError(self.user_id, since, exc) from exc

    def on_failed_sync(self, resp: RespSync | None, error: Exception) -> float:
        """Always wait 10 seconds between failed syncs; never fatal."""
        return DEFAULT_RETRY_DELAY

    def get_filter_json(self, user_id: str) -> dict[str, Any]:
        """A filter with a timeline limit of 50."""
        return {"room": {"timeline": {"limit": 50}}}

    def _should_process_response(self, resp: RespSync, since: str) -> bool:
        """Whether to process ``resp`` at all. May drop rooms from it.

        The initial sync returns current state, not new activity, so it is
        skipped entirely.

        Joining a room makes the server send that room's most recent
        timeline, which may already have been seen if we left and rejoined.
        Any joined room whose timeline holds a "join" membership event for us
        is dropped from the join and invite sections, events after that join
        included.
        """
        if since == "":
            return False

        for room_id, room_data in list(resp.rooms.join.items()):
            for event in reversed(room_data.timeline.events):
                if event.type != MEMBER_EVENT or event.state_key != self.user_id:
                    continue
                membership = event.membership()
                if membership is None:
                    continue
                if membership == "join":
                    del resp.rooms.join[room_id]
                    resp.rooms.invite.pop(room_id, None)
                    break
        return True

    def _get_or_create_room(self, room_id: str) -> Room:
        room = self.store.load_room(room_id)
        if room is None:
            room = Room(room_id)
            self.store.save_room(room)
        return room

    async def _notify_listeners(self, event: Event) -> None:
        for listener in self._listeners.get(event.type, []):
            result = listener(event)
            if inspect.isawaitable(result):
                await result
