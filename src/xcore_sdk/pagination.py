"""Async iterator over token-paginated room history."""

from __future__ import annotations

from typing import TYPE_CHECKING, AsyncIterator

from xcore_sdk.models.events import Event

if TYPE_CHECKING:
    from xcore_sdk.api.rooms import RoomsAPI


class MessageIterator(AsyncIterator[Event]):
    """Yields events across ``/messages`` pages.

    Each page's ``end`` token is the ``from`` token of the next request.
    Iteration stops on an empty page, or when the server hands back the
    token it was given.
    """

    def __init__(
        self,
        rooms: RoomsAPI,
        room_id: str,
        from_token: str,
        *,
        direction: str = "b",
        limit: int = 50,
    ) -> None:
        self._rooms = rooms
        self._room_id = room_id
        self._token = from_token
        self._direction = direction
        self._limit = limit
        self._buffer: list[Event] = []
        self._exhausted = False

    def __aiter__(self) -> AsyncIterator[Event]:
        return self

    async def __anext__(self) -> Event:
        if self._buffer:
            return self._buffer.pop(0)
        if self._exhausted:
            raise StopAsyncIteration
        await self._fetch_page()
        if not self._buffer:
            raise StopAsyncIteration
        return self._buffer.pop(0)

    async def _fetch_page(self) -> None:
        page = await self._rooms.messages(
            self._room_id, self._token, direction=self._direction, limit=self._limit
        )
        for event in page.chunk:
            event.room_id = self._room_id
        self._buffer = list(page.chunk)
        if not page.chunk or not page.end or page.end == self._token:
            self._exhausted = True
        self._token = page.end

    async def flatten(self) -> list[Event]:
        """Consume the full iterator into a list."""
        result: list[Event] = []
        async for item in self:
            result.append(item)
        return result
