"""Room events and the message content shapes carried inside them."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import Field

from xcore_sdk.models.base import XCoreModel

M = TypeVar("M", bound=XCoreModel)


class Event(XCoreModel):
    """A single event received from the server.

    ``room_id`` is not sent inside sync payloads; the syncer fills it in
    while processing a response.
    """

    type: str
    state_key: str | None = None
    sender: str = ""
    room_id: str = ""
    content: dict[str, Any] = {}
    timestamp: int = Field(0, alias="origin_server_ts")
    event_id: str = ""
    redacts: str | None = None
    unsigned: dict[str, Any] = {}

    @property
    def is_state_event(self) -> bool:
        return self.state_key is not None

    def _content_str(self, key: str) -> str | None:
        value = self.content.get(key)
        if isinstance(value, str):
            return value
        return None

    def body(self) -> str | None:
        """The ``body`` of the content, or None if missing or not a string."""
        return self._content_str("body")

    def message_type(self) -> str | None:
        return self._content_str("msgtype")

    def membership(self) -> str | None:
        return self._content_str("membership")

    def content_as(self, model: type[M]) -> M:
        """Validate the content against a known shape.

        Raises ``pydantic.ValidationError`` when the content does not fit.
        """
        return model.model_validate(self.content)


# --- Message content ---

class TextMessage(XCoreModel):
    msgtype: str = "m.text"
    body: str
    format: str | None = None
    formatted_body: str | None = None


class HTMLMessage(XCoreModel):
    msgtype: str = "m.text"
    body: str
    format: str = "org.matrix.custom.html"
    formatted_body: str


class FileInfo(XCoreModel):
    mimetype: str | None = None
    size: int | None = None


class ImageInfo(XCoreModel):
    h: int | None = None
    w: int | None = None
    mimetype: str | None = None
    size: int | None = None
    thumbnail_info: FileInfo | None = None
    thumbnail_url: str | None = None


class VideoInfo(XCoreModel):
    mimetype: str | None = None
    thumbnail_info: FileInfo | None = None
    thumbnail_url: str | None = None
    h: int | None = None
    w: int | None = None
    duration: int | None = None
    size: int | None = None


class ImageMessage(XCoreModel):
    msgtype: str = "m.image"
    body: str
    url: str
    info: ImageInfo | None = None


class VideoMessage(XCoreModel):
    msgtype: str = "m.video"
    body: str
    url: str
    info: VideoInfo | None = None
