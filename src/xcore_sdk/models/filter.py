"""Server-side filter definitions used to narrow sync responses."""

from __future__ import annotations

from xcore_sdk.models.base import XCoreModel

_EVENT_FORMATS = ("client", "federation")


class FilterValidationError(ValueError):
    """Raised when a filter carries a value the server would reject."""


class FilterPart(XCoreModel):
    not_rooms: list[str] | None = None
    rooms: list[str] | None = None
    limit: int | None = None
    not_senders: list[str] | None = None
    not_types: list[str] | None = None
    senders: list[str] | None = None
    types: list[str] | None = None
    contains_url: bool | None = None


class RoomFilter(XCoreModel):
    account_data: FilterPart | None = None
    ephemeral: FilterPart | None = None
    include_leave: bool | None = None
    not_rooms: list[str] | None = None
    rooms: list[str] | None = None
    state: FilterPart | None = None
    timeline: FilterPart | None = None


class Filter(XCoreModel):
    account_data: FilterPart | None = None
    event_fields: list[str] | None = None
    event_format: str | None = None
    presence: FilterPart | None = None
    room: RoomFilter | None = None

    def validate_format(self) -> None:
        """Raise FilterValidationError unless event_format is a known value."""
        if self.event_format not in _EVENT_FORMATS:
            raise FilterValidationError(
                f"bad event_format value {self.event_format!r}. "
                f"Must be one of {list(_EVENT_FORMATS)}"
            )


def default_filter_part() -> FilterPart:
    """The part the server applies when none is given."""
    return FilterPart(limit=20)


def default_filter() -> Filter:
    """The filter the server applies when a sync request names none."""
    return Filter(
        account_data=default_filter_part(),
        event_format="client",
        presence=default_filter_part(),
        room=RoomFilter(
            account_data=default_filter_part(),
            ephemeral=default_filter_part(),
            include_leave=False,
            state=default_filter_part(),
            timeline=default_filter_part(),
        ),
    )
