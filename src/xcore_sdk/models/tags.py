from xcore_sdk.models.base import XCoreModel


class TagProperties(XCoreModel):
    order: float | None = None


class TagContent(XCoreModel):
    """Content of an ``m.tag`` account data event."""

    tags: dict[str, TagProperties] = {}
