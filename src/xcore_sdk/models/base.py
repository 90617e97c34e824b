from typing import Any

from pydantic import BaseModel, ConfigDict


class XCoreModel(BaseModel):
    """Base for all wire models. Unknown fields are kept, not rejected."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        """Serialize for a request body, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
