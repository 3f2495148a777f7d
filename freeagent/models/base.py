"""Base model for FreeAgent records."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class FreeAgentModel(BaseModel):
    """Base class for records exchanged with the FreeAgent API.

    Unknown fields are kept, so a record read from the API can be sent back
    without losing attributes this client does not model.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for a request body, omitting unset (None) fields."""
        return self.model_dump(mode="json", exclude_none=True)
