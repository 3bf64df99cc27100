"""Shared pydantic configuration for service resources."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class ServiceModel(BaseModel):
    """
    Base for every resource exchanged with the service.

    Unknown response fields are ignored so that server-side additions do not
    break deserialization; wire aliases and python names are both accepted.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_body(self) -> Dict[str, Any]:
        """JSON-ready dict using wire names, without unset (None) fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
