import json
from typing import Dict, Iterable

from pydantic import BaseModel, Field


class RequestedFields(BaseModel):
    """
    Additional fields the service should include in returned concept or
    document objects.

    Serialized as a JSON object mapping each field to 1 (include) or
    0 (exclude), e.g. {"abstract":1,"link":1}.
    """

    fields: Dict[str, int] = Field(default_factory=dict, description="Field name -> 1/0")

    @classmethod
    def of(cls, names: Iterable[str]) -> "RequestedFields":
        requested = cls()
        for name in names:
            requested.include(name)
        return requested

    def include(self, name: str) -> "RequestedFields":
        self.fields[name] = 1
        return self

    def exclude(self, name: str) -> "RequestedFields":
        self.fields[name] = 0
        return self

    def is_empty(self) -> bool:
        return not self.fields

    def to_json(self) -> str:
        return json.dumps(self.fields, separators=(",", ":"))
