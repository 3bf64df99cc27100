"""
Query-parameter translation.

Each options class lists, as typed fields, every option one family of
operations accepts. `to_query_params()` returns only the options that are set:
scalars pass through unchanged, id lists and requested fields become compact
JSON strings. Plain mappings are accepted through `coerce()`; keys the class
does not know are dropped.
"""

import json
from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from concept_insights.exceptions import InvalidArgument
from concept_insights.models.requested_fields import RequestedFields

MAX_LEVEL = 3


def to_json(value: Any) -> str:
    """Compact JSON, e.g. ["a","b"] or {"abstract":1}."""
    return json.dumps(value, separators=(",", ":"))


def _query_value(value: Any) -> Any:
    # requests would send True/False; the service expects JSON booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return to_json(value)
    return value


def _id_of(item: Any) -> Optional[str]:
    if isinstance(item, str):
        return item
    return getattr(item, "id", None)


def concept_ids_param(concepts: Iterable[Any]) -> str:
    """
    Encodes concept ids (strings or objects with an `id`) as a JSON array.

    Raises:
        InvalidArgument: if `concepts` is empty or an entry has no id
    """
    if concepts is None or isinstance(concepts, str):
        raise InvalidArgument("concepts must be a non-empty list of concept ids")
    ids: List[str] = []
    for concept in concepts:
        concept_id = _id_of(concept)
        if not concept_id:
            raise InvalidArgument("concept ids cannot be empty")
        ids.append(concept_id)
    if not ids:
        raise InvalidArgument("concepts cannot be empty")
    return to_json(ids)


def _requested_fields(value: Any) -> Any:
    if value is None or isinstance(value, RequestedFields):
        return value
    if isinstance(value, Mapping):
        if isinstance(value.get("fields"), Mapping):
            return value
        return RequestedFields(fields=dict(value))
    if isinstance(value, (list, tuple, set, frozenset)):
        return RequestedFields.of(value)
    return value


class QueryOptions(BaseModel):
    """Base for the per-operation options structures."""

    model_config = ConfigDict(extra="ignore")

    pass_through: ClassVar[Tuple[str, ...]] = ()
    requested_fields: ClassVar[Tuple[str, ...]] = ()

    @field_validator("concept_fields", "document_fields", mode="before", check_fields=False)
    @classmethod
    def coerce_requested_fields(cls, value: Any) -> Any:
        return _requested_fields(value)

    @classmethod
    def coerce(cls, options: Union["QueryOptions", Mapping[str, Any], None]):
        """Returns `options` as an instance of this class."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            try:
                return cls.model_validate(dict(options))
            except ValidationError as e:
                raise InvalidArgument(f"invalid {cls.__name__}: {e}") from e
        raise InvalidArgument(
            f"expected {cls.__name__} or a mapping, got {type(options).__name__}"
        )

    def check(self) -> None:
        """Raises InvalidArgument for missing required or out-of-range options."""
        for name in ("limit", "cursor"):
            value = getattr(self, name, None)
            if value is not None and value < 0:
                raise InvalidArgument(f"{name} cannot be negative")
        level = getattr(self, "level", None)
        if level is not None and not 0 <= level <= MAX_LEVEL:
            raise InvalidArgument(f"level must be between 0 and {MAX_LEVEL}")

    def to_query_params(self) -> Dict[str, Any]:
        self.check()
        params: Dict[str, Any] = {}
        for name in self.pass_through:
            value = getattr(self, name)
            if value is not None:
                params[name] = _query_value(value)
        for name in self.requested_fields:
            fields: Optional[RequestedFields] = getattr(self, name)
            if fields is not None and not fields.is_empty():
                params[name] = fields.to_json()
        return params


class _RequiresQuery(QueryOptions):

    def check(self) -> None:
        super().check()
        query = getattr(self, "query", None)
        if not query or not query.strip():
            raise InvalidArgument("query cannot be empty")


class ConceptualSearchOptions(QueryOptions):
    ids: Optional[List[str]] = Field(None, description="Concept and/or document ids to search with")
    cursor: Optional[int] = Field(None, description="Number of results to skip")
    limit: Optional[int] = Field(None, description="Maximum number of results")
    concept_fields: Optional[RequestedFields] = None
    document_fields: Optional[RequestedFields] = None

    pass_through: ClassVar[Tuple[str, ...]] = ("cursor", "limit")
    requested_fields: ClassVar[Tuple[str, ...]] = ("concept_fields", "document_fields")

    @field_validator("ids", mode="before")
    @classmethod
    def ids_from_objects(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_id_of(item) for item in value]
        return value

    def check(self) -> None:
        super().check()
        if not self.ids or not all(self.ids):
            raise InvalidArgument("ids cannot be empty")

    def to_query_params(self) -> Dict[str, Any]:
        params = super().to_query_params()
        params["ids"] = to_json(self.ids)
        return params


class RelatedConceptsOptions(QueryOptions):
    level: Optional[int] = Field(None, description="Popularity level of related concepts, 0 - 3")
    limit: Optional[int] = Field(None, description="Maximum number of concepts")
    concept_fields: Optional[RequestedFields] = None

    pass_through: ClassVar[Tuple[str, ...]] = ("level", "limit")
    requested_fields: ClassVar[Tuple[str, ...]] = ("concept_fields",)


class ListDocumentsOptions(QueryOptions):
    query: Optional[Union[str, Dict[str, Any]]] = Field(
        None, description='Document filter, e.g. {"status":"ready"}'
    )
    cursor: Optional[int] = None
    limit: Optional[int] = None

    pass_through: ClassVar[Tuple[str, ...]] = ("query", "cursor", "limit")


class CorpusLabelSearchOptions(_RequiresQuery):
    query: Optional[str] = Field(None, description="Text matched against labels")
    prefix: Optional[bool] = Field(None, description="Treat the query as a prefix")
    limit: Optional[int] = None
    concepts: Optional[bool] = Field(None, description="Also return concepts with a label match")
    concept_fields: Optional[RequestedFields] = None
    document_fields: Optional[RequestedFields] = None

    pass_through: ClassVar[Tuple[str, ...]] = ("query", "prefix", "limit", "concepts")
    requested_fields: ClassVar[Tuple[str, ...]] = ("concept_fields", "document_fields")


class GraphLabelSearchOptions(_RequiresQuery):
    query: Optional[str] = Field(None, description="Text matched against concept labels")
    prefix: Optional[bool] = None
    limit: Optional[int] = None
    concept_fields: Optional[RequestedFields] = None

    pass_through: ClassVar[Tuple[str, ...]] = ("query", "prefix", "limit")
    requested_fields: ClassVar[Tuple[str, ...]] = ("concept_fields",)
