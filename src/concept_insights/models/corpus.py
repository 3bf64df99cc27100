from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from concept_insights.models.base import ServiceModel
from concept_insights.models.graph import Concept

CORPORA_PREFIX = "/corpora/"


class CorpusUser(ServiceModel):
    uid: Optional[str] = Field(None, description="User identifier")
    permission: Optional[str] = Field(None, description="e.g. 'read' or 'read_write_delete'")


class Corpus(ServiceModel):
    id: Optional[str] = Field(None, description="Corpus identifier, e.g. /corpora/<account>/<name>")
    name: Optional[str] = Field(None, description="Corpus name within its account")
    account_id: Optional[str] = Field(None, exclude=True, description="Owning account, used to build the id")
    access: Optional[Literal["public", "private"]] = None
    users: Optional[List[CorpusUser]] = None
    ttl_hours: Optional[int] = Field(None, description="Hours before the corpus expires")
    expires_on: Optional[str] = None
    last_updated: Optional[str] = None

    @classmethod
    def from_name(cls, account_id: str, name: str) -> "Corpus":
        return cls(id=f"{CORPORA_PREFIX}{account_id}/{name}", name=name, account_id=account_id)


class Corpora(ServiceModel):
    corpora: List[Corpus] = Field(default_factory=list)


class BuildStatus(ServiceModel):
    error: int = 0
    processing: int = 0
    ready: int = 0


class CorpusProcessingState(ServiceModel):
    id: Optional[str] = None
    documents: Optional[int] = Field(None, description="Number of documents in the corpus")
    last_updated: Optional[str] = None
    build_status: Optional[BuildStatus] = None


class Tag(ServiceModel):
    concept: Optional[str] = None
    score: Optional[float] = None


class TopTags(ServiceModel):
    total_tags: Optional[int] = None
    tags: List[Tag] = Field(default_factory=list)


class CorpusStats(ServiceModel):
    id: Optional[str] = None
    last_updated: Optional[str] = None
    fields: Optional[Dict[str, Any]] = None
    top_tags: Optional[TopTags] = None


class Result(ServiceModel):
    id: Optional[str] = Field(None, description="Document identifier")
    label: Optional[str] = None
    score: Optional[float] = None
    explanation_tags: Optional[List[Dict[str, Any]]] = None
    user_fields: Optional[Dict[str, Any]] = None


class QueryConcepts(ServiceModel):
    query_concepts: List[Concept] = Field(default_factory=list)
    results: List[Result] = Field(default_factory=list)
