from typing import Dict, List, Optional

from pydantic import Field

from concept_insights.exceptions import InvalidArgument
from concept_insights.models.base import ServiceModel
from concept_insights.models.corpus import Corpus
from concept_insights.models.graph import Annotation


class Part(ServiceModel):
    name: Optional[str] = None
    data: Optional[str] = Field(None, description="Part content")
    content_type: Optional[str] = Field(None, alias="content-type", description="e.g. 'text/plain'")


class Document(ServiceModel):
    id: Optional[str] = Field(None, description="Document identifier, e.g. /corpora/<account>/<corpus>/documents/<name>")
    name: Optional[str] = None
    label: Optional[str] = None
    parts: Optional[List[Part]] = None
    user_fields: Optional[Dict[str, str]] = None
    ttl_hours: Optional[int] = None
    expires_on: Optional[str] = None
    last_modified: Optional[str] = None

    @classmethod
    def from_corpus(cls, corpus: Corpus, name: str) -> "Document":
        if corpus is None or not corpus.id:
            raise InvalidArgument("corpus.id cannot be empty")
        return cls(id=f"{corpus.id}/documents/{name}", name=name)


class Documents(ServiceModel):
    documents: List[str] = Field(default_factory=list, description="Document identifiers")


class PartAnnotations(ServiceModel):
    part_index: Optional[int] = Field(None, description="Index of the annotated part")
    annotations: List[Annotation] = Field(default_factory=list)


class DocumentAnnotations(ServiceModel):
    id: Optional[str] = None
    annotations: List[PartAnnotations] = Field(default_factory=list, description="Annotations grouped by document part")


class DocumentProcessingStatus(ServiceModel):
    id: Optional[str] = None
    status: Optional[str] = Field(None, description="'processing', 'ready' or 'error'")
    last_modified: Optional[str] = None
