"""
Service resources - pydantic models for request bodies and responses

Field names follow the service's JSON; unknown response fields are ignored.
"""

from concept_insights.models.account import Account, Accounts
from concept_insights.models.corpus import (
    BuildStatus,
    Corpora,
    Corpus,
    CorpusProcessingState,
    CorpusStats,
    CorpusUser,
    QueryConcepts,
    Result,
    Tag,
    TopTags,
)
from concept_insights.models.document import (
    Document,
    DocumentAnnotations,
    DocumentProcessingStatus,
    Documents,
    Part,
    PartAnnotations,
)
from concept_insights.models.graph import (
    WIKIPEDIA,
    Annotation,
    Annotations,
    Concept,
    ConceptMetadata,
    Concepts,
    Graph,
    Graphs,
    Match,
    Matches,
    Score,
    Scores,
    ScoredConcept,
)
from concept_insights.models.requested_fields import RequestedFields

__all__ = [
    "Account",
    "Accounts",
    "Annotation",
    "Annotations",
    "BuildStatus",
    "Concept",
    "ConceptMetadata",
    "Concepts",
    "Corpora",
    "Corpus",
    "CorpusProcessingState",
    "CorpusStats",
    "CorpusUser",
    "Document",
    "DocumentAnnotations",
    "DocumentProcessingStatus",
    "Documents",
    "Graph",
    "Graphs",
    "Match",
    "Matches",
    "Part",
    "PartAnnotations",
    "QueryConcepts",
    "RequestedFields",
    "Result",
    "Score",
    "ScoredConcept",
    "Scores",
    "Tag",
    "TopTags",
    "WIKIPEDIA",
]
