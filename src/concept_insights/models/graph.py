"""
Graph and concept resources.

Concept identifiers are path-shaped strings rooted at their graph, e.g.
/graphs/wikipedia/en-20120601/concepts/Automobile.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from concept_insights.exceptions import InvalidArgument
from concept_insights.models.base import ServiceModel

GRAPHS_PREFIX = "/graphs/"


class Graph(ServiceModel):
    id: Optional[str] = Field(None, description="Graph identifier, e.g. /graphs/wikipedia/en-20120601")
    name: Optional[str] = Field(None, description="Graph name within its account")

    @classmethod
    def from_name(cls, account_id: str, name: str) -> "Graph":
        return cls(id=f"{GRAPHS_PREFIX}{account_id}/{name}", name=name)


# Public graph built from English Wikipedia
WIKIPEDIA = Graph.from_name("wikipedia", "en-20120601")


class Graphs(ServiceModel):
    graphs: List[str] = Field(default_factory=list, description="Graph identifiers")


class Concept(ServiceModel):
    id: Optional[str] = Field(None, description="Concept identifier")
    label: Optional[str] = Field(None, description="Human readable label")
    name: Optional[str] = Field(None, description="Concept name within its graph")

    @classmethod
    def from_graph(cls, graph: Graph, name: str) -> "Concept":
        if graph is None or not graph.id:
            raise InvalidArgument("graph.id cannot be empty")
        return cls(id=f"{graph.id}/concepts/{name}", name=name)


class ConceptMetadata(ServiceModel):
    id: Optional[str] = None
    name: Optional[str] = None
    label: Optional[str] = None
    abstract: Optional[str] = Field(None, description="Abstract of the concept's source article")
    link: Optional[str] = Field(None, description="Link to the source article")
    thumbnail: Optional[str] = None
    type: Optional[str] = None
    ontology: Optional[List[str]] = Field(None, description="Ontology classes of the concept")


class ScoredConcept(ServiceModel):
    concept: Optional[Concept] = None
    score: Optional[float] = None


class Concepts(ServiceModel):
    concepts: List[ScoredConcept] = Field(default_factory=list)


class Annotation(ServiceModel):
    concept: Optional[Concept] = None
    score: Optional[float] = None
    text_index: Optional[List[int]] = Field(None, description="[start, end) offsets in the annotated text")


class Annotations(ServiceModel):
    annotations: List[Annotation] = Field(default_factory=list)


class Match(ServiceModel):
    id: Optional[str] = None
    label: Optional[str] = None
    type: Optional[str] = Field(None, description="'concept' or 'document'")
    matched_fields: Optional[Dict[str, Any]] = None


class Matches(ServiceModel):
    matches: List[Match] = Field(default_factory=list)


class Score(ServiceModel):
    concept: Optional[str] = Field(None, description="Concept identifier")
    score: Optional[float] = None


class Scores(ServiceModel):
    scores: List[Score] = Field(default_factory=list)
