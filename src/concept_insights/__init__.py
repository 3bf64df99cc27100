"""Python client for the Concept Insights v2 concept-graph service."""

from concept_insights.adapters.http.service_call import ServiceCall
from concept_insights.exceptions import ConceptInsightsError, InvalidArgument, ServiceError
from concept_insights.models import WIKIPEDIA, Concept, Corpus, Document, Graph, RequestedFields
from concept_insights.parameters import (
    ConceptualSearchOptions,
    CorpusLabelSearchOptions,
    GraphLabelSearchOptions,
    ListDocumentsOptions,
    RelatedConceptsOptions,
)
from concept_insights.service import ConceptInsights

__version__ = "0.1.0"

__all__ = [
    "Concept",
    "ConceptInsights",
    "ConceptInsightsError",
    "ConceptualSearchOptions",
    "Corpus",
    "CorpusLabelSearchOptions",
    "Document",
    "Graph",
    "GraphLabelSearchOptions",
    "InvalidArgument",
    "ListDocumentsOptions",
    "RelatedConceptsOptions",
    "RequestedFields",
    "ServiceCall",
    "ServiceError",
    "WIKIPEDIA",
]
