"""
Concept Insights service facade.

Every method resolves identifiers, translates its options into query
parameters and returns a ServiceCall; nothing is sent until the call is
executed. Invalid arguments are rejected before any request goes out.

Example:
    >>> service = ConceptInsights(username="...", password="...")
    >>> annotations = service.annotate_text(WIKIPEDIA, "IBM is a company").execute()
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, SecretStr

from concept_insights import identifiers
from concept_insights.adapters.http.client import JSON, TEXT_PLAIN, APIClient
from concept_insights.adapters.http.service_call import ServiceCall
from concept_insights.exceptions import InvalidArgument
from concept_insights.models import (
    Accounts,
    Annotations,
    Concept,
    ConceptMetadata,
    Concepts,
    Corpora,
    Corpus,
    CorpusProcessingState,
    CorpusStats,
    Document,
    DocumentAnnotations,
    DocumentProcessingStatus,
    Documents,
    Graph,
    Graphs,
    Matches,
    QueryConcepts,
    Scores,
)
from concept_insights.parameters import (
    ConceptualSearchOptions,
    CorpusLabelSearchOptions,
    GraphLabelSearchOptions,
    ListDocumentsOptions,
    RelatedConceptsOptions,
    concept_ids_param,
    to_json,
)
from concept_insights.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

API_VERSION = "/v2"
ACCOUNTS_PATH = "/v2/accounts"
CORPORA_PATH = "/v2/corpora"
GRAPHS_PATH = "/v2/graphs"
ANNOTATE_TEXT_PATH = "/annotate_text"
ANNOTATIONS_PATH = "/annotations"
CONCEPTUAL_SEARCH_PATH = "/conceptual_search"
DOCUMENTS_PATH = "/documents"
LABEL_SEARCH_PATH = "/label_search"
PROCESSING_STATE_PATH = "/processing_state"
RELATED_CONCEPTS_PATH = "/related_concepts"
RELATION_SCORES_PATH = "/relation_scores"
STATS_PATH = "/stats"

Options = Union[Mapping[str, Any], None]


class ConceptInsights:
    """
    Client for the Concept Insights v2 API.

    Input content is annotated against a concept graph (by default one built
    from English Wikipedia); corpora of documents can be searched and scored
    conceptually against that graph.

    Args:
        username: service username, overrides settings
        password: service password, overrides settings
        api_base_url: service endpoint, overrides settings
        settings: Settings instance; read from the environment when omitted
        client: preconfigured APIClient (mainly for tests)
    """

    def __init__(self,
                 username: Optional[str] = None,
                 password: Union[str, SecretStr, None] = None,
                 api_base_url: Optional[str] = None,
                 settings: Optional[Settings] = None,
                 client: Optional[APIClient] = None):
        self._client: APIClient = client or APIClient(
            settings=settings,
            username=username,
            password=password,
            api_base_url=api_base_url,
        )
        # filled by get_first_account_id(); concurrent first calls may both fetch it
        self._account_id: Optional[str] = None

    @property
    def client(self) -> APIClient:
        return self._client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ConceptInsights":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # request helpers
    # ------------------------------------------------------------------ #

    def _call(self,
              method: str,
              path: str,
              response_model: Optional[Type[T]] = None,
              params: Optional[Mapping[str, Any]] = None,
              data: Optional[str] = None,
              content_type: Optional[str] = None,
              accept: Optional[str] = None) -> ServiceCall[T]:
        request = self._client.build_request(
            method, path, params=params, data=data, content_type=content_type, accept=accept
        )
        return ServiceCall(self._client, request, response_model)

    def _get(self, path: str, response_model: Type[T],
             params: Optional[Mapping[str, Any]] = None) -> ServiceCall[T]:
        return self._call("GET", path, response_model, params=params)

    def _send_body(self, method: str, path: str, resource: BaseModel) -> ServiceCall[None]:
        return self._call(method, path, data=to_json(resource.to_body()), content_type=JSON)

    def _corpus_path(self, corpus: Corpus) -> str:
        return API_VERSION + identifiers.get_corpus_id(corpus, self.get_first_account_id)

    def _graph_path(self, graph: Graph) -> str:
        return API_VERSION + identifiers.get_graph_id(graph, self.get_first_account_id)

    # ------------------------------------------------------------------ #
    # accounts
    # ------------------------------------------------------------------ #

    def get_accounts_info(self) -> ServiceCall[Accounts]:
        """Retrieves the account identifiers visible to the credentials."""
        return self._get(ACCOUNTS_PATH, Accounts)

    def get_first_account_id(self) -> Optional[str]:
        """
        Returns the id of the first account, fetching it on first use.

        The value is cached for the lifetime of this client. Returns None
        when the service reports no account; building ids by name then fails
        with InvalidArgument.
        """
        if self._account_id is None:
            accounts = self.get_accounts_info().execute()
            if accounts is not None and accounts.accounts:
                self._account_id = accounts.accounts[0].id
                logger.debug(f"Using account {self._account_id}")
            else:
                logger.warning("Service returned no accounts")
        return self._account_id

    # ------------------------------------------------------------------ #
    # graphs and concepts
    # ------------------------------------------------------------------ #

    def list_graphs(self) -> ServiceCall[Graphs]:
        return self._get(GRAPHS_PATH, Graphs)

    def annotate_text(self, graph: Graph, text: str) -> ServiceCall[Annotations]:
        """
        Identifies concepts in a piece of text.

        Args:
            graph: graph to annotate against, e.g. WIKIPEDIA
            text: the text to annotate, sent as text/plain

        Returns:
            ServiceCall producing Annotations
        """
        if not text:
            raise InvalidArgument("text cannot be empty")
        path = self._graph_path(graph) + ANNOTATE_TEXT_PATH
        return self._call("POST", path, Annotations, data=text, content_type=TEXT_PLAIN, accept=JSON)

    def get_concept(self, concept: Concept) -> ServiceCall[ConceptMetadata]:
        """Returns information for a specific concept node in a graph."""
        return self._get(API_VERSION + identifiers.get_concept_id(concept), ConceptMetadata)

    def get_concept_related_concepts(self, concept: Concept,
                                     options: Union[RelatedConceptsOptions, Options] = None) -> ServiceCall[Concepts]:
        """
        Retrieves concepts related to a concept.

        Args:
            concept: the source concept (id required)
            options: RelatedConceptsOptions or a mapping with level, limit, concept_fields
        """
        params = RelatedConceptsOptions.coerce(options).to_query_params()
        path = API_VERSION + identifiers.get_concept_id(concept) + RELATED_CONCEPTS_PATH
        return self._get(path, Concepts, params)

    def get_graph_related_concepts(self, graph: Graph, concepts: Sequence[Union[Concept, str]],
                                   options: Union[RelatedConceptsOptions, Options] = None) -> ServiceCall[Concepts]:
        """
        Retrieves concepts of a graph related to a list of concepts.

        Args:
            graph: the graph
            concepts: non-empty list of concepts (or concept ids)
            options: RelatedConceptsOptions or a mapping with level, limit, concept_fields
        """
        params = RelatedConceptsOptions.coerce(options).to_query_params()
        params["concepts"] = concept_ids_param(concepts)
        path = self._graph_path(graph) + RELATED_CONCEPTS_PATH
        return self._get(path, Concepts, params)

    def get_graph_relation_scores(self, concept: Concept,
                                  concepts: Sequence[Union[Concept, str]]) -> ServiceCall[Scores]:
        """Scores how related a source concept is to each concept of a list."""
        params = {"concepts": concept_ids_param(concepts)}
        path = API_VERSION + identifiers.get_concept_id(concept) + RELATION_SCORES_PATH
        return self._get(path, Scores, params)

    def search_graphs_concept_by_label(self, graph: Graph,
                                       options: Union[GraphLabelSearchOptions, Options]) -> ServiceCall[Matches]:
        """
        Searches graph concepts by partial matches on their labels.

        Args:
            graph: the graph to search
            options: GraphLabelSearchOptions or a mapping; query is required,
                prefix, limit and concept_fields are optional
        """
        params = GraphLabelSearchOptions.coerce(options).to_query_params()
        path = self._graph_path(graph) + LABEL_SEARCH_PATH
        return self._get(path, Matches, params)

    # ------------------------------------------------------------------ #
    # corpora
    # ------------------------------------------------------------------ #

    def list_corpora(self, account_id: Optional[str] = None) -> ServiceCall[Corpora]:
        """
        Retrieves the available corpora, optionally restricted to one account.

        Raises:
            InvalidArgument: if account_id is given but empty
        """
        if account_id is None:
            return self._get(CORPORA_PATH, Corpora)
        if not account_id:
            raise InvalidArgument("account_id cannot be empty")
        return self._get(f"{CORPORA_PATH}/{account_id}", Corpora)

    def create_corpus(self, corpus: Corpus) -> ServiceCall[None]:
        """Creates an empty corpus."""
        return self._send_body("PUT", self._corpus_path(corpus), corpus)

    def update_corpus(self, corpus: Corpus) -> ServiceCall[None]:
        """Updates existing corpus meta-data (access and permissions)."""
        return self._send_body("POST", self._corpus_path(corpus), corpus)

    def delete_corpus(self, corpus: Corpus) -> ServiceCall[None]:
        return self._call("DELETE", self._corpus_path(corpus))

    def get_corpus(self, corpus: Corpus) -> ServiceCall[Corpus]:
        return self._get(self._corpus_path(corpus), Corpus)

    def get_corpus_processing_state(self, corpus: Corpus) -> ServiceCall[CorpusProcessingState]:
        return self._get(self._corpus_path(corpus) + PROCESSING_STATE_PATH, CorpusProcessingState)

    def get_corpus_stats(self, corpus: Corpus) -> ServiceCall[CorpusStats]:
        return self._get(self._corpus_path(corpus) + STATS_PATH, CorpusStats)

    def get_corpus_related_concepts(self, corpus: Corpus,
                                    options: Union[RelatedConceptsOptions, Options] = None) -> ServiceCall[Concepts]:
        """Retrieves concepts related to an entire corpus."""
        params = RelatedConceptsOptions.coerce(options).to_query_params()
        return self._get(self._corpus_path(corpus) + RELATED_CONCEPTS_PATH, Concepts, params)

    def get_corpus_relation_scores(self, corpus: Corpus,
                                   concepts: Sequence[Union[Concept, str]]) -> ServiceCall[Scores]:
        """Scores how related an entire corpus is to each concept of a list."""
        params = {"concepts": concept_ids_param(concepts)}
        return self._get(self._corpus_path(corpus) + RELATION_SCORES_PATH, Scores, params)

    def conceptual_search(self, corpus: Corpus,
                          options: Union[ConceptualSearchOptions, Options]) -> ServiceCall[QueryConcepts]:
        """
        Performs a conceptual search within a corpus.

        Args:
            corpus: the corpus to search
            options: ConceptualSearchOptions or a mapping; ids is required,
                cursor, limit, concept_fields and document_fields are optional

        Returns:
            ServiceCall producing QueryConcepts
        """
        params = ConceptualSearchOptions.coerce(options).to_query_params()
        return self._get(self._corpus_path(corpus) + CONCEPTUAL_SEARCH_PATH, QueryConcepts, params)

    def search_corpus_by_label(self, corpus: Corpus,
                               options: Union[CorpusLabelSearchOptions, Options]) -> ServiceCall[Matches]:
        """Searches documents and concepts by partial matches on their labels."""
        params = CorpusLabelSearchOptions.coerce(options).to_query_params()
        return self._get(self._corpus_path(corpus) + LABEL_SEARCH_PATH, Matches, params)

    def list_documents(self, corpus: Corpus,
                       options: Union[ListDocumentsOptions, Options] = None) -> ServiceCall[Documents]:
        """
        Retrieves the document ids of a corpus.

        Args:
            corpus: the corpus
            options: ListDocumentsOptions or a mapping with query
                (e.g. {"status": "ready"}), cursor and limit
        """
        params = ListDocumentsOptions.coerce(options).to_query_params()
        return self._get(self._corpus_path(corpus) + DOCUMENTS_PATH, Documents, params)

    # ------------------------------------------------------------------ #
    # documents
    # ------------------------------------------------------------------ #

    def create_document(self, document: Document) -> ServiceCall[None]:
        """Creates a document in its corpus; the document id must be set."""
        path = API_VERSION + identifiers.get_document_id(document)
        return self._send_body("PUT", path, document)

    def update_document(self, document: Document) -> ServiceCall[None]:
        path = API_VERSION + identifiers.get_document_id(document)
        return self._send_body("POST", path, document)

    def delete_document(self, document: Document) -> ServiceCall[None]:
        return self._call("DELETE", API_VERSION + identifiers.get_document_id(document))

    def get_document(self, document: Document) -> ServiceCall[Document]:
        return self._get(API_VERSION + identifiers.get_document_id(document), Document)

    def get_document_annotations(self, document: Document) -> ServiceCall[DocumentAnnotations]:
        """Retrieves the conceptual view (annotations) of a document."""
        path = API_VERSION + identifiers.get_document_id(document) + ANNOTATIONS_PATH
        return self._get(path, DocumentAnnotations)

    def get_document_processing_state(self, document: Document) -> ServiceCall[DocumentProcessingStatus]:
        path = API_VERSION + identifiers.get_document_id(document) + PROCESSING_STATE_PATH
        return self._get(path, DocumentProcessingStatus)

    def get_document_related_concepts(self, document: Document,
                                      options: Union[RelatedConceptsOptions, Options] = None) -> ServiceCall[Concepts]:
        """Retrieves concepts related to a document."""
        params = RelatedConceptsOptions.coerce(options).to_query_params()
        path = API_VERSION + identifiers.get_document_id(document) + RELATED_CONCEPTS_PATH
        return self._get(path, Concepts, params)

    def get_document_relation_scores(self, document: Document,
                                     concepts: Sequence[Union[Concept, str]]) -> ServiceCall[Scores]:
        """Scores how related a document is to each concept of a list."""
        params = {"concepts": concept_ids_param(concepts)}
        path = API_VERSION + identifiers.get_document_id(document) + RELATION_SCORES_PATH
        return self._get(path, Scores, params)
