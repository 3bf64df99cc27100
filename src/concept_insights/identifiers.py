"""
Identifier resolution for corpora, graphs, documents and concepts.

Corpora and graphs may be given by name only; their id is then built from the
caller's account id. Documents and concepts must already carry their id.
Resolving an object that already has an id returns that id unchanged.
"""

import logging
from typing import Callable, Optional, Union

from concept_insights.exceptions import InvalidArgument
from concept_insights.models.corpus import CORPORA_PREFIX, Corpus
from concept_insights.models.document import Document
from concept_insights.models.graph import GRAPHS_PREFIX, Concept, Graph

logger = logging.getLogger(__name__)

# Either the account id itself or a zero-argument callable returning it.
# The callable is only invoked when an id actually has to be built.
AccountIdSource = Union[str, Callable[[], Optional[str]], None]


def _account_id(source: AccountIdSource) -> str:
    value = source() if callable(source) else source
    if not value:
        raise InvalidArgument("account_id cannot be empty")
    return value


def _path_shaped(identifier: str, kind: str) -> str:
    if not identifier.startswith("/"):
        raise InvalidArgument(f"{kind}.id must be a path starting with '/': {identifier!r}")
    return identifier


def get_corpus_id(corpus: Corpus, account_id: AccountIdSource = None) -> str:
    """
    Returns the corpus id, building /corpora/<account>/<name> when needed.

    The corpus' own account_id takes precedence over `account_id`.
    """
    if corpus is None:
        raise InvalidArgument("corpus cannot be null")
    if corpus.id:
        return _path_shaped(corpus.id, "corpus")
    if not corpus.name:
        raise InvalidArgument("corpus.name cannot be empty")
    account = corpus.account_id or _account_id(account_id)
    corpus_id = f"{CORPORA_PREFIX}{account}/{corpus.name}"
    logger.debug(f"Resolved corpus {corpus.name!r} to {corpus_id}")
    return corpus_id


def get_graph_id(graph: Graph, account_id: AccountIdSource = None) -> str:
    """Returns the graph id, building /graphs/<account>/<name> when needed."""
    if graph is None:
        raise InvalidArgument("graph cannot be null")
    if graph.id:
        return _path_shaped(graph.id, "graph")
    if not graph.name:
        raise InvalidArgument("graph.name cannot be empty")
    graph_id = f"{GRAPHS_PREFIX}{_account_id(account_id)}/{graph.name}"
    logger.debug(f"Resolved graph {graph.name!r} to {graph_id}")
    return graph_id


def get_document_id(document: Document) -> str:
    if document is None:
        raise InvalidArgument("document cannot be null")
    if not document.id:
        raise InvalidArgument("document.id cannot be empty")
    return _path_shaped(document.id, "document")


def get_concept_id(concept: Concept) -> str:
    if concept is None:
        raise InvalidArgument("concept cannot be null")
    if not concept.id:
        raise InvalidArgument("concept.id cannot be empty")
    return _path_shaped(concept.id, "concept")
