import argparse
import logging
import sys
from pathlib import Path

from concept_insights import logging_setup
from concept_insights.exceptions import ConceptInsightsError
from concept_insights.models import WIKIPEDIA, Concept, Graph
from concept_insights.parameters import GraphLabelSearchOptions, RelatedConceptsOptions
from concept_insights.service import ConceptInsights
from concept_insights.settings import get_settings

logger = logging.getLogger(__name__)


def _graph(value: str) -> Graph:
    # full ids (/graphs/<account>/<name>) are used as-is, bare names are resolved against the account
    if value.startswith("/"):
        return Graph(id=value)
    return Graph(name=value)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Query the Concept Insights service")
    p.add_argument("--username", help="Service username (default: CONCEPT_INSIGHTS_USERNAME)")
    p.add_argument("--password", help="Service password (default: CONCEPT_INSIGHTS_PASSWORD)")
    p.add_argument("--url", help="Service endpoint (default: CONCEPT_INSIGHTS_API_BASE_URL)")
    p.add_argument("--log_level", help="Logging level (DEBUG, INFO, WARNING, ERROR), default from settings")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("accounts", help="List account ids")
    sub.add_parser("graphs", help="List available graphs")

    corpora = sub.add_parser("corpora", help="List corpora")
    corpora.add_argument("--account", help="Restrict to one account id")

    annotate = sub.add_parser("annotate", help="Annotate text against a graph")
    annotate.add_argument("text", nargs="?", help="Text to annotate")
    annotate.add_argument("--file", help="Read the text from a file instead")
    annotate.add_argument("--graph", default=WIKIPEDIA.id, help="Graph id or name")

    search = sub.add_parser("label-search", help="Search graph concepts by label")
    search.add_argument("query", help="Label text to match")
    search.add_argument("--graph", default=WIKIPEDIA.id, help="Graph id or name")
    search.add_argument("--prefix", action="store_true", help="Treat the query as a prefix")
    search.add_argument("--limit", type=int, help="Maximum number of matches")

    related = sub.add_parser("related", help="List concepts related to a concept")
    related.add_argument("concept", help="Concept id, e.g. /graphs/wikipedia/en-20120601/concepts/IBM")
    related.add_argument("--level", type=int, help="Popularity level, 0 - 3")
    related.add_argument("--limit", type=int, help="Maximum number of concepts")

    return p


def run(service: ConceptInsights, a: argparse.Namespace):
    """Builds the ServiceCall for the parsed command and executes it."""
    if a.command == "accounts":
        call = service.get_accounts_info()
    elif a.command == "graphs":
        call = service.list_graphs()
    elif a.command == "corpora":
        call = service.list_corpora(a.account)
    elif a.command == "annotate":
        text = Path(a.file).read_text(encoding="utf-8") if a.file else a.text
        call = service.annotate_text(_graph(a.graph), text)
    elif a.command == "label-search":
        options = GraphLabelSearchOptions(query=a.query, prefix=a.prefix or None, limit=a.limit)
        call = service.search_graphs_concept_by_label(_graph(a.graph), options)
    elif a.command == "related":
        options = RelatedConceptsOptions(level=a.level, limit=a.limit)
        call = service.get_concept_related_concepts(Concept(id=a.concept), options)
    else:
        raise ValueError(f"Unknown command {a.command}")

    logger.info(f"Calling {call.request.method} {call.request.url}")
    return call.execute()


def main(argv=None):
    a = build_parser().parse_args(argv)

    # Initialize logging
    logging_setup.setup_logging(a.log_level or get_settings().log_level)

    try:
        with ConceptInsights(username=a.username, password=a.password, api_base_url=a.url) as service:
            result = run(service, a)
    except (ConceptInsightsError, OSError) as e:
        logger.error(f"{a.command} failed: {e}")
        sys.exit(1)

    print(result.model_dump_json(indent=2, by_alias=True, exclude_none=True))

if __name__ == "__main__":
    main()
