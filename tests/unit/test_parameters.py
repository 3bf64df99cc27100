"""Unit tests for query-parameter translation."""
import json

import pytest

from concept_insights.exceptions import InvalidArgument
from concept_insights.models import Concept, RequestedFields
from concept_insights.parameters import (
    ConceptualSearchOptions,
    CorpusLabelSearchOptions,
    GraphLabelSearchOptions,
    ListDocumentsOptions,
    RelatedConceptsOptions,
    concept_ids_param,
)

AUTOMOBILE = "/graphs/wikipedia/en-20120601/concept/Automobile"


class TestPassThrough:
    """Test that recognized options pass through and others are dropped."""

    def test_absent_options_are_omitted(self):
        """Test that unset options produce no parameters."""
        assert ListDocumentsOptions().to_query_params() == {}
        assert RelatedConceptsOptions().to_query_params() == {}

    def test_empty_mapping_omits_query_cursor_limit(self):
        """Test that an empty mapping omits query, cursor and limit."""
        params = ListDocumentsOptions.coerce({}).to_query_params()
        assert "query" not in params
        assert "cursor" not in params
        assert "limit" not in params

    def test_known_keys_pass_through_unchanged(self):
        """Test that known keys keep their values."""
        params = ListDocumentsOptions.coerce({"query": "{\"status\":\"ready\"}", "cursor": 10, "limit": 5}).to_query_params()
        assert params == {"query": "{\"status\":\"ready\"}", "cursor": 10, "limit": 5}

    def test_unknown_keys_are_dropped(self):
        """Test that unknown keys do not reach the query."""
        params = RelatedConceptsOptions.coerce({"level": 1, "colour": "red"}).to_query_params()
        assert params == {"level": 1}

    def test_dict_query_is_json_encoded(self):
        """Test that a dict document filter is sent as JSON."""
        params = ListDocumentsOptions(query={"status": "error"}).to_query_params()
        assert params["query"] == '{"status":"error"}'

    def test_booleans_are_sent_lowercase(self):
        """Test that booleans are sent as true/false."""
        params = CorpusLabelSearchOptions(query="ibm", prefix=True, concepts=False).to_query_params()
        assert params["prefix"] == "true"
        assert params["concepts"] == "false"

    def test_coerce_rejects_other_types(self):
        """Test that non-mapping options are rejected."""
        with pytest.raises(InvalidArgument):
            RelatedConceptsOptions.coerce(["level", 1])


class TestRequestedFields:
    """Test requested-fields encoding."""

    def test_non_empty_fields_are_json_encoded(self):
        """Test that requested fields are sent as compact JSON."""
        fields = RequestedFields().include("abstract").include("link")
        params = RelatedConceptsOptions(concept_fields=fields).to_query_params()
        assert params["concept_fields"] == '{"abstract":1,"link":1}'

    def test_empty_fields_are_omitted(self):
        """Test that empty requested fields are left out."""
        params = RelatedConceptsOptions(concept_fields=RequestedFields()).to_query_params()
        assert "concept_fields" not in params

    def test_list_of_names_is_accepted(self):
        """Test that field names and flag dicts are both accepted."""
        options = CorpusLabelSearchOptions.coerce(
            {"query": "ibm", "concept_fields": ["abstract"], "document_fields": {"user_fields": 1}}
        )
        params = options.to_query_params()
        assert json.loads(params["concept_fields"]) == {"abstract": 1}
        assert json.loads(params["document_fields"]) == {"user_fields": 1}

    def test_excluded_field_is_sent_as_zero(self):
        """Test that an excluded field is flagged with 0."""
        fields = RequestedFields.of(["abstract"]).exclude("ontology")
        assert fields.to_json() == '{"abstract":1,"ontology":0}'


class TestRequiredOptions:
    """Test required and range-checked options."""

    def test_conceptual_search_requires_ids(self):
        """Test that conceptual search needs a non-empty ids list."""
        with pytest.raises(InvalidArgument, match="ids"):
            ConceptualSearchOptions().to_query_params()
        with pytest.raises(InvalidArgument, match="ids"):
            ConceptualSearchOptions(ids=[]).to_query_params()

    def test_conceptual_search_encodes_ids_as_json_array(self):
        """Test that ids are sent as a JSON array."""
        params = ConceptualSearchOptions(ids=[AUTOMOBILE], limit=3).to_query_params()
        assert params == {"limit": 3, "ids": f'["{AUTOMOBILE}"]'}

    def test_conceptual_search_accepts_concept_objects(self):
        """Test that Concept objects are reduced to their ids."""
        options = ConceptualSearchOptions.coerce({"ids": [Concept(id=AUTOMOBILE)]})
        assert options.ids == [AUTOMOBILE]

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_label_search_requires_query(self, query):
        """Test that label searches need a non-blank query."""
        with pytest.raises(InvalidArgument, match="query"):
            GraphLabelSearchOptions(query=query).to_query_params()
        with pytest.raises(InvalidArgument, match="query"):
            CorpusLabelSearchOptions(query=query).to_query_params()

    def test_level_out_of_range(self):
        """Test that level must lie in 0..3."""
        with pytest.raises(InvalidArgument, match="level"):
            RelatedConceptsOptions(level=4).to_query_params()

    def test_negative_limit(self):
        """Test that a negative limit is rejected."""
        with pytest.raises(InvalidArgument, match="limit"):
            ListDocumentsOptions(limit=-1).to_query_params()

    def test_wrongly_typed_mapping_value(self):
        """Test that a wrongly typed mapping value is rejected."""
        with pytest.raises(InvalidArgument):
            RelatedConceptsOptions.coerce({"limit": "many"})


class TestConceptIds:
    """Test encoding of concept id lists."""

    def test_strings_and_concepts_mix(self):
        """Test that strings and Concept objects can be mixed."""
        encoded = concept_ids_param([AUTOMOBILE, Concept(id="/graphs/wikipedia/en-20120601/concepts/IBM")])
        assert json.loads(encoded) == [AUTOMOBILE, "/graphs/wikipedia/en-20120601/concepts/IBM"]

    def test_literal_encoding(self):
        """Test the exact JSON array sent for one concept."""
        assert concept_ids_param([AUTOMOBILE]) == '["/graphs/wikipedia/en-20120601/concept/Automobile"]'

    @pytest.mark.parametrize("concepts", [None, [], "not-a-list", [Concept()]])
    def test_invalid_concepts(self, concepts):
        """Test that empty or id-less concept lists are rejected."""
        with pytest.raises(InvalidArgument):
            concept_ids_param(concepts)
