"""
Path/query-string builder tests.
"""

import pytest

from cortex_graph.core import (
    NeuronQuery,
    RelativeType,
    build_query_string,
    build_request_url,
    neuron_path,
    neurons_path,
    terminal_path,
)


class TestPaths:
    """Test request path construction."""

    def test_flat_neuron_path(self):
        assert neuron_path("abc") == "cortex/graph/neurons/abc"

    def test_relative_neuron_path(self):
        """Central id + relative type targets the nested relatives resource."""
        path = neuron_path("abc", central_id="c1", relative_type=RelativeType.PRESYNAPTIC)
        assert path == "cortex/graph/neurons/c1/relatives/abc"

    def test_central_without_type_is_flat(self):
        """Central id alone does not scope a by-id lookup."""
        assert neuron_path("abc", central_id="c1") == "cortex/graph/neurons/abc"

    def test_type_without_central_is_flat(self):
        path = neuron_path("abc", relative_type=RelativeType.POSTSYNAPTIC)
        assert path == "cortex/graph/neurons/abc"

    def test_neurons_collection_path(self):
        assert neurons_path() == "cortex/graph/neurons"
        assert neurons_path("c1") == "cortex/graph/neurons/c1/relatives"

    def test_terminal_paths(self):
        assert terminal_path() == "cortex/graph/terminals"
        assert terminal_path("t1") == "cortex/graph/terminals/t1"


class TestQueryString:
    """Test query string serialization."""

    def test_empty_query_has_no_suffix(self):
        assert build_query_string(NeuronQuery()) == ""
        assert build_query_string(None) == ""

    def test_limit_only(self):
        assert build_query_string(NeuronQuery(limit=50)) == "?limit=50"

    def test_multi_values_are_repeated(self):
        """Several values repeat the key, never comma-joined."""
        qs = build_query_string(NeuronQuery(tag_contains=["a", "b"]))
        assert qs == "?TagContains=a&TagContains=b"

    def test_field_order_and_limit_last(self):
        query = NeuronQuery(
            postsynaptic_not=["p2"],
            id=["1"],
            tag_contains_not=["x"],
            presynaptic=["p1"],
            limit=10,
        )
        qs = build_query_string(query)
        assert qs == "?Id=1&TagContainsNot=x&Presynaptic=p1&PostsynapticNot=p2&limit=10"

    def test_positive_and_negative_both_serialized(self):
        """No consistency validation: Id and IdNot are both sent."""
        qs = build_query_string(NeuronQuery(id=["1"], id_not=["1"]))
        assert qs == "?Id=1&IdNot=1"

    def test_relative_type_serialized_first(self):
        qs = build_query_string(NeuronQuery(tag_contains=["a"], limit=5), RelativeType.POSTSYNAPTIC)
        assert qs == "?type=Postsynaptic&TagContains=a&limit=5"

    def test_not_set_type_omitted(self):
        assert build_query_string(NeuronQuery(), RelativeType.NOT_SET) == ""

    def test_explicit_limit_wins(self):
        assert build_query_string(NeuronQuery(limit=5), limit=20) == "?limit=20"

    def test_values_are_percent_encoded(self):
        qs = build_query_string(NeuronQuery(tag_contains=["hello world&more"]))
        assert qs == "?TagContains=hello%20world%26more"

    def test_duplicates_dropped(self):
        qs = build_query_string(NeuronQuery(id=["1", "2", "1"]))
        assert qs == "?Id=1&Id=2"

    def test_deterministic(self):
        query = NeuronQuery(tag_contains=["b", "a"], presynaptic=["x"], limit=3)
        assert build_query_string(query) == build_query_string(query)


class TestRequestUrl:
    """Test base URL joining."""

    @pytest.mark.parametrize("base_url", ["http://host/", "http://host"])
    def test_joins_with_single_slash(self, base_url):
        url = build_request_url(base_url, "cortex/graph/neurons", "?limit=1")
        assert url == "http://host/cortex/graph/neurons?limit=1"
