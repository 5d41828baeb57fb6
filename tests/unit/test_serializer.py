"""
Unit Tests for Factor Graph Output
==================================
"""
import io

import numpy as np
import pytest

from pathway_bn.core.exceptions import MalformedInputError
from pathway_bn.factors import (
    FactorAssembler,
    FactorGeneratorRegistry,
    RepressorDominatesVoteFactorGenerator,
    format_factor_graph,
    format_node_map,
    parse_factor_graph,
    write_factor_graph,
)
from pathway_bn.kg import PathwayGraph


@pytest.fixture
def graph():
    """geneA (protein) activating geneB (other)"""
    return PathwayGraph.from_streams(["protein\tgeneA\n", "other\tgeneB\n", "geneA\tgeneB\t-dp>\n"])


@pytest.fixture
def factors(graph):
    """Factors of the two-gene graph with epsilon 0.1"""
    registry = FactorGeneratorRegistry(RepressorDominatesVoteFactorGenerator(0.1))
    return FactorAssembler(graph, registry).build_factors()


class TestFactorGraphFormat:
    """Test factor graph text"""

    def test_first_block(self, factors):
        """Test the header and first factor block"""
        lines = format_factor_graph(factors).splitlines()
        assert lines[:7] == ["4", "", "2", "0 3", "3 3", "9", "0\t0.900000"]
        assert lines[7:15] == [
            "1\t0.050000",
            "2\t0.050000",
            "3\t0.050000",
            "4\t0.900000",
            "5\t0.050000",
            "6\t0.050000",
            "7\t0.050000",
            "8\t0.900000",
        ]

    def test_header_matches_blocks(self, factors):
        """Test every block reads back as its factor"""
        text = format_factor_graph(factors)
        parsed = parse_factor_graph(text)
        assert int(text.splitlines()[0]) == len(parsed) == len(factors)
        for (labels, dims, values), factor in zip(parsed, factors):
            assert len(labels) == len(dims) == len(factor.parents) + 1
            assert labels == list(factor.labels)
            assert all(d == 3 for d in dims)
            np.testing.assert_allclose(values, factor.values, atol=1e-6)

    def test_stream_and_string_agree(self, factors):
        """Test stream and string output are identical"""
        buffer = io.StringIO()
        write_factor_graph(factors, buffer)
        assert buffer.getvalue() == format_factor_graph(factors)

    def test_empty(self):
        """Test an empty factor list"""
        assert format_factor_graph([]) == "0\n"

    def test_parse_truncated(self, factors):
        """Test truncated text is malformed"""
        text = format_factor_graph(factors)
        with pytest.raises(MalformedInputError):
            parse_factor_graph("\n".join(text.splitlines()[:-1]))


class TestNodeMap:
    """Test node id listing"""

    def test_node_map(self, graph):
        """Test the node listing with a prefix"""
        assert format_node_map(graph, prefix="id ") == (
            "id 0\tgeneA\tactive\n"
            "id 1\tgeneA\tgenome\n"
            "id 2\tgeneA\tmRNA\n"
            "id 3\tgeneA\tprotein\n"
            "id 4\tgeneB\tactive\n"
        )

    def test_node_map_no_prefix(self, graph):
        """Test the node listing without a prefix"""
        assert format_node_map(graph).splitlines()[4] == "4\tgeneB\tactive"
