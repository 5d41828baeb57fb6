"""
Integration Tests: Pathway -> Factor Graph
==========================================
End-to-end tests over the fixture pathway:
  1. Build the graph from text files and check node ids / edges
  2. Assemble factors and EM parameter-sharing groups
  3. Run the command line and read the written factor graph back

Module: tests/integration/test_pipeline.py
"""
from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from pathway_bn.cli import main
from pathway_bn.config import load_config
from pathway_bn.core.types import Node
from pathway_bn.factors import parse_factor_graph
from pathway_bn.pipeline import run_build

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def config():
    """Fixture build configuration"""
    return load_config(FIXTURES_DIR / "build.yaml")


@pytest.fixture
def result(config):
    """Build result for the fixture configuration"""
    return run_build(config)


def _position(result, entity, subtype):
    node_id = result.graph.get_node_id(Node(entity, subtype))
    return [f.child.label for f in result.assembly.factors].index(node_id)


# =============================================================================
# Graph
# =============================================================================
class TestSignalingGraph:
    """Graph built from signaling.tab"""

    def test_nodes(self, result):
        """Test node ids of the signaling pathway"""
        graph = result.graph
        assert graph.total_nodes == 10
        assert graph.node_order[:4] == (
            Node("TP53", "active"),
            Node("TP53", "genome"),
            Node("TP53", "mRNA"),
            Node("TP53", "protein"),
        )
        assert graph.get_node_id(Node("p53 complex", "active")) == 9

    def test_edges(self, result):
        """Test dogma and interaction edges"""
        graph = result.graph
        assert graph.total_edges == 11
        assert graph.parents_of[Node("MDM2", "mRNA")] == {
            Node("MDM2", "genome"): "positive",
            Node("TP53", "active"): "positive",
        }
        assert graph.parents_of[Node("TP53", "active")][Node("MDM2", "active")] == "negative"


# =============================================================================
# Factors and EM groups
# =============================================================================
class TestSignalingFactors:
    """Factors and maximization steps"""

    def test_factor_order(self, result):
        """Test factors are ordered by child node"""
        children = [result.graph.get_node(f.child.label) for f in result.assembly.factors]
        assert children == sorted(children)
        assert len(children) == 8

    def test_override_epsilon(self, result):
        """Test the protein mRNA override epsilon"""
        mrna = result.assembly.factors[_position(result, "TP53", "mRNA")]
        active = result.assembly.factors[_position(result, "TP53", "active")]
        assert mrna.values.max() == pytest.approx(0.99)
        assert active.values.max() == pytest.approx(0.999)

    def test_maximization_steps(self, result):
        """Test EM groups and orientations"""
        steps = result.assembly.maximization_steps
        assert len(steps) == 2

        mrna_group, protein_group = steps[0].shared_parameters
        assert sorted(mrna_group.orientations) == [_position(result, "TP53", "mRNA")]
        assert sorted(protein_group.orientations) == sorted([
            _position(result, "MDM2", "protein"),
            _position(result, "TP53", "protein"),
        ])
        assert mrna_group.estimation.total_dim == 9

        (active_group,) = steps[1].shared_parameters
        assert active_group.estimation.total_dim == 27
        graph = result.graph
        tp53 = active_group.orientations[_position(result, "TP53", "active")]
        assert tp53 == [
            graph.get_var(Node("TP53", "active")),
            graph.get_var(Node("TP53", "protein")),
            graph.get_var(Node("MDM2", "active")),
        ]
        assert _position(result, "apoptosis", "active") in active_group.orientations

    def test_warnings(self, result):
        """Test diagnostics for unmatched groups and steps"""
        warnings = result.assembly.warnings
        assert len(warnings) == 2
        assert "genome" in warnings[0]
        assert "em_step number 2" in warnings[1]


# =============================================================================
# Command line
# =============================================================================
class TestCommandLine:
    """Run the CLI end to end"""

    def test_cli_writes_outputs(self, tmp_path, result):
        """Test the CLI writes the factor graph and node map"""
        output = tmp_path / "net.fg"
        node_map = tmp_path / "ids.tab"
        code = main([
            "--config", str(FIXTURES_DIR / "build.yaml"),
            "--output", str(output),
            "--node-map", str(node_map),
        ])
        assert code == 0

        parsed = parse_factor_graph(output.read_text())
        assert len(parsed) == len(result.assembly.factors)
        for (labels, _, values), factor in zip(parsed, result.assembly.factors):
            assert labels == list(factor.labels)
            np.testing.assert_allclose(values, factor.values, atol=1e-6)

        lines = node_map.read_text().splitlines()
        assert len(lines) == 10
        assert lines[9] == "id 9\tp53 complex\tactive"

    def test_cli_unknown_interaction(self, tmp_path):
        """Test an unknown interaction exits 1 without output"""
        pathway = tmp_path / "bad.tab"
        pathway.write_text("protein\tgeneA\ngeneA\tgeneB\t-zz>\n")
        output = tmp_path / "net.fg"
        code = main(["--pathway", str(pathway), "--epsilon", "0.01", "--output", str(output)])
        assert code == 1
        assert not output.exists()

    def test_cli_missing_epsilon(self, tmp_path):
        """Test a missing epsilon exits 1"""
        pathway = tmp_path / "p.tab"
        pathway.write_text("protein\tgeneA\n")
        assert main(["--pathway", str(pathway)]) == 1

    def test_cli_stdout(self, tmp_path, capsys):
        """Test the factor graph goes to stdout without --output"""
        pathway = tmp_path / "p.tab"
        pathway.write_text("protein\tgeneA\n")
        assert main(["--pathway", str(pathway), "--epsilon", "0.01"]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "3"

    def test_cli_null_em_spec(self, tmp_path):
        """Test an EM step without edge types exits 1"""
        em_steps = tmp_path / "em.yaml"
        em_steps.write_text("- mRNA:\n")
        code = main([
            "--pathway", str(FIXTURES_DIR / "two_gene.tab"),
            "--epsilon", "0.01",
            "--em-steps", str(em_steps),
        ])
        assert code == 1

    def test_cli_invalid_config_yaml(self, tmp_path):
        """Test an unparsable config file exits 1"""
        config = tmp_path / "build.yaml"
        config.write_text("epsilon: [0.1\n")
        assert main(["--config", str(config)]) == 1

    def test_cli_quoted_epsilon(self, tmp_path, capsys):
        """Test a quoted epsilon in the config file is accepted"""
        (tmp_path / "p.tab").write_text("protein\tgeneA\n")
        config = tmp_path / "build.yaml"
        config.write_text("pathway_file: p.tab\nepsilon: '0.01'\n")
        assert main(["--config", str(config)]) == 0
        assert capsys.readouterr().out.splitlines()[0] == "3"

    def test_cli_non_numeric_epsilon(self, tmp_path):
        """Test a non-numeric epsilon in the config file exits 1"""
        (tmp_path / "p.tab").write_text("protein\tgeneA\n")
        config = tmp_path / "build.yaml"
        config.write_text("pathway_file: p.tab\nepsilon: small\n")
        assert main(["--config", str(config)]) == 1

    def test_cli_unwritable_node_map(self, tmp_path, capsys):
        """Test an unwritable node map exits 1 before writing stdout"""
        node_map = tmp_path / "missing" / "ids.tab"
        code = main([
            "--pathway", str(FIXTURES_DIR / "two_gene.tab"),
            "--epsilon", "0.01",
            "--node-map", str(node_map),
        ])
        assert code == 1
        assert capsys.readouterr().out == ""
