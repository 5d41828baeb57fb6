"""
# ==============================================================================
# Module: pathway_bn/pipeline.py
# ==============================================================================
# Purpose: End-to-end build: inputs -> PathwayGraph -> factors + EM groups
#          -> factor graph text and node map
#
# Dependencies:
#   - Internal: pathway_bn.config, pathway_bn.kg, pathway_bn.factors
#
# Design Notes:
#   - Sequential, single pass; the graph is finished before any factor is
#     built and everything is built before anything is written
#
# Usage:
#   from pathway_bn.pipeline import run_build
#
#   result = run_build(config)
#   result.write(output_stream, node_map_stream)
# ==============================================================================
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from pathway_bn.config.settings import BuildConfig
from pathway_bn.factors.assembler import FactorAssembler, FactorAssembly
from pathway_bn.factors.em import EMStep, load_em_steps
from pathway_bn.factors.serializer import write_factor_graph, write_node_map
from pathway_bn.kg.graph import PathwayGraph

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Finished graph and its factors"""
    graph: PathwayGraph
    assembly: FactorAssembly
    node_map_prefix: str = ""

    def write(self, factor_stream: TextIO, node_map_stream: Optional[TextIO] = None) -> None:
        write_factor_graph(self.assembly.factors, factor_stream)
        if node_map_stream is not None:
            write_node_map(self.graph, node_map_stream, prefix=self.node_map_prefix)

    def write_files(self, factor_path: Path, node_map_path: Optional[Path] = None) -> None:
        factor_path.parent.mkdir(parents=True, exist_ok=True)
        with open(factor_path, "w") as f:
            write_factor_graph(self.assembly.factors, f)
        logger.info(f"Factor graph saved to {factor_path}")

        if node_map_path is not None:
            node_map_path.parent.mkdir(parents=True, exist_ok=True)
            with open(node_map_path, "w") as f:
                write_node_map(self.graph, f, prefix=self.node_map_prefix)
            logger.info(f"Node map saved to {node_map_path}")

    def get_summary(self) -> Dict[str, Any]:
        return {
            "graph_stats": self.graph.get_statistics(),
            "assembly": self.assembly.get_summary(),
            "warnings": list(self.assembly.warnings),
        }


def run_build(config: BuildConfig, em_steps: Optional[List[EMStep]] = None) -> BuildResult:
    """
    Build graph, factors and maximization steps from a configuration

    Args:
        config: Build configuration (validated here)
        em_steps: EM steps; loaded from config.em_steps_file when None

    Raises:
        PathwayError: on malformed input, unknown interactions or an
            inconsistent factor
    """
    config.validate()
    registry = config.build_registry()

    if em_steps is None:
        em_steps = load_em_steps(config.em_steps_file) if config.em_steps_file else []

    graph = PathwayGraph.from_files(
        config.pathway_file,
        interaction_map_path=config.interaction_map_file,
        dogma_path=config.dogma_file,
    )
    assembly = FactorAssembler(graph, registry).construct_factors(em_steps)

    return BuildResult(graph=graph, assembly=assembly, node_map_prefix=config.node_map_prefix)
