"""
pathway_bn
==========
Pathway descriptions to discrete Bayesian network factor graphs.

Usage:
    from pathway_bn import PathwayGraph, FactorAssembler
    from pathway_bn import FactorGeneratorRegistry, RepressorDominatesVoteFactorGenerator

    graph = PathwayGraph.from_streams(open("pathway.tab"))
    registry = FactorGeneratorRegistry(RepressorDominatesVoteFactorGenerator(0.001))
    assembly = FactorAssembler(graph, registry).construct_factors(em_steps)
"""

__version__ = "1.0.0"

from pathway_bn.core import (
    Factor,
    InternalConsistencyError,
    MalformedInputError,
    Node,
    PathwayError,
    Polarity,
    UnknownInteractionError,
    Var,
)
from pathway_bn.kg import CentralDogmaTemplate, InteractionMap, PathwayGraph
from pathway_bn.factors import (
    EMSpec,
    EMStep,
    FactorAssembler,
    FactorAssembly,
    FactorGeneratorRegistry,
    RepressorDominatesVoteFactorGenerator,
    format_factor_graph,
    format_node_map,
)

__all__ = [
    "__version__",
    "Factor",
    "InternalConsistencyError",
    "MalformedInputError",
    "Node",
    "PathwayError",
    "Polarity",
    "UnknownInteractionError",
    "Var",
    "CentralDogmaTemplate",
    "InteractionMap",
    "PathwayGraph",
    "EMSpec",
    "EMStep",
    "FactorAssembler",
    "FactorAssembly",
    "FactorGeneratorRegistry",
    "RepressorDominatesVoteFactorGenerator",
    "format_factor_graph",
    "format_node_map",
]
