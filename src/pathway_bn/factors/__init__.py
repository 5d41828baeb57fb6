"""
# ==============================================================================
# Module: pathway_bn/factors/__init__.py
# ==============================================================================
# Purpose: Factor synthesis - probability tables, EM parameter sharing and
#          factor graph output
#
# Exports:
#   - RepressorDominatesVoteFactorGenerator, FactorGeneratorRegistry
#   - FactorAssembler, FactorAssembly
#   - EMSpec, EMStep, parse_em_steps, load_em_steps
#   - ParameterEstimation, SharedParameters, MaximizationStep
#   - write_factor_graph, format_factor_graph, write_node_map, format_node_map
#
# Usage:
#   registry = FactorGeneratorRegistry(RepressorDominatesVoteFactorGenerator(0.001))
#   assembly = FactorAssembler(graph, registry).construct_factors(em_steps)
#   print(format_factor_graph(assembly.factors))
# ==============================================================================
"""

from pathway_bn.factors.generators import (
    FactorGeneratorRegistry,
    RepressorDominatesVoteFactorGenerator,
    count_votes_repressor_dominates,
)
from pathway_bn.factors.em import (
    CONDITIONAL_PROB_ESTIMATION,
    EMSpec,
    EMStep,
    MaximizationStep,
    ParameterEstimation,
    SharedParameters,
    construct_parameter_estimation,
    load_em_steps,
    parse_em_steps,
)
from pathway_bn.factors.assembler import FactorAssembler, FactorAssembly
from pathway_bn.factors.serializer import (
    format_factor_graph,
    format_node_map,
    parse_factor_graph,
    write_factor_graph,
    write_node_map,
)

__all__ = [
    # Generators
    "FactorGeneratorRegistry",
    "RepressorDominatesVoteFactorGenerator",
    "count_votes_repressor_dominates",
    # EM
    "CONDITIONAL_PROB_ESTIMATION",
    "EMSpec",
    "EMStep",
    "MaximizationStep",
    "ParameterEstimation",
    "SharedParameters",
    "construct_parameter_estimation",
    "load_em_steps",
    "parse_em_steps",
    # Assembly
    "FactorAssembler",
    "FactorAssembly",
    # Output
    "format_factor_graph",
    "format_node_map",
    "parse_factor_graph",
    "write_factor_graph",
    "write_node_map",
]
