"""
# ==============================================================================
# Module: pathway_bn/kg/__init__.py
# ==============================================================================
# Purpose: Pathway graph - entities, dogma expansion and typed interactions
#
# Dependencies:
#   - External: networkx
#   - Internal: pathway_bn.core.types
#
# Exports:
#   - PathwayGraph: Node/edge registry
#   - InteractionMap: Interaction label lookup
#   - CentralDogmaTemplate: Expression template for multi-stage entities
#   - tokenize_line, iter_records: Input line readers
#
# Usage:
#   from pathway_bn.kg import PathwayGraph
#
#   graph = PathwayGraph.from_streams(open("pathway.tab"))
#   for child in graph.children_with_parents():
#       print(child, graph.get_parents(child))
# ==============================================================================
"""

from pathway_bn.kg.readers import iter_records, open_lines, tokenize_line
from pathway_bn.kg.interactions import DEFAULT_INTERACTION_MAP, InteractionMap
from pathway_bn.kg.dogma import DEFAULT_CENTRAL_DOGMA, CentralDogmaTemplate
from pathway_bn.kg.graph import PathwayGraph

__all__ = [
    # Readers
    "iter_records",
    "open_lines",
    "tokenize_line",
    # Templates
    "DEFAULT_INTERACTION_MAP",
    "InteractionMap",
    "DEFAULT_CENTRAL_DOGMA",
    "CentralDogmaTemplate",
    # Core graph
    "PathwayGraph",
]
