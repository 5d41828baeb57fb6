"""
# ==============================================================================
# Module: pathway_bn/factors/serializer.py
# ==============================================================================
# Purpose: Text output for the inference engine - factor graph file and node
#          id listing
#
# Output format (factor graph):
#   <factor count>
#
#   <number of variables>
#   <child id> <parent ids...>
#   <dimensions...>
#   <entry count>
#   <index>\t<probability, 6 decimals>
#   ...
# ==============================================================================
"""
from __future__ import annotations

import io
import logging
from typing import List, Sequence, TextIO, Tuple

import numpy as np

from pathway_bn.core.exceptions import MalformedInputError
from pathway_bn.core.types import Factor
from pathway_bn.kg.graph import PathwayGraph

logger = logging.getLogger(__name__)


def write_factor_graph(factors: Sequence[Factor], stream: TextIO) -> None:
    """Write factors in factor graph format"""
    stream.write(f"{len(factors)}\n")
    for factor in factors:
        stream.write("\n")
        stream.write(f"{len(factor.variables)}\n")
        stream.write(" ".join(str(v.label) for v in factor.variables) + "\n")
        stream.write(" ".join(str(v.states) for v in factor.variables) + "\n")
        stream.write(f"{len(factor.values)}\n")
        for index, value in enumerate(factor.values):
            stream.write(f"{index}\t{value:.6f}\n")
    logger.debug(f"Wrote {len(factors)} factors")


def format_factor_graph(factors: Sequence[Factor]) -> str:
    buffer = io.StringIO()
    write_factor_graph(factors, buffer)
    return buffer.getvalue()


def write_node_map(graph: PathwayGraph, stream: TextIO, prefix: str = "") -> None:
    """One line per node, by id: <prefix><id>\\t<entity>\\t<subtype>"""
    for node_id, node in enumerate(graph.node_order):
        stream.write(f"{prefix}{node_id}\t{node.entity}\t{node.subtype}\n")


def format_node_map(graph: PathwayGraph, prefix: str = "") -> str:
    buffer = io.StringIO()
    write_node_map(graph, buffer, prefix=prefix)
    return buffer.getvalue()


def parse_factor_graph(text: str) -> List[Tuple[List[int], List[int], np.ndarray]]:
    """
    Read factor graph text back

    Returns:
        (variable ids, dimensions, dense values) per factor; entries missing
        from a block are zero
    """
    tokens = [line.strip() for line in text.splitlines() if line.strip()]
    if not tokens:
        raise MalformedInputError("empty factor graph", source="factor graph")

    pos = 0

    def take() -> str:
        nonlocal pos
        if pos >= len(tokens):
            raise MalformedInputError("unexpected end of factor graph", source="factor graph")
        pos += 1
        return tokens[pos - 1]

    factors = []
    for _ in range(int(take())):
        num_vars = int(take())
        labels = [int(x) for x in take().split()]
        dims = [int(x) for x in take().split()]
        if len(labels) != num_vars or len(dims) != num_vars:
            raise MalformedInputError(
                f"factor {len(factors)} declares {num_vars} variables but lists "
                f"{len(labels)} ids and {len(dims)} dimensions",
                source="factor graph",
            )
        values = np.zeros(int(np.prod(dims)), dtype=np.float64)
        for _ in range(int(take())):
            index, value = take().split()
            values[int(index)] = float(value)
        factors.append((labels, dims, values))

    if pos != len(tokens):
        raise MalformedInputError(
            f"{len(tokens) - pos} trailing lines after last factor", source="factor graph"
        )
    return factors
