"""
# ==============================================================================
# Module: pathway_bn/factors/generators.py
# ==============================================================================
# Purpose: Conditional probability table policies and their lookup registry
#
# Dependencies:
#   - External: numpy
#   - Internal: pathway_bn.core.types (VARIABLE_DIMENSION, Polarity)
#
# Input:
#   - Ordered incoming edge labels of a child node
#
# Output:
#   - Flattened table of VARIABLE_DIMENSION ** (parents + 1) probabilities
# ==============================================================================
"""
from __future__ import annotations

import logging
from typing import Dict, Sequence, Tuple

import numpy as np

from pathway_bn.core.protocols import FactorGeneratorProtocol
from pathway_bn.core.types import (
    DOWN,
    NEUTRAL,
    UP,
    VARIABLE_DIMENSION,
    Polarity,
    ProbabilityTable,
)

logger = logging.getLogger(__name__)


def count_votes_repressor_dominates(down: int, up: int) -> int:
    """
    Expected child state from the vote tally

    Down-votes win ties against up-votes.
    """
    if up > 0 and up > down:
        return UP
    if down > 0 and down >= up:
        return DOWN
    return NEUTRAL


class RepressorDominatesVoteFactorGenerator:
    """
    Vote-based table policy

    Each parent in a non-neutral state casts one vote for its own state,
    or for the opposite state when its edge is negative. The expected child
    state gets probability 1 - epsilon, the other two epsilon / 2 each.

    Parent states are enumerated with the last parent varying fastest; the
    child state varies fastest within each parent combination.
    """

    def __init__(self, epsilon: float):
        """
        Args:
            epsilon: Probability mass spread over the two unexpected states
        """
        if not 0.0 <= epsilon < 1.0:
            raise ValueError(f"epsilon must be in [0, 1), got {epsilon}")
        self.epsilon = float(epsilon)

    def generate_values(self, edge_types: Sequence[str]) -> ProbabilityTable:
        major = 1.0 - self.epsilon
        minor = self.epsilon / 2.0
        negative = [edge_type == Polarity.NEGATIVE.value for edge_type in edge_types]

        dims = (VARIABLE_DIMENSION,) * len(edge_types)
        values = np.full(VARIABLE_DIMENSION ** (len(edge_types) + 1), minor, dtype=np.float64)

        # np.ndindex is an odometer over the parent states, last index fastest
        for position, states in enumerate(np.ndindex(*dims)):
            votes = [0] * VARIABLE_DIMENSION
            for state, inverted in zip(states, negative):
                if inverted:
                    state = VARIABLE_DIMENSION - 1 - state
                votes[state] += 1
            expected = count_votes_repressor_dominates(votes[DOWN], votes[UP])
            values[position * VARIABLE_DIMENSION + expected] = major

        return values

    def __repr__(self) -> str:
        return f"RepressorDominatesVoteFactorGenerator(epsilon={self.epsilon})"


class FactorGeneratorRegistry:
    """
    Factor generator lookup

    Generators are registered per (entity type, node subtype); anything
    without an exact match uses the default generator.
    """

    def __init__(self, default: FactorGeneratorProtocol):
        self.default = default
        self._overrides: Dict[Tuple[str, str], FactorGeneratorProtocol] = {}

    def register(
        self,
        entity_type: str,
        subtype: str,
        generator: FactorGeneratorProtocol,
    ) -> None:
        key = (entity_type, subtype)
        if key in self._overrides:
            logger.warning(f"Replacing factor generator for {entity_type}/{subtype}")
        self._overrides[key] = generator

    def lookup(self, entity_type: str, subtype: str) -> FactorGeneratorProtocol:
        return self._overrides.get((entity_type, subtype), self.default)

    def __contains__(self, key: object) -> bool:
        return key in self._overrides

    def __len__(self) -> int:
        return len(self._overrides)
