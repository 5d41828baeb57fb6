"""
pathway_bn Core Types
=====================
Shared data types for the pathway graph and the factors built from it.

Version: 1.0.0
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray


# =============================================================================
# Constants
# =============================================================================
# Every variable is categorical over {down, neutral, up}
VARIABLE_DIMENSION = 3

DOWN = 0
NEUTRAL = 1
UP = 2

# Entity type that is expanded through the central dogma template
MULTI_STAGE_TYPE = "protein"
# Subtype every single-stage entity collapses to
ACTIVE_SUBTYPE = "active"
# Type given to entities first seen in an interaction or observation
DEFAULT_ENTITY_TYPE = "other"
# Reserved edge label linking a hidden node to its observation
OBSERVATION_INTERACTION = "-obs>"

ProbabilityTable = NDArray[np.float64]


# =============================================================================
# Enums
# =============================================================================
class Polarity(str, Enum):
    """
    Sign of an interaction.

    Inherits from str so that edge labels compare equal to the raw
    ``"positive"`` / ``"negative"`` strings read from the interaction map.
    """
    POSITIVE = "positive"
    NEGATIVE = "negative"


# =============================================================================
# Graph Data Classes
# =============================================================================
@dataclass(frozen=True, order=True)
class Node:
    """
    One random variable of the pathway: an entity at a given stage.

    Ordering is by entity name first, then subtype.
    """
    entity: str
    subtype: str

    def __str__(self) -> str:
        return f"{self.entity}:{self.subtype}"


@dataclass(frozen=True)
class InteractionRecord:
    """An interaction label and the subtypes and sign it connects."""
    label: str
    from_subtype: str
    to_subtype: str
    polarity: Polarity


@dataclass(frozen=True)
class Var:
    """
    Variable handle as seen by the inference engine.

    label is the node id assigned by the pathway graph, states the number
    of categorical states.
    """
    label: int
    states: int = VARIABLE_DIMENSION

    def __str__(self) -> str:
        return f"x{self.label}"


# =============================================================================
# Factor
# =============================================================================
@dataclass(eq=False)
class Factor:
    """
    Conditional probability table of a child given its parents.

    variables[0] is the child, variables[1:] are the parents in Node order.
    edge_types holds the incoming edge label of each parent, aligned with
    variables[1:].
    """
    variables: List[Var]
    values: ProbabilityTable
    edge_types: List[str] = field(default_factory=list)

    @property
    def child(self) -> Var:
        return self.variables[0]

    @property
    def parents(self) -> List[Var]:
        return self.variables[1:]

    @property
    def total_dim(self) -> int:
        """Number of entries in the table (product of variable dimensions)"""
        total = 1
        for var in self.variables:
            total *= var.states
        return total

    @property
    def labels(self) -> Tuple[int, ...]:
        return tuple(v.label for v in self.variables)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Factor(vars={list(self.labels)}, entries={len(self.values)})"
