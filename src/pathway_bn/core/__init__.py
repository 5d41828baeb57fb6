"""
pathway_bn Core Module
======================
Shared types, errors and protocol definitions.

Usage:
    from pathway_bn.core import Node, Var, Factor, Polarity
    from pathway_bn.core import MalformedInputError, UnknownInteractionError
"""

from pathway_bn.core.types import (
    # Constants
    VARIABLE_DIMENSION,
    DOWN,
    NEUTRAL,
    UP,
    MULTI_STAGE_TYPE,
    ACTIVE_SUBTYPE,
    DEFAULT_ENTITY_TYPE,
    OBSERVATION_INTERACTION,
    # Data Classes
    Polarity,
    Node,
    InteractionRecord,
    Var,
    Factor,
    ProbabilityTable,
)
from pathway_bn.core.exceptions import (
    PathwayError,
    MalformedInputError,
    UnknownInteractionError,
    InternalConsistencyError,
)
from pathway_bn.core.protocols import (
    FactorGeneratorProtocol,
    ParameterEstimationFactory,
    MaximizationStepFactory,
    FactorOrientations,
)

__all__ = [
    "VARIABLE_DIMENSION",
    "DOWN",
    "NEUTRAL",
    "UP",
    "MULTI_STAGE_TYPE",
    "ACTIVE_SUBTYPE",
    "DEFAULT_ENTITY_TYPE",
    "OBSERVATION_INTERACTION",
    "Polarity",
    "Node",
    "InteractionRecord",
    "Var",
    "Factor",
    "ProbabilityTable",
    "PathwayError",
    "MalformedInputError",
    "UnknownInteractionError",
    "InternalConsistencyError",
    "FactorGeneratorProtocol",
    "ParameterEstimationFactory",
    "MaximizationStepFactory",
    "FactorOrientations",
]
