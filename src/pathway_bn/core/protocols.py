"""
pathway_bn Protocol Definitions
===============================
Interface contracts between the graph/factor core and its collaborators.

Uses typing.Protocol (structural subtyping): any object with the right
methods can be plugged in, no inheritance required.

Version: 1.0.0
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Protocol, Sequence, runtime_checkable

from pathway_bn.core.types import ProbabilityTable, Var


# =============================================================================
# Factor Generation
# =============================================================================
@runtime_checkable
class FactorGeneratorProtocol(Protocol):
    """
    Conditional probability table policy

    Implemented by: pathway_bn/factors/generators.py
    """

    def generate_values(self, edge_types: Sequence[str]) -> ProbabilityTable:
        """
        Build the flattened table for a child with len(edge_types) parents.

        The result has VARIABLE_DIMENSION ** (len(edge_types) + 1) entries,
        child state varying fastest.
        """
        ...


# =============================================================================
# External Learner Constructors
# =============================================================================
@runtime_checkable
class ParameterEstimationFactory(Protocol):
    """Builds a parameter estimator from a strategy name and its properties"""

    def __call__(self, name: str, properties: Mapping[str, Any]) -> Any:
        ...


@runtime_checkable
class MaximizationStepFactory(Protocol):
    """Builds one maximization step from its parameter-sharing units"""

    def __call__(self, shared_parameters: List[Any]) -> Any:
        ...


FactorOrientations = Dict[int, List[Var]]
