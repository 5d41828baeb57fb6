"""
# ==============================================================================
# Module: pathway_bn/factors/assembler.py
# ==============================================================================
# Purpose: Build one factor per node with parents and group the factors into
#          parameter-sharing sets for the EM learner
#
# Dependencies:
#   - Internal: pathway_bn.kg.graph (PathwayGraph)
#              pathway_bn.factors.generators (FactorGeneratorRegistry)
#              pathway_bn.factors.em (EMStep, SharedParameters, MaximizationStep)
#
# Input:
#   - Finished PathwayGraph (read only)
#   - EM steps: ordered specs (node subtype, required edge-type set)
#
# Output:
#   - Factors in child Node order
#   - Maximization steps, plus warnings for specs that matched nothing
# ==============================================================================
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from pathway_bn.core.exceptions import InternalConsistencyError
from pathway_bn.core.protocols import (
    FactorOrientations,
    MaximizationStepFactory,
    ParameterEstimationFactory,
)
from pathway_bn.core.types import VARIABLE_DIMENSION, Factor, Node, Var
from pathway_bn.factors.em import (
    CONDITIONAL_PROB_ESTIMATION,
    EMStep,
    MaximizationStep,
    SharedParameters,
    construct_parameter_estimation,
)
from pathway_bn.factors.generators import FactorGeneratorRegistry
from pathway_bn.kg.graph import PathwayGraph

logger = logging.getLogger(__name__)


@dataclass
class FactorAssembly:
    """Result of FactorAssembler.construct_factors"""
    factors: List[Factor] = field(default_factory=list)
    maximization_steps: List[Any] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "factors": len(self.factors),
            "maximization_steps": len(self.maximization_steps),
            "warnings": len(self.warnings),
        }


class FactorAssembler:
    """
    Factor assembler

    Walks the children of a PathwayGraph in Node order. For each child the
    parents are sorted, their edge labels collected in the same order, and
    the table is produced by the generator registered for the child's
    (entity type, subtype), or the default one.
    """

    def __init__(
        self,
        graph: PathwayGraph,
        registry: FactorGeneratorRegistry,
        estimation_factory: Optional[ParameterEstimationFactory] = None,
        maximization_factory: Optional[MaximizationStepFactory] = None,
    ):
        """
        Args:
            graph: Finished pathway graph
            registry: Factor generators (default + per-type overrides)
            estimation_factory: External estimator constructor
            maximization_factory: External maximization step constructor
        """
        self.graph = graph
        self.registry = registry
        self._estimation_factory = estimation_factory or construct_parameter_estimation
        self._maximization_factory = maximization_factory or MaximizationStep

    # ==========================================================================
    # Factor Construction
    # ==========================================================================
    def build_factor(self, child: Node) -> Factor:
        """
        Build the factor of one node with parents

        Raises:
            InternalConsistencyError: if the generator returns a table of the
                wrong size, or the node is listed among its own parents
        """
        parents = self.graph.get_parents(child)
        if any(parent == child for parent, _ in parents):
            raise InternalConsistencyError(f"{child} is listed as its own parent")

        variables = [self.graph.get_var(child)]
        edge_types = []
        for parent, label in parents:
            variables.append(self.graph.get_var(parent))
            edge_types.append(label)

        entity_type = self.graph.get_entity_type(child.entity) or ""
        generator = self.registry.lookup(entity_type, child.subtype)
        values = np.asarray(generator.generate_values(edge_types), dtype=np.float64).ravel()

        expected = VARIABLE_DIMENSION ** (len(parents) + 1)
        if values.size != expected:
            raise InternalConsistencyError(
                f"Factor for {child} has {values.size} entries, expected {expected} "
                f"({len(parents)} parents, generator {generator!r})"
            )

        return Factor(variables=variables, values=values, edge_types=edge_types)

    def build_factors(self) -> List[Factor]:
        """All factors, in child Node order"""
        return [self.build_factor(child) for child in self.graph.children_with_parents()]

    # ==========================================================================
    # Parameter Sharing
    # ==========================================================================
    @staticmethod
    def orient(factor: Factor, edge_types: Sequence[str]) -> List[Var]:
        """Child var followed by the first parent carrying each edge type"""
        orientation = [factor.child]
        for edge_type in edge_types:
            for k, parent_type in enumerate(factor.edge_types):
                if parent_type == edge_type:
                    orientation.append(factor.parents[k])
                    break
        return orientation

    def construct_factors(self, em_steps: Sequence[EMStep] = ()) -> FactorAssembly:
        """
        Build all factors and the maximization steps of the EM learner

        A factor joins the group of every (step, spec) it matches. Specs that
        match no factor, and steps where no spec matched, are reported as
        warnings and left out.
        """
        children = self.graph.children_with_parents()
        assembly = FactorAssembly()

        # groups[step][spec] = {factor position: orientation}
        groups: List[List[FactorOrientations]] = [[{} for _ in step] for step in em_steps]
        total_dims: List[List[int]] = [[0 for _ in step] for step in em_steps]

        for child in children:
            factor = self.build_factor(child)
            position = len(assembly.factors)
            assembly.factors.append(factor)

            for i, step in enumerate(em_steps):
                for j, spec in enumerate(step):
                    if not spec.matches(child.subtype, factor.edge_types):
                        continue
                    orientation = self.orient(factor, spec.edge_types)
                    if len(orientation) != len(spec.edge_types) + 1:
                        raise InternalConsistencyError(
                            f"Orientation of {child} does not cover spec {spec}"
                        )
                    groups[i][j][position] = orientation
                    total_dims[i][j] = factor.total_dim

        for i, step in enumerate(em_steps):
            shared = []
            for j, spec in enumerate(step):
                if not groups[i][j]:
                    self._warn(
                        assembly,
                        f"Did not find any variables of sub-type '{spec.subtype}' with "
                        f"incoming edges matching: {', '.join(spec.edge_types)}",
                    )
                    continue
                estimation = self._estimation_factory(
                    CONDITIONAL_PROB_ESTIMATION,
                    {"total_dim": total_dims[i][j], "target_dim": VARIABLE_DIMENSION},
                )
                shared.append(SharedParameters(groups[i][j], estimation, 1))
                logger.debug(f"EM step {i}, spec {spec}: {len(groups[i][j])} factors")

            if shared:
                assembly.maximization_steps.append(self._maximization_factory(shared))
            else:
                self._warn(assembly, f"em_step number {i} had no matching nodes in the pathway")

        logger.info(
            f"Constructed {len(assembly.factors)} factors, "
            f"{len(assembly.maximization_steps)} maximization steps"
        )
        return assembly

    @staticmethod
    def _warn(assembly: FactorAssembly, message: str) -> None:
        logger.warning(message)
        assembly.warnings.append(message)
