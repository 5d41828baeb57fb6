"""
# ==============================================================================
# Module: pathway_bn/kg/dogma.py
# ==============================================================================
# Purpose: Central dogma template used to expand multi-stage entities
#          (genome -> mRNA -> protein -> active)
#
# Input:
#   - 3-field lines: from_state, to_state, step_label
#
# Output:
#   - CentralDogmaTemplate with sorted distinct states and step labels
# ==============================================================================
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Tuple, Union

from pathway_bn.core.types import Node
from pathway_bn.kg.readers import LineSource, iter_records, open_lines

if TYPE_CHECKING:
    from pathway_bn.kg.graph import PathwayGraph

logger = logging.getLogger(__name__)


DEFAULT_CENTRAL_DOGMA = (
    "genome\tmRNA\t-dt>\n"
    "mRNA\tprotein\t-dr>\n"
    "protein\tactive\t-dp>\n"
)


class CentralDogmaTemplate:
    """
    Gene expression template

    States and steps are kept sorted so that the ids given to the expanded
    nodes do not depend on the order of the template lines.
    """

    def __init__(self, states: List[str], steps: List[str]):
        self._states: Tuple[str, ...] = tuple(sorted(set(states)))
        self._steps: Tuple[str, ...] = tuple(sorted(set(steps)))

    @classmethod
    def from_lines(cls, lines: LineSource, source: str = "central dogma") -> "CentralDogmaTemplate":
        states: List[str] = []
        steps: List[str] = []
        for _, (from_state, to_state, step) in iter_records(
            open_lines(lines), expected=(3,), source=source
        ):
            states.extend((from_state, to_state))
            steps.append(step)
        template = cls(states, steps)
        logger.debug(
            f"Loaded central dogma from {source}: "
            f"{len(template.states)} states, {len(template.steps)} steps"
        )
        return template

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CentralDogmaTemplate":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Central dogma file not found: {path}")
        return cls.from_lines(path, source=str(path))

    @classmethod
    def default(cls) -> "CentralDogmaTemplate":
        return cls.from_lines(DEFAULT_CENTRAL_DOGMA, source="default central dogma")

    @property
    def states(self) -> Tuple[str, ...]:
        return self._states

    @property
    def steps(self) -> Tuple[str, ...]:
        return self._steps

    def expand(self, entity: str, graph: "PathwayGraph") -> None:
        """
        Add the expression cascade of one entity to the graph

        One node per state, then every step applied as an interaction of the
        entity with itself. The entity must already be registered with the
        multi-stage type.
        """
        for state in self._states:
            graph.add_node(Node(entity, state))
        for step in self._steps:
            graph.add_interaction(entity, entity, step)

    def __repr__(self) -> str:
        return f"CentralDogmaTemplate(states={list(self._states)}, steps={list(self._steps)})"
