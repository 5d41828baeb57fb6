"""
pathway_bn EM Step Definitions
==============================
Parameter-sharing specification and the hand-off objects for an external
Expectation-Maximization learner.

Components:
    - EMSpec: node subtype + required set of incoming edge types
    - EMStep: ordered specs learned together in one maximization step
    - ParameterEstimation: named estimation strategy and its properties
    - SharedParameters: factors whose tables share one set of parameters
    - MaximizationStep: parameter-sharing units of one EM step

Input:
    - YAML list of steps, each a mapping {subtype: [edge types]}

    - {mRNA: [positive, negative]}
    - {active: [positive], protein: [positive]}

Version: 1.0.0
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

import yaml

from pathway_bn.core.exceptions import MalformedInputError
from pathway_bn.core.protocols import FactorOrientations

logger = logging.getLogger(__name__)

CONDITIONAL_PROB_ESTIMATION = "ConditionalProbEstimation"


# =============================================================================
# Specification
# =============================================================================
@dataclass(frozen=True)
class EMSpec:
    """
    Factors of a given child subtype whose incoming edge types are exactly
    edge_types, each appearing once.

    edge_types keeps the order it was given in (duplicates dropped); this
    order fixes the parent order of the orientation records.
    """
    subtype: str
    edge_types: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "edge_types", tuple(dict.fromkeys(self.edge_types)))

    @property
    def edge_type_set(self) -> frozenset:
        return frozenset(self.edge_types)

    def matches(self, subtype: str, edge_types: Sequence[str]) -> bool:
        """True if a factor with this child subtype and edge list qualifies"""
        if subtype != self.subtype:
            return False
        unique = set(edge_types)
        return len(unique) == len(edge_types) and unique == self.edge_type_set

    def __str__(self) -> str:
        return f"{self.subtype} <- {{{', '.join(self.edge_types)}}}"


@dataclass
class EMStep:
    """Ordered specs; a subtype appears at most once per step"""
    specs: List[EMSpec] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "EMStep":
        return cls([EMSpec(subtype, tuple(edge_types)) for subtype, edge_types in mapping.items()])

    def __post_init__(self) -> None:
        seen = set()
        for spec in self.specs:
            if spec.subtype in seen:
                raise MalformedInputError(
                    f"subtype {spec.subtype!r} listed twice in one EM step"
                )
            seen.add(spec.subtype)

    def __iter__(self) -> Iterator[EMSpec]:
        return iter(self.specs)

    def __len__(self) -> int:
        return len(self.specs)


def parse_em_steps(raw: Any, source: str = "em steps") -> List[EMStep]:
    """
    Build EM steps from plain data

    Args:
        raw: List of mappings {subtype: [edge types]}, one per step
        source: Name used in error messages
    """
    if raw is None:
        return []
    if isinstance(raw, Mapping) and "em_steps" in raw:
        raw = raw["em_steps"]
    if not isinstance(raw, list):
        raise MalformedInputError("EM steps must be a list of mappings", source=source)

    steps = []
    for index, step in enumerate(raw):
        if isinstance(step, EMStep):
            steps.append(step)
            continue
        if not isinstance(step, Mapping):
            raise MalformedInputError(
                f"EM step {index} must map subtypes to edge types, got {type(step).__name__}",
                source=source,
            )
        normalized: Dict[str, List[str]] = {}
        for subtype, edge_types in step.items():
            if isinstance(edge_types, str):
                edge_types = [edge_types]
            if not isinstance(edge_types, (list, tuple)):
                raise MalformedInputError(
                    f"EM step {index}: edge types for {subtype!r} must be a list, "
                    f"got {type(edge_types).__name__}",
                    source=source,
                )
            normalized[str(subtype)] = [str(e) for e in edge_types]
        steps.append(EMStep.from_mapping(normalized))
    return steps


def load_em_steps(path: Union[str, Path]) -> List[EMStep]:
    """Load EM steps from a YAML file"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"EM steps file not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedInputError(f"invalid YAML: {e}", source=str(path)) from e

    steps = parse_em_steps(raw, source=str(path))
    logger.info(f"Loaded {len(steps)} EM steps from {path}")
    return steps


# =============================================================================
# Learner hand-off
# =============================================================================
@dataclass
class ParameterEstimation:
    """Named estimation strategy with its configuration"""
    name: str
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_dim(self) -> int:
        return self.properties["total_dim"]

    @property
    def target_dim(self) -> int:
        return self.properties["target_dim"]


def construct_parameter_estimation(name: str, properties: Mapping[str, Any]) -> ParameterEstimation:
    """Default estimation constructor"""
    return ParameterEstimation(name=name, properties=dict(properties))


@dataclass
class SharedParameters:
    """
    Factors constrained to share learned parameters

    orientations maps a factor's position in the factor list to its
    variables: child first, then one parent per edge type of the spec.
    """
    orientations: FactorOrientations
    estimation: Any
    multiplicity: int = 1

    def __len__(self) -> int:
        return len(self.orientations)


@dataclass
class MaximizationStep:
    """All parameter-sharing units updated in one maximization step"""
    shared_parameters: List[SharedParameters] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.shared_parameters)
