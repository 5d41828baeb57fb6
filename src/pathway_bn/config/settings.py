"""
pathway_bn Build Configuration
==============================
Settings for turning a pathway description into a factor graph.

Module: pathway_bn/config/settings.py

Purpose:
    - Name the three text inputs and the EM step file
    - Carry the off-peak probability mass (epsilon) of the vote policy;
      there is no built-in value, it must be configured
    - Per (entity type, subtype) generator overrides
    - Load from / save to YAML

Example YAML:
    pathway_file: data/pathway.tab
    em_steps_file: data/em_steps.yaml
    epsilon: 0.001
    node_map_prefix: "id "
    generators:
      - entity_type: protein
        subtype: mRNA
        epsilon: 0.01

Version: 1.0.0
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from pathway_bn.factors.generators import (
    FactorGeneratorRegistry,
    RepressorDominatesVoteFactorGenerator,
)

logger = logging.getLogger(__name__)


def _as_epsilon(value: Any) -> float:
    """Coerce a configured epsilon to float in [0, 1)"""
    try:
        epsilon = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"epsilon must be a number, got {value!r}") from None
    if not 0.0 <= epsilon < 1.0:
        raise ValueError(f"epsilon must be in [0, 1), got {epsilon}")
    return epsilon


@dataclass
class GeneratorOverride:
    """Vote generator with its own epsilon for one (entity type, subtype)"""
    entity_type: str
    subtype: str
    epsilon: float


def _as_override(value: Any) -> GeneratorOverride:
    if isinstance(value, GeneratorOverride):
        return value
    if not isinstance(value, dict):
        raise ValueError(f"generator override must be a mapping, got {value!r}")
    try:
        return GeneratorOverride(**value)
    except TypeError as e:
        raise ValueError(f"invalid generator override {value!r}: {e}") from e


@dataclass
class BuildConfig:
    """Complete build configuration"""

    # Inputs (None = built-in interaction map / central dogma)
    pathway_file: Optional[str] = None
    interaction_map_file: Optional[str] = None
    dogma_file: Optional[str] = None
    em_steps_file: Optional[str] = None

    # Factor generation
    epsilon: Optional[float] = None
    generators: List[GeneratorOverride] = field(default_factory=list)

    # Outputs (None = stdout / not written)
    output_file: Optional[str] = None
    node_map_file: Optional[str] = None
    node_map_prefix: str = ""

    def validate(self) -> None:
        """
        Raises:
            ValueError: if a required setting is missing or out of range
        """
        if self.pathway_file is None:
            raise ValueError("pathway_file is required")
        if self.epsilon is None:
            raise ValueError("epsilon is required (off-peak probability mass)")
        self.epsilon = _as_epsilon(self.epsilon)
        for override in self.generators:
            override.epsilon = _as_epsilon(override.epsilon)

    def build_registry(self) -> FactorGeneratorRegistry:
        """Default vote generator plus the configured overrides"""
        self.validate()
        registry = FactorGeneratorRegistry(RepressorDominatesVoteFactorGenerator(self.epsilon))
        for override in self.generators:
            registry.register(
                override.entity_type,
                override.subtype,
                RepressorDominatesVoteFactorGenerator(override.epsilon),
            )
        return registry

    def update(self, values: Dict[str, Any]) -> None:
        """Set known keys; unknown keys are logged and ignored"""
        for key, value in values.items():
            if key == "generators":
                self.generators = [_as_override(g) for g in (value or [])]
            elif hasattr(self, key):
                setattr(self, key, value)
            else:
                logger.warning(f"Ignoring unknown configuration key: {key}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save_to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Configuration saved to {path}")


def load_config(path: Union[str, Path]) -> BuildConfig:
    """Load configuration from YAML file"""
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    config = BuildConfig()
    config.update(raw)

    # Relative input paths are taken relative to the config file
    for key in ("pathway_file", "interaction_map_file", "dogma_file", "em_steps_file"):
        value = getattr(config, key)
        if value is not None and not Path(value).is_absolute():
            setattr(config, key, str(path.parent / value))

    logger.info(f"Configuration loaded from {path}")
    return config
