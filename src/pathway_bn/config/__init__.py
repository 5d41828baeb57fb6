"""
pathway_bn Configuration Module
===============================

Usage:
    from pathway_bn.config import load_config
    config = load_config("configs/build.yaml")
    registry = config.build_registry()
"""

from pathway_bn.config.settings import (
    BuildConfig,
    GeneratorOverride,
    load_config,
)


__all__ = [
    "BuildConfig",
    "GeneratorOverride",
    "load_config",
]
