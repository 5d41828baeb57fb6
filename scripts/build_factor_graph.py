#!/usr/bin/env python3
"""
Pathway Factor Graph Build Script
=================================
Thin wrapper around pathway_bn.cli for running from a source checkout.

Usage:
    python scripts/build_factor_graph.py --config configs/build.yaml
    python scripts/build_factor_graph.py --pathway pathway.tab --epsilon 0.001
"""
import sys
from pathlib import Path

# Add package source to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from pathway_bn.cli import main

if __name__ == "__main__":
    sys.exit(main())
