"""
pathway_bn Factor Graph Builder
===============================
Command-line entry point.

Usage:
    pathway-factor-graph --config configs/build.yaml
    pathway-factor-graph --pathway pathway.tab --epsilon 0.001 --em-steps em.yaml
    pathway-factor-graph --pathway pathway.tab --epsilon 0.001 -o net.fg --node-map ids.tab

Input:
    - Configuration file (YAML) and/or CLI arguments
    - Pathway, interaction map and central dogma text files

Output:
    - Factor graph text (stdout or --output)
    - Node id listing (--node-map)
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pathway_bn.config.settings import BuildConfig, load_config
from pathway_bn.core.exceptions import PathwayError
from pathway_bn.pipeline import run_build

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        description="Build a discrete Bayesian network factor graph from a pathway",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to YAML configuration file",
    )

    # Inputs
    parser.add_argument(
        "--pathway", "-p",
        type=str,
        default=None,
        help="Pathway file (entity and interaction lines)",
    )
    parser.add_argument(
        "--interaction-map",
        type=str,
        default=None,
        help="Interaction map file (default: built-in map)",
    )
    parser.add_argument(
        "--dogma",
        type=str,
        default=None,
        help="Central dogma file (default: built-in template)",
    )
    parser.add_argument(
        "--em-steps",
        type=str,
        default=None,
        help="YAML file with EM parameter-sharing steps",
    )

    # Factor generation
    parser.add_argument(
        "--epsilon", "-e",
        type=float,
        default=None,
        help="Probability mass given to the two unexpected child states",
    )

    # Outputs
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Factor graph output file (default: stdout)",
    )
    parser.add_argument(
        "--node-map",
        type=str,
        default=None,
        help="Node id listing output file",
    )
    parser.add_argument(
        "--node-map-prefix",
        type=str,
        default=None,
        help="Prefix written before each node id in the listing",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    return parser.parse_args(argv)


def load_build_config(args: argparse.Namespace) -> BuildConfig:
    """Load configuration from file and command-line arguments"""
    config = load_config(args.config) if args.config else BuildConfig()

    # Command-line arguments win over the file
    if args.pathway is not None:
        config.pathway_file = args.pathway
    if args.interaction_map is not None:
        config.interaction_map_file = args.interaction_map
    if args.dogma is not None:
        config.dogma_file = args.dogma
    if args.em_steps is not None:
        config.em_steps_file = args.em_steps
    if args.epsilon is not None:
        config.epsilon = args.epsilon
    if args.output is not None:
        config.output_file = args.output
    if args.node_map is not None:
        config.node_map_file = args.node_map
    if args.node_map_prefix is not None:
        config.node_map_prefix = args.node_map_prefix

    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )

    try:
        config = load_build_config(args)
        config.validate()
        result = run_build(config)
    except (PathwayError, ValueError, FileNotFoundError) as e:
        logger.error(f"Build failed: {e}")
        return 1

    try:
        if config.output_file:
            node_map_path = Path(config.node_map_file) if config.node_map_file else None
            result.write_files(Path(config.output_file), node_map_path)
        elif config.node_map_file:
            # Node map is opened before anything reaches stdout
            with open(config.node_map_file, "w") as f:
                result.write(sys.stdout, f)
        else:
            result.write(sys.stdout)
    except OSError as e:
        logger.error(f"Could not write output: {e}")
        return 1

    summary = result.get_summary()
    logger.info(f"Graph: {summary['graph_stats']}")
    logger.info(f"Assembly: {summary['assembly']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
