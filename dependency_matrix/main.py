#!/usr/bin/env python
"""
Column dependency matrix – CLI entry point.

Usage:
    python -m dependency_matrix.main <excel_file> [--config config.yaml] [--output out.xlsx]
    python -m dependency_matrix.main <excel_file> --in-place [--output-sheet Matrix]
"""

import argparse
import logging
import os
import sys

from dependency_matrix.builder import generate_dependency_matrix
from dependency_matrix.columns import NoHeadersFoundError
from dependency_matrix.config import load_config


def setup_logging(level_str: str = "INFO"):
    """Configure logging."""
    level = getattr(logging, level_str.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Build a column-to-column formula dependency matrix for an Excel workbook"
    )
    parser.add_argument("excel_file", help="Path to the input Excel file (.xlsx)")
    parser.add_argument("--config", default=None, help="Path to config YAML file")
    parser.add_argument(
        "--output", "-o", default=None,
        help="Output workbook path (default: ./output/<name>_dependency_matrix.xlsx)",
    )
    parser.add_argument(
        "--in-place", action="store_true",
        help="Write the matrix sheet back into the input workbook",
    )
    parser.add_argument(
        "--output-sheet", default=None,
        help="Name of the matrix sheet (overrides config)",
    )
    parser.add_argument(
        "--skip-prefix", nargs="*", default=None, dest="skip_prefixes",
        help="Sheet-name prefixes to exclude (overrides config)",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Logging level: DEBUG, INFO, WARNING, ERROR",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.output_sheet:
        config["output_sheet_name"] = args.output_sheet
    if args.skip_prefixes is not None:
        config["skip_prefixes"] = args.skip_prefixes

    setup_logging(args.log_level or config.get("log_level", "INFO"))
    logger = logging.getLogger(__name__)

    if not os.path.exists(args.excel_file):
        logger.error(f"Excel file not found: {args.excel_file}")
        sys.exit(1)

    try:
        output_path, result = generate_dependency_matrix(
            args.excel_file,
            output_path=args.output,
            in_place=args.in_place,
            config=config,
        )
    except NoHeadersFoundError as e:
        logger.error(f"Cannot build dependency matrix: {e}")
        sys.exit(1)

    edges = int(result.matrix.sum())
    logger.info(f"Wrote {len(result)}x{len(result)} matrix ({edges} dependencies) "
                f"to '{config['output_sheet_name']}' in {output_path}")
    return 0


if __name__ == "__main__":
    main()
