"""
Command-line interface for centered-interval-tree.

Usage:
    interval-tree-query --config queries.yaml [--mode query|benchmark] [--debug] [--key.path value ...]
"""

import argparse
import json
import logging
import sys

from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def main(argv=None):
    """Main entry point for the interval-tree-query CLI."""
    parser = argparse.ArgumentParser(
        description="Build a centered interval tree and run point/range queries against it.",
        allow_abbrev=False,
    )
    parser.add_argument("--mode", choices=["query", "benchmark"], default="query",
                        help="Answer the configured queries, or benchmark random ones")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")

    # Import here to keep --help fast
    from .flexible_config import parse_flexible_config
    from .query_runner import run_benchmark, run_queries

    try:
        args, config = parse_flexible_config(parser, argv)
    except (FileNotFoundError, ValueError, IndexError) as e:
        logger.error(f"Error loading configuration: {e}")
        return 1

    if args.debug:
        setup_logging(logging.DEBUG, force=True)
    if not args.config:
        parser.error("--config is required")

    try:
        if args.mode == "benchmark":
            summary = run_benchmark(config)
            return 1 if summary["mismatches"] else 0
        results = run_queries(config)
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Error: {e}")
        return 1

    if not config.get("output"):
        for record in results:
            print(json.dumps(record))
    return 0


if __name__ == "__main__":
    sys.exit(main())
