"""CLI entrypoint for committer-core.

Loads a committer configuration document, builds the committer tree it
describes, and writes the document produced by saving that tree back out.
Use it to validate a configuration or to normalize its formatting.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from committer import (
    CommitterError,
    MultipleCommitters,
    __version__,
    committer_type_of,
    list_committer_types,
    load_committer,
    save_committer,
)
from committer.logging_config import get_logger, setup_logging


def describe_tree(committer: Any) -> List[str]:
    """Return one indented line per committer in the tree, in dispatch order."""
    lines: List[str] = []
    pending = [(committer, 0)]
    while pending:
        current, depth = pending.pop()
        lines.append(f"{'  ' * depth}- {committer_type_of(current)}")
        if isinstance(current, MultipleCommitters):
            children = current.get_committers()
            pending.extend((child, depth + 1) for child in reversed(children))
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Load a committer configuration and print the normalized document",
    )
    parser.add_argument("config", nargs="?", help="Path to a committer YAML file")
    parser.add_argument(
        "--output",
        "-o",
        help="Write the normalized document to this file instead of stdout",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only load the configuration and print the committer tree",
    )
    parser.add_argument(
        "--list-committers",
        action="store_true",
        help="List registered committer types and exit",
    )
    parser.add_argument(
        "--no-env",
        action="store_true",
        help="Do not substitute ${VAR} references with environment variables",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable DEBUG logging"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress all output except errors"
    )
    parser.add_argument(
        "--log-format",
        choices=["human", "json", "simple"],
        default=None,
        help="Log format (default: human). Can also set via COMMITTER_LOG_FORMAT env var",
    )
    parser.add_argument(
        "--version", action="version", version=f"committer-core {__version__}"
    )
    args = parser.parse_args(argv)

    level = None
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    setup_logging(level=level, format_type=args.log_format)

    if args.list_committers:
        for name in list_committer_types():
            print(name)
        return 0

    if not args.config:
        parser.error("a configuration file is required")

    config_path = Path(args.config)
    log = get_logger(__name__, extra={"config_path": str(config_path)})
    if not config_path.exists():
        log.error("Config file not found: %s", config_path)
        return 2

    try:
        committer = load_committer(
            config_path, enable_env_substitution=not args.no_env
        )
        if args.validate_only:
            log.info("Configuration %s is valid", config_path)
            print("\n".join(describe_tree(committer)))
            return 0
        document = save_committer(committer)
    except CommitterError as exc:
        log.error("Invalid committer configuration %s: %s", config_path, exc)
        return 1

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document, encoding="utf-8")
        log.info("Wrote normalized configuration to %s", output_path)
    else:
        sys.stdout.write(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
