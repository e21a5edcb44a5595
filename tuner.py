#!/usr/bin/env python3
"""GrapheneOS Tuner - Log issue classifier.

Entry point for the command-line interface.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from grapheneos_tuner import __version__
from grapheneos_tuner.core.config import Config, load_config, save_config
from grapheneos_tuner.core.logging_config import setup_logging
from grapheneos_tuner.ui.cli.commands import run_classify_command, run_rules_command


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="grapheneos-tuner",
        description="Classify device log output into permission, AppOp and component failures",
        epilog="Capture logs with e.g. 'adb logcat -d > app.log' and pass the file to classify.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase verbosity (use -vv for debug)",
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress console log output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Classify command
    classify_parser = subparsers.add_parser("classify", help="Classify captured log lines")
    classify_parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Captured log file (omit to read stdin)",
    )
    classify_parser.add_argument(
        "--package", "-p",
        help="Only classify lines mentioning this package",
    )
    classify_parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )
    classify_parser.add_argument(
        "--suggest", "-s",
        action="store_true",
        help="Include remediation suggestions",
    )
    classify_parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Omit the per-category summary",
    )
    classify_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write results to file",
    )

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="List detection rules in evaluation order")
    rules_parser.add_argument(
        "--json",
        action="store_true",
        help="Output rules as JSON",
    )

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument(
        "--init",
        action="store_true",
        help="Create default configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )

    return parser


def get_log_level(verbose: int) -> int:
    """Get logging level from verbosity count."""
    if verbose >= 2:
        return logging.DEBUG
    elif verbose >= 1:
        return logging.INFO
    return logging.WARNING


def run_config(args: argparse.Namespace, config: Config) -> int:
    """Execute the config command."""
    if args.init:
        save_config(config)
        print(f"Configuration saved to {config.config_dir / 'config.json'}")
        return 0

    if args.show:
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    print("Use --init to create config or --show to display current config")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else load_config()
    except (json.JSONDecodeError, ValueError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    # Ensure directories exist
    config.ensure_directories()

    # Setup logging
    setup_logging(
        config.logs_dir,
        log_level=get_log_level(args.verbose),
        console_output=not args.quiet,
    )

    # Execute command
    if args.command == "classify":
        return run_classify_command(args, config)
    elif args.command == "rules":
        return run_rules_command(args, config)
    elif args.command == "config":
        return run_config(args, config)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
