"""CLI command implementations.

This module provides the command handlers for all CLI commands.
"""

import argparse
import io
import sys
import time
from collections.abc import Iterable
from pathlib import Path

from grapheneos_tuner.analysis.remediation import create_remediation_advisor
from grapheneos_tuner.classification.engine import create_default_classifier
from grapheneos_tuner.core.config import Config
from grapheneos_tuner.core.logging_config import (
    get_logger,
    log_classification_result,
    log_issue,
)

from .formatters import JsonFormatter, TextFormatter

STDIN_NAME = "<stdin>"


def read_log_lines(path: Path | None, encoding: str = "utf-8") -> list[str]:
    """Read captured log lines from a file or stdin.

    Undecodable bytes are replaced rather than raising, and line
    terminators are stripped.

    Args:
        path: Log file to read, or None for stdin.
        encoding: Text encoding of the input.

    Returns:
        Lines in input order.

    Raises:
        FileNotFoundError: If the log file doesn't exist.
    """
    if path is None:
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is not None:
            stream = io.TextIOWrapper(buffer, encoding=encoding, errors="replace")
        else:
            stream = sys.stdin
        return [line.rstrip("\r\n") for line in stream]

    with open(path, encoding=encoding, errors="replace") as f:
        return [line.rstrip("\r\n") for line in f]


def filter_lines_for_package(lines: Iterable[str], package: str | None) -> list[str]:
    """Keep only lines that mention the target package.

    Args:
        lines: Raw log lines.
        package: Package name to look for; empty or None keeps every line.

    Returns:
        Matching lines in input order.
    """
    if not package:
        return list(lines)
    return [line for line in lines if package in line]


def _get_formatter(args: argparse.Namespace, config: Config) -> TextFormatter | JsonFormatter:
    """Get the appropriate formatter based on args and config."""
    if getattr(args, "json", False) or config.report.output_format == "json":
        return JsonFormatter()
    return TextFormatter(
        use_colors=config.report.use_colors and not getattr(args, "output", None),
        verbose=getattr(args, "verbose", 0) > 0,
    )


def run_classify_command(args: argparse.Namespace, config: Config) -> int:
    """Execute the classify command.

    Args:
        args: Command-line arguments
        config: Configuration object

    Returns:
        Exit code
    """
    logger = get_logger("main")
    source_name = str(args.input) if args.input else STDIN_NAME

    try:
        lines = read_log_lines(args.input, encoding=config.capture.input_encoding)
    except OSError as e:
        print(f"Error: Cannot read {source_name}: {e}", file=sys.stderr)
        return 1

    package = args.package or config.capture.target_package
    lines = filter_lines_for_package(lines, package)
    logger.info(f"Classifying {len(lines)} lines from {source_name}")

    classifier = create_default_classifier()
    start = time.perf_counter()
    issues = classifier.classify_batch(lines)
    duration_ms = (time.perf_counter() - start) * 1000

    for issue in issues:
        log_issue(issue)
    log_classification_result(source_name, len(lines), len(issues), duration_ms)

    show_suggestions = args.suggest or config.report.show_suggestions
    show_summary = config.report.show_summary and not args.no_summary
    suggestions = (
        create_remediation_advisor(package).suggest_all(issues) if show_suggestions else None
    )
    stats = classifier.get_statistics(issues) if show_summary else None

    formatter = _get_formatter(args, config)
    if isinstance(formatter, JsonFormatter):
        output = formatter.format_report(issues, suggestions, stats)
    else:
        sections = [formatter.format_issue_list(issues)]
        if stats is not None and issues:
            sections.append(formatter.format_statistics(stats))
        if suggestions is not None:
            sections.append(formatter.format_suggestion_list(suggestions))
        output = "\n\n".join(sections)

    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        print(f"Report written to {args.output}")
    else:
        print(output)

    return 0


def run_rules_command(args: argparse.Namespace, config: Config) -> int:
    """Execute the rules command.

    Args:
        args: Command-line arguments
        config: Configuration object

    Returns:
        Exit code
    """
    classifier = create_default_classifier()
    formatter = _get_formatter(args, config)
    print(formatter.format_rule_list(classifier.rules))
    return 0
