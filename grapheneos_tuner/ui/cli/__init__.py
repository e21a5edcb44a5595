"""CLI module for GrapheneOS Tuner."""

from .commands import (
    filter_lines_for_package,
    read_log_lines,
    run_classify_command,
    run_rules_command,
)
from .formatters import (
    JsonFormatter,
    OutputFormatter,
    TextFormatter,
    format_issue_list,
    format_rule_list,
    format_statistics,
    format_suggestion_list,
)

__all__ = [
    # Formatters
    "OutputFormatter",
    "TextFormatter",
    "JsonFormatter",
    "format_issue_list",
    "format_suggestion_list",
    "format_rule_list",
    "format_statistics",
    # Commands
    "read_log_lines",
    "filter_lines_for_package",
    "run_classify_command",
    "run_rules_command",
]
