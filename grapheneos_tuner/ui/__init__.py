"""User interface modules.

This package contains the user interface components:
- cli: Command-line interface with formatters and commands
"""

from .cli import (
    JsonFormatter,
    OutputFormatter,
    TextFormatter,
    format_issue_list,
    format_rule_list,
    format_statistics,
    format_suggestion_list,
)

__all__ = [
    # CLI Formatters
    "OutputFormatter",
    "TextFormatter",
    "JsonFormatter",
    "format_issue_list",
    "format_suggestion_list",
    "format_rule_list",
    "format_statistics",
]
