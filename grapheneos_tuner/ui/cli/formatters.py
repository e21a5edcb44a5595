"""Output formatters for CLI output.

This module provides formatters for displaying issues, suggestions,
and rules in various formats (text, JSON).
"""

import json
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from grapheneos_tuner.analysis.remediation import Suggestion
from grapheneos_tuner.classification.rules import DetectionRule
from grapheneos_tuner.core.models import Issue, IssueCategory


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    # Category colors
    PERMISSION_DENIED = "\033[91m"  # Red
    APP_OP_BLOCKED = "\033[93m"     # Yellow
    COMPONENT_BLOCKED = "\033[95m"  # Magenta
    UNKNOWN = "\033[90m"            # Gray

    INFO = "\033[94m"  # Blue

    @classmethod
    def is_supported(cls) -> bool:
        """Check if terminal supports colors."""
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def colorize(text: str, color: str, force: bool = False) -> str:
    """Apply color to text if supported.

    Args:
        text: Text to colorize
        color: ANSI color code
        force: Force color even if not supported

    Returns:
        Colored text or plain text
    """
    if force or Colors.is_supported():
        return f"{color}{text}{Colors.RESET}"
    return text


def get_category_color(category: IssueCategory) -> str:
    """Get color for an issue category."""
    color_map = {
        IssueCategory.PERMISSION_DENIED: Colors.PERMISSION_DENIED,
        IssueCategory.APP_OP_BLOCKED: Colors.APP_OP_BLOCKED,
        IssueCategory.COMPONENT_BLOCKED: Colors.COMPONENT_BLOCKED,
        IssueCategory.UNKNOWN: Colors.UNKNOWN,
    }
    return color_map.get(category, Colors.RESET)


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format_issue(self, issue: Issue) -> str:
        """Format a single issue."""
        pass

    @abstractmethod
    def format_issue_list(self, issues: Sequence[Issue]) -> str:
        """Format a list of issues."""
        pass

    @abstractmethod
    def format_suggestion_list(self, suggestions: Sequence[Suggestion]) -> str:
        """Format a list of suggestions."""
        pass

    @abstractmethod
    def format_rule_list(self, rules: Sequence[DetectionRule]) -> str:
        """Format the rule table."""
        pass

    @abstractmethod
    def format_statistics(self, stats: dict[str, Any]) -> str:
        """Format issue statistics."""
        pass


class TextFormatter(OutputFormatter):
    """Plain text formatter with optional colors."""

    def __init__(self, use_colors: bool = True, verbose: bool = False):
        """Initialize the text formatter.

        Args:
            use_colors: Whether to use ANSI colors
            verbose: Whether to show the source line of each issue
        """
        self.use_colors = use_colors and Colors.is_supported()
        self.verbose = verbose

    def _colorize(self, text: str, color: str) -> str:
        """Apply color if enabled."""
        if self.use_colors:
            return colorize(text, color, force=True)
        return text

    def format_issue(self, issue: Issue) -> str:
        """Format a single issue."""
        category = self._colorize(
            f"[{issue.category.value}]", get_category_color(issue.category)
        )
        lines = [f"{category} {issue.summary}"]
        if self.verbose:
            lines.append(self._colorize(f"    {issue.source_line}", Colors.DIM))
        return "\n".join(lines)

    def format_issue_list(self, issues: Sequence[Issue]) -> str:
        """Format a list of issues."""
        if not issues:
            return "No issues found."

        lines = [self.format_issue(issue) for issue in issues]
        lines.append("-" * 60)
        lines.append(f"Total: {len(issues)} issues")
        return "\n".join(lines)

    def format_suggestion_list(self, suggestions: Sequence[Suggestion]) -> str:
        """Format a list of suggestions."""
        if not suggestions:
            return "No suggestions."

        lines = [self._colorize("Suggested changes:", Colors.BOLD)]
        for index, suggestion in enumerate(suggestions, start=1):
            lines.append(f"  {index}. {suggestion.description}")
            if suggestion.command:
                lines.append(self._colorize(f"     $ {suggestion.command}", Colors.INFO))
        return "\n".join(lines)

    def format_rule_list(self, rules: Sequence[DetectionRule]) -> str:
        """Format the rule table in evaluation order."""
        lines = []
        header = f"{'#':<3} {'Rule':<20} {'Category':<18} Keywords"
        lines.append(self._colorize(header, Colors.BOLD))
        lines.append("-" * 76)

        for position, rule in enumerate(rules, start=1):
            keywords = ", ".join(f'"{k}"' for k in rule.keywords)
            lines.append(
                f"{position:<3} {rule.rule_id:<20} {rule.category.value:<18} {keywords}"
            )

        return "\n".join(lines)

    def format_statistics(self, stats: dict[str, Any]) -> str:
        """Format issue statistics."""
        lines = [f"Issues found: {stats.get('total_issues', 0)}"]
        for category, count in stats.get("by_category", {}).items():
            lines.append(f"  {category}: {count}")
        return "\n".join(lines)


class JsonFormatter(OutputFormatter):
    """JSON output formatter."""

    def __init__(self, indent: int = 2, compact: bool = False):
        """Initialize the JSON formatter.

        Args:
            indent: Indentation level
            compact: Whether to use compact output
        """
        self.indent = None if compact else indent

    def _dumps(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, ensure_ascii=False)

    def format_issue(self, issue: Issue) -> str:
        """Format a single issue as JSON."""
        return self._dumps(issue.to_dict())

    def format_issue_list(self, issues: Sequence[Issue]) -> str:
        """Format a list of issues as JSON."""
        data = {
            "count": len(issues),
            "issues": [issue.to_dict() for issue in issues],
        }
        return self._dumps(data)

    def format_suggestion_list(self, suggestions: Sequence[Suggestion]) -> str:
        """Format a list of suggestions as JSON."""
        data = {
            "count": len(suggestions),
            "suggestions": [s.to_dict() for s in suggestions],
        }
        return self._dumps(data)

    def format_rule_list(self, rules: Sequence[DetectionRule]) -> str:
        """Format the rule table as JSON."""
        data = [
            {
                "order": position,
                "rule_id": rule.rule_id,
                "name": rule.name,
                "description": rule.description,
                "category": rule.category.value,
                "keywords": list(rule.keywords),
            }
            for position, rule in enumerate(rules, start=1)
        ]
        return self._dumps(data)

    def format_statistics(self, stats: dict[str, Any]) -> str:
        """Format issue statistics as JSON."""
        return self._dumps(stats)

    def format_report(
        self,
        issues: Sequence[Issue],
        suggestions: Sequence[Suggestion] | None = None,
        stats: dict[str, Any] | None = None,
    ) -> str:
        """Format a complete report as a single JSON document."""
        data: dict[str, Any] = {
            "count": len(issues),
            "issues": [issue.to_dict() for issue in issues],
        }
        if suggestions is not None:
            data["suggestions"] = [s.to_dict() for s in suggestions]
        if stats is not None:
            data["summary"] = stats
        return self._dumps(data)


# Convenience functions

def format_issue_list(issues: Sequence[Issue], as_json: bool = False) -> str:
    """Format a list of issues.

    Args:
        issues: Issues to format
        as_json: Whether to output JSON

    Returns:
        Formatted string
    """
    if as_json:
        return JsonFormatter().format_issue_list(issues)
    return TextFormatter().format_issue_list(issues)


def format_suggestion_list(suggestions: Sequence[Suggestion], as_json: bool = False) -> str:
    """Format a list of suggestions."""
    if as_json:
        return JsonFormatter().format_suggestion_list(suggestions)
    return TextFormatter().format_suggestion_list(suggestions)


def format_rule_list(rules: Sequence[DetectionRule], as_json: bool = False) -> str:
    """Format the rule table."""
    if as_json:
        return JsonFormatter().format_rule_list(rules)
    return TextFormatter().format_rule_list(rules)


def format_statistics(stats: dict[str, Any], as_json: bool = False) -> str:
    """Format issue statistics."""
    if as_json:
        return JsonFormatter().format_statistics(stats)
    return TextFormatter().format_statistics(stats)
