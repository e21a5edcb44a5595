"""Classification Engine - Core log classification logic.

This module provides the classifier that walks the ordered rule table
for each log line and turns the first matching rule into an Issue.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from grapheneos_tuner.classification.rules import DETECTION_RULES, DetectionRule
from grapheneos_tuner.core.models import Issue, IssueCategory

logger = logging.getLogger("grapheneos_tuner.classification.engine")


class LogClassifier:
    """Classifier for device log lines.

    Rules are tried in order and evaluation stops at the first match.
    Lines that match no rule produce no issue. The classifier holds no
    mutable state, so one instance can be shared between threads.

    Example:
        classifier = LogClassifier()
        issues = classifier.classify_batch(lines)
        for issue in issues:
            print(f"{issue.category.value}: {issue.summary}")
    """

    def __init__(self, rules: Sequence[DetectionRule] | None = None) -> None:
        """Initialize the classifier.

        Args:
            rules: Ordered rules to use (defaults to DETECTION_RULES).
        """
        self.rules: tuple[DetectionRule, ...] = (
            tuple(rules) if rules is not None else DETECTION_RULES
        )

    def match_rule(self, line: str | None) -> DetectionRule | None:
        """Find the first rule matching a line.

        Args:
            line: Raw log line.

        Returns:
            The winning DetectionRule, or None if nothing matched.
        """
        if not line:
            return None

        for rule in self.rules:
            if rule.matches(line):
                return rule
        return None

    def classify(self, line: str | None) -> Issue | None:
        """Classify a single log line.

        Args:
            line: Raw log line. None and "" never match.

        Returns:
            Issue for the first matching rule, or None.
        """
        rule = self.match_rule(line)
        if rule is None:
            return None

        issue = rule.build_issue(line)
        logger.debug(f"Rule {rule.rule_id} matched: {issue.summary}")
        return issue

    def iter_issues(self, lines: Iterable[str | None] | None) -> Iterator[Issue]:
        """Lazily classify lines, yielding issues in input order.

        Args:
            lines: Log lines (any iterable, including generators).

        Yields:
            One Issue per matching line.
        """
        if lines is None:
            return

        for line in lines:
            issue = self.classify(line)
            if issue is not None:
                yield issue

    def classify_batch(self, lines: Iterable[str | None] | None) -> list[Issue]:
        """Classify multiple log lines.

        Args:
            lines: Log lines in order. None yields an empty list.

        Returns:
            Issues for matching lines, in the order of their source lines.
        """
        return list(self.iter_issues(lines))

    def get_rules_by_category(self) -> dict[IssueCategory, list[str]]:
        """Get rule IDs grouped by category.

        Returns:
            Dictionary mapping categories to rule IDs, in rule order.
        """
        categories: dict[IssueCategory, list[str]] = {}
        for rule in self.rules:
            categories.setdefault(rule.category, []).append(rule.rule_id)
        return categories

    @staticmethod
    def get_statistics(issues: Iterable[Issue]) -> dict[str, Any]:
        """Get issue statistics.

        Args:
            issues: Issues produced by this classifier.

        Returns:
            Dictionary with the total and a count per category value.
        """
        stats: dict[str, Any] = {
            "total_issues": 0,
            "by_category": {},
        }

        for issue in issues:
            stats["total_issues"] += 1
            category = issue.category.value
            stats["by_category"][category] = stats["by_category"].get(category, 0) + 1

        return stats


def create_default_classifier() -> LogClassifier:
    """Create a classifier with the built-in rules.

    Returns:
        Configured LogClassifier.
    """
    return LogClassifier(rules=DETECTION_RULES)


_default_classifier = create_default_classifier()


def classify_line(line: str | None) -> Issue | None:
    """Classify one log line with the built-in rules."""
    return _default_classifier.classify(line)


def classify_lines(lines: Iterable[str | None] | None) -> list[Issue]:
    """Classify a batch of log lines with the built-in rules."""
    return _default_classifier.classify_batch(lines)
