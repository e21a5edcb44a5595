"""Detection rules - Ordered keyword rules for log line classification.

Each rule pairs a set of case-insensitive keywords with a category and a
summary builder. Rules are evaluated in the order of DETECTION_RULES and
the first matching rule wins, so overlapping patterns resolve by position.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from grapheneos_tuner.core.models import Issue, IssueCategory

# "requires" + one space + dotted identifier, e.g. android.permission.CAMERA
PERMISSION_NAME_PATTERN = re.compile(r"requires (\w+(?:\.\w+)*)")

PERMISSION_DENIED_KEYWORDS = (
    "Permission Denial:",
    "Permission denial",
    "java.lang.SecurityException",
)

APP_OP_KEYWORDS = (
    "app-op",
    "AppOp",
    "AppOps",
)

COMPONENT_BLOCKED_KEYWORDS = (
    "not exported from uid",
    "not allowed to start service",
    "Unable to start service",
    "Service not registered",
)

PERMISSION_UNKNOWN_SUMMARY = "Permission denied (exact permission unknown)"
APP_OP_SUMMARY = "Operation blocked by AppOps / app-op policy"
COMPONENT_BLOCKED_SUMMARY = "Component (service/receiver) seems disabled or blocked"


def extract_permission_name(line: str) -> str | None:
    """Extract the permission named after "requires " in a log line.

    Best-effort heuristic: any dotted identifier following the word is
    returned, whether or not it is a real permission name.

    Args:
        line: Raw log line.

    Returns:
        The first identifier found, or None.
    """
    match = PERMISSION_NAME_PATTERN.search(line)
    if match is None:
        return None
    return match.group(1)


def _summarize_permission_denied(line: str) -> str:
    permission = extract_permission_name(line)
    if permission:
        return f"Permission denied: {permission}"
    return PERMISSION_UNKNOWN_SUMMARY


@dataclass(frozen=True)
class DetectionRule:
    """A keyword rule mapping log lines to an issue category.

    Attributes:
        rule_id: Unique identifier for the rule
        name: Human-readable rule name
        description: Explanation of what this rule detects
        category: Category assigned on match
        keywords: Substrings searched for, case-insensitively
        summarize: Builds the issue summary from the matched line
    """

    rule_id: str
    name: str
    description: str
    category: IssueCategory
    keywords: tuple[str, ...]
    summarize: Callable[[str], str]

    def matches(self, line: str) -> bool:
        """Check whether any keyword occurs in the line (ignoring case)."""
        lowered = line.lower()
        return any(keyword.lower() in lowered for keyword in self.keywords)

    def build_issue(self, line: str) -> Issue:
        """Build the issue for a line this rule matched."""
        return Issue(
            category=self.category,
            source_line=line,
            summary=self.summarize(line),
            detail=line,
        )


# Evaluation order is significant: first match wins
DETECTION_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        rule_id="PERMISSION_DENIED",
        name="Permission denial",
        description="A permission check failed or a SecurityException was thrown",
        category=IssueCategory.PERMISSION_DENIED,
        keywords=PERMISSION_DENIED_KEYWORDS,
        summarize=_summarize_permission_denied,
    ),
    DetectionRule(
        rule_id="APP_OP_BLOCKED",
        name="AppOp block",
        description="An operation was rejected by AppOps / app-op policy",
        category=IssueCategory.APP_OP_BLOCKED,
        keywords=APP_OP_KEYWORDS,
        summarize=lambda line: APP_OP_SUMMARY,
    ),
    DetectionRule(
        rule_id="COMPONENT_BLOCKED",
        name="Component blocked",
        description="A service or receiver is disabled, unexported or not allowed to start",
        category=IssueCategory.COMPONENT_BLOCKED,
        keywords=COMPONENT_BLOCKED_KEYWORDS,
        summarize=lambda line: COMPONENT_BLOCKED_SUMMARY,
    ),
)
