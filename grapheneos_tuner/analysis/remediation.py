"""Remediation Advisor - Minimal fixes for detected issues.

This module maps each classified issue to the smallest change likely to
restore compatibility for the target app:
1. Permission denials - grant the missing permission
2. AppOp blocks - allow the rejected operation
3. Blocked components - re-enable the disabled component

Suggested commands are adb shell invocations for the operator to review;
nothing is executed here.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from grapheneos_tuner.classification.rules import extract_permission_name
from grapheneos_tuner.core.models import Issue, IssueCategory

logger = logging.getLogger("grapheneos_tuner.analysis.remediation")

PACKAGE_PLACEHOLDER = "<package>"

# op=CAMERA, op:CAMERA, op=android:camera
APP_OP_NAME_PATTERN = re.compile(r"\bop[=:]\s*([\w:]+)")

# com.example/.MyService or com.example/com.example.MyService
COMPONENT_NAME_PATTERN = re.compile(r"\b(\w+(?:\.\w+)+/\.?[\w.$]+)")


class SuggestionAction(Enum):
    """Kinds of remediation a suggestion can propose."""

    GRANT_PERMISSION = "grant_permission"
    REVIEW_PERMISSIONS = "review_permissions"
    ALLOW_APP_OP = "allow_app_op"
    ENABLE_COMPONENT = "enable_component"
    MANUAL_REVIEW = "manual_review"


@dataclass
class Suggestion:
    """A proposed fix for a detected issue.

    Attributes:
        issue: The issue this suggestion addresses
        action: Kind of remediation
        description: Human-readable recommendation
        command: adb command implementing it, if one applies
    """

    issue: Issue
    action: SuggestionAction
    description: str
    command: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Convert suggestion to dictionary for JSON serialization."""
        return {
            "action": self.action.value,
            "description": self.description,
            "command": self.command,
            "category": self.issue.category.value,
            "summary": self.issue.summary,
        }


def extract_app_op_name(line: str) -> str | None:
    """Extract an AppOp name from an "op=NAME" style token."""
    match = APP_OP_NAME_PATTERN.search(line)
    return match.group(1) if match else None


def extract_component_name(line: str) -> str | None:
    """Extract a "package/.Component" token from a log line."""
    match = COMPONENT_NAME_PATTERN.search(line)
    return match.group(1).rstrip(".") if match else None


class RemediationAdvisor:
    """Advisor producing remediation suggestions for issues.

    Example:
        advisor = RemediationAdvisor(package="com.example.app")
        for suggestion in advisor.suggest_all(issues):
            print(suggestion.description, suggestion.command)
    """

    def __init__(self, package: str | None = None) -> None:
        """Initialize the advisor.

        Args:
            package: Target package name substituted into commands.
        """
        self.package = package or PACKAGE_PLACEHOLDER

    def suggest(self, issue: Issue) -> Suggestion:
        """Build a suggestion for a single issue.

        Args:
            issue: Issue to remediate.

        Returns:
            Suggestion for the issue.
        """
        if issue.category == IssueCategory.PERMISSION_DENIED:
            return self._suggest_permission(issue)
        elif issue.category == IssueCategory.APP_OP_BLOCKED:
            return self._suggest_app_op(issue)
        elif issue.category == IssueCategory.COMPONENT_BLOCKED:
            return self._suggest_component(issue)

        return Suggestion(
            issue=issue,
            action=SuggestionAction.MANUAL_REVIEW,
            description="Review the log line manually",
        )

    def suggest_all(self, issues: Iterable[Issue]) -> list[Suggestion]:
        """Build suggestions for many issues, dropping duplicates.

        Two suggestions are duplicates when they share action and command
        (or description when there is no command). The first one is kept.

        Args:
            issues: Issues in report order.

        Returns:
            Unique suggestions in first-seen order.
        """
        suggestions: list[Suggestion] = []
        seen: set[tuple[SuggestionAction, str]] = set()

        for issue in issues:
            suggestion = self.suggest(issue)
            key = (suggestion.action, suggestion.command or suggestion.description)
            if key in seen:
                continue
            seen.add(key)
            suggestions.append(suggestion)

        logger.debug(f"Built {len(suggestions)} unique suggestions")
        return suggestions

    def _suggest_permission(self, issue: Issue) -> Suggestion:
        permission = extract_permission_name(issue.source_line)
        if permission:
            return Suggestion(
                issue=issue,
                action=SuggestionAction.GRANT_PERMISSION,
                description=f"Grant {permission} to the app",
                command=f"adb shell pm grant {self.package} {permission}",
            )

        return Suggestion(
            issue=issue,
            action=SuggestionAction.REVIEW_PERMISSIONS,
            description="Review requested and granted permissions for the app",
            command=f"adb shell dumpsys package {self.package}",
        )

    def _suggest_app_op(self, issue: Issue) -> Suggestion:
        op_name = extract_app_op_name(issue.source_line)
        if op_name:
            return Suggestion(
                issue=issue,
                action=SuggestionAction.ALLOW_APP_OP,
                description=f"Allow the {op_name} operation for the app",
                command=f"adb shell appops set {self.package} {op_name} allow",
            )

        return Suggestion(
            issue=issue,
            action=SuggestionAction.ALLOW_APP_OP,
            description="Inspect AppOps modes for the app and allow the blocked operation",
            command=f"adb shell appops get {self.package}",
        )

    def _suggest_component(self, issue: Issue) -> Suggestion:
        component = extract_component_name(issue.source_line)
        if component:
            return Suggestion(
                issue=issue,
                action=SuggestionAction.ENABLE_COMPONENT,
                description=f"Re-enable component {component}",
                command=f"adb shell pm enable {component}",
            )

        return Suggestion(
            issue=issue,
            action=SuggestionAction.ENABLE_COMPONENT,
            description="Look for disabled packages or components and re-enable them",
            command="adb shell pm list packages -d",
        )


def create_remediation_advisor(package: str | None = None) -> RemediationAdvisor:
    """Create a remediation advisor.

    Args:
        package: Optional target package name.

    Returns:
        Configured RemediationAdvisor.
    """
    return RemediationAdvisor(package=package)
