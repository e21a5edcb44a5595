"""Core data models for GrapheneOS Tuner.

This module defines the issue categories and the issue record produced
by the log classifier.
"""

from dataclasses import dataclass
from enum import Enum


class IssueCategory(Enum):
    """Categories of failures recognized in device logs.

    Categories:
        PERMISSION_DENIED: A runtime or manifest permission check failed
        APP_OP_BLOCKED: An operation was rejected by AppOps policy
        COMPONENT_BLOCKED: A service/receiver is disabled, unexported or blocked
        UNKNOWN: Reserved for future rules (never emitted by built-in rules)
    """

    PERMISSION_DENIED = "PermissionDenied"
    APP_OP_BLOCKED = "AppOpBlocked"
    COMPONENT_BLOCKED = "ComponentBlocked"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Issue:
    """A problem detected in a single log line.

    Attributes:
        category: Category of the rule that matched
        source_line: The exact input line, unmodified
        summary: Short human-readable description
        detail: Extended detail (currently the source line)
    """

    category: IssueCategory
    source_line: str
    summary: str
    detail: str

    def to_dict(self) -> dict[str, str]:
        """Convert issue to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "summary": self.summary,
            "source_line": self.source_line,
            "detail": self.detail,
        }
