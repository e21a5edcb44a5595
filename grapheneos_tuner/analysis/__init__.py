"""Analysis modules for remediation suggestions."""

from .remediation import (
    RemediationAdvisor,
    Suggestion,
    SuggestionAction,
    create_remediation_advisor,
)

__all__ = [
    # Remediation Advisor
    "RemediationAdvisor",
    "Suggestion",
    "SuggestionAction",
    "create_remediation_advisor",
]
