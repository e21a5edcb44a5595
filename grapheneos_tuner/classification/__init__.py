"""Classification engine for categorizing device log lines."""

from .engine import (
    LogClassifier,
    classify_line,
    classify_lines,
    create_default_classifier,
)
from .rules import DETECTION_RULES, DetectionRule, extract_permission_name

__all__ = [
    # Rules
    "DetectionRule",
    "DETECTION_RULES",
    "extract_permission_name",
    # Classifier
    "LogClassifier",
    "create_default_classifier",
    "classify_line",
    "classify_lines",
]
