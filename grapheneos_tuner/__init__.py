"""GrapheneOS Tuner - Log issue classifier for app compatibility tuning."""

from .classification import classify_line, classify_lines
from .core.models import Issue, IssueCategory

__version__ = "0.1.0"

__all__ = [
    "Issue",
    "IssueCategory",
    "classify_line",
    "classify_lines",
    "__version__",
]
