"""Core module - models, configuration, and logging."""

from .config import Config, load_config
from .logging_config import setup_logging
from .models import Issue, IssueCategory

__all__ = [
    # Models
    "IssueCategory",
    "Issue",
    # Config
    "Config",
    "load_config",
    "setup_logging",
]
