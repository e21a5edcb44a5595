"""Configuration management for GrapheneOS Tuner.

This module handles loading, saving, and validating configuration
from JSON files and environment variables.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Default paths
DEFAULT_CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")) / "GrapheneTuner"
DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_LOGS_DIR = "logs"

OUTPUT_FORMATS = ("text", "json")


@dataclass
class CaptureConfig:
    """Configuration for reading captured log output."""

    target_package: str = ""  # Only keep lines mentioning this package
    input_encoding: str = "utf-8"


@dataclass
class ReportConfig:
    """Configuration for issue reports."""

    output_format: str = "text"  # text, json
    show_suggestions: bool = False
    show_summary: bool = True
    use_colors: bool = True


@dataclass
class Config:
    """Main configuration container for GrapheneOS Tuner.

    Attributes:
        config_dir: Base directory for all tuner data
        logs_dir: Directory for log files
        capture: Log capture configuration
        report: Report configuration
    """

    config_dir: Path = field(default_factory=lambda: DEFAULT_CONFIG_DIR.expanduser())
    logs_dir: Path = field(default_factory=lambda: Path(DEFAULT_LOGS_DIR))

    capture: CaptureConfig = field(default_factory=CaptureConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def __post_init__(self) -> None:
        """Resolve relative paths to absolute paths."""
        if not self.logs_dir.is_absolute():
            self.logs_dir = self.config_dir / self.logs_dir

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        for directory in [self.config_dir, self.logs_dir]:
            directory.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for JSON serialization."""
        return {
            "config_dir": str(self.config_dir),
            "logs_dir": str(self.logs_dir),
            "capture": {
                "target_package": self.capture.target_package,
                "input_encoding": self.capture.input_encoding,
            },
            "report": {
                "output_format": self.report.output_format,
                "show_suggestions": self.report.show_suggestions,
                "show_summary": self.report.show_summary,
                "use_colors": self.report.use_colors,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create configuration from dictionary.

        Raises:
            ValueError: If the report output format is not recognized.
        """
        config = cls()

        if "config_dir" in data:
            config.config_dir = Path(data["config_dir"])
        config.logs_dir = Path(data.get("logs_dir", DEFAULT_LOGS_DIR))

        # Load capture config
        if "capture" in data:
            capture_data = data["capture"]
            config.capture = CaptureConfig(
                target_package=capture_data.get("target_package", ""),
                input_encoding=capture_data.get("input_encoding", "utf-8"),
            )

        # Load report config
        if "report" in data:
            report_data = data["report"]
            output_format = report_data.get("output_format", "text")
            if output_format not in OUTPUT_FORMATS:
                raise ValueError(f"Unknown output format: {output_format}")
            config.report = ReportConfig(
                output_format=output_format,
                show_suggestions=report_data.get("show_suggestions", False),
                show_summary=report_data.get("show_summary", True),
                use_colors=report_data.get("use_colors", True),
            )

        # Re-run post_init to resolve paths
        config.__post_init__()

        return config


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Config object with loaded settings.

    Raises:
        json.JSONDecodeError: If config file contains invalid JSON.
        ValueError: If config values are invalid.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_DIR.expanduser() / DEFAULT_CONFIG_FILE

    if not config_path.exists():
        # Return default config if no config file exists
        return Config()

    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)

    return Config.from_dict(data)


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Config object to save.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = config.config_dir / DEFAULT_CONFIG_FILE

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)


def get_default_config() -> Config:
    """Get the default configuration.

    Returns:
        A new Config object with default settings.
    """
    return Config()
