"""Tests for CLI formatters, commands and the entry point."""

import argparse
import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest

import tuner
from grapheneos_tuner.analysis.remediation import RemediationAdvisor
from grapheneos_tuner.classification.rules import DETECTION_RULES
from grapheneos_tuner.core.config import Config
from grapheneos_tuner.core.models import Issue, IssueCategory
from grapheneos_tuner.ui.cli.commands import (
    filter_lines_for_package,
    read_log_lines,
    run_classify_command,
    run_rules_command,
)
from grapheneos_tuner.ui.cli.formatters import (
    Colors,
    JsonFormatter,
    TextFormatter,
    colorize,
    format_issue_list,
    format_rule_list,
    format_statistics,
    format_suggestion_list,
    get_category_color,
)


@pytest.fixture
def config(tmp_path):
    """Configuration rooted in a temporary directory."""
    return Config(config_dir=tmp_path / "tuner")


@pytest.fixture
def log_file(tmp_path, sample_log_lines):
    """A captured log file."""
    path = tmp_path / "app.log"
    path.write_text("\n".join(sample_log_lines) + "\n", encoding="utf-8")
    return path


def _classify_args(**overrides) -> argparse.Namespace:
    values = {
        "input": None,
        "package": None,
        "json": False,
        "suggest": False,
        "no_summary": False,
        "output": None,
        "verbose": 0,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestColors:
    """Tests for color helpers."""

    def test_colorize_with_force(self):
        """Test colorize with force=True."""
        result = colorize("test", Colors.BOLD, force=True)
        assert result == f"{Colors.BOLD}test{Colors.RESET}"

    def test_colorize_returns_plain_when_not_supported(self):
        """Test colorize returns plain text when terminal doesn't support colors."""
        with patch.object(Colors, "is_supported", return_value=False):
            assert colorize("test", Colors.BOLD, force=False) == "test"

    def test_all_categories_have_colors(self):
        """Test that all categories return a color."""
        for category in IssueCategory:
            assert get_category_color(category).startswith("\033[")


class TestTextFormatter:
    """Tests for the TextFormatter class."""

    def test_format_issue(self, sample_issues):
        """Test formatting a single issue."""
        result = TextFormatter(use_colors=False).format_issue(sample_issues[0])

        assert result == "[PermissionDenied] Permission denied: android.permission.CAMERA"

    def test_format_issue_verbose(self, sample_issues):
        """Test that verbose output includes the source line."""
        result = TextFormatter(use_colors=False, verbose=True).format_issue(sample_issues[2])

        assert "Unable to start service" in result

    def test_format_issue_list(self, sample_issues):
        """Test formatting a list of issues."""
        result = TextFormatter(use_colors=False).format_issue_list(sample_issues)

        assert "[AppOpBlocked]" in result
        assert "[ComponentBlocked]" in result
        assert "Total: 3 issues" in result

    def test_format_issue_list_empty(self):
        """Test formatting an empty issue list."""
        assert "No issues found" in TextFormatter(use_colors=False).format_issue_list([])

    def test_format_suggestion_list(self, sample_issues):
        """Test formatting suggestions."""
        suggestions = RemediationAdvisor(package="com.example").suggest_all(sample_issues)
        result = TextFormatter(use_colors=False).format_suggestion_list(suggestions)

        assert "1. Grant android.permission.CAMERA" in result
        assert "$ adb shell pm grant com.example android.permission.CAMERA" in result

    def test_format_rule_list_order(self):
        """Test that rules are listed in evaluation order."""
        result = TextFormatter(use_colors=False).format_rule_list(DETECTION_RULES)

        assert result.index("PERMISSION_DENIED") < result.index("APP_OP_BLOCKED")
        assert result.index("APP_OP_BLOCKED") < result.index("COMPONENT_BLOCKED")
        assert '"Service not registered"' in result

    def test_format_statistics(self):
        """Test formatting statistics."""
        stats = {"total_issues": 2, "by_category": {"AppOpBlocked": 2}}
        result = TextFormatter(use_colors=False).format_statistics(stats)

        assert "Issues found: 2" in result
        assert "AppOpBlocked: 2" in result


class TestJsonFormatter:
    """Tests for the JsonFormatter class."""

    def test_format_issue_list(self, sample_issues):
        """Test formatting issues as JSON."""
        data = json.loads(JsonFormatter().format_issue_list(sample_issues))

        assert data["count"] == 3
        assert data["issues"][1]["category"] == "AppOpBlocked"

    def test_compact(self, sample_issues):
        """Test compact output has no newlines."""
        result = JsonFormatter(compact=True).format_issue(sample_issues[0])

        assert "\n" not in result
        assert json.loads(result)["category"] == "PermissionDenied"

    def test_format_rule_list(self):
        """Test formatting rules as JSON."""
        data = json.loads(JsonFormatter().format_rule_list(DETECTION_RULES))

        assert [r["order"] for r in data] == [1, 2, 3]
        assert data[1]["keywords"] == ["app-op", "AppOp", "AppOps"]

    def test_format_report(self, sample_issues):
        """Test a complete JSON report."""
        suggestions = RemediationAdvisor().suggest_all(sample_issues)
        stats = {"total_issues": 3, "by_category": {}}

        data = json.loads(JsonFormatter().format_report(sample_issues, suggestions, stats))

        assert data["count"] == 3
        assert len(data["suggestions"]) == 3
        assert data["summary"]["total_issues"] == 3

    def test_format_report_without_extras(self):
        """Test that optional report sections are omitted."""
        data = json.loads(JsonFormatter().format_report([]))

        assert data == {"count": 0, "issues": []}


class TestConvenienceFunctions:
    """Tests for module-level format helpers."""

    def test_format_issue_list_json(self):
        """Test JSON switch on issue lists."""
        issue = Issue(IssueCategory.UNKNOWN, "line", "summary", "line")
        assert json.loads(format_issue_list([issue], as_json=True))["count"] == 1

    def test_format_helpers_text(self):
        """Test text output of helpers."""
        assert "No suggestions" in format_suggestion_list([])
        assert "PERMISSION_DENIED" in format_rule_list(DETECTION_RULES)
        assert "Issues found: 0" in format_statistics({"total_issues": 0, "by_category": {}})


class TestReadLogLines:
    """Tests for log input helpers."""

    def test_read_file(self, log_file, sample_log_lines):
        """Test reading lines from a file."""
        assert read_log_lines(log_file) == sample_log_lines

    def test_read_undecodable_bytes(self, tmp_path):
        """Test that invalid UTF-8 is replaced instead of raising."""
        path = tmp_path / "binary.log"
        path.write_bytes(b"AppOps \xff\xfe denied\r\nplain\n")

        lines = read_log_lines(path)

        assert lines == ["AppOps �� denied", "plain"]

    def test_read_missing_file(self, tmp_path):
        """Test that a missing file raises."""
        with pytest.raises(FileNotFoundError):
            read_log_lines(tmp_path / "missing.log")

    def test_read_stdin(self):
        """Test reading from stdin."""
        with patch("sys.stdin", io.StringIO("one\ntwo\n")):
            assert read_log_lines(None) == ["one", "two"]

    def test_filter_lines_for_package(self):
        """Test package filtering."""
        lines = ["com.example crashed", "org.other ok", "AppOps com.example"]

        assert filter_lines_for_package(lines, "com.example") == [
            "com.example crashed",
            "AppOps com.example",
        ]
        assert filter_lines_for_package(lines, "") == lines
        assert filter_lines_for_package(lines, None) == lines


class TestCommands:
    """Tests for CLI command handlers."""

    def test_classify_text(self, config, log_file, capsys):
        """Test the classify command with text output."""
        exit_code = run_classify_command(_classify_args(input=log_file), config)
        output = capsys.readouterr().out

        assert exit_code == 0
        assert "Total: 3 issues" in output
        assert "Issues found: 3" in output

    def test_classify_json_with_suggestions(self, config, log_file, capsys):
        """Test JSON output with suggestions."""
        args = _classify_args(input=log_file, json=True, suggest=True, package="com.example")

        exit_code = run_classify_command(args, config)
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        # The AppOps line does not mention the package and is filtered out
        assert [i["category"] for i in data["issues"]] == [
            "PermissionDenied",
            "ComponentBlocked",
        ]
        assert data["suggestions"][0]["command"] == (
            "adb shell pm grant com.example android.permission.CAMERA"
        )

    def test_classify_no_summary(self, config, log_file, capsys):
        """Test omitting the summary."""
        run_classify_command(_classify_args(input=log_file, no_summary=True), config)

        assert "Issues found" not in capsys.readouterr().out

    def test_classify_output_file(self, config, log_file, tmp_path):
        """Test writing the report to a file."""
        report = tmp_path / "report.json"

        run_classify_command(_classify_args(input=log_file, json=True, output=report), config)

        assert json.loads(report.read_text(encoding="utf-8"))["count"] == 3

    def test_classify_missing_input(self, config, tmp_path, capsys):
        """Test a missing input file."""
        exit_code = run_classify_command(
            _classify_args(input=tmp_path / "missing.log"), config
        )

        assert exit_code == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_classify_uses_configured_package(self, config, log_file, capsys):
        """Test the configured target package applies without --package."""
        config.capture.target_package = "org.unrelated"

        run_classify_command(_classify_args(input=log_file), config)

        assert "No issues found" in capsys.readouterr().out

    def test_rules(self, config, capsys):
        """Test the rules command."""
        exit_code = run_rules_command(argparse.Namespace(json=True, verbose=0), config)
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        assert data[0]["category"] == "PermissionDenied"


class TestMain:
    """Tests for the command-line entry point."""

    def _write_config(self, tmp_path: Path) -> Path:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"config_dir": str(tmp_path / "tuner")}))
        return config_path

    def test_classify(self, tmp_path, log_file, capsys):
        """Test running classify end to end."""
        config_path = self._write_config(tmp_path)

        exit_code = tuner.main(["--config", str(config_path), "-q", "classify", str(log_file)])

        assert exit_code == 0
        assert "Total: 3 issues" in capsys.readouterr().out
        assert (tmp_path / "tuner" / "logs" / "issues.log").exists()

    def test_no_command_prints_help(self, tmp_path, capsys):
        """Test running without a command."""
        config_path = self._write_config(tmp_path)

        assert tuner.main(["--config", str(config_path), "-q"]) == 0
        assert "usage" in capsys.readouterr().out

    def test_invalid_config(self, tmp_path, capsys):
        """Test an unreadable configuration file."""
        config_path = tmp_path / "config.json"
        config_path.write_text("{broken")

        assert tuner.main(["--config", str(config_path), "rules"]) == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_config_show(self, tmp_path, capsys):
        """Test showing the configuration."""
        config_path = self._write_config(tmp_path)

        assert tuner.main(["--config", str(config_path), "-q", "config", "--show"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["config_dir"] == str(tmp_path / "tuner")

    def test_get_log_level(self):
        """Test verbosity mapping."""
        import logging

        assert tuner.get_log_level(0) == logging.WARNING
        assert tuner.get_log_level(1) == logging.INFO
        assert tuner.get_log_level(2) == logging.DEBUG
