"""
CLI smoke tests via typer's CliRunner.

Every test points --config and --club at tmp_path files, so nothing depends
on the working directory or a local.toml.
"""

from __future__ import annotations

import json
import logging

import pytest
from typer.testing import CliRunner

from dojo_progression.cli import app

runner = CliRunner()

_APP_TOML = """
[club]
config_file = "{club}"

[forecast]
sentinel_years = 10

[logging]
level = "WARNING"
"""

_CLUB_TOML = """
[ladder]
[[ladder.belts]]
id = "white"
name = "White"

[[ladder.belts]]
id = "yellow"
name = "Yellow"

[[ladder.belts]]
id = "black"
name = "Black"

[policy]
kind = "uniform"
points_per_stripe = 64

[stripes]
stripes_per_belt = 4

[[skills]]
id = "technique"

[[skills]]
id = "focus"
"""


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def files(tmp_path):
    club = tmp_path / "club.toml"
    club.write_text(_CLUB_TOML, encoding="utf-8")
    config = tmp_path / "default.toml"
    config.write_text(_APP_TOML.format(club=club.as_posix()), encoding="utf-8")
    return ["--config", str(config), "--club", str(club)]


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("validate-config", "show-ladder", "status", "forecast",
                 "suggest-frequency", "preview-session"):
        assert name in result.output


class TestValidateConfig:
    def test_ok(self, files):
        result = runner.invoke(app, ["validate-config", *files])
        assert result.exit_code == 0, result.output
        assert "Configuration validated successfully." in result.output
        assert "3 (terminal: Black)" in result.output
        # 2 skills * 2 * 0.85
        assert "3.40 pts/class" in result.output
        assert "[OK] Config valid." in result.output

    def test_full_dumps_json(self, files):
        result = runner.invoke(app, ["validate-config", *files, "--full"])
        assert result.exit_code == 0, result.output
        start = result.output.index("{")
        end = result.output.rindex("}") + 1
        payload = json.loads(result.output[start:end])
        assert payload["club"]["policy"]["kind"] == "uniform"

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "x.toml")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output

    def test_invalid_club(self, files, tmp_path):
        bad = tmp_path / "bad_club.toml"
        bad.write_text('[ladder]\npreset = "judo"\n[stripes]\nstripes_per_belt = 0\n')
        result = runner.invoke(app, ["validate-config", files[0], files[1], "--club", str(bad)])
        assert result.exit_code == 1
        assert "Club config validation failed" in result.output

    def test_malformed_club(self, files, tmp_path):
        bad = tmp_path / "broken.toml"
        bad.write_text("[ladder\n")
        result = runner.invoke(app, ["validate-config", files[0], files[1], "--club", str(bad)])
        assert result.exit_code == 1
        assert "not valid TOML" in result.output


def test_show_ladder(files):
    result = runner.invoke(app, ["show-ladder", *files])
    assert result.exit_code == 0, result.output
    assert "=== Belt Ladder ===" in result.output
    assert "(terminal)" in result.output


class TestStatus:
    def test_scenario_a(self, files):
        result = runner.invoke(app, ["status", "--belt", "yellow", "--points", "128", *files])
        assert result.exit_code == 0, result.output
        assert "[##--]" in result.output
        assert "2/4 stripes" in result.output
        assert "(50%)" in result.output

    def test_unknown_belt(self, files):
        result = runner.invoke(app, ["status", "--belt", "purple", *files])
        assert result.exit_code == 1
        assert "not in the belt ladder" in result.output

    def test_negative_points(self, files):
        result = runner.invoke(app, ["status", "--belt", "white", "--points", "-5", *files])
        assert result.exit_code == 1
        assert "Invalid student data" in result.output


class TestForecast:
    def test_explicit_cadence(self, files):
        result = runner.invoke(app, [
            "forecast", "--belt", "white", "--per-week", "2", "--velocity", "10", *files,
        ])
        assert result.exit_code == 0, result.output
        assert "=== Time Machine: Black ===" in result.output
        assert "Points remaining: 512 of 512" in result.output
        assert "You save 0.5 years" in result.output
        assert "suggested cadence" not in result.output

    def test_suggested_cadence(self, files):
        result = runner.invoke(app, [
            "forecast", "--belt", "white", "--join-date", "2020-01-01",
            "--attendance-count", "0", *files,
        ])
        assert result.exit_code == 0, result.output
        assert "Using suggested cadence: 2x/week" in result.output

    def test_zero_velocity_has_no_path(self, files):
        result = runner.invoke(app, [
            "forecast", "--belt", "white", "--per-week", "3", "--velocity", "0", *files,
        ])
        assert result.exit_code == 0, result.output
        assert "no path at this cadence" in result.output

    def test_table(self, files):
        result = runner.invoke(app, [
            "forecast", "--belt", "yellow", "--points", "10", "--per-week", "2", "--table", *files,
        ])
        assert result.exit_code == 0, result.output
        assert "what-if by cadence" in result.output

    def test_negative_cadence(self, files):
        result = runner.invoke(app, [
            "forecast", "--belt", "white", "--per-week", "-1", *files,
        ])
        assert result.exit_code == 1
        assert "attendance_per_week must be non-negative" in result.output

    def test_bad_join_date(self, files):
        result = runner.invoke(app, [
            "forecast", "--belt", "white", "--join-date", "05/01/2025", *files,
        ])
        assert result.exit_code == 1
        assert "Expected YYYY-MM-DD" in result.output


class TestSuggestFrequency:
    def test_no_history(self, files):
        result = runner.invoke(app, [
            "suggest-frequency", "--attendance-count", "0", "--join-date", "2020-01-01",
            files[0], files[1],
        ])
        assert result.exit_code == 0, result.output
        assert "Suggested cadence: 2x/week" in result.output

    def test_heavy_attendance_is_capped(self, files):
        result = runner.invoke(app, [
            "suggest-frequency", "--attendance-count", "5000", "--join-date", "2024-01-01",
            files[0], files[1],
        ])
        assert result.exit_code == 0, result.output
        assert "Suggested cadence: 6x/week" in result.output

    def test_negative_count(self, files):
        result = runner.invoke(app, [
            "suggest-frequency", "--attendance-count", "-2", "--join-date", "2024-01-01",
            files[0], files[1],
        ])
        assert result.exit_code == 1


class TestPreviewSession:
    def test_new_stripe(self, files):
        result = runner.invoke(app, [
            "preview-session", "--belt", "yellow", "--points", "120",
            "--session-points", "10", *files,
        ])
        assert result.exit_code == 0, result.output
        assert "1 -> 2" in result.output
        assert "New stripes:     +1" in result.output

    def test_negative_session_points(self, files):
        result = runner.invoke(app, [
            "preview-session", "--belt", "white", "--session-points", "-3", *files,
        ])
        assert result.exit_code == 1
        assert "session_points" in result.output
