"""
End-to-end tests for the happycamper command-line interface

Each test drives main() with a patched argv and checks the printed report,
the exit code and the exported file.
"""

import csv
import json
import sys

import pytest

from happycamper.cli.roster_cli import main

pytestmark = pytest.mark.e2e


@pytest.fixture
def run_cli(monkeypatch, camper_csv, activity_csv):
    """Run main() with the fixture rosters; returns the exit code (0 when main returns)"""
    def _run(*extra_args, command="process", with_files=True):
        argv = ["happycamper", "--log-level", "ERROR", command]
        if with_files:
            argv += ["--campers", str(camper_csv), "--activities", str(activity_csv)]
        argv += list(extra_args)
        monkeypatch.setattr(sys, "argv", argv)
        try:
            main()
        except SystemExit as e:
            return e.code
        return 0

    return _run


def read_export(path):
    with path.open(newline="", encoding="utf-8") as handle:
        return list(csv.DictReader(handle))


class TestProcessCommand:
    """Tests for the process command"""

    def test_process_and_export(self, run_cli, tmp_path, capsys):
        output = tmp_path / "enriched"

        assert run_cli("--output", str(output)) == 0

        stdout = capsys.readouterr().out
        assert "Enriched roster: 5 campers" in stdout
        assert "WARNING (4): Camper data was missing a field" in stdout
        assert "Exported 5 campers" in stdout

        rows = read_export(tmp_path / "enriched.csv")
        assert [row["First Name"] for row in rows] == ["Alice", "Ben", "Cara", "Dan", "Eve"]
        assert rows[1]["Swim Conflicts"] == "Sailing"

    def test_json_report(self, run_cli, capsys):
        assert run_cli("--report", "json", "--features", "activity", "program") == 0

        stdout = capsys.readouterr().out
        report = json.loads(stdout[: stdout.rindex("}") + 1])
        types = [group["type"] for group in report["warnings"]]
        assert types == ["UNMATCHED_ACTIVITY_ADDED", "PROGRAM_PARSING_FAILURE"]
        assert report["warnings"][1]["rows"] == [
            {"Camper": "Dan 'Danny' Park", "Value": "Session 4/Adventure Camp", "Selected Session": "2"}
        ]
        assert report["errors"] == []

    def test_swim_conflicts_only(self, run_cli, tmp_path, capsys):
        output = tmp_path / "conflicts.csv"

        assert run_cli("--output", str(output), "--swim-conflicts-only", "--no-placeholder") == 0

        rows = read_export(output)
        assert [row["First Name"] for row in rows] == ["Ben", "Dan", "Eve"]
        assert rows[1]["Swim Conflicts"] == ""

    def test_incomplete_and_hidden_rounds(self, run_cli, tmp_path):
        output = tmp_path / "incomplete.csv"

        assert run_cli("--output", str(output), "--incomplete-only", "--hide-rounds", "0") == 0

        assert [row["Last Name"] for row in read_export(output)] == ["Lee", "Stone"]

    def test_visible_only(self, run_cli, tmp_path):
        output = tmp_path / "visible.csv"

        assert run_cli("--output", str(output), "--visible-only") == 0

        with output.open(newline="", encoding="utf-8") as handle:
            header = next(csv.reader(handle))
        assert "First Name" not in header
        assert "Rounds Assigned" not in header
        assert "Round 1" in header

    def test_metrics_file(self, run_cli, tmp_path):
        metrics_file = tmp_path / "happycamper.prom"

        assert run_cli("--metrics-file", str(metrics_file)) == 0

        assert "happycamper_pipeline_runs_total" in metrics_file.read_text()

    def test_settings_file(self, run_cli, tmp_path, capsys):
        settings_file = tmp_path / "settings.yaml"
        settings_file.write_text("settings:\n  include_orphans: false\n")

        assert run_cli("--settings", str(settings_file)) == 0

        assert "Enriched roster: 4 campers" in capsys.readouterr().out

    def test_settings_from_environment(self, run_cli, tmp_path, capsys, monkeypatch):
        settings_file = tmp_path / "settings.yaml"
        settings_file.write_text("settings:\n  include_orphans: false\n")
        monkeypatch.setenv("HAPPYCAMPER_SETTINGS", str(settings_file))

        assert run_cli() == 0

        assert "Enriched roster: 4 campers" in capsys.readouterr().out


class TestProcessFailures:
    """Tests for exit codes on failure"""

    def test_missing_input_file(self, monkeypatch, tmp_path, capsys):
        missing = tmp_path / "missing.csv"
        monkeypatch.setattr(sys, "argv", [
            "happycamper", "process", "--campers", str(missing), "--activities", str(missing),
        ])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        stdout = capsys.readouterr().out
        assert "ERROR: File Not Found" in stdout
        assert "No roster was created." in stdout

    def test_invalid_settings(self, run_cli, tmp_path, capsys):
        settings_file = tmp_path / "settings.yaml"
        settings_file.write_text("other: {}\n")

        assert run_cli("--settings", str(settings_file)) == 1
        assert "must contain 'settings' section" in capsys.readouterr().out

    def test_bad_export_destination(self, run_cli, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        assert run_cli("--output", str(blocker / "sub" / "roster.csv")) == 1
        assert "Cannot create directory" in capsys.readouterr().out

    def test_unknown_feature_rejected(self, run_cli):
        assert run_cli("--features", "telepathy") == 2


class TestOtherCommands:
    """Tests for the features command and bare invocation"""

    def test_features_command(self, run_cli, capsys):
        assert run_cli(command="features", with_files=False) == 0

        stdout = capsys.readouterr().out
        assert "activity     Activity Assignments" in stdout
        assert "swimlevel" in stdout

    def test_no_command(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["happycamper"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "process" in capsys.readouterr().out
