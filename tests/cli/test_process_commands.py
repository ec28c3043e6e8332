"""
CLI tests for the catalog and run commands.
"""
import json
import subprocess
import sys

import pytest
import yaml

from process_library.cli import main
from process_library.cli.parser import setup_parser


def run_cli(*argv):
    """Call the CLI in-process; returns the exit code (0 when it returns normally)"""
    try:
        main(list(argv))
    except SystemExit as e:
        return e.code
    return 0


class TestCatalogCommands:
    """Test list, describe and check-contracts."""

    def test_list(self, temp_workspace, capsys):
        assert run_cli("-w", str(temp_workspace), "list") == 0

        out = capsys.readouterr().out
        assert "Processes (6)" in out
        assert "product-management/jtbd-analysis" in out
        assert "Tasks: 16" in out

    def test_describe(self, temp_workspace, capsys):
        code = run_cli("-w", str(temp_workspace), "describe", "product-management/customer-advisory-board")

        out = capsys.readouterr().out
        assert code == 0
        assert "- productName = \"\"" in out
        assert "boardSize = 12" in out
        assert "1. cab-charter-definition" in out

    def test_describe_json(self, temp_workspace, capsys):
        code = run_cli("-w", str(temp_workspace), "describe", "product-management/metrics-dashboard", "--json")

        entry = json.loads(capsys.readouterr().out)
        assert code == 0
        assert entry["id"] == "product-management/metrics-dashboard"
        assert entry["inputs"]["dashboardType"]["default"] == "operational"
        assert len(entry["tasks"]) == 11

    def test_describe_unknown(self, temp_workspace, capsys):
        code = run_cli("-w", str(temp_workspace), "describe", "product-management/nope")

        assert code == 1
        assert "Unknown process" in capsys.readouterr().err

    def test_check_contracts(self, temp_workspace, capsys):
        assert run_cli("-w", str(temp_workspace), "check-contracts") == 0
        assert "All 73 task contracts are valid" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert run_cli() == 1
        assert "usage" in capsys.readouterr().out.lower()


class TestRunCommand:
    """Test running processes with the placeholder executor."""

    def test_run_cab(self, temp_workspace, capsys):
        output = temp_workspace / "out" / "result.json"

        code = run_cli(
            "-w", str(temp_workspace), "run", "product-management/customer-advisory-board",
            "--set", "productName=Acme", "--set", "boardSize=8",
            "--executor", "placeholder", "--auto-approve", "--output", str(output),
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "✅ product-management/customer-advisory-board completed" in out
        assert "breakpoints: 4" in out
        result = json.loads(output.read_text(encoding="utf-8"))
        assert result["success"] is True
        assert result["programStructure"]["boardSize"] == 8

    def test_run_from_inputs_file(self, temp_workspace, capsys):
        inputs = temp_workspace / "stakeholders.yaml"
        inputs.write_text(yaml.safe_dump({
            "projectName": "Billing revamp",
            "requireSignoff": False,
        }), encoding="utf-8")

        code = run_cli(
            "-w", str(temp_workspace), "run", "product-management/stakeholder-alignment",
            "--inputs", str(inputs), "--auto-approve", "--runs-dir", "runs",
        )

        assert code == 0
        assert "completed" in capsys.readouterr().out
        run_files = list((temp_workspace / "runs").glob("*/run.yaml"))
        assert len(run_files) == 1
        record = yaml.safe_load(run_files[0].read_text(encoding="utf-8"))
        assert record["status"] == "completed"
        assert record["process_id"] == "product-management/stakeholder-alignment"

    def test_gate_failure_exits_nonzero(self, temp_workspace, capsys):
        # Placeholder stubs carry one job, below the default minimum of three
        code = run_cli(
            "-w", str(temp_workspace), "run", "product-management/jtbd-analysis",
            "--set", "productName=Acme", "--auto-approve",
        )

        out = capsys.readouterr().out
        assert code == 1
        assert "Stopped at quality gate 'job-identification'" in out
        assert "Insufficient jobs identified. Found: 1, minimum: 3" in out

    def test_gate_passes_with_lower_minimum(self, temp_workspace, capsys):
        code = run_cli(
            "-w", str(temp_workspace), "run", "product-management/jtbd-analysis",
            "--set", "productName=Acme", "--set", "minimumJobCount=1", "--auto-approve",
        )

        assert code == 0
        assert "completed" in capsys.readouterr().out

    def test_epilog_run_example_completes(self, temp_workspace, capsys):
        epilog = setup_parser().epilog
        line = next(entry for entry in epilog.splitlines() if "run product-management/jtbd-analysis" in entry)
        argv = line.split()[1:]

        assert run_cli("-w", str(temp_workspace), *argv) == 0
        assert "completed" in capsys.readouterr().out

    def test_invalid_input(self, temp_workspace, capsys):
        code = run_cli(
            "-w", str(temp_workspace), "run", "product-management/metrics-dashboard",
            "--set", "productName=Pulse", "--set", "dashboardType=wallboard", "--auto-approve",
        )

        assert code == 1
        assert "Run failed" in capsys.readouterr().err

    def test_malformed_assignment(self, temp_workspace, capsys):
        code = run_cli(
            "-w", str(temp_workspace), "run", "product-management/customer-advisory-board",
            "--set", "productName", "--auto-approve",
        )

        assert code == 1
        assert "Expected KEY=VALUE" in capsys.readouterr().err


class TestModuleEntryPoint:
    """Test `python -m process_library.cli`."""

    def test_list_subprocess(self, temp_workspace):
        result = subprocess.run(
            [sys.executable, "-m", "process_library.cli", "list"],
            cwd=temp_workspace,
            capture_output=True,
            text=True
        )

        assert result.returncode == 0
        assert "product-management/stakeholder-alignment" in result.stdout

    @pytest.mark.integration
    def test_run_subprocess(self, temp_workspace):
        result = subprocess.run(
            [sys.executable, "-m", "process_library.cli", "run", "product-management/competitive-analysis",
             "--set", "productName=Ledger", "--auto-approve"],
            cwd=temp_workspace,
            capture_output=True,
            text=True
        )

        assert result.returncode == 0
        assert "completed" in result.stdout
