"""
Unit tests for exception formatting, path safety and the run log.
"""
import logging
import pytest

from process_library.core.exceptions import (
    ExecutorError, SchemaConfigError, TaskValidationError, ValidationError, WorkflowError, SecurityError
)
from process_library.core.run_log import RunLog, configure_logging
from process_library.core.schema_loader import SchemaLoader, normalize_path
from process_library.core.schema_validator import SchemaViolation


class TestExceptionFormatting:
    """Test the `message | Field | Value | Context` format."""

    def test_validation_error(self):
        error = ValidationError("Unknown dashboard type", field="dashboardType", value="wall",
                                context={"allowed": "executive, team"})

        assert str(error) == (
            "Unknown dashboard type | Field: dashboardType | Value: 'wall' | Context: allowed=executive, team"
        )

    def test_message_only(self):
        assert str(ValidationError("Bad input")) == "Bad input"

    def test_task_validation_error_summarises_violations(self):
        violations = [SchemaViolation(path=f"jobs[{i}].title", rule="required", message="missing") for i in range(7)]

        error = TaskValidationError("job-identification", violations)

        assert isinstance(error, ValidationError)
        assert error.task_name == "job-identification"
        assert len(error.violations) == 7
        assert "jobs[0].title: missing" in str(error)
        assert "(2 more)" in str(error)

    def test_workflow_error(self):
        error = WorkflowError("Gate failed", process_id="product-management/jtbd-analysis",
                              phase="job-identification")

        assert str(error) == "Gate failed | Process: product-management/jtbd-analysis | Phase: job-identification"

    def test_hierarchy(self):
        assert issubclass(SchemaConfigError, ValidationError)
        assert issubclass(ExecutorError, WorkflowError)


class TestPathSafety:
    def test_traversal_rejected(self, temp_workspace):
        with pytest.raises(SecurityError):
            normalize_path(temp_workspace, "../outside.yaml")

    def test_nested_path_allowed(self, temp_workspace):
        assert normalize_path(temp_workspace, "tasks/e1/input.json") == (
            temp_workspace / "tasks" / "e1" / "input.json"
        ).resolve()

    def test_oversized_file_rejected(self, temp_workspace, monkeypatch):
        path = temp_workspace / "big.yaml"
        path.write_text("a: 1\n", encoding="utf-8")
        monkeypatch.setattr(SchemaLoader, "MAX_FILE_SIZE", 2)

        with pytest.raises(SecurityError):
            SchemaLoader.load(path)


class TestRunLog:
    """Test the ctx.log sink."""

    def test_forwards_to_logging(self, caplog):
        ticks = iter([10.0, 20.0])
        run_log = RunLog("run-1", lambda: next(ticks))

        with caplog.at_level(logging.INFO, logger="process_library.run"):
            run_log.log("info", "Starting")
            run_log.log("WARN", "Gate failed")

        assert [(e.level, e.timestamp) for e in run_log.entries] == [("info", 10.0), ("warning", 20.0)]
        assert "[run-1] Starting" in caplog.text
        assert run_log.messages("warning") == ["Gate failed"]
        assert run_log.messages() == ["Starting", "Gate failed"]

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            RunLog("run-1", lambda: 0.0).log("trace", "x")

    def test_configure_logging_is_idempotent(self):
        root = logging.getLogger("process_library")
        before = len(root.handlers)

        configure_logging("debug")
        configure_logging("info")

        added = [h for h in root.handlers if getattr(h, "_process_library", False)]
        assert len(added) == 1
        assert len(root.handlers) <= before + 1
        assert root.level == logging.INFO

        with pytest.raises(ValueError):
            configure_logging("loud")
