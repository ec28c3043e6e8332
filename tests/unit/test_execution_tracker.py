"""
Unit tests for TaskJournal.
"""
import json

import pytest
import yaml

from process_library.core.enums import TaskStatus
from process_library.core.execution_tracker import TaskJournal
from process_library.core.models import TaskExecution


def execution(name, status=TaskStatus.SUCCESS, duration=1.0, artifacts=0):
    return TaskExecution(
        task_name=name,
        effect_id=f"{name}-effect",
        status=status,
        started_at=0.0,
        duration=duration,
        artifact_count=artifacts,
    )


class TestTaskJournal:
    """Test TaskJournal functionality."""

    def test_journal_initialization(self):
        assert TaskJournal().executions == []

    def test_success_rate_and_duration(self):
        journal = TaskJournal()
        for _ in range(3):
            journal.record(execution("job-identification", duration=2.0))
        journal.record(execution("job-identification", TaskStatus.INVALID, duration=6.0))

        assert journal.get_success_rate("job-identification") == 0.75
        assert journal.get_avg_duration("job-identification") == 3.0
        assert journal.get_success_rate("unknown") == 0.0
        assert journal.get_avg_duration("unknown") == 0.0

    def test_task_names_in_first_seen_order(self):
        journal = TaskJournal()
        for name in ("b-task", "a-task", "b-task"):
            journal.record(execution(name))

        assert journal.task_names() == ["b-task", "a-task"]
        assert journal.get_total_executions() == 3
        assert journal.get_total_executions("b-task") == 2

    def test_failures(self):
        journal = TaskJournal()
        journal.record(execution("a-task"))
        journal.record(execution("b-task", TaskStatus.FAILED))
        journal.record(execution("c-task", TaskStatus.INVALID))

        assert [e.task_name for e in journal.failures()] == ["b-task", "c-task"]

    def test_statistics(self):
        journal = TaskJournal()
        journal.record(execution("a-task", artifacts=2))
        journal.record(execution("a-task", artifacts=1))

        stats = journal.get_statistics()
        assert stats["total_executions"] == 2
        assert stats["unique_tasks"] == 1
        assert stats["failures"] == 0
        assert stats["tasks"]["a-task"]["artifacts"] == 3

    def test_export_trace(self):
        journal = TaskJournal()
        journal.record(execution("a-task"))

        as_json = json.loads(journal.export_trace("json"))
        as_yaml = yaml.safe_load(journal.export_trace("yaml"))
        assert as_json[0]["status"] == "success"
        assert as_yaml[0]["task_name"] == "a-task"

        with pytest.raises(ValueError):
            journal.export_trace("csv")
