"""
Task journal: history of task invocations within a run.
Following Single Responsibility Principle - tracks execution history only.
"""

import json
import yaml
from typing import List, Optional, Dict, Any

from .enums import TaskStatus
from .models import TaskExecution


class TaskJournal:
    """Tracks task executions and their statistics"""

    def __init__(self):
        self.executions: List[TaskExecution] = []

    def record(self, execution: TaskExecution) -> None:
        """Record a task execution"""
        self.executions.append(execution)

    def get_task_history(self, task_name: str) -> List[TaskExecution]:
        """Get execution history for a specific task"""
        return [e for e in self.executions if e.task_name == task_name]

    def task_names(self) -> List[str]:
        """Task names in first-invocation order"""
        seen: List[str] = []
        for e in self.executions:
            if e.task_name not in seen:
                seen.append(e.task_name)
        return seen

    def get_success_rate(self, task_name: str) -> float:
        history = self.get_task_history(task_name)
        if not history:
            return 0.0
        successful = sum(1 for e in history if e.status == TaskStatus.SUCCESS)
        return successful / len(history)

    def get_avg_duration(self, task_name: str) -> float:
        history = self.get_task_history(task_name)
        if not history:
            return 0.0
        return sum(e.duration for e in history) / len(history)

    def get_total_executions(self, task_name: Optional[str] = None) -> int:
        """Get total number of executions, optionally filtered by task name"""
        if task_name:
            return len(self.get_task_history(task_name))
        return len(self.executions)

    def failures(self) -> List[TaskExecution]:
        return [e for e in self.executions if e.status != TaskStatus.SUCCESS]

    def export_trace(self, format: str = "json") -> str:
        """Export the journal as JSON or YAML"""
        records = [e.to_dict() for e in self.executions]
        if format == "json":
            return json.dumps(records, indent=2, default=str)
        elif format == "yaml":
            return yaml.dump(records, default_flow_style=False, allow_unicode=True)
        else:
            raise ValueError(f"Unsupported export format: {format}")

    def get_statistics(self) -> Dict[str, Any]:
        """Get overall statistics"""
        tasks_stats: Dict[str, Any] = {}
        stats: Dict[str, Any] = {
            "total_executions": len(self.executions),
            "unique_tasks": len(self.task_names()),
            "failures": len(self.failures()),
            "tasks": tasks_stats,
        }

        for task_name in self.task_names():
            history = self.get_task_history(task_name)
            tasks_stats[task_name] = {
                "total_executions": len(history),
                "success_rate": self.get_success_rate(task_name),
                "avg_duration": self.get_avg_duration(task_name),
                "artifacts": sum(e.artifact_count for e in history),
            }

        return stats
