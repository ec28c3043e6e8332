"""
Data model classes for the process engine.
All value objects shared across modules live here.
"""

import copy
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from datetime import datetime

from .enums import TaskKind, TaskStatus, BreakpointResolution, RunStatus


# ============================================================================
# Artifact Models
# ============================================================================

@dataclass(frozen=True)
class Artifact:
    """Reference to a file-like output produced by a task"""
    path: str
    format: str = "markdown"
    label: Optional[str] = None
    language: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to checkpoint `files` shape, omitting empty optional keys"""
        data: Dict[str, Any] = {"path": self.path, "format": self.format}
        if self.language:
            data["language"] = self.language
        if self.label:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Artifact':
        """Create from a task result entry"""
        return cls(
            path=str(data["path"]),
            format=data.get("format") or "markdown",
            label=data.get("label") or None,
            language=data.get("language") or None,
        )


# ============================================================================
# Task Models
# ============================================================================

@dataclass(frozen=True)
class TaskContext:
    """Per-invocation identity handed to a task builder"""
    effect_id: str
    task_name: str

    @property
    def input_json_path(self) -> str:
        return f"tasks/{self.effect_id}/input.json"

    @property
    def output_json_path(self) -> str:
        return f"tasks/{self.effect_id}/result.json"


@dataclass(frozen=True)
class TaskIO:
    """Storage location hints for an invocation's payloads"""
    input_json_path: str
    output_json_path: str

    @classmethod
    def for_context(cls, task_ctx: TaskContext) -> 'TaskIO':
        return cls(task_ctx.input_json_path, task_ctx.output_json_path)

    def to_dict(self) -> Dict[str, str]:
        return {
            "inputJsonPath": self.input_json_path,
            "outputJsonPath": self.output_json_path,
        }


@dataclass(frozen=True)
class AgentSpec:
    """Persona, guidance and output contract for delegated agent work"""
    name: str
    role: str
    task: str
    instructions: List[str]
    context: Dict[str, Any]
    output_format: str
    output_schema: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "prompt": {
                "role": self.role,
                "task": self.task,
                "context": copy.deepcopy(self.context),
                "instructions": list(self.instructions),
                "outputFormat": self.output_format,
            },
            "outputSchema": copy.deepcopy(self.output_schema),
        }


@dataclass(frozen=True)
class TaskDescriptor:
    """
    A concrete, immutable description of one unit of delegated work.

    Produced fresh for every invocation of a task definition; only the
    effect id and the paths derived from it differ between invocations
    with the same arguments.
    """
    name: str
    kind: TaskKind
    title: str
    agent: AgentSpec
    io: TaskIO
    effect_id: str
    labels: List[str] = field(default_factory=list)

    @property
    def output_schema(self) -> Dict[str, Any]:
        return self.agent.output_schema

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape consumed by external executors"""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "title": self.title,
            "effectId": self.effect_id,
            "agent": self.agent.to_dict(),
            "io": self.io.to_dict(),
            "labels": list(self.labels),
        }


@dataclass
class TaskExecution:
    """Record of a task invocation within a run"""
    task_name: str
    effect_id: str
    status: TaskStatus
    started_at: float
    duration: float = 0.0
    error_message: Optional[str] = None
    violation_count: int = 0
    artifact_count: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task_name": self.task_name,
            "effect_id": self.effect_id,
            "status": self.status.value,
            "started_at": self.started_at,
            "duration": self.duration,
            "error_message": self.error_message,
            "violation_count": self.violation_count,
            "artifact_count": self.artifact_count,
            "timestamp": self.timestamp.isoformat(),
        }


# ============================================================================
# Breakpoint Models
# ============================================================================

@dataclass(frozen=True)
class BreakpointRequest:
    """What a reviewer is shown when a process pauses"""
    run_id: str
    title: str
    question: str
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def files(self) -> List[Dict[str, Any]]:
        return list(self.context.get("files", []))

    @property
    def summary(self) -> Dict[str, Any]:
        return dict(self.context.get("summary", {}))


@dataclass
class BreakpointRecord:
    """A resolved breakpoint"""
    breakpoint_id: str
    run_id: str
    title: str
    question: str
    resolution: BreakpointResolution
    context: Dict[str, Any] = field(default_factory=dict)
    requested_at: datetime = field(default_factory=datetime.now)
    resolved_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "breakpoint_id": self.breakpoint_id,
            "run_id": self.run_id,
            "title": self.title,
            "question": self.question,
            "resolution": self.resolution.value,
            "context": self.context,
            "requested_at": self.requested_at.isoformat(),
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BreakpointRecord':
        """Create from dictionary"""
        return cls(
            breakpoint_id=data["breakpoint_id"],
            run_id=data["run_id"],
            title=data.get("title", ""),
            question=data.get("question", ""),
            resolution=BreakpointResolution(data.get("resolution", "approved")),
            context=data.get("context", {}),
            requested_at=datetime.fromisoformat(data["requested_at"]) if data.get("requested_at") else datetime.now(),
            resolved_at=datetime.fromisoformat(data["resolved_at"]) if data.get("resolved_at") else None,
        )


# ============================================================================
# Run Models
# ============================================================================

@dataclass
class LogEntry:
    """One `ctx.log` line"""
    level: str
    message: str
    timestamp: float


@dataclass
class RunRecord:
    """Summary of one process invocation"""
    run_id: str
    process_id: str
    status: RunStatus = RunStatus.RUNNING
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    duration: float = 0.0
    task_count: int = 0
    breakpoint_count: int = 0
    artifact_count: int = 0
    failed_phase: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "process_id": self.process_id,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "duration": self.duration,
            "task_count": self.task_count,
            "breakpoint_count": self.breakpoint_count,
            "artifact_count": self.artifact_count,
            "failed_phase": self.failed_phase,
            "error": self.error,
        }
