"""
Enumeration classes for the process engine.
"""

from enum import Enum


class TaskKind(Enum):
    """Kind of delegated work a task descriptor asks an executor for"""
    AGENT = "agent"        # LLM agent work with a structured output contract
    COMPUTE = "compute"    # Deterministic computation (reserved)
    HUMAN = "human"        # Manual task performed by a person (reserved)


class BreakpointResolution(Enum):
    """How a reviewer resolved a breakpoint"""
    APPROVED = "approved"
    REJECTED = "rejected"
    DEFERRED = "deferred"


class TaskStatus(Enum):
    """Outcome of a single task invocation"""
    SUCCESS = "success"
    INVALID = "invalid"    # Result failed its output contract
    FAILED = "failed"      # Executor raised


class RunStatus(Enum):
    """Terminal state of a process run"""
    RUNNING = "running"
    COMPLETED = "completed"
    GATE_FAILED = "gate_failed"
    FAILED = "failed"
    CANCELLED = "cancelled"
