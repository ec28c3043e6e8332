"""
Core process engine modules.
Following SOLID principles - modules are organized by responsibility.
"""

# Exceptions
from .exceptions import (
    ValidationError, SchemaConfigError, TaskValidationError,
    WorkflowError, ExecutorError, SecurityError
)

# Enums
from .enums import TaskKind, BreakpointResolution, TaskStatus, RunStatus

# Models
from .models import (
    Artifact, TaskContext, TaskIO, AgentSpec, TaskDescriptor, TaskExecution,
    BreakpointRequest, BreakpointRecord, LogEntry, RunRecord
)

# Schema validation
from .schema_validator import (
    SchemaViolation, ValidationResult, validate, check_schema, check_contract, assert_valid
)

from .schema_loader import SchemaLoader, normalize_path
from .task import TaskDefinition, define_task, agent_task
from .artifacts import ArtifactAccumulator
from .quality_gates import QualityGate, gate_failure
from .execution_tracker import TaskJournal
from .run_log import RunLog, configure_logging
from .breakpoints import (
    Reviewer, AutoApproveReviewer, ConsoleReviewer, CallbackReviewer, BreakpointStore
)
from .llm_client_loader import LLMClientLoader
from .executors import (
    TaskExecutor, PlaceholderExecutor, LLMExecutor, CompositeExecutor, create_executor
)
from .config import EngineConfig, ProcessInputs, alias, load_inputs
from .run_context import RunContext, ParallelScope, SystemClock
from .registry import (
    ProcessDefinition, ProcessRegistry, process_definition, default_registry, describe
)
from .engine import WorkflowEngine

__all__ = [
    "ValidationError", "SchemaConfigError", "TaskValidationError",
    "WorkflowError", "ExecutorError", "SecurityError",
    "TaskKind", "BreakpointResolution", "TaskStatus", "RunStatus",
    "Artifact", "TaskContext", "TaskIO", "AgentSpec", "TaskDescriptor", "TaskExecution",
    "BreakpointRequest", "BreakpointRecord", "LogEntry", "RunRecord",
    "SchemaViolation", "ValidationResult", "validate", "check_schema", "check_contract", "assert_valid",
    "SchemaLoader", "normalize_path",
    "TaskDefinition", "define_task", "agent_task",
    "ArtifactAccumulator",
    "QualityGate", "gate_failure",
    "TaskJournal",
    "RunLog", "configure_logging",
    "Reviewer", "AutoApproveReviewer", "ConsoleReviewer", "CallbackReviewer", "BreakpointStore",
    "LLMClientLoader",
    "TaskExecutor", "PlaceholderExecutor", "LLMExecutor", "CompositeExecutor", "create_executor",
    "EngineConfig", "ProcessInputs", "alias", "load_inputs",
    "RunContext", "ParallelScope", "SystemClock",
    "ProcessDefinition", "ProcessRegistry", "process_definition", "default_registry", "describe",
    "WorkflowEngine",
]
