"""
Product-Management Process Library

Declarative product-management processes and the small workflow engine
they run on: contract-checked agent tasks, quality gates, breakpoints for
human review and a run-scoped artifact log.
"""

from .core import (
    WorkflowEngine,
    EngineConfig,
    RunContext,
    ProcessInputs,
    define_task,
    agent_task,
    process_definition,
    default_registry,
    QualityGate,
    PlaceholderExecutor,
    LLMExecutor,
    AutoApproveReviewer,
    ValidationError,
    TaskValidationError,
    WorkflowError,
)

__version__ = "0.1.0"
__all__ = [
    "WorkflowEngine",
    "EngineConfig",
    "RunContext",
    "ProcessInputs",
    "define_task",
    "agent_task",
    "process_definition",
    "default_registry",
    "QualityGate",
    "PlaceholderExecutor",
    "LLMExecutor",
    "AutoApproveReviewer",
    "ValidationError",
    "TaskValidationError",
    "WorkflowError",
]
