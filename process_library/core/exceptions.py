"""
Exception classes for the process engine.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Any


@dataclass(eq=False)
class ValidationError(Exception):
    """
    Validation error with context information.

    Raised for bad process inputs, bad configuration files and invalid
    task results.
    """
    message: str
    field: Optional[str] = None
    value: Any = None
    context: Optional[Dict[str, Any]] = None

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.field = field
        self.value = value
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context"""
        parts = [self.message]
        if self.field:
            parts.append(f"Field: {self.field}")
        if self.value is not None:
            parts.append(f"Value: {repr(self.value)}")
        if self.context:
            ctx_parts = [f"{k}={v}" for k, v in self.context.items()]
            parts.append(f"Context: {', '.join(ctx_parts)}")
        return " | ".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class SchemaConfigError(ValidationError):
    """A schema is malformed or an output contract breaks its own rules"""
    pass


class TaskValidationError(ValidationError):
    """
    A task result does not conform to its output contract.

    Carries the full violation list so callers can report every failing path.
    """

    def __init__(self, task_name: str, violations: List[Any],
                 context: Optional[Dict[str, Any]] = None):
        self.task_name = task_name
        self.violations = list(violations)
        summary = "; ".join(str(v) for v in self.violations[:5])
        if len(self.violations) > 5:
            summary += f"; ... ({len(self.violations) - 5} more)"
        super().__init__(
            f"Result of task '{task_name}' failed output contract: {summary}",
            field=task_name,
            context=context,
        )


@dataclass(eq=False)
class WorkflowError(Exception):
    """
    Process-level error with process and phase context.
    """
    message: str
    process_id: Optional[str] = None
    phase: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

    def __init__(self, message: str, process_id: Optional[str] = None,
                 phase: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.process_id = process_id
        self.phase = phase
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context"""
        parts = [self.message]
        if self.process_id:
            parts.append(f"Process: {self.process_id}")
        if self.phase:
            parts.append(f"Phase: {self.phase}")
        if self.context:
            ctx_parts = [f"{k}={v}" for k, v in self.context.items()]
            parts.append(f"Context: {', '.join(ctx_parts)}")
        return " | ".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ExecutorError(WorkflowError):
    """The executor behind a task failed to produce a result"""
    pass


class SecurityError(Exception):
    """Security-related error for path validation"""
    pass
