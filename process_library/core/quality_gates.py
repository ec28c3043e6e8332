"""
Quality gates: predicates over a task result that short-circuit a process.
Following Single Responsibility Principle - handles gate evaluation only.

A failed gate is an ordinary return value, not an exception:

    {"success": False, "error": ..., "phase": ..., "recommendation": ..., ...}
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .exceptions import ValidationError


Predicate = Callable[[Mapping[str, Any]], bool]
TextOrFactory = Union[str, Callable[[Mapping[str, Any]], str]]
DetailsOrFactory = Union[Dict[str, Any], Callable[[Mapping[str, Any]], Dict[str, Any]], None]


def gate_failure(error: str, phase: str, recommendation: str, **extra: Any) -> Dict[str, Any]:
    """Build the failure payload a process returns from a gate"""
    payload: Dict[str, Any] = {
        "success": False,
        "error": error,
        "phase": phase,
        "recommendation": recommendation,
    }
    payload.update(extra)
    return payload


@dataclass
class QualityGate:
    """
    A named check guarding the rest of a process.

    Args:
        phase: Phase tag placed in the failure payload
        check: Predicate over the task result; True means pass
        error: Message (or factory of the result) for the failure payload
        recommendation: Remediation hint (or factory of the result)
        details: Extra payload keys (or factory of the result)
    """
    phase: str
    check: Predicate
    error: TextOrFactory
    recommendation: TextOrFactory
    details: DetailsOrFactory = field(default=None)

    def __post_init__(self):
        if not callable(self.check):
            raise ValidationError(f"Check for gate '{self.phase}' must be callable", field="check")

    def passes(self, result: Mapping[str, Any]) -> bool:
        return bool(self.check(result))

    def evaluate(self, result: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Return the failure payload, or None when the gate passes"""
        if self.passes(result):
            return None

        extra = self.details(result) if callable(self.details) else dict(self.details or {})
        return gate_failure(
            _render(self.error, result),
            self.phase,
            _render(self.recommendation, result),
            **extra,
        )


def _render(value: TextOrFactory, result: Mapping[str, Any]) -> str:
    return value(result) if callable(value) else value
