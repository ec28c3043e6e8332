"""
Task definitions: reusable templates that produce a fresh descriptor per invocation.
"""

import copy
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .enums import TaskKind
from .exceptions import ValidationError
from .models import AgentSpec, TaskContext, TaskDescriptor, TaskIO
from .schema_validator import check_contract


TaskBuilder = Callable[[Dict[str, Any], TaskContext], TaskDescriptor]

TASK_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

ARTIFACTS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["path"],
        "properties": {
            "path": {"type": "string", "minLength": 1},
            "format": {"type": "string"},
            "label": {"type": "string"},
            "language": {"type": "string"},
        },
    },
}


@dataclass(frozen=True)
class TaskDefinition:
    """A named, stateless template for one kind of delegated work"""
    name: str
    builder: TaskBuilder

    def build(self, args: Mapping[str, Any], task_ctx: TaskContext) -> TaskDescriptor:
        """
        Produce the descriptor for one invocation.

        Raises:
            ValidationError: If the builder returns something other than a descriptor
            SchemaConfigError: If the descriptor's output contract is malformed
        """
        descriptor = self.builder(copy.deepcopy(dict(args)), task_ctx)
        if not isinstance(descriptor, TaskDescriptor):
            raise ValidationError(
                f"Builder of task '{self.name}' must return a TaskDescriptor",
                field="builder",
                value=type(descriptor).__name__,
            )
        check_contract(descriptor.output_schema)
        return descriptor


def define_task(name: str, builder: TaskBuilder) -> TaskDefinition:
    """
    Register a task template.

    Args:
        name: Stable kebab-case identifier, unique within a process module
        builder: Function of (args, task_ctx) returning a TaskDescriptor
    """
    if not TASK_NAME_PATTERN.match(name or ""):
        raise ValidationError("Task name must be kebab-case", field="name", value=name)
    if not callable(builder):
        raise ValidationError(f"Builder for task '{name}' must be callable", field="builder")
    return TaskDefinition(name=name, builder=builder)


def with_artifacts(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of an object contract that declares and requires `artifacts`"""
    contract = copy.deepcopy(schema)
    properties = contract.setdefault("properties", {})
    properties.setdefault("artifacts", copy.deepcopy(ARTIFACTS_SCHEMA))
    required = contract.setdefault("required", [])
    if "artifacts" not in required:
        required.append("artifacts")
    return contract


def agent_task(
    name: str,
    *,
    title: Union[str, Callable[[Dict[str, Any]], str]],
    agent: str,
    role: str,
    task: str,
    instructions: List[str],
    output_format: str,
    output_schema: Dict[str, Any],
    labels: Optional[List[str]] = None,
) -> TaskDefinition:
    """
    Define the common kind of task: LLM agent work with an output contract.

    The contract always declares and requires an `artifacts` array.
    """
    contract = with_artifacts(output_schema)
    task_labels = ["agent", *(labels or [])]

    def builder(args: Dict[str, Any], task_ctx: TaskContext) -> TaskDescriptor:
        return TaskDescriptor(
            name=name,
            kind=TaskKind.AGENT,
            title=title(args) if callable(title) else title,
            agent=AgentSpec(
                name=agent,
                role=role,
                task=task,
                instructions=list(instructions),
                context=args,
                output_format=output_format,
                output_schema=copy.deepcopy(contract),
            ),
            io=TaskIO.for_context(task_ctx),
            effect_id=task_ctx.effect_id,
            labels=list(task_labels),
        )

    return define_task(name, builder)
