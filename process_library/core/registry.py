"""
Process registry: process ids mapped to their definitions.
Following Single Responsibility Principle - handles process lookup only.
"""

import importlib
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Mapping, Optional, Type

from .config import ProcessInputs
from .exceptions import WorkflowError
from .task import TaskDefinition


ProcessFunc = Callable[[Mapping[str, Any], Any], Awaitable[Dict[str, Any]]]


@dataclass
class ProcessDefinition:
    """A registered process: its coroutine, inputs type and task catalog"""
    process_id: str
    func: ProcessFunc
    inputs_cls: Optional[Type[ProcessInputs]] = None
    description: str = ""
    tasks: List[TaskDefinition] = field(default_factory=list)

    @property
    def task_names(self) -> List[str]:
        return [t.name for t in self.tasks]

    def describe(self) -> Dict[str, Any]:
        """Catalog entry"""
        return {
            "id": self.process_id,
            "description": self.description,
            "inputs": self.inputs_cls.describe_fields() if self.inputs_cls else {},
            "tasks": self.task_names,
        }


class ProcessRegistry:
    """Holds process definitions by id"""

    def __init__(self):
        self._processes: Dict[str, ProcessDefinition] = {}

    def register(self, definition: ProcessDefinition) -> ProcessDefinition:
        if definition.process_id in self._processes:
            raise WorkflowError(
                f"Process '{definition.process_id}' is already registered",
                process_id=definition.process_id,
            )
        names = definition.task_names
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise WorkflowError(
                "Task names must be unique within a process",
                process_id=definition.process_id,
                context={"duplicates": duplicates},
            )
        self._processes[definition.process_id] = definition
        return definition

    def get(self, process_id: str) -> ProcessDefinition:
        try:
            return self._processes[process_id]
        except KeyError:
            raise WorkflowError(
                f"Unknown process '{process_id}'",
                process_id=process_id,
                context={"available": ", ".join(sorted(self._processes))},
            ) from None

    def list(self) -> List[ProcessDefinition]:
        return [self._processes[k] for k in sorted(self._processes)]

    def __contains__(self, process_id: object) -> bool:
        return process_id in self._processes

    def __iter__(self) -> Iterator[ProcessDefinition]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._processes)


_REGISTRY = ProcessRegistry()


def _first_line(text: Optional[str]) -> str:
    lines = (text or "").strip().splitlines()
    return lines[0] if lines else ""


def process_definition(
    process_id: str,
    *,
    inputs: Optional[Type[ProcessInputs]] = None,
    description: str = "",
    tasks: Optional[List[TaskDefinition]] = None,
    registry: Optional[ProcessRegistry] = None,
) -> Callable[[ProcessFunc], ProcessFunc]:
    """
    Register a process coroutine.

    The decorated function is returned unchanged; its definition is attached
    as `func.definition`.
    """
    target = registry if registry is not None else _REGISTRY

    def decorator(func: ProcessFunc) -> ProcessFunc:
        definition = ProcessDefinition(
            process_id=process_id,
            func=func,
            inputs_cls=inputs,
            description=description or _first_line(func.__doc__),
            tasks=list(tasks or []),
        )
        target.register(definition)
        func.definition = definition  # type: ignore[attr-defined]
        return func

    return decorator


def default_registry() -> ProcessRegistry:
    """The registry holding the built-in catalog"""
    importlib.import_module("process_library.processes")
    return _REGISTRY


def describe(process_id: str, registry: Optional[ProcessRegistry] = None) -> Dict[str, Any]:
    registry = registry if registry is not None else default_registry()
    return registry.get(process_id).describe()
