"""
Deterministic collaborators for exercising processes without an LLM or a human.
"""

import asyncio
import copy
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .core.breakpoints import Reviewer
from .core.enums import BreakpointResolution
from .core.executors import PlaceholderExecutor, TaskExecutor, placeholder_value
from .core.models import BreakpointRequest, TaskDescriptor


class FixedClock:
    """Clock advancing by `step` milliseconds on every reading"""

    def __init__(self, start: float = 0.0, step: float = 1.0):
        self.current = start
        self.step = step

    def __call__(self) -> float:
        value = self.current
        self.current += self.step
        return value


class SequentialIds:
    """Id factory yielding `<prefix>-1`, `<prefix>-2`, ..."""

    def __init__(self, prefix: str = "effect"):
        self.prefix = prefix
        self.counter = 0

    def __call__(self) -> str:
        self.counter += 1
        return f"{self.prefix}-{self.counter}"


Response = Union[Dict[str, Any], Callable[[TaskDescriptor], Dict[str, Any]]]


class ScriptedExecutor(TaskExecutor):
    """
    Replies with canned payloads per task name.

    A response may be a dict (deep-copied per call) or a callable of the
    descriptor; a callable may raise to simulate executor failure. Tasks
    without a script fall back to `fallback` (placeholder stubs by default).
    """

    def __init__(self, responses: Optional[Mapping[str, Response]] = None,
                 fallback: Optional[TaskExecutor] = None,
                 delays: Optional[Mapping[str, float]] = None):
        self.responses: Dict[str, Response] = dict(responses or {})
        self.fallback = fallback or PlaceholderExecutor()
        self.delays: Dict[str, float] = dict(delays or {})
        self.calls: List[TaskDescriptor] = []

    async def execute(self, descriptor: TaskDescriptor) -> Dict[str, Any]:
        self.calls.append(descriptor)
        delay = self.delays.get(descriptor.name)
        if delay:
            await asyncio.sleep(delay)

        response = self.responses.get(descriptor.name)
        if response is None:
            return await self.fallback.execute(descriptor)
        if callable(response):
            return response(descriptor)
        return copy.deepcopy(response)

    def call_count(self, task_name: str) -> int:
        return sum(1 for d in self.calls if d.name == task_name)

    def called(self, task_name: str) -> bool:
        return self.call_count(task_name) > 0

    def call_order(self) -> List[str]:
        return [d.name for d in self.calls]

    def last_call(self, task_name: str) -> TaskDescriptor:
        for descriptor in reversed(self.calls):
            if descriptor.name == task_name:
                return descriptor
        raise KeyError(task_name)


class RecordingReviewer(Reviewer):
    """Resolves every request the same way and remembers what it saw"""

    def __init__(self, resolution: BreakpointResolution = BreakpointResolution.APPROVED):
        self.resolution = resolution
        self.requests: List[BreakpointRequest] = []

    async def review(self, request: BreakpointRequest) -> Optional[BreakpointResolution]:
        self.requests.append(request)
        return self.resolution

    @property
    def titles(self) -> List[str]:
        return [r.title for r in self.requests]


class PendingReviewer(Reviewer):
    """Never resolves; the run stays suspended until cancelled"""

    def __init__(self):
        self.requests: List[BreakpointRequest] = []

    async def review(self, request: BreakpointRequest) -> Optional[BreakpointResolution]:
        self.requests.append(request)
        await asyncio.Event().wait()
        return None


def stub(**fields: Any) -> Callable[[TaskDescriptor], Dict[str, Any]]:
    """
    Response for ScriptedExecutor: the task's placeholder stub with some fields replaced.

        ScriptedExecutor({"job-identification": stub(coreJobs=[...])})
    """
    overrides = copy.deepcopy(fields)

    def respond(descriptor: TaskDescriptor) -> Dict[str, Any]:
        result = placeholder_value(descriptor.output_schema, descriptor.name)
        result["artifacts"] = [{"path": f"{descriptor.name}.md", "format": "markdown"}]
        result.update(copy.deepcopy(overrides))
        return result

    return respond
