"""
Executors: the collaborators that actually perform delegated task work.

The engine hands every TaskDescriptor to a TaskExecutor and validates what
comes back; executors never see the run context.
"""

import asyncio
import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .enums import TaskKind
from .exceptions import ExecutorError, WorkflowError
from .llm_client_loader import LLMClientLoader
from .models import TaskDescriptor


class TaskExecutor(ABC):
    """Performs the work a descriptor describes and returns its result payload"""

    @abstractmethod
    async def execute(self, descriptor: TaskDescriptor) -> Dict[str, Any]:
        pass

    def supports(self, descriptor: TaskDescriptor) -> bool:
        return True


# ============================================================================
# Placeholder executor
# ============================================================================

def placeholder_value(schema: Dict[str, Any], name: str = "value") -> Any:
    """Smallest sensible value satisfying a contract node"""
    if schema.get("enum"):
        return schema["enum"][0]

    schema_type = schema.get("type") or ("object" if "properties" in schema else "string")
    if schema_type == "object":
        return {
            key: placeholder_value(sub_schema, key)
            for key, sub_schema in (schema.get("properties") or {}).items()
        }
    if schema_type == "array":
        count = max(schema.get("minItems", 0), 1)
        if "maxItems" in schema:
            count = min(count, schema["maxItems"])
        item_schema = schema.get("items") or {"type": "string"}
        return [placeholder_value(item_schema, name) for _ in range(count)]
    if schema_type == "number":
        value = schema.get("minimum", 0)
        if "maximum" in schema:
            value = min(value, schema["maximum"])
        return value
    if schema_type == "boolean":
        return True
    return f"[{name}]"


class PlaceholderExecutor(TaskExecutor):
    """
    Returns a contract-conforming stub for any agent task.

    Useful for dry runs and as the fallback behind scripted test executors.
    Every stub carries exactly one placeholder artifact.
    """

    async def execute(self, descriptor: TaskDescriptor) -> Dict[str, Any]:
        result = placeholder_value(descriptor.output_schema, descriptor.name)
        if not isinstance(result, dict):
            raise ExecutorError(
                "Placeholder executor requires an object contract",
                context={"task": descriptor.name},
            )
        result["artifacts"] = [{
            "path": f"tasks/{descriptor.effect_id}/placeholder.md",
            "format": "markdown",
            "label": descriptor.title,
        }]
        return result


# ============================================================================
# LLM executor
# ============================================================================

FENCED_JSON = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL)


def extract_json(text: str) -> Dict[str, Any]:
    """
    Pull a JSON object out of model output.

    Tries a fenced ```json block first, then the whole text, then the
    outermost brace span.

    Raises:
        ExecutorError: If no JSON object can be parsed
    """
    candidates: List[str] = [m.group(1) for m in FENCED_JSON.finditer(text or "")]
    stripped = (text or "").strip()
    candidates.append(stripped)
    start, end = stripped.find("{"), stripped.rfind("}")
    if 0 <= start < end:
        candidates.append(stripped[start:end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    preview = stripped[:120] + ("..." if len(stripped) > 120 else "")
    raise ExecutorError("Executor output is not a JSON object", context={"output": preview})


def render_prompt(descriptor: TaskDescriptor) -> str:
    """Render a descriptor's agent spec as a single prompt"""
    agent = descriptor.agent
    instructions = "\n".join(f"{i}. {line}" for i, line in enumerate(agent.instructions, 1))
    return "\n\n".join([
        f"# Role\n{agent.role}",
        f"# Task\n{agent.task}",
        f"# Context\n```json\n{json.dumps(agent.context, indent=2, default=str)}\n```",
        f"# Instructions\n{instructions}",
        f"# Output format\n{agent.output_format}",
        "# Output schema\nRespond with a single JSON object conforming to:\n"
        f"```json\n{json.dumps(agent.output_schema, indent=2)}\n```",
    ])


class LLMExecutor(TaskExecutor):
    """
    Drives an LLM client for agent tasks.

    Client calls are blocking and run in a worker thread. Any client failure
    or unparseable output is an ExecutorError; up to `max_attempts` attempts
    are made before the last error propagates.
    """

    def __init__(self, client: Any, max_attempts: int = 1, max_tokens: int = 4096):
        if client is None:
            raise WorkflowError("LLMExecutor requires an LLM client")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.client = client
        self.max_attempts = max_attempts
        self.max_tokens = max_tokens

    def supports(self, descriptor: TaskDescriptor) -> bool:
        return descriptor.kind == TaskKind.AGENT

    def _call(self, descriptor: TaskDescriptor, prompt: str) -> str:
        try:
            if hasattr(self.client, "complete"):
                return self.client.complete(prompt, max_tokens=self.max_tokens)
            if hasattr(self.client, "chat"):
                return self.client.chat([
                    {"role": "system", "content": descriptor.agent.role},
                    {"role": "user", "content": prompt},
                ])
            if callable(self.client):
                return self.client(prompt)
        except Exception as e:
            raise ExecutorError(
                f"LLM client failed: {e}",
                context={"task": descriptor.name, "effect_id": descriptor.effect_id},
            ) from e
        raise ExecutorError("LLM client exposes neither complete(), chat() nor __call__")

    async def execute(self, descriptor: TaskDescriptor) -> Dict[str, Any]:
        prompt = render_prompt(descriptor)
        last_error: Optional[ExecutorError] = None
        for _ in range(self.max_attempts):
            try:
                text = await asyncio.to_thread(self._call, descriptor, prompt)
                return extract_json(text)
            except ExecutorError as e:
                last_error = e
        assert last_error is not None
        raise last_error


# ============================================================================
# Routing
# ============================================================================

Matcher = Callable[[TaskDescriptor], bool]


@dataclass
class Route:
    matcher: Matcher
    executor: TaskExecutor


class CompositeExecutor(TaskExecutor):
    """Routes each descriptor to the first matching executor, else the default"""

    def __init__(self, default: TaskExecutor):
        self.default = default
        self.routes: List[Route] = []

    def route(
        self,
        executor: TaskExecutor,
        *,
        matcher: Optional[Matcher] = None,
        kind: Optional[TaskKind] = None,
        label: Optional[str] = None,
        task_name: Optional[str] = None,
    ) -> 'CompositeExecutor':
        """Add a route; all given criteria must match"""
        criteria: List[Matcher] = []
        if matcher is not None:
            criteria.append(matcher)
        if kind is not None:
            criteria.append(lambda d: d.kind == kind)
        if label is not None:
            criteria.append(lambda d: label in d.labels)
        if task_name is not None:
            criteria.append(lambda d: d.name == task_name)
        if not criteria:
            raise ValueError("route() needs at least one criterion")

        self.routes.append(Route(lambda d: all(c(d) for c in criteria), executor))
        return self

    def select(self, descriptor: TaskDescriptor) -> TaskExecutor:
        for route in self.routes:
            if route.matcher(descriptor) and route.executor.supports(descriptor):
                return route.executor
        return self.default

    def supports(self, descriptor: TaskDescriptor) -> bool:
        return self.select(descriptor).supports(descriptor)

    async def execute(self, descriptor: TaskDescriptor) -> Dict[str, Any]:
        return await self.select(descriptor).execute(descriptor)


def create_executor(name: str, workspace: Path,
                    llm_config: Optional[Dict[str, Any]] = None) -> TaskExecutor:
    """
    Build an executor by configured name.

    Args:
        name: "placeholder" or "llm"
        workspace: Workspace root (for the LLM config file)
        llm_config: Pre-loaded `llm:` config section

    Raises:
        WorkflowError: Unknown name, or no LLM client configured
    """
    if name == "placeholder":
        return PlaceholderExecutor()
    if name == "llm":
        client = LLMClientLoader(workspace, llm_config=llm_config).load()
        if client is None:
            raise WorkflowError(
                "No LLM client configured",
                context={"hint": "set OPENAI_API_KEY or ANTHROPIC_API_KEY, or an llm: section in config"},
            )
        attempts = int((llm_config or {}).get("max_attempts", 1))
        return LLMExecutor(client, max_attempts=attempts)
    raise WorkflowError(f"Unknown executor: '{name}'", context={"available": "placeholder, llm"})
