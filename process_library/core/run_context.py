"""
Run context: the per-invocation handle a process uses to issue tasks,
fan out, pause for review, log and collect artifacts.
"""

import asyncio
import json
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .artifacts import ArtifactAccumulator
from .breakpoints import BreakpointStore, Reviewer, coerce_resolution, resolve_record
from .enums import BreakpointResolution, TaskStatus
from .exceptions import TaskValidationError
from .execution_tracker import TaskJournal
from .executors import TaskExecutor
from .models import BreakpointRecord, BreakpointRequest, TaskContext, TaskDescriptor, TaskExecution
from .run_log import RunLog
from .schema_loader import normalize_path
from .schema_validator import assert_valid
from .task import TaskDefinition


Clock = Callable[[], float]
IdFactory = Callable[[], str]
Branch = Union[Callable[[], Awaitable[Any]], Awaitable[Any]]


class SystemClock:
    """Wall-clock milliseconds, never decreasing"""

    def __init__(self):
        self._last = 0.0

    def __call__(self) -> float:
        self._last = max(self._last, time.time() * 1000.0)
        return self._last


def new_effect_id() -> str:
    return uuid.uuid4().hex[:16]


class ParallelScope:
    """`ctx.parallel`: structured fan-out"""

    async def all(self, branches: Sequence[Branch]) -> List[Any]:
        """
        Run branches concurrently and join.

        Results come back in input order regardless of completion order.
        If any branch raises, the others are cancelled and the error propagates.
        """
        futures = [asyncio.ensure_future(b() if callable(b) else b) for b in branches]
        try:
            return list(await asyncio.gather(*futures))
        except BaseException:
            for future in futures:
                future.cancel()
            raise


class RunContext:
    """
    Everything a single process invocation can touch.

    One context per run; nothing here is shared between runs.
    """

    def __init__(
        self,
        run_id: str,
        executor: TaskExecutor,
        reviewer: Reviewer,
        *,
        process_id: Optional[str] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        run_dir: Optional[Path] = None,
        persist_task_io: bool = False,
        breakpoint_store: Optional[BreakpointStore] = None,
    ):
        self.run_id = run_id
        self.process_id = process_id
        self.executor = executor
        self.reviewer = reviewer
        self.run_dir = Path(run_dir) if run_dir else None
        self.persist_task_io = persist_task_io
        self.breakpoint_store = breakpoint_store

        self._clock = clock or SystemClock()
        self._new_id = id_factory or new_effect_id

        self.artifacts = ArtifactAccumulator()
        self.journal = TaskJournal()
        self.breakpoints: List[BreakpointRecord] = []
        self.run_log = RunLog(run_id, self.now)
        self.parallel = ParallelScope()

    def now(self) -> float:
        return self._clock()

    def log(self, level: str, message: str) -> None:
        self.run_log.log(level, message)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    async def task(self, definition: TaskDefinition, args: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Run one task and return its contract-valid result.

        Raises:
            TaskValidationError: If the result fails the task's output contract
            Exception: Whatever the executor raised, unchanged
        """
        task_ctx = TaskContext(effect_id=self._new_id(), task_name=definition.name)
        descriptor = definition.build(args or {}, task_ctx)
        started = self.now()

        self._persist(descriptor.io.input_json_path, descriptor.to_dict())
        try:
            result = await self.executor.execute(descriptor)
        except Exception as e:
            self._record(descriptor, TaskStatus.FAILED, started, error_message=str(e))
            raise

        try:
            assert_valid(result, descriptor.output_schema, descriptor.name)
        except TaskValidationError as e:
            self._record(descriptor, TaskStatus.INVALID, started,
                         error_message=e.message, violation_count=len(e.violations))
            raise

        self._persist(descriptor.io.output_json_path, result)
        self._record(descriptor, TaskStatus.SUCCESS, started,
                     artifact_count=len(result.get("artifacts") or []))
        return result

    def _record(self, descriptor: TaskDescriptor, status: TaskStatus, started: float, **extra: Any) -> None:
        self.journal.record(TaskExecution(
            task_name=descriptor.name,
            effect_id=descriptor.effect_id,
            status=status,
            started_at=started,
            duration=self.now() - started,
            **extra,
        ))

    def _persist(self, relative_path: str, payload: Any) -> None:
        if not (self.persist_task_io and self.run_dir):
            return
        target = normalize_path(self.run_dir, relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False, default=str)

    # ------------------------------------------------------------------
    # Breakpoints
    # ------------------------------------------------------------------

    async def breakpoint(self, question: str, title: str,
                         context: Optional[Mapping[str, Any]] = None) -> None:
        """
        Pause for human review.

        Suspends until the reviewer resolves. The resolution is recorded;
        a rejection is logged as a warning and the process continues.
        """
        request = BreakpointRequest(
            run_id=self.run_id,
            title=title,
            question=question,
            context=dict(context or {}),
        )
        requested_at = datetime.now()
        self.log("info", f"Breakpoint: {title}")

        outcome = await self.reviewer.review(request)
        record = resolve_record(request, coerce_resolution(outcome), requested_at)
        self.breakpoints.append(record)
        if self.breakpoint_store is not None:
            self.breakpoint_store.save(record)

        if record.resolution == BreakpointResolution.REJECTED:
            self.log("warning", f"Breakpoint '{title}' was rejected; continuing")
        elif record.resolution == BreakpointResolution.DEFERRED:
            self.log("info", f"Breakpoint '{title}' was deferred; continuing")
