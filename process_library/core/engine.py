"""
Workflow engine: resolves a process, runs it against a fresh RunContext and
keeps a record of the run.
"""

import asyncio
import logging
from collections import OrderedDict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .breakpoints import AutoApproveReviewer, BreakpointStore, ConsoleReviewer, Reviewer
from .config import EngineConfig
from .enums import RunStatus
from .exceptions import WorkflowError
from .executors import TaskExecutor, create_executor
from .models import RunRecord
from .registry import ProcessDefinition, ProcessFunc, ProcessRegistry, default_registry
from .run_context import Clock, IdFactory, RunContext, SystemClock, new_effect_id


logger = logging.getLogger(__name__)

ProcessRef = Union[str, ProcessDefinition, ProcessFunc]

MAX_RETAINED_CONTEXTS = 50


class WorkflowEngine:
    """
    Runs registered processes.

    Args:
        executor: Task executor (built from config when omitted)
        reviewer: Breakpoint reviewer (auto-approve or console, per config, when omitted)
        config: Engine configuration
        registry: Process registry (the built-in catalog when omitted)
        clock: Millisecond clock shared by every run context
        id_factory: Source of run and effect ids
        max_retained_contexts: How many run contexts stay in `contexts`;
            older ones are dropped first (run records are always kept)
    """

    def __init__(
        self,
        executor: Optional[TaskExecutor] = None,
        reviewer: Optional[Reviewer] = None,
        config: Optional[EngineConfig] = None,
        registry: Optional[ProcessRegistry] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        max_retained_contexts: int = MAX_RETAINED_CONTEXTS,
    ):
        self.config = config or EngineConfig()
        self.executor = executor or create_executor(self.config.executor, self.config.workspace, self.config.llm)
        if reviewer is None:
            reviewer = AutoApproveReviewer() if self.config.auto_approve else ConsoleReviewer()
        self.reviewer = reviewer
        self._registry = registry
        self.clock = clock or SystemClock()
        self.id_factory = id_factory or new_effect_id

        self.runs: List[RunRecord] = []
        self.contexts: "OrderedDict[str, RunContext]" = OrderedDict()
        self.max_retained_contexts = max(1, max_retained_contexts)

    @property
    def registry(self) -> ProcessRegistry:
        if self._registry is None:
            self._registry = default_registry()
        return self._registry

    def resolve(self, process: ProcessRef) -> ProcessDefinition:
        """Accept a process id, a definition, or a (possibly decorated) coroutine function"""
        if isinstance(process, ProcessDefinition):
            return process
        if isinstance(process, str):
            return self.registry.get(process)
        definition = getattr(process, "definition", None)
        if isinstance(definition, ProcessDefinition):
            return definition
        if callable(process):
            return ProcessDefinition(process_id=getattr(process, "__name__", "process"), func=process)
        raise WorkflowError(f"Cannot run {process!r}: not a process")

    def _run_dir(self, run_id: str) -> Optional[Path]:
        if self.config.runs_dir is None:
            return None
        return Path(self.config.runs_dir) / run_id

    def new_context(self, process_id: str, run_id: Optional[str] = None) -> RunContext:
        run_id = run_id or f"run_{self.id_factory()}"
        if run_id in self.contexts or any(r.run_id == run_id for r in self.runs):
            raise WorkflowError(f"Run id '{run_id}' already used", process_id=process_id)

        store = BreakpointStore(self.config.runs_dir) if self.config.runs_dir else None
        ctx = RunContext(
            run_id,
            self.executor,
            self.reviewer,
            process_id=process_id,
            clock=self.clock,
            id_factory=self.id_factory,
            run_dir=self._run_dir(run_id),
            persist_task_io=self.config.persist_task_io,
            breakpoint_store=store,
        )
        self.contexts[run_id] = ctx
        while len(self.contexts) > self.max_retained_contexts:
            self.contexts.popitem(last=False)
        return ctx

    async def run(self, process: ProcessRef, inputs: Optional[Mapping[str, Any]] = None,
                  run_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Run a process to completion and return its result unchanged.

        Gate failures come back as ordinary `{success: False, ...}` results.
        Any exception is recorded on the run and re-raised.
        """
        definition = self.resolve(process)
        ctx = self.new_context(definition.process_id, run_id)
        record = RunRecord(run_id=ctx.run_id, process_id=definition.process_id)
        self.runs.append(record)
        started = self.clock()

        logger.info("Starting %s (run %s)", definition.process_id, ctx.run_id)
        try:
            result = await definition.func(dict(inputs or {}), ctx)
        except asyncio.CancelledError:
            record.status = RunStatus.CANCELLED
            record.error = "cancelled"
            logger.warning("Run %s cancelled", ctx.run_id)
            raise
        except Exception as e:
            record.status = RunStatus.FAILED
            record.error = str(e)
            logger.error("Run %s failed: %s", ctx.run_id, e)
            raise
        else:
            if isinstance(result, dict) and result.get("success") is False:
                record.status = RunStatus.GATE_FAILED
                record.failed_phase = result.get("phase")
                record.error = result.get("error")
                logger.warning("Run %s stopped at gate '%s': %s", ctx.run_id, record.failed_phase, record.error)
            else:
                record.status = RunStatus.COMPLETED
                logger.info("Run %s completed", ctx.run_id)
            return result
        finally:
            record.finished_at = datetime.now()
            record.duration = self.clock() - started
            record.task_count = len(ctx.journal.executions)
            record.breakpoint_count = len(ctx.breakpoints)
            record.artifact_count = len(ctx.artifacts)
            self._write_run(ctx, record)

    def run_sync(self, process: ProcessRef, inputs: Optional[Mapping[str, Any]] = None,
                 run_id: Optional[str] = None) -> Dict[str, Any]:
        """Blocking wrapper around `run`"""
        return asyncio.run(self.run(process, inputs, run_id=run_id))

    def get_run(self, run_id: str) -> RunRecord:
        for record in self.runs:
            if record.run_id == run_id:
                return record
        raise WorkflowError(f"Unknown run '{run_id}'")

    def _write_run(self, ctx: RunContext, record: RunRecord) -> None:
        run_dir = self._run_dir(ctx.run_id)
        if run_dir is None:
            return
        run_dir.mkdir(parents=True, exist_ok=True)

        data = record.to_dict()
        data["log"] = [
            {"level": e.level, "message": e.message, "timestamp": e.timestamp}
            for e in ctx.run_log.entries
        ]
        with open(run_dir / "run.yaml", "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        (run_dir / "journal.json").write_text(ctx.journal.export_trace("json"), encoding="utf-8")
