"""
Breakpoints: human review points inside a process run.

A process awaits `ctx.breakpoint(...)`; the run suspends until the configured
Reviewer resolves the request. Resolutions are recorded, never enforced.
"""

import asyncio
import inspect
import uuid
import warnings
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Union

import yaml

from .enums import BreakpointResolution
from .models import BreakpointRecord, BreakpointRequest


ReviewOutcome = Optional[BreakpointResolution]


class Reviewer(ABC):
    """Resolves breakpoint requests"""

    @abstractmethod
    async def review(self, request: BreakpointRequest) -> ReviewOutcome:
        """
        Resolve a request.

        Returns:
            The resolution, or None (treated as approved)
        """
        pass


class AutoApproveReviewer(Reviewer):
    """Approves every request immediately"""

    async def review(self, request: BreakpointRequest) -> ReviewOutcome:
        return BreakpointResolution.APPROVED


class CallbackReviewer(Reviewer):
    """Delegates to a sync or async callable of the request"""

    def __init__(self, callback: Callable[[BreakpointRequest], Union[ReviewOutcome, Awaitable[ReviewOutcome]]]):
        if not callable(callback):
            raise TypeError("CallbackReviewer requires a callable")
        self.callback = callback

    async def review(self, request: BreakpointRequest) -> ReviewOutcome:
        outcome = self.callback(request)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return coerce_resolution(outcome)


class ConsoleReviewer(Reviewer):
    """Prompts on stdin; the blocking read happens in a worker thread"""

    ANSWERS = {
        "": BreakpointResolution.APPROVED,
        "y": BreakpointResolution.APPROVED,
        "yes": BreakpointResolution.APPROVED,
        "n": BreakpointResolution.REJECTED,
        "no": BreakpointResolution.REJECTED,
        "d": BreakpointResolution.DEFERRED,
        "defer": BreakpointResolution.DEFERRED,
    }

    def __init__(self, input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], Any] = print):
        self._input = input_func
        self._output = output_func

    async def review(self, request: BreakpointRequest) -> ReviewOutcome:
        self._output("")
        self._output(f"⏸️  {request.title}")
        self._output(f"   {request.question}")
        for file in request.files:
            self._output(f"   📄 {file.get('path')} ({file.get('format', 'markdown')})")
        for key, value in request.summary.items():
            self._output(f"   - {key}: {value}")

        while True:
            answer = await asyncio.to_thread(self._input, "Approve? [Y/n/d] ")
            resolution = self.ANSWERS.get(answer.strip().lower())
            if resolution is not None:
                return resolution
            self._output("❌ Please answer y, n or d")


def coerce_resolution(value: Any) -> ReviewOutcome:
    """Accept a BreakpointResolution, its string value, a bool or None"""
    if value is None or isinstance(value, BreakpointResolution):
        return value
    if isinstance(value, bool):
        return BreakpointResolution.APPROVED if value else BreakpointResolution.REJECTED
    if isinstance(value, str):
        return BreakpointResolution(value.lower())
    raise TypeError(f"Cannot interpret reviewer outcome: {value!r}")


def new_breakpoint_id() -> str:
    return f"breakpoint_{uuid.uuid4().hex[:12]}"


class BreakpointStore:
    """Persists breakpoint records under `<runs_dir>/<run_id>/breakpoints/`"""

    def __init__(self, runs_dir: Path):
        self.runs_dir = Path(runs_dir)

    def _dir(self, run_id: str) -> Path:
        return self.runs_dir / run_id / "breakpoints"

    def save(self, record: BreakpointRecord) -> Path:
        """Write one record as YAML"""
        target_dir = self._dir(record.run_id)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / f"{record.breakpoint_id}.yaml"
        with open(target, "w", encoding="utf-8") as f:
            yaml.dump(record.to_dict(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        return target

    def list(self, run_id: str) -> List[BreakpointRecord]:
        """
        List a run's records in request order.

        Unreadable files are skipped with a warning.
        """
        target_dir = self._dir(run_id)
        if not target_dir.exists():
            return []

        records = []
        for record_file in target_dir.glob("*.yaml"):
            record = self.load(record_file)
            if record:
                records.append(record)
        records.sort(key=lambda r: r.requested_at)
        return records

    def load(self, record_file: Path) -> Optional[BreakpointRecord]:
        try:
            with open(record_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            warnings.warn(f"Failed to load breakpoint from {record_file}: {e}")
            return None
        if not data:
            return None
        return BreakpointRecord.from_dict(data)


def resolve_record(request: BreakpointRequest, outcome: ReviewOutcome,
                   requested_at: datetime) -> BreakpointRecord:
    """Build the record for a resolved request (None counts as approved)"""
    return BreakpointRecord(
        breakpoint_id=new_breakpoint_id(),
        run_id=request.run_id,
        title=request.title,
        question=request.question,
        resolution=outcome or BreakpointResolution.APPROVED,
        context=dict(request.context),
        requested_at=requested_at,
        resolved_at=datetime.now(),
    )
