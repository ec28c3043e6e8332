"""
Shared pytest fixtures and configuration for all tests.
"""
import logging
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Callable, Generator

from process_library.core.config import EngineConfig
from process_library.core.engine import WorkflowEngine
from process_library.core.run_context import RunContext
from process_library.testing import FixedClock, RecordingReviewer, ScriptedExecutor, SequentialIds


@pytest.fixture
def temp_workspace() -> Generator[Path, None, None]:
    """Create a temporary workspace directory for testing."""
    temp_dir = tempfile.mkdtemp(prefix="process_library_test_")
    workspace = Path(temp_dir)
    (workspace / ".process-library").mkdir(parents=True, exist_ok=True)

    yield workspace

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def clock() -> FixedClock:
    """Clock starting at 1000ms, advancing 1ms per reading."""
    return FixedClock(start=1000.0, step=1.0)


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def reviewer() -> RecordingReviewer:
    return RecordingReviewer()


@pytest.fixture
def executor() -> ScriptedExecutor:
    """Scripted executor with no scripts: placeholder stubs for every task."""
    return ScriptedExecutor()


@pytest.fixture
def make_context(executor, reviewer, clock, ids) -> Callable[..., RunContext]:
    """Factory for a bare run context wired to the deterministic collaborators."""
    def factory(**kwargs) -> RunContext:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("id_factory", ids)
        return RunContext(
            kwargs.pop("run_id", "run-test"),
            kwargs.pop("executor", executor),
            kwargs.pop("reviewer", reviewer),
            **kwargs,
        )
    return factory


@pytest.fixture
def make_engine(reviewer, clock, ids, temp_workspace) -> Callable[..., WorkflowEngine]:
    """Factory for an engine with scripted responses and a recording reviewer."""
    def factory(responses=None, **kwargs) -> WorkflowEngine:
        kwargs.setdefault("config", EngineConfig(workspace=temp_workspace))
        kwargs.setdefault("reviewer", reviewer)
        return WorkflowEngine(
            executor=kwargs.pop("executor", None) or ScriptedExecutor(responses),
            clock=clock,
            id_factory=ids,
            **kwargs,
        )
    return factory


@pytest.fixture(autouse=True)
def detach_cli_logging():
    """Drop the stderr handler the CLI attaches so it never outlives captured streams."""
    yield
    root = logging.getLogger("process_library")
    for handler in [h for h in root.handlers if getattr(h, "_process_library", False)]:
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
