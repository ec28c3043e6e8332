"""
Unit tests for RunContext: tasks, fan-out, breakpoints, logging.
"""
import asyncio
import json
import pytest

from process_library.core.breakpoints import BreakpointStore
from process_library.core.contracts import obj
from process_library.core.enums import BreakpointResolution, TaskStatus
from process_library.core.exceptions import ExecutorError, TaskValidationError
from process_library.core.task import agent_task
from process_library.testing import PendingReviewer, RecordingReviewer, ScriptedExecutor


def simple_task(name):
    return agent_task(
        name,
        title=lambda args: f"{name} {args.get('n')}",
        agent="echo",
        role="echo agent",
        task="Echo the input",
        instructions=["Echo"],
        output_format="JSON with value, artifacts",
        output_schema=obj("value", require=["value"]),
    )


ECHO = simple_task("echo-task")
SLOW = simple_task("slow-task")
FAST = simple_task("fast-task")


def echo(descriptor):
    n = descriptor.agent.context.get("n")
    return {"value": f"{descriptor.name}:{n}", "artifacts": [{"path": f"out/{descriptor.name}-{n}.md"}]}


class TestTasks:
    """Test ctx.task."""

    @pytest.mark.asyncio
    async def test_returns_valid_result_and_records_success(self, make_context):
        executor = ScriptedExecutor({"echo-task": echo})
        ctx = make_context(executor=executor)

        result = await ctx.task(ECHO, {"n": 1})

        assert result["value"] == "echo-task:1"
        execution = ctx.journal.executions[0]
        assert execution.status == TaskStatus.SUCCESS
        assert execution.artifact_count == 1
        assert executor.last_call("echo-task").title == "echo-task 1"

    @pytest.mark.asyncio
    async def test_fresh_effect_id_per_invocation(self, make_context):
        executor = ScriptedExecutor({"echo-task": echo})
        ctx = make_context(executor=executor)

        await ctx.task(ECHO, {"n": 1})
        await ctx.task(ECHO, {"n": 1})

        assert [d.effect_id for d in executor.calls] == ["effect-1", "effect-2"]

    @pytest.mark.asyncio
    async def test_invalid_result_fails_closed(self, make_context):
        executor = ScriptedExecutor({"echo-task": {"value": 42}})
        ctx = make_context(executor=executor)

        with pytest.raises(TaskValidationError) as exc_info:
            await ctx.task(ECHO, {"n": 1})

        assert sorted(v.path for v in exc_info.value.violations) == ["artifacts", "value"]
        execution = ctx.journal.executions[0]
        assert execution.status == TaskStatus.INVALID
        assert execution.violation_count == 2

    @pytest.mark.asyncio
    async def test_empty_artifact_path_rejected(self, make_context):
        executor = ScriptedExecutor({"echo-task": {
            "value": "v",
            "artifacts": [{"path": "out/ok.md"}, {"path": ""}],
        }})
        ctx = make_context(executor=executor)

        with pytest.raises(TaskValidationError) as exc_info:
            await ctx.task(ECHO, {"n": 1})

        assert [v.path for v in exc_info.value.violations] == ["artifacts[1].path"]
        assert exc_info.value.violations[0].rule == "minLength"
        assert ctx.journal.executions[0].status == TaskStatus.INVALID
        assert len(ctx.artifacts) == 0

    @pytest.mark.asyncio
    async def test_executor_error_propagates_unchanged(self, make_context):
        error = ExecutorError("model unavailable")

        def fail(descriptor):
            raise error

        ctx = make_context(executor=ScriptedExecutor({"echo-task": fail}))

        with pytest.raises(ExecutorError) as exc_info:
            await ctx.task(ECHO)

        assert exc_info.value is error
        assert ctx.journal.executions[0].status == TaskStatus.FAILED
        assert ctx.journal.executions[0].error_message == "model unavailable"

    @pytest.mark.asyncio
    async def test_task_io_persisted_when_enabled(self, make_context, temp_workspace):
        ctx = make_context(
            executor=ScriptedExecutor({"echo-task": echo}),
            run_dir=temp_workspace / "run-test",
            persist_task_io=True,
        )

        await ctx.task(ECHO, {"n": 7})

        task_dir = temp_workspace / "run-test" / "tasks" / "effect-1"
        written_input = json.loads((task_dir / "input.json").read_text(encoding="utf-8"))
        written_result = json.loads((task_dir / "result.json").read_text(encoding="utf-8"))
        assert written_input["agent"]["prompt"]["context"] == {"n": 7}
        assert written_result["value"] == "echo-task:7"

    @pytest.mark.asyncio
    async def test_nothing_persisted_by_default(self, make_context, temp_workspace):
        ctx = make_context(run_dir=temp_workspace / "run-test")

        await ctx.task(ECHO, {"n": 1})

        assert not (temp_workspace / "run-test").exists()


class TestParallel:
    """Test ctx.parallel.all."""

    @pytest.mark.asyncio
    async def test_results_in_input_order(self, make_context):
        finished = []

        def record(descriptor):
            finished.append(descriptor.name)
            return echo(descriptor)

        executor = ScriptedExecutor(
            {"slow-task": record, "fast-task": record},
            delays={"slow-task": 0.05},
        )
        ctx = make_context(executor=executor)

        results = await ctx.parallel.all([
            lambda: ctx.task(SLOW, {"n": 1}),
            lambda: ctx.task(FAST, {"n": 2}),
        ])

        assert finished == ["fast-task", "slow-task"]
        assert [r["value"] for r in results] == ["slow-task:1", "fast-task:2"]

    @pytest.mark.asyncio
    async def test_accepts_awaitables(self, make_context):
        ctx = make_context(executor=ScriptedExecutor({"echo-task": echo}))

        results = await ctx.parallel.all([ctx.task(ECHO, {"n": i}) for i in range(3)])

        assert [r["value"] for r in results] == ["echo-task:0", "echo-task:1", "echo-task:2"]

    @pytest.mark.asyncio
    async def test_failure_propagates(self, make_context):
        def fail(descriptor):
            raise ExecutorError("profile failed")

        executor = ScriptedExecutor({"slow-task": echo, "fast-task": fail}, delays={"slow-task": 0.2})
        ctx = make_context(executor=executor)

        with pytest.raises(ExecutorError):
            await ctx.parallel.all([
                lambda: ctx.task(SLOW, {"n": 1}),
                lambda: ctx.task(FAST, {"n": 2}),
            ])

    @pytest.mark.asyncio
    async def test_empty_fan_out(self, make_context):
        assert await make_context().parallel.all([]) == []

    @pytest.mark.asyncio
    async def test_artifacts_collected_in_input_order(self, make_context):
        executor = ScriptedExecutor({"slow-task": echo, "fast-task": echo}, delays={"slow-task": 0.05})
        ctx = make_context(executor=executor)

        results = await ctx.parallel.all([
            lambda: ctx.task(SLOW, {"n": 1}),
            lambda: ctx.task(FAST, {"n": 2}),
        ])
        for result in results:
            ctx.artifacts.collect(result)

        assert [a.path for a in ctx.artifacts] == ["out/slow-task-1.md", "out/fast-task-2.md"]


class TestBreakpoints:
    """Test ctx.breakpoint."""

    @pytest.mark.asyncio
    async def test_records_resolution(self, make_context, reviewer):
        ctx = make_context()

        await ctx.breakpoint("Proceed?", "Charter Review", {"summary": {"objectives": 3}})

        assert reviewer.titles == ["Charter Review"]
        assert reviewer.requests[0].run_id == "run-test"
        assert reviewer.requests[0].summary == {"objectives": 3}
        record = ctx.breakpoints[0]
        assert record.resolution == BreakpointResolution.APPROVED
        assert record.question == "Proceed?"

    @pytest.mark.asyncio
    async def test_rejection_is_advisory(self, make_context):
        ctx = make_context(reviewer=RecordingReviewer(BreakpointResolution.REJECTED))

        await ctx.breakpoint("Proceed?", "Charter Review")
        result = await ctx.task(ECHO, {"n": 1})

        assert ctx.breakpoints[0].resolution == BreakpointResolution.REJECTED
        assert "Breakpoint 'Charter Review' was rejected; continuing" in ctx.run_log.messages("warning")
        assert "artifacts" in result

    @pytest.mark.asyncio
    async def test_pending_review_suspends_the_run(self, make_context):
        reviewer = PendingReviewer()
        ctx = make_context(reviewer=reviewer)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(ctx.breakpoint("Proceed?", "Never answered"), timeout=0.05)

        assert [r.title for r in reviewer.requests] == ["Never answered"]
        assert ctx.breakpoints == []

    @pytest.mark.asyncio
    async def test_store_receives_records(self, make_context, temp_workspace):
        store = BreakpointStore(temp_workspace / "runs")
        ctx = make_context(breakpoint_store=store)

        await ctx.breakpoint("Proceed?", "Charter Review")

        assert [r.title for r in store.list("run-test")] == ["Charter Review"]


class TestLogging:
    def test_log_entries_use_the_clock(self, make_context):
        ctx = make_context()

        ctx.log("info", "Starting")
        ctx.log("warn", "Gate failed")

        levels = [(e.level, e.message) for e in ctx.run_log.entries]
        assert levels == [("info", "Starting"), ("warning", "Gate failed")]
        assert ctx.run_log.entries[0].timestamp < ctx.run_log.entries[1].timestamp

    def test_unknown_level_rejected(self, make_context):
        with pytest.raises(ValueError):
            make_context().log("verbose", "nope")

    def test_clock_never_decreases(self, make_context):
        ctx = make_context()

        assert ctx.now() <= ctx.now()
