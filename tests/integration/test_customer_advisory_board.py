"""
Integration tests for the Customer Advisory Board setup process.
"""
import pytest

from process_library.core.enums import BreakpointResolution, RunStatus
from process_library.core.exceptions import TaskValidationError, ValidationError
from process_library.processes.customer_advisory_board import TASKS, customer_advisory_board
from process_library.testing import RecordingReviewer, ScriptedExecutor, stub


PROCESS_ID = "product-management/customer-advisory-board"

REVIEWS = [
    "CAB Foundation Review",
    "Program Structure Review",
    "Engagement Framework Review",
    "CAB Program Readiness Review",
]


def responses(readiness=90):
    return {
        "meeting-cadence": stub(annualMeetings=12),
        "program-playbook": stub(playbookPath="cab-output/playbook.md"),
        "program-validation": stub(readinessScore=readiness, reportPath="cab-output/validation-report.md"),
    }


@pytest.mark.integration
class TestCustomerAdvisoryBoard:
    """Run the CAB process end to end with scripted task results."""

    @pytest.mark.asyncio
    async def test_full_run(self, make_engine, reviewer):
        executor = ScriptedExecutor(responses())
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {
            "productName": "Acme Analytics",
            "boardSize": 8,
            "meetingFrequency": "monthly",
        })

        assert result["success"] is True
        assert result["productName"] == "Acme Analytics"
        assert result["programStructure"]["boardSize"] == 8
        assert result["programStructure"]["meetingFrequency"] == "monthly"
        assert result["meetingStructure"]["annualMeetings"] == 12
        assert result["readinessScore"] == 90
        assert result["programReady"] is True
        assert result["playbookPath"] == "cab-output/playbook.md"
        assert result["metadata"]["processId"] == PROCESS_ID
        assert result["metadata"]["boardSize"] == 8
        assert result["metadata"]["compensationModel"] == "mixed"
        assert result["duration"] > 0

        assert executor.call_order() == [t.name for t in TASKS]
        assert reviewer.titles == REVIEWS
        assert engine.runs[0].status == RunStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_artifacts_in_task_order(self, make_engine):
        engine = make_engine(responses())

        result = await engine.run(PROCESS_ID, {"productName": "Acme"})

        assert [a["path"] for a in result["artifacts"]] == [f"{t.name}.md" for t in TASKS]

    @pytest.mark.asyncio
    async def test_final_review_lists_playbook_and_report(self, make_engine, reviewer):
        engine = make_engine(responses())

        await engine.run(PROCESS_ID, {"productName": "Acme"})

        final = reviewer.requests[-1]
        assert [f["path"] for f in final.files] == ["cab-output/playbook.md", "cab-output/validation-report.md"]
        assert final.summary["readinessScore"] == 90
        assert final.summary["totalArtifacts"] == 14
        assert "Ready to launch!" in final.question

    @pytest.mark.asyncio
    async def test_earlier_reviews_list_artifacts_so_far(self, make_engine, reviewer):
        engine = make_engine(responses())

        await engine.run(PROCESS_ID, {"productName": "Acme"})

        first = reviewer.requests[0]
        assert [f["path"] for f in first.files] == ["cab-charter-definition.md", "member-selection-criteria.md"]
        assert first.context["runId"] == engine.runs[0].run_id

    @pytest.mark.asyncio
    async def test_readiness_below_threshold(self, make_engine, reviewer):
        engine = make_engine(responses(readiness=84))

        result = await engine.run(PROCESS_ID, {"productName": "Acme"})

        assert result["success"] is True
        assert result["programReady"] is False
        assert "May need adjustments before launch." in reviewer.requests[-1].question

    @pytest.mark.asyncio
    async def test_rejections_do_not_stop_the_run(self, make_engine):
        engine = make_engine(responses(), reviewer=RecordingReviewer(BreakpointResolution.REJECTED))

        result = await engine.run(PROCESS_ID, {"productName": "Acme"})

        assert result["success"] is True
        ctx = engine.contexts[engine.runs[0].run_id]
        assert [b.resolution for b in ctx.breakpoints] == [BreakpointResolution.REJECTED] * 4

    @pytest.mark.asyncio
    async def test_inputs_forwarded_to_tasks(self, make_engine):
        executor = ScriptedExecutor(responses())
        engine = make_engine(executor=executor)

        await engine.run(customer_advisory_board, {"productName": "Acme", "requireNDA": False})

        assert executor.last_call("recruitment-process").agent.context["requireNDA"] is False
        assert executor.last_call("value-exchange").agent.context["compensationModel"] == "mixed"

    @pytest.mark.asyncio
    async def test_invalid_compensation_model(self, make_engine):
        executor = ScriptedExecutor(responses())
        engine = make_engine(executor=executor)

        with pytest.raises(ValidationError):
            await engine.run(PROCESS_ID, {"productName": "Acme", "compensationModel": "equity"})

        assert executor.calls == []
        assert engine.runs[0].status == RunStatus.FAILED

    @pytest.mark.asyncio
    async def test_empty_artifact_path_fails_the_task(self, make_engine):
        scripted = responses()
        scripted["cab-charter-definition"] = stub(artifacts=[{"path": ""}])
        engine = make_engine(scripted)

        with pytest.raises(TaskValidationError) as exc_info:
            await engine.run(PROCESS_ID, {"productName": "Acme"})

        assert exc_info.value.task_name == "cab-charter-definition"
        assert [v.path for v in exc_info.value.violations] == ["artifacts[0].path"]
        assert engine.runs[0].status == RunStatus.FAILED

    @pytest.mark.asyncio
    async def test_null_board_size_uses_default(self, make_engine):
        engine = make_engine(responses())

        result = await engine.run(PROCESS_ID, {"productName": "Acme", "boardSize": None})

        assert result["programStructure"]["boardSize"] == 12
