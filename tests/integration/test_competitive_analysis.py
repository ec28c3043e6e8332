"""
Integration tests for the competitive analysis and positioning process.
"""
import asyncio
import pytest

from process_library.core.exceptions import ValidationError
from process_library.processes.competitive_analysis import top_competitors
from process_library.testing import ScriptedExecutor, stub


PROCESS_ID = "product-management/competitive-analysis"


def competitor(name):
    return {"name": name, "description": f"{name} Inc.", "threatLevel": "high"}


LANDSCAPE = stub(
    totalCompetitors=7,
    directCompetitors=[competitor(n) for n in ("Alpha", "Bravo", "Charlie", "Delta")],
    indirectCompetitors=[competitor(n) for n in ("Echo", "Foxtrot", "Golf")],
    emergingCompetitors=[],
)


def profile(descriptor):
    context = descriptor.agent.context
    name = context["competitor"]["name"]
    respond = stub(competitorName=name)
    result = respond(descriptor)
    result["artifacts"] = [{"path": f"profiles/{context['competitorIndex']}-{name.lower()}.md"}]
    return result


class SlowFirstExecutor(ScriptedExecutor):
    """Earlier competitor profiles take longer, so they finish last"""

    async def execute(self, descriptor):
        if descriptor.name == "competitor-profiling":
            await asyncio.sleep(0.01 * (6 - descriptor.agent.context["competitorIndex"]))
        return await super().execute(descriptor)


@pytest.mark.integration
class TestCompetitiveAnalysis:
    """Run the competitive analysis process with scripted task results."""

    @pytest.mark.asyncio
    async def test_full_run_profiles_top_competitors(self, make_engine, reviewer):
        executor = SlowFirstExecutor({"competitor-identification": LANDSCAPE, "competitor-profiling": profile})
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {"productName": "Ledger"})

        assert result["success"] is True
        names = [p["competitorName"] for p in result["competitors"]["profiles"]]
        assert names == ["Alpha", "Bravo", "Charlie", "Echo", "Foxtrot"]
        assert executor.call_count("competitor-profiling") == 5
        titles = sorted(d.title for d in executor.calls if d.name == "competitor-profiling")
        assert titles == [f"Profile competitor {i}" for i in range(1, 6)]
        assert result["competitors"]["total"] == 7
        assert result["marketPositioningMap"] is not None
        assert reviewer.titles == [
            "Competitor Identification Review",
            "SWOT Analysis Review",
            "Final Competitive Analysis Review",
        ]
        assert result["metadata"]["processId"] == PROCESS_ID

    @pytest.mark.asyncio
    async def test_profile_artifacts_follow_input_order(self, make_engine):
        executor = SlowFirstExecutor({"competitor-identification": LANDSCAPE, "competitor-profiling": profile})
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {"productName": "Ledger"})

        paths = [a["path"] for a in result["artifacts"]]
        assert paths[:6] == [
            "competitor-identification.md",
            "profiles/1-alpha.md",
            "profiles/2-bravo.md",
            "profiles/3-charlie.md",
            "profiles/4-echo.md",
            "profiles/5-foxtrot.md",
        ]
        assert paths[6] == "feature-comparison.md"

    @pytest.mark.asyncio
    async def test_positioning_map_can_be_skipped(self, make_engine):
        executor = ScriptedExecutor({"competitor-identification": LANDSCAPE, "competitor-profiling": profile})
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {"productName": "Ledger", "generatePositioningMap": False})

        assert result["marketPositioningMap"] is None
        assert not executor.called("positioning-map")
        assert executor.last_call("competitive-intelligence-report").agent.context["positioningMap"] is None

    @pytest.mark.asyncio
    async def test_small_market(self, make_engine):
        landscape = stub(
            totalCompetitors=1,
            directCompetitors=[competitor("Solo")],
            indirectCompetitors=[],
            emergingCompetitors=[],
        )
        executor = ScriptedExecutor({"competitor-identification": landscape, "competitor-profiling": profile})
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {"productName": "Ledger"})

        assert executor.call_count("competitor-profiling") == 1
        assert [p["competitorName"] for p in result["competitors"]["profiles"]] == ["Solo"]

    @pytest.mark.asyncio
    async def test_unknown_analysis_depth(self, make_engine):
        with pytest.raises(ValidationError):
            await make_engine().run(PROCESS_ID, {"analysisDepth": "exhaustive"})

    def test_top_competitors(self):
        landscape = {
            "directCompetitors": ["d1", "d2", "d3", "d4"],
            "indirectCompetitors": ["i1", "i2", "i3"],
        }

        assert top_competitors(landscape) == ["d1", "d2", "d3", "i1", "i2"]
