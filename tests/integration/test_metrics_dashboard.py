"""
Integration tests for the product metrics dashboard setup process.
"""
import pytest

from process_library.core.enums import RunStatus
from process_library.core.exceptions import ValidationError
from process_library.processes.metrics_dashboard import DESIGN_GATE, TASKS, count_severity
from process_library.testing import ScriptedExecutor, stub


PROCESS_ID = "product-management/metrics-dashboard"

NORTH_STAR = {
    "metric": "Weekly active teams",
    "definition": "Teams with at least one report viewed in the week",
    "rationale": "Tracks delivered value",
    "calculationFormula": "count(distinct team_id)",
    "target": "1,200 by Q4",
}


def alert(alert_id, severity):
    return {
        "alertId": alert_id,
        "alertName": f"{alert_id} alert",
        "kpiId": "kpi-1",
        "condition": "drops 20% week over week",
        "severity": severity,
    }


def responses(readiness=90, **extra):
    scripted = {
        "kpi-identification": stub(northStarMetric=NORTH_STAR),
        "implementation-spec": stub(readinessScore=readiness, estimatedImplementationTime="6 weeks"),
    }
    scripted.update(extra)
    return scripted


@pytest.mark.integration
class TestMetricsDashboard:
    """Run the metrics dashboard process with scripted task results."""

    @pytest.mark.asyncio
    async def test_full_run(self, make_engine, reviewer):
        executor = ScriptedExecutor(responses(**{
            "alert-configuration": stub(alerts=[
                alert("a1", "critical"), alert("a2", "warning"), alert("a3", "warning"), alert("a4", "info"),
            ]),
        }))
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {"productName": "Pulse", "dashboardType": "executive"})

        assert result["success"] is True
        assert result["readinessScore"] == 90
        assert result["implementationReady"] is True
        assert result["northStarMetric"] == {
            "metric": NORTH_STAR["metric"],
            "definition": NORTH_STAR["definition"],
            "target": NORTH_STAR["target"],
        }
        assert result["alerts"]["total"] == 4
        assert result["alerts"]["critical"] == 1
        assert result["alerts"]["warning"] == 2
        assert result["metadata"] == {
            "processId": PROCESS_ID,
            "timestamp": result["metadata"]["timestamp"],
            "dashboardType": "executive",
            "refreshFrequency": "real-time",
            "version": "1.0.0",
        }
        assert executor.call_order() == [t.name for t in TASKS]
        assert reviewer.titles == ["KPI Framework Review", "Dashboard Design Review", "Dashboard Setup Approval"]
        assert len(result["artifacts"]) == 11

    @pytest.mark.asyncio
    async def test_task_titles_name_the_product(self, make_engine):
        executor = ScriptedExecutor(responses())
        engine = make_engine(executor=executor)

        await engine.run(PROCESS_ID, {"productName": "Pulse"})

        assert executor.calls[0].title == "Phase 1: KPI Identification and North Star Metric Definition - Pulse"
        assert all(d.title.endswith("- Pulse") for d in executor.calls)

    @pytest.mark.asyncio
    async def test_reviews_list_fixed_files(self, make_engine, reviewer):
        engine = make_engine(responses())

        await engine.run(PROCESS_ID, {"productName": "Pulse"})

        kpi_review = reviewer.requests[0]
        assert kpi_review.files == [{"path": "artifacts/phase1-kpi-framework.json", "format": "json"}]
        assert [f["path"] for f in reviewer.requests[-1].files] == [
            "artifacts/final-dashboard-specification.json",
            "artifacts/final-implementation-guide.md",
            "artifacts/final-user-guide.md",
        ]
        assert reviewer.requests[-1].summary["estimatedImplementationTime"] == "6 weeks"

    @pytest.mark.asyncio
    async def test_missing_kpis_fail_the_gate(self, make_engine, reviewer):
        executor = ScriptedExecutor(responses(**{
            "kpi-identification": stub(northStarMetric=NORTH_STAR, kpis=[]),
        }))
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {"productName": "Pulse"})

        assert result == {
            "success": False,
            "error": "KPI identification incomplete - North Star Metric or KPIs not defined",
            "phase": "kpi-identification",
            "recommendation": "Define a North Star Metric and at least one KPI before instrumentation",
            "dashboard": None,
        }
        assert executor.call_order() == ["kpi-identification"]
        assert reviewer.requests == []
        assert engine.runs[0].status == RunStatus.GATE_FAILED

    @pytest.mark.asyncio
    async def test_blank_north_star_fails_the_gate(self, make_engine):
        blank = dict(NORTH_STAR, metric="")
        engine = make_engine(responses(**{"kpi-identification": stub(northStarMetric=blank)}))

        result = await engine.run(PROCESS_ID, {"productName": "Pulse"})

        assert result["success"] is False
        assert result["phase"] == "kpi-identification"

    @pytest.mark.asyncio
    async def test_empty_design_fails_the_gate(self, make_engine, reviewer):
        executor = ScriptedExecutor(responses(**{"dashboard-design": stub(visualizations=[])}))
        engine = make_engine(executor=executor)

        result = await engine.run(PROCESS_ID, {"productName": "Pulse"})

        assert result["success"] is False
        assert result["error"] == "Dashboard design incomplete"
        assert result["phase"] == "dashboard-design"
        assert result["dashboard"] is None
        assert executor.call_order() == ["kpi-identification", "instrumentation-planning", "dashboard-design"]
        assert reviewer.titles == ["KPI Framework Review"]

    @pytest.mark.asyncio
    async def test_layout_without_sections_passes_the_gate(self, make_engine, reviewer):
        layout = {"type": "single-page", "sections": []}
        engine = make_engine(responses(**{"dashboard-design": stub(layout=layout)}))

        result = await engine.run(PROCESS_ID, {"productName": "Pulse"})

        assert result["success"] is True
        assert result["dashboard"]["sections"] == 0
        assert "Dashboard Design Review" in reviewer.titles

    def test_design_gate_needs_layout_and_visualization(self):
        viz = {"vizId": "v1", "kpiId": "kpi-1", "visualizationType": "line", "section": "s1"}

        assert DESIGN_GATE.evaluate({"layout": {"type": "tabbed", "sections": []}, "visualizations": [viz]}) is None
        assert DESIGN_GATE.evaluate({"layout": {}, "visualizations": [viz]})["phase"] == "dashboard-design"
        assert DESIGN_GATE.evaluate({"visualizations": [viz]})["success"] is False

    @pytest.mark.asyncio
    async def test_null_metrics_scope_uses_default(self, make_engine):
        engine = make_engine(responses())

        result = await engine.run(PROCESS_ID, {"productName": "Pulse", "metricsScope": None})

        assert result["success"] is True
        ctx = engine.contexts[engine.runs[0].run_id]
        assert ctx.run_log.messages("info")[1] == (
            "Dashboard Type: operational, Metrics Scope: acquisition, activation, retention, revenue, satisfaction"
        )

    @pytest.mark.asyncio
    async def test_warning_when_no_critical_alerts(self, make_engine, reviewer):
        engine = make_engine(responses(**{
            "alert-configuration": stub(alerts=[alert("a1", "warning"), alert("a2", "info")]),
        }))

        result = await engine.run(PROCESS_ID, {"productName": "Pulse"})

        assert result["success"] is True
        assert result["alerts"]["critical"] == 0
        assert reviewer.titles == [
            "KPI Framework Review",
            "Dashboard Design Review",
            "Alert Configuration Warning",
            "Dashboard Setup Approval",
        ]
        warning = reviewer.requests[2]
        assert warning.summary["recommendation"] == (
            "Add critical alerts for North Star Metric and key business metrics"
        )
        ctx = engine.contexts[engine.runs[0].run_id]
        assert "No critical alerts configured" in ctx.run_log.messages("warning")

    @pytest.mark.asyncio
    async def test_readiness_below_threshold(self, make_engine, reviewer):
        engine = make_engine(responses(readiness=84))

        result = await engine.run(PROCESS_ID, {"productName": "Pulse"})

        assert result["implementationReady"] is False
        assert "May need additional refinement." in reviewer.requests[-1].question

    @pytest.mark.asyncio
    async def test_unknown_dashboard_type(self, make_engine):
        with pytest.raises(ValidationError):
            await make_engine().run(PROCESS_ID, {"productName": "Pulse", "dashboardType": "wallboard"})

    @pytest.mark.asyncio
    async def test_unknown_refresh_frequency(self, make_engine):
        with pytest.raises(ValidationError):
            await make_engine().run(PROCESS_ID, {"productName": "Pulse", "refreshFrequency": "monthly"})

    def test_count_severity(self):
        alerts = [alert("a1", "critical"), alert("a2", "critical"), {"alertId": "a3"}]

        assert count_severity(alerts, "critical") == 2
        assert count_severity(alerts, "info") == 0
