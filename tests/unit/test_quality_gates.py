"""
Unit tests for QualityGate.
"""
import pytest

from process_library.core.exceptions import ValidationError
from process_library.core.quality_gates import QualityGate, gate_failure


JOB_GATE = QualityGate(
    phase="job-identification",
    check=lambda result: len(result["jobs"]) >= 3,
    error=lambda result: f"Insufficient jobs identified. Found: {len(result['jobs'])}, minimum: 3",
    recommendation="Conduct additional customer research",
    details=lambda result: {"jobsFound": len(result["jobs"])},
)


class TestQualityGate:
    """Test gate evaluation."""

    def test_passing_gate_returns_none(self):
        assert JOB_GATE.evaluate({"jobs": ["a", "b", "c"]}) is None
        assert JOB_GATE.passes({"jobs": ["a", "b", "c"]})

    def test_failing_gate_returns_payload(self):
        failure = JOB_GATE.evaluate({"jobs": ["a"]})

        assert failure == {
            "success": False,
            "error": "Insufficient jobs identified. Found: 1, minimum: 3",
            "phase": "job-identification",
            "recommendation": "Conduct additional customer research",
            "jobsFound": 1,
        }

    def test_static_details(self):
        gate = QualityGate(
            phase="dashboard-design",
            check=lambda result: bool(result["visualizations"]),
            error="Dashboard design incomplete",
            recommendation="Add visualizations",
            details={"dashboard": None},
        )

        failure = gate.evaluate({"visualizations": []})
        assert failure["error"] == "Dashboard design incomplete"
        assert failure["dashboard"] is None

    def test_details_not_shared_between_failures(self):
        gate = QualityGate("p", lambda r: False, "e", "r", details={"items": None})
        first = gate.evaluate({})
        first["items"] = "changed"

        assert gate.evaluate({})["items"] is None

    def test_check_must_be_callable(self):
        with pytest.raises(ValidationError):
            QualityGate(phase="p", check=True, error="e", recommendation="r")

    def test_gate_failure_builder(self):
        assert gate_failure("Too few jobs", "job-identification", "Research more", jobs=[]) == {
            "success": False,
            "error": "Too few jobs",
            "phase": "job-identification",
            "recommendation": "Research more",
            "jobs": [],
        }
