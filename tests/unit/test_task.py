"""
Unit tests for task definitions and descriptors.
"""
import pytest

from process_library.core.contracts import obj, strings
from process_library.core.enums import TaskKind
from process_library.core.exceptions import SchemaConfigError, ValidationError
from process_library.core.models import TaskContext
from process_library.core.task import agent_task, define_task


def make_task(**overrides):
    kwargs = dict(
        title="Identify jobs",
        agent="jtbd-analyst",
        role="JTBD analyst",
        task="Identify the jobs customers hire the product for",
        instructions=["List functional jobs", "List emotional jobs"],
        output_format="JSON with jobs, artifacts",
        output_schema=obj(require=["jobs"], jobs=strings()),
        labels=["jtbd"],
    )
    kwargs.update(overrides)
    return agent_task("job-identification", **kwargs)


def ctx(effect_id="effect-1", name="job-identification"):
    return TaskContext(effect_id=effect_id, task_name=name)


class TestDefineTask:
    """Test define_task validation."""

    def test_name_must_be_kebab_case(self):
        with pytest.raises(ValidationError):
            define_task("Job_Identification", lambda args, c: None)

    def test_builder_must_be_callable(self):
        with pytest.raises(ValidationError):
            define_task("job-identification", "not a builder")

    def test_builder_must_return_descriptor(self):
        task = define_task("broken-task", lambda args, c: {"name": "broken-task"})

        with pytest.raises(ValidationError):
            task.build({}, ctx(name="broken-task"))

    def test_malformed_contract_rejected_at_build(self):
        task = make_task(output_schema=obj("jobs", require=["jobs", "undeclared"]))

        with pytest.raises(SchemaConfigError):
            task.build({}, ctx())


class TestAgentTask:
    """Test the agent task builder."""

    def test_descriptor_shape(self):
        descriptor = make_task().build({"productName": "Acme"}, ctx())

        assert descriptor.name == "job-identification"
        assert descriptor.kind == TaskKind.AGENT
        assert descriptor.title == "Identify jobs"
        assert descriptor.effect_id == "effect-1"
        assert descriptor.agent.name == "jtbd-analyst"
        assert descriptor.agent.context == {"productName": "Acme"}
        assert descriptor.labels == ["agent", "jtbd"]
        assert descriptor.io.input_json_path == "tasks/effect-1/input.json"
        assert descriptor.io.output_json_path == "tasks/effect-1/result.json"

    def test_artifacts_always_required(self):
        schema = make_task().build({}, ctx()).output_schema

        assert "artifacts" in schema["properties"]
        assert schema["required"] == ["jobs", "artifacts"]

    def test_declared_artifacts_not_duplicated(self):
        task = make_task(output_schema=obj(require=["artifacts"], artifacts=strings()))
        schema = task.build({}, ctx()).output_schema

        assert schema["required"] == ["artifacts"]
        assert schema["properties"]["artifacts"] == strings()

    def test_title_may_depend_on_args(self):
        task = make_task(title=lambda args: f"Profile competitor {args.get('competitorIndex')}")

        assert task.build({"competitorIndex": 2}, ctx()).title == "Profile competitor 2"

    def test_same_args_same_descriptor_except_effect_id(self):
        """Test that building is deterministic apart from the effect id."""
        task = make_task()
        first = task.build({"productName": "Acme"}, ctx("effect-1")).to_dict()
        second = task.build({"productName": "Acme"}, ctx("effect-2")).to_dict()

        for data in (first, second):
            data.pop("effectId")
            data.pop("io")
        assert first == second

    def test_args_are_copied(self):
        args = {"jobs": ["a"]}
        descriptor = make_task().build(args, ctx())
        args["jobs"].append("b")

        assert descriptor.agent.context == {"jobs": ["a"]}

    def test_contract_not_shared_between_descriptors(self):
        task = make_task()
        first = task.build({}, ctx("effect-1"))
        first.output_schema["properties"]["jobs"]["minItems"] = 5

        second = task.build({}, ctx("effect-2"))
        assert "minItems" not in second.output_schema["properties"]["jobs"]

    def test_wire_shape(self):
        data = make_task().build({"productName": "Acme"}, ctx()).to_dict()

        assert data["kind"] == "agent"
        assert data["effectId"] == "effect-1"
        assert data["agent"]["prompt"]["role"] == "JTBD analyst"
        assert data["agent"]["prompt"]["outputFormat"] == "JSON with jobs, artifacts"
        assert data["agent"]["outputSchema"]["required"] == ["jobs", "artifacts"]
        assert data["io"] == {
            "inputJsonPath": "tasks/effect-1/input.json",
            "outputJsonPath": "tasks/effect-1/result.json",
        }
