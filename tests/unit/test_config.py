"""
Unit tests for engine configuration and typed process inputs.
"""
import json
import pytest
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from process_library.core.config import (
    EngineConfig, ProcessInputs, alias, camel_to_snake, load_inputs, snake_to_camel
)
from process_library.core.exceptions import SecurityError, ValidationError
from process_library.processes.customer_advisory_board import CabInputs
from process_library.processes.jtbd_analysis import JtbdInputs
from process_library.processes.metrics_dashboard import DashboardInputs


@dataclass
class SampleInputs(ProcessInputs):
    product_name: str
    board_size: int = 12
    include_raci_matrix: bool = alias("includeRACIMatrix", default=True)
    program_goals: List[str] = field(default_factory=list)
    customer_base: Dict[str, Any] = field(default_factory=dict)


class TestEngineConfig:
    """Test EngineConfig loading."""

    def test_defaults(self, temp_workspace):
        config = EngineConfig.load(temp_workspace, environ={})

        assert config.runs_dir is None
        assert config.executor == "placeholder"
        assert config.log_level == "info"
        assert config.auto_approve is False

    def test_config_file(self, temp_workspace):
        (temp_workspace / ".process-library" / "config.yaml").write_text(
            "runs_dir: runs\nlog_level: DEBUG\nauto_approve: true\nllm:\n  provider: openai\n",
            encoding="utf-8",
        )

        config = EngineConfig.load(temp_workspace, environ={})

        assert config.runs_dir == temp_workspace / "runs"
        assert config.log_level == "debug"
        assert config.auto_approve is True
        assert config.llm == {"provider": "openai"}

    def test_environment_overrides_file(self, temp_workspace):
        (temp_workspace / ".process-library" / "config.yaml").write_text(
            "runs_dir: runs\nlog_level: debug\n", encoding="utf-8"
        )
        environ = {
            "PROCESS_LIBRARY_RUNS_DIR": str(temp_workspace / "elsewhere"),
            "PROCESS_LIBRARY_LOG_LEVEL": "error",
            "PROCESS_LIBRARY_EXECUTOR": "llm",
        }

        config = EngineConfig.load(temp_workspace, environ=environ)

        assert config.runs_dir == temp_workspace / "elsewhere"
        assert config.log_level == "error"
        assert config.executor == "llm"

    def test_unknown_key_warns(self, temp_workspace):
        with pytest.warns(UserWarning, match="Unknown config key 'colour'"):
            config = EngineConfig.from_dict({"colour": "blue"}, workspace=temp_workspace)

        assert config.executor == "placeholder"

    def test_invalid_values(self, temp_workspace):
        with pytest.raises(ValidationError):
            EngineConfig(log_level="loud")
        with pytest.raises(ValidationError):
            EngineConfig(executor="human")
        with pytest.raises(ValidationError):
            EngineConfig(llm=["openai"])

    def test_invalid_yaml(self, temp_workspace):
        (temp_workspace / ".process-library" / "config.yaml").write_text("runs_dir: [", encoding="utf-8")

        with pytest.raises(ValidationError):
            EngineConfig.load(temp_workspace, environ={})


class TestProcessInputs:
    """Test parsing of camelCase input mappings."""

    def test_camel_case_keys(self):
        inputs = SampleInputs.from_mapping({"productName": "Acme", "boardSize": 8, "programGoals": ["a"]})

        assert inputs.product_name == "Acme"
        assert inputs.board_size == 8
        assert inputs.program_goals == ["a"]
        assert inputs.include_raci_matrix is True

    def test_snake_case_and_alias_keys(self):
        inputs = SampleInputs.from_mapping({"product_name": "Acme", "includeRACIMatrix": False})

        assert inputs.product_name == "Acme"
        assert inputs.include_raci_matrix is False

    def test_missing_required(self):
        with pytest.raises(ValidationError) as exc_info:
            SampleInputs.from_mapping({"boardSize": 8})

        assert exc_info.value.field == "productName"

    def test_empty_required(self):
        with pytest.raises(ValidationError):
            SampleInputs.from_mapping({"productName": ""})

    def test_unknown_key_warns(self):
        with pytest.warns(UserWarning, match="Unknown input 'colour'"):
            SampleInputs.from_mapping({"productName": "Acme", "colour": "blue"})

    def test_wrong_shapes(self):
        with pytest.raises(ValidationError):
            SampleInputs.from_mapping({"productName": "Acme", "boardSize": "eight"})
        with pytest.raises(ValidationError):
            SampleInputs.from_mapping({"productName": "Acme", "boardSize": True})
        with pytest.raises(ValidationError):
            SampleInputs.from_mapping({"productName": "Acme", "programGoals": "grow"})
        with pytest.raises(ValidationError):
            SampleInputs.from_mapping({"productName": "Acme", "customerBase": ["smb"]})

    def test_null_optional_uses_default(self):
        inputs = SampleInputs.from_mapping({
            "productName": "Acme",
            "boardSize": None,
            "programGoals": None,
            "customerBase": None,
            "includeRACIMatrix": None,
        })

        assert inputs.board_size == 12
        assert inputs.program_goals == []
        assert inputs.customer_base == {}
        assert inputs.include_raci_matrix is True

    def test_null_required_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            SampleInputs.from_mapping({"productName": None})

        assert exc_info.value.field == "productName"

    @pytest.mark.parametrize("inputs_class,key,attribute,expected", [
        (DashboardInputs, "metricsScope", "metrics_scope",
         ["acquisition", "activation", "retention", "revenue", "satisfaction"]),
        (CabInputs, "boardSize", "board_size", 12),
        (JtbdInputs, "minimumJobCount", "minimum_job_count", 3),
    ])
    def test_null_in_catalog_inputs(self, inputs_class, key, attribute, expected):
        inputs = inputs_class.from_mapping({"productName": "Acme", key: None})

        assert getattr(inputs, attribute) == expected

    def test_inputs_must_be_mapping(self):
        with pytest.raises(ValidationError):
            SampleInputs.from_mapping(["productName"])

    def test_defaults_are_independent(self):
        first = SampleInputs.from_mapping({"productName": "A"})
        first.program_goals.append("x")

        assert SampleInputs.from_mapping({"productName": "B"}).program_goals == []

    def test_to_mapping_and_describe(self):
        inputs = SampleInputs.from_mapping({"productName": "Acme"})

        assert inputs.to_mapping()["includeRACIMatrix"] is True
        described = SampleInputs.describe_fields()
        assert described["productName"] == {"required": True}
        assert described["boardSize"] == {"required": False, "default": 12}
        assert list(described) == ["productName", "boardSize", "includeRACIMatrix", "programGoals", "customerBase"]

    def test_name_conversion(self):
        assert snake_to_camel("include_progress_mapping") == "includeProgressMapping"
        assert camel_to_snake("includeProgressMapping") == "include_progress_mapping"
        assert camel_to_snake("requireNDA") == "require_nda"


class TestLoadInputs:
    """Test inputs files."""

    def test_yaml(self, temp_workspace):
        path = temp_workspace / "inputs.yaml"
        path.write_text("productName: Acme\nboardSize: 8\n", encoding="utf-8")

        assert load_inputs(path) == {"productName": "Acme", "boardSize": 8}

    def test_json(self, temp_workspace):
        path = temp_workspace / "inputs.json"
        path.write_text(json.dumps({"productName": "Acme"}), encoding="utf-8")

        assert load_inputs(path) == {"productName": "Acme"}

    def test_unsupported_suffix(self, temp_workspace):
        path = temp_workspace / "inputs.txt"
        path.write_text("productName=Acme", encoding="utf-8")

        with pytest.raises(ValidationError):
            load_inputs(path)

    def test_root_must_be_mapping(self, temp_workspace):
        path = temp_workspace / "inputs.yaml"
        path.write_text("- productName\n", encoding="utf-8")

        with pytest.raises(ValidationError):
            load_inputs(path)

    def test_missing_file(self, temp_workspace):
        with pytest.raises(SecurityError):
            load_inputs(temp_workspace / "missing.yaml")
