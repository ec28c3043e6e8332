"""
Base utilities for CLI commands.
"""

import dataclasses
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.config import EngineConfig, load_inputs
from ..core.exceptions import ValidationError
from ..core.run_log import configure_logging


def _workspace(args) -> Path:
    return Path(getattr(args, 'workspace', None) or ".").resolve()


def _load_config(args, **overrides: Any) -> EngineConfig:
    """Load workspace config, then apply command-line overrides that were given"""
    config = EngineConfig.load(_workspace(args))
    log_level = getattr(args, 'log_level', None)
    if log_level:
        overrides["log_level"] = log_level
    given = {k: v for k, v in overrides.items() if v is not None}
    if given:
        config = dataclasses.replace(config, **given)
    configure_logging(config.log_level)
    return config


def parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """
    Parse `key=value` pairs; values are read as YAML scalars or collections.

    Raises:
        ValidationError: If an assignment has no '='
    """
    parsed: Dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        if not sep or not key.strip():
            raise ValidationError("Expected KEY=VALUE", field="--set", value=assignment)
        try:
            parsed[key.strip()] = yaml.safe_load(raw) if raw.strip() else ""
        except yaml.YAMLError:
            parsed[key.strip()] = raw
    return parsed


def _collect_inputs(inputs_file: Optional[str], assignments: List[str]) -> Dict[str, Any]:
    inputs: Dict[str, Any] = {}
    if inputs_file:
        inputs.update(load_inputs(Path(inputs_file)))
    inputs.update(parse_assignments(assignments))
    return inputs
