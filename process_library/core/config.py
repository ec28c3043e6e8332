"""
Configuration: engine settings and typed process inputs.
Following Single Responsibility Principle - handles configuration parsing only.
"""

import dataclasses
import os
import re
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from .exceptions import ValidationError
from .run_log import LEVELS
from .schema_loader import SchemaLoader


CONFIG_DIR = ".process-library"
CONFIG_FILE = "config.yaml"

ENV_RUNS_DIR = "PROCESS_LIBRARY_RUNS_DIR"
ENV_LOG_LEVEL = "PROCESS_LIBRARY_LOG_LEVEL"
ENV_EXECUTOR = "PROCESS_LIBRARY_EXECUTOR"

EXECUTORS = ("placeholder", "llm")


@dataclass
class EngineConfig:
    """
    Engine settings.

    Priority: environment variables > config file > defaults.
    """
    runs_dir: Optional[Path] = None
    persist_task_io: bool = False
    log_level: str = "info"
    auto_approve: bool = False
    executor: str = "placeholder"
    llm: Dict[str, Any] = field(default_factory=dict)
    workspace: Path = field(default_factory=Path.cwd)

    def __post_init__(self):
        if self.runs_dir is not None:
            self.runs_dir = Path(self.runs_dir)
            if not self.runs_dir.is_absolute():
                self.runs_dir = Path(self.workspace) / self.runs_dir
        self.log_level = str(self.log_level).lower()
        if self.log_level not in LEVELS:
            raise ValidationError("Unknown log level", field="log_level", value=self.log_level,
                                  context={"allowed": sorted(LEVELS)})
        if self.executor not in EXECUTORS:
            raise ValidationError("Unknown executor", field="executor", value=self.executor,
                                  context={"allowed": list(EXECUTORS)})
        if not isinstance(self.llm, dict):
            raise ValidationError("'llm' section must be a mapping", field="llm")

    @property
    def config_file(self) -> Path:
        return Path(self.workspace) / CONFIG_DIR / CONFIG_FILE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], workspace: Optional[Path] = None) -> 'EngineConfig':
        """Build from a config mapping; unknown keys are warned about and ignored"""
        known = {f.name for f in dataclasses.fields(cls)} - {"workspace"}
        for key in data:
            if key not in known:
                warnings.warn(f"Unknown config key '{key}' ignored")
        kwargs = {k: v for k, v in data.items() if k in known}
        return cls(workspace=Path(workspace) if workspace else Path.cwd(), **kwargs)

    @classmethod
    def load(cls, workspace: Optional[Path] = None,
             environ: Optional[Mapping[str, str]] = None) -> 'EngineConfig':
        """
        Load `<workspace>/.process-library/config.yaml` and apply env overrides.

        Args:
            workspace: Workspace root (defaults to the current directory)
            environ: Environment mapping (defaults to os.environ)
        """
        workspace = Path(workspace) if workspace else Path.cwd()
        environ = os.environ if environ is None else environ

        config_file = workspace / CONFIG_DIR / CONFIG_FILE
        data: Dict[str, Any] = {}
        if config_file.exists():
            data = SchemaLoader.load_yaml(config_file)

        if environ.get(ENV_RUNS_DIR):
            data["runs_dir"] = environ[ENV_RUNS_DIR]
        if environ.get(ENV_LOG_LEVEL):
            data["log_level"] = environ[ENV_LOG_LEVEL]
        if environ.get(ENV_EXECUTOR):
            data["executor"] = environ[ENV_EXECUTOR]

        return cls.from_dict(data, workspace=workspace)


# ============================================================================
# Process inputs
# ============================================================================

def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def camel_to_snake(name: str) -> str:
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return name.lower()


def alias(name: str, **kwargs: Any) -> Any:
    """dataclasses.field() with an explicit camelCase input key"""
    metadata = dict(kwargs.pop("metadata", {}) or {})
    metadata["alias"] = name
    return field(metadata=metadata, **kwargs)


T = TypeVar("T", bound="ProcessInputs")


@dataclass
class ProcessInputs:
    """
    Base for typed process inputs.

    Subclasses declare snake_case dataclass fields; callers pass the
    camelCase keys processes are documented with. Fields without a default
    are required.
    """

    @classmethod
    def input_key(cls, f: dataclasses.Field) -> str:
        return f.metadata.get("alias") or snake_to_camel(f.name)

    @classmethod
    def from_mapping(cls: Type[T], data: Optional[Mapping[str, Any]] = None) -> T:
        """
        Parse a raw inputs mapping.

        Raises:
            ValidationError: If a required input is missing or a value has the wrong shape
        """
        if data is not None and not isinstance(data, Mapping):
            raise ValidationError("Process inputs must be a mapping", value=type(data).__name__)
        data = dict(data or {})

        lookup: Dict[str, dataclasses.Field] = {}
        for f in dataclasses.fields(cls):
            lookup[cls.input_key(f)] = f
            lookup[f.name] = f
            lookup[camel_to_snake(cls.input_key(f))] = f

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            f = lookup.get(key) or lookup.get(camel_to_snake(key))
            if f is None:
                warnings.warn(f"Unknown input '{key}' for {cls.__name__} ignored")
                continue
            kwargs[f.name] = value

        for f in dataclasses.fields(cls):
            required = f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
            if f.name not in kwargs:
                if required:
                    raise ValidationError(
                        f"Missing required input '{cls.input_key(f)}'",
                        field=cls.input_key(f),
                        context={"inputs": cls.__name__},
                    )
                continue
            if required and kwargs[f.name] in (None, ""):
                raise ValidationError(
                    f"Required input '{cls.input_key(f)}' must not be empty",
                    field=cls.input_key(f),
                )
            if kwargs[f.name] is None:
                # null stands for "not given": the default applies
                del kwargs[f.name]
                continue
            cls._check_shape(f, kwargs[f.name])

        return cls(**kwargs)

    @classmethod
    def _check_shape(cls, f: dataclasses.Field, value: Any) -> None:
        if f.default is not dataclasses.MISSING:
            sample = f.default
        elif f.default_factory is not dataclasses.MISSING:
            sample = f.default_factory()
        else:
            return

        expected: Optional[type] = None
        if isinstance(sample, bool):
            expected = bool
        elif isinstance(sample, list):
            expected = list
        elif isinstance(sample, dict):
            expected = dict
        elif isinstance(sample, (int, float)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError("Input must be a number", field=cls.input_key(f), value=value)
            return
        if expected is not None and not isinstance(value, expected):
            raise ValidationError(
                f"Input must be a {expected.__name__}",
                field=cls.input_key(f),
                value=value,
            )

    def to_mapping(self) -> Dict[str, Any]:
        """camelCase view, as echoed in result metadata"""
        return {
            self.input_key(f): getattr(self, f.name)
            for f in dataclasses.fields(self)
        }

    @classmethod
    def describe_fields(cls) -> Dict[str, Dict[str, Any]]:
        """Input keys with their defaults, for catalog listings"""
        described: Dict[str, Dict[str, Any]] = {}
        for f in dataclasses.fields(cls):
            entry: Dict[str, Any] = {"required": True}
            if f.default is not dataclasses.MISSING:
                entry = {"required": False, "default": f.default}
            elif f.default_factory is not dataclasses.MISSING:
                entry = {"required": False, "default": f.default_factory()}
            described[cls.input_key(f)] = entry
        return described


def load_inputs(path: Path) -> Dict[str, Any]:
    """Load a process inputs file (YAML or JSON mapping)"""
    return SchemaLoader.load(Path(path))
