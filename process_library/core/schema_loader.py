"""
Loader for YAML/JSON documents (config files, process inputs) with security checks.
Following Single Responsibility Principle - handles document loading only.
"""

from pathlib import Path
from typing import Dict, Any, cast
import json
import yaml

from .exceptions import ValidationError, SecurityError


def normalize_path(base: Path, relative_path: str) -> Path:
    """
    Resolve a path under a base directory, refusing anything that escapes it.

    Args:
        base: Base directory path
        relative_path: Relative path string

    Returns:
        Resolved absolute path

    Raises:
        SecurityError: If the path resolves outside `base`
    """
    base_resolved = base.resolve()
    try:
        target = (base / relative_path).resolve()
    except (ValueError, OSError) as e:
        raise SecurityError(f"Invalid path: '{relative_path}': {e}")

    if target != base_resolved and base_resolved not in target.parents:
        raise SecurityError(
            f"Path traversal detected: '{relative_path}' resolves outside base directory '{base}'"
        )
    return target


class SchemaLoader:
    """Loads mapping documents from disk"""

    # Maximum file size (10MB)
    MAX_FILE_SIZE = 10 * 1024 * 1024

    SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")

    @staticmethod
    def _check_file_size(file_path: Path) -> None:
        try:
            size = file_path.stat().st_size
        except OSError as e:
            raise SecurityError(f"Cannot access file '{file_path}': {e}")
        if size > SchemaLoader.MAX_FILE_SIZE:
            raise SecurityError(
                f"File '{file_path}' exceeds maximum size limit ({SchemaLoader.MAX_FILE_SIZE} bytes)"
            )

    @staticmethod
    def _read(file_path: Path) -> str:
        normalized_path = normalize_path(file_path.parent, file_path.name)
        SchemaLoader._check_file_size(normalized_path)
        try:
            return normalized_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(
                f"Failed to read {file_path}: {e}",
                field="file",
                value=str(file_path),
            )

    @staticmethod
    def load_yaml(file_path: Path) -> Dict[str, Any]:
        """Load a YAML mapping; an empty file yields an empty dict"""
        text = SchemaLoader._read(file_path)
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValidationError(
                f"Invalid YAML syntax in {file_path}: {e}",
                field="yaml",
                context={"file": str(file_path)}
            )
        if not isinstance(data, dict):
            raise ValidationError(
                f"YAML root must be a mapping in {file_path}",
                field="yaml",
                context={"file": str(file_path)}
            )
        return cast(Dict[str, Any], data)

    @staticmethod
    def load_json(file_path: Path) -> Dict[str, Any]:
        """Load a JSON object"""
        text = SchemaLoader._read(file_path)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid JSON syntax in {file_path}: {e}",
                field="json",
                context={"file": str(file_path)}
            )
        if not isinstance(data, dict):
            raise ValidationError(
                f"JSON root must be an object in {file_path}",
                field="json",
                context={"file": str(file_path)}
            )
        return cast(Dict[str, Any], data)

    @staticmethod
    def load(file_path: Path) -> Dict[str, Any]:
        """Load a YAML or JSON file, chosen by suffix"""
        file_path = Path(file_path)
        if file_path.suffix in (".yaml", ".yml"):
            return SchemaLoader.load_yaml(file_path)
        if file_path.suffix == ".json":
            return SchemaLoader.load_json(file_path)
        raise ValidationError(
            f"Unsupported file format: {file_path.suffix}",
            field="format",
            value=file_path.suffix,
            context={"supported_formats": list(SchemaLoader.SUPPORTED_SUFFIXES)}
        )
