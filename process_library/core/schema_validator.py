"""
Schema validator for task output contracts.
Following Single Responsibility Principle - validates values against schemas only.

Contracts use a closed subset of JSON Schema:
    {type: object|array|string|number|boolean, properties?, required?, items?,
     enum?, minimum?, maximum?, minItems?, maxItems?, additionalProperties?}

One generic recursive validator serves every task contract in the catalog.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Union

import jsonschema
from jsonschema import Draft7Validator

from .exceptions import SchemaConfigError, TaskValidationError


SUPPORTED_TYPES = ("object", "array", "string", "number", "boolean")

PathPart = Union[str, int]


@dataclass(frozen=True)
class SchemaViolation:
    """A single failed rule at a single path"""
    path: str
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message}"


@dataclass
class ValidationResult:
    """Outcome of validating one value; an empty violation list means valid"""
    violations: List[SchemaViolation] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def paths(self) -> List[str]:
        return [v.path for v in self.violations]

    def by_rule(self, rule: str) -> List[SchemaViolation]:
        return [v for v in self.violations if v.rule == rule]


def format_path(parts: Iterable[PathPart]) -> str:
    """Render ['kpis', 2, 'thresholds', 'warning'] as 'kpis[2].thresholds.warning'"""
    rendered = ""
    for part in parts:
        if isinstance(part, int):
            rendered += f"[{part}]"
        elif rendered:
            rendered += f".{part}"
        else:
            rendered = str(part)
    return rendered


def _walk(schema: Any, path: Sequence[PathPart]) -> Iterator[Any]:
    """Yield (sub_schema, path) pairs depth-first, checking grammar on the way"""
    where = format_path(path) or "<root>"
    if not isinstance(schema, dict):
        raise SchemaConfigError(
            f"Schema at {where} must be a mapping",
            field=where,
            value=type(schema).__name__,
        )

    schema_type = schema.get("type")
    if schema_type is not None and schema_type not in SUPPORTED_TYPES:
        raise SchemaConfigError(
            f"Unknown schema type at {where}",
            field=where,
            value=schema_type,
            context={"supported_types": list(SUPPORTED_TYPES)},
        )

    for keyword in ("required", "enum"):
        if keyword in schema and not isinstance(schema[keyword], list):
            raise SchemaConfigError(f"'{keyword}' at {where} must be a list", field=where)

    yield schema, path

    properties = schema.get("properties")
    if properties is not None:
        if not isinstance(properties, dict):
            raise SchemaConfigError(f"'properties' at {where} must be a mapping", field=where)
        for name, sub_schema in properties.items():
            yield from _walk(sub_schema, [*path, name])

    items = schema.get("items")
    if items is not None:
        yield from _walk(items, [*path, 0])

    additional = schema.get("additionalProperties")
    if isinstance(additional, dict):
        yield from _walk(additional, [*path, "*"])


def check_schema(schema: Any) -> None:
    """
    Check that a schema belongs to the supported grammar.

    Raises:
        SchemaConfigError: If the schema is malformed
    """
    for _ in _walk(schema, []):
        pass
    try:
        Draft7Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise SchemaConfigError(
            f"Invalid schema: {e.message}",
            field=format_path(e.absolute_path) or None,
        )


def check_contract(schema: Any) -> None:
    """
    Check an output contract: valid grammar, and every object's `required`
    fields are declared in its `properties`.

    Raises:
        SchemaConfigError: If the contract is malformed
    """
    check_schema(schema)
    for sub_schema, path in _walk(schema, []):
        required = sub_schema.get("required") or []
        declared = set((sub_schema.get("properties") or {}).keys())
        undeclared = [name for name in required if name not in declared]
        if undeclared:
            where = format_path(path) or "<root>"
            raise SchemaConfigError(
                f"Required fields not declared in properties at {where}",
                field=where,
                value=undeclared,
            )


def _describe_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if value is None:
        return "null"
    return type(value).__name__


def _violations_from(error: jsonschema.ValidationError) -> Iterator[SchemaViolation]:
    base = list(error.absolute_path)
    rule = str(error.validator)

    if rule == "required":
        instance = error.instance if isinstance(error.instance, dict) else {}
        for name in error.validator_value:
            if name not in instance:
                yield SchemaViolation(
                    path=format_path([*base, name]),
                    rule="required",
                    message=f"missing required field '{name}'",
                )
        return

    if rule == "type":
        message = f"expected {error.validator_value}, got {_describe_type(error.instance)}"
    elif rule == "enum":
        message = f"{error.instance!r} is not one of {error.validator_value}"
    elif rule in ("minimum", "maximum"):
        bound = "at least" if rule == "minimum" else "at most"
        message = f"{error.instance!r} must be {bound} {error.validator_value}"
    elif rule in ("minItems", "maxItems"):
        bound = "at least" if rule == "minItems" else "at most"
        message = f"expected {bound} {error.validator_value} items, got {len(error.instance)}"
    elif rule == "minLength":
        message = f"expected at least {error.validator_value} characters, got {len(error.instance)}"
    else:
        message = error.message

    yield SchemaViolation(path=format_path(base), rule=rule, message=message)


def validate(value: Any, schema: Dict[str, Any]) -> ValidationResult:
    """
    Validate a value against a schema.

    Args:
        value: Arbitrary structured value (dict/list/scalar)
        schema: Schema in the supported grammar

    Returns:
        ValidationResult listing every violation (empty when valid)

    Raises:
        SchemaConfigError: If the schema itself is malformed
    """
    check_schema(schema)
    validator = Draft7Validator(schema)

    violations: List[SchemaViolation] = []
    seen = set()
    for error in validator.iter_errors(value):
        for violation in _violations_from(error):
            key = (violation.path, violation.rule)
            if key in seen:
                continue
            seen.add(key)
            violations.append(violation)
    return ValidationResult(violations)


def assert_valid(value: Any, schema: Dict[str, Any], subject: str) -> ValidationResult:
    """
    Validate and fail closed.

    Raises:
        TaskValidationError: If any violation is found
    """
    result = validate(value, schema)
    if not result.valid:
        raise TaskValidationError(subject, result.violations)
    return result
