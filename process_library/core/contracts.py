"""
Builders for output contracts.

Contracts are plain schema dicts; these helpers only keep the catalog's
hundreds of them short:

    obj("purpose", "vision", require=["purpose"], objectives=array(obj("objective")))
"""

from typing import Any, Dict, Iterable, Optional


Schema = Dict[str, Any]


def string() -> Schema:
    return {"type": "string"}


def number(minimum: Optional[float] = None, maximum: Optional[float] = None) -> Schema:
    schema: Schema = {"type": "number"}
    if minimum is not None:
        schema["minimum"] = minimum
    if maximum is not None:
        schema["maximum"] = maximum
    return schema


def score() -> Schema:
    """A 0-100 score"""
    return number(0, 100)


def boolean() -> Schema:
    return {"type": "boolean"}


def enum(*values: str) -> Schema:
    return {"type": "string", "enum": list(values)}


def array(items: Optional[Schema] = None, min_items: Optional[int] = None,
          max_items: Optional[int] = None) -> Schema:
    schema: Schema = {"type": "array", "items": items or string()}
    if min_items is not None:
        schema["minItems"] = min_items
    if max_items is not None:
        schema["maxItems"] = max_items
    return schema


def strings(min_items: Optional[int] = None) -> Schema:
    return array(string(), min_items=min_items)


def obj(*names: str, require: Iterable[str] = (), **properties: Schema) -> Schema:
    """
    Object contract.

    Args:
        names: Property names typed as plain strings
        require: Names that must be present
        properties: Typed properties
    """
    props: Dict[str, Schema] = {name: string() for name in names}
    props.update(properties)
    schema: Schema = {"type": "object", "properties": props}
    required = list(require)
    if required:
        schema["required"] = required
    return schema


def mapping(values: Optional[Schema] = None) -> Schema:
    """Object with free-form keys"""
    return {"type": "object", "additionalProperties": values or string()}
