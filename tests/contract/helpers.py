"""Helper utilities for contract testing."""

from typing import Any, Dict


def resolve_schema(openapi_schema: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    """Resolve a $ref against components/schemas."""
    if "$ref" in schema:
        ref_name = schema["$ref"].split("/")[-1]
        return openapi_schema["components"]["schemas"][ref_name]
    return schema
