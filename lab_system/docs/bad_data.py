"""
Bad-data synthesis for validation-error documentation examples.

``synthesize`` walks a schema node tree and builds a value that the matching
validator should reject.  Values are fixed, never random, so the same schema
always produces the same documentation example.
"""

from itertools import islice
from typing import Any

from lab_system.core.config import settings
from lab_system.docs.schema_nodes import (
    ArrayNode,
    BooleanNode,
    EnumNode,
    Format,
    IntegerOnly,
    Maximum,
    MaxLength,
    Minimum,
    MinLength,
    NullableNode,
    NumberNode,
    ObjectNode,
    OptionalNode,
    SchemaNode,
    StringNode,
    UnionNode,
)

MAX_EXAMPLE_FIELDS = settings.ERROR_EXAMPLE_MAX_FIELDS

# Fixed invalid values, one per rule.
INVALID_FORMATS = {
    "email": "invalid-email",
    "url": "invalid-url",
    "uuid": "invalid-uuid",
}
NOT_A_STRING = 123
NOT_AN_INTEGER = 1.5
NOT_A_NUMBER = "not-a-number"
NOT_A_BOOLEAN = "not-boolean"
NOT_AN_ENUM_VALUE = "invalid-enum-value"
UNION_MARKER = {"invalidUnionValue": True}


def _bad_string(node: StringNode) -> Any:
    for constraint in node.constraints:
        if isinstance(constraint, Format):
            return INVALID_FORMATS[constraint.kind]
        if isinstance(constraint, MinLength):
            return ""
        if isinstance(constraint, MaxLength):
            return "a" * (constraint.value + 1)
    return NOT_A_STRING


def _bad_number(node: NumberNode) -> Any:
    for constraint in node.constraints:
        if isinstance(constraint, Minimum):
            return constraint.value - 1
        if isinstance(constraint, Maximum):
            return constraint.value + 1
        if isinstance(constraint, IntegerOnly):
            return NOT_AN_INTEGER
    return NOT_A_NUMBER


def synthesize(node: SchemaNode, max_fields: int = MAX_EXAMPLE_FIELDS) -> Any:
    """
    Build a value expected to fail validation against ``node``.

    Only the first matching constraint of a string or number node is used.
    Objects are limited to their first ``max_fields`` declared fields; the
    rest are left out.  Unrecognised node kinds produce ``None``.
    """
    if isinstance(node, StringNode):
        return _bad_string(node)
    if isinstance(node, NumberNode):
        return _bad_number(node)
    if isinstance(node, BooleanNode):
        return NOT_A_BOOLEAN
    if isinstance(node, EnumNode):
        return NOT_AN_ENUM_VALUE
    if isinstance(node, ArrayNode):
        return [synthesize(node.element, max_fields)]
    if isinstance(node, ObjectNode):
        return {
            name: synthesize(child, max_fields)
            for name, child in islice(node.fields, max_fields)
        }
    if isinstance(node, (OptionalNode, NullableNode)):
        return synthesize(node.inner, max_fields)
    if isinstance(node, UnionNode):
        return dict(UNION_MARKER)
    return None
