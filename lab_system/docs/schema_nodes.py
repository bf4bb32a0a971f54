"""
Structural description of validation rules.

Each node kind is its own frozen dataclass, so code that walks a schema
matches on node type instead of poking at a validation library's internals.
Constraints are stored as ordered tuples; their order is the order in which
they were declared on the field.

``node_from_type`` builds a node tree from a Pydantic model or any type
annotation Pydantic understands.
"""

import collections.abc
import enum
import types
import typing
import uuid
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Optional, Tuple, Union

import annotated_types
from pydantic import AnyUrl, BaseModel, EmailStr
from pydantic.fields import FieldInfo

# ────────────────────────────────────────────────────────────────────────────
# Constraints
# ────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MinLength:
    value: int


@dataclass(frozen=True)
class MaxLength:
    value: int


@dataclass(frozen=True)
class Format:
    kind: Literal["email", "url", "uuid"]


@dataclass(frozen=True)
class Minimum:
    value: Union[int, float]
    inclusive: bool = True


@dataclass(frozen=True)
class Maximum:
    value: Union[int, float]
    inclusive: bool = True


@dataclass(frozen=True)
class IntegerOnly:
    pass


StringConstraint = Union[MinLength, MaxLength, Format]
NumberConstraint = Union[Minimum, Maximum, IntegerOnly]


# ────────────────────────────────────────────────────────────────────────────
# Nodes
# ────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class StringNode:
    constraints: Tuple[StringConstraint, ...] = ()


@dataclass(frozen=True)
class NumberNode:
    constraints: Tuple[NumberConstraint, ...] = ()


@dataclass(frozen=True)
class BooleanNode:
    pass


@dataclass(frozen=True)
class EnumNode:
    values: Tuple[Any, ...]


@dataclass(frozen=True)
class ArrayNode:
    element: "SchemaNode"


@dataclass(frozen=True)
class ObjectNode:
    """Object with fields in declaration order."""

    fields: Tuple[Tuple[str, "SchemaNode"], ...]


@dataclass(frozen=True)
class OptionalNode:
    inner: "SchemaNode"


@dataclass(frozen=True)
class NullableNode:
    inner: "SchemaNode"


@dataclass(frozen=True)
class UnionNode:
    members: Tuple["SchemaNode", ...]


@dataclass(frozen=True)
class OtherNode:
    """A type with no dedicated node kind."""

    description: str = ""


SchemaNode = Union[
    StringNode,
    NumberNode,
    BooleanNode,
    EnumNode,
    ArrayNode,
    ObjectNode,
    OptionalNode,
    NullableNode,
    UnionNode,
    OtherNode,
]


# ────────────────────────────────────────────────────────────────────────────
# Building nodes from Pydantic types
# ────────────────────────────────────────────────────────────────────────────

_ARRAY_ORIGINS = (list, set, frozenset, collections.abc.Sequence, collections.abc.Set)


def _flatten_metadata(metadata: Iterable[Any]) -> Iterable[Any]:
    """Expand ``FieldInfo`` and grouped constraints into single constraints."""
    for item in metadata:
        if isinstance(item, FieldInfo):
            yield from _flatten_metadata(item.metadata)
        elif isinstance(item, annotated_types.GroupedMetadata):
            yield from _flatten_metadata(item)
        else:
            yield item


def _string_constraints(metadata: Iterable[Any]) -> Tuple[StringConstraint, ...]:
    constraints = []
    for item in _flatten_metadata(metadata):
        if isinstance(item, annotated_types.MinLen):
            constraints.append(MinLength(item.min_length))
        elif isinstance(item, annotated_types.MaxLen):
            constraints.append(MaxLength(item.max_length))
    return tuple(constraints)


def _number_constraints(metadata: Iterable[Any]) -> Tuple[NumberConstraint, ...]:
    constraints = []
    for item in _flatten_metadata(metadata):
        if isinstance(item, annotated_types.Ge):
            constraints.append(Minimum(item.ge))
        elif isinstance(item, annotated_types.Gt):
            constraints.append(Minimum(item.gt, inclusive=False))
        elif isinstance(item, annotated_types.Le):
            constraints.append(Maximum(item.le))
        elif isinstance(item, annotated_types.Lt):
            constraints.append(Maximum(item.lt, inclusive=False))
    return tuple(constraints)


def _is_subclass(tp: Any, parent: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, parent)


def node_from_model(model: type, _seen: Optional[frozenset] = None) -> SchemaNode:
    """Build an ``ObjectNode`` from a Pydantic model's fields."""
    seen = _seen or frozenset()
    if model in seen:
        return OtherNode(f"recursive reference to {model.__name__}")
    seen = seen | {model}

    fields = []
    for name, field in model.model_fields.items():
        node = node_from_type(field.annotation, field.metadata, _seen=seen)
        if not field.is_required():
            node = OptionalNode(node)
        fields.append((field.alias or name, node))
    return ObjectNode(tuple(fields))


def node_from_type(
    annotation: Any,
    metadata: Iterable[Any] = (),
    _seen: Optional[frozenset] = None,
) -> SchemaNode:
    """
    Build a schema node from a type annotation.

    ``metadata`` holds the constraints attached to the annotation (for
    model fields, ``FieldInfo.metadata``).  Constraints declared on an
    ``Optional[X]`` field apply to ``X``, as they do in Pydantic.
    """
    metadata = list(metadata)
    origin = typing.get_origin(annotation)

    if origin is typing.Annotated:
        inner, *extra = typing.get_args(annotation)
        return node_from_type(inner, [*extra, *metadata], _seen=_seen)

    if origin is Union or origin is types.UnionType:
        members = typing.get_args(annotation)
        non_null = [m for m in members if m is not type(None)]
        if len(non_null) == 1:
            inner = node_from_type(non_null[0], metadata, _seen=_seen)
        else:
            inner = UnionNode(tuple(node_from_type(m, _seen=_seen) for m in non_null))
        if len(non_null) < len(members):
            return NullableNode(inner)
        return inner

    if origin is Literal:
        return EnumNode(typing.get_args(annotation))

    if origin in _ARRAY_ORIGINS:
        args = typing.get_args(annotation)
        return ArrayNode(node_from_type(args[0] if args else Any, _seen=_seen))

    if annotation in (list, set, frozenset):
        return ArrayNode(OtherNode("Any"))

    if _is_subclass(annotation, EmailStr):
        return StringNode((Format("email"), *_string_constraints(metadata)))
    if _is_subclass(annotation, AnyUrl):
        return StringNode((Format("url"), *_string_constraints(metadata)))
    if annotation is uuid.UUID:
        return StringNode((Format("uuid"),))
    if annotation is str:
        return StringNode(_string_constraints(metadata))
    # bool is a subclass of int; check it first.
    if annotation is bool:
        return BooleanNode()
    if _is_subclass(annotation, enum.Enum):
        return EnumNode(tuple(member.value for member in annotation))
    if annotation is int:
        return NumberNode((*_number_constraints(metadata), IntegerOnly()))
    if annotation is float:
        return NumberNode(_number_constraints(metadata))
    if _is_subclass(annotation, BaseModel):
        return node_from_model(annotation, _seen=_seen)

    return OtherNode(getattr(annotation, "__name__", repr(annotation)))
