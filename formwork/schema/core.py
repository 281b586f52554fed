"""
Descriptor classes for the formwork schema algebra.

Every descriptor is an immutable dataclass. Composite descriptors hold their
children directly, except for deferred references (LazyType and lazily
declared ObjectTypes) which hold a zero-argument callable that is resolved
the first time the validation engine reaches them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Any, Callable, Mapping, Union as TypingUnion

from ..errors import SchemaDefinitionError

logger = logging.getLogger(__name__)

LITERAL_KINDS = (bool, int, float, str)


class Descriptor:
    """Base class for every schema node."""

    __slots__ = ()

    def __repr__(self) -> str:
        return describe(self)


@dataclass(frozen=True, slots=True, repr=False)
class NumberType(Descriptor):
    """Any finite number."""


@dataclass(frozen=True, slots=True, repr=False)
class IntType(Descriptor):
    """A number with no fractional part."""


@dataclass(frozen=True, slots=True, repr=False)
class FloatType(Descriptor):
    """Validated exactly like NumberType."""


@dataclass(frozen=True, slots=True, repr=False)
class StringType(Descriptor):
    pass


@dataclass(frozen=True, slots=True, repr=False)
class BooleanType(Descriptor):
    pass


@dataclass(frozen=True, slots=True, repr=False)
class IDType(Descriptor):
    """A non-empty string."""


@dataclass(frozen=True, slots=True, repr=False)
class JsonType(Descriptor):
    """Anything expressible in the JSON data model."""


@dataclass(frozen=True, slots=True, repr=False)
class AnyType(Descriptor):
    """Accepts every value unchanged."""


@dataclass(frozen=True, slots=True, repr=False)
class LiteralType(Descriptor):
    value: bool | int | float | str


@dataclass(frozen=True, slots=True, repr=False)
class ListType(Descriptor):
    item: Descriptor


@dataclass(frozen=True, slots=True, repr=False)
class NullableType(Descriptor):
    inner: Descriptor


@dataclass(frozen=True, slots=True, repr=False)
class RecordType(Descriptor):
    value: Descriptor


@dataclass(frozen=True, slots=True, repr=False)
class UnionType(Descriptor):
    members: tuple[Descriptor, ...]


@dataclass(frozen=True, slots=True, repr=False)
class IntersectType(Descriptor):
    members: tuple[Descriptor, ...]


@dataclass(frozen=True, slots=True)
class Field:
    """
    Explicit field declaration.

    Struct and ObjectType accept either a bare descriptor or a Field; both
    are normalized to a Field.
    """

    type: Descriptor
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", to_descriptor(self.type))


# Read-only view; the key set is fixed once normalized.
Fields = Mapping[str, Field]


@dataclass(frozen=True, slots=True, repr=False)
class StructType(Descriptor):
    """Anonymous fixed mapping of field name to descriptor."""

    fields: Fields


# ObjectType and LazyType cache their resolution through cached_property,
# which needs an instance __dict__, so neither uses slots.


@dataclass(frozen=True, eq=False, repr=False)
class ObjectType(Descriptor):
    """
    Named struct.

    `declared` is either the field mapping itself or a zero-argument callable
    returning it. The callable form lets a type refer to itself:

        Nest = ObjectType("Nest", lambda: {
            "value": Number,
            "nest": Nullable(Nest),
        })
    """

    name: str
    declared: Mapping[str, Any] | Callable[[], Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise SchemaDefinitionError("ObjectType name must be a non-empty string")
        if not callable(self.declared):
            # Eager declarations are checked now; the cached value is reused.
            _ = self.fields

    @cached_property
    def fields(self) -> Fields:
        declared = self.declared
        if callable(declared):
            logger.debug("Resolving deferred fields of %s", self.name)
            declared = declared()
        return normalize_fields(declared, owner=self.name)


@dataclass(frozen=True, eq=False, repr=False)
class LazyType(Descriptor):
    """Deferred reference to a descriptor that may not exist yet."""

    thunk: Callable[[], Any]

    def __post_init__(self) -> None:
        if not callable(self.thunk):
            raise SchemaDefinitionError(
                f"Lazy() requires a zero-argument callable, got {type(self.thunk).__name__}"
            )

    @cached_property
    def target(self) -> Descriptor:
        logger.debug("Resolving deferred descriptor %r", self.thunk)
        return to_descriptor(self.thunk())


def resolve(descriptor: Descriptor) -> Descriptor:
    """Follow deferred references until a concrete descriptor is reached."""
    while isinstance(descriptor, LazyType):
        descriptor = descriptor.target
    return descriptor


def normalize_fields(declared: Any, owner: str = "Struct") -> Fields:
    if not isinstance(declared, Mapping):
        raise SchemaDefinitionError(
            f"{owner} fields must be a mapping, got {type(declared).__name__}"
        )
    fields: dict[str, Field] = {}
    for key, spec in declared.items():
        if not isinstance(key, str):
            raise SchemaDefinitionError(
                f"{owner} field names must be strings, got {key!r}"
            )
        fields[key] = spec if isinstance(spec, Field) else Field(spec)
    return MappingProxyType(fields)


_SHORTHAND_TYPES: dict[type, str] = {
    bool: "Boolean",
    int: "Int",
    float: "Number",
    str: "String",
}


def to_descriptor(v: Any) -> Descriptor:
    """
    Coerce a shorthand to a descriptor.

    Conversion rules:
        Descriptor -> pass through
        bool / int / float / str -> Boolean / Int / Number / String
        dict -> anonymous StructType
        [X] -> ListType(X)
        [X, Y, ...] -> ListType(UnionType(X, Y, ...))
    """
    if isinstance(v, Descriptor):
        return v

    if isinstance(v, type) and v in _SHORTHAND_TYPES:
        return _PRIMITIVES[_SHORTHAND_TYPES[v]]

    if isinstance(v, dict):
        return StructType(fields=normalize_fields(v))

    if isinstance(v, list):
        if len(v) == 0:
            raise SchemaDefinitionError("Empty list cannot be converted to a descriptor")
        if len(v) == 1:
            return ListType(item=to_descriptor(v[0]))
        return ListType(item=UnionType(members=tuple(to_descriptor(x) for x in v)))

    raise SchemaDefinitionError(f"Cannot convert {v!r} to a descriptor")


def describe(descriptor: Descriptor) -> str:
    """Short type name used in error messages."""
    match descriptor:
        case LiteralType(value=value):
            return f"Literal({value!r})"
        case ListType(item=item):
            return f"List({describe(item)})"
        case NullableType(inner=inner):
            return f"Nullable({describe(inner)})"
        case RecordType(value=value):
            return f"Record({describe(value)})"
        case UnionType(members=members):
            return f"Union({', '.join(describe(m) for m in members)})"
        case IntersectType(members=members):
            return f"Intersect({', '.join(describe(m) for m in members)})"
        case StructType(fields=fields):
            return "Struct{" + ", ".join(fields) + "}"
        case ObjectType():
            return descriptor.name
        case LazyType():
            return "Lazy"
    return type(descriptor).__name__.removesuffix("Type")


_PRIMITIVES: dict[str, Descriptor] = {
    "Number": NumberType(),
    "Int": IntType(),
    "Float": FloatType(),
    "String": StringType(),
    "Boolean": BooleanType(),
    "ID": IDType(),
    "Json": JsonType(),
    "Any": AnyType(),
}


def primitive(name: str) -> Descriptor:
    return _PRIMITIVES[name]


def is_nullable(descriptor: Descriptor) -> bool:
    return isinstance(resolve(descriptor), NullableType)


SchemaLike = TypingUnion[Descriptor, type, dict, list]
