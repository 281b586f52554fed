"""
formwork schema algebra - composable, immutable type descriptors.

Usage:
    from formwork.schema import Int, List, Nullable, ObjectType, String, Struct

    Tag = Struct({"name": String, "weight": Nullable(Int)})
    Post = ObjectType("Post", lambda: {
        "title": String,
        "tags": List(Tag),
        "reply": Nullable(Post),
    })
"""

from __future__ import annotations

from typing import Any as _Any
from typing import Callable, Mapping

from ..errors import SchemaDefinitionError
from .core import (
    LITERAL_KINDS,
    AnyType,
    BooleanType,
    Descriptor,
    Field,
    FloatType,
    IDType,
    IntersectType,
    IntType,
    JsonType,
    LazyType,
    ListType,
    LiteralType,
    NullableType,
    NumberType,
    ObjectType,
    RecordType,
    SchemaLike,
    StringType,
    StructType,
    UnionType,
    describe,
    is_nullable,
    normalize_fields,
    primitive,
    resolve,
    to_descriptor,
)

Number = primitive("Number")
Int = primitive("Int")
Float = primitive("Float")
String = primitive("String")
Boolean = primitive("Boolean")
ID = primitive("ID")
Json = primitive("Json")
Any = primitive("Any")


def Literal(value: bool | int | float | str) -> LiteralType:
    """
    Match one fixed constant.

    Usage:
        Literal("draft")
        Union(Literal("draft"), Literal("published"))
    """
    if not isinstance(value, LITERAL_KINDS):
        raise SchemaDefinitionError(
            f"Literal() supports bool, int, float and str, got {type(value).__name__}"
        )
    return LiteralType(value=value)


def List(item: SchemaLike) -> ListType:
    """Ordered sequence whose items all match `item`."""
    return ListType(item=to_descriptor(item))


def Nullable(inner: SchemaLike) -> NullableType:
    """
    Allow None (or an absent struct field), validate otherwise.

    Nullable(Nullable(T)) collapses to Nullable(T).
    """
    inner_d = to_descriptor(inner)
    if isinstance(inner_d, NullableType):
        return inner_d
    return NullableType(inner=inner_d)


def Record(value: SchemaLike) -> RecordType:
    """Mapping from arbitrary string keys to values matching `value`."""
    return RecordType(value=to_descriptor(value))


def Struct(fields: Mapping[str, SchemaLike | Field]) -> StructType:
    """
    Anonymous fixed mapping.

    Usage:
        Struct({
            "id": ID,
            "name": Field(String, description="Display name"),
            "nickname": Nullable(String),
        })
    """
    return StructType(fields=normalize_fields(fields))


def Union(*members: SchemaLike) -> UnionType:
    """Match the first member that accepts the value, in declared order."""
    if not members:
        raise SchemaDefinitionError("Union() requires at least one member")
    return UnionType(members=tuple(to_descriptor(m) for m in members))


def Intersect(*members: SchemaLike) -> IntersectType:
    """Match every member; struct outputs are merged."""
    if not members:
        raise SchemaDefinitionError("Intersect() requires at least one member")
    return IntersectType(members=tuple(to_descriptor(m) for m in members))


def Lazy(thunk: Callable[[], _Any]) -> LazyType:
    """
    Defer a descriptor until it is first needed.

    Usage:
        Tree = Struct({"children": List(Lazy(lambda: Tree))})
    """
    return LazyType(thunk=thunk)


__all__ = [
    # Primitives
    "Number",
    "Int",
    "Float",
    "String",
    "Boolean",
    "ID",
    "Json",
    "Any",
    # Combinators
    "Literal",
    "List",
    "Nullable",
    "Record",
    "Struct",
    "ObjectType",
    "Union",
    "Intersect",
    "Lazy",
    "Field",
    # Descriptor classes
    "Descriptor",
    "NumberType",
    "IntType",
    "FloatType",
    "StringType",
    "BooleanType",
    "IDType",
    "JsonType",
    "AnyType",
    "LiteralType",
    "ListType",
    "NullableType",
    "RecordType",
    "StructType",
    "UnionType",
    "IntersectType",
    "LazyType",
    # Helpers
    "describe",
    "is_nullable",
    "resolve",
    "to_descriptor",
]
