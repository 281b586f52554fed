"""
Pydantic interop for formwork descriptors.

Provides to_pydantic(), which compiles a struct-shaped descriptor into a
Pydantic model class.
"""

from __future__ import annotations

import typing
from typing import Annotated, Any, Optional

from pydantic import BaseModel, JsonValue, StringConstraints, create_model
from pydantic import Field as PydanticField

from .errors import SchemaDefinitionError
from .schema.core import (
    AnyType,
    BooleanType,
    Descriptor,
    Fields,
    FloatType,
    IDType,
    IntersectType,
    IntType,
    JsonType,
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
    resolve,
    to_descriptor,
)

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


def to_pydantic(name: str, schema: SchemaLike) -> type[BaseModel]:
    """
    Compile a Struct, ObjectType or Intersect of them to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: Descriptor (or shorthand dict) describing the model

    Returns:
        A Pydantic BaseModel subclass. Nested structs become nested models
        named after their parent and field; ObjectTypes keep their own name.

    Usage:
        User = to_pydantic("User", Struct({
            "name": String,
            "email": Nullable(String),
        }))
        user = User(name="Alice")
    """
    compiler = _ModelCompiler()
    model = compiler.compile(name, to_descriptor(schema))
    compiler.rebuild()
    return model


class _ModelCompiler:
    """Tracks models built so far so recursive ObjectTypes compile once."""

    def __init__(self) -> None:
        self.models: dict[int, type[BaseModel]] = {}
        self.in_progress: dict[int, str] = {}
        self.namespace: dict[str, Any] = {}
        self.created: list[type[BaseModel]] = []

    def compile(self, name: str, descriptor: Descriptor) -> type[BaseModel]:
        descriptor = resolve(descriptor)
        key = id(descriptor)
        if key in self.models:
            return self.models[key]

        fields = _model_fields(descriptor)
        self.in_progress[key] = name

        definitions: dict[str, Any] = {}
        for field_name, field in fields.items():
            annotation = self.annotation(field.type, f"{name}_{field_name}")
            default = None if is_nullable(field.type) else ...
            definitions[field_name] = (
                annotation,
                PydanticField(default, description=field.description),
            )

        model = create_model(name, **definitions)
        del self.in_progress[key]
        self.models[key] = model
        self.namespace[name] = model
        self.created.append(model)
        return model

    def annotation(self, descriptor: Descriptor, hint: str) -> Any:
        descriptor = resolve(descriptor)
        match descriptor:
            case NumberType() | FloatType():
                return float
            case IntType():
                return int
            case StringType():
                return str
            case IDType():
                return NonEmptyStr
            case BooleanType():
                return bool
            case LiteralType(value=value):
                return typing.Literal[value]
            case ListType(item=item):
                return list[self.annotation(item, f"{hint}_item")]  # type: ignore[misc]
            case NullableType(inner=inner):
                return Optional[self.annotation(inner, hint)]
            case RecordType(value=value):
                return dict[str, self.annotation(value, f"{hint}_value")]  # type: ignore[misc]
            case UnionType(members=members):
                options = tuple(
                    self.annotation(m, f"{hint}_{i}") for i, m in enumerate(members)
                )
                return typing.Union[options]
            case JsonType():
                return JsonValue
            case AnyType():
                return Any
            case ObjectType():
                key = id(descriptor)
                if key in self.in_progress:
                    # Self reference; resolved by rebuild()
                    return self.in_progress[key]
                return self.compile(descriptor.name, descriptor)
            case StructType() | IntersectType():
                return self.compile(hint, descriptor)

        raise SchemaDefinitionError(f"Cannot compile {describe(descriptor)} to a Pydantic type")

    def rebuild(self) -> None:
        for model in self.created:
            if not model.__pydantic_complete__:
                model.model_rebuild(_types_namespace=self.namespace)


def _model_fields(descriptor: Descriptor) -> Fields:
    descriptor = resolve(descriptor)
    match descriptor:
        case StructType(fields=fields):
            return fields
        case ObjectType():
            return descriptor.fields
        case IntersectType(members=members):
            # Same precedence as validation: the first member owning a key wins.
            merged: dict[str, Any] = {}
            for member in members:
                for key, field in _model_fields(member).items():
                    merged.setdefault(key, field)
            return merged
    raise SchemaDefinitionError(
        f"Only Struct, ObjectType or Intersect compile to a model, got {describe(descriptor)}"
    )
