"""Tests for compiling descriptors to Pydantic models."""

import pytest
from pydantic import ValidationError

from formwork import (
    ID,
    Any,
    Boolean,
    Field,
    Int,
    Intersect,
    Json,
    List,
    Literal,
    Nullable,
    Number,
    ObjectType,
    Record,
    String,
    Struct,
    Union,
    to_pydantic,
)
from formwork.errors import SchemaDefinitionError


class TestToPydantic:
    def test_simple_model(self):
        User = to_pydantic("User", Struct({"name": String, "age": Int}))
        user = User(name="Alice", age=30)
        assert user.name == "Alice"
        assert user.age == 30

    def test_nullable_fields_default_to_none(self):
        User = to_pydantic("User", {"name": str, "email": Nullable(String)})
        user = User(name="Alice")
        assert user.email is None

    def test_required_fields(self):
        User = to_pydantic("User", Struct({"name": String}))
        with pytest.raises(ValidationError):
            User()

    def test_field_types(self):
        Model = to_pydantic(
            "Model",
            Struct(
                {
                    "id": ID,
                    "score": Number,
                    "flag": Boolean,
                    "kind": Literal("a"),
                    "tags": List(String),
                    "counts": Record(Int),
                    "either": Union(Int, String),
                    "blob": Json,
                    "anything": Any,
                }
            ),
        )
        m = Model(
            id="x",
            score=1.5,
            flag=True,
            kind="a",
            tags=["t"],
            counts={"a": 1},
            either="s",
            blob={"k": [1, None]},
            anything=object,
        )
        assert m.counts == {"a": 1}
        assert m.blob == {"k": [1, None]}
        with pytest.raises(ValidationError):
            Model(id="", score=1, flag=True, kind="a", tags=[], counts={}, either=1, blob=None, anything=None)
        with pytest.raises(ValidationError):
            Model(id="x", score=1, flag=True, kind="b", tags=[], counts={}, either=1, blob=None, anything=None)

    def test_descriptions(self):
        Model = to_pydantic("Model", Struct({"a": Field(Int, description="count")}))
        assert Model.model_fields["a"].description == "count"

    def test_nested_struct(self):
        Model = to_pydantic("Outer", Struct({"inner": Struct({"a": Int})}))
        m = Model(inner={"a": 1})
        assert m.inner.a == 1
        assert type(m.inner).__name__ == "Outer_inner"

    def test_intersect(self):
        Obj0 = ObjectType("Obj0", {"a": Number})
        Obj1 = ObjectType("Obj1", {"b": String})
        Model = to_pydantic("Both", Intersect(Obj0, Obj1))
        assert set(Model.model_fields) == {"a", "b"}

    def test_recursive_object_type(self, nest):
        Model = to_pydantic("Nest", nest)
        m = Model.model_validate({"value": 0, "nest": {"value": 1, "nest": {"value": 2}}})
        assert m.nest.nest.value == 2
        assert m.nest.nest.nest is None

    def test_rejects_non_struct(self):
        with pytest.raises(SchemaDefinitionError):
            to_pydantic("Bad", List(Int))
