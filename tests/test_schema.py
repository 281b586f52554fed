"""
Tests for descriptor construction and normalization.
"""

import pytest

from formwork import (
    ID,
    Any,
    Boolean,
    Field,
    Int,
    Intersect,
    Lazy,
    List,
    Literal,
    Nullable,
    Number,
    ObjectType,
    Record,
    SchemaDefinitionError,
    String,
    Struct,
    Union,
    create_strict_validator,
)
from formwork.schema import (
    IntType,
    ListType,
    NullableType,
    StringType,
    StructType,
    UnionType,
    describe,
    is_nullable,
    resolve,
    to_descriptor,
)


class TestConstruction:
    def test_primitives_are_singletons(self):
        assert to_descriptor(int) is Int
        assert to_descriptor(float) is Number
        assert to_descriptor(str) is String
        assert to_descriptor(bool) is Boolean

    def test_field_shorthand_and_wrapper_normalize_alike(self):
        bare = Struct({"a": Number})
        wrapped = Struct({"a": Field(Number)})
        assert bare.fields == wrapped.fields
        assert isinstance(bare.fields["a"], Field)

    def test_field_description(self):
        s = Struct({"a": Field(String, description="name")})
        assert s.fields["a"].description == "name"
        assert s.fields["a"].type is String

    def test_dict_shorthand(self):
        d = to_descriptor({"a": int, "b": {"c": [str]}})
        assert isinstance(d, StructType)
        inner = d.fields["b"].type
        assert isinstance(inner, StructType)
        assert isinstance(inner.fields["c"].type, ListType)
        assert inner.fields["c"].type.item is String

    def test_multi_item_list_shorthand(self):
        d = to_descriptor([int, str])
        assert isinstance(d, ListType)
        assert isinstance(d.item, UnionType)
        assert d.item.members == (Int, String)

    def test_nullable_collapses(self):
        n = Nullable(Nullable(String))
        assert isinstance(n, NullableType)
        assert n.inner is String

    def test_descriptors_are_immutable(self):
        s = Struct({"a": Number})
        with pytest.raises(AttributeError):
            s.fields = {}
        with pytest.raises(TypeError):
            s.fields["b"] = Field(String)
        with pytest.raises((TypeError, AttributeError)):
            s.fields.pop("a")
        assert list(s.fields) == ["a"]

    def test_object_type_fields_are_read_only(self):
        Obj = ObjectType("Obj", {"a": Number})
        with pytest.raises(TypeError):
            Obj.fields["a"] = Field(String)
        with pytest.raises(AttributeError):
            Obj.fields = {}

    def test_bound_validator_unaffected_by_source_dict(self):
        declared = {"a": Number}
        s = Struct(declared)
        validate = create_strict_validator(s)
        declared.pop("a")
        declared["b"] = String
        assert validate({"a": 1, "b": "x"}).value == {"a": 1}


class TestDefinitionErrors:
    def test_empty_union(self):
        with pytest.raises(SchemaDefinitionError):
            Union()

    def test_empty_intersect(self):
        with pytest.raises(SchemaDefinitionError):
            Intersect()

    def test_bad_literal(self):
        with pytest.raises(SchemaDefinitionError):
            Literal(None)
        with pytest.raises(SchemaDefinitionError):
            Literal([1])

    def test_bad_shorthand(self):
        with pytest.raises(SchemaDefinitionError):
            List(object())
        with pytest.raises(SchemaDefinitionError):
            to_descriptor([])
        with pytest.raises(SchemaDefinitionError):
            to_descriptor(bytes)

    def test_non_string_field_name(self):
        with pytest.raises(SchemaDefinitionError):
            Struct({1: Number})

    def test_lazy_requires_callable(self):
        with pytest.raises(SchemaDefinitionError):
            Lazy(Number)

    def test_object_type_requires_name(self):
        with pytest.raises(SchemaDefinitionError):
            ObjectType("", {"a": Number})

    def test_eager_object_type_checked_at_construction(self):
        with pytest.raises(SchemaDefinitionError):
            ObjectType("Bad", {"a": 42})

    def test_lazy_object_type_checked_on_resolution(self):
        Bad = ObjectType("Bad", lambda: {"a": 42})
        with pytest.raises(SchemaDefinitionError):
            Bad.fields

    def test_definition_error_is_value_error(self):
        assert issubclass(SchemaDefinitionError, ValueError)


class TestDeferred:
    def test_lazy_resolves_once(self):
        calls = []

        def thunk():
            calls.append(1)
            return Int

        lazy = Lazy(thunk)
        assert calls == []
        assert resolve(lazy) is Int
        assert resolve(lazy) is Int
        assert calls == [1]

    def test_object_type_fields_resolved_lazily(self):
        calls = []

        def fields():
            calls.append(1)
            return {"self": Nullable(Node)}

        Node = ObjectType("Node", fields)
        assert calls == []
        assert list(Node.fields) == ["self"]
        assert Node.fields["self"].type.inner is Node
        assert calls == [1]

    def test_is_nullable_sees_through_lazy(self):
        assert is_nullable(Lazy(lambda: Nullable(Int)))
        assert not is_nullable(Lazy(lambda: Int))

    def test_lazy_shorthand_target(self):
        assert isinstance(resolve(Lazy(lambda: str)), StringType)


class TestDescribe:
    def test_names(self):
        assert describe(Int) == "Int"
        assert describe(ID) == "ID"
        assert describe(Any) == "Any"
        assert describe(Literal("a")) == "Literal('a')"
        assert describe(List(Nullable(Int))) == "List(Nullable(Int))"
        assert describe(Record(Boolean)) == "Record(Boolean)"
        assert describe(Union(Int, String)) == "Union(Int, String)"
        assert describe(Struct({"a": Int, "b": Int})) == "Struct{a, b}"
        assert describe(ObjectType("User", {"a": Int})) == "User"

    def test_repr_uses_describe(self):
        assert repr(List(Int)) == "List(Int)"
        assert isinstance(List(Int).item, IntType)
