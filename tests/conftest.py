"""
Shared descriptors for the test suite.
"""

import pytest

from formwork import (
    Boolean,
    Field,
    Int,
    Intersect,
    List,
    Nullable,
    Number,
    ObjectType,
    String,
    Struct,
)


@pytest.fixture(scope="session")
def obj() -> ObjectType:
    return ObjectType(
        "Obj",
        {
            "a": Number,
            "b": String,
            "c": Boolean,
            "d": Field(List(Number)),
            "e": Field(Nullable(String)),
        },
    )


@pytest.fixture(scope="session")
def nest() -> ObjectType:
    Nest = ObjectType(
        "Nest",
        lambda: {
            "value": Number,
            "nest": Nullable(Nest),
        },
    )
    return Nest


@pytest.fixture(scope="session")
def intersected() -> Intersect:
    Obj0 = ObjectType("Obj0", {"a": Number})
    Obj1 = ObjectType("Obj1", {"b": String})
    return Intersect(Obj0, Obj1)


@pytest.fixture(scope="session")
def query() -> Struct:
    return Struct({"a": Number, "b": Int, "c": Boolean})
