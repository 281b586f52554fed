"""
Structural traversal shared by every leaf policy.

A validator is bound to one descriptor and one policy. Calling it walks the
value against the descriptor and returns Ok(pruned value) or Err(errors).
Containers keep going after a child fails, so Err lists every failure in
document order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..schema.core import (
    AnyType,
    BooleanType,
    Descriptor,
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
from .policies import NON_STRICT, STRICT, LeafPolicy, get_policy, is_number
from .types import Err, ErrorKind, Ok, Path, ValidationError, ValidationErrors, ValidationResult

logger = logging.getLogger(__name__)

_LEAVES = (NumberType, IntType, FloatType, StringType, BooleanType, IDType, LiteralType)


@dataclass(frozen=True, slots=True)
class Validator:
    """
    Immutable (descriptor, policy) pair.

    Safe to share between threads: neither the descriptor nor the policy is
    mutated by a call.
    """

    descriptor: Descriptor
    policy: LeafPolicy

    def __call__(self, value: Any, path: Path = ()) -> ValidationResult:
        try:
            return walk(self.descriptor, value, self.policy, path)
        except RecursionError:
            logger.debug("Input exceeded recursion limit for %s", describe(self.descriptor))
            return Err(
                [
                    ValidationError(
                        ErrorKind.SHAPE_MISMATCH,
                        "Value is nested too deeply to validate",
                        path,
                    )
                ]
            )


def create_validator(descriptor: SchemaLike, policy: str | LeafPolicy = STRICT) -> Validator:
    """
    Bind a descriptor to a leaf policy.

    Usage:
        validate = create_validator(Struct({"page": Int}), "non-strict")
        validate({"page": "2"})   # Ok({"page": 2})
    """
    descriptor = to_descriptor(descriptor)
    policy = get_policy(policy)
    logger.debug("Created %s validator for %s", policy.name, describe(descriptor))
    return Validator(descriptor=descriptor, policy=policy)


def create_strict_validator(descriptor: SchemaLike) -> Validator:
    return create_validator(descriptor, STRICT)


def create_non_strict_validator(descriptor: SchemaLike) -> Validator:
    return create_validator(descriptor, NON_STRICT)


def walk(descriptor: Descriptor, value: Any, policy: LeafPolicy, path: Path = ()) -> ValidationResult:
    """Validate `value` against `descriptor` at `path`."""
    descriptor = resolve(descriptor)

    if isinstance(descriptor, _LEAVES):
        return _check_leaf(descriptor, value, policy, path)

    match descriptor:
        case NullableType(inner=inner):
            if value is None:
                return Ok(value)
            return walk(inner, value, policy, path)
        case ListType(item=item):
            return _walk_list(item, value, policy, path)
        case StructType(fields=fields):
            return _walk_fields(fields, value, policy, path)
        case ObjectType():
            return _walk_fields(descriptor.fields, value, policy, path)
        case RecordType(value=value_type):
            return _walk_record(value_type, value, policy, path)
        case UnionType(members=members):
            return _walk_union(descriptor, members, value, policy, path)
        case IntersectType(members=members):
            return _walk_intersect(members, value, policy, path)
        case JsonType():
            return _walk_json(value, path)
        case AnyType():
            return Ok(value)

    raise TypeError(f"Unsupported descriptor: {describe(descriptor)}")


def _check_leaf(descriptor: Descriptor, value: Any, policy: LeafPolicy, path: Path) -> ValidationResult:
    try:
        return policy.check(descriptor, value, path)
    except Exception as e:
        return Err([ValidationError(ErrorKind.TYPE_MISMATCH, f"Validation error: {e}", path)])


def _shape_mismatch(expected: str, value: Any, path: Path) -> Err:
    got = "null" if value is None else type(value).__name__
    return Err([ValidationError(ErrorKind.SHAPE_MISMATCH, f"Expected {expected}, got {got}", path)])


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _walk_list(item: Descriptor, value: Any, policy: LeafPolicy, path: Path) -> ValidationResult:
    if not _is_sequence(value):
        return _shape_mismatch("list", value, path)

    out: list[Any] = []
    errors: ValidationErrors = []

    for i, element in enumerate(value):
        result = walk(item, element, policy, (*path, i))
        if isinstance(result, Err):
            errors.extend(result.errors)
        else:
            out.append(result.value)

    return Err(errors) if errors else Ok(out)


def _walk_fields(fields: Mapping, value: Any, policy: LeafPolicy, path: Path) -> ValidationResult:
    if not isinstance(value, Mapping):
        return _shape_mismatch("object", value, path)

    out: dict[str, Any] = {}
    errors: ValidationErrors = []

    for key, field in fields.items():
        field_path = (*path, key)
        if key not in value:
            if not is_nullable(field.type):
                errors.append(
                    ValidationError(
                        ErrorKind.MISSING_FIELD,
                        f"Missing required field '{key}'",
                        field_path,
                    )
                )
            continue

        result = walk(field.type, value[key], policy, field_path)
        if isinstance(result, Err):
            errors.extend(result.errors)
        else:
            out[key] = result.value

    return Err(errors) if errors else Ok(out)


def _walk_record(value_type: Descriptor, value: Any, policy: LeafPolicy, path: Path) -> ValidationResult:
    if not isinstance(value, Mapping):
        return _shape_mismatch("object", value, path)

    out: dict[str, Any] = {}
    errors: ValidationErrors = []

    for key, item in value.items():
        if not isinstance(key, str):
            errors.append(
                ValidationError(
                    ErrorKind.TYPE_MISMATCH,
                    f"Expected string key, got {type(key).__name__}: {repr(key)[:50]}",
                    path,
                )
            )
            continue
        result = walk(value_type, item, policy, (*path, key))
        if isinstance(result, Err):
            errors.extend(result.errors)
        else:
            out[key] = result.value

    return Err(errors) if errors else Ok(out)


def _walk_union(
    union: UnionType, members: tuple[Descriptor, ...], value: Any, policy: LeafPolicy, path: Path
) -> ValidationResult:
    failures: ValidationErrors = []

    for member in members:
        result = walk(member, value, policy, path)
        if isinstance(result, Ok):
            return result
        failures.extend(result.errors)

    return Err(
        [
            ValidationError(
                ErrorKind.NO_UNION_MEMBER_MATCHED,
                f"Value matched none of {describe(union)}",
                path,
                tuple(failures),
            )
        ]
    )


def _walk_intersect(
    members: tuple[Descriptor, ...], value: Any, policy: LeafPolicy, path: Path
) -> ValidationResult:
    outputs: list[Any] = []

    for i, member in enumerate(members):
        result = walk(member, value, policy, path)
        if isinstance(result, Err):
            return Err(
                [
                    ValidationError(
                        ErrorKind.INTERSECT_MEMBER_FAILED,
                        f"Intersect member {i} ({describe(member)}) rejected value: "
                        f"{result.error}",
                        path,
                        tuple(result.errors),
                    )
                ]
            )
        outputs.append(result.value)

    if not all(isinstance(o, Mapping) for o in outputs):
        return Ok(outputs[0])

    # Members are expected to own disjoint keys; on overlap the first wins.
    merged: dict[str, Any] = {}
    for output in outputs:
        for key, item in output.items():
            merged.setdefault(key, item)
    return Ok(merged)


def _walk_json(value: Any, path: Path) -> ValidationResult:
    if value is None or isinstance(value, (bool, str)) or is_number(value):
        return Ok(value)

    errors: ValidationErrors = []

    if _is_sequence(value):
        out_list: list[Any] = []
        for i, element in enumerate(value):
            result = _walk_json(element, (*path, i))
            if isinstance(result, Err):
                errors.extend(result.errors)
            else:
                out_list.append(result.value)
        return Err(errors) if errors else Ok(out_list)

    if isinstance(value, Mapping):
        out_dict: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                errors.append(
                    ValidationError(
                        ErrorKind.TYPE_MISMATCH,
                        f"JSON object keys must be strings, got {type(key).__name__}",
                        path,
                    )
                )
                continue
            result = _walk_json(item, (*path, key))
            if isinstance(result, Err):
                errors.extend(result.errors)
            else:
                out_dict[key] = result.value
        return Err(errors) if errors else Ok(out_dict)

    return Err(
        [
            ValidationError(
                ErrorKind.TYPE_MISMATCH,
                f"Expected JSON value, got {type(value).__name__}",
                path,
            )
        ]
    )
