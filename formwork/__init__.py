from .context import is_strict, validate, validation_context
from .decorator import handler
from .errors import PipelineExhausted, SchemaDefinitionError, ValidationFailed
from .interop import to_pydantic
from .pipeline import Pipeline
from .router import RouterPipeline, create_router_pipeline
from .schema import (
    ID,
    Any,
    Boolean,
    Field,
    Float,
    Int,
    Intersect,
    Json,
    Lazy,
    List,
    Literal,
    Nullable,
    Number,
    ObjectType,
    Record,
    String,
    Struct,
    Union,
)
from .validation import (
    Err,
    ErrorKind,
    Ok,
    ValidationError,
    create_non_strict_validator,
    create_strict_validator,
    create_validator,
)

__all__ = [
    # Schema
    "Number",
    "Int",
    "Float",
    "String",
    "Boolean",
    "ID",
    "Json",
    "Any",
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
    # Validation
    "Ok",
    "Err",
    "ErrorKind",
    "ValidationError",
    "create_validator",
    "create_strict_validator",
    "create_non_strict_validator",
    "validate",
    "validation_context",
    "is_strict",
    # Collaborators
    "Pipeline",
    "RouterPipeline",
    "create_router_pipeline",
    "handler",
    "to_pydantic",
    # Errors
    "SchemaDefinitionError",
    "ValidationFailed",
    "PipelineExhausted",
]
