"""jsonmodel core - declaration introspection, schema derivation and parsing.

The core only consumes ``ModelDeclaration`` values; the introspector is the
single piece that reads Python type hints.
"""

from jsonmodel.core.domain import FieldDeclaration, FieldKind, ModelDeclaration, PrimitiveKind
from jsonmodel.core.exceptions import (
    ConfigurationError,
    CyclicModelError,
    InvalidJsonError,
    JsonModelError,
    MissingFieldError,
    TypeMismatchError,
    UnsupportedFieldKindError,
)
from jsonmodel.core.introspection import DeclarationIntrospector
from jsonmodel.core.parsing import ParseOptions, ValueParser
from jsonmodel.core.registry import ModelRegistry, default_registry
from jsonmodel.core.schema import SchemaGenerator

__all__ = [
    "ConfigurationError",
    "CyclicModelError",
    "DeclarationIntrospector",
    "FieldDeclaration",
    "FieldKind",
    "InvalidJsonError",
    "JsonModelError",
    "MissingFieldError",
    "ModelDeclaration",
    "ModelRegistry",
    "ParseOptions",
    "PrimitiveKind",
    "SchemaGenerator",
    "TypeMismatchError",
    "UnsupportedFieldKindError",
    "ValueParser",
    "default_registry",
]
