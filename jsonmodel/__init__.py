"""jsonmodel - typed models to JSON Schema and back.

Derive JSON Schema documents (including the strict function-calling envelope
used by structured-output LLM APIs) from annotated model classes, and parse
JSON payloads into model instances with shape checks.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("jsonmodel")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from jsonmodel.core import (
    ConfigurationError,
    CyclicModelError,
    DeclarationIntrospector,
    InvalidJsonError,
    JsonModelError,
    MissingFieldError,
    ModelRegistry,
    ParseOptions,
    SchemaGenerator,
    TypeMismatchError,
    UnsupportedFieldKindError,
    ValueParser,
)
from jsonmodel.model import BaseModel

__all__ = [
    "BaseModel",
    "ConfigurationError",
    "CyclicModelError",
    "DeclarationIntrospector",
    "InvalidJsonError",
    "JsonModelError",
    "MissingFieldError",
    "ModelRegistry",
    "ParseOptions",
    "SchemaGenerator",
    "TypeMismatchError",
    "UnsupportedFieldKindError",
    "ValueParser",
    "__version__",
]
