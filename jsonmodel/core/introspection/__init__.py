"""Declaration introspection for model classes."""

from jsonmodel.core.introspection.introspector import (
    MODEL_MARKER,
    DeclarationIntrospector,
    is_model_class,
)

__all__ = ["MODEL_MARKER", "DeclarationIntrospector", "is_model_class"]
