"""Model and field declarations produced by the introspector.

A declaration is a plain, frozen description of a model's fields. The schema
generator and the value parser consume declarations only, never the host type
system directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class FieldKind(StrEnum):
    """Closed set of field shapes."""

    PRIMITIVE = "primitive"
    NESTED_MODEL = "nested_model"
    COLLECTION = "collection"
    UNTYPED_ARRAY = "untyped_array"


class PrimitiveKind(StrEnum):
    """Scalar kinds, valued by their JSON Schema type names."""

    INT = "integer"
    FLOAT = "number"
    BOOL = "boolean"
    STRING = "string"

    @property
    def python_type(self) -> type:
        """The Python type used to coerce values of this kind."""
        return _PYTHON_TYPES[self]


_PYTHON_TYPES: dict[PrimitiveKind, type] = {
    PrimitiveKind.INT: int,
    PrimitiveKind.FLOAT: float,
    PrimitiveKind.BOOL: bool,
    PrimitiveKind.STRING: str,
}


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    """One declared field of a model.

    Attributes
    ----------
    name : str
        Attribute name, also the JSON property name
    kind : FieldKind
        Shape of the field
    primitive_kind : PrimitiveKind | None
        Scalar kind, set only for ``PRIMITIVE`` fields
    nullable : bool
        Whether the declared type admits ``None``
    description : str | None
        Free-text description captured from the field's documentation
    model : type | None
        Nested model for ``NESTED_MODEL``, element model for ``COLLECTION``
    """

    name: str
    kind: FieldKind
    primitive_kind: PrimitiveKind | None = None
    nullable: bool = False
    description: str | None = None
    model: type | None = None

    def __post_init__(self) -> None:
        has_model = self.model is not None
        has_primitive = self.primitive_kind is not None
        if self.kind is FieldKind.PRIMITIVE:
            valid = has_primitive and not has_model
        elif self.kind is FieldKind.UNTYPED_ARRAY:
            valid = not has_primitive and not has_model
        else:
            valid = has_model and not has_primitive
        if not valid:
            raise ValueError(f"Inconsistent declaration for field '{self.name}' ({self.kind})")


@dataclass(frozen=True, slots=True)
class ModelDeclaration:
    """Ordered field declarations of one model class."""

    name: str
    model: type
    fields: tuple[FieldDeclaration, ...]

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def new_instance(self) -> Any:
        """Create an empty instance without running ``__init__``."""
        return self.model.__new__(self.model)
