"""Domain values shared by the schema generator and the value parser."""

from jsonmodel.core.domain.declaration import (
    FieldDeclaration,
    FieldKind,
    ModelDeclaration,
    PrimitiveKind,
)

__all__ = ["FieldDeclaration", "FieldKind", "ModelDeclaration", "PrimitiveKind"]
