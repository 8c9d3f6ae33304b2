"""BaseModel - the class user models subclass.

Subclasses declare fields as annotated class attributes and get schema
derivation and JSON parsing as classmethods::

    class Tag(BaseModel):
        label: str
        '''@Description A human-readable tag label'''

    class Product(BaseModel):
        id: str
        price: float
        tags: list[Tag]

    Product.openai_schema()
    product = Product.from_json('{"id": "p1", "price": 9.5, "tags": []}')
"""

from __future__ import annotations

from typing import Any, ClassVar, Self

import orjson

from jsonmodel.core.domain import FieldKind, ModelDeclaration
from jsonmodel.core.introspection import DeclarationIntrospector
from jsonmodel.core.parsing import ParseOptions, ValueParser
from jsonmodel.core.registry import default_registry
from jsonmodel.core.schema import SchemaGenerator


class BaseModel:
    """Base class for models described by JSON Schema.

    Every subclass is registered in the default model registry under
    ``module.ClassName`` so ``@var ClassName[]`` hints can find it.
    """

    __jsonmodel_model__: ClassVar[bool] = True

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        default_registry.register(cls)

    def __init__(self, **values: Any) -> None:
        known = set(type(self).declaration().field_names)
        unknown = sorted(set(values) - known)
        if unknown:
            raise TypeError(f"{type(self).__name__} got unexpected field(s): {', '.join(unknown)}")
        for name, value in values.items():
            setattr(self, name, value)

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    @classmethod
    def declaration(cls) -> ModelDeclaration:
        return DeclarationIntrospector().introspect(cls)

    @classmethod
    def schema(cls) -> dict[str, Any]:
        """Return the JSON Schema document for this model."""
        return SchemaGenerator().derive(cls.declaration())

    @classmethod
    def json_schema(cls, indent: int = 2) -> str:
        """Return the JSON Schema document as a pretty-printed JSON string."""
        return SchemaGenerator.format_output(cls.schema(), "json", indent=indent)  # type: ignore[return-value]

    @classmethod
    def openai_schema(cls) -> dict[str, Any]:
        """Return the ``{name, schema, strict}`` function-calling envelope."""
        return SchemaGenerator.function_calling(cls.schema())

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def from_json(cls, text: str | bytes, options: ParseOptions | None = None) -> Self:
        """Parse JSON text into an instance, skipping ``__init__``."""
        instance: Self = ValueParser(options=options).parse(cls, text)
        return instance

    @classmethod
    def from_dict(cls, data: dict[str, Any], options: ParseOptions | None = None) -> Self:
        """Parse decoded JSON data into an instance, skipping ``__init__``."""
        instance: Self = ValueParser(options=options).parse_data(cls, data)
        return instance

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return the set fields as plain JSON-compatible data.

        Fields never assigned (and without a class default) are omitted.
        """
        result: dict[str, Any] = {}
        for field in type(self).declaration().fields:
            if not hasattr(self, field.name):
                continue
            value = getattr(self, field.name)
            if value is not None and field.kind is FieldKind.NESTED_MODEL:
                value = value.to_dict()
            elif value is not None and field.kind is FieldKind.COLLECTION:
                value = [item.to_dict() for item in value]
            result[field.name] = value
        return result

    def to_json(self, indent: bool = False) -> str:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option).decode()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"{type(self).__name__}({fields})"
