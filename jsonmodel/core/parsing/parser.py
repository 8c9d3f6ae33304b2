"""Value parser - populates model instances from JSON.

The parser walks a model declaration the same way the schema generator does,
so every shape the schema claims for a field is checked when the field is
read back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson

from jsonmodel.core.domain.declaration import FieldDeclaration, FieldKind, ModelDeclaration
from jsonmodel.core.exceptions import InvalidJsonError, MissingFieldError, TypeMismatchError
from jsonmodel.core.introspection import DeclarationIntrospector
from jsonmodel.core.logging import get_logger
from jsonmodel.core.types import JsonValue, json_kind

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ParseOptions:
    """Opt-in strictness switches. The defaults keep the lenient contract.

    Attributes
    ----------
    reject_null_for_non_nullable : bool, default=False
        Raise TypeMismatchError when ``null`` is given for a field whose type
        does not admit ``None``. By default null is always accepted.
    reject_missing_fields : bool, default=False
        Raise MissingFieldError when a declared field is absent from the input.
        By default absent fields are left unset.
    """

    reject_null_for_non_nullable: bool = False
    reject_missing_fields: bool = False


def decode_json(text: str | bytes) -> JsonValue:
    """Decode JSON text, reporting the decoder's diagnostic on failure.

    Raises
    ------
    InvalidJsonError
        If ``text`` is not valid JSON

    Examples
    --------
    >>> decode_json('{"a": [1, 2]}')
    {'a': [1, 2]}
    """
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as e:
        raise InvalidJsonError(e.msg, line=e.lineno, column=e.colno) from e


class ValueParser:
    """Build model instances from JSON text or decoded JSON data.

    Instances are created without calling ``__init__``; only the fields
    present in the input are assigned. Errors raised for a nested model
    propagate unchanged.

    Examples
    --------
    >>> from jsonmodel import BaseModel
    >>> class Tag(BaseModel):
    ...     label: str
    >>> ValueParser().parse(Tag, '{"label": "new"}').label
    'new'
    """

    def __init__(
        self,
        introspector: DeclarationIntrospector | None = None,
        options: ParseOptions | None = None,
    ) -> None:
        self.introspector = introspector or DeclarationIntrospector()
        self.options = options or ParseOptions()

    def parse(self, model: type, text: str | bytes) -> Any:
        """Decode ``text`` and parse it into an instance of ``model``.

        Raises
        ------
        InvalidJsonError
            If ``text`` is not valid JSON
        TypeMismatchError
            If a value's shape disagrees with its field's declared kind
        """
        return self.parse_data(model, decode_json(text))

    def parse_data(self, model: type, data: JsonValue) -> Any:
        """Parse already-decoded JSON data into an instance of ``model``."""
        declaration = self.introspector.introspect(model)
        if not isinstance(data, dict):
            raise TypeMismatchError(declaration.name, "object", json_kind(data))
        return self._parse_object(declaration, data)

    def _parse_object(self, declaration: ModelDeclaration, data: dict[str, Any]) -> Any:
        logger.debug("Parsing {model}", model=declaration.name)
        instance = declaration.new_instance()

        for field in declaration.fields:
            if field.name not in data:
                if self.options.reject_missing_fields:
                    raise MissingFieldError(declaration.name, field.name)
                continue
            setattr(instance, field.name, self._parse_field(field, data[field.name]))

        return instance

    def _parse_field(self, field: FieldDeclaration, value: Any) -> Any:
        if value is None:
            if self.options.reject_null_for_non_nullable and not field.nullable:
                raise TypeMismatchError(field.name, "non-null", "null")
            return None

        if field.kind is FieldKind.NESTED_MODEL:
            if not isinstance(value, dict):
                raise TypeMismatchError(field.name, "object", json_kind(value))
            return self.parse_data(field.model, value)  # type: ignore[arg-type]

        if field.kind is FieldKind.COLLECTION:
            if not isinstance(value, list):
                raise TypeMismatchError(field.name, "array", json_kind(value))
            element = self.introspector.introspect(field.model)  # type: ignore[arg-type]
            items = []
            for item in value:
                if not isinstance(item, dict):
                    raise TypeMismatchError(field.name, "array of objects", json_kind(item))
                items.append(self._parse_object(element, item))
            return items

        if field.kind is FieldKind.UNTYPED_ARRAY:
            if not isinstance(value, list):
                raise TypeMismatchError(field.name, "array", json_kind(value))
            return value

        return self._coerce(field, value)

    @staticmethod
    def _coerce(field: FieldDeclaration, value: Any) -> Any:
        kind = field.primitive_kind
        assert kind is not None  # PRIMITIVE fields always carry a kind
        if isinstance(value, dict | list):
            raise TypeMismatchError(field.name, kind.value, json_kind(value))
        try:
            return kind.python_type(value)
        except (TypeError, ValueError) as e:
            raise TypeMismatchError(field.name, kind.value, json_kind(value)) from e
