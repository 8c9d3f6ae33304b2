"""Schema generator - converts model declarations to JSON Schema documents."""

import json
from typing import Any, Literal

import yaml

from jsonmodel.core.domain.declaration import FieldDeclaration, FieldKind, ModelDeclaration
from jsonmodel.core.exceptions import CyclicModelError
from jsonmodel.core.introspection import DeclarationIntrospector
from jsonmodel.core.logging import get_logger

logger = get_logger(__name__)

OutputFormat = Literal["dict", "json", "yaml"]


class SchemaGenerator:
    """Generate JSON Schema documents from model declarations.

    Every field becomes one property:

    - nested models are inlined as full object schemas (no ``$ref``)
    - lists with an element model become ``{"type": "array", "items": <model schema>}``
    - other lists fall back to ``{"type": "array", "items": {"type": "string"}}``
    - primitives map to ``integer``, ``number``, ``boolean`` or ``string``;
      nullable primitives use ``[<type>, "null"]``

    All fields are listed in ``required``; nullability is expressed only in
    the type. Nothing is cached: each call re-introspects the model.

    Examples
    --------
    >>> from jsonmodel import BaseModel
    >>> class Point(BaseModel):
    ...     x: int
    ...     label: str | None = None
    >>> schema = SchemaGenerator().from_model(Point)
    >>> schema["properties"]["label"]["type"]
    ['string', 'null']
    >>> schema["required"]
    ['x', 'label']
    """

    ARRAY_FALLBACK_ITEMS = {"type": "string"}

    def __init__(self, introspector: DeclarationIntrospector | None = None) -> None:
        self.introspector = introspector or DeclarationIntrospector()

    def from_model(
        self, model: type, format: OutputFormat = "dict", indent: int = 2
    ) -> dict[str, Any] | str:
        """Introspect ``model`` and derive its schema in the requested format.

        Args
        ----
            model: Model class to describe
            format: Output format - "dict", "yaml", or "json"
            indent: Indentation for the "json" format

        Raises
        ------
        ValueError
            If format is not one of: dict, yaml, json
        """
        if format not in ("dict", "yaml", "json"):
            raise ValueError(f"Invalid format: {format}. Must be one of: dict, yaml, json")

        schema = self.derive(self.introspector.introspect(model))
        return self.format_output(schema, format, indent=indent)

    def derive(self, declaration: ModelDeclaration) -> dict[str, Any]:
        """Derive the Schema Document for an introspected model.

        Raises
        ------
        CyclicModelError
            If a nested or element model refers back to a model already being
            derived on the current path
        """
        return self._derive(declaration, (declaration.model,))

    def _derive(self, declaration: ModelDeclaration, path: tuple[type, ...]) -> dict[str, Any]:
        logger.debug("Deriving schema for {model}", model=declaration.name)

        properties: dict[str, Any] = {}
        required: list[str] = []

        for field in declaration.fields:
            properties[field.name] = self._field_schema(field, path)
            required.append(field.name)

        return {
            "name": declaration.name,
            "type": "object",
            "properties": properties,
            "additionalProperties": False,
            "required": required,
        }

    def _field_schema(self, field: FieldDeclaration, path: tuple[type, ...]) -> dict[str, Any]:
        entry: dict[str, Any]
        if field.kind is FieldKind.NESTED_MODEL:
            entry = self._nested(field, path)
        elif field.kind is FieldKind.COLLECTION:
            entry = {"type": "array", "items": self._nested(field, path)}
        elif field.kind is FieldKind.UNTYPED_ARRAY:
            entry = {"type": "array", "items": dict(self.ARRAY_FALLBACK_ITEMS)}
        else:
            json_type = field.primitive_kind.value if field.primitive_kind else "string"
            entry = {"type": [json_type, "null"] if field.nullable else json_type}

        if field.description:
            entry["description"] = field.description

        return entry

    def _nested(self, field: FieldDeclaration, path: tuple[type, ...]) -> dict[str, Any]:
        nested_model = field.model
        assert nested_model is not None  # guaranteed by FieldDeclaration for these kinds
        if nested_model in path:
            raise CyclicModelError([m.__name__ for m in path] + [nested_model.__name__])
        return self._derive(self.introspector.introspect(nested_model), (*path, nested_model))

    @staticmethod
    def function_calling(schema: dict[str, Any]) -> dict[str, Any]:
        """Wrap a Schema Document in the function-calling envelope.

        Examples
        --------
        >>> SchemaGenerator.function_calling({"name": "Tag", "type": "object"})
        {'name': 'Tag', 'schema': {'type': 'object'}, 'strict': True}
        """
        body = {key: value for key, value in schema.items() if key != "name"}
        return {"name": schema["name"], "schema": body, "strict": True}

    @staticmethod
    def format_output(schema: dict[str, Any], format: str, indent: int = 2) -> dict | str:
        """Format schema output as dict, YAML, or JSON.

        Key order is preserved in every format.
        """
        if format == "yaml":
            yaml_str: str = yaml.dump(
                schema, sort_keys=False, default_flow_style=False, allow_unicode=True
            )
            return yaml_str
        if format == "json":
            return json.dumps(schema, indent=indent, ensure_ascii=False)
        return schema
