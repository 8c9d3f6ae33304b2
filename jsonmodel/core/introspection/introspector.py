"""Declaration introspector - turns a model class into a ModelDeclaration.

Field types come from the class annotations. Documentation metadata comes
from two places:

- ``Annotated`` metadata exposing a ``description`` (e.g. pydantic ``Field``)
- the field's attribute docstring, i.e. a string literal placed right after
  the annotation, carrying ``@Description ...`` and ``@var Model[]`` tags

Examples
--------
Example model::

    class Product(BaseModel):
        name: Annotated[str, Field(description="Display name")]
        tags: list
        '''
        @var Tag[]
        @Description All tags associated with this product
        '''
"""

from __future__ import annotations

import ast
import contextlib
import inspect
import re
import textwrap
from typing import Any, get_args, get_type_hints

from jsonmodel.core.domain.declaration import (
    FieldDeclaration,
    FieldKind,
    ModelDeclaration,
    PrimitiveKind,
)
from jsonmodel.core.exceptions import UnsupportedFieldKindError
from jsonmodel.core.logging import get_logger
from jsonmodel.core.registry import ModelRegistry, default_registry
from jsonmodel.core.types import (
    get_annotated_metadata,
    is_annotated_type,
    is_classvar_type,
    is_list_type,
    is_union_type,
    split_optional,
)

logger = get_logger(__name__)

# Attribute set to True on the model base class; marks classes that can be
# used as nested or element models.
MODEL_MARKER = "__jsonmodel_model__"

# Tag captured up to end of line; surrounding whitespace and quotes are trimmed
DESCRIPTION_TAG = re.compile(r"@Description[ \t]+([^\r\n]+)")
ELEMENT_MODEL_TAG = re.compile(r"@var\s+([\w.]+)\[\]")
_TRIM_CHARS = " \t\n\r\0\x0b\""

PRIMITIVE_KINDS: dict[Any, PrimitiveKind] = {
    int: PrimitiveKind.INT,
    float: PrimitiveKind.FLOAT,
    bool: PrimitiveKind.BOOL,
    str: PrimitiveKind.STRING,
    Any: PrimitiveKind.STRING,
}


def is_model_class(obj: Any) -> bool:
    """Check whether ``obj`` is a model class usable as a nested model."""
    return isinstance(obj, type) and getattr(obj, MODEL_MARKER, False) is True


def extract_attribute_docs(model: type) -> dict[str, str]:
    """Collect attribute docstrings declared on ``model`` and its bases.

    Subclass docstrings take precedence over inherited ones. Classes whose
    source is unavailable (built in a REPL, via ``exec``) contribute nothing.

    Examples
    --------
    >>> class Tag:
    ...     label: str
    ...     '''@Description A human-readable tag label'''
    >>> extract_attribute_docs(Tag)  # doctest: +SKIP
    {'label': '@Description A human-readable tag label'}
    """
    docs: dict[str, str] = {}
    for klass in reversed(model.__mro__):
        if klass is object:
            continue
        docs.update(_class_attribute_docs(klass))
    return docs


def _class_attribute_docs(klass: type) -> dict[str, str]:
    class_def = _class_node(klass)
    if class_def is None:
        return {}

    docs: dict[str, str] = {}
    body = class_def.body
    for node, following in zip(body, body[1:], strict=False):
        if not (isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name)):
            continue
        if (
            isinstance(following, ast.Expr)
            and isinstance(following.value, ast.Constant)
            and isinstance(following.value.value, str)
        ):
            docs[node.target.id] = following.value.value
    return docs


def _class_node(klass: type) -> ast.ClassDef | None:
    source = None
    with contextlib.suppress(OSError, TypeError):
        source = inspect.getsource(klass)
    if source is None:
        logger.debug(
            "No source for {model}, attribute docstrings ignored", model=klass.__qualname__
        )
        return None

    try:
        tree = ast.parse(textwrap.dedent(source))
    except SyntaxError:
        # Docstring lines indented less than the class defeat dedent
        logger.debug("Reading {model} from its module source", model=klass.__qualname__)
        return _class_node_in_module(klass)

    return next((n for n in tree.body if isinstance(n, ast.ClassDef)), None)


def _class_node_in_module(klass: type) -> ast.ClassDef | None:
    source = None
    with contextlib.suppress(OSError, TypeError):
        source = inspect.getsource(inspect.getmodule(klass))  # type: ignore[arg-type]
    if source is None:
        return None

    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        logger.debug("Cannot parse source of {model}: {error}", model=klass.__qualname__, error=e)
        return None

    # Follow the qualified name through class and function bodies
    node: ast.AST | None = None
    scope = tree.body
    for part in klass.__qualname__.split("."):
        if part == "<locals>":
            continue
        matches = [
            n
            for n in scope
            if isinstance(n, ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef)
            and n.name == part
        ]
        if not matches:
            logger.debug(
                "Definition of {model} not found in its module", model=klass.__qualname__
            )
            return None
        node = matches[-1]
        scope = node.body
    return node if isinstance(node, ast.ClassDef) else None


def description_from_doc(doc: str | None) -> str | None:
    """Pull the ``@Description`` tag out of a field's documentation.

    Examples
    --------
    >>> description_from_doc('@Description "A human-readable tag label"  ')
    'A human-readable tag label'
    >>> description_from_doc("plain docs") is None
    True
    """
    if not doc:
        return None
    match = DESCRIPTION_TAG.search(doc)
    if match is None:
        return None
    return match.group(1).strip(_TRIM_CHARS) or None


def element_hint_from_doc(doc: str | None) -> str | None:
    """Pull the model name out of an ``@var Model[]`` hint.

    Examples
    --------
    >>> element_hint_from_doc("@var Tag[]")
    'Tag'
    >>> element_hint_from_doc("@var shop.models.Tag[]")
    'shop.models.Tag'
    """
    if not doc:
        return None
    match = ELEMENT_MODEL_TAG.search(doc)
    return match.group(1) if match else None


def _primitive_kind(type_hint: Any) -> PrimitiveKind | None:
    # Generic aliases may carry unhashable metadata; only plain types are keys
    if type_hint is Any or isinstance(type_hint, type):
        return PRIMITIVE_KINDS.get(type_hint)
    return None


def _description_from_metadata(metadata: tuple[Any, ...]) -> str | None:
    # pydantic FieldInfo and similar markers expose a ``description`` attribute
    for item in metadata:
        description = getattr(item, "description", None)
        if isinstance(description, str) and description:
            return description
    return None


class DeclarationIntrospector:
    """Build ``ModelDeclaration`` values from model classes.

    Element-model hints are resolved through ``registry``; nothing is cached,
    every call re-reads the class.
    """

    def __init__(self, registry: ModelRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry

    def introspect(self, model: type) -> ModelDeclaration:
        """Describe the public annotated fields of ``model`` in declaration order.

        Raises
        ------
        UnsupportedFieldKindError
            If a field's type cannot be classified or does not resolve
        """
        hints = self._type_hints(model)
        docs = extract_attribute_docs(model)

        fields = []
        for name, hint in hints.items():
            if name.startswith("_") or is_classvar_type(hint):
                continue
            fields.append(self._declare_field(model, name, hint, docs.get(name)))

        logger.debug(
            "Introspected {model} ({count} fields)", model=model.__name__, count=len(fields)
        )
        return ModelDeclaration(name=model.__name__, model=model, fields=tuple(fields))

    def _type_hints(self, model: type) -> dict[str, Any]:
        try:
            return get_type_hints(model, include_extras=True)
        except NameError as e:
            missing = getattr(e, "name", None) or str(e)
            field = self._field_referencing(model, missing)
            raise UnsupportedFieldKindError(model.__name__, field, missing) from e

    @staticmethod
    def _field_referencing(model: type, missing: str) -> str:
        for klass in model.__mro__:
            for name, annotation in inspect.get_annotations(klass).items():
                if isinstance(annotation, str) and missing in annotation:
                    return name
        return "?"

    def _declare_field(
        self, model: type, name: str, hint: Any, doc: str | None
    ) -> FieldDeclaration:
        description = None
        base = hint
        if is_annotated_type(base):
            base, metadata = get_annotated_metadata(base)
            description = _description_from_metadata(metadata)

        base, nullable = split_optional(base)

        # Optional[Annotated[...]]
        if is_annotated_type(base):
            base, metadata = get_annotated_metadata(base)
            description = description or _description_from_metadata(metadata)

        if is_union_type(base):
            raise UnsupportedFieldKindError(model.__name__, name, hint)

        if description is None:
            description = description_from_doc(doc)

        primitive_kind = _primitive_kind(base)
        if primitive_kind is not None:
            return FieldDeclaration(
                name=name,
                kind=FieldKind.PRIMITIVE,
                primitive_kind=primitive_kind,
                nullable=nullable,
                description=description,
            )

        if is_model_class(base):
            return FieldDeclaration(
                name=name,
                kind=FieldKind.NESTED_MODEL,
                nullable=nullable,
                description=description,
                model=base,
            )

        if is_list_type(base):
            element = self._element_model(model, base, doc)
            if element is not None:
                return FieldDeclaration(
                    name=name,
                    kind=FieldKind.COLLECTION,
                    nullable=nullable,
                    description=description,
                    model=element,
                )
            return FieldDeclaration(
                name=name,
                kind=FieldKind.UNTYPED_ARRAY,
                nullable=nullable,
                description=description,
            )

        raise UnsupportedFieldKindError(model.__name__, name, hint)

    def _element_model(self, model: type, list_hint: Any, doc: str | None) -> type | None:
        args = get_args(list_hint)
        if args:
            item = args[0]
            if is_annotated_type(item):
                item, _ = get_annotated_metadata(item)
            if is_model_class(item):
                return item

        hint_name = element_hint_from_doc(doc)
        if hint_name is None:
            return None

        resolved = self.registry.resolve(hint_name, model.__module__)
        if not is_model_class(resolved):
            logger.debug(
                "Element hint {hint} on {model} did not resolve to a model",
                hint=hint_name,
                model=model.__name__,
            )
            return None
        return resolved
