"""Shared type-resolution helpers.

Type-hint inspection utilities used by the declaration introspector, plus the
naming of JSON value kinds used in parse error messages.
"""

from types import NoneType, UnionType
from typing import Annotated, Any, ClassVar, TypeAlias, Union, get_args, get_origin

# Logger type (loguru.Logger - using Any to avoid import)
Logger: TypeAlias = Any  # loguru.Logger

# Decoded JSON value (output of a JSON decoder)
JsonValue: TypeAlias = dict[str, Any] | list[Any] | str | int | float | bool | None


# ============================================================================
# Type Inspection Utilities
# ============================================================================


def is_union_type(type_hint: Any) -> bool:
    """Check if type hint is a Union type (including | syntax).

    Examples
    --------
    >>> from typing import Optional
    >>> is_union_type(Optional[str])
    True
    >>> is_union_type(str | None)
    True
    >>> is_union_type(str)
    False
    """
    return get_origin(type_hint) is Union or isinstance(type_hint, UnionType)


def is_list_type(type_hint: Any) -> bool:
    """Check if type hint is a list type.

    Examples
    --------
    >>> is_list_type(list[str])
    True
    >>> is_list_type(list)
    True
    >>> is_list_type(str)
    False
    """
    origin = get_origin(type_hint)
    return origin is list or type_hint is list


def is_annotated_type(type_hint: Any) -> bool:
    """Check if type hint is an Annotated type.

    Examples
    --------
    >>> from typing import Annotated
    >>> is_annotated_type(Annotated[int, "meta"])
    True
    >>> is_annotated_type(int)
    False
    """
    return get_origin(type_hint) is Annotated


def is_classvar_type(type_hint: Any) -> bool:
    """Check if type hint is a ClassVar declaration."""
    return type_hint is ClassVar or get_origin(type_hint) is ClassVar


def get_annotated_metadata(type_hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Extract base type and metadata from Annotated type.

    Examples
    --------
    >>> from typing import Annotated
    >>> base, metadata = get_annotated_metadata(Annotated[int, "meta"])
    >>> base
    <class 'int'>
    >>> metadata
    ('meta',)
    """
    args = get_args(type_hint)
    if not args:
        return type_hint, ()

    base_type = args[0]
    metadata = args[1:] if len(args) > 1 else ()

    return base_type, metadata


def split_optional(type_hint: Any) -> tuple[Any, bool]:
    """Strip ``None`` from a union and report whether it was present.

    Unions with more than one non-None member are returned unchanged (still a
    union), so callers can reject them.

    Examples
    --------
    >>> split_optional(str | None)
    (<class 'str'>, True)
    >>> split_optional(int)
    (<class 'int'>, False)
    """
    if not is_union_type(type_hint):
        return type_hint, False

    args = get_args(type_hint)
    non_none_args = [arg for arg in args if arg is not NoneType]
    nullable = len(non_none_args) != len(args)

    if len(non_none_args) == 1:
        return non_none_args[0], nullable
    if nullable:
        return Union[tuple(non_none_args)], True  # noqa: UP007
    return type_hint, False


# ============================================================================
# JSON Value Kinds
# ============================================================================


def json_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value.

    Examples
    --------
    >>> json_kind(42)
    'integer'
    >>> json_kind(True)
    'boolean'
    >>> json_kind({"a": 1})
    'object'
    """
    # bool before int: bool is an int subclass
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list | tuple):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
