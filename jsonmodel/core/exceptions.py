"""Core exception hierarchy for jsonmodel.

All jsonmodel exceptions inherit from JsonModelError so callers can catch a
single base class. Every error is terminal: nothing is retried and no partial
instance is returned.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class JsonModelError(Exception):
    """Base exception for all jsonmodel errors.

    Catch this to handle every failure raised by schema derivation or parsing.
    """

    pass


# ============================================================================
# Declaration Errors
# ============================================================================


class UnsupportedFieldKindError(JsonModelError):
    """Raised when a field's declared type cannot be classified.

    Examples
    --------
    Example usage::

        raise UnsupportedFieldKindError("Product", "data", dict)
    """

    def __init__(self, model: str, field: str, annotation: object) -> None:
        """Initialize unsupported field kind error.

        Args
        ----
            model: Name of the model declaring the field
            field: Name of the offending field
            annotation: The declared type that could not be classified
        """
        ann_str = annotation.__name__ if isinstance(annotation, type) else repr(annotation)
        super().__init__(f"Unsupported type for field '{model}.{field}': {ann_str}")
        self.model = model
        self.field = field
        self.annotation = annotation


class CyclicModelError(JsonModelError):
    """Raised when schema derivation reaches a model already being derived.

    Examples
    --------
    Example usage::

        raise CyclicModelError(["Node", "Node"])
    """

    def __init__(self, path: list[str]) -> None:
        """Initialize cyclic model error.

        Args
        ----
            path: Model names from the outermost model to the repeated one
        """
        super().__init__(f"Cyclic model reference: {' -> '.join(path)}")
        self.path = path


# ============================================================================
# Parse Errors
# ============================================================================


class InvalidJsonError(JsonModelError):
    """Raised when input text is not valid JSON.

    The decoder's diagnostic is kept in ``reason`` and repeated in the message.
    """

    def __init__(self, reason: str, line: int | None = None, column: int | None = None) -> None:
        """Initialize invalid JSON error.

        Args
        ----
            reason: Diagnostic reported by the JSON decoder
            line: Line of the error, when the decoder reports one
            column: Column of the error, when the decoder reports one
        """
        super().__init__(f"Invalid JSON: {reason}")
        self.reason = reason
        self.line = line
        self.column = column


class TypeMismatchError(JsonModelError):
    """Raised when a JSON value's shape disagrees with the field's declared kind.

    ``expected`` is one of ``object``, ``array``, ``array of objects``,
    ``non-null`` or a JSON primitive type name.

    Examples
    --------
    Example usage::

        raise TypeMismatchError("address", "object", "integer")
    """

    def __init__(self, field: str, expected: str, actual: str) -> None:
        """Initialize type mismatch error.

        Args
        ----
            field: Name of the field holding the wrong value
            expected: Expected JSON shape
            actual: JSON kind actually found
        """
        if expected == "array of objects":
            msg = f"Array item in '{field}' must be an object, got {actual}"
        elif expected == "non-null":
            msg = f"{field} must not be null, got {actual}"
        elif expected in ("object", "array", "integer"):
            msg = f"{field} must be an {expected}, got {actual}"
        else:
            msg = f"{field} must be a {expected}, got {actual}"
        super().__init__(msg)
        self.field = field
        self.expected = expected
        self.actual = actual


class MissingFieldError(JsonModelError):
    """Raised in strict parsing mode when a declared field is absent from input."""

    def __init__(self, model: str, field: str) -> None:
        super().__init__(f"Missing field '{field}' for model '{model}'")
        self.model = model
        self.field = field


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(JsonModelError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("logging", "unknown level 'LOUD'")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


__all__ = [
    "JsonModelError",
    "UnsupportedFieldKindError",
    "CyclicModelError",
    "InvalidJsonError",
    "TypeMismatchError",
    "MissingFieldError",
    "ConfigurationError",
]
