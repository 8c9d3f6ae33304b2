"""Model registry - explicit name to model-class lookup table.

Element-model hints such as ``@var Tag[]`` name a model by string. The
introspector resolves those names through a registry instead of searching
module globals. ``BaseModel`` subclasses register themselves in
``default_registry`` when they are created.
"""

from __future__ import annotations

import importlib
from threading import Lock

from jsonmodel.core.exceptions import ConfigurationError
from jsonmodel.core.logging import get_logger

logger = get_logger(__name__)

QUALIFIED_SEPARATOR = "."


class ModelRegistry:
    """Maps qualified model names (``module.ClassName``) to model classes.

    Writes happen at class-creation time and are guarded by a lock; lookups
    are plain dict reads.
    """

    def __init__(self) -> None:
        self._models: dict[str, type] = {}
        self._lock = Lock()

    def register(self, model: type, name: str | None = None) -> None:
        """Register ``model`` under ``name`` (defaults to its qualified name).

        Re-registering a name replaces the previous class, so reloading a
        module keeps the newest definition.
        """
        key = name or qualified_name(model)
        with self._lock:
            previous = self._models.get(key)
            self._models[key] = model
        if previous is not None and previous is not model:
            logger.debug("Replaced registered model {key}", key=key)

    def unregister(self, name: str) -> None:
        with self._lock:
            self._models.pop(name, None)

    def get(self, name: str) -> type | None:
        return self._models.get(name)

    def resolve(self, name: str, module: str) -> type | None:
        """Resolve a model name as written in a hint.

        Names containing a dot are treated as fully qualified. Bare names are
        qualified with ``module``, the module of the declaring model. A bare
        name that is not registered at module level also matches a class
        nested in a class body or function of that module, provided exactly
        one such class carries the name.

        Examples
        --------
        >>> registry = ModelRegistry()
        >>> class Tag: ...
        >>> registry.register(Tag, "shop.Tag")
        >>> registry.resolve("Tag", "shop") is Tag
        True
        >>> registry.resolve("shop.Tag", "elsewhere") is Tag
        True
        >>> registry.resolve("Tag", "elsewhere") is None
        True
        """
        if QUALIFIED_SEPARATOR in name:
            return self.get(name)

        found = self.get(f"{module}{QUALIFIED_SEPARATOR}{name}")
        if found is not None:
            return found

        with self._lock:
            candidates = {
                model
                for model in self._models.values()
                if model.__module__ == module and model.__name__ == name
            }
        if len(candidates) == 1:
            return candidates.pop()
        if candidates:
            logger.debug(
                "Ambiguous model name {name} in {module} ({count} nested classes)",
                name=name,
                module=module,
                count=len(candidates),
            )
        return None

    def names(self) -> list[str]:
        return sorted(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)


def qualified_name(model: type) -> str:
    """Return ``module.QualName`` for a class."""
    return f"{model.__module__}{QUALIFIED_SEPARATOR}{model.__qualname__}"


def import_model(reference: str) -> type:
    """Import a model class from a ``package.module:ClassName`` reference.

    Raises
    ------
    ConfigurationError
        If the reference is malformed, the module cannot be imported or the
        attribute does not exist
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError("model", f"expected 'module:ClassName', got {reference!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError("model", f"cannot import module {module_name!r}: {e}") from e

    target: object = module
    for part in attr.split(QUALIFIED_SEPARATOR):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigurationError(
                "model", f"{module_name!r} has no attribute {attr!r}"
            ) from e

    if not isinstance(target, type):
        raise ConfigurationError("model", f"{reference!r} is not a class")
    return target


default_registry = ModelRegistry()
