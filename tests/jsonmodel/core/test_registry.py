"""Tests for the model registry."""

import pytest

from jsonmodel import BaseModel
from jsonmodel.core.exceptions import ConfigurationError
from jsonmodel.core.registry import ModelRegistry, default_registry, import_model, qualified_name


class Tag(BaseModel):
    label: str


class TestModelRegistry:
    """Test registration and lookup."""

    def test_subclasses_register_automatically(self):
        """Test BaseModel subclasses land in the default registry."""
        assert default_registry.get(qualified_name(Tag)) is Tag
        assert qualified_name(Tag) in default_registry

    def test_resolve_bare_name_against_module(self):
        """Test bare names are qualified with the declaring module."""
        registry = ModelRegistry()
        registry.register(Tag, "shop.Tag")
        assert registry.resolve("Tag", "shop") is Tag
        assert registry.resolve("Tag", "other") is None

    def test_resolve_qualified_name(self):
        """Test dotted names are looked up as-is."""
        registry = ModelRegistry()
        registry.register(Tag, "shop.Tag")
        assert registry.resolve("shop.Tag", "anywhere") is Tag

    def test_register_replaces_and_unregister(self):
        """Test re-registering replaces and unregister removes."""
        registry = ModelRegistry()

        class Other:
            pass

        registry.register(Tag, "x.Model")
        registry.register(Other, "x.Model")
        assert registry.get("x.Model") is Other
        assert len(registry) == 1

        registry.unregister("x.Model")
        assert registry.get("x.Model") is None
        assert registry.names() == []


    def test_resolve_nested_class_by_bare_name(self):
        """Test bare names also find classes nested in a function of the module."""

        class Badge(BaseModel):
            text: str

        assert "<locals>" in qualified_name(Badge)
        assert default_registry.resolve("Badge", __name__) is Badge

    def test_ambiguous_nested_names_do_not_resolve(self):
        """Test two nested classes sharing a bare name are not guessed between."""
        registry = ModelRegistry()

        class First:
            pass

        class Second:
            pass

        First.__name__ = Second.__name__ = "Badge"
        registry.register(First, f"{__name__}.a.Badge")
        registry.register(Second, f"{__name__}.b.Badge")

        assert registry.resolve("Badge", __name__) is None
        assert registry.resolve(f"{__name__}.a.Badge", "anywhere") is First


class TestImportModel:
    """Test importing model classes from references."""

    def test_import_model(self):
        """Test a module:Class reference."""
        assert import_model("jsonmodel.model:BaseModel") is BaseModel

    @pytest.mark.parametrize(
        "reference",
        ["no_colon", "jsonmodel.model:", ":BaseModel", "no.such.module:Thing", "jsonmodel:Nope"],
    )
    def test_bad_references(self, reference):
        """Test malformed or unresolvable references."""
        with pytest.raises(ConfigurationError):
            import_model(reference)

    def test_not_a_class(self):
        """Test references to non-classes are rejected."""
        with pytest.raises(ConfigurationError, match="is not a class"):
            import_model("jsonmodel:__version__")
