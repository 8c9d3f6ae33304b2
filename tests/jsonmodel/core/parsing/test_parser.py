"""Tests for ValueParser."""

from __future__ import annotations

import json

import pytest

from jsonmodel import BaseModel
from jsonmodel.core.exceptions import (
    InvalidJsonError,
    MissingFieldError,
    TypeMismatchError,
)
from jsonmodel.core.parsing import ParseOptions, ValueParser, decode_json


class Address(BaseModel):
    street: str
    city: str
    state: str
    zip: str
    phone: str | None = None


class User(BaseModel):
    id: str
    name: str
    address: Address
    nickname: str | None = None


class Tag(BaseModel):
    label: str


class Product(BaseModel):
    id: str
    quantity: int
    price: float
    inStock: bool
    data: list

    tags: list
    """@var Tag[]"""


class Node(BaseModel):
    label: str
    children: list[Node]


class Guarded(BaseModel):
    value: int

    def __init__(self, **values):
        raise AssertionError("__init__ must not run while parsing")


PRODUCT = {
    "id": "p1",
    "quantity": 5,
    "price": 19.99,
    "inStock": True,
    "data": [],
    "tags": [{"label": "new"}, {"label": "sale"}],
}


@pytest.fixture
def parser() -> ValueParser:
    return ValueParser()


class TestInvalidJson:
    """Test malformed input text."""

    def test_invalid_json(self, parser):
        """Test the decoder diagnostic is carried in the error."""
        with pytest.raises(InvalidJsonError, match="Invalid JSON") as exc_info:
            parser.parse(Product, "{invalid json}")
        assert exc_info.value.reason
        assert exc_info.value.reason in str(exc_info.value)

    def test_decode_json_reports_position(self):
        """Test line and column are kept when available."""
        with pytest.raises(InvalidJsonError) as exc_info:
            decode_json('{\n  "a": }')
        assert exc_info.value.line == 2

    def test_top_level_must_be_object(self, parser):
        """Test a non-object document is a type mismatch."""
        with pytest.raises(TypeMismatchError, match="Tag must be an object, got array"):
            parser.parse(Tag, "[1, 2]")


class TestNestedModels:
    """Test nested model fields."""

    def test_valid_nested_model(self, parser):
        """Test nested objects become nested instances."""
        payload = {
            "id": "u1",
            "name": "Alice",
            "address": {
                "street": "1 Infinite Loop",
                "city": "Cupertino",
                "state": "CA",
                "zip": "95014",
                "phone": None,
            },
        }
        user = parser.parse(User, json.dumps(payload))

        assert isinstance(user, User)
        assert isinstance(user.address, Address)
        assert user.address.city == "Cupertino"
        assert user.address.phone is None

    def test_nested_model_requires_object(self, parser):
        """Test a number for a nested model field."""
        payload = {"id": "123", "name": "John Doe", "address": 42, "nickname": None}
        with pytest.raises(TypeMismatchError) as exc_info:
            parser.parse(User, json.dumps(payload))
        assert str(exc_info.value) == "address must be an object, got integer"
        assert exc_info.value.field == "address"
        assert exc_info.value.actual == "integer"

    def test_nested_error_propagates_unwrapped(self, parser):
        """Test errors inside a nested model name the inner field only."""
        payload = {"id": "u1", "name": "A", "address": {"street": {"no": 1}}}
        with pytest.raises(TypeMismatchError) as exc_info:
            parser.parse(User, json.dumps(payload))
        assert str(exc_info.value) == "street must be a string, got object"

    def test_recursive_data(self, parser):
        """Test self-referencing models parse finite data."""
        payload = {"label": "root", "children": [{"label": "leaf", "children": []}]}
        node = parser.parse(Node, json.dumps(payload))
        assert node.children[0].label == "leaf"
        assert node.children[0].children == []


class TestCollections:
    """Test collection-of-model fields."""

    def test_valid_array_of_models(self, parser):
        """Test each element becomes a model instance."""
        product = parser.parse(Product, json.dumps(PRODUCT))

        assert isinstance(product, Product)
        assert len(product.tags) == 2
        assert all(isinstance(tag, Tag) for tag in product.tags)
        assert product.tags[0].label == "new"

    def test_array_item_must_be_object(self, parser):
        """Test a non-object element aborts the parse."""
        payload = {**PRODUCT, "tags": [42, {"label": "valid tag"}]}
        with pytest.raises(TypeMismatchError) as exc_info:
            parser.parse(Product, json.dumps(payload))
        assert str(exc_info.value) == "Array item in 'tags' must be an object, got integer"

    def test_collection_requires_array(self, parser):
        """Test a string for a collection field."""
        payload = {**PRODUCT, "tags": "should be array"}
        with pytest.raises(TypeMismatchError, match="tags must be an array, got string"):
            parser.parse(Product, json.dumps(payload))

    def test_untyped_array_passes_through(self, parser):
        """Test untyped arrays keep their raw elements."""
        payload = {**PRODUCT, "data": [1, "two", {"three": 3}]}
        product = parser.parse(Product, json.dumps(payload))
        assert product.data == [1, "two", {"three": 3}]

    def test_untyped_array_requires_array(self, parser):
        """Test a scalar for an untyped array field."""
        payload = {**PRODUCT, "data": 7}
        with pytest.raises(TypeMismatchError, match="data must be an array, got integer"):
            parser.parse(Product, json.dumps(payload))


class TestPrimitives:
    """Test scalar coercion."""

    def test_scalar_coercion(self, parser):
        """Test values are converted to the declared primitive kind."""
        payload = {**PRODUCT, "id": 77, "quantity": "12", "price": 3, "inStock": 1}
        product = parser.parse(Product, json.dumps(payload))

        assert product.id == "77"
        assert product.quantity == 12
        assert isinstance(product.price, float)
        assert product.price == 3.0
        assert product.inStock is True

    def test_uncoercible_value(self, parser):
        """Test a value the coercion rejects."""
        payload = {**PRODUCT, "quantity": "many"}
        with pytest.raises(TypeMismatchError, match="quantity must be an integer, got string"):
            parser.parse(Product, json.dumps(payload))

    def test_object_for_primitive(self, parser):
        """Test containers are never coerced to scalars."""
        payload = {**PRODUCT, "price": [1.0]}
        with pytest.raises(TypeMismatchError, match="price must be a number, got array"):
            parser.parse(Product, json.dumps(payload))


class TestLeniency:
    """Test the default lenient handling of nulls and absent fields."""

    def test_null_accepted_for_non_nullable(self, parser):
        """Test null is assigned regardless of declared nullability."""
        tag = parser.parse(Tag, '{"label": null}')
        assert tag.label is None

    def test_absent_fields_left_unset(self, parser):
        """Test missing keys are skipped without error."""
        user = parser.parse(User, '{"id": "u1"}')
        assert user.id == "u1"
        assert not hasattr(user, "name")
        assert user.nickname is None  # class default

    def test_extra_keys_ignored(self, parser):
        """Test undeclared keys are ignored."""
        tag = parser.parse(Tag, '{"label": "x", "color": "red"}')
        assert not hasattr(tag, "color")

    def test_init_is_bypassed(self, parser):
        """Test instances are built without calling __init__."""
        guarded = parser.parse(Guarded, '{"value": 3}')
        assert guarded.value == 3

    def test_parse_data_accepts_decoded_json(self, parser):
        """Test already-decoded data is parsed without re-encoding."""
        product = parser.parse_data(Product, PRODUCT)
        assert product.tags[1].label == "sale"


class TestStrictOptions:
    """Test opt-in strictness."""

    def test_reject_null_for_non_nullable(self):
        """Test null is refused for non-nullable fields."""
        parser = ValueParser(options=ParseOptions(reject_null_for_non_nullable=True))
        with pytest.raises(TypeMismatchError, match="label must not be null, got null"):
            parser.parse(Tag, '{"label": null}')

    def test_null_still_allowed_for_nullable(self):
        """Test nullable fields keep accepting null in strict mode."""
        parser = ValueParser(options=ParseOptions(reject_null_for_non_nullable=True))
        user = parser.parse(User, '{"id": "u1", "nickname": null}')
        assert user.nickname is None

    def test_reject_missing_fields(self):
        """Test absent fields raise in strict mode."""
        parser = ValueParser(options=ParseOptions(reject_missing_fields=True))
        with pytest.raises(MissingFieldError) as exc_info:
            parser.parse(User, '{"id": "u1"}')
        assert exc_info.value.field == "name"
        assert exc_info.value.model == "User"
