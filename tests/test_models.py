"""
Tests for CartItem model
"""

import pytest
from pydantic import ValidationError

from cartkit.cart import CartItem


class TestCartItem:
    """Tests for CartItem."""

    def test_create_cart_item(self):
        """Test creating a cart item."""
        item = CartItem(id="prod-123", price=299.0, quantity=2)

        assert item.id == "prod-123"
        assert item.price == 299.0
        assert item.quantity == 2

    def test_integer_id_kept_as_int(self):
        """Test int ids are not coerced to strings."""
        item = CartItem(id=7, price=1.0, quantity=1)

        assert item.id == 7
        assert isinstance(item.id, int)

    def test_extra_fields_preserved(self):
        """Test caller-defined fields are kept on the record."""
        item = CartItem(id=1, price=10.0, quantity=1, name="Mug", color="red")

        assert item.name == "Mug"
        assert item.to_dict()["color"] == "red"

    def test_amount(self):
        """Test line total."""
        item = CartItem(id=1, price=2.5, quantity=4)

        assert item.amount == 10.0

    def test_from_dict(self):
        """Test deserialization from dict."""
        data = {"id": "prod-1", "price": 100.0, "quantity": 2, "note": "gift"}

        item = CartItem.from_dict(data)

        assert item.id == "prod-1"
        assert item.to_dict() == data

    def test_missing_price_rejected(self):
        """Test required fields are enforced."""
        with pytest.raises(ValidationError):
            CartItem.from_dict({"id": 1, "quantity": 1})


class TestCustomItemType:
    """Tests for subclassed item models."""

    class Product(CartItem):
        name: str
        sku: str = ""

    def test_subclass_round_trip(self):
        """Test declared fields on a subclass survive serialization."""
        item = self.Product(id=1, price=5.0, quantity=1, name="Pen", sku="P-1")

        restored = self.Product.from_dict(item.to_dict())

        assert restored.name == "Pen"
        assert restored.sku == "P-1"


class TestPriceTypes:
    """Tests for price number types."""

    def test_int_price_stays_int(self):
        """Test int prices are not turned into floats."""
        item = CartItem(id=1, price=10, quantity=1)

        assert isinstance(item.price, int)
        assert item.to_dict()["price"] == 10

    def test_float_price_stays_float(self):
        """Test float prices keep their value."""
        assert CartItem(id=1, price=2.5, quantity=1).price == 2.5
