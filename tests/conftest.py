"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables before cartkit reads them
os.environ.setdefault("CART_STORE", "memory")

from cartkit.cart import Cart, MemoryStore  # noqa: E402


@pytest.fixture
def store():
    """Empty in-memory store"""
    return MemoryStore()


@pytest.fixture
def spy_store(store):
    """In-memory store with call tracking"""
    return Mock(wraps=store)


@pytest.fixture
def cart(store):
    """Cart on an empty in-memory store"""
    return Cart(store)


@pytest.fixture
def sample_item():
    """Sample cart item data"""
    return {
        "id": 1,
        "price": 10.0,
        "quantity": 1,
        "name": "ChatGPT Plus",
        "tags": ["ai", "subscription"],
    }


@pytest.fixture
def second_item():
    """Another cart item with a string id"""
    return {
        "id": "sku-42",
        "price": 4.5,
        "quantity": 3,
        "name": "Gift card",
    }
