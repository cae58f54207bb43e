"""
cartkit - a persisted shopping cart.

    from cartkit import Cart, MemoryStore

    cart = Cart(MemoryStore())
    cart.add({"id": 1, "price": 10.0, "quantity": 1, "name": "Mug"})
    cart.get_total_amount()
"""
from cartkit.cart import (
    Cart,
    CartItem,
    FileStore,
    KeyValueStore,
    MemoryStore,
    RedisStore,
    get_cart,
    get_default_store,
)
from cartkit.errors import CartError, EnvironmentUnavailable, InvalidItem, StorageError

__all__ = [
    "Cart",
    "CartItem",
    "FileStore",
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
    "get_cart",
    "get_default_store",
    "CartError",
    "EnvironmentUnavailable",
    "InvalidItem",
    "StorageError",
]
