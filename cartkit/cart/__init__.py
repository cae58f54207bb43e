"""Cart package: item model, stores, and the persisted cart."""
from .models import CartItem, ItemId
from .service import Cart, get_cart
from .storage import KeyValueStore, MemoryStore, FileStore, RedisStore, get_default_store

__all__ = [
    "CartItem",
    "ItemId",
    "Cart",
    "get_cart",
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "RedisStore",
    "get_default_store",
]
