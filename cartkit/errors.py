"""
Cart Errors

Exception types raised by the cart and its stores, plus the shared
message constants.
"""

# Messages
ERROR_INVALID_ITEM = "Invalid item passed to add method"
ERROR_NO_STORE = "Cart can only be used with a configured persistence store"
ERROR_REDIS_CREDENTIALS = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"
ERROR_UNKNOWN_STORE = "Unknown CART_STORE value"
ERROR_STORAGE_UNAVAILABLE = "Cart storage unavailable"


class CartError(Exception):
    """Base class for cart errors."""


class EnvironmentUnavailable(CartError, RuntimeError):
    """No persistence store is available; the cart cannot be constructed."""


class InvalidItem(CartError, ValueError):
    """Item passed to ``Cart.add`` is missing an id/price or has quantity <= 0."""

    def __init__(self, message: str = ERROR_INVALID_ITEM, item=None):
        super().__init__(message)
        self.item = item


class StorageError(CartError):
    """A store adapter failed to read or write."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


__all__ = [
    "ERROR_INVALID_ITEM",
    "ERROR_NO_STORE",
    "ERROR_REDIS_CREDENTIALS",
    "ERROR_UNKNOWN_STORE",
    "ERROR_STORAGE_UNAVAILABLE",
    "CartError",
    "EnvironmentUnavailable",
    "InvalidItem",
    "StorageError",
]
