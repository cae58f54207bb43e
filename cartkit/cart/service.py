"""Cart service: an item mapping persisted to a key-value store."""
import json
from collections.abc import Mapping
from typing import Generic, Iterator, Optional, Type, TypeVar, Union

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from cartkit import config
from cartkit.errors import InvalidItem, ERROR_INVALID_ITEM
from cartkit.logging import get_logger, sanitize_id_for_logging
from .models import CartItem, ItemId
from .storage import KeyValueStore, get_default_store

logger = get_logger(__name__)

T = TypeVar("T", bound=CartItem)


class Cart(Generic[T]):
    """
    Shopping cart kept in memory and mirrored to a key-value store.

    Features:
    - One record per item id; adding an existing id bumps its quantity
    - Whole cart rewritten to the store after every change
    - Discount / tax applied to every unit price at once
    - Restored from the store on construction

    The snapshot is a JSON list of ``[id, record]`` pairs stored under
    ``storage_key``.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        *,
        storage_key: Optional[str] = None,
        item_type: Type[T] = CartItem,
    ):
        # Raises EnvironmentUnavailable when nothing is configured
        self._store = store if store is not None else get_default_store()
        self.storage_key = storage_key or config.CART_STORAGE_KEY
        self.item_type = item_type
        self._items: dict[ItemId, T] = self._load()

    def _load(self) -> dict[ItemId, T]:
        """
        Read the saved snapshot, or start empty.

        An unreadable snapshot is deleted. Single records that fail
        validation are skipped and the rest of the cart is kept.
        """
        data = self._store.get(self.storage_key)
        if data is None:
            return {}

        try:
            pairs = json.loads(data)
            if not isinstance(pairs, list):
                raise TypeError(f"expected a list of pairs, got {type(pairs).__name__}")
        except (ValueError, TypeError) as e:
            # Corrupted data - clear it and start over
            logger.warning(f"Corrupted cart snapshot under '{self.storage_key}': {e}")
            self._store.delete(self.storage_key)
            return {}

        items: dict[ItemId, T] = {}
        for pair in pairs:
            try:
                key, record = pair
                items[key] = self.item_type.from_dict(record)
            except (ValueError, TypeError) as e:
                key = pair[0] if isinstance(pair, list) and pair else None
                logger.warning(
                    f"Skipping unreadable record {sanitize_id_for_logging(key)} "
                    f"in cart '{self.storage_key}': {e}"
                )
        return items

    def _persist(self) -> None:
        """Write the full cart image to the store."""
        payload = json.dumps(
            [[key, item.to_dict()] for key, item in self._items.items()]
        )
        self._store.set(self.storage_key, payload)
        logger.debug(f"Saved cart '{self.storage_key}' ({len(self._items)} items)")

    def _coerce(self, item: Union[T, Mapping]) -> T:
        if isinstance(item, self.item_type):
            return item
        if isinstance(item, CartItem):
            item = item.to_dict()
        if not isinstance(item, Mapping):
            raise InvalidItem(item=item)
        try:
            return self.item_type.model_validate(dict(item))
        except ValidationError as e:
            raise InvalidItem(f"{ERROR_INVALID_ITEM}: {e.error_count()} validation error(s)", item=item) from e

    def add(self, item: Union[T, Mapping]) -> None:
        """
        Add an item, or bump its quantity by one if the id is already here.

        Only a new id stores the record (as a shallow copy); for an existing
        id the incoming price and quantity are ignored.

        Raises:
            InvalidItem: id or price is falsy, quantity <= 0, or a field
                cannot be stored as JSON.
        """
        item = self._coerce(item)
        if not item.id or not item.price or item.quantity <= 0:
            raise InvalidItem(item=item)

        existing_item = self._items.get(item.id)
        if existing_item is not None:
            existing_item.quantity += 1
        else:
            # Must serialize before it enters the mapping
            try:
                item.to_dict()
            except PydanticSerializationError as e:
                raise InvalidItem(f"{ERROR_INVALID_ITEM}: {e}", item=item) from e
            self._items[item.id] = item.model_copy()

        self._persist()

    def remove(self, item_id: ItemId) -> None:
        """Remove an item. Missing ids are ignored; the cart is saved either way."""
        self._items.pop(item_id, None)
        self._persist()

    def less(self, item_id: ItemId) -> None:
        """Decrease quantity by one, removing the item when it reaches zero."""
        existing_item = self._items.get(item_id)
        if existing_item is not None:
            if existing_item.quantity > 1:
                existing_item.quantity -= 1
            else:
                self.remove(item_id)
                return
        self._persist()

    def more(self, item_id: ItemId) -> None:
        """Increase quantity by one."""
        existing_item = self._items.get(item_id)
        if existing_item is not None:
            existing_item.quantity += 1
        self._persist()

    def clear(self) -> None:
        """Empty the cart and delete the saved snapshot."""
        self._items.clear()
        self._store.delete(self.storage_key)
        logger.info("Cart has been cleared")

    def discount(self, rate: float) -> None:
        """
        Reduce every unit price by ``rate`` (0.1 = 10% off).

        Rates outside [0, 1] are ignored and nothing is saved. Repeated
        calls compound.
        """
        if rate < 0 or rate > 1:
            logger.debug(f"Ignoring discount rate {rate}")
            return
        for item in self._items.values():
            item.price -= item.price * rate
        self._persist()

    def apply_tax(self, rate: float) -> None:
        """Increase every unit price by ``rate`` (0.2 = 20% tax). Same guard as ``discount``."""
        if rate < 0 or rate > 1:
            logger.debug(f"Ignoring tax rate {rate}")
            return
        for item in self._items.values():
            item.price += item.price * rate
        self._persist()

    def has_item(self, item_id: ItemId) -> bool:
        return item_id in self._items

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def get_items(self) -> list[T]:
        """Current records in insertion order. These are the live objects."""
        return list(self._items.values())

    def get_product_amount(self, item_id: ItemId) -> float:
        """quantity * price for one item, 0 if it is not in the cart."""
        existing_item = self._items.get(item_id)
        return existing_item.amount if existing_item is not None else 0

    def get_product_quantity(self, item_id: ItemId) -> int:
        existing_item = self._items.get(item_id)
        return existing_item.quantity if existing_item is not None else 0

    def get_total_amount(self) -> float:
        """Sum of quantity * price over all items."""
        return sum(item.amount for item in self._items.values())

    def get_total_item_count(self) -> int:
        """Sum of quantities over all items."""
        return sum(item.quantity for item in self._items.values())

    def summary(self) -> dict:
        """Cart summary for display and API responses."""
        if self.is_empty():
            return {
                "is_empty": True,
                "total_items": 0,
                "items": [],
                "total": 0,
            }

        return {
            "is_empty": False,
            "total_items": self.get_total_item_count(),
            "items": [
                {**item.to_dict(), "amount": item.amount}
                for item in self._items.values()
            ],
            "total": self.get_total_amount(),
        }

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self.get_items())

    def __repr__(self) -> str:
        ids = ", ".join(sanitize_id_for_logging(key) for key in self._items)
        return f"Cart(storage_key={self.storage_key!r}, items=[{ids}])"


# Singleton instance
_cart: Optional[Cart] = None


def get_cart() -> Cart:
    """Get the process-wide Cart on the configured store."""
    global _cart
    if _cart is None:
        _cart = Cart()
    return _cart
