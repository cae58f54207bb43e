"""Cart item model."""
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

ItemId = Union[int, str]


class CartItem(BaseModel):
    """
    Single line item in the cart.

    Only ``id``, ``price`` and ``quantity`` are read by the cart. Any other
    field the caller supplies is kept as-is and persisted with the record.
    Subclass to declare typed extra fields.
    """

    model_config = ConfigDict(extra="allow")

    id: ItemId = Field(description="Unique item identifier")
    price: Union[int, float] = Field(description="Unit price, int prices stay int")
    quantity: int = Field(description="Number of units in the cart")

    @property
    def amount(self) -> float:
        """Line total (quantity * price)."""
        return self.quantity * self.price

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict, extra fields included."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from dictionary."""
        return cls.model_validate(data)
