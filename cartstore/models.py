"""Cart models and inventory payloads."""
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ItemId = Union[int, str]

# Fields the cart knows by name; everything else the catalog sends rides along in ``extra``
_KNOWN_FIELDS = ("id", "title", "price", "image", "amount")


class StockLevel(BaseModel):
    """Body of ``GET stock/{id}``."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[ItemId] = None
    amount: int = Field(ge=0)


class ProductInfo(BaseModel):
    """Body of ``GET products/{id}``. Unknown catalog fields are kept."""
    model_config = ConfigDict(extra="allow")

    id: ItemId
    title: str = ""
    price: Any = None
    image: Optional[str] = None


@dataclass
class CartItem:
    """Single product line in the cart."""
    id: ItemId
    amount: int
    title: str = ""
    price: Any = None
    image: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_product(cls, product: ProductInfo, amount: int = 1, item_id: Optional[ItemId] = None) -> "CartItem":
        """Build a cart line from catalog metadata, keyed by ``item_id`` when given."""
        data = product.model_dump()
        data.pop("amount", None)
        product_id = data.pop("id")
        return cls(
            id=product_id if item_id is None else item_id,
            amount=amount,
            title=data.pop("title", ""),
            price=data.pop("price", None),
            image=data.pop("image", None),
            extra=data,
        )

    def to_dict(self) -> dict:
        """Convert to the snapshot representation (product fields + amount)."""
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "image": self.image,
            "amount": self.amount,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        """Create from a snapshot entry. Raises ValueError on malformed data."""
        if not isinstance(data, dict):
            raise ValueError(f"cart entry must be an object, got {type(data).__name__}")
        item_id = data.get("id")
        if isinstance(item_id, bool) or not isinstance(item_id, (int, str)):
            raise ValueError(f"cart entry has invalid id {item_id!r}")
        amount = data.get("amount")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
            raise ValueError(f"cart entry {item_id!r} has invalid amount {amount!r}")
        return cls(
            id=item_id,
            amount=amount,
            title=data.get("title", ""),
            price=data.get("price"),
            image=data.get("image"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        )


@dataclass
class Cart:
    """
    Ordered, id-unique collection of cart items.

    Insertion order is display order. The ``with_*``/``without`` helpers
    return a new Cart and leave the receiver untouched, so a failed write
    never leaks a half-applied change into the live cart.
    """
    items: list[CartItem] = field(default_factory=list)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: object) -> bool:
        return self.index_of(item_id) is not None

    def index_of(self, item_id: object) -> Optional[int]:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return None

    def find(self, item_id: object) -> Optional[CartItem]:
        index = self.index_of(item_id)
        return None if index is None else self.items[index]

    @property
    def size(self) -> int:
        """Number of distinct products (the header badge)."""
        return len(self.items)

    @property
    def total_amount(self) -> int:
        """Total number of units across all products."""
        return sum(item.amount for item in self.items)

    def amounts(self) -> dict[ItemId, int]:
        """Map of item id to amount, in cart order."""
        return {item.id: item.amount for item in self.items}

    def with_item(self, item: CartItem) -> "Cart":
        """Append a new item at the end."""
        if item.id in self:
            raise ValueError(f"item {item.id!r} is already in the cart")
        return Cart(items=[*self.items, item])

    def with_amount(self, item_id: ItemId, amount: int) -> "Cart":
        """Copy of the cart with one item's amount replaced."""
        index = self.index_of(item_id)
        if index is None:
            raise KeyError(item_id)
        items = list(self.items)
        items[index] = replace(items[index], amount=amount)
        return Cart(items=items)

    def without(self, item_id: ItemId) -> "Cart":
        """Copy of the cart with one item removed, order of the rest kept."""
        if item_id not in self:
            raise KeyError(item_id)
        return Cart(items=[item for item in self.items if item.id != item_id])

    def to_list(self) -> list[dict]:
        """Convert to the snapshot representation."""
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_list(cls, data: list) -> "Cart":
        """Create from a snapshot. Raises ValueError on malformed data."""
        if not isinstance(data, list):
            raise ValueError(f"cart snapshot must be a list, got {type(data).__name__}")
        items = [CartItem.from_dict(entry) for entry in data]
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            raise ValueError("cart snapshot contains duplicate ids")
        return cls(items=items)


__all__ = [
    "ItemId",
    "StockLevel",
    "ProductInfo",
    "CartItem",
    "Cart",
]
