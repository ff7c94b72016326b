"""cartstore: stock-checked shopping cart with a persistent snapshot."""
from .config import Settings
from .errors import CartErrorKind, CartStoreError, InventoryError, InventoryNotFoundError, StorageError
from .inventory import InventoryClient
from .models import Cart, CartItem, ProductInfo, StockLevel
from .notifications import CallbackNotificationSink, LoggingNotificationSink, NotificationSink
from .storage import CartStorage, MemoryCartStorage, RedisCartStorage
from .store import CartStore, create_cart_store

__all__ = [
    "Settings",
    "CartErrorKind",
    "CartStoreError",
    "InventoryError",
    "InventoryNotFoundError",
    "StorageError",
    "InventoryClient",
    "Cart",
    "CartItem",
    "ProductInfo",
    "StockLevel",
    "NotificationSink",
    "LoggingNotificationSink",
    "CallbackNotificationSink",
    "CartStorage",
    "MemoryCartStorage",
    "RedisCartStorage",
    "CartStore",
    "create_cart_store",
]
