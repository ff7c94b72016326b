"""
Cart error taxonomy.

``CartErrorKind`` is what a mutation reports when it cannot complete; the
exceptions below are raised by the collaborators (inventory, storage) and are
converted into a kind at the CartStore boundary.
"""
from enum import Enum


class CartErrorKind(str, Enum):
    """
    Failure kinds reported by CartStore mutations.

    Each kind maps to one translated message (``cart.<value>`` in the locales).
    """
    OUT_OF_STOCK_ON_ADD = "out_of_stock_on_add"
    ADD_FAILED = "add_failed"
    REMOVE_FAILED = "remove_failed"
    OUT_OF_STOCK_ON_SET = "out_of_stock_on_set"
    SET_AMOUNT_FAILED = "set_amount_failed"

    @property
    def message_key(self) -> str:
        return f"cart.{self.value}"


class CartStoreError(Exception):
    """Base class for collaborator failures."""


class InventoryError(CartStoreError):
    """Inventory service could not answer (transport, status, or payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InventoryNotFoundError(InventoryError):
    """Inventory service answered 404 for the requested item."""


class StorageError(CartStoreError):
    """Cart snapshot could not be written."""


__all__ = [
    "CartErrorKind",
    "CartStoreError",
    "InventoryError",
    "InventoryNotFoundError",
    "StorageError",
]
