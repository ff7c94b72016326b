"""Cart store: the authoritative in-memory cart and its three mutations."""
from pathlib import Path
from typing import Optional

from .config import Settings
from .errors import CartErrorKind, CartStoreError
from .i18n import get_text
from .inventory import InventoryClient
from .logging import get_logger, sanitize_id_for_logging
from .models import Cart, CartItem, ItemId
from .notifications import LoggingNotificationSink, NotificationSink
from .storage import CartStorage, MemoryCartStorage, RedisCartStorage

logger = get_logger(__name__)


class CartStore:
    """
    Owns the session cart.

    Features:
    - Every mutation re-checks live stock; stock levels are never cached
    - Write-through: the snapshot is saved before the in-memory cart changes
    - Failures are reported through the notification sink and returned as a
      ``CartErrorKind``; nothing is raised to the caller

    Mutations must not overlap on one store. The store takes no lock, so two
    concurrent calls may both read the same amount and the later write wins.
    """

    def __init__(
        self,
        inventory: InventoryClient,
        storage: CartStorage,
        notifier: Optional[NotificationSink] = None,
        cart: Optional[Cart] = None,
        language: str = "en",
    ):
        self.inventory = inventory
        self.storage = storage
        self.notifier = notifier or LoggingNotificationSink()
        self.language = language
        self._cart = cart if cart is not None else Cart()

    @classmethod
    async def open(
        cls,
        inventory: InventoryClient,
        storage: CartStorage,
        notifier: Optional[NotificationSink] = None,
        language: str = "en",
    ) -> "CartStore":
        """Create a store seeded from the stored snapshot, or empty."""
        cart = await storage.load()
        if cart is None:
            cart = Cart()
        else:
            logger.info(f"Restored cart with {cart.size} item(s)")
        return cls(inventory, storage, notifier=notifier, cart=cart, language=language)

    async def close(self) -> None:
        """End the session. The snapshot is already current."""
        await self.inventory.close()

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def size(self) -> int:
        return self._cart.size

    def amounts(self) -> dict[ItemId, int]:
        return self._cart.amounts()

    def _report(self, kind: CartErrorKind, item_id: ItemId) -> CartErrorKind:
        logger.warning(f"Cart {kind.value} for item {sanitize_id_for_logging(item_id)}")
        self.notifier.notify(get_text(kind.message_key, self.language))
        return kind

    def _report_failure(self, kind: CartErrorKind, item_id: ItemId, error: Exception) -> CartErrorKind:
        if isinstance(error, CartStoreError):
            logger.warning(f"Cart operation failed for item {sanitize_id_for_logging(item_id)}: {error}")
        else:
            logger.exception(f"Unexpected error in cart operation for item {sanitize_id_for_logging(item_id)}")
        return self._report(kind, item_id)

    async def _commit(self, cart: Cart) -> None:
        await self.storage.save(cart)
        self._cart = cart

    async def add_item(self, item_id: ItemId) -> Optional[CartErrorKind]:
        """Add one unit of ``item_id``, appending it if not yet in the cart."""
        cart = self._cart
        existing = cart.find(item_id)

        try:
            stock = await self.inventory.get_stock(item_id)
            current = existing.amount if existing else 0
            proposed = current + 1

            if proposed > stock:
                return self._report(CartErrorKind.OUT_OF_STOCK_ON_ADD, item_id)

            if existing:
                updated = cart.with_amount(item_id, proposed)
            else:
                product = await self.inventory.get_item(item_id)
                updated = cart.with_item(CartItem.from_product(product, amount=1, item_id=item_id))

            await self._commit(updated)
        except Exception as e:
            return self._report_failure(CartErrorKind.ADD_FAILED, item_id, e)

        return None

    async def remove_item(self, item_id: ItemId) -> Optional[CartErrorKind]:
        """Remove ``item_id`` from the cart."""
        cart = self._cart
        if item_id not in cart:
            return self._report(CartErrorKind.REMOVE_FAILED, item_id)

        try:
            await self._commit(cart.without(item_id))
        except Exception as e:
            return self._report_failure(CartErrorKind.REMOVE_FAILED, item_id, e)

        return None

    async def set_amount(self, item_id: ItemId, amount: int) -> Optional[CartErrorKind]:
        """Set the amount of an item already in the cart. Non-positive amounts are ignored."""
        if isinstance(amount, bool) or not isinstance(amount, int):
            return self._report(CartErrorKind.SET_AMOUNT_FAILED, item_id)

        if amount <= 0:
            return None

        try:
            stock = await self.inventory.get_stock(item_id)
            if amount > stock:
                return self._report(CartErrorKind.OUT_OF_STOCK_ON_SET, item_id)

            cart = self._cart
            if item_id not in cart:
                return self._report(CartErrorKind.SET_AMOUNT_FAILED, item_id)

            await self._commit(cart.with_amount(item_id, amount))
        except Exception as e:
            return self._report_failure(CartErrorKind.SET_AMOUNT_FAILED, item_id, e)

        return None


async def create_cart_store(
    settings: Optional[Settings] = None,
    notifier: Optional[NotificationSink] = None,
    env_file: Optional[Path] = None,
) -> CartStore:
    """Build a store from settings (environment by default) and load its snapshot."""
    if settings is None:
        settings = Settings.from_env(env_file)

    if settings.redis_configured:
        storage: CartStorage = RedisCartStorage.from_credentials(
            settings.redis_url, settings.redis_token, key=settings.storage_key
        )
    else:
        logger.warning("Redis is not configured, cart snapshot will be kept in memory only")
        storage = MemoryCartStorage(key=settings.storage_key)

    inventory = InventoryClient(settings.inventory_url, timeout=settings.inventory_timeout)
    return await CartStore.open(inventory, storage, notifier=notifier, language=settings.language)


__all__ = ["CartStore", "create_cart_store"]
