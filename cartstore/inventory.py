"""
Inventory HTTP client.

Two read-only endpoints:
- ``GET stock/{id}``    -> ``{"id": ..., "amount": n}``
- ``GET products/{id}`` -> product fields (no ``amount``)

Every failure (transport, non-2xx status, malformed body) is raised as
``InventoryError``. A failure is never reported as zero stock.
"""
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .errors import InventoryError, InventoryNotFoundError
from .logging import get_logger, sanitize_id_for_logging
from .models import ItemId, ProductInfo, StockLevel

logger = get_logger(__name__)

NO_RESPONSE_BODY = "No response body"


def _path_segment(item_id: ItemId) -> str:
    """Escape an item id so it stays a single path segment."""
    return quote(str(item_id), safe="")


class InventoryClient:
    """Async client for the stock and product endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        self._owns_client = client is None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_json(self, path: str) -> object:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            logger.warning(f"Inventory request {path} failed: {e}")
            raise InventoryError(f"Inventory service unavailable: {e}") from e

        if response.status_code == 404:
            raise InventoryNotFoundError(f"{path} not found", status_code=404)
        if response.status_code >= 400:
            error_text = response.text[:200] if response.text else NO_RESPONSE_BODY
            logger.warning(f"Inventory request {path} returned {response.status_code}: {error_text}")
            raise InventoryError(
                f"Inventory service returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise InventoryError(f"Inventory response for {path} is not JSON") from e

    async def get_stock(self, item_id: ItemId) -> int:
        """Current available stock for ``item_id``."""
        data = await self._get_json(f"/stock/{_path_segment(item_id)}")
        try:
            stock = StockLevel.model_validate(data)
        except ValidationError as e:
            raise InventoryError(f"Invalid stock payload for {item_id!r}: {e}") from e

        logger.debug(f"Stock for {sanitize_id_for_logging(item_id)}: {stock.amount}")
        return stock.amount

    async def get_item(self, item_id: ItemId) -> ProductInfo:
        """Catalog metadata for ``item_id``."""
        data = await self._get_json(f"/products/{_path_segment(item_id)}")
        try:
            return ProductInfo.model_validate(data)
        except ValidationError as e:
            raise InventoryError(f"Invalid product payload for {item_id!r}: {e}") from e


__all__ = ["InventoryClient"]
