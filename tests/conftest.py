"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from cartstore import CartStore, MemoryCartStorage, ProductInfo  # noqa: E402


CATALOG = {
    1: {"id": 1, "title": "Tênis de Caminhada Leve Confortável", "price": 179.9, "image": "https://cdn.example/shoe-1.jpg"},
    2: {"id": 2, "title": "Tênis VR Caminhada Confortável", "price": 139.9, "image": "https://cdn.example/shoe-2.jpg"},
    42: {"id": 42, "title": "Tênis Adidas Duramo Lite 2.0", "price": 219.9, "image": "https://cdn.example/shoe-42.jpg"},
}


@pytest.fixture
def sample_product():
    """Sample catalog record"""
    return dict(CATALOG[1])


@pytest.fixture
def stock_levels():
    """Mutable stock table consulted by mock_inventory"""
    return {1: 5, 2: 2, 42: 3}


@pytest.fixture
def mock_inventory(stock_levels):
    """Inventory client answering from CATALOG and stock_levels"""
    inventory = Mock()

    async def get_stock(item_id):
        return stock_levels.get(item_id, 0)

    async def get_item(item_id):
        return ProductInfo.model_validate(CATALOG[item_id])

    inventory.get_stock = AsyncMock(side_effect=get_stock)
    inventory.get_item = AsyncMock(side_effect=get_item)
    inventory.close = AsyncMock()
    return inventory


@pytest.fixture
def storage_slots():
    """Backing dict shared by every MemoryCartStorage built in a test"""
    return {}


@pytest.fixture
def memory_storage(storage_slots):
    """In-memory snapshot storage"""
    return MemoryCartStorage(slots=storage_slots)


@pytest.fixture
def notifier():
    """Notification sink recording every message"""
    sink = Mock()
    sink.notify = Mock()
    return sink


@pytest.fixture
def store(mock_inventory, memory_storage, notifier):
    """Empty cart store wired to mocks"""
    return CartStore(mock_inventory, memory_storage, notifier=notifier)
