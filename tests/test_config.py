"""Tests for settings and the store factory"""
import os
import pytest

from cartstore import MemoryCartStorage, RedisCartStorage, Settings, create_cart_store
from cartstore.config import DEFAULT_STORAGE_KEY


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "INVENTORY_API_URL",
        "INVENTORY_TIMEOUT",
        "UPSTASH_REDIS_REST_URL",
        "UPSTASH_REDIS_REST_TOKEN",
        "CART_STORAGE_KEY",
        "CART_LANGUAGE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()

    assert settings.storage_key == DEFAULT_STORAGE_KEY
    assert settings.language == "en"
    assert not settings.redis_configured


def test_reads_environment(clean_env):
    clean_env.setenv("INVENTORY_API_URL", "https://api.shop.test")
    clean_env.setenv("INVENTORY_TIMEOUT", "2.5")
    clean_env.setenv("UPSTASH_REDIS_REST_URL", "https://redis.test")
    clean_env.setenv("UPSTASH_REDIS_REST_TOKEN", "token")
    clean_env.setenv("CART_LANGUAGE", "pt")

    settings = Settings.from_env()

    assert settings.inventory_url == "https://api.shop.test"
    assert settings.inventory_timeout == 2.5
    assert settings.redis_configured
    assert settings.language == "pt"


def test_invalid_timeout(clean_env):
    clean_env.setenv("INVENTORY_TIMEOUT", "soon")

    with pytest.raises(ValueError):
        Settings.from_env()


def test_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("CART_STORAGE_KEY=cart:from-file\n")

    try:
        assert Settings.from_env(env_file).storage_key == "cart:from-file"
    finally:
        os.environ.pop("CART_STORAGE_KEY", None)


@pytest.mark.asyncio
async def test_factory_without_redis_uses_memory_storage(clean_env):
    store = await create_cart_store(Settings(inventory_url="http://inventory.test"))

    assert isinstance(store.storage, MemoryCartStorage)
    assert len(store.cart) == 0
    await store.close()


@pytest.mark.asyncio
async def test_factory_with_redis(clean_env, monkeypatch):
    async def no_snapshot(self):
        return None

    monkeypatch.setattr(RedisCartStorage, "_read", no_snapshot)
    settings = Settings(redis_url="https://redis.test", redis_token="token", storage_key="cart:42", language="ru")

    store = await create_cart_store(settings)

    assert isinstance(store.storage, RedisCartStorage)
    assert store.storage.key == "cart:42"
    assert store.language == "ru"
    await store.close()
