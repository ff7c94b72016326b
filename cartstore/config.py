"""Environment-driven settings for the cart store."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_STORAGE_KEY = "@RocketShoes:cart"
DEFAULT_INVENTORY_URL = "http://localhost:3333"
DEFAULT_INVENTORY_TIMEOUT = 10.0
DEFAULT_LANGUAGE = "en"


def _get_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass
class Settings:
    """
    Cart store configuration.

    Environment variables:
    - INVENTORY_API_URL: base URL serving ``stock/{id}`` and ``products/{id}``
    - INVENTORY_TIMEOUT: per-request timeout in seconds
    - UPSTASH_REDIS_REST_URL / UPSTASH_REDIS_REST_TOKEN: snapshot store
    - CART_STORAGE_KEY: key holding the cart snapshot
    - CART_LANGUAGE: language of user-facing failure messages
    """
    inventory_url: str = DEFAULT_INVENTORY_URL
    inventory_timeout: float = DEFAULT_INVENTORY_TIMEOUT
    redis_url: str = ""
    redis_token: str = ""
    storage_key: str = DEFAULT_STORAGE_KEY
    language: str = DEFAULT_LANGUAGE

    @property
    def redis_configured(self) -> bool:
        return bool(self.redis_url and self.redis_token)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """Read settings from the environment, loading ``env_file`` first if given."""
        if env_file is not None and env_file.exists():
            load_dotenv(env_file)

        return cls(
            inventory_url=os.environ.get("INVENTORY_API_URL", DEFAULT_INVENTORY_URL),
            inventory_timeout=_get_float("INVENTORY_TIMEOUT", DEFAULT_INVENTORY_TIMEOUT),
            redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
            redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
            storage_key=os.environ.get("CART_STORAGE_KEY", DEFAULT_STORAGE_KEY),
            language=os.environ.get("CART_LANGUAGE", DEFAULT_LANGUAGE),
        )


__all__ = ["Settings", "DEFAULT_STORAGE_KEY"]
