"""
Per-vendor contract storage
Each vendor's contracts live in one JSON blob that is overwritten wholesale on every mutation
"""

import json
import logging
from typing import Any, Optional, Protocol

import redis

from . import config

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None


def contracts_key(vendor_id: str) -> str:
    """Storage key for a vendor's contract collection"""
    return f"contracts_{vendor_id}"


class ContractStorage(Protocol):
    """Key-value store holding one serialized contract collection per vendor"""

    def get_collection(self, vendor_id: str) -> list[dict[str, Any]]: ...

    def set_collection(self, vendor_id: str, records: list[dict[str, Any]]) -> None: ...


class InMemoryContractStorage:
    """Process-local storage, values kept serialized so callers never share references"""

    def __init__(self):
        self._blobs: dict[str, str] = {}

    def get_collection(self, vendor_id: str) -> list[dict[str, Any]]:
        blob = self._blobs.get(contracts_key(vendor_id))
        if not blob:
            return []
        return json.loads(blob)

    def set_collection(self, vendor_id: str, records: list[dict[str, Any]]) -> None:
        self._blobs[contracts_key(vendor_id)] = json.dumps(records)


class RedisContractStorage:
    """Redis-backed storage, one string key per vendor"""

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client if client is not None else get_redis_client()

    def get_collection(self, vendor_id: str) -> list[dict[str, Any]]:
        key = contracts_key(vendor_id)
        blob = self.client.get(key)
        if not blob:
            logger.debug(f"No stored contracts for {key}")
            return []
        return json.loads(blob)

    def set_collection(self, vendor_id: str, records: list[dict[str, Any]]) -> None:
        key = contracts_key(vendor_id)
        self.client.set(key, json.dumps(records))
        logger.debug(f"✅ Stored {len(records)} contracts under {key}")


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    Supports both a connection URL and individual host/port settings
    """
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection for contract storage...")

        if config.REDIS_URL:
            # Mask password in URL for logging
            if "@" in config.REDIS_URL:
                url_parts = config.REDIS_URL.split("@")
                protocol = url_parts[0].split(":")[0]
                masked_url = f"{protocol}:****@{url_parts[1]}"
            else:
                masked_url = "****"
            logger.info(f"📡 Using Redis URL connection: {masked_url}")

            client = redis.from_url(
                config.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
                retry_on_timeout=True,
                health_check_interval=30,
                max_connections=20,
            )
        else:
            logger.info("📡 Using individual Redis configuration:")
            logger.info(f"   Host: {config.REDIS_HOST}")
            logger.info(f"   Port: {config.REDIS_PORT}")
            logger.info(f"   Database: {config.REDIS_DB}")
            logger.info(f"   SSL: {'Enabled' if config.REDIS_SSL else 'Disabled'}")
            logger.info(f"   Password: {'Set' if config.REDIS_PASSWORD else 'Not set'}")

            client = redis.Redis(
                host=config.REDIS_HOST,
                port=config.REDIS_PORT,
                password=config.REDIS_PASSWORD,
                db=config.REDIS_DB,
                ssl=config.REDIS_SSL,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
                retry_on_timeout=True,
                health_check_interval=30,
                max_connections=20,
            )

        try:
            client.ping()
        except Exception as e:
            logger.error(f"❌ Failed to connect to Redis: {str(e)}")
            raise
        logger.info("Redis connected successfully")
        redis_client = client

    return redis_client


_storage: Optional[ContractStorage] = None


def get_contract_storage() -> ContractStorage:
    """Return the process-wide contract storage selected by CONTRACT_STORAGE_BACKEND"""
    global _storage

    if _storage is None:
        if config.CONTRACT_STORAGE_BACKEND == "redis":
            _storage = RedisContractStorage()
        elif config.CONTRACT_STORAGE_BACKEND == "memory":
            _storage = InMemoryContractStorage()
        else:
            raise ValueError(
                f"Unknown CONTRACT_STORAGE_BACKEND: {config.CONTRACT_STORAGE_BACKEND}"
            )
        logger.info(f"Contract storage backend: {config.CONTRACT_STORAGE_BACKEND}")

    return _storage
