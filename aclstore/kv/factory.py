"""
Backend factory driven by configuration.
"""

from ..core.config import BackendType, StoreConfig
from ..core.exceptions import ConfigurationError
from .base import KeyValueStore
from .memory import MemoryKVStore
from .sql import SQLKVStore


def create_kv_store(config: StoreConfig) -> KeyValueStore:
    """Create the key-value backend selected by config.backend."""
    if config.backend == BackendType.MEMORY:
        return MemoryKVStore(max_attempts=config.max_attempts)
    if config.backend == BackendType.SQL:
        return SQLKVStore(
            database_url=config.database_url,
            table_name=config.table_name,
            max_attempts=config.max_attempts,
        )
    raise ConfigurationError(f"Unsupported backend: {config.backend}")
