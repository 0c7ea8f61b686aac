from .interface import (
    KvStore,
    MAX_COUNTER,
    SITE_KEY,
    VIEWS_FIELD,
    StoreError,
    StoreOverflowError,
    StoreUnavailableError,
)
from .memory import InMemoryStore
from .redis_store import RedisStore
from .factory import select_store

__all__ = [
    "KvStore",
    "MAX_COUNTER",
    "SITE_KEY",
    "VIEWS_FIELD",
    "StoreError",
    "StoreOverflowError",
    "StoreUnavailableError",
    "InMemoryStore",
    "RedisStore",
    "select_store",
]
