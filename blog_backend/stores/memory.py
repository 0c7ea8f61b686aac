import threading
from typing import Dict, Optional

from .interface import (
    MAX_COUNTER,
    SITE_KEY,
    VIEWS_FIELD,
    StoreOverflowError,
    check_address,
    check_amount,
    check_value,
)
from blog_backend import metrics


class InMemoryStore:
    """A process-local counter store for development and tests.

    WARNING: state is lost on restart and every process (or serverless
    instance) holds its own disjoint copy. Use the Redis store wherever
    counts must be shared or survive a deploy.

    Usage:
      s = InMemoryStore()
      await s.increment("site", "views")
      await s.get("site", "views")
    """

    name = "memory"

    def __init__(self) -> None:
        # resource key -> field -> value; "site" always exists
        self._data: Dict[str, Dict[str, int]] = {SITE_KEY: {VIEWS_FIELD: 0}}
        self._lock = threading.Lock()

    async def get(self, key: str, field: str) -> Optional[int]:
        check_address(key, field)
        metrics.inc("kv_get")
        with self._lock:
            record = self._data.get(key)
            if record is None:
                return None
            return record.get(field)

    async def set(self, key: str, field: str, value: int) -> bool:
        check_address(key, field)
        check_value(value)
        metrics.inc("kv_set")
        with self._lock:
            self._data.setdefault(key, {})[field] = value
        return True

    async def increment(self, key: str, field: str, by: int = 1) -> int:
        """Add ``by`` to the field, treating a missing key or field as 0."""
        check_address(key, field)
        check_amount(by)
        metrics.inc("kv_increment")
        with self._lock:
            current = self._data.get(key, {}).get(field, 0)
            new_value = current + by
            if new_value > MAX_COUNTER:
                raise StoreOverflowError(f"increment would overflow {key}.{field} (current {current}, by {by})")
            self._data.setdefault(key, {})[field] = new_value
        return new_value
