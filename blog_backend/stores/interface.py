from __future__ import annotations
from typing import Optional, Protocol

# Resource key seeded by the in-memory store and used by the site-wide counter.
SITE_KEY = "site"
VIEWS_FIELD = "views"
# Counters must fit a signed 64-bit integer, the range of Redis HINCRBY.
MAX_COUNTER = 2**63 - 1


class StoreError(Exception):
    """Raised when a store operation fails for a reason other than a miss."""


class StoreUnavailableError(StoreError):
    """Raised when the backing service cannot be reached."""


class StoreOverflowError(StoreError):
    """Raised when an increment would push a counter past MAX_COUNTER."""


class KvStore(Protocol):
    """Key/field counter store shared by the in-memory and Redis variants.

    A miss (unknown key or field) is never an error: ``get`` returns None and
    ``increment`` treats the prior value as 0, creating the field.
    """

    name: str

    async def get(self, key: str, field: str) -> Optional[int]:
        ...

    async def set(self, key: str, field: str, value: int) -> bool:
        """Overwrite ``field`` under ``key``. The returned ack is informational."""
        ...

    async def increment(self, key: str, field: str, by: int = 1) -> int:
        """Atomically add ``by`` and return the new value."""
        ...


def check_address(key: str, field: str) -> None:
    if not isinstance(key, str) or not key:
        raise ValueError(f"store key must be a non-empty string, got {key!r}")
    if not isinstance(field, str) or not field:
        raise ValueError(f"store field must be a non-empty string, got {field!r}")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_value(value: int) -> None:
    if not _is_int(value) or not (0 <= value <= MAX_COUNTER):
        raise ValueError(f"counter value must be an int in [0, {MAX_COUNTER}], got {value!r}")


def check_amount(by: int) -> None:
    if not _is_int(by) or by < 0:
        raise ValueError(f"increment amount must be a non-negative int, got {by!r}")
