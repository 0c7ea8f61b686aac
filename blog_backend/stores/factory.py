import logging
from typing import Optional

from .interface import KvStore
from .memory import InMemoryStore
from .redis_store import RedisStore
from blog_backend.settings import KvSettings

logger = logging.getLogger(__name__)

PRODUCTION_ENVIRONMENT = "prd"


def is_production(environment: Optional[str]) -> bool:
    return (environment or "").strip().lower() == PRODUCTION_ENVIRONMENT


def select_store(environment: Optional[str], settings: Optional[KvSettings] = None) -> KvStore:
    """Return the store for ``environment``.

    The production environment gets the Redis store built from ``settings``
    (read from the environment when omitted); every other value, including
    None, gets a fresh in-memory store. Call once per process and reuse the
    result.
    """
    if is_production(environment):
        kv = settings or KvSettings()
        logger.info(f"Environment {environment!r}: using redis store")
        return RedisStore(kv.url, token=kv.token, socket_timeout=kv.socket_timeout)
    logger.info(f"Environment {environment!r}: using in-memory store (counts are process-local)")
    return InMemoryStore()
