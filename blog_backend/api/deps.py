import logging

from fastapi import Request

from blog_backend.settings import se
from blog_backend.stores import KvStore, select_store

logger = logging.getLogger(__name__)


async def get_store(request: Request) -> KvStore:
    """Return the process-wide store, creating it on first use.

    The lifespan handler normally creates it at startup; this covers clients
    that skip the lifespan (e.g. a TestClient used without ``with``). Being
    async, it runs on the event loop, so two first requests cannot race to
    build two stores.
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        logger.debug("Store not created at startup; creating it on first request")
        store = select_store(se.environment, se.kv)
        request.app.state.store = store
    return store
