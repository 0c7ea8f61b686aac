"""View counter endpoints used by the site's page and footer components.

  GET  /api/view/site        -> {"views": n}  read only
  POST /api/view/site        -> {"views": n}  count a visit
  PUT  /api/view/site        -> 405
  GET  /api/view/{page_id}   -> {"views": n}  0 for a page never seen
  PUT  /api/view/{page_id}   -> {"views": n}  count a page view
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from blog_backend import metrics
from blog_backend.api.deps import get_store
from blog_backend.stores import SITE_KEY, VIEWS_FIELD, KvStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/view", tags=["views"])


def _require_page_id(page_id: Optional[str]) -> str:
    if page_id is None or not page_id.strip():
        raise HTTPException(status_code=400, detail="page_id is required")
    return page_id


# "site" is registered before "/{page_id}" so the site routes win for GET.
@router.get("/site")
async def get_site_views(store: KvStore = Depends(get_store)):
    views = await store.get(SITE_KEY, VIEWS_FIELD)
    metrics.inc("views_site_read")
    return {"views": views or 0}


@router.post("/site")
async def hit_site(store: KvStore = Depends(get_store)):
    views = await store.increment(SITE_KEY, VIEWS_FIELD, 1)
    metrics.inc("views_site_hit")
    return {"views": views}


@router.put("/site")
async def put_site():
    """The site counter is only read (GET) or hit (POST); keep PUT off the page route."""
    raise HTTPException(status_code=405, detail="Method Not Allowed", headers={"Allow": "GET, POST"})


@router.api_route("", methods=["GET", "PUT"])
@router.api_route("/", methods=["GET", "PUT"])
async def missing_page_id():
    """Requests without a page id segment. Rejected before touching the store."""
    raise HTTPException(status_code=400, detail="page_id is required")


@router.get("/{page_id}")
async def get_page_views(page_id: str, store: KvStore = Depends(get_store)):
    page_id = _require_page_id(page_id)
    views = await store.get(page_id, VIEWS_FIELD)
    metrics.inc("views_page_read")
    return {"views": views or 0}


@router.put("/{page_id}")
async def hit_page(page_id: str, store: KvStore = Depends(get_store)):
    """Count a page view.

    A page without a record is initialised to 1 with ``set``; an existing
    record goes through ``increment``.
    """
    page_id = _require_page_id(page_id)
    views = await store.get(page_id, VIEWS_FIELD)
    if views is None:
        await store.set(page_id, VIEWS_FIELD, 1)
        metrics.inc("views_page_init")
        logger.debug(f"Initialised view counter for page {page_id!r}")
        views = 1
    else:
        views = await store.increment(page_id, VIEWS_FIELD, 1)
    metrics.inc("views_page_hit")
    return {"views": views}
