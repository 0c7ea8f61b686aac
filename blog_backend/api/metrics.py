from fastapi import APIRouter
from blog_backend import metrics

router = APIRouter()


@router.get("/api/metrics")
def get_metrics():
    """Return current in-memory operational counters."""
    return metrics.get_all()
