from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from blog_backend import metrics
from blog_backend.api import metrics as _metrics_module
from blog_backend.api import views as _views_module
from blog_backend.api.deps import get_store
from blog_backend.settings import se
from blog_backend.stores import StoreError, StoreOverflowError, StoreUnavailableError, select_store

# Configure logging
logger = logging.getLogger(__name__)

SERVICE_NAME = "blog-backend"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler: create the process-wide store once at startup.

    A store already placed on app.state (tests do this) is kept. There is no
    teardown; connections are released with the process.
    """
    if getattr(app.state, "store", None) is None:
        app.state.store = select_store(se.environment, se.kv)
    logger.info(f"Serving view counters from the {app.state.store.name} store")
    yield


app = FastAPI(title="Blog Backend", lifespan=lifespan)

# The browser components call the API from the site's origin; in dev the site
# and the API run on different ports.
app.add_middleware(
    CORSMiddleware,
    allow_origins=se.server.cors_origins,
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["*"],
    allow_credentials=False,
)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """Surface store failures as a 500; nothing is retried or defaulted."""
    metrics.inc("store_error")
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    if isinstance(exc, StoreUnavailableError):
        detail = "store unavailable"
    elif isinstance(exc, StoreOverflowError):
        detail = "counter overflow"
    else:
        detail = "store error"
    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/api/health")
async def health(request: Request):
    """Simple health endpoint; reports which store backs the counters."""
    store = await get_store(request)
    return {"status": "ok", "service": SERVICE_NAME, "version": VERSION, "store": store.name}


app.include_router(_views_module.router)
app.include_router(_metrics_module.router)


def setup_logging(level: str = "INFO") -> None:
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    else:
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)


def main() -> None:  # pragma: no cover - CLI entrypoint
    import argparse

    import uvicorn

    parser = argparse.ArgumentParser(description="Serve the blog view counter API.")
    parser.add_argument("--host", default=se.server.host, help=f"Bind address (default: {se.server.host})")
    parser.add_argument("--port", type=int, default=se.server.port, help=f"Bind port (default: {se.server.port})")
    args = parser.parse_args()
    setup_logging(se.server.log_level)
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":  # pragma: no cover - CLI
    main()
