"""FastAPI application for the StableSwap quote service.

Note: Rate limiting is intentionally not implemented at the application level.
It should be handled at the infrastructure layer (reverse proxy / load balancer).
"""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stableswap import __version__
from stableswap.api.endpoints import router
from stableswap.log import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("STABLESWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("STABLESWAP_PORT", "8000"))
DEBUG = os.environ.get("STABLESWAP_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("STABLESWAP_LOG_LEVEL", "INFO")

# Maximum request body size (64 KB); quote requests carry a single pool
MAX_REQUEST_SIZE = 64 * 1024


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Configure logging in the process that serves requests.

    Runs in every worker, including the reload worker started in debug mode.
    """
    configure_logging(LOG_LEVEL)
    yield


app = FastAPI(
    title="StableSwap Quoter",
    description="Off-chain quotes for 2-token StableSwap pools",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length is None:
        return await call_next(request)
    try:
        size = int(content_length)
    except ValueError:
        return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
    if size > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quote API server.

    Configuration via environment variables:
    - STABLESWAP_HOST: Host to bind to (default: 0.0.0.0)
    - STABLESWAP_PORT: Port to bind to (default: 8000)
    - STABLESWAP_DEBUG: Enable debug/reload mode (default: false)
    - STABLESWAP_LOG_LEVEL: Log level (default: INFO)
    """
    uvicorn.run(
        "stableswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
