"""FastAPI application serving pool manager queries.

The API is read-only: it exposes pool queries and swap simulations over the
context returned by endpoints.get_context. Deposits, withdrawals and swaps
are not served over HTTP.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pool_manager.api.endpoints import router
from pool_manager.errors import PoolManagerError, UnExistingPool

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("POOL_MANAGER_HOST", "0.0.0.0")
PORT = int(os.environ.get("POOL_MANAGER_PORT", "8000"))
DEBUG = os.environ.get("POOL_MANAGER_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("POOL_MANAGER_LOG_LEVEL", "INFO").upper()

logger = structlog.get_logger()

app = FastAPI(
    title="Pool Manager (Python)",
    description="Pricing and liquidity core of a multi-pool AMM",
    version="0.1.0",
)

app.include_router(router)


@app.exception_handler(PoolManagerError)
async def pool_manager_error_handler(request: Request, exc: PoolManagerError) -> JSONResponse:
    """Unknown pools are 404, every other domain error is a bad request."""
    status_code = 404 if isinstance(exc, UnExistingPool) else 400
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def configure_logging(log_level: str = LOG_LEVEL) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level)
        ),
    )


def run() -> None:
    """Run the pool manager API server.

    Configuration via environment variables:
    - POOL_MANAGER_HOST: Host to bind to (default: 0.0.0.0)
    - POOL_MANAGER_PORT: Port to bind to (default: 8000)
    - POOL_MANAGER_DEBUG: Enable debug/reload mode (default: false)
    - POOL_MANAGER_LOG_LEVEL: Minimum log level (default: INFO)
    - POOL_MANAGER_POOLS_FILE: JSON pool snapshots to serve (default: none)
    """
    configure_logging()
    uvicorn.run(
        "pool_manager.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
