"""FastAPI application for the SimpleSwap ledger.

Ledger failures are not server errors: every SimpleSwapError is returned as
a 4xx JSON body tagged with its kind so the client can tell a stale deadline
from a slippage bound from a missing pool.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from simpleswap import __version__
from simpleswap.api.endpoints import router
from simpleswap.errors import Forbidden, Locked, NotFound, SimpleSwapError
from simpleswap.models.api import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SIMPLESWAP_HOST", "127.0.0.1")
PORT = int(os.environ.get("SIMPLESWAP_PORT", "8000"))
DEBUG = os.environ.get("SIMPLESWAP_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="SimpleSwap",
    description="Constant-product liquidity pools: add/remove liquidity, swap, spot price",
    version=__version__,
)


def status_for(error: SimpleSwapError) -> int:
    """HTTP status for a ledger failure."""
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, Forbidden):
        return 403
    if isinstance(error, Locked):
        return 409
    return 400


@app.exception_handler(SimpleSwapError)
async def ledger_error_handler(request: Request, exc: SimpleSwapError) -> JSONResponse:
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=exc.kind,
        reason=str(exc),
    )
    body = ErrorResponse(error=exc.kind, detail=str(exc))
    return JSONResponse(status_code=status_for(exc), content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - SIMPLESWAP_HOST: Host to bind to (default: 127.0.0.1)
    - SIMPLESWAP_PORT: Port to bind to (default: 8000)
    - SIMPLESWAP_DEBUG: Enable reload mode (default: false)
    """
    uvicorn.run(
        "simpleswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
