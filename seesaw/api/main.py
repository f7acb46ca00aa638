"""FastAPI application for the seesaw arbitrage service."""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from seesaw import __version__
from seesaw.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("SEESAW_HOST", "0.0.0.0")
PORT = int(os.environ.get("SEESAW_PORT", "8000"))
DEBUG = os.environ.get("SEESAW_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Seesaw",
    description="Arbitrage sizing for weighted product pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - SEESAW_HOST: Host to bind to (default: 0.0.0.0)
    - SEESAW_PORT: Port to bind to (default: 8000)
    - SEESAW_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "seesaw.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
