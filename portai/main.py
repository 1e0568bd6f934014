"""
Port AI Adapter - Main Entry Point

Runs Port AI operations (agent invocation, general AI interactions,
invocation results) for a workflow host over HTTP.

Usage:
    python -m portai.main

Environment Variables:
    PORTAI_HOST            - Server host (default: 0.0.0.0)
    PORTAI_PORT            - Server port (default: 8000)
    PORTAI_LOG_LEVEL       - Log level (default: INFO)
    PORTAI_HTTP_TIMEOUT    - Upstream request timeout in seconds (default: 300)
    PORTAI_CONNECT_TIMEOUT - Upstream connect timeout in seconds (default: 10)
    PORT_BASE_URL          - Port API base URL (default: https://api.getport.io)
    PORT_CLIENT_ID         - Fallback client ID when a request carries no credentials
    PORT_CLIENT_SECRET     - Fallback client secret
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import router as api_router
from .config import config
from .errors import AuthenticationError, PortNodeError, UnknownOperationError, UpstreamError, ValidationError
from .node import VARIANTS
from .port_client import port

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    AuthenticationError: 401,
    ValidationError: 422,
    UnknownOperationError: 400,
    UpstreamError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""

    # Startup
    logger.info("=" * 60)
    logger.info("Port AI Adapter Starting")
    logger.info("=" * 60)
    logger.info(f"Default base URL: {config.base_url}")
    logger.info(f"Nodes: {', '.join(VARIANTS)}")
    if not config.has_credentials:
        logger.info("No PORT_CLIENT_ID/PORT_CLIENT_SECRET set - requests must carry credentials")
    logger.info(f"Server ready at http://{config.host}:{config.port}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await port.close()
    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Port AI Adapter",
    description=(
        "Invoke Port AI agents, call general AI interactions, and fetch "
        "invocation results on behalf of a workflow host. Invocation "
        "responses are decoded from Server-Sent Events into structured results."
    ),
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(PortNodeError)
async def node_error_handler(_: Request, exc: PortNodeError):
    status_code = ERROR_STATUS.get(type(exc), 500)
    logger.warning(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def generic_exception_handler(_: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(status_code=500, content={"error": "InternalServerError", "message": "Internal Server Error"})


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "base_url": config.base_url,
        "nodes": list(VARIANTS),
    }


@app.get("/")
async def root():
    """Root endpoint with basic info."""
    return {
        "name": "Port AI Adapter",
        "version": __version__,
        "endpoints": {
            "nodes": "/v1/nodes",
            "execute": "/v1/nodes/{node}/execute",
            "credentials_test": "/v1/nodes/{node}/credentials/test",
            "health": "/health",
        },
    }


def main():
    """Run the adapter server."""
    uvicorn.run(
        "portai.main:app",
        host=config.host,
        port=config.port,
        reload=False,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
