import logging
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ollama_api_component import (
    OllamaApiError,
    OllamaClientProtocol,
    OllamaTimeoutError,
)
from src.api.routers import generate, models
from src.api.services.ollama_service import register_ollama
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


# ==============================================================================
# Global Exception Handlers
# ==============================================================================


async def ollama_api_exception_handler(request: Request, exc: OllamaApiError):
    """
    Handles non-2xx answers from the Ollama server, returning a 502 Bad Gateway.
    The upstream status is kept in the detail message.
    """
    logger.warning("Ollama returned %s %s", exc.status_code, exc.status_text)
    return JSONResponse(
        status_code=502,
        content={
            "detail": f"Upstream service error: {exc.status_code} {exc.status_text}"
        },
    )


async def ollama_timeout_exception_handler(request: Request, exc: OllamaTimeoutError):
    """
    Handles requests to Ollama that did not answer in time,
    returning a 504 Gateway Timeout.
    """
    logger.warning("Ollama request timed out after %dms", exc.timeout)
    return JSONResponse(
        status_code=504,
        content={"detail": f"Upstream service timed out after {exc.timeout}ms"},
    )


async def http_transport_exception_handler(
    request: Request, exc: httpx.TransportError
):
    """
    Handles connection errors to the Ollama service, returning a 502 Bad Gateway.
    This prevents leaking internal stack traces to the client.
    """
    # exc.request is unset when the error was raised outside of a request
    try:
        url = exc.request.url
    except RuntimeError:
        url = "unknown"
    logger.warning("Unable to reach Ollama at %s: %s", url, exc)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Error connecting to upstream service: {url}"},
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handles all unhandled exceptions, returning a 500 Internal Server Error.
    This prevents sensitive server information from being exposed to clients.
    """
    logger.exception("Unhandled error while serving %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[OllamaClientProtocol] = None,
) -> FastAPI:
    """
    Build the FastAPI application and register one Ollama service on it.

    Args:
        settings: Configuration to use; defaults to `get_settings()`.
        client: A ready-made client (e.g. `MockOllamaClient`). When omitted, an
            `OllamaClient` is built from the settings.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app = FastAPI(
        title="Ollama API Component",
        version="0.1.0",
        description="A thin HTTP front for a local Ollama server.",
    )

    register_ollama(app, config=settings.client_config(), client=client)

    app.include_router(generate.router)
    app.include_router(models.router)

    app.add_exception_handler(OllamaApiError, ollama_api_exception_handler)
    app.add_exception_handler(OllamaTimeoutError, ollama_timeout_exception_handler)
    app.add_exception_handler(httpx.TransportError, http_transport_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/health", tags=["Health Check"])
    async def health_check():
        """
        Simple health check endpoint to confirm the API is running.
        """
        return {"status": "ok"}

    return app


app = create_app()
