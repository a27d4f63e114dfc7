import logging
from typing import Any, AsyncIterator, Mapping, Optional, Union

from fastapi import FastAPI, Request

from ollama_api_component import (
    GenerateRequest,
    GenerateResponse,
    ModelListResponse,
    OllamaClient,
    OllamaClientConfig,
    OllamaClientProtocol,
    PullResponse,
)

logger = logging.getLogger(__name__)


class OllamaService:
    """
    Injectable wrapper around a single Ollama client.

    The service adds no behaviour of its own; it exists so route handlers can
    depend on one shared client built from configuration.
    """

    def __init__(
        self,
        config: Optional[OllamaClientConfig] = None,
        client: Optional[OllamaClientProtocol] = None,
    ):
        if client is None:
            client = OllamaClient.from_config(config or OllamaClientConfig())
        self.client = client

    async def generate(
        self, request: Union[GenerateRequest, Mapping[str, Any]]
    ) -> GenerateResponse:
        return await self.client.generate(request)

    def stream_generate(
        self, request: Union[GenerateRequest, Mapping[str, Any]]
    ) -> AsyncIterator[GenerateResponse]:
        return self.client.stream_generate(request)

    async def list_models(self) -> ModelListResponse:
        return await self.client.list_models()

    async def pull_model(self, name: str) -> PullResponse:
        return await self.client.pull_model(name)


def register_ollama(
    app: FastAPI,
    config: Optional[OllamaClientConfig] = None,
    client: Optional[OllamaClientProtocol] = None,
) -> OllamaService:
    """
    Build one OllamaService and attach it to the application.

    Route handlers receive it through the `get_ollama_service` dependency.
    Calling this again replaces the previously registered service.
    """
    service = OllamaService(config=config, client=client)
    app.state.ollama_service = service
    if isinstance(service.client, OllamaClient):
        logger.info(
            "Registered Ollama service for %s (timeout %dms)",
            service.client.base_url,
            service.client.timeout,
        )
    return service


def get_ollama_service(request: Request) -> OllamaService:
    """
    Dependency provider for the OllamaService registered on the application.
    """
    service = getattr(request.app.state, "ollama_service", None)
    if service is None:
        raise RuntimeError(
            "No Ollama service registered; call register_ollama(app, config) first."
        )
    return service
