from .client import OllamaClient
from .errors import OllamaApiError, OllamaClientError, OllamaTimeoutError
from .mock_client import MockOllamaClient
from .protocol import OllamaClientProtocol
from .schemas import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_MS,
    GenerateRequest,
    GenerateResponse,
    ModelInfo,
    ModelListResponse,
    OllamaClientConfig,
    PullResponse,
)

__all__ = [
    # clients
    "OllamaClient",
    "MockOllamaClient",
    "OllamaClientProtocol",
    # configuration
    "OllamaClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    # payloads
    "GenerateRequest",
    "GenerateResponse",
    "ModelInfo",
    "ModelListResponse",
    "PullResponse",
    # errors
    "OllamaClientError",
    "OllamaApiError",
    "OllamaTimeoutError",
]
