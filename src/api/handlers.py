import inspect
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from ollama_api_component import (
    GenerateRequest,
    GenerateResponse,
    OllamaClient,
    OllamaClientConfig,
    OllamaClientProtocol,
)
from src.config.settings import get_settings

ChunkCallback = Callable[[GenerateResponse], Union[None, Awaitable[None]]]


def create_ollama_client(config: Optional[OllamaClientConfig] = None) -> OllamaClient:
    """
    Create an Ollama client for use inside request handlers.

    Without an explicit config, the base URL and timeout come from the
    environment (`OLLAMA_BASE_URL`, `OLLAMA_TIMEOUT`).

    Examples:
        >>> ollama = create_ollama_client()
        >>> response = await ollama.generate({"model": "llama2", "prompt": prompt})
    """
    if config is None:
        config = get_settings().client_config()
    return OllamaClient.from_config(config)


async def stream_ollama_generation(
    ollama: OllamaClientProtocol,
    request: Union[GenerateRequest, Mapping[str, Any]],
    on_chunk: ChunkCallback,
) -> int:
    """
    Stream a generation and hand every chunk to `on_chunk` as it arrives.

    `on_chunk` may be a plain function or a coroutine function; coroutines are
    awaited before the next chunk is read.

    Returns:
        The number of chunks delivered.
    """
    count = 0
    async for chunk in ollama.stream_generate(request):
        result = on_chunk(chunk)
        if inspect.isawaitable(result):
            await result
        count += 1
    return count
