from typing import Any, AsyncIterator, Mapping, Protocol, Union, runtime_checkable

from .schemas import GenerateRequest, GenerateResponse, ModelListResponse, PullResponse


@runtime_checkable
class OllamaClientProtocol(Protocol):
    """
    Protocol for Ollama API clients.

    Implemented by `OllamaClient` and `MockOllamaClient`, so services can be
    wired to either.
    """

    async def generate(
        self, request: Union[GenerateRequest, Mapping[str, Any]]
    ) -> GenerateResponse:
        """
        Generate a complete response for a prompt.

        Args:
            request: The generation request. Unknown fields are passed through.

        Returns:
            The generation response.
        """
        ...

    async def list_models(self) -> ModelListResponse:
        """
        List the locally available models.

        Returns:
            A mapping with a `models` list, in server order.
        """
        ...

    async def pull_model(self, name: str) -> PullResponse:
        """
        Pull a model by name.

        Args:
            name: The model name, e.g. "llama2".

        Returns:
            A mapping with the final `status`.
        """
        ...

    def stream_generate(
        self, request: Union[GenerateRequest, Mapping[str, Any]]
    ) -> AsyncIterator[GenerateResponse]:
        """
        Generate a response and yield it chunk by chunk.

        Args:
            request: The generation request. `stream` is forced to true.

        Returns:
            AsyncIterator yielding partial responses; the last has `done` set.
        """
        ...
