import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Mapping, Optional, Union

import httpx

from .errors import OllamaApiError, OllamaTimeoutError
from .schemas import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_MS,
    GenerateRequest,
    GenerateResponse,
    ModelListResponse,
    OllamaClientConfig,
    PullRequest,
    PullResponse,
)

logger = logging.getLogger(__name__)

GenerateInput = Union[GenerateRequest, Mapping[str, Any]]


class OllamaClient:
    """
    A client for the Ollama REST API.

    Every call opens its own `httpx.AsyncClient`, so one instance can be shared
    freely between concurrent tasks. The configured timeout bounds the wait for
    response headers only; reading the body is not covered by it.

    Examples:
        >>> client = OllamaClient()
        >>> response = await client.generate({"model": "llama2", "prompt": "Hello"})
        >>> print(response["response"])

        >>> client = OllamaClient(base_url="https://ollama.example.com/api", timeout=5000)
        >>> models = await client.list_models()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT_MS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = OllamaClientConfig(base_url=base_url, timeout=timeout)
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: OllamaClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "OllamaClient":
        return cls(
            base_url=config.base_url, timeout=config.timeout, transport=transport
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def timeout(self) -> int:
        """Request timeout in milliseconds."""
        return self.config.timeout

    async def _send(
        self, client: httpx.AsyncClient, request: httpx.Request
    ) -> httpx.Response:
        """
        Race the request against the deadline.

        The deadline counts as elapsed only when the timer finishes before the
        send does; errors raised by the send itself propagate unchanged.
        """
        send = asyncio.ensure_future(client.send(request, stream=True))
        try:
            done, _ = await asyncio.wait({send}, timeout=self.timeout / 1000)
        except asyncio.CancelledError:
            send.cancel()
            raise

        if send not in done:
            send.cancel()
            await asyncio.wait({send})
            if not send.cancelled() and send.exception() is None:
                await send.result().aclose()
            logger.debug(
                "%s %s timed out after %dms", request.method, request.url, self.timeout
            )
            raise OllamaTimeoutError(self.timeout)

        return send.result()

    @asynccontextmanager
    async def _open(
        self, path: str, method: str, body: Optional[Any] = None
    ) -> AsyncIterator[httpx.Response]:
        """
        Send a request and yield the response once its headers are in.

        Non-2xx responses are turned into `OllamaApiError`. The response and the
        underlying HTTP client are closed when the context exits.
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        # Transport-level timeouts are disabled; `_send` enforces the deadline.
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(None), transport=self._transport
        ) as client:
            request = client.build_request(
                method,
                url,
                json=body,
                headers={"Accept": "application/json"},
            )
            response = await self._send(client, request)
            try:
                if not response.is_success:
                    raise OllamaApiError(response.status_code, response.reason_phrase)
                yield response
            finally:
                await response.aclose()

    async def _request(self, path: str, method: str, body: Optional[Any] = None) -> Any:
        """
        Make a raw request to the Ollama API and return the parsed JSON body.

        The body is returned as-is, without checking it against any schema.

        Raises:
            OllamaApiError: The server answered with a non-2xx status.
            OllamaTimeoutError: No response headers within the timeout.
            httpx.TransportError: Connection-level failures, unmodified.
            json.JSONDecodeError: The body is not valid JSON.
        """
        async with self._open(path, method, body) as response:
            await response.aread()
            return response.json()

    @staticmethod
    def _generate_payload(request: GenerateInput) -> Dict[str, Any]:
        if not isinstance(request, GenerateRequest):
            request = GenerateRequest.model_validate(dict(request))
        return request.to_payload()

    async def generate(self, request: GenerateInput) -> GenerateResponse:
        """
        Generate a completion.

        Args:
            request: A `GenerateRequest` or a mapping with at least `model` and
                `prompt`. Extra keys are sent unchanged.

        Returns:
            The server's JSON response.
        """
        return await self._request("/generate", "POST", self._generate_payload(request))

    async def list_models(self) -> ModelListResponse:
        """List the models available on the server."""
        return await self._request("/tags", "GET")

    async def pull_model(self, name: str) -> PullResponse:
        """Pull a model from the Ollama registry."""
        return await self._request(
            "/pull", "POST", PullRequest(name=name).model_dump()
        )

    async def stream_generate(
        self, request: GenerateInput
    ) -> AsyncIterator[GenerateResponse]:
        """
        Generate a completion and yield the chunks as they arrive.

        The server answers a streaming request with one JSON object per line;
        each non-blank line is parsed and yielded in order. The last chunk has
        `done` set to true.
        """
        payload = self._generate_payload(request)
        payload["stream"] = True

        async with self._open("/generate", "POST", payload) as response:
            async for line in response.aiter_lines():
                if not line.strip():
                    continue
                yield json.loads(line)
