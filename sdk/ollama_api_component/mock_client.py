import asyncio
import os
import re
from datetime import datetime, timezone
from typing import Any, AsyncIterator, List, Mapping, Optional, Sequence, Union

from .schemas import (
    GenerateRequest,
    GenerateResponse,
    ModelListResponse,
    PullResponse,
)

DEFAULT_TOKEN_DELAY = 0.01

DEFAULT_RESPONSES = [
    "Hello! How can I help you today?",
    "That's an interesting question. Could you tell me more about it?",
    "I understand. Is there anything else you'd like to know?",
    "Yes, I think you're absolutely right about that.",
    "I'm sorry, but could you be more specific about what you're looking for?",
]

DEFAULT_MODELS = ["llama2"]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class MockOllamaClient:
    """
    An in-memory stand-in for `OllamaClient` that never touches the network.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_delay: Optional[float] = None,
        responses: Optional[Sequence[str]] = None,
        models: Optional[Sequence[str]] = None,
    ):
        # base_url is accepted for signature compatibility only
        del base_url

        if token_delay is not None:
            self.token_delay = token_delay
        else:
            env_delay = os.getenv("MOCK_TOKEN_DELAY")
            try:
                self.token_delay = (
                    float(env_delay) if env_delay is not None else DEFAULT_TOKEN_DELAY
                )
            except ValueError:
                self.token_delay = DEFAULT_TOKEN_DELAY

        if responses is not None:
            if not responses:
                raise ValueError("responses must be a non-empty list")
            if not all(isinstance(x, str) for x in responses):
                raise TypeError("all responses must be str")
            self.mock_responses = list(responses)
        else:
            self.mock_responses = DEFAULT_RESPONSES.copy()

        self.models: List[str] = (
            list(models) if models is not None else DEFAULT_MODELS.copy()
        )
        self.response_index = 0

    @staticmethod
    def _tokenize(text: str) -> List[str]:
        """Split text into words and the whitespace between them."""
        return re.findall(r"\S+|\s+", text)

    def _next_response(self) -> str:
        text = self.mock_responses[self.response_index % len(self.mock_responses)]
        self.response_index += 1
        return text

    @staticmethod
    def _model_name(request: Union[GenerateRequest, Mapping[str, Any]]) -> str:
        if isinstance(request, GenerateRequest):
            return request.model
        return str(request.get("model", ""))

    async def generate(
        self, request: Union[GenerateRequest, Mapping[str, Any]]
    ) -> GenerateResponse:
        """Return the next canned response as a complete generation."""
        text = self._next_response()
        await asyncio.sleep(0.001)
        return {
            "model": self._model_name(request),
            "created_at": _now(),
            "response": text,
            "done": True,
        }

    async def stream_generate(
        self, request: Union[GenerateRequest, Mapping[str, Any]]
    ) -> AsyncIterator[GenerateResponse]:
        """Yield the next canned response one token per chunk, then a final `done` chunk."""
        model = self._model_name(request)
        for token in self._tokenize(self._next_response()):
            yield {
                "model": model,
                "created_at": _now(),
                "response": token,
                "done": False,
            }
            await asyncio.sleep(self.token_delay)

        yield {"model": model, "created_at": _now(), "response": "", "done": True}

    async def list_models(self) -> ModelListResponse:
        return {"models": [{"name": name} for name in self.models]}

    async def pull_model(self, name: str) -> PullResponse:
        if name not in self.models:
            self.models.append(name)
        return {"status": "success"}
