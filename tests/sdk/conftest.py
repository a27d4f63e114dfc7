"""
Common fixtures for SDK tests.
This file contains fixtures shared across SDK test modules.
"""

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from ollama_api_component import OllamaClient

BASE_URL = "http://ollama.test/api"


class RecordingHandler:
    """
    An httpx.MockTransport handler that replays a canned response and keeps
    every request it receives.
    """

    def __init__(self, status_code: int = 200, payload: Any = None, **response_kwargs):
        self.status_code = status_code
        self.payload = payload
        self.response_kwargs = response_kwargs
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.payload is not None:
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, **self.response_kwargs)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Dict[str, Any]:
        return json.loads(self.last_request.content)


@pytest.fixture
def make_client() -> Callable[..., OllamaClient]:
    """
    Builds an OllamaClient whose network layer is the given handler.
    """

    def _make(handler, **kwargs) -> OllamaClient:
        kwargs.setdefault("base_url", BASE_URL)
        return OllamaClient(transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def recording_handler() -> Callable[..., RecordingHandler]:
    """
    Factory for RecordingHandler instances.
    """
    return RecordingHandler
