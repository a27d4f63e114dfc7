import json
from typing import AsyncIterator, Optional, Union

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ollama_api_component import GenerateRequest, GenerateResponse
from src.api.services.ollama_service import OllamaService, get_ollama_service

router = APIRouter(
    prefix="/api",
    tags=["generate"],
)


async def _ndjson_stream(
    first: Optional[GenerateResponse], rest: AsyncIterator[GenerateResponse]
) -> AsyncIterator[str]:
    if first is None:
        return
    yield json.dumps(first) + "\n"
    async for chunk in rest:
        yield json.dumps(chunk) + "\n"


@router.post("/generate", response_model=None)
async def generate(
    request: GenerateRequest,
    ollama_service: OllamaService = Depends(get_ollama_service),
) -> Union[GenerateResponse, StreamingResponse]:
    """
    Generate text for a prompt with the requested model.

    With `stream: true` the chunks are relayed as newline-delimited JSON as
    soon as the upstream server produces them.
    """
    if request.stream:
        chunks = ollama_service.stream_generate(request)
        # Upstream status and connection errors surface on the first chunk,
        # before any response headers are sent.
        first = await anext(chunks, None)
        return StreamingResponse(
            _ndjson_stream(first, chunks),
            media_type="application/x-ndjson",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
    return await ollama_service.generate(request)
