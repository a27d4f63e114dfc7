from fastapi import APIRouter, Depends

from ollama_api_component import ModelListResponse, PullResponse
from ollama_api_component.schemas import PullRequest
from src.api.services.ollama_service import OllamaService, get_ollama_service

router = APIRouter(
    prefix="/api/models",
    tags=["models"],
)


@router.get(
    "",
    response_model=None,
    summary="List locally available models",
)
async def get_models(
    ollama_service: OllamaService = Depends(get_ollama_service),
) -> ModelListResponse:
    """
    Get the models available on the Ollama server, in server order.
    """
    return await ollama_service.list_models()


@router.post(
    "/pull",
    response_model=None,
    summary="Pull a model from the Ollama registry",
)
async def pull_new_model(
    request: PullRequest,
    ollama_service: OllamaService = Depends(get_ollama_service),
) -> PullResponse:
    """
    Pull a model from the official Ollama registry.
    """
    return await ollama_service.pull_model(request.name)
