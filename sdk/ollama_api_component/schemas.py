from typing import Any, Dict, List, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

DEFAULT_BASE_URL = "http://localhost:11434/api"
DEFAULT_TIMEOUT_MS = 30000


class OllamaClientConfig(BaseModel):
    """
    Connection settings for a single client instance.

    `base_url` has its trailing slashes removed so that request paths, which
    always start with "/", can be appended directly.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class GenerateRequest(BaseModel):
    """
    Body of `POST /generate`.

    Fields not declared here (options, system, template, format, ...) are kept
    and sent to the server unchanged.
    """

    model_config = ConfigDict(extra="allow")

    model: str
    prompt: str
    stream: Optional[StrictBool] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize only the fields the caller actually set."""
        return self.model_dump(mode="json", exclude_unset=True)


class PullRequest(BaseModel):
    name: str


# Responses are returned exactly as the server sent them. TypedDicts describe
# the expected shape without validating it.


class GenerateResponse(TypedDict, total=False):
    model: str
    created_at: str
    response: str
    done: bool
    context: List[int]
    total_duration: int
    load_duration: int
    prompt_eval_count: int
    prompt_eval_duration: int
    eval_count: int
    eval_duration: int


class ModelInfo(TypedDict, total=False):
    name: str
    model: str
    modified_at: str
    size: int
    digest: str
    details: Dict[str, Any]


class ModelListResponse(TypedDict):
    models: List[ModelInfo]


class PullResponse(TypedDict):
    status: str
