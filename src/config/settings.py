from functools import lru_cache

from ollama_api_component import OllamaClientConfig
from ollama_api_component.schemas import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    A configuration class for managing environment variables.

    Values are read from the process environment first and then from a `.env`
    file in the working directory, if one exists.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OLLAMA_BASE_URL: str = DEFAULT_BASE_URL
    OLLAMA_TIMEOUT: int = DEFAULT_TIMEOUT_MS
    LOG_LEVEL: str = "INFO"

    def client_config(self) -> OllamaClientConfig:
        return OllamaClientConfig(
            base_url=self.OLLAMA_BASE_URL, timeout=self.OLLAMA_TIMEOUT
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
