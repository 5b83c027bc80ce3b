from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    name: str = "Sortir API"
    version: str = "1.0.0"
    debug: bool = False
    prefix: str = "/api"
    allowed_origins: list = ["*"]

    store_backend: Literal["memory", "disk", "json", "redis"] = "disk"
    store_path: str = "data/uploads"
    store_file: str = "data/documents.json"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_prefix: str = "sortir:documents"

    llm_provider: Literal["openai", "openrouter", "ollama"] = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_api_key: str | None = None
    llm_base_url: str | None = None
    llm_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=1000, ge=1)
    llm_timeout: float = Field(default=60.0, gt=0)

    max_context_length: int = Field(default=12000, ge=0)
    max_question_length: int = Field(default=2000, ge=1)
    max_file_size_mb: int = Field(default=20, ge=1)

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


settings = Settings()
