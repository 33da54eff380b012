# utils/config.py
from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime configuration loaded from environment variables or a `.env`
    file. Field names map to upper-case variables (`llm_model` -> `LLM_MODEL`).
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: Optional[str] = None
    mongodb_host: str = "localhost"
    mongodb_port: int = 27017
    mongodb_database: str = "finchat_db"
    mongodb_username: str = ""
    mongodb_password: str = ""
    mongodb_auth_source: str = "admin"

    llm_base_url: str = "https://ai.gateway.lovable.dev/v1"
    llm_api_key: str = ""
    llm_model: str = "google/gemini-2.5-flash"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000

    faq_context_limit: int = 20
    cors_origins: Annotated[List[str], NoDecode] = ["*"]
    """Comma-separated in the environment: `CORS_ORIGINS=https://a.example,https://b.example`."""

    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            origins = [o.strip() for o in value.split(",") if o.strip()]
            return origins or ["*"]
        return value

    @property
    def resolved_mongodb_uri(self) -> str:
        if self.mongodb_uri:
            return self.mongodb_uri
        if self.mongodb_username and self.mongodb_password:
            return (
                f"mongodb://{self.mongodb_username}:{self.mongodb_password}"
                f"@{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}"
                f"?authSource={self.mongodb_auth_source}"
            )
        return f"mongodb://{self.mongodb_host}:{self.mongodb_port}/{self.mongodb_database}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    FastAPI dependency factory that returns a singleton Settings instance.
    """
    return Settings()
