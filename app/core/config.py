from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_name: str = "Jharkhand Travel Assistant API"

    openai_api_key: str = Field(default="", description="LLM provider API key")
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None
    gateway_timeout_seconds: float = Field(default=30.0, gt=0)

    itinerary_temperature: float = 0.7
    itinerary_max_tokens: int = 2000
    chat_temperature: float = 0.8
    chat_max_tokens: int = 800
    chat_history_limit: int = Field(default=20, ge=0)

    region_name: str = "Jharkhand"
    region_country: str = "India"
    currency_symbol: str = "₹"

    cors_allow_origin: str = "*"
    cors_allow_headers: List[str] = Field(
        default_factory=lambda: ["authorization", "x-client-info", "apikey", "content-type"]
    )

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def region_label(self) -> str:
        return f"{self.region_name}, {self.region_country}"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
