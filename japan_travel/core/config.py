from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_name: str = "Japan Travel Planner API"
    api_prefix: str = "/api"

    openai_api_key: str = Field(default="", description="Credential for plan generation and search")
    openai_model_plan: str = "gpt-4.1"
    openai_model_search: str = "gpt-4.1-mini"
    plan_generation_mode: Literal["structured", "text"] = "structured"

    blob_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str | None = None
    supabase_key: str | None = None
    supabase_bucket: str = "travel-plans"
    plans_prefix: str = "plans/"

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]
