"""Application settings via Pydantic Settings."""

from functools import lru_cache
import json
from typing import Annotated

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Loyverse Proxy"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ORIGINS", "ALLOWED_ORIGINS"),
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        """
        Accept either:
        - JSON array string: '["https://a.com","http://localhost:3000"]'
        - Comma-separated string: "https://a.com,http://localhost:3000"
        - Already-parsed list[str]
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError:
                    # Fall back to comma split if env var isn't valid JSON.
                    parsed = s.split(",")
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
                return [str(parsed).strip()]
            return [part.strip() for part in s.split(",") if part.strip()]
        return [str(v).strip()] if str(v).strip() else []

    # Loyverse
    loyverse_api_token: SecretStr = Field(
        validation_alias=AliasChoices("LOYVERSE_API_TOKEN"),
        description="Bearer token for the Loyverse API. Required, there is no fallback.",
    )
    loyverse_api_base: str = Field(
        default="https://api.loyverse.com/v1.0",
        validation_alias=AliasChoices("LOYVERSE_API_BASE"),
    )
    loyverse_timeout: float | None = Field(
        default=None,
        validation_alias=AliasChoices("LOYVERSE_TIMEOUT"),
        gt=0,
        description="Per-request timeout in seconds (None = wait indefinitely)",
    )
    loyverse_debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("LOYVERSE_DEBUG"),
        description="If True, log full Loyverse response JSON for debugging",
    )

    @field_validator("loyverse_api_token")
    @classmethod
    def _require_token(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("LOYVERSE_API_TOKEN must not be empty")
        return v

    @field_validator("loyverse_api_base")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
