import json

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = Field(default="local", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # ─────────────────────────────────────────────
    # Proxy service
    # ─────────────────────────────────────────────
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=5000, alias="PORT")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    mcp_enabled: bool = Field(default=True, alias="MCP_ENABLED")

    # ─────────────────────────────────────────────
    # TMDb upstream
    # ─────────────────────────────────────────────
    tmdb_api_key: str | None = Field(default=None, alias="TMDB_API_KEY")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3", alias="TMDB_BASE_URL")
    tmdb_timeout_seconds: float = Field(default=10.0, alias="TMDB_TIMEOUT_SECONDS")
    tmdb_image_base_url: str = Field(default="https://image.tmdb.org/t/p", alias="TMDB_IMAGE_BASE_URL")

    # ─────────────────────────────────────────────
    # Web client
    # ─────────────────────────────────────────────
    proxy_base_url: str = Field(default="http://localhost:5000/api", alias="PROXY_BASE_URL")
    web_port: int = Field(default=3000, alias="WEB_PORT")

    @field_validator("tmdb_api_key", mode="before")
    @classmethod
    def normalize_tmdb_api_key(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        cleaned = value.strip()
        return cleaned or None

    @field_validator("tmdb_base_url", "tmdb_image_base_url", "proxy_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        return value.strip().rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        return value.strip().upper()

    @field_validator("tmdb_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("TMDB_TIMEOUT_SECONDS must be positive")
        return value

    def has_tmdb_credentials(self) -> bool:
        return bool(self.tmdb_api_key)

    def cors_origin_list(self) -> list[str]:
        raw = (self.cors_origins or "").strip()
        if not raw:
            return []

        values: list[str]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                values = [str(v) for v in parsed if isinstance(v, str)]
            else:
                values = [raw]
        else:
            values = raw.split(",")

        normalized: list[str] = []
        seen: set[str] = set()
        for value in values:
            cleaned = value.strip().strip("\"'")
            if not cleaned:
                continue
            # CORS origins are scheme + host (+ optional port) with no path slash.
            if cleaned != "*" and cleaned.endswith("/"):
                cleaned = cleaned.rstrip("/")
            if cleaned in seen:
                continue
            seen.add(cleaned)
            normalized.append(cleaned)

        return normalized
