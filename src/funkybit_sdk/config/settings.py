"""Settings configuration for the funkybit SDK."""

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.funkybit_sdk.config.constants import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT_SECONDS

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FUNKYBIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("funkybit_api_url", "funkybit_api"),
        description="funkybit REST API base URL",
    )
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        le=300,
        description="Timeout applied to every REST request",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @field_validator("json_logs", mode="before")
    @classmethod
    def parse_bool(cls, v) -> bool:
        """Parse string to boolean."""
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "y")
        return bool(v)
