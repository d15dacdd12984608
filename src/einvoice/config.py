"""Configuration management using pydantic-settings."""

import json
from functools import lru_cache
from typing import Annotated, Iterable, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .rules import Severity


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # File Processing
    max_file_size_mb: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Maximum file size in MB",
    )

    # Validation
    unexpected_currency_severity: Literal["error", "warning"] = Field(
        default="error",
        description="Severity of tax totals in a currency other than BT-5 or BT-6",
    )
    enable_peppol_rules: bool = Field(
        default=True,
        description="Run PEPPOL BIS Billing 3.0 rules for PEPPOL business processes",
    )
    enable_xrechnung_rules: bool = Field(
        default=True,
        description="Run XRechnung (BR-DE-*) rules",
    )

    # Server Settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS
    cors_allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Comma-separated list of allowed CORS origins",
    )

    @staticmethod
    def _split_csv(value: str) -> list[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: str | Iterable[str]) -> list[str]:
        """Allow comma-separated or JSON list env strings for CORS origins."""
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return []
            if text.startswith("["):
                try:
                    parsed = json.loads(text)
                except json.JSONDecodeError:
                    parsed = None
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            return cls._split_csv(text)
        return list(value)

    @property
    def max_file_size_bytes(self) -> int:
        """Maximum file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def unexpected_currency_level(self) -> Severity:
        return Severity(self.unexpected_currency_severity)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
