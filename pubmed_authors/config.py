"""Runtime configuration for the PubMed author harvest."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings resolved from the environment and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pubmed_api_key: Optional[str] = None
    base_url: str = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/"

    batch_size: int = Field(default=200, gt=0)
    default_retmax: int = Field(default=500, gt=0)
    max_results: int = Field(default=1000, gt=0)
    delay_seconds: float = Field(default=1.0, ge=0)
    retry_attempts: int = Field(default=3, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)

    start_year: int = 2015
    end_year: int = 2025

    query: str = "gene expression regulation"
    publication_types: List[str] = Field(
        default_factory=lambda: ["Journal Article", "Review"]
    )
    keywords: List[str] = Field(default_factory=lambda: ["gene"])

    output_path: Optional[Path] = None
    log_level: str = "INFO"

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"

    @model_validator(mode="after")
    def _check_year_range(self) -> "Settings":
        if self.end_year < self.start_year:
            raise ValueError(
                f"end_year ({self.end_year}) must not precede "
                f"start_year ({self.start_year})."
            )
        return self

    def require_api_key(self) -> str:
        """Return the PubMed API key or fail with setup instructions."""
        if not self.pubmed_api_key:
            raise ValueError(
                "Missing required environment variable: PUBMED_API_KEY. "
                "Create a .env file containing PUBMED_API_KEY=your_api_key_here."
            )
        return self.pubmed_api_key


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, applying explicit overrides."""
    return Settings(**overrides)


__all__ = ["Settings", "load_settings"]
