from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .urls import get_create_document_url


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_CLIENT_ prefix.
    For example:
        - CRPT_CLIENT_LIMIT=5
        - CRPT_CLIENT_PERIOD_SECONDS=60
        - CRPT_CLIENT_ENDPOINT_URL=https://example.test/api/v3/lk/documents/create

    Alternatively, settings can be provided programmatically when creating the Container:
        container = Container()
        container.config.from_pydantic(AppConfig(limit=5, period_seconds=1.0))
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_CLIENT_",
        case_sensitive=False,
        extra="forbid",
    )

    period_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Refill period in seconds: the permit pool is reset to full capacity once per period",
    )

    limit: int = Field(
        default=10,
        ge=1,
        description="Number of permits per period (maximum submissions admitted between refills)",
    )

    endpoint_url: str = Field(
        default_factory=get_create_document_url,
        description="Create-document endpoint that receives every submission",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="HTTP timeout for a single create-document call",
    )

    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Worker threads for batch submissions and HTTP connections. If None, uses limit",
    )
