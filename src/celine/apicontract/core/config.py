# celine/apicontract/core/config.py
"""
Runtime configuration for contract routers and clients.

Environment variables (prefixed ``API_CONTRACT_``) override defaults.
Explicit constructor arguments always win over settings.
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(
        env_prefix="API_CONTRACT_",
        env_file=".env",
        extra="ignore",
    )

    log_level: str = "INFO"

    attach_response_validator: bool = Field(
        default=True,
        description="Validate outgoing JSON bodies against the contract",
    )
    client_timeout: float = Field(
        default=30.0,
        description="Default httpx timeout (seconds) for contract clients",
    )


settings = Settings()
