"""
API server configuration using Pydantic Settings.

Process-level knobs for uvicorn and the HTTP edge (CORS, docs, logging).
Application behaviour (integrations, trial length, gate routes) is
configured in shared.config.
"""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """Server settings, read from ESTUDAR_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ESTUDAR_",
        case_sensitive=False,
        extra="ignore",
    )

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False
    workers: int = 1
    log_level: str = "info"
    # The web front end proxies /api to this process
    forwarded_allow_ips: str = "127.0.0.1"

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    @property
    def logging_level(self) -> int:
        """Numeric level for the stdlib root logger; debug mode forces DEBUG."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level.upper(), logging.INFO)


def get_settings() -> APISettings:
    """Get settings instance."""
    return APISettings()
