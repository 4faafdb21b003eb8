"""
Centralized configuration for the Estudar.Pro backend.

All settings are loaded from environment variables with sensible defaults.
Integration-specific settings are namespaced (e.g., SUPABASE_*, WASENDER_*,
MERCADOPAGO_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Estudar.Pro API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""

    # Session tokens (HMAC key for the session cookies)
    session_secret: str = ""

    # Admin panel credentials
    admin_email: str = ""
    admin_password: str = ""

    # Trial and verification windows
    trial_days: int = 3
    login_code_ttl_minutes: int = 5
    registration_code_ttl_minutes: int = 10

    # WhatsApp messaging (WasenderAPI)
    wasender_api_key: str = ""
    wasender_base_url: str = "https://www.wasenderapi.com/api"
    messaging_timeout_seconds: float = 20.0

    # Mercado Pago
    mercadopago_access_token: str = ""
    mercadopago_base_url: str = "https://api.mercadopago.com"
    payment_timeout_seconds: float = 5.0

    # Public site URL (for payment callbacks and redirects)
    site_url: str = "http://localhost:3000"

    # LLM
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Access gate route classes
    gate_bypass_prefixes: list[str] = ["/api", "/_next", "/static", "/favicon.ico"]
    gate_public_prefixes: list[str] = [
        "/auth",
        "/payment",
        "/leis",
        "/sobre",
        "/planos",
        "/admin/login",
    ]
    gate_admin_prefixes: list[str] = ["/admin"]
    gate_premium_prefixes: list[str] = ["/search", "/flashcards", "/quiz", "/simulados", "/study"]
    gate_entry_path: str = "/"
    gate_payment_path: str = "/payment"

    @property
    def database_configured(self) -> bool:
        """Whether the Supabase service-role connection can be created."""
        return bool(self.supabase_url and self.supabase_service_role_key)

    @property
    def messaging_configured(self) -> bool:
        """Whether the WhatsApp gateway has credentials."""
        return bool(self.wasender_api_key)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
