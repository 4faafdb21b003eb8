"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations from one explicit
Settings instance.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.admin.interfaces import IAdminService
    from modules.ask.interfaces import IAskService
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import UserRepository
    from modules.billing.interfaces import IBillingService
    from modules.gate import AccessGate
    from modules.messaging import IMessagingGateway
    from modules.search.interfaces import ISearchService
    from modules.sessions import SessionCodec
    from modules.study.interfaces import IStudyService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._reset_instances()

    def _reset_instances(self) -> None:
        self._session_codec: "SessionCodec | None" = None
        self._gateway: "IMessagingGateway | None" = None
        self._user_repository: "UserRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._search_service: "ISearchService | None" = None
        self._billing_service: "IBillingService | None" = None
        self._admin_service: "IAdminService | None" = None
        self._ask_service: "IAskService | None" = None
        self._study_service: "IStudyService | None" = None
        self._gate: "AccessGate | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def db(self) -> "Client":
        """Supabase client; raises DatabaseNotConfiguredError when unset."""
        from shared.database import get_supabase_client
        return get_supabase_client(self.settings)

    @property
    def session_codec(self) -> "SessionCodec":
        """Get the session token codec."""
        if self._session_codec is None:
            from modules.sessions import create_session_codec
            self._session_codec = create_session_codec(self.settings)
        return self._session_codec

    @property
    def gateway(self) -> "IMessagingGateway":
        """Get the WhatsApp gateway."""
        if self._gateway is None:
            from modules.messaging import create_gateway
            self._gateway = create_gateway(self.settings)
        return self._gateway

    @property
    def user_repository(self) -> "UserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.db)
        return self._user_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.repository import VerificationRepository
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                settings=self.settings,
                users=self.user_repository,
                verifications=VerificationRepository(self.db),
                gateway=self.gateway,
                codec=self.session_codec,
            )
        return self._auth_service

    @property
    def search(self) -> "ISearchService":
        """Get the search service; degrades to empty results without a database."""
        if self._search_service is None:
            from modules.search.repository import LawSearchRepository
            from modules.search.service import SearchService
            repository = (
                LawSearchRepository(self.db) if self.settings.database_configured else None
            )
            self._search_service = SearchService(repository)
        return self._search_service

    @property
    def billing(self) -> "IBillingService":
        """Get the billing service instance."""
        if self._billing_service is None:
            from modules.billing.client import MercadoPagoClient
            from modules.billing.repository import TransactionRepository
            from modules.billing.service import BillingService
            self._billing_service = BillingService(
                settings=self.settings,
                users=self.user_repository,
                transactions=TransactionRepository(self.db),
                client=MercadoPagoClient(
                    access_token=self.settings.mercadopago_access_token,
                    base_url=self.settings.mercadopago_base_url,
                    timeout=self.settings.payment_timeout_seconds,
                ),
            )
        return self._billing_service

    @property
    def admin(self) -> "IAdminService":
        """Get the admin service instance."""
        if self._admin_service is None:
            from modules.admin.repository import AdminRepository
            from modules.admin.service import AdminService
            self._admin_service = AdminService(AdminRepository(self.db))
        return self._admin_service

    @property
    def ask(self) -> "IAskService":
        """Get the ask service instance."""
        if self._ask_service is None:
            from modules.ask.service import AskService, create_chat_model
            self._ask_service = AskService(
                model_name=self.settings.openai_model,
                llm=create_chat_model(self.settings),
            )
        return self._ask_service

    @property
    def study(self) -> "IStudyService":
        """Get the study service instance."""
        if self._study_service is None:
            from modules.study.service import StudyService
            self._study_service = StudyService()
        return self._study_service

    @property
    def gate(self) -> "AccessGate":
        """Get the access gate."""
        if self._gate is None:
            from modules.gate import AccessGate
            users = (lambda: self.user_repository) if self.settings.database_configured else None
            self._gate = AccessGate(self.settings, self.session_codec, users=users)
        return self._gate

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._reset_instances()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a preconfigured container (tests, alternative wiring)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_session_codec() -> "SessionCodec":
    """FastAPI dependency for the session codec."""
    return get_container().session_codec


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_search_service() -> "ISearchService":
    """FastAPI dependency for search service."""
    return get_container().search


def get_billing_service() -> "IBillingService":
    """FastAPI dependency for billing service."""
    return get_container().billing


def get_admin_service() -> "IAdminService":
    """FastAPI dependency for admin service."""
    return get_container().admin


def get_ask_service() -> "IAskService":
    """FastAPI dependency for ask service."""
    return get_container().ask


def get_study_service() -> "IStudyService":
    """FastAPI dependency for study service."""
    return get_container().study
