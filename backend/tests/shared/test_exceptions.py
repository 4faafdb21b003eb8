"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    DatabaseNotConfiguredError,
    EstudarError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


class TestEstudarError:
    def test_stores_message(self):
        error = EstudarError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code_is_class_name(self):
        assert EstudarError("x").code == "EstudarError"
        assert NotFoundError("x").code == "NotFoundError"

    def test_custom_code_and_details(self):
        error = EstudarError("Test error", code="CUSTOM", details={"key": "value"})
        assert error.code == "CUSTOM"
        assert error.details == {"key": "value"}

    def test_default_details_empty(self):
        assert EstudarError("x").details == {}

    def test_to_dict(self):
        error = EstudarError("Test error", code="TEST_ERROR", details={"key": "value"})
        assert error.to_dict() == {
            "error": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
        }


class TestSubclasses:
    def test_all_inherit_base(self):
        for cls in (
            NotFoundError,
            ValidationError,
            ConflictError,
            AuthenticationError,
            AuthorizationError,
            ConfigurationError,
        ):
            assert isinstance(cls("x"), EstudarError)

    def test_database_not_configured(self):
        error = DatabaseNotConfiguredError()
        assert isinstance(error, ConfigurationError)
        assert error.code == "DATABASE_NOT_CONFIGURED"
        assert error.message == "Database not configured"


class TestExternalServiceError:
    def test_records_service(self):
        error = ExternalServiceError("Gateway down", service="wasender")
        assert error.service == "wasender"
        assert error.details["service"] == "wasender"

    def test_keeps_existing_details(self):
        error = ExternalServiceError("Boom", service="mercadopago", details={"status_code": 500})
        assert error.details == {"status_code": 500, "service": "mercadopago"}
