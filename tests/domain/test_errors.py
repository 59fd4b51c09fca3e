"""Tests for domain error classes."""

from car_market.domain.errors import (
    DomainError,
    InternalError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from car_market.domain.pagination import PagingValidationError


class TestDomainError:
    """Tests for base DomainError class."""

    def test_creates_error_with_message(self) -> None:
        """DomainError stores message and has correct error code."""
        error = DomainError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.error_code == "DOMAIN_ERROR"
        assert error.context == {}

    def test_to_dict_returns_structured_format(self) -> None:
        """DomainError.to_dict() merges context into the structured format."""
        error = DomainError("Test error", field="price", value=123)

        assert error.to_dict() == {
            "message": "Test error",
            "code": "DOMAIN_ERROR",
            "field": "price",
            "value": 123,
        }

    def test_str_representation(self) -> None:
        assert str(DomainError("Test message")) == "Test message"


class TestValidationError:
    """Tests for ValidationError class."""

    def test_creates_simple_validation_error(self) -> None:
        error = ValidationError("Invalid input")

        assert error.message == "Invalid input"
        assert error.error_code == "VALIDATION_ERROR"
        assert error.errors is None

    def test_default_message_without_errors(self) -> None:
        assert ValidationError().message == "Validation error"

    def test_field_errors_use_validation_failed_message(self) -> None:
        """Field-level errors are carried and exposed by to_dict()."""
        errors = [{"field": "price", "message": "Must be greater than 0", "code": "INVALID_VALUE"}]

        error = ValidationError(errors=errors)

        assert error.message == "Validation failed"
        assert error.to_dict() == {
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }

    def test_paging_validation_error_is_a_validation_error(self) -> None:
        error = PagingValidationError("limit must be >= 1")

        assert isinstance(error, ValidationError)
        assert error.error_code == "VALIDATION_ERROR"


class TestNotFoundError:
    """Tests for NotFoundError class."""

    def test_message_includes_resource_and_identifier(self) -> None:
        error = NotFoundError(resource="Car", identifier=42)

        assert error.message == "Car with identifier '42' not found"
        assert error.error_code == "NOT_FOUND"
        assert error.context == {"resource": "Car", "identifier": 42}

    def test_message_without_identifier(self) -> None:
        assert NotFoundError(resource="CarImage").message == "CarImage not found"


class TestInternalErrors:
    """Tests for InternalError and PersistenceError."""

    def test_internal_error_code(self) -> None:
        assert InternalError("boom").error_code == "INTERNAL_ERROR"

    def test_persistence_error_is_internal(self) -> None:
        """PersistenceError keeps its own code but is caught as InternalError."""
        error = PersistenceError("Failed to search cars", operation="search cars")

        assert isinstance(error, InternalError)
        assert error.error_code == "PERSISTENCE_ERROR"
        assert error.to_dict()["operation"] == "search cars"
