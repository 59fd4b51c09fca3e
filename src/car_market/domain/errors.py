"""
Errors raised by the listing use cases.

Each class carries an ``error_code``; the HTTP layer picks the status code
from it, so nothing downstream parses message text.
"""

from typing import Any


class DomainError(Exception):
    """Root of the listing errors; ``context`` ends up in the response body."""

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """
    A listing, search or upload broke a business rule.

    ``errors`` holds one ``{"field", "message", "code"}`` entry per offending
    field, e.g. a year outside [1900, next year] together with a price of 0.
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """No car, image or specification with the requested id."""

    error_code: str = "NOT_FOUND"

    def __init__(
        self, resource: str, identifier: str | int | None = None, **context: Any
    ) -> None:
        if identifier is not None:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class InternalError(DomainError):
    error_code: str = "INTERNAL_ERROR"


class PersistenceError(InternalError):
    """
    The database rejected or lost a query.

    The whole operation is aborted: no partial page, no retry.
    """

    error_code: str = "PERSISTENCE_ERROR"
