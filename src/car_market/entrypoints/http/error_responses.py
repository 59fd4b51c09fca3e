"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
Referenced from route ``responses=`` declarations so the OpenAPI schema
documents the error body.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors.

    Used in validation errors to indicate which field failed and why.
    """

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "year",
                "message": "Must be between 1900 and 2027",
                "code": "OUT_OF_RANGE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {
                "detail": "Car with identifier '42' not found",
                "code": "NOT_FOUND"
            }

        Validation error with multiple fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {"field": "price", "message": "Must be greater than 0", "code": "INVALID_VALUE"}
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Car with identifier '42' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "price",
                            "message": "Must be greater than 0",
                            "code": "INVALID_VALUE",
                        },
                        {
                            "field": "title",
                            "message": "Must not be blank",
                            "code": "REQUIRED",
                        },
                    ],
                },
            ]
        }
    )


NOT_FOUND_RESPONSE = {"model": ErrorResponse, "description": "Resource not found"}
VALIDATION_ERROR_RESPONSE = {"model": ErrorResponse, "description": "Validation error"}
SERVER_ERROR_RESPONSE = {"model": ErrorResponse, "description": "Persistence or unexpected failure"}
