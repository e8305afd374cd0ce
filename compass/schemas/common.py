"""
Common / shared Pydantic schemas used across multiple endpoints.

Defines the response envelopes and the error contract so that the OpenAPI
document shows what clients receive on failure, not only the happy path.
"""

from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """
    Standard error envelope returned by every error handler.

    ``error`` is always a single human-readable string.
    """

    error: str = Field(
        ..., description="Human-readable error description", examples=["Investor not found"]
    )
    details: Optional[Any] = Field(
        default=None, description="Per-field failures (validation errors only)"
    )


class ValidationErrorDetail(BaseModel):
    """Single field-level validation failure."""

    field: str = Field(
        ...,
        description="Path to the invalid field",
        examples=["body -> name"],
    )
    message: str = Field(
        ...,
        description="Explanation of the validation failure",
        examples=["Field required"],
    )


class ValidationErrorResponse(BaseModel):
    """Response body for 400 Bad Request caused by payload validation."""

    error: str = Field(..., examples=["Validation failed: body -> name: Field required"])
    details: List[ValidationErrorDetail] = Field(..., description="Per-field validation failures")


class DataResponse(BaseModel, Generic[T]):
    """Single-payload envelope: ``{"data": ...}``."""

    data: T


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Investor deleted successfully"])
