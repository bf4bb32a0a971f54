"""
Common / shared Pydantic schemas used across multiple endpoints.

Defines the error envelopes so that the OpenAPI document describes the
error payloads the API actually returns, not only the happy path.
"""

from typing import Any, List, Union

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Lab System API"])


class HealthResponse(BaseModel):
    message: str = Field(..., examples=["Server is running"])
    status: str = Field(..., description="``healthy`` or ``degraded``", examples=["healthy"])
    timestamp: str = Field(..., description="ISO-8601 server time")


class ErrorResponse(BaseModel):
    """
    Standard error envelope returned by all non-validation error handlers.
    """

    message: str = Field(
        ..., description="Human-readable error description", examples=["Internal Server Error"]
    )
    errors: Any = Field(default=None, description="Additional error details")


class ValidationIssue(BaseModel):
    """Single field-level validation failure."""

    code: str = Field(..., description="Machine-readable issue code", examples=["invalid_type"])
    path: List[Union[str, int]] = Field(
        ...,
        description="Location of the invalid value inside the request body",
        examples=[["email"]],
    )
    message: str = Field(default="", description="Explanation of the failure")


class ValidationErrorBody(BaseModel):
    issues: List[ValidationIssue]
    name: str = Field(default="ValidationError")


class ValidationErrorResponse(BaseModel):
    """
    Response body for 422 Unprocessable Entity (validation failure).

    ``error.issues`` lets clients map each failure to a form field.
    """

    success: bool = Field(default=False, description="Always ``false`` for errors")
    error: ValidationErrorBody
