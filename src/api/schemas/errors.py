"""Error response schema shared by every failing endpoint.

Clients branch on ``error_code`` (for example ``EMAIL_IN_USE``) and show
``message``; ``correlation_id`` and ``request_id`` tie the response to the
server logs.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ServiceInfo(BaseModel):
    """Service that produced the error."""

    name: str = Field(
        ..., description="Name of the service", examples=["User Registry"]
    )
    version: str = Field(..., description="Version of the service", examples=["0.1.0"])
    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "staging", "production"],
    )


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    error_code: str = Field(
        ...,
        description="Error kind identifying the failure",
        examples=["INVALID_EMAIL", "EMAIL_IN_USE", "USER_NOT_FOUND"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid email", "Email already in use", "User not found"],
    )

    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error details, e.g. the offending field",
        examples=[{"field": "email"}],
    )

    correlation_id: str | None = Field(
        default=None,
        description="Correlation ID for tracing across services",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )

    request_id: str | None = Field(
        default=None,
        description="Identifier of this request",
        examples=["req-550e8400-e29b-41d4-a716-446655440000"],
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )

    severity: str | None = Field(
        default=None,
        description="Error severity level (LOW, MEDIUM, HIGH, CRITICAL)",
        examples=["LOW", "CRITICAL"],
    )

    service_info: ServiceInfo | None = Field(
        default=None,
        description="Information about the service that generated the error",
    )

    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Debug information (only populated in development)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error_code": "EMAIL_IN_USE",
                    "message": "Email already in use",
                    "details": {"field": "email"},
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2024-06-14T12:00:00+00:00",
                    "severity": "LOW",
                    "service_info": {
                        "name": "User Registry",
                        "version": "0.1.0",
                        "environment": "production",
                    },
                },
                {
                    "error_code": "USER_NOT_FOUND",
                    "message": "User not found",
                    "details": {"user_id": "8a1f0c6e-4d3b-4f0e-9a57-1d2c3b4a5e6f"},
                    "timestamp": "2024-06-14T12:00:01+00:00",
                    "severity": "LOW",
                },
            ]
        }
    }
