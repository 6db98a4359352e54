"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DEFAULT_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout",
}


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    ``error`` repeats ``detail`` for console clients that only read an
    ``error`` string.

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(default="about:blank", description="Problem type identifier")
    title: str = Field(description="Short, human-readable summary of the problem")
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(default=None, description="Explanation of this occurrence")
    instance: str | None = Field(default=None, description="URI of this occurrence")
    error: str | None = Field(default=None, description="Same as detail")
    request_id: str | None = Field(default=None, description="Request correlation id")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "upstream-error",
                "title": "Bad Gateway",
                "status": 502,
                "detail": "Upstream error: 503 Service Unavailable",
                "instance": "http://localhost:8000/api/applications",
                "error": "Upstream error: 503 Service Unavailable",
                "request_id": "3f1c9a2e-6b1d-4c57-9d0e-2a8f3b7c1e44",
            }
        },
    )

    @staticmethod
    def default_title(status_code: int) -> str:
        return _DEFAULT_TITLES.get(status_code, "Error")


class ValidationError(BaseModel):
    """One field-level validation failure."""

    field: str = Field(description="Dotted location of the invalid field")
    message: str = Field(description="What is wrong with the value")
    type: str = Field(description="Validation error type")
    value: Any = Field(default=None, description="Rejected input, when safe to echo")

    @field_validator("value", mode="before")
    @classmethod
    def make_json_safe(cls, v: Any) -> Any:
        if v is None or isinstance(v, str | int | float | bool | list | dict):
            return v
        return str(v)


class ValidationProblemDetail(ProblemDetail):
    """Problem details with the list of field errors."""

    errors: list[ValidationError] = Field(default_factory=list)


__all__ = ["ProblemDetail", "ValidationError", "ValidationProblemDetail"]
