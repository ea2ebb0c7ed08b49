"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(min_length=1, max_length=200, description="Short summary of the problem")
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(default=None, description="Explanation of this occurrence")
    instance: str | None = Field(default=None, description="URI of this occurrence")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "person-not-found",
                "title": "Not Found",
                "status": 404,
                "detail": "Person 3f1c... not found",
                "instance": "/pessoas/3f1c...",
            }
        },
    )


class FieldError(BaseModel):
    """One failed field of a request payload."""

    field: str
    message: str
    type: str


class ValidationProblemDetails(ProblemDetails):
    """Problem details carrying field-level validation errors."""

    errors: list[FieldError] = Field(default_factory=list)
