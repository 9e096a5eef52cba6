"""Standardized error response schema."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error body for domain exceptions (4xx/5xx)."""

    title: str = Field(..., description="Short summary of the failure kind")
    detail: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    path: str | None = Field(
        None, description="Reference path of the resource that failed"
    )


class FieldErrorDetail(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    """Error body for rejected input, listing every invalid field."""

    errors: list[FieldErrorDetail] = Field(default_factory=list)
