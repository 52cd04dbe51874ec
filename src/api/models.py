"""API request and response models."""

from pydantic import BaseModel, Field, StrictStr


class RenderRequest(BaseModel):
    """Request body for HTML to PDF rendering."""

    content: StrictStr = Field(..., description="HTML markup to render")
    margin: float = Field(
        ...,
        ge=0,
        strict=True,
        allow_inf_nan=False,
        description="Top, right and left page margin in CSS pixels",
    )


class ErrorResponse(BaseModel):
    """Generic failure payload."""

    error: str = Field(..., description="Description of the failure")
