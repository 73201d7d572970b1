"""Shared response schemas."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error_code: str = Field(description="Error code from the catalog")
    message: str = Field(description="Technical error message")
    user_message: str = Field(description="User-friendly error message")
    suggestion: str = Field(description="Actionable suggestion for the user")
    retry_allowed: bool = Field(description="Whether the request can be retried")


class MessageResponse(BaseModel):
    message: str
