"""Pydantic schemas for API requests and responses."""

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime


class CreateLinkRequest(BaseModel):
    """Request to create a link.

    Also accepts the ``longURL`` / ``code`` field names used by older form posts.
    """

    target_url: str = Field(
        ...,
        description="The URL to shorten",
        min_length=1,
        max_length=2048,
        validation_alias=AliasChoices("target_url", "longURL"),
    )
    custom_code: Optional[str] = Field(
        None,
        description="Optional custom short code (6-8 alphanumeric characters)",
        validation_alias=AliasChoices("custom_code", "code"),
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "target_url": "https://example.com/very/long/path/to/resource",
                    "custom_code": None
                },
                {
                    "target_url": "https://github.com/user/repo",
                    "custom_code": "myrepo1"
                }
            ]
        }
    }


class LinkResponse(BaseModel):
    """A link with its click statistics."""

    short_code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    target_url: str = Field(..., description="The URL the short code redirects to")
    total_clicks: int = Field(..., description="Number of tracked redirects")
    last_clicked_at: Optional[datetime] = Field(None, description="Time of the last tracked redirect")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_code": "aB3dE9x",
                    "short_url": "https://short.link/aB3dE9x",
                    "target_url": "https://example.com/very/long/path",
                    "total_clicks": 3,
                    "last_clicked_at": "2024-01-02T08:30:00Z",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class TargetResponse(BaseModel):
    """Target of a tracked redirect."""

    target_url: str = Field(..., description="The URL to redirect to")


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool = Field(..., description="Overall status")
    version: str = Field(..., description="Service version")
    db_status: Optional[str] = Field(None, description="'connected' or 'disconnected'")
    error: Optional[str] = Field(None, description="Failure reason")
    message: Optional[str] = Field(None, description="Failure reason when proxying to an API server")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error name (e.g., NotFound)")
    detail: str = Field(..., description="Human-readable error message")
    short_code: Optional[str] = Field(None, description="Short code the error refers to")
    attempts: Optional[int] = Field(None, description="Generation attempts made before giving up")
