"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "User not found"}}
BAD_REQUEST_RESPONSE = {400: {"model": ErrorResponse, "description": "Invalid request"}}
FORBIDDEN_RESPONSE = {403: {"model": ErrorResponse, "description": "Not your profile"}}
