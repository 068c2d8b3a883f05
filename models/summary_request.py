"""
Summary Generation Request/Response Models

Fields accept any JSON value so that a missing field reaches the route and is
reported with the fixed 400 message instead of a framework validation error.
Non-string values are used as their JSON text.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class GenerateSummaryRequest(BaseModel):
    """
    Request body for POST /api/generate-summary.

    Attributes:
        transcript: Meeting transcript text
        instruction: Free-text directive for the summary
    """
    transcript: Optional[Any] = Field(
        default=None,
        description="Meeting transcript text"
    )
    instruction: Optional[Any] = Field(
        default=None,
        description="How the summary should be written"
    )


class GenerateSummaryResponse(BaseModel):
    """Response from POST /api/generate-summary."""
    summary: str = Field(
        ...,
        description="Provider completion text, returned verbatim"
    )
