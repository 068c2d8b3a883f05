"""Send-Email Request/Response Models"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class SendEmailRequest(BaseModel):
    """
    Request body for POST /api/send-email.

    Attributes:
        summary: Summary text to embed in the email
        recipients: List of destination addresses
    """
    summary: Optional[Any] = Field(
        default=None,
        description="Summary text (possibly edited by the user)"
    )
    recipients: Optional[Any] = Field(
        default=None,
        description="Recipient email addresses"
    )


class SendEmailResponse(BaseModel):
    """Response from POST /api/send-email."""
    success: bool = True
    message: str = "Email sent successfully"
