"""
Email router.

POST /api/send-email delivers a (possibly edited) summary to every recipient
in a single outbound message.
"""

import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends

from models.email_request import SendEmailRequest, SendEmailResponse
from services.email_service import EmailService
from services.errors import MissingFieldError
from utils.dependencies import get_email_service
from utils.field_utils import as_text, is_present

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["email"])


@router.post("/send-email", response_model=SendEmailResponse)
async def send_email(
    body: Optional[SendEmailRequest] = None,
    email_service: EmailService = Depends(get_email_service)
):
    """
    Email a summary to one or more recipients.

    Raises:
        MissingFieldError: 400 if summary is missing, or recipients is not a non-empty list
        ConfigurationError: 500 if mail credentials are not configured
        MailError: 500 if the relay rejects the message
    """
    request_id = str(uuid.uuid4())
    body = body or SendEmailRequest()

    recipients = body.recipients
    if (
        not is_present(body.summary)
        or not isinstance(recipients, list)
        or len(recipients) == 0
    ):
        logger.warning(f"Email request rejected, missing fields: request_id={request_id}")
        raise MissingFieldError("Summary and at least one recipient email are required")

    summary = as_text(body.summary)

    logger.info(
        f"Email send started: request_id={request_id}, recipients={len(recipients)}"
    )

    await email_service.send_summary(summary, [str(r) for r in recipients])

    logger.info(f"Email send complete: request_id={request_id}")

    return SendEmailResponse(success=True, message="Email sent successfully")
