"""
Summary generation router.

POST /api/generate-summary forwards a transcript and instruction to the
completion provider and returns its text verbatim.
"""

import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends

from models.summary_request import GenerateSummaryRequest, GenerateSummaryResponse
from services.errors import MissingFieldError
from services.summary_service import SummaryService
from utils.dependencies import get_summary_service
from utils.field_utils import as_text, is_present

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["summary"])


@router.post("/generate-summary", response_model=GenerateSummaryResponse)
async def generate_summary(
    body: Optional[GenerateSummaryRequest] = None,
    summary_service: SummaryService = Depends(get_summary_service)
):
    """
    Generate a summary of a meeting transcript.

    Args:
        body: GenerateSummaryRequest with transcript and instruction
        summary_service: Injected SummaryService

    Returns:
        GenerateSummaryResponse with the provider's summary text

    Raises:
        MissingFieldError: 400 if either field is missing or empty
        ConfigurationError: 500 if the AI provider is not configured
        GenerationError: 500 if the provider call fails
    """
    request_id = str(uuid.uuid4())
    body = body or GenerateSummaryRequest()

    if not is_present(body.transcript) or not is_present(body.instruction):
        logger.warning(f"Summary request rejected, missing fields: request_id={request_id}")
        raise MissingFieldError("Transcript and instruction are required")

    transcript = as_text(body.transcript)
    instruction = as_text(body.instruction)

    logger.info(
        f"Summary generation started: request_id={request_id}, "
        f"transcript_length={len(transcript)}"
    )

    summary = await summary_service.generate_summary(transcript, instruction)

    logger.info(f"Summary generation complete: request_id={request_id}")

    return GenerateSummaryResponse(summary=summary)
