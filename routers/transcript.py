"""
Transcript upload router.

POST /api/upload-transcript decodes an uploaded plain-text file and hands the
text back to the form. Nothing is written to disk.
"""
import logging
import uuid
from typing import Optional
from fastapi import APIRouter, File, UploadFile

from models.api_responses import UploadTranscriptResponse
from services.errors import FileTooLargeError, FileTypeError, NoFileError
from utils.upload_utils import (
    MAX_UPLOAD_BYTES,
    decode_transcript,
    is_allowed_upload_type,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transcript"])


@router.post("/upload-transcript", response_model=UploadTranscriptResponse)
async def upload_transcript(transcript: Optional[UploadFile] = File(default=None)):
    """
    Decode an uploaded transcript file.

    Args:
        transcript: Multipart file part (text/plain or application/octet-stream, max 5MB)

    Returns:
        UploadTranscriptResponse with the decoded text

    Raises:
        NoFileError: 400 if no file part named "transcript" was sent
        FileTypeError: 400 if the declared MIME type is not plain text
        FileTooLargeError: 413 if the file exceeds 5MB
    """
    upload_id = str(uuid.uuid4())

    if transcript is None:
        logger.warning(f"Upload rejected, no file: upload_id={upload_id}")
        raise NoFileError()

    logger.info(
        f"Upload started: upload_id={upload_id}, filename={transcript.filename}, "
        f"content_type={transcript.content_type}"
    )

    if not is_allowed_upload_type(transcript.content_type):
        logger.warning(
            f"Upload rejected, invalid type: upload_id={upload_id}, "
            f"content_type={transcript.content_type}"
        )
        raise FileTypeError()

    # Read one byte past the ceiling so oversize files are detected without
    # buffering them whole.
    data = await transcript.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        logger.warning(
            f"Upload rejected, file too large: upload_id={upload_id}, max={MAX_UPLOAD_BYTES}"
        )
        raise FileTooLargeError(
            f"File too large. Maximum size: {MAX_UPLOAD_BYTES / (1024 * 1024):.0f}MB"
        )

    text = decode_transcript(data)

    logger.info(
        f"Upload complete: upload_id={upload_id}, size={len(data)} bytes, "
        f"length={len(text)} chars"
    )

    return UploadTranscriptResponse(transcript=text)
