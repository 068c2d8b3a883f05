"""Data models for the meeting summarizer service."""
from .summary_request import GenerateSummaryRequest, GenerateSummaryResponse
from .email_request import SendEmailRequest, SendEmailResponse
from .api_responses import UploadTranscriptResponse, HealthResponse, ErrorResponse
from .session_state import SummarizerSession, Status, StatusType

__all__ = [
    # Summary generation
    "GenerateSummaryRequest",
    "GenerateSummaryResponse",
    # Email
    "SendEmailRequest",
    "SendEmailResponse",
    # Shared responses
    "UploadTranscriptResponse",
    "HealthResponse",
    "ErrorResponse",
    # Client session state
    "SummarizerSession",
    "Status",
    "StatusType",
]
