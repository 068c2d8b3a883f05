"""Async client driving the summarizer API with a SummarizerSession.

Each action mirrors a button on the web form: it checks the same enable
rules, moves the session through loading to success or error, and copies the
server's result into the session. The session is passed in by the caller and
mutated in place.
"""
import logging
from typing import Optional

import httpx

from models.session_state import StatusType, SummarizerSession
from utils.upload_utils import looks_like_text_file

logger = logging.getLogger(__name__)


class SummarizerClient:
    """HTTP driver for the upload, generate and send actions."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 120.0
    ):
        """
        Args:
            base_url: Root URL of the API
            http_client: Pre-built client (e.g. bound to an ASGI transport)
            timeout: Request timeout when a client is created here
        """
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self):
        if self._owns_client:
            await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def health(self) -> dict:
        response = await self.http.get("/api/health")
        response.raise_for_status()
        return response.json()

    async def upload_transcript(
        self,
        session: SummarizerSession,
        filename: str,
        content: bytes,
        content_type: str = "text/plain"
    ) -> bool:
        """Upload a transcript file and load its text into the session."""
        if not looks_like_text_file(filename, content_type):
            session.set_status(StatusType.error, "Please upload a .txt file")
            return False

        session.set_status(StatusType.loading, "Uploading file...")
        try:
            response = await self.http.post(
                "/api/upload-transcript",
                files={"transcript": (filename, content, content_type)}
            )
        except httpx.HTTPError as e:
            logger.error(f"Upload request failed: {e}")
            session.set_status(StatusType.error, "Failed to upload file")
            return False

        if response.is_success:
            session.transcript = response.json()["transcript"]
            session.set_status(StatusType.success, "File uploaded successfully!")
            return True

        session.set_status(StatusType.error, _error_message(response, "Failed to upload file"))
        return False

    async def generate_summary(self, session: SummarizerSession) -> bool:
        """Request a summary for the session's transcript and instruction."""
        if not session.can_generate:
            session.set_status(StatusType.error, "Please provide both transcript and instruction")
            return False

        session.set_status(StatusType.loading, "Generating summary...")
        try:
            response = await self.http.post(
                "/api/generate-summary",
                json={"transcript": session.transcript, "instruction": session.instruction}
            )
        except httpx.HTTPError as e:
            logger.error(f"Summary request failed: {e}")
            session.set_status(StatusType.error, "Failed to generate summary")
            return False

        if response.is_success:
            session.summary = response.json()["summary"]
            session.set_status(StatusType.success, "Summary generated successfully!")
            return True

        session.set_status(
            StatusType.error, _error_message(response, "Failed to generate summary")
        )
        return False

    async def send_email(self, session: SummarizerSession) -> bool:
        """Email the session's summary; recipients are cleared only on success."""
        if not session.summary.strip():
            session.set_status(StatusType.error, "Please generate a summary first")
            return False
        if not session.recipients:
            session.set_status(StatusType.error, "Please add at least one recipient")
            return False

        session.set_status(StatusType.loading, "Sending email...")
        try:
            response = await self.http.post(
                "/api/send-email",
                json={"summary": session.summary, "recipients": list(session.recipients)}
            )
        except httpx.HTTPError as e:
            logger.error(f"Email request failed: {e}")
            session.set_status(StatusType.error, "Failed to send email")
            return False

        if response.is_success:
            session.clear_recipients()
            session.set_status(StatusType.success, "Email sent successfully!")
            return True

        session.set_status(StatusType.error, _error_message(response, "Failed to send email"))
        return False


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict) and data.get("error"):
        return data["error"]
    return fallback
