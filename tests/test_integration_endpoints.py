"""
Integration Tests for the Summarizer API

Exercises every endpoint through the full request/response cycle with the
OpenAI client replaced by a mock and smtplib patched out.

Tests:
- /api/health always answers OK
- /api/generate-summary validation, configuration and provider failures
- /api/send-email validation, configuration and provider failures
- /api/upload-transcript file presence, type and size checks
- uniform error shaping (malformed JSON, unknown routes, unhandled errors)
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from services.email_service import EmailService
from services.summary_service import SummaryService


# =============================================================================
# Fixtures
# =============================================================================

def make_completion(text):
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))]
    )


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="test-api-key",
        email_user="test@example.com",
        email_password="test-password",
    )


@pytest.fixture
def openai_client():
    """Mock AsyncOpenAI client returning a fixed completion."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=make_completion("Mocked AI summary response")
    )
    return client


@pytest.fixture
def app(settings, openai_client):
    summary_service = SummaryService(api_key=None, client=openai_client)
    email_service = EmailService(
        sender=settings.email_user,
        password=settings.email_password,
    )
    return create_app(
        settings=settings,
        summary_service=summary_service,
        email_service=email_service,
    )


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def mock_smtp():
    """Patch the SSL SMTP connection used for delivery."""
    with patch("smtplib.SMTP_SSL") as mock:
        yield mock


def sent_server(mock_smtp):
    return mock_smtp.return_value.__enter__.return_value


# =============================================================================
# Health
# =============================================================================

class TestHealthEndpoint:

    def test_health_returns_ok(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "OK",
            "message": "MangoDesk Meeting Summarizer API is running",
        }

    def test_health_ok_without_any_configuration(self):
        app = create_app(settings=Settings(app_name="Notes Bot"))
        response = TestClient(app).get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "message": "Notes Bot API is running"}


# =============================================================================
# Generate Summary
# =============================================================================

class TestGenerateSummaryEndpoint:

    def test_generate_summary_with_valid_input(self, client, openai_client):
        response = client.post(
            "/api/generate-summary",
            json={
                "transcript": "This is a test meeting transcript.",
                "instruction": "Summarize in bullet points",
            },
        )

        assert response.status_code == 200, response.text
        assert response.json() == {"summary": "Mocked AI summary response"}
        openai_client.chat.completions.create.assert_awaited_once()

    def test_prompt_embeds_transcript_and_instruction(self, client, openai_client):
        client.post(
            "/api/generate-summary",
            json={"transcript": "Budget approved.", "instruction": "One sentence"},
        )

        kwargs = openai_client.chat.completions.create.call_args.kwargs
        prompt = kwargs["messages"][0]["content"]
        assert "TRANSCRIPT:\nBudget approved." in prompt
        assert "INSTRUCTION:\nOne sentence" in prompt

    @pytest.mark.parametrize("payload", [
        {"instruction": "Summarize in bullet points"},
        {"transcript": "This is a test meeting transcript."},
        {"transcript": "", "instruction": "Summarize"},
        {"transcript": "Notes", "instruction": None},
        {"transcript": "Notes", "instruction": 0},
        {"transcript": False, "instruction": "Summarize"},
        {},
    ])
    def test_missing_fields_return_400(self, client, openai_client, payload):
        response = client.post("/api/generate-summary", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Transcript and instruction are required"}
        openai_client.chat.completions.create.assert_not_called()

    def test_empty_body_returns_400(self, client):
        response = client.post("/api/generate-summary")

        assert response.status_code == 400
        assert response.json() == {"error": "Transcript and instruction are required"}

    def test_unconfigured_provider_returns_500(self, settings):
        app = create_app(
            settings=settings,
            summary_service=SummaryService(api_key=None),
        )
        response = TestClient(app).post(
            "/api/generate-summary",
            json={"transcript": "Notes", "instruction": "Summarize"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "AI provider not configured"}

    def test_provider_failure_returns_generic_500(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = Exception(
            "quota exceeded for key sk-secret"
        )

        response = client.post(
            "/api/generate-summary",
            json={"transcript": "Notes", "instruction": "Summarize"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate summary. Please try again."}
        assert "sk-secret" not in response.text

    def test_provider_returning_no_text_returns_500(self, client, openai_client):
        openai_client.chat.completions.create.return_value = make_completion(None)

        response = client.post(
            "/api/generate-summary",
            json={"transcript": "Notes", "instruction": "Summarize"},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate summary. Please try again."

    def test_non_string_fields_are_sent_as_text(self, client, openai_client):
        response = client.post(
            "/api/generate-summary",
            json={"transcript": 42, "instruction": ["bullets", "short"]},
        )

        assert response.status_code == 200
        prompt = openai_client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert "TRANSCRIPT:\n42" in prompt
        assert 'INSTRUCTION:\n["bullets", "short"]' in prompt

    def test_identical_requests_are_not_cached(self, client, openai_client):
        payload = {"transcript": "Notes", "instruction": "Summarize"}

        client.post("/api/generate-summary", json=payload)
        client.post("/api/generate-summary", json=payload)

        assert openai_client.chat.completions.create.await_count == 2


# =============================================================================
# Send Email
# =============================================================================

class TestSendEmailEndpoint:

    def test_send_email_with_valid_data(self, client, mock_smtp):
        response = client.post(
            "/api/send-email",
            json={"summary": "This is a test summary.", "recipients": ["test@example.com"]},
        )

        assert response.status_code == 200, response.text
        assert response.json() == {"success": True, "message": "Email sent successfully"}
        mock_smtp.assert_called_once_with("smtp.gmail.com", 465)
        server = sent_server(mock_smtp)
        server.login.assert_called_once_with("test@example.com", "test-password")
        server.send_message.assert_called_once()

    def test_all_recipients_share_one_message(self, client, mock_smtp):
        recipients = ["a@x.com", "b@x.com", "c@x.com"]

        response = client.post(
            "/api/send-email",
            json={"summary": "Summary", "recipients": recipients},
        )

        assert response.status_code == 200
        server = sent_server(mock_smtp)
        server.send_message.assert_called_once()
        call = server.send_message.call_args
        msg = call.args[0]
        assert call.kwargs["to_addrs"] == recipients
        assert msg["To"] == "a@x.com, b@x.com, c@x.com"
        assert msg["Subject"] == "Meeting Summary - MangoDesk"
        assert msg["From"] == "test@example.com"

    @pytest.mark.parametrize("payload", [
        {"recipients": ["test@example.com"]},
        {"summary": "This is a test summary.", "recipients": []},
        {"summary": "This is a test summary.", "recipients": "test@example.com"},
        {"summary": "This is a test summary."},
        {"summary": "", "recipients": ["test@example.com"]},
        {"summary": None, "recipients": ["test@example.com"]},
        {"summary": 0, "recipients": ["test@example.com"]},
        {"summary": "Summary", "recipients": {"to": "test@example.com"}},
    ])
    def test_invalid_payload_returns_400(self, client, mock_smtp, payload):
        response = client.post("/api/send-email", json=payload)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Summary and at least one recipient email are required"
        }
        mock_smtp.assert_not_called()

    def test_numeric_summary_is_sent_as_text(self, client, mock_smtp):
        response = client.post(
            "/api/send-email",
            json={"summary": 123, "recipients": ["test@example.com"]},
        )

        assert response.status_code == 200
        msg = sent_server(mock_smtp).send_message.call_args.args[0]
        assert msg.get_payload()[0].get_payload(decode=True).decode("utf-8").strip() == "123"

    def test_empty_body_returns_400(self, client, mock_smtp):
        response = client.post("/api/send-email")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Summary and at least one recipient email are required"
        }

    def test_missing_email_configuration_returns_500(self, mock_smtp):
        app = create_app(
            settings=Settings(),
            email_service=EmailService(sender=None, password=None),
        )
        response = TestClient(app).post(
            "/api/send-email",
            json={"summary": "Summary", "recipients": ["test@example.com"]},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Email configuration not set up"}
        mock_smtp.assert_not_called()

    def test_relay_failure_returns_generic_500(self, client, mock_smtp):
        sent_server(mock_smtp).login.side_effect = Exception("535 bad credentials")

        response = client.post(
            "/api/send-email",
            json={"summary": "Summary", "recipients": ["test@example.com"]},
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to send email. Please check your email configuration."
        }
        assert "535" not in response.text


# =============================================================================
# Upload Transcript
# =============================================================================

class TestUploadTranscriptEndpoint:

    def test_upload_text_file(self, client):
        content = "This is a test transcript content."

        response = client.post(
            "/api/upload-transcript",
            files={"transcript": ("test-transcript.txt", content.encode("utf-8"), "text/plain")},
        )

        assert response.status_code == 200, response.text
        assert response.json() == {"transcript": content}

    def test_upload_octet_stream_is_accepted(self, client):
        content = "  Leading and trailing whitespace is kept.\r\n"

        response = client.post(
            "/api/upload-transcript",
            files={"transcript": ("notes.txt", content.encode("utf-8"), "application/octet-stream")},
        )

        assert response.status_code == 200
        assert response.json()["transcript"] == content

    def test_upload_with_charset_parameter(self, client):
        response = client.post(
            "/api/upload-transcript",
            files={"transcript": ("notes.txt", "café".encode("utf-8"), "text/plain; charset=utf-8")},
        )

        assert response.status_code == 200
        assert response.json()["transcript"] == "café"

    def test_no_file_returns_400(self, client):
        response = client.post("/api/upload-transcript")

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    def test_wrong_field_name_returns_400(self, client):
        response = client.post(
            "/api/upload-transcript",
            files={"file": ("notes.txt", b"content", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    def test_non_text_file_rejected(self, client):
        response = client.post(
            "/api/upload-transcript",
            files={"transcript": ("test.pdf", b"test content", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Only .txt files are allowed"}

    def test_oversize_file_rejected(self, client):
        content = b"a" * (5 * 1024 * 1024 + 1)

        response = client.post(
            "/api/upload-transcript",
            files={"transcript": ("big.txt", content, "text/plain")},
        )

        assert response.status_code == 413
        assert response.json() == {"error": "File too large. Maximum size: 5MB"}

    def test_file_at_size_limit_accepted(self, client):
        content = b"a" * (5 * 1024 * 1024)

        response = client.post(
            "/api/upload-transcript",
            files={"transcript": ("limit.txt", content, "text/plain")},
        )

        assert response.status_code == 200
        assert len(response.json()["transcript"]) == 5 * 1024 * 1024


# =============================================================================
# Error Handling
# =============================================================================

class TestErrorHandling:

    def test_malformed_json_returns_400(self, client):
        response = client.post(
            "/api/generate-summary",
            content="invalid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_missing_route_returns_404(self, client):
        response = client.get("/api/nonexistent")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_unhandled_error_returns_generic_500(self, settings):
        summary_service = MagicMock()
        summary_service.generate_summary = AsyncMock(side_effect=RuntimeError("boom at line 7"))
        app = create_app(settings=settings, summary_service=summary_service)

        response = TestClient(app, raise_server_exceptions=False).post(
            "/api/generate-summary",
            json={"transcript": "Notes", "instruction": "Summarize"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "boom" not in response.text

    def test_body_over_limit_returns_413(self, openai_client):
        app = create_app(
            settings=Settings(openai_api_key="k", max_body_bytes=64),
            summary_service=SummaryService(api_key=None, client=openai_client),
        )

        response = TestClient(app).post(
            "/api/generate-summary",
            json={"transcript": "x" * 200, "instruction": "Summarize"},
        )

        assert response.status_code == 413
        assert response.json() == {"error": "Request body too large"}
        openai_client.chat.completions.create.assert_not_called()

    def test_streamed_body_over_limit_returns_413(self, openai_client):
        app = create_app(
            settings=Settings(openai_api_key="k", max_body_bytes=64),
            summary_service=SummaryService(api_key=None, client=openai_client),
        )
        payload = json.dumps({"transcript": "x" * 5000, "instruction": "Summarize"}).encode()

        def chunks():
            for start in range(0, len(payload), 512):
                yield payload[start:start + 512]

        # A generator body is sent chunked, without Content-Length
        response = TestClient(app).post(
            "/api/generate-summary",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 413
        assert response.json() == {"error": "Request body too large"}
        openai_client.chat.completions.create.assert_not_called()

    def test_streamed_body_under_limit_is_accepted(self, openai_client):
        app = create_app(
            settings=Settings(openai_api_key="k", max_body_bytes=1024),
            summary_service=SummaryService(api_key=None, client=openai_client),
        )
        payload = json.dumps({"transcript": "Notes", "instruction": "Summarize"}).encode()

        def chunks():
            yield payload[:10]
            yield payload[10:]

        response = TestClient(app).post(
            "/api/generate-summary",
            content=chunks(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"summary": "Mocked AI summary response"}

    def test_unhandled_error_keeps_cors_headers(self, settings):
        summary_service = MagicMock()
        summary_service.generate_summary = AsyncMock(side_effect=RuntimeError("boom"))
        app = create_app(settings=settings, summary_service=summary_service)

        response = TestClient(app).post(
            "/api/generate-summary",
            json={"transcript": "Notes", "instruction": "Summarize"},
            headers={"Origin": "http://ui.example.com"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "*"
