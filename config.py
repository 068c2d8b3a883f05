"""
Application settings.

Settings are read from the environment once (after loading a local .env file)
and handed to the app factory, which builds the provider clients from them.
Missing secrets are allowed here: the affected endpoint reports a 500 at
request time instead of the process refusing to start.
"""
import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "MangoDesk Meeting Summarizer"
DEFAULT_EMAIL_SUBJECT = "Meeting Summary - MangoDesk"
DEFAULT_MAX_BODY_BYTES = 10 * 1024 * 1024  # 10MB


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer value for {name}: {value!r}")
        return default


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration for the summarizer service.

    Attributes:
        openai_api_key: Completion-provider credential (None when unset)
        openai_model: Chat completion model name
        email_user: Sender address, also the SMTP login
        email_password: SMTP password / app password
        smtp_host: Mail relay host
        smtp_port: Mail relay port (465 uses implicit TLS, others STARTTLS)
        email_subject: Fixed subject line of outbound summaries
        escape_summary_html: Escape the summary before embedding it in HTML
        app_name: Service name used in health checks, UI and email footer
        serve_frontend: Co-hosted mode, serve the UI from this process
        cors_origins: Allowed CORS origins
        max_body_bytes: Request body ceiling
        host: Listen address
        port: Listen port
    """
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    email_user: Optional[str] = None
    email_password: Optional[str] = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    email_subject: str = DEFAULT_EMAIL_SUBJECT
    escape_summary_html: bool = True
    app_name: str = DEFAULT_APP_NAME
    serve_frontend: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    host: str = "0.0.0.0"
    port: int = 3001

    @property
    def ai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def email_configured(self) -> bool:
        return bool(self.email_user and self.email_password)


def load_settings() -> Settings:
    """Build Settings from environment variables (and .env, if present)."""
    load_dotenv()

    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o"),
        email_user=os.getenv("EMAIL_USER") or None,
        email_password=os.getenv("EMAIL_PASS") or None,
        smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
        smtp_port=_env_int("SMTP_PORT", 465),
        email_subject=os.getenv("EMAIL_SUBJECT", DEFAULT_EMAIL_SUBJECT),
        escape_summary_html=_env_flag("EMAIL_ESCAPE_SUMMARY", True),
        app_name=os.getenv("APP_NAME", DEFAULT_APP_NAME),
        serve_frontend=_env_flag("SERVE_FRONTEND", False),
        cors_origins=cors_origins or ["*"],
        max_body_bytes=_env_int("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3001),
    )
