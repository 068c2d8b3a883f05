"""EmailService for delivering a meeting summary to a list of recipients.

One outbound message per send: all recipients share a single To header and
the relay receives exactly one submission. The blocking smtplib call runs in
a worker thread so it does not stall the event loop.
"""
import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from services.errors import ConfigurationError, MailError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
EMAIL_TEMPLATE = "email/summary.html"


class EmailService:
    """SMTP mail sender for generated summaries."""

    def __init__(
        self,
        sender: Optional[str],
        password: Optional[str],
        smtp_host: str = "smtp.gmail.com",
        smtp_port: int = 465,
        subject: str = "Meeting Summary - MangoDesk",
        app_name: str = "MangoDesk Meeting Summarizer",
        escape_summary: bool = True,
        templates_dir: Path = TEMPLATES_DIR
    ):
        self.sender = sender
        self.password = password
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.subject = subject
        self.app_name = app_name
        self.escape_summary = escape_summary
        self.templates = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"])
        )

        if self.is_configured:
            logger.info(
                f"EmailService initialized: host={self.smtp_host}, port={self.smtp_port}, "
                f"escape_summary={self.escape_summary}"
            )
        else:
            logger.warning("EmailService initialized without EMAIL_USER/EMAIL_PASS")

    @property
    def is_configured(self) -> bool:
        return bool(self.sender and self.password)

    def render_html(self, summary: str) -> str:
        """Render the HTML email body for a summary.

        With escaping disabled the summary is marked safe and lands in the
        document as live markup.
        """
        body = summary if self.escape_summary else Markup(summary)
        template = self.templates.get_template(EMAIL_TEMPLATE)
        return template.render(summary=body, app_name=self.app_name)

    def build_message(self, summary: str, recipients: List[str]) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = self.subject

        msg.attach(MIMEText(summary, "plain", "utf-8"))
        msg.attach(MIMEText(self.render_html(summary), "html", "utf-8"))
        return msg

    async def send_summary(self, summary: str, recipients: List[str]) -> None:
        """Send the summary to all recipients in one message.

        Raises:
            ConfigurationError: If sender credentials are not configured
            MailError: If the relay rejects the message or is unreachable
        """
        if not self.is_configured:
            logger.error("Email requested but EMAIL_USER/EMAIL_PASS are not configured")
            raise ConfigurationError("Email configuration not set up")

        msg = self.build_message(summary, recipients)

        logger.info(
            f"Sending summary email: recipients={len(recipients)}, "
            f"summary_length={len(summary)} chars"
        )

        try:
            await asyncio.to_thread(self._deliver, msg, recipients)
        except Exception as e:
            logger.error(
                f"Email delivery failed: error={type(e).__name__}: {str(e)}",
                exc_info=True
            )
            raise MailError() from e

        logger.info(f"Summary email sent: recipients={len(recipients)}")

    def _deliver(self, msg: MIMEMultipart, recipients: List[str]) -> None:
        if self.smtp_port == 465:
            with smtplib.SMTP_SSL(self.smtp_host, self.smtp_port) as server:
                server.login(self.sender, self.password)
                server.send_message(msg, from_addr=self.sender, to_addrs=recipients)
        else:
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                server.login(self.sender, self.password)
                server.send_message(msg, from_addr=self.sender, to_addrs=recipients)
