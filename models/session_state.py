"""
Session State Model

Holds everything the single-page form keeps between independent API calls:
transcript, instruction, the (editable) summary, the accumulated recipient
set, and the current status message. The object is owned by the caller and
passed by reference into every action; nothing is kept server-side.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class StatusType(str, Enum):
    idle = "idle"
    loading = "loading"
    success = "success"
    error = "error"


@dataclass
class Status:
    """Inline status shown to the user."""
    type: StatusType = StatusType.idle
    message: str = ""


@dataclass
class SummarizerSession:
    """
    Client-held state for one browser session.

    Attributes:
        transcript: Pasted or uploaded meeting transcript
        instruction: Free-text summary directive
        summary: Generated summary, editable by the user
        recipients: Ordered recipient set, duplicates suppressed
        status: Current idle/loading/success/error status
    """
    transcript: str = ""
    instruction: str = ""
    summary: str = ""
    recipients: List[str] = field(default_factory=list)
    status: Status = field(default_factory=Status)

    @property
    def can_generate(self) -> bool:
        return bool(self.transcript.strip()) and bool(self.instruction.strip())

    @property
    def can_send(self) -> bool:
        return bool(self.summary.strip()) and len(self.recipients) > 0

    def add_recipient(self, candidate: Optional[str]) -> bool:
        """Append a trimmed address unless it is empty or already present."""
        email = (candidate or "").strip()
        if not email or email in self.recipients:
            return False
        self.recipients.append(email)
        return True

    def remove_recipient(self, email: str) -> bool:
        if email not in self.recipients:
            return False
        self.recipients = [r for r in self.recipients if r != email]
        return True

    def clear_recipients(self) -> None:
        self.recipients = []

    def edit_summary(self, text: str) -> None:
        self.summary = text

    def set_status(self, status_type: StatusType, message: str = "") -> None:
        self.status = Status(type=status_type, message=message)

    def reset_status(self) -> None:
        self.status = Status()
