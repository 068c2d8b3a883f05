"""
Transcript upload helpers.

The server-side MIME check is the authority; ``looks_like_text_file`` is the
looser client-side pre-check (MIME or ``.txt`` extension) used by the UI
session before it contacts the server.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5MB

# application/octet-stream is accepted because browsers sometimes report
# .txt files with the generic binary type.
ALLOWED_UPLOAD_MIME_TYPES = {"text/plain", "application/octet-stream"}


def normalize_mime_type(mime_type: Optional[str]) -> str:
    """Strip parameters and case from a declared MIME type.

    ``"Text/Plain; charset=utf-8"`` becomes ``"text/plain"``.
    """
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def is_allowed_upload_type(mime_type: Optional[str]) -> bool:
    return normalize_mime_type(mime_type) in ALLOWED_UPLOAD_MIME_TYPES


def looks_like_text_file(filename: Optional[str], mime_type: Optional[str]) -> bool:
    """Client-side pre-check: plain-text MIME type or a .txt filename."""
    if normalize_mime_type(mime_type) == "text/plain":
        return True
    return bool(filename) and filename.lower().endswith(".txt")


def decode_transcript(data: bytes) -> str:
    """Decode uploaded bytes as UTF-8 without trimming or normalization.

    Invalid sequences are replaced with U+FFFD rather than failing the upload.
    """
    return data.decode("utf-8", errors="replace")
