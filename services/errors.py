"""
Error taxonomy for the summarizer API.

Every error carries the HTTP status and the client-facing message. Messages
are deliberately generic for configuration and upstream failures; the
underlying provider error is only ever logged.
"""


class SummarizerError(Exception):
    """
    Base class for errors that map onto a JSON error response.

    Attributes:
        message: Client-facing error description
        status_code: HTTP status returned to the caller
        code: Machine-readable error code for logging
    """
    status_code = 500
    code = "SUMMARIZER_ERROR"

    def __init__(self, message: str, status_code: int = None, code: str = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        super().__init__(message)


class RequestValidationFailure(SummarizerError):
    """Missing or malformed request fields."""
    status_code = 400
    code = "VALIDATION_ERROR"


class MissingFieldError(RequestValidationFailure):
    code = "MISSING_FIELD"


class NoFileError(RequestValidationFailure):
    code = "NO_FILE"

    def __init__(self, message: str = "No file uploaded"):
        super().__init__(message)


class FileTypeError(RequestValidationFailure):
    code = "FILE_TYPE"

    def __init__(self, message: str = "Only .txt files are allowed"):
        super().__init__(message)


class FileTooLargeError(SummarizerError):
    status_code = 413
    code = "FILE_TOO_LARGE"


class ConfigurationError(SummarizerError):
    """A required provider secret is not configured."""
    status_code = 500
    code = "NOT_CONFIGURED"


class UpstreamError(SummarizerError):
    """The completion or mail provider failed."""
    status_code = 500
    code = "UPSTREAM_ERROR"


class GenerationError(UpstreamError):
    code = "GENERATION_FAILED"

    def __init__(self, message: str = "Failed to generate summary. Please try again."):
        super().__init__(message)


class MailError(UpstreamError):
    code = "MAIL_FAILED"

    def __init__(
        self,
        message: str = "Failed to send email. Please check your email configuration."
    ):
        super().__init__(message)
