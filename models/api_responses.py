"""Shared response models for the upload, health and error shapes."""
from pydantic import BaseModel, Field


class UploadTranscriptResponse(BaseModel):
    transcript: str = Field(
        ...,
        description="UTF-8 decoded contents of the uploaded file"
    )


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str


class ErrorResponse(BaseModel):
    error: str
