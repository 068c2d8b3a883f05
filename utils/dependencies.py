"""
FastAPI dependencies resolving the provider services.

Services are constructed once by the app factory and stored on
``app.state``; handlers receive them through ``Depends`` so tests can build
an app around fakes without touching the process environment.
"""

from fastapi import Request

from config import Settings
from services.email_service import EmailService
from services.summary_service import SummaryService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_summary_service(request: Request) -> SummaryService:
    return request.app.state.summary_service


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service
