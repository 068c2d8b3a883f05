from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from pathlib import Path
from typing import Optional
import logging

from config import Settings, load_settings
from middleware.body_limit import BodySizeLimitMiddleware
from middleware.error_handler import UnhandledErrorMiddleware
from services.email_service import EmailService
from services.errors import SummarizerError
from services.summary_service import SummaryService
from routers import health, mail, summary, transcript

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"


def log_configuration_status(settings: Settings):
    """
    Log which providers are configured.

    Missing credentials are reported here but never stop the process; the
    affected endpoint answers with a 500 instead.
    """
    logger.info("=" * 60)
    logger.info(f"{settings.app_name} server starting")
    logger.info(f"  Email configured: {'Yes' if settings.email_configured else 'No'}")
    logger.info(f"  OpenAI configured: {'Yes' if settings.ai_configured else 'No'}")
    logger.info(f"  OpenAI model: {settings.openai_model}")
    logger.info(f"  Serving frontend: {'Yes' if settings.serve_frontend else 'No'}")
    logger.info("=" * 60)


def register_exception_handlers(app: FastAPI):
    """Shape every error as {"error": <message>}."""

    @app.exception_handler(SummarizerError)
    async def summarizer_error_handler(request: Request, exc: SummarizerError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request body: path={request.url.path}, errors={exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None)
        )


def register_frontend(app: FastAPI, settings: Settings):
    """Serve the single-page UI for any path the API does not claim."""
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/{full_path:path}", response_class=HTMLResponse, include_in_schema=False)
    async def frontend_entry(request: Request, full_path: str):
        return templates.TemplateResponse(
            request,
            "index.html",
            {"app_name": settings.app_name}
        )


def create_app(
    settings: Optional[Settings] = None,
    summary_service: Optional[SummaryService] = None,
    email_service: Optional[EmailService] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Provider services are constructed here from settings unless supplied by
    the caller, and handed to handlers through ``app.state``.
    """
    settings = settings or load_settings()

    if summary_service is None:
        summary_service = SummaryService(
            api_key=settings.openai_api_key,
            model=settings.openai_model
        )
    if email_service is None:
        email_service = EmailService(
            sender=settings.email_user,
            password=settings.email_password,
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            subject=settings.email_subject,
            app_name=settings.app_name,
            escape_summary=settings.escape_summary_html
        )

    app = FastAPI(title=f"{settings.app_name} API")
    app.state.settings = settings
    app.state.summary_service = summary_service
    app.state.email_service = email_service

    # Innermost first; CORS must wrap the 500 fallback and the body limit
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_body_bytes)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(summary.router)
    app.include_router(mail.router)
    app.include_router(transcript.router)

    # Catch-all route must come last
    if settings.serve_frontend:
        register_frontend(app, settings)

    return app


app = create_app()
log_configuration_status(app.state.settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
