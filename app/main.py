"""FastAPI application for the PRD outline service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import Authenticator, TokenAuthenticator
from app.dependencies import InvalidRequestError
from app.routers import ai, outlines
from config import settings
from execution.document_assembler import UnsupportedFormatError
from execution.llm_client import CompletionClient, load_completion_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the completion client at startup unless one was injected.

    Raises ConfigurationError, which aborts startup, when the provider
    settings are missing or invalid.
    """
    if app.state.completion_client is None:
        config = load_completion_config()
        app.state.completion_client = CompletionClient(config)
        logger.info("Completion client ready (model=%s)", config.model)
    yield


def create_app(
    completion_client: CompletionClient | None = None,
    authenticator: Authenticator | None = None,
) -> FastAPI:
    """Create the application with its collaborators.

    Args:
        completion_client: Client used for completions. Built from
            settings at startup when omitted.
        authenticator: Request -> user id resolver. Defaults to a
            TokenAuthenticator over the AUTH_TOKENS setting.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="PRD Outline Service", lifespan=lifespan)
    app.state.completion_client = completion_client
    app.state.authenticator = authenticator or TokenAuthenticator(
        settings.parse_auth_tokens(settings.AUTH_TOKENS)
    )

    app.include_router(ai.router)
    app.include_router(outlines.router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "environment": settings.ENVIRONMENT}

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError):
        content = {"error": exc.error}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(request: Request, exc: UnsupportedFormatError):
        return JSONResponse(
            status_code=400,
            content={"error": "Unsupported document format", "details": str(exc)},
        )

    return app


app = create_app()
