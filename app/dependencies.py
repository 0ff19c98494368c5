"""Shared dependencies for the FastAPI web layer."""

import json

from fastapi import HTTPException, Request
from pydantic import BaseModel, ValidationError

from execution.llm_client import CompletionClient


class InvalidRequestError(Exception):
    """Raised when a request body is missing, malformed, or invalid."""

    def __init__(self, error: str, details: str | None = None):
        super().__init__(error)
        self.error = error
        self.details = details


def require_user(request: Request) -> str:
    """Return the authenticated user id or raise 401."""
    authenticator = request.app.state.authenticator
    user_id = authenticator(request)
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user_id


def get_completion_client(request: Request) -> CompletionClient:
    """Return the completion client built at startup."""
    client = getattr(request.app.state, "completion_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Completion provider is not configured")
    return client


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"]) or "body"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


async def parse_body(request: Request, model: type[BaseModel], error: str) -> BaseModel:
    """Read the JSON body and validate it against a request model.

    Raises:
        InvalidRequestError: If the body is not JSON or fails validation.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidRequestError(error, "Request body must be valid JSON")

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestError(error, _format_validation_error(e))
