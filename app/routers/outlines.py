"""Outline utility routes: quality checks and PRD rendering.

Endpoints:
    POST /api/outlines/validate - Run quality checks on an outline
    POST /api/outlines/render   - Render an outline as a PRD document
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.dependencies import parse_body, require_user
from app.models.requests import RenderOutlineRequest, ValidateOutlineRequest
from execution.document_assembler import render_document
from execution.outline_validator import run_all_checks

router = APIRouter(prefix="/api/outlines", tags=["outlines"])


@router.post("/validate")
async def validate_outline(request: Request, user_id: str = Depends(require_user)):
    """Run outline quality checks."""
    body = await parse_body(request, ValidateOutlineRequest, "A valid outline is required")
    return JSONResponse(content=run_all_checks(body.outline))


@router.post("/render")
async def render_outline(request: Request, user_id: str = Depends(require_user)):
    """Render an outline as a PRD document."""
    body = await parse_body(request, RenderOutlineRequest, "A valid outline is required")
    document = render_document(body.outline, body.format, version=body.version)
    return JSONResponse(content={
        "filename": document.filename,
        "content": document.content,
        "format": document.format.value,
    })
