"""AI outline generation and refinement API.

Endpoints:
    POST /api/ai/generate-outline - Generate an outline from a description
    POST /api/ai/refine-outline   - Refine an outline with user feedback
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.dependencies import get_completion_client, parse_body, require_user
from app.models.requests import GenerateOutlineRequest, RefineOutlineRequest
from execution.change_extractor import changes_to_dict
from execution.llm_client import CompletionClient, LLMClientError
from execution.outline_generator import OutlineRun, generate_outline, refine_outline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


def _parse_failure(run: OutlineRun) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to parse AI response", "details": run.parsed.error},
    )


def _upstream_failure(error: str, exc: LLMClientError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error, "details": str(exc)})


@router.post("/generate-outline")
async def generate_outline_endpoint(
    request: Request,
    user_id: str = Depends(require_user),
    client: CompletionClient = Depends(get_completion_client),
):
    """Generate a structured outline from a free-text product description."""
    body = await parse_body(request, GenerateOutlineRequest, "User prompt is required")

    try:
        run = await run_in_threadpool(generate_outline, client, body.user_prompt)
    except LLMClientError as e:
        logger.error("Outline generation failed for user %s: %s", user_id, e)
        return _upstream_failure("Failed to generate outline", e)

    if not run.parsed.success:
        logger.warning("Unusable outline for user %s: %s", user_id, run.parsed.error)
        return _parse_failure(run)

    return JSONResponse(content={
        "outline": run.parsed.outline.to_wire(),
        "rawResponse": run.raw_response,
        "success": True,
    })


@router.post("/refine-outline")
async def refine_outline_endpoint(
    request: Request,
    user_id: str = Depends(require_user),
    client: CompletionClient = Depends(get_completion_client),
):
    """Refine an existing outline and report which fields changed."""
    body = await parse_body(
        request, RefineOutlineRequest, "Current outline and user feedback are required"
    )

    try:
        run = await run_in_threadpool(
            refine_outline, client, body.current_outline, body.user_feedback
        )
    except LLMClientError as e:
        logger.error("Outline refinement failed for user %s: %s", user_id, e)
        return _upstream_failure("Failed to refine outline", e)

    if not run.parsed.success:
        logger.warning("Unusable refinement for user %s: %s", user_id, run.parsed.error)
        return _parse_failure(run)

    if run.change_summary:
        logger.info("Changes for user %s: %s", user_id, "; ".join(run.change_summary))

    return JSONResponse(content={
        "outline": run.parsed.outline.to_wire(),
        "changes": changes_to_dict(run.changes),
        "changeSummary": run.change_summary,
        "rawResponse": run.raw_response,
        "success": True,
    })
