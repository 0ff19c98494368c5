"""Outline generation and refinement.

Runs one request through prompt construction, the completion call,
response parsing and, for refinement, change extraction. Upstream
failures propagate as LLMClientError; parse failures are returned in
the ParseResult so callers can report them separately.
"""

import logging
from dataclasses import dataclass, field

from execution.change_extractor import FieldChange, describe_changes, extract_changes
from execution.llm_client import CompletionClient
from execution.project_outline import ProjectOutline
from execution.prompt_builder import build_generation_prompt, build_refinement_prompt
from execution.response_parser import ParseResult, parse_outline_response

logger = logging.getLogger(__name__)


@dataclass
class OutlineRun:
    """Everything produced by one generation or refinement call."""

    raw_response: str
    parsed: ParseResult
    changes: dict[str, FieldChange] = field(default_factory=dict)

    @property
    def change_summary(self) -> list[str]:
        return describe_changes(self.changes)


def generate_outline(client: CompletionClient, user_prompt: str) -> OutlineRun:
    """Generate a new outline from a free-text product description."""
    prompts = build_generation_prompt(user_prompt)
    logger.info("Generating project outline")
    response = client.complete(prompts.system, prompts.user)
    logger.info("Completion received from %s", response.model)

    parsed = parse_outline_response(response.content)
    return OutlineRun(raw_response=response.content, parsed=parsed)


def refine_outline(
    client: CompletionClient,
    current_outline: ProjectOutline,
    user_feedback: str,
) -> OutlineRun:
    """Refine an existing outline with free-text feedback.

    Changes are only computed when the refined outline parses.
    """
    prompts = build_refinement_prompt(current_outline.to_wire(), user_feedback)
    logger.info("Refining project outline")
    response = client.complete(prompts.system, prompts.user)
    logger.info("Refinement received from %s", response.model)

    parsed = parse_outline_response(response.content)
    run = OutlineRun(raw_response=response.content, parsed=parsed)
    if parsed.success:
        run.changes = extract_changes(current_outline, parsed.outline)
        logger.info("Outline refined, %d field(s) changed", len(run.changes))
    return run
