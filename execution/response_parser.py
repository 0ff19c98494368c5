"""Parse completion text into a ProjectOutline.

Extraction rule, applied in order:

1. Fenced code blocks (```json or bare ```) are tried in document order;
   the first block whose body decodes to a JSON object wins.
2. Otherwise the first JSON object embedded in the text wins, tolerating
   prose before and after it.
3. Otherwise extraction fails.

The result is all-or-nothing: either a fully validated outline or a
diagnostic. Bad model output never raises.
"""

import json
import logging
import re
from dataclasses import dataclass

from pydantic import ValidationError

from execution.project_outline import ProjectOutline
from execution.schema_validator import get_outline_validation_errors

logger = logging.getLogger(__name__)

FENCED_BLOCK_PATTERN = re.compile(r"```[ \t]*([A-Za-z0-9_-]*)[ \t]*\n?(.*?)```", re.DOTALL)


class OutlineExtractionError(ValueError):
    """Raised when no JSON object can be located in the completion text."""


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing: an outline on success, a diagnostic on failure."""

    success: bool
    outline: ProjectOutline | None = None
    error: str | None = None

    @classmethod
    def ok(cls, outline: ProjectOutline) -> "ParseResult":
        return cls(success=True, outline=outline)

    @classmethod
    def fail(cls, error: str) -> "ParseResult":
        return cls(success=False, error=error or "Failed to parse response")


def _decode_object(text: str) -> dict | None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _first_embedded_object(text: str) -> dict | None:
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            data, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            return data
        start = text.find("{", start + 1)
    return None


def extract_json_block(text: str) -> dict:
    """Locate and decode the structured block in a completion.

    Args:
        text: Raw completion text.

    Returns:
        The decoded JSON object.

    Raises:
        OutlineExtractionError: If no JSON object can be found.
    """
    if not isinstance(text, str) or not text.strip():
        raise OutlineExtractionError("Response is empty")

    for match in FENCED_BLOCK_PATTERN.finditer(text):
        data = _decode_object(match.group(2).strip())
        if data is not None:
            return data

    data = _first_embedded_object(text)
    if data is not None:
        return data

    raise OutlineExtractionError("No JSON object found in response")


def parse_outline_data(data: object) -> ParseResult:
    """Validate an already-decoded outline dict and build the typed model."""
    errors = get_outline_validation_errors(data)
    if errors:
        return ParseResult.fail(f"Invalid structure: {', '.join(errors)}")

    try:
        outline = ProjectOutline.model_validate(data)
    except ValidationError as e:
        return ParseResult.fail(f"Invalid structure: {e}")

    return ParseResult.ok(outline)


def parse_outline_response(text: str) -> ParseResult:
    """Parse raw completion text into a ParseResult.

    Args:
        text: Raw text returned by the completion provider.

    Returns:
        ParseResult carrying either the outline or a diagnostic.
    """
    try:
        data = extract_json_block(text)
    except OutlineExtractionError as e:
        logger.warning("Could not extract outline JSON: %s", e)
        return ParseResult.fail(str(e))

    result = parse_outline_data(data)
    if not result.success:
        logger.warning("Outline failed validation: %s", result.error)
    return result
