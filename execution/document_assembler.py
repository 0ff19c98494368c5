"""PRD document assembly.

Renders a ProjectOutline into a Markdown PRD: fills the body template,
applies formatting, prefixes a version header and derives a filename.
Markdown is the only supported output format; other formats are
rejected explicitly rather than passed through.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from execution.project_outline import ProjectOutline
from execution.template_renderer import render_prd_body

NOT_SPECIFIED = "Not specified"


class DocumentFormat(str, Enum):
    MARKDOWN = "markdown"


class UnsupportedFormatError(ValueError):
    """Raised when a document is requested in a format we cannot render."""


@dataclass
class RenderedDocument:
    filename: str
    content: str
    format: DocumentFormat


def resolve_format(value: str | DocumentFormat) -> DocumentFormat:
    """Map a requested format name to a DocumentFormat.

    Raises:
        UnsupportedFormatError: If the format is not supported.
    """
    if isinstance(value, DocumentFormat):
        return value
    try:
        return DocumentFormat(str(value).strip().lower())
    except ValueError:
        supported = ", ".join(f.value for f in DocumentFormat)
        raise UnsupportedFormatError(
            f"Unsupported document format '{value}'. Supported: {supported}"
        )


def _items(values: list[str]) -> list[dict]:
    return [{"text": v} for v in values] or [{"text": NOT_SPECIFIED}]


def build_context(outline: ProjectOutline) -> tuple[dict, dict]:
    """Flatten an outline into template scalars and list sections."""
    basics = outline.basics
    vv = outline.value_vision
    users = outline.users
    market = outline.market
    planning = outline.planning

    context = {
        "product_name": basics.product_name,
        "product_pitch": basics.product_pitch,
        "industry": basics.industry,
        "current_stage": basics.current_stage,
        "differentiation": basics.differentiation,
        "value_proposition": vv.value_proposition,
        "product_vision": vv.product_vision,
        "success_metric": vv.success_metric or NOT_SPECIFIED,
        "target_users": users.target_users,
        "primary_job_to_be_done": users.primary_job_to_be_done,
        "market_trend": market.market_trend or NOT_SPECIFIED,
        "prioritization_method": planning.prioritization_method,
        "constraints": planning.constraints or NOT_SPECIFIED,
    }
    lists = {
        "pain_points": _items(users.pain_points),
        "competitors": [
            {"name": c.name, "note": c.note} for c in market.competitors
        ] or [{"name": "None identified", "note": NOT_SPECIFIED}],
        "must_have_features": _items(planning.must_have_features),
        "nice_to_have_features": _items(planning.nice_to_have_features),
    }
    return context, lists


def apply_formatting(document: str) -> str:
    """Standardize formatting across the rendered document.

    - Normalizes spacing between sections
    - Removes duplicate blank lines
    - Strips trailing whitespace

    Args:
        document: The raw rendered document.

    Returns:
        The formatted document.
    """
    doc = document.replace("\r\n", "\n")

    # Ensure headings have blank line before them (unless start of doc)
    doc = re.sub(r"([^\n])\n(#{1,6}\s)", r"\1\n\n\2", doc)

    lines = [line.rstrip() for line in doc.split("\n")]
    doc = "\n".join(lines)

    # Keep at most one blank line between blocks
    doc = re.sub(r"\n{3,}", "\n\n", doc)

    return doc.strip() + "\n"


def generate_filename(product_name: str, version: str) -> str:
    """Generate the canonical filename for the PRD.

    Format: {ProductName}_PRD_{version}.md. Path separators and other
    unsafe characters never reach the filename.
    """
    safe_name = re.sub(r"[^a-zA-Z0-9]+", "_", product_name).strip("_") or "Product"
    safe_version = re.sub(r"[^A-Za-z0-9._-]+", "_", version).strip("._") or "v1"
    return f"{safe_name}_PRD_{safe_version}.md"


def add_version_header(document: str, product_name: str, version: str, date: str | None = None) -> str:
    """Add version metadata header to the document."""
    if date is None:
        date = datetime.now(timezone.utc).strftime("%Y-%m-%d")

    header = (
        f"# {product_name} — Product Requirements Document\n\n"
        f"**Version:** {version}  \n"
        f"**Date:** {date}  \n\n"
        f"---\n\n"
    )
    return header + document


def render_document(
    outline: ProjectOutline,
    fmt: str | DocumentFormat = DocumentFormat.MARKDOWN,
    version: str = "v1",
    date: str | None = None,
) -> RenderedDocument:
    """Full rendering pipeline: body, format, header, filename.

    Args:
        outline: The outline to render.
        fmt: Output format name or DocumentFormat.
        version: Version string (e.g., 'v1').
        date: Optional date string. Defaults to current UTC date.

    Returns:
        RenderedDocument with filename, content and format.

    Raises:
        UnsupportedFormatError: If fmt is not a supported format.
    """
    document_format = resolve_format(fmt)

    context, lists = build_context(outline)
    body = apply_formatting(render_prd_body(context, lists))
    content = add_version_header(body, outline.basics.product_name, version, date)

    return RenderedDocument(
        filename=generate_filename(outline.basics.product_name, version),
        content=content,
        format=document_format,
    )
