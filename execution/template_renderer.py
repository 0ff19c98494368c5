"""Markdown template rendering with simple placeholder substitution.

Templates use {{key}} for single values and {{#key}}...{{/key}} for
repeated sections. Rendering is a single pass over the template text:
values inserted into the output are never scanned again, so outline
content that happens to contain braces is reproduced verbatim.
"""

import re

from config.settings import TEMPLATES_DIR

PRD_TEMPLATE = "prd_template.md"

# A list section (name, body) or a scalar placeholder (key).
PLACEHOLDER_PATTERN = re.compile(
    r"\{\{#(\w+)\}\}(.*?)\{\{/\1\}\}|\{\{(\w+)\}\}",
    re.DOTALL,
)


def load_template(name: str) -> str:
    """Read a template from the templates directory.

    Raises:
        FileNotFoundError: If no template with that name exists.
    """
    return (TEMPLATES_DIR / name).read_text(encoding="utf-8")


def _scalar(value) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return str(value)


def render_template(template: str, context: dict, lists: dict[str, list[dict]] | None = None) -> str:
    """Fill a template's placeholders and list sections in one pass.

    Args:
        template: Template text.
        context: Values for {{key}} placeholders. Only str and numeric
            values are substituted.
        lists: Items for {{#key}}...{{/key}} sections. Each item is the
            context for one repetition of the section body.

    Returns:
        The rendered text. Placeholders and sections without a matching
        entry are left untouched.
    """
    lists = lists or {}

    def substitute(match: re.Match) -> str:
        section, body, key = match.groups()
        if section is not None:
            if section not in lists:
                return match.group(0)
            return "".join(render_template(body, item) for item in lists[section])
        value = _scalar(context.get(key))
        return match.group(0) if value is None else value

    return PLACEHOLDER_PATTERN.sub(substitute, template)


def render_prd_body(context: dict, lists: dict[str, list[dict]]) -> str:
    """Render the PRD body template from flattened outline values."""
    return render_template(load_template(PRD_TEMPLATE), context, lists)
