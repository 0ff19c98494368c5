"""Outline quality checks.

Advisory checks on a parsed outline: length bounds, naming rules,
duplicates, overlap between lists, and placeholder language. Errors
mark content that should be fixed before the PRD is shared; warnings
flag content worth a second look. None of these checks block
generation or refinement.
"""

import re

from execution.project_outline import ProjectOutline

# Length and item-count bounds, keyed by wire path.
FIELD_RULES = {
    "step1.productName": {"min_length": 2, "max_length": 100},
    "step1.productPitch": {"min_length": 20, "max_length": 500},
    "step1.differentiation": {"min_length": 20, "max_length": 400},
    "step2.valueProposition": {"min_length": 20, "max_length": 300},
    "step2.productVision": {"min_length": 20, "max_length": 400},
    "step3.targetUsers": {"min_length": 10, "max_length": 300},
    "step3.primaryJobToBeDone": {"min_length": 10, "max_length": 200},
    "step3.painPoints": {"max_items": 10, "item_min_length": 5, "item_max_length": 100},
    "step5.mustHaveFeatures": {"max_items": 20, "item_min_length": 3, "item_max_length": 100},
}

PRODUCT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_&.]+$")

MAX_COMPETITORS = 10
MAX_MUST_HAVE_FEATURES = 15
SIMILARITY_THRESHOLD = 0.8

# Patterns that indicate placeholder content
PLACEHOLDER_PATTERNS = [
    r"\bTBD\b",
    r"\bTBA\b",
    r"\bTBC\b",
    r"to be determined",
    r"to be decided",
    r"to be confirmed",
    r"figure out later",
    r"placeholder",
    r"\bTODO\b",
    r"\bFIXME\b",
    r"lorem ipsum",
]


def _issue(field: str, message: str, kind: str) -> dict:
    return {"field": field, "message": message, "type": kind}


def _normalize(text: str) -> str:
    return text.lower().strip()


def word_similarity(a: str, b: str) -> float:
    """Share of distinct words that appear in both strings."""
    words_a = set(a.lower().split())
    words_b = set(b.lower().split())
    all_words = words_a | words_b
    if not all_words:
        return 0.0
    return len(words_a & words_b) / len(all_words)


def check_field_rules(wire: dict) -> list[dict]:
    """Apply FIELD_RULES to a wire-format outline."""
    errors = []
    for path, rules in FIELD_RULES.items():
        step, name = path.split(".")
        value = wire[step][name]

        if isinstance(value, str):
            length = len(value.strip())
            if "min_length" in rules and length < rules["min_length"]:
                errors.append(_issue(
                    path, f"Must be at least {rules['min_length']} characters long", "minLength"
                ))
            if "max_length" in rules and length > rules["max_length"]:
                errors.append(_issue(
                    path, f"Must be no more than {rules['max_length']} characters long", "maxLength"
                ))
            continue

        if "max_items" in rules and len(value) > rules["max_items"]:
            errors.append(_issue(
                path, f"Cannot have more than {rules['max_items']} items", "maxLength"
            ))
        for i, item in enumerate(value):
            length = len(item.strip())
            if length < rules.get("item_min_length", 0):
                errors.append(_issue(
                    f"{path}[{i}]",
                    f"Item {i + 1} must be at least {rules['item_min_length']} characters long",
                    "minLength",
                ))
            if "item_max_length" in rules and length > rules["item_max_length"]:
                errors.append(_issue(
                    f"{path}[{i}]",
                    f"Item {i + 1} must be no more than {rules['item_max_length']} characters long",
                    "maxLength",
                ))
    return errors


def check_product_basics(outline: ProjectOutline) -> dict:
    basics = outline.basics
    errors = []
    warnings = []
    if not PRODUCT_NAME_PATTERN.match(basics.product_name.strip()):
        errors.append(_issue(
            "step1.productName",
            "Product name can only contain letters, numbers, spaces, and basic punctuation",
            "pattern",
        ))
    if _normalize(basics.product_name) == _normalize(basics.product_pitch):
        warnings.append(_issue(
            "step1.productPitch",
            "Product pitch should be different from the product name",
            "custom",
        ))
    return {"errors": errors, "warnings": warnings}


def check_value_vision(outline: ProjectOutline) -> dict:
    vv = outline.value_vision
    warnings = []
    if word_similarity(vv.value_proposition, vv.product_vision) > SIMILARITY_THRESHOLD:
        warnings.append(_issue(
            "step2.productVision",
            "Product vision should be distinct from the value proposition",
            "custom",
        ))
    return {"errors": [], "warnings": warnings}


def check_users_problems(outline: ProjectOutline) -> dict:
    pain_points = outline.users.pain_points
    warnings = []
    if len({_normalize(p) for p in pain_points}) < len(pain_points):
        warnings.append(_issue(
            "step3.painPoints", "Some pain points appear to be duplicates", "custom"
        ))
    return {"errors": [], "warnings": warnings}


def check_market_context(outline: ProjectOutline) -> dict:
    competitors = outline.market.competitors
    warnings = []
    if len(competitors) > MAX_COMPETITORS:
        warnings.append(_issue(
            "step4.competitors",
            "Consider focusing on the top 5-7 most relevant competitors",
            "custom",
        ))
    if len({_normalize(c.name) for c in competitors}) < len(competitors):
        warnings.append(_issue(
            "step4.competitors", "Some competitors appear to be duplicates", "custom"
        ))
    return {"errors": [], "warnings": warnings}


def check_requirements_planning(outline: ProjectOutline) -> dict:
    planning = outline.planning
    warnings = []
    must_have = {_normalize(f) for f in planning.must_have_features}
    nice_to_have = {_normalize(f) for f in planning.nice_to_have_features}
    if must_have & nice_to_have:
        warnings.append(_issue(
            "step5.niceToHaveFeatures",
            "Some features appear in both must-have and nice-to-have lists",
            "custom",
        ))
    if len(planning.must_have_features) > MAX_MUST_HAVE_FEATURES:
        warnings.append(_issue(
            "step5.mustHaveFeatures",
            'Consider if all features are truly "must-have" for the initial version',
            "custom",
        ))
    return {"errors": [], "warnings": warnings}


def _iter_text(wire: dict):
    for step, fields in wire.items():
        for name, value in fields.items():
            path = f"{step}.{name}"
            if isinstance(value, str):
                yield path, value
            elif isinstance(value, list):
                for i, item in enumerate(value):
                    if isinstance(item, dict):
                        for key, text in item.items():
                            if isinstance(text, str):
                                yield f"{path}[{i}].{key}", text
                    elif isinstance(item, str):
                        yield f"{path}[{i}]", item


def check_no_placeholders(wire: dict) -> list[dict]:
    """Flag any text field containing placeholder language."""
    found = []
    for path, text in _iter_text(wire):
        for pattern in PLACEHOLDER_PATTERNS:
            if re.search(pattern, text, re.IGNORECASE):
                found.append(_issue(path, f"Contains placeholder text matching '{pattern}'", "custom"))
                break
    return found


STEP_CHECKS = {
    "step1": check_product_basics,
    "step2": check_value_vision,
    "step3": check_users_problems,
    "step4": check_market_context,
    "step5": check_requirements_planning,
}


def run_all_checks(outline: ProjectOutline) -> dict:
    """Run all outline quality checks and return a structured report.

    Returns:
        Dict with 'all_passed', 'total_errors', 'total_warnings' and a
        'steps' mapping of step key -> {passed, errors, warnings}.
    """
    wire = outline.to_wire()
    steps = {step: {"errors": [], "warnings": []} for step in STEP_CHECKS}

    for issue in check_field_rules(wire):
        steps[issue["field"].split(".")[0]]["errors"].append(issue)
    for issue in check_no_placeholders(wire):
        steps[issue["field"].split(".")[0]]["warnings"].append(issue)
    for step, check in STEP_CHECKS.items():
        result = check(outline)
        steps[step]["errors"].extend(result["errors"])
        steps[step]["warnings"].extend(result["warnings"])

    for result in steps.values():
        result["passed"] = not result["errors"]

    return {
        "all_passed": all(r["passed"] for r in steps.values()),
        "total_errors": sum(len(r["errors"]) for r in steps.values()),
        "total_warnings": sum(len(r["warnings"]) for r in steps.values()),
        "steps": steps,
    }
