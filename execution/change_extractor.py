"""Field-level diff between two outline versions.

Compares whole values only: scalars by string inequality, lists as
multisets so reordering alone is not a change. Keys are dotted wire
paths such as ``step1.productName``.
"""

import json
from collections import Counter
from dataclasses import dataclass

from execution.project_outline import ProjectOutline

# Display labels for change summaries, keyed by wire path.
FIELD_LABELS = {
    "step1.productName": "Product name",
    "step1.productPitch": "Product pitch",
    "step1.industry": "Industry",
    "step1.currentStage": "Current stage",
    "step1.differentiation": "Differentiation",
    "step2.valueProposition": "Value proposition",
    "step2.productVision": "Product vision",
    "step2.successMetric": "Success metric",
    "step3.targetUsers": "Target users",
    "step3.painPoints": "Pain points",
    "step3.primaryJobToBeDone": "Primary job to be done",
    "step4.competitors": "Competitors list",
    "step4.marketTrend": "Market trend",
    "step5.mustHaveFeatures": "Must-have features",
    "step5.niceToHaveFeatures": "Nice-to-have features",
    "step5.constraints": "Constraints",
    "step5.prioritizationMethod": "Prioritization method",
}


@dataclass(frozen=True)
class FieldChange:
    old: object
    new: object

    def to_dict(self) -> dict:
        return {"old": self.old, "new": self.new}


def _multiset(values: list) -> Counter:
    return Counter(json.dumps(v, sort_keys=True) for v in values)


def _differs(old: object, new: object) -> bool:
    if isinstance(old, list) and isinstance(new, list):
        return _multiset(old) != _multiset(new)
    if old is None or new is None:
        return old != new
    return str(old) != str(new)


def extract_changes(old: ProjectOutline, new: ProjectOutline) -> dict[str, FieldChange]:
    """Return one FieldChange per wire path whose value differs.

    Args:
        old: The outline before refinement.
        new: The refined outline.

    Returns:
        Dict of dotted path -> FieldChange, in wire field order. Empty
        when nothing changed.
    """
    old_wire = old.to_wire()
    new_wire = new.to_wire()

    changes = {}
    for path in FIELD_LABELS:
        step, name = path.split(".")
        old_value = old_wire[step].get(name)
        new_value = new_wire[step].get(name)
        if _differs(old_value, new_value):
            changes[path] = FieldChange(old=old_value, new=new_value)
    return changes


def changes_to_dict(changes: dict[str, FieldChange]) -> dict:
    """Serialize a change set for a JSON response."""
    return {path: change.to_dict() for path, change in changes.items()}


def describe_changes(changes: dict[str, FieldChange]) -> list[str]:
    """Return human-readable summaries, one per changed field."""
    summaries = []
    for path, change in changes.items():
        label = FIELD_LABELS.get(path, path)
        if isinstance(change.new, list) or isinstance(change.old, list):
            summaries.append(f"{label} updated")
        elif change.new is None:
            summaries.append(f"{label} removed")
        else:
            summaries.append(f'{label} changed to "{change.new}"')
    return summaries
