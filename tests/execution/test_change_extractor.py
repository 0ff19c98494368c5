"""Tests for the field-level outline diff."""

from execution.change_extractor import (
    FIELD_LABELS,
    FieldChange,
    changes_to_dict,
    describe_changes,
    extract_changes,
)
from execution.project_outline import ProjectOutline


def _outline(data):
    return ProjectOutline.model_validate(data)


class TestExtractChanges:
    def test_identical_outlines_have_no_changes(self, sample_outline_data):
        assert extract_changes(_outline(sample_outline_data), _outline(sample_outline_data)) == {}

    def test_single_scalar_change(self, sample_outline_data, sample_outline):
        sample_outline_data["step1"]["productName"] = "RotaPilot"
        changes = extract_changes(sample_outline, _outline(sample_outline_data))
        assert changes == {"step1.productName": FieldChange(old="ShiftMate", new="RotaPilot")}

    def test_reordered_list_is_not_a_change(self, sample_outline_data, sample_outline):
        sample_outline_data["step3"]["painPoints"].reverse()
        sample_outline_data["step4"]["competitors"].reverse()
        assert extract_changes(sample_outline, _outline(sample_outline_data)) == {}

    def test_list_change_reports_whole_values(self, sample_outline_data, sample_outline):
        old_features = list(sample_outline_data["step5"]["mustHaveFeatures"])
        sample_outline_data["step5"]["mustHaveFeatures"].append("Holiday planner")
        changes = extract_changes(sample_outline, _outline(sample_outline_data))
        change = changes["step5.mustHaveFeatures"]
        assert change.old == old_features
        assert change.new == old_features + ["Holiday planner"]

    def test_duplicate_list_items_count(self, sample_outline_data, sample_outline):
        points = sample_outline_data["step3"]["painPoints"]
        points.append(points[0])
        changes = extract_changes(sample_outline, _outline(sample_outline_data))
        assert list(changes) == ["step3.painPoints"]

    def test_competitor_note_change(self, sample_outline_data, sample_outline):
        sample_outline_data["step4"]["competitors"][0]["note"] = "Now offers a clinic plan"
        changes = extract_changes(sample_outline, _outline(sample_outline_data))
        assert list(changes) == ["step4.competitors"]

    def test_optional_field_removed(self, sample_outline_data, sample_outline):
        del sample_outline_data["step5"]["constraints"]
        changes = extract_changes(sample_outline, _outline(sample_outline_data))
        assert changes["step5.constraints"].new is None

    def test_changes_follow_outline_order(self, sample_outline_data, sample_outline):
        sample_outline_data["step5"]["prioritizationMethod"] = "RICE"
        sample_outline_data["step1"]["industry"] = "Dental"
        changes = extract_changes(sample_outline, _outline(sample_outline_data))
        assert list(changes) == ["step1.industry", "step5.prioritizationMethod"]

    def test_every_wire_field_is_compared(self, sample_outline):
        wire = sample_outline.to_wire()
        paths = {f"{step}.{name}" for step, fields in wire.items() for name in fields}
        assert paths == set(FIELD_LABELS)


class TestDescribeChanges:
    def test_scalar_summary(self):
        changes = {"step1.industry": FieldChange(old="Healthcare", new="Dental")}
        assert describe_changes(changes) == ['Industry changed to "Dental"']

    def test_list_summary(self):
        changes = {"step3.painPoints": FieldChange(old=["a"], new=["b"])}
        assert describe_changes(changes) == ["Pain points updated"]

    def test_removed_summary(self):
        changes = {"step2.successMetric": FieldChange(old="NPS", new=None)}
        assert describe_changes(changes) == ["Success metric removed"]

    def test_serializes_for_json(self):
        changes = {"step1.industry": FieldChange(old="Healthcare", new="Dental")}
        assert changes_to_dict(changes) == {
            "step1.industry": {"old": "Healthcare", "new": "Dental"}
        }
