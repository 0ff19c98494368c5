"""Pydantic models for the structured PRD outline.

The wire format is camelCase JSON grouped into ``step1``..``step5``, the
same shape the completion provider is asked to emit and the same shape
API clients send back for refinement. Python code uses snake_case
attribute names; ``to_wire()`` serializes back to the wire format.
"""

from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ProductStage = Literal["idea", "mvp", "growth", "scaling"]
PrioritizationMethod = Literal["RICE", "MoSCoW", "Kano"]


def require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must be a non-empty string")
    return value


Text = Annotated[str, AfterValidator(require_text)]


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ProductBasics(_WireModel):
    product_name: Text
    product_pitch: Text
    industry: Text
    current_stage: ProductStage
    differentiation: Text


class ValueVision(_WireModel):
    value_proposition: Text
    product_vision: Text
    success_metric: str | None = None


class UsersProblems(_WireModel):
    target_users: Text
    pain_points: list[Text] = Field(min_length=1)
    primary_job_to_be_done: Text


class Competitor(_WireModel):
    name: Text
    note: Text


class MarketContext(_WireModel):
    competitors: list[Competitor]
    market_trend: str | None = None


class RequirementsPlanning(_WireModel):
    must_have_features: list[Text] = Field(min_length=1)
    nice_to_have_features: list[Text]
    constraints: str | None = None
    prioritization_method: PrioritizationMethod


class ProjectOutline(BaseModel):
    """A complete PRD outline. Every required field is present and non-blank."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    basics: ProductBasics = Field(alias="step1")
    value_vision: ValueVision = Field(alias="step2")
    users: UsersProblems = Field(alias="step3")
    market: MarketContext = Field(alias="step4")
    planning: RequirementsPlanning = Field(alias="step5")

    def to_wire(self) -> dict:
        """Return the camelCase step1..step5 JSON-ready dict."""
        return self.model_dump(by_alias=True, mode="json")
