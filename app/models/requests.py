"""Pydantic models for API request bodies."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel

from execution.project_outline import ProjectOutline, require_text

NonBlankStr = Annotated[StrictStr, AfterValidator(require_text)]


class _RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateOutlineRequest(_RequestModel):
    user_prompt: NonBlankStr


class RefineOutlineRequest(_RequestModel):
    current_outline: ProjectOutline
    user_feedback: NonBlankStr


class ValidateOutlineRequest(_RequestModel):
    outline: ProjectOutline


class RenderOutlineRequest(_RequestModel):
    outline: ProjectOutline
    format: StrictStr = "markdown"
    version: StrictStr = Field(default="v1", max_length=20, pattern=r"^[A-Za-z0-9._-]+$")
