"""Prompt construction for outline generation and refinement.

Each builder returns a PromptPair: a fixed system prompt describing the
output schema and tone, and a user prompt carrying the request content.
"""

import json
from dataclasses import dataclass

GENERATION_SYSTEM_PROMPT = """You are an expert product management consultant helping users create comprehensive project documentation.

Your task is to analyze the user's project description and extract structured information for a complete product requirements document.

You must extract information for these 5 sections:

1. **Product Basics**:
   - productName: The name of the product
   - productPitch: A concise elevator pitch (2-3 sentences)
   - industry: The industry/sector (e.g., "Healthcare", "E-commerce", "Education")
   - currentStage: One of: "idea", "mvp", "growth", "scaling"
   - differentiation: What makes this product unique

2. **Value & Vision**:
   - valueProposition: Clear value proposition statement
   - productVision: Long-term vision for the product
   - successMetric: (optional) The single metric that defines success

3. **Users & Problems**:
   - targetUsers: Description of target user personas
   - painPoints: Array of 3-5 specific pain points the product solves
   - primaryJobToBeDone: The main job users are trying to accomplish

4. **Market Context**:
   - competitors: Array of 2-5 competitors with format: { "name": string, "note": string } (the note is a short, non-empty description)
   - marketTrend: (optional) A relevant market trend

5. **Requirements & Planning**:
   - mustHaveFeatures: Array of 5-10 essential features
   - niceToHaveFeatures: Array of 3-5 optional features
   - constraints: Any technical, budget, or timeline constraints
   - prioritizationMethod: One of: "RICE", "MoSCoW", "Kano"

**CRITICAL INSTRUCTIONS**:
- Return ONLY valid JSON matching the structure below
- Do NOT include markdown code blocks or explanations
- If information is missing, make reasonable assumptions based on industry standards
- Be specific and actionable in your responses
- Keep descriptions concise but informative

**JSON Structure**:
{
  "step1": {
    "productName": "string",
    "productPitch": "string",
    "industry": "string",
    "currentStage": "idea" | "mvp" | "growth" | "scaling",
    "differentiation": "string"
  },
  "step2": {
    "valueProposition": "string",
    "productVision": "string",
    "successMetric": "string"
  },
  "step3": {
    "targetUsers": "string",
    "painPoints": ["string", "string", ...],
    "primaryJobToBeDone": "string"
  },
  "step4": {
    "competitors": [
      { "name": "string", "note": "string" }
    ],
    "marketTrend": "string"
  },
  "step5": {
    "mustHaveFeatures": ["string", "string", ...],
    "niceToHaveFeatures": ["string", "string", ...],
    "constraints": "string",
    "prioritizationMethod": "RICE" | "MoSCoW" | "Kano"
  }
}"""

REFINEMENT_SYSTEM_PROMPT = """You are refining an existing project outline based on user feedback.

**CRITICAL INSTRUCTIONS**:
- Update ONLY the fields mentioned in the user's feedback
- Keep all other fields exactly as they were
- Return the complete updated JSON structure
- Do NOT include markdown code blocks or explanations
- Maintain the same JSON structure as before

The user will provide:
1. Current outline (existing data)
2. Their feedback/changes

Analyze the feedback and update only the relevant fields while preserving everything else."""

GENERATION_USER_PROMPT = """Please analyze this project description and extract structured information:

{user_prompt}

Return the complete JSON structure with all fields populated."""

REFINEMENT_USER_PROMPT = """Current project outline:
{current_outline}

User feedback:
{user_feedback}

Update the outline based on the feedback. Return the complete updated JSON structure."""


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str


def _require_text(value: str, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value.strip()


def build_generation_prompt(user_prompt: str) -> PromptPair:
    """Build the prompts for generating an outline from a free-text description."""
    text = _require_text(user_prompt, "user_prompt")
    return PromptPair(
        system=GENERATION_SYSTEM_PROMPT,
        user=GENERATION_USER_PROMPT.format(user_prompt=text),
    )


def build_refinement_prompt(current_outline: dict, user_feedback: str) -> PromptPair:
    """Build the prompts for refining an existing outline.

    Args:
        current_outline: The outline in wire format (step1..step5 dict).
        user_feedback: Free-text description of the requested changes.
    """
    feedback = _require_text(user_feedback, "user_feedback")
    return PromptPair(
        system=REFINEMENT_SYSTEM_PROMPT,
        user=REFINEMENT_USER_PROMPT.format(
            current_outline=json.dumps(current_outline, indent=2),
            user_feedback=feedback,
        ),
    )
