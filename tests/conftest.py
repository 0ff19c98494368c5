"""Shared test fixtures for the PRD outline service test suite."""

import copy
import json
from unittest.mock import MagicMock

import pytest

from execution.llm_client import CompletionClient, CompletionConfig
from execution.project_outline import ProjectOutline

SAMPLE_OUTLINE = {
    "step1": {
        "productName": "ShiftMate",
        "productPitch": "ShiftMate lets small clinics build fair staff rotas in minutes instead of hours.",
        "industry": "Healthcare",
        "currentStage": "mvp",
        "differentiation": "Rota rules are learned from past schedules rather than configured by hand.",
    },
    "step2": {
        "valueProposition": "Cut weekly scheduling effort for clinic managers by eighty percent.",
        "productVision": "Become the default workforce planner for independent healthcare practices.",
        "successMetric": "Hours spent on scheduling per week",
    },
    "step3": {
        "targetUsers": "Practice managers at clinics with 5 to 50 staff",
        "painPoints": [
            "Manual spreadsheets break when staff swap shifts",
            "Overtime rules are hard to track",
            "Last-minute absences cause coverage gaps",
        ],
        "primaryJobToBeDone": "Publish a compliant rota every week without conflicts",
    },
    "step4": {
        "competitors": [
            {"name": "Deputy", "note": "Broad workforce suite, expensive for small clinics"},
            {"name": "RotaCloud", "note": "Simple rotas without clinical rules"},
        ],
        "marketTrend": "Clinics are moving staff tools to mobile-first SaaS",
    },
    "step5": {
        "mustHaveFeatures": [
            "Drag and drop rota builder",
            "Shift swap requests",
            "Overtime alerts",
        ],
        "niceToHaveFeatures": ["Payroll export", "SMS reminders"],
        "constraints": "Must run in the browser and meet GDPR requirements",
        "prioritizationMethod": "MoSCoW",
    },
}


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """Ensure all tests run with ENVIRONMENT=test."""
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture
def sample_outline_data():
    """Return a valid outline in wire format (a fresh copy per test)."""
    return copy.deepcopy(SAMPLE_OUTLINE)


@pytest.fixture
def sample_outline(sample_outline_data):
    """Return the sample outline as a ProjectOutline."""
    return ProjectOutline.model_validate(sample_outline_data)


@pytest.fixture
def completion_config():
    return CompletionConfig(
        api_key="sk-test",
        model="gpt-4-turbo-preview",
        temperature=0.7,
        max_tokens=2000,
    )


def make_openai_response(content, model="gpt-4-turbo-preview"):
    """Build a MagicMock shaped like an OpenAI chat completion response."""
    mock_choice = MagicMock()
    mock_choice.message.content = content
    mock_choice.finish_reason = "stop"

    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    mock_response.model = model
    mock_response.usage.prompt_tokens = 100
    mock_response.usage.completion_tokens = 50
    return mock_response


@pytest.fixture
def openai_response():
    """Factory fixture for OpenAI-shaped responses."""
    return make_openai_response


@pytest.fixture
def mock_openai():
    """A mocked OpenAI SDK client that returns the sample outline by default."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_openai_response(
        json.dumps(SAMPLE_OUTLINE)
    )
    return client


@pytest.fixture
def completion_client(completion_config, mock_openai):
    """A CompletionClient wired to the mocked SDK client."""
    return CompletionClient(completion_config, client=mock_openai)
