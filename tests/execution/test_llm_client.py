"""Tests for the completion client wrapper."""

from unittest.mock import MagicMock

import pytest

import execution.llm_client as llm_client
from config.settings import ConfigurationError
from execution.llm_client import (
    CompletionClient,
    LLMClientError,
    LLMResponse,
    load_completion_config,
)


class TestComplete:
    """Test CompletionClient.complete() with a mocked OpenAI SDK client."""

    def test_successful_call(self, completion_client, mock_openai, openai_response):
        mock_openai.chat.completions.create.return_value = openai_response("Hello back!")

        result = completion_client.complete("You are helpful.", "Hello")

        assert isinstance(result, LLMResponse)
        assert result.content == "Hello back!"
        assert result.model == "gpt-4-turbo-preview"
        assert result.usage["prompt_tokens"] == 100
        assert result.usage["completion_tokens"] == 50
        assert result.stop_reason == "stop"

    def test_sends_fixed_configuration(self, completion_client, mock_openai):
        completion_client.complete("system", "user")

        call_kwargs = mock_openai.chat.completions.create.call_args[1]
        assert call_kwargs["model"] == "gpt-4-turbo-preview"
        assert call_kwargs["max_tokens"] == 2000
        assert call_kwargs["temperature"] == 0.7

    def test_sends_system_then_user_message(self, completion_client, mock_openai):
        completion_client.complete("Be concise.", "Describe the product")

        messages = mock_openai.chat.completions.create.call_args[1]["messages"]
        assert messages == [
            {"role": "system", "content": "Be concise."},
            {"role": "user", "content": "Describe the product"},
        ]

    def test_api_exception_wrapped(self, completion_client, mock_openai):
        mock_openai.chat.completions.create.side_effect = RuntimeError("connection reset")
        with pytest.raises(LLMClientError, match="connection reset"):
            completion_client.complete("system", "user")

    def test_empty_content_raises(self, completion_client, mock_openai, openai_response):
        mock_openai.chat.completions.create.return_value = openai_response(None)
        with pytest.raises(LLMClientError, match="No response from AI"):
            completion_client.complete("system", "user")

    def test_no_choices_raises(self, completion_client, mock_openai):
        response = MagicMock()
        response.choices = []
        mock_openai.chat.completions.create.return_value = response
        with pytest.raises(LLMClientError, match="No response from AI"):
            completion_client.complete("system", "user")

    def test_missing_usage_tolerated(self, completion_client, mock_openai, openai_response):
        response = openai_response("ok")
        response.usage = None
        mock_openai.chat.completions.create.return_value = response

        result = completion_client.complete("system", "user")
        assert result.usage == {}

    def test_single_attempt_per_call(self, completion_client, mock_openai):
        mock_openai.chat.completions.create.side_effect = RuntimeError("boom")
        with pytest.raises(LLMClientError):
            completion_client.complete("system", "user")
        assert mock_openai.chat.completions.create.call_count == 1


class TestConstruction:
    def test_builds_sdk_client_from_config(self, completion_config, monkeypatch):
        mock_openai_cls = MagicMock()
        monkeypatch.setattr("execution.llm_client.openai.OpenAI", mock_openai_cls)

        client = CompletionClient(completion_config)

        mock_openai_cls.assert_called_once_with(api_key="sk-test")
        assert client.config is completion_config


@pytest.fixture
def provider_settings(monkeypatch):
    monkeypatch.setattr(llm_client, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(llm_client, "OPENAI_MODEL", "gpt-4-turbo-preview")
    monkeypatch.setattr(llm_client, "OPENAI_MAX_TOKENS", "2000")
    monkeypatch.setattr(llm_client, "OPENAI_TEMPERATURE", "0.7")
    return monkeypatch


class TestLoadCompletionConfig:
    def test_valid(self, provider_settings):
        config = load_completion_config()
        assert config.api_key == "sk-test"
        assert config.model == "gpt-4-turbo-preview"
        assert config.max_tokens == 2000
        assert config.temperature == 0.7

    def test_missing_key(self, provider_settings):
        provider_settings.setattr(llm_client, "OPENAI_API_KEY", "")
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            load_completion_config()

    @pytest.mark.parametrize("value", ["lots", "0", "-5"])
    def test_bad_max_tokens(self, provider_settings, value):
        provider_settings.setattr(llm_client, "OPENAI_MAX_TOKENS", value)
        with pytest.raises(ConfigurationError, match="OPENAI_MAX_TOKENS"):
            load_completion_config()

    @pytest.mark.parametrize("value", ["warm", "2.5", "-0.1"])
    def test_bad_temperature(self, provider_settings, value):
        provider_settings.setattr(llm_client, "OPENAI_TEMPERATURE", value)
        with pytest.raises(ConfigurationError, match="OPENAI_TEMPERATURE"):
            load_completion_config()

    def test_empty_model(self, provider_settings):
        provider_settings.setattr(llm_client, "OPENAI_MODEL", "")
        with pytest.raises(ConfigurationError, match="OPENAI_MODEL"):
            load_completion_config()
