"""Thin wrapper around the OpenAI SDK for chat completions.

The client is constructed once at startup from a validated
CompletionConfig and injected into request handlers. It only handles
API transport and error wrapping; prompts and parsing live elsewhere.
No retries are attempted: a failed call surfaces immediately.
"""

from dataclasses import dataclass

import openai

from config.settings import (
    OPENAI_API_KEY,
    OPENAI_MAX_TOKENS,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
    ConfigurationError,
)


class LLMClientError(Exception):
    """Raised when the completion provider fails or returns no content."""


@dataclass(frozen=True)
class CompletionConfig:
    """Fixed model configuration sent with every completion request."""

    api_key: str
    model: str
    temperature: float
    max_tokens: int


def load_completion_config() -> CompletionConfig:
    """Build a validated CompletionConfig from the provider settings.

    Returns:
        CompletionConfig ready to construct a CompletionClient.

    Raises:
        ConfigurationError: If the API key is missing or a numeric
            setting cannot be parsed or is out of range.
    """
    if not OPENAI_API_KEY:
        raise ConfigurationError("OPENAI_API_KEY is not configured")

    try:
        max_tokens = int(OPENAI_MAX_TOKENS)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"OPENAI_MAX_TOKENS must be an integer, got {OPENAI_MAX_TOKENS!r}"
        )
    try:
        temperature = float(OPENAI_TEMPERATURE)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"OPENAI_TEMPERATURE must be a number, got {OPENAI_TEMPERATURE!r}"
        )

    if max_tokens <= 0:
        raise ConfigurationError("OPENAI_MAX_TOKENS must be positive")
    if not 0.0 <= temperature <= 2.0:
        raise ConfigurationError("OPENAI_TEMPERATURE must be between 0 and 2")
    if not OPENAI_MODEL:
        raise ConfigurationError("OPENAI_MODEL must not be empty")

    return CompletionConfig(
        api_key=OPENAI_API_KEY,
        model=OPENAI_MODEL,
        temperature=temperature,
        max_tokens=max_tokens,
    )


@dataclass
class LLMResponse:
    """Structured response from a completion call."""

    content: str
    model: str
    usage: dict
    stop_reason: str | None


class CompletionClient:
    """Sends a two-message (system, user) prompt to the provider."""

    def __init__(self, config: CompletionConfig, client=None):
        self.config = config
        self._client = client or openai.OpenAI(api_key=config.api_key)

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Run one chat completion and return the first choice's text.

        Args:
            system_prompt: The system instruction.
            user_prompt: The task-specific user message.

        Returns:
            LLMResponse with the assistant's reply.

        Raises:
            LLMClientError: If the API call fails, returns no choices, or
                returns empty content.
        """
        try:
            response = self._client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except openai.APIError as e:
            raise LLMClientError(f"OpenAI API error: {e}") from e
        except Exception as e:
            raise LLMClientError(f"LLM call failed: {e}") from e

        if not response.choices:
            raise LLMClientError("No response from AI")

        choice = response.choices[0]
        content = choice.message.content if choice.message else None
        if not content:
            raise LLMClientError("No response from AI")

        usage = {}
        if response.usage is not None:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
            }

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage,
            stop_reason=choice.finish_reason,
        )
