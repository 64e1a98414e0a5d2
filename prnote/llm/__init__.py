"""LLM provider module for prnote.

This module provides a unified interface to the supported LLM providers.
The active provider comes from the run Settings.
"""

from prnote.config import LLMProvider, Settings
from prnote.llm.base import (
    BaseLLMProvider,
    GenerationRequest,
    LLMResult,
    clean_response,
)
from prnote.llm.exceptions import EmptyGenerationError, LLMError, MissingAPIKeyError


def get_provider(settings: Settings) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        settings: Run settings (provider, model, key and sampling options).

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    provider = settings.provider
    options = dict(
        api_key=settings.llm_api_key,
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )

    if provider == LLMProvider.OPENAI:
        from prnote.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(**options)

    elif provider == LLMProvider.ANTHROPIC:
        from prnote.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(**options)

    else:
        raise ValueError(f"Unsupported provider: {provider}")


__all__ = [
    "BaseLLMProvider",
    "GenerationRequest",
    "LLMResult",
    "LLMError",
    "MissingAPIKeyError",
    "EmptyGenerationError",
    "clean_response",
    "get_provider",
]
