"""Base classes and shared utilities for LLM providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from prnote.llm.exceptions import EmptyGenerationError, LLMError, MissingAPIKeyError
from prnote.llm.prompts import SYSTEM_PROMPT


@dataclass(frozen=True)
class GenerationRequest:
    """Everything sent to the model for one description.

    Attributes:
        prompt: The full user prompt (context, template and instructions).
        instructions: The merge instructions embedded in the prompt.
        system_prompt: The system message.
    """

    prompt: str
    instructions: tuple[str, ...]
    system_prompt: str = SYSTEM_PROMPT


@dataclass
class LLMResult:
    """Result from an LLM generation call, including token usage."""

    text: str
    model: str
    input_tokens: int
    output_tokens: int


def clean_response(raw_response: str | None) -> str:
    """Trim the model output and drop a code fence wrapping the whole answer.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The cleaned text, possibly empty.
    """
    cleaned = (raw_response or "").strip()

    # Remove markdown code fences if the model wrapped its answer in one
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        if len(lines) > 1 and lines[-1].strip() == "```":
            cleaned = "\n".join(lines[1:-1]).strip()

    return cleaned


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers."""

    #: Human-readable provider name for error messages
    display_name = "LLM"

    def __init__(self, api_key: str, model: str, max_tokens: int, temperature: float):
        """Initialize the provider.

        Args:
            api_key: Provider API key.
            model: Model name.
            max_tokens: Upper bound on generated tokens.
            temperature: Sampling temperature.

        Raises:
            MissingAPIKeyError: If api_key is empty.
        """
        if not api_key:
            raise MissingAPIKeyError(f"{self.display_name} API key is not set.")
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    @abstractmethod
    def complete(self, request: GenerationRequest) -> LLMResult:
        """Send the request to the provider and return the raw result.

        Raises:
            LLMError: If the API call fails.
        """
        pass

    def generate(self, request: GenerationRequest) -> LLMResult:
        """Generate a PR description.

        Args:
            request: The generation request.

        Returns:
            An LLMResult whose text is non-empty.

        Raises:
            EmptyGenerationError: If the response is empty after trimming.
            LLMError: For other LLM-related errors.
        """
        result = self.complete(request)
        text = clean_response(result.text)
        if not text:
            raise EmptyGenerationError(f"{self.display_name} returned an empty response.")
        result.text = text
        return result


__all__ = [
    "BaseLLMProvider",
    "EmptyGenerationError",
    "GenerationRequest",
    "LLMError",
    "LLMResult",
    "MissingAPIKeyError",
    "clean_response",
]
