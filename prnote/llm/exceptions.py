"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: Base exception for LLM-related errors
- MissingAPIKeyError: Raised when no API key was supplied
- EmptyGenerationError: Raised when the model returns nothing usable
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class EmptyGenerationError(LLMError):
    """Raised when the model response is empty after trimming."""

    pass
