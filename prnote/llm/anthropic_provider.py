"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

from prnote.llm.base import BaseLLMProvider, GenerationRequest, LLMError, LLMResult


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    display_name = "Anthropic"

    def complete(self, request: GenerationRequest) -> LLMResult:
        """Generate a PR description using Anthropic Claude.

        Args:
            request: The generation request.

        Returns:
            An LLMResult with the raw response text and token usage.

        Raises:
            LLMError: If the API call fails.
        """
        client = Anthropic(api_key=self.api_key)

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=request.system_prompt,
                messages=[{"role": "user", "content": request.prompt}],
            )

            # Concatenate the text blocks of the response
            raw_response = "".join(
                block.text for block in message.content if getattr(block, "type", None) == "text"
            )

            input_tokens = message.usage.input_tokens
            output_tokens = message.usage.output_tokens

        except Exception as e:
            raise LLMError(f"Anthropic API call failed: {e}")

        return LLMResult(
            text=raw_response,
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
