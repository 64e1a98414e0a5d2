"""OpenAI GPT provider implementation."""

from openai import OpenAI

from prnote.llm.base import BaseLLMProvider, GenerationRequest, LLMError, LLMResult


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    display_name = "OpenAI"

    def complete(self, request: GenerationRequest) -> LLMResult:
        """Generate a PR description using OpenAI chat completions.

        Args:
            request: The generation request.

        Returns:
            An LLMResult with the raw response text and token usage.

        Raises:
            LLMError: If the API call fails.
        """
        client = OpenAI(api_key=self.api_key)

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": request.system_prompt},
                    {"role": "user", "content": request.prompt},
                ],
            )

            # Extract the text response
            choice = response.choices[0] if response.choices else None
            raw_response = choice.message.content if choice else ""

            # Extract token usage
            usage = response.usage
            input_tokens = usage.prompt_tokens if usage else 0
            output_tokens = usage.completion_tokens if usage else 0

        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}")

        return LLMResult(
            text=raw_response or "",
            model=self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
