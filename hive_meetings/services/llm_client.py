"""LLM client wrapper for Anthropic text completions."""

from anthropic import APIError, AsyncAnthropic

from hive_meetings.config import settings


class LLMClientError(Exception):
    """Raised when the text-generation call fails."""

    pass


class LLMClient:
    """Anthropic client wrapper returning plain response text.

    The summarizer asks for JSON in the prompt rather than relying on
    structured output, so callers get the raw text and parse it
    themselves.
    """

    def __init__(
        self,
        client: AsyncAnthropic | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ):
        """Initialize LLM client.

        Args:
            client: Optional Anthropic client for dependency injection.
                   If not provided, creates one from settings.
            model: Model name override (defaults to settings)
            max_tokens: Response token limit override (defaults to settings)
        """
        if client is not None:
            self._client = client
        elif settings.anthropic_api_key:
            self._client = AsyncAnthropic(api_key=settings.anthropic_api_key)
        else:
            # Allow initialization without API key for testing
            self._client = None
        self._model = model or settings.anthropic_model
        self._max_tokens = max_tokens or settings.anthropic_max_tokens

    async def complete(self, system: str, prompt: str) -> str:
        """Send one system + user exchange and return the text reply.

        Args:
            system: System prompt
            prompt: User message content

        Returns:
            Concatenated text of the response's text blocks ("" if none)

        Raises:
            LLMClientError: If the client is not configured or the call fails
        """
        if self._client is None:
            raise LLMClientError(
                "Anthropic client not initialized. "
                "Set ANTHROPIC_API_KEY environment variable."
            )

        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIError as e:
            raise LLMClientError(f"Anthropic API error: {e}") from e
        except Exception as e:
            raise LLMClientError(f"Completion failed: {e}") from e

        return "".join(
            block.text for block in response.content if block.type == "text"
        )
