"""Generic LLM client with provider-agnostic interface."""

import logging

from openai import AsyncOpenAI

from ..errors import MissingApiKeyError

logger = logging.getLogger(__name__)


class LLMClient:
    """Generic LLM client. Currently uses OpenAI, interface is provider-agnostic."""

    def __init__(self, api_key: str | None, model: str = "gpt-5.2"):
        if not api_key:
            raise MissingApiKeyError("OpenAI")
        self._client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.total_input_tokens = 0
        self.total_output_tokens = 0

    async def call(self, user_message: str, system_prompt: str | None = None, label: str = "") -> str:
        """Make LLM call and return response text.

        Args:
            user_message: User message.
            system_prompt: Optional system/developer prompt.
            label: Optional label for logging token usage.

        Returns:
            Response text content.
        """
        messages = []
        if system_prompt:
            messages.append({"role": "developer", "content": system_prompt})
        messages.append({"role": "user", "content": user_message})

        response = await self._client.responses.create(
            model=self.model,
            input=messages,
            reasoning={"effort": "low"},
        )

        # Track tokens
        usage = response.usage
        if usage is not None:
            self.total_input_tokens += usage.input_tokens
            self.total_output_tokens += usage.output_tokens
            if label:
                logger.info(f"{label}: input={usage.input_tokens}, output={usage.output_tokens}")

        return response.output_text.strip()

    def get_token_totals(self) -> tuple[int, int]:
        """Return accumulated (input, output) tokens."""
        return self.total_input_tokens, self.total_output_tokens
