"""
Language model client - Claude via the Anthropic API.
Used for natural-language filter extraction.
"""

import logging
import os
from typing import Optional, Protocol

import anthropic

from ...config import LanguageModelConfig

logger = logging.getLogger(__name__)


class LanguageModel(Protocol):
    """Anything that turns a prompt into text"""

    async def generate(self, prompt: str) -> str:
        ...


class AnthropicLanguageModel:
    """Generate text with Claude (cost-optimized Haiku by default)"""

    def __init__(self, config: Optional[LanguageModelConfig] = None, client=None):
        self.config = config or LanguageModelConfig()
        api_key = self.config.api_key or os.getenv("ANTHROPIC_API_KEY")
        if client is not None:
            self.client = client
        else:
            self.client = anthropic.AsyncAnthropic(api_key=api_key) if api_key else None

    @property
    def available(self) -> bool:
        return self.client is not None

    async def generate(self, prompt: str) -> str:
        """
        Send a single-turn prompt and return the text of the reply.

        Args:
            prompt: Full instruction including the user text

        Returns:
            Concatenated text blocks of the response

        Raises:
            RuntimeError: If no API key is configured
            anthropic.APIError: On API failures
        """
        if self.client is None:
            raise RuntimeError("ANTHROPIC_API_KEY is not configured")

        response = await self.client.messages.create(
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            messages=[{
                "role": "user",
                "content": prompt
            }]
        )

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )
        logger.debug(f"Model returned {len(text)} characters")
        return text
