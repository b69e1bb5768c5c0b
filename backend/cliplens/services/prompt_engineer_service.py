"""
Prompt engineering service.

Rewrites a user's short query into a descriptive prompt tuned for
multimodal video search, using one OpenAI chat completion.
"""
import logging
from typing import Optional

from openai import AsyncOpenAI

from cliplens.core.config import settings
from cliplens.core.constants import ErrorMessages
from cliplens.core.errors import ConfigurationError, UpstreamError
from cliplens.prompts import ENGINEER_SYSTEM_PROMPT, ENGINEER_MAX_TOKENS

logger = logging.getLogger(__name__)


class PromptEngineerService:
    """Service wrapping the chat-completion call that engineers prompts."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize with lazy client creation; the key comes from server config only."""
        if api_key is None:
            api_key = settings.OPENAI_API_KEY

        if not api_key:
            raise ConfigurationError(ErrorMessages.MISSING_LLM_KEY)

        self._api_key = api_key
        self.model = model or settings.PROMPT_ENGINEER_MODEL
        self._client = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def engineer(self, prompt: str) -> str:
        """
        Turn a raw prompt into an engineered one.

        Args:
            prompt: Raw text typed by the user

        Returns:
            The completion text, stripped of surrounding whitespace
        """
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": ENGINEER_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=ENGINEER_MAX_TOKENS,
            )
        except Exception as e:
            logger.error(f"Prompt engineering failed for {prompt!r}: {e}")
            raise UpstreamError(ErrorMessages.ENGINEER_FAILED, details=str(e))

        content = (completion.choices[0].message.content or "").strip() if completion.choices else ""
        if not content:
            raise UpstreamError(ErrorMessages.ENGINEER_FAILED, details="Empty completion")

        logger.info(f"Engineered prompt {prompt!r} -> {content!r}")
        return content
