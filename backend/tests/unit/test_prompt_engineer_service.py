"""
Unit tests for PromptEngineerService.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cliplens.core.errors import ConfigurationError, UpstreamError
from cliplens.prompts import ENGINEER_SYSTEM_PROMPT
from cliplens.services.prompt_engineer_service import PromptEngineerService


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def service():
    service = PromptEngineerService(api_key="openai-key", model="gpt-4o")
    service._client = MagicMock()
    service._client.chat.completions.create = AsyncMock()
    return service


class TestPromptEngineerService:
    """Tests for prompt engineering."""

    def test_missing_key_is_configuration_error(self):
        with patch("cliplens.services.prompt_engineer_service.settings") as mock_settings:
            mock_settings.OPENAI_API_KEY = None
            with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
                PromptEngineerService()

    @pytest.mark.asyncio
    async def test_returns_trimmed_completion(self, service):
        service.client.chat.completions.create.return_value = completion(
            "  a person riding a bicycle, bell ringing\n"
        )

        result = await service.engineer("bike")

        assert result == "a person riding a bicycle, bell ringing"

    @pytest.mark.asyncio
    async def test_sends_fixed_system_instruction(self, service):
        service.client.chat.completions.create.return_value = completion("ok")

        await service.engineer("bike")

        kwargs = service.client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"][0] == {"role": "system", "content": ENGINEER_SYSTEM_PROMPT}
        assert kwargs["messages"][1] == {"role": "user", "content": "bike"}
        assert "77 tokens" in ENGINEER_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_provider_failure(self, service):
        service.client.chat.completions.create.side_effect = RuntimeError("rate limited")

        with pytest.raises(UpstreamError) as exc_info:
            await service.engineer("bike")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to engineer prompt"

    @pytest.mark.asyncio
    async def test_empty_completion_is_failure(self, service):
        service.client.chat.completions.create.return_value = completion("   ")

        with pytest.raises(UpstreamError):
            await service.engineer("bike")
