"""
Unit tests for the Gemini connector

Tests text and multimodal calls through the google-genai async client.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from brand_agents.connectors.gemini_provider import GeminiProvider
from brand_agents.core.exceptions import LLMResponseError
from brand_agents.core.llm_gateway import LLMMessage, LLMRequestOptions, VisionMessage
from brand_agents.models import VisionInput


def _reply(text='{"finalScore": 72}'):
    response = MagicMock()
    response.text = text
    response.usage_metadata = MagicMock(prompt_token_count=90, candidates_token_count=30, total_token_count=120)
    return response


class TestGeminiProvider:
    """Test Gemini generate_content integration"""

    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=_reply())
        client.aio.models.get = AsyncMock(return_value=MagicMock())
        return client

    @pytest.fixture
    def provider(self, client):
        return GeminiProvider(api_key="test-key", client=client)

    @pytest.mark.asyncio
    async def test_generate_text(self, provider, client):
        """Test system messages become the system instruction"""
        messages = [
            LLMMessage(role="system", content="Be strict."),
            LLMMessage(role="user", content="Score this"),
            LLMMessage(role="assistant", content="Sure"),
        ]
        options = LLMRequestOptions(models={"gemini": "gemini-2.5-pro"}, json_mode=True, max_tokens=800)

        response = await provider.generate_text(messages, options)

        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert [content.role for content in kwargs["contents"]] == ["user", "model"]
        assert "Be strict." in str(kwargs["config"].system_instruction)
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].max_output_tokens == 800
        assert response.content == '{"finalScore": 72}'
        assert response.provider == "gemini"
        assert response.usage.prompt_tokens == 90

    @pytest.mark.asyncio
    async def test_default_model(self, provider, client):
        await provider.generate_text([LLMMessage(role="user", content="hi")], LLMRequestOptions())

        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["config"].response_mime_type is None

    @pytest.mark.asyncio
    async def test_vision_sends_inline_bytes(self, provider, client, sample_image_base64):
        """Test properly decodes base64 image"""
        image = VisionInput(data=sample_image_base64, mime_type="image/png")

        await provider.generate_with_vision(VisionMessage(text="Describe", image=image), LLMRequestOptions())

        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        text, image_part = kwargs["contents"]
        assert text == "Describe"
        assert image_part.inline_data.mime_type == "image/png"
        assert image_part.inline_data.data == image.raw_bytes

    @pytest.mark.asyncio
    async def test_invalid_base64_rejected(self, provider):
        image = VisionInput(data="not base64!!", mime_type="image/png")
        with pytest.raises(ValueError, match="Invalid base64"):
            await provider.generate_with_vision(VisionMessage(text="Describe", image=image), LLMRequestOptions())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_empty_text(self, provider, client, text):
        """Test handles blocked or empty responses"""
        client.aio.models.generate_content.return_value = _reply(text=text)
        with pytest.raises(LLMResponseError, match="Empty response from Gemini"):
            await provider.generate_text([LLMMessage(role="user", content="hi")], LLMRequestOptions())

    @pytest.mark.asyncio
    async def test_health_check(self, provider, client):
        assert await provider.health_check() is True
        client.aio.models.get.assert_awaited_once_with(model="gemini-2.5-flash")
        assert await provider.close() is None
