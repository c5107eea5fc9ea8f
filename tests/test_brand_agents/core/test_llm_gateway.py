"""
Unit tests for brand_agents.core.llm_gateway module.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import llm_response, mock_provider
from brand_agents.core.config import EvaluationConfig, ProviderConfig
from brand_agents.core.exceptions import AllProvidersFailedError
from brand_agents.core.llm_gateway import (
    LLMGateway,
    LLMMessage,
    LLMRequestOptions,
    LLMResponse,
    TokenUsage,
    VisionMessage,
)
from brand_agents.models import VisionInput

MESSAGES = [LLMMessage(role="user", content="Score this")]


class TestDataTypes:

    def test_model_for_provider(self):
        options = LLMRequestOptions(models={"openai": "gpt-4o"})
        assert options.model_for("openai", "gpt-4o-mini") == "gpt-4o"
        assert options.model_for("gemini", "gemini-2.5-flash") == "gemini-2.5-flash"

    def test_response_to_dict(self):
        response = LLMResponse(
            content="{}",
            provider="gemini",
            model="gemini-2.5-flash",
            usage=TokenUsage(prompt_tokens=10, completion_tokens=5, total_tokens=15),
            latency_ms=40,
        )
        data = response.to_dict()
        assert data["content"] == "{}"
        assert data["usage"]["total_tokens"] == 15
        assert "content" not in response.to_dict(include_content=False)


class TestFallback:
    """Ordered provider fallback."""

    @pytest.mark.asyncio
    async def test_first_provider_wins(self):
        openai = mock_provider("openai", content={"score": 1})
        gemini = mock_provider("gemini", content={"score": 2})
        gateway = LLMGateway({"openai": openai, "gemini": gemini}, order=["openai", "gemini"])

        response = await gateway.generate_text(MESSAGES)

        assert response.provider == "openai"
        gemini.generate_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_falls_back_on_error(self):
        openai = mock_provider("openai", error=RuntimeError("rate limited"))
        gemini = mock_provider("gemini", content={"score": 2})
        listener = MagicMock()
        gateway = LLMGateway(
            {"openai": openai, "gemini": gemini},
            order=["openai", "gemini"],
            failure_listener=listener,
        )

        response = await gateway.generate_text(MESSAGES)

        assert response.provider == "gemini"
        listener.assert_called_once_with("openai", "rate limited")

    @pytest.mark.asyncio
    async def test_empty_content_counts_as_failure(self):
        openai = mock_provider("openai")
        openai.generate_text = AsyncMock(return_value=llm_response("   "))
        gemini = mock_provider("gemini", content={"score": 2})
        gateway = LLMGateway({"openai": openai, "gemini": gemini}, order=["openai", "gemini"])

        response = await gateway.generate_text(MESSAGES)
        assert response.provider == "gemini"

    @pytest.mark.asyncio
    async def test_listed_but_unconfigured_provider(self):
        gemini = mock_provider("gemini", content={"score": 2})
        gateway = LLMGateway({"gemini": gemini}, order=["openai", "gemini"])

        response = await gateway.generate_text(MESSAGES)

        assert response.provider == "gemini"
        assert gateway.provider_names == ["gemini"]

    @pytest.mark.asyncio
    async def test_all_providers_fail(self):
        openai = mock_provider("openai", error=RuntimeError("timeout"))
        gateway = LLMGateway({"openai": openai}, order=["openai", "gemini"])

        with pytest.raises(AllProvidersFailedError) as exc_info:
            await gateway.generate_text(MESSAGES)

        assert exc_info.value.failures == [
            "openai failed: timeout",
            "gemini failed: Provider 'gemini' is not configured",
        ]
        assert "openai failed: timeout" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_no_providers(self):
        gateway = LLMGateway({})
        with pytest.raises(AllProvidersFailedError, match="No LLM providers configured"):
            await gateway.generate_text(MESSAGES)

    @pytest.mark.asyncio
    async def test_vision_uses_same_fallback(self, sample_image_base64):
        openai = mock_provider("openai", error=RuntimeError("no vision"))
        gemini = mock_provider("gemini", content={"score": 3})
        gateway = LLMGateway({"openai": openai, "gemini": gemini})
        message = VisionMessage(text="Rate", image=VisionInput(data=sample_image_base64, mime_type="image/png"))

        response = await gateway.generate_with_vision(message, LLMRequestOptions(json_mode=True))

        assert response.provider == "gemini"
        gemini.generate_with_vision.assert_awaited_once()


class TestHealthAndLifecycle:

    @pytest.mark.asyncio
    async def test_health_check_never_raises(self):
        openai = mock_provider("openai")
        openai.health_check = AsyncMock(side_effect=RuntimeError("401"))
        gemini = mock_provider("gemini", healthy=True)
        gateway = LLMGateway({"openai": openai, "gemini": gemini}, order=["openai", "gemini", "claude"])

        health = await gateway.health_check()

        assert health == {"openai": False, "gemini": True, "claude": False}

    @pytest.mark.asyncio
    async def test_close_closes_every_provider(self):
        openai = mock_provider("openai")
        gemini = mock_provider("gemini")
        gemini.close = AsyncMock(side_effect=RuntimeError("already closed"))
        gateway = LLMGateway({"openai": openai, "gemini": gemini})

        await gateway.close()

        openai.close.assert_awaited_once()
        gemini.close.assert_awaited_once()

    def test_from_config_without_keys(self):
        config = EvaluationConfig(providers=ProviderConfig(provider_order=["openai", "gemini"]))
        gateway = LLMGateway.from_config(config)
        assert gateway.order == ["openai", "gemini"]
        assert gateway.provider_names == []
