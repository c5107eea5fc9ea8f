"""Tests for provider construction from configuration."""

from unittest.mock import patch

from brand_agents.connectors import OpenAIProvider, build_providers
from brand_agents.core.config import ProviderConfig


class TestBuildProviders:

    def test_no_keys_no_providers(self):
        assert build_providers(ProviderConfig()) == {}

    def test_keyed_providers_only(self):
        providers = build_providers(ProviderConfig(openai_api_key="sk-test"))
        assert list(providers) == ["openai"]
        assert isinstance(providers["openai"], OpenAIProvider)

    def test_order_and_unknown_names(self):
        config = ProviderConfig(
            provider_order=["gemini", "anthropic", "openai"],
            openai_api_key="sk-test",
            gemini_api_key="gm-test",
        )
        with patch("brand_agents.connectors.GeminiProvider") as gemini_cls:
            providers = build_providers(config)

        assert list(providers) == ["gemini", "openai"]
        gemini_cls.assert_called_once_with(api_key="gm-test")
