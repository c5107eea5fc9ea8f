"""
LLM provider connectors.
"""
from typing import Dict
import logging

from brand_agents.connectors.gemini_provider import GeminiProvider
from brand_agents.connectors.openai_provider import OpenAIProvider
from brand_agents.core.config import ProviderConfig
from brand_agents.core.llm_gateway import LLMProvider

logger = logging.getLogger(__name__)


def build_providers(config: ProviderConfig) -> Dict[str, LLMProvider]:
    """
    Build a client for every listed provider that has credentials.

    Listed providers that are unknown or lack a key are left out; the
    gateway reports them as not configured when it reaches them.
    """
    providers: Dict[str, LLMProvider] = {}
    for name in config.provider_order:
        if name == "openai":
            if config.openai_api_key:
                providers[name] = OpenAIProvider(
                    api_key=config.openai_api_key,
                    organization=config.openai_org_id,
                    timeout=config.request_timeout_seconds,
                )
            else:
                logger.warning("[llm_gateway] openai listed but OPENAI_API_KEY is not set")
        elif name == "gemini":
            if config.gemini_api_key:
                providers[name] = GeminiProvider(api_key=config.gemini_api_key)
            else:
                logger.warning("[llm_gateway] gemini listed but GEMINI_API_KEY is not set")
        else:
            logger.warning(f"[llm_gateway] Unknown provider '{name}' in LLM_PROVIDERS")
    return providers


__all__ = ["GeminiProvider", "OpenAIProvider", "build_providers"]
