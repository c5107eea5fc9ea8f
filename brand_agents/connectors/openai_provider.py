"""
OpenAI chat-completions connector.
"""
from typing import Any, Dict, List, Optional
import logging
import time

from openai import AsyncOpenAI
import httpx

from brand_agents.core.exceptions import LLMResponseError
from brand_agents.core.llm_gateway import (
    LLMMessage,
    LLMRequestOptions,
    LLMResponse,
    TokenUsage,
    VisionMessage,
)

logger = logging.getLogger(__name__)

DEFAULT_TEXT_MODEL = "gpt-4o-mini"
DEFAULT_VISION_MODEL = "gpt-4o"


class OpenAIProvider:
    """
    OpenAI connector for the LLM gateway.

    The SDK's own retries are disabled; the gateway falls back to the next
    provider instead.
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        organization: Optional[str] = None,
        timeout: float = 60.0,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        """
        Initialize the connector.

        Args:
            api_key: OpenAI API key
            organization: Optional organization id
            timeout: Request timeout in seconds
            client: Pre-built client (tests)
        """
        if client is None:
            http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout, connect=10.0),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )
            client = AsyncOpenAI(
                api_key=api_key,
                organization=organization or None,
                http_client=http_client,
                max_retries=0,
            )
        self.client = client

    async def generate_text(self, messages: List[LLMMessage], options: LLMRequestOptions) -> LLMResponse:
        """Chat completion over plain text messages."""
        model = options.model_for(self.name, DEFAULT_TEXT_MODEL)
        return await self._complete(model, [message.to_dict() for message in messages], options)

    async def generate_with_vision(self, message: VisionMessage, options: LLMRequestOptions) -> LLMResponse:
        """Chat completion with the image inlined as a data URL."""
        model = options.model_for(self.name, DEFAULT_VISION_MODEL)
        payload = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": message.text},
                    {"type": "image_url", "image_url": {"url": message.image.data_url}},
                ],
            }
        ]
        return await self._complete(model, payload, options)

    async def _complete(
        self,
        model: str,
        messages: List[Dict[str, Any]],
        options: LLMRequestOptions,
    ) -> LLMResponse:
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
        }
        if options.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        start = time.perf_counter()
        response = await self.client.chat.completions.create(**kwargs)
        latency_ms = int((time.perf_counter() - start) * 1000)

        if not response.choices:
            raise LLMResponseError("No choices returned from OpenAI")
        choice = response.choices[0]
        content = choice.message.content
        if not content:
            if getattr(choice, "finish_reason", None) == "content_filter":
                raise LLMResponseError("Content blocked by OpenAI content filters")
            raise LLMResponseError("Empty response from OpenAI")

        usage = None
        if getattr(response, "usage", None) is not None:
            usage = TokenUsage(
                prompt_tokens=getattr(response.usage, "prompt_tokens", None),
                completion_tokens=getattr(response.usage, "completion_tokens", None),
                total_tokens=getattr(response.usage, "total_tokens", None),
            )

        logger.debug(f"[openai] {model} completed in {latency_ms}ms")
        return LLMResponse(
            content=content,
            provider=self.name,
            model=getattr(response, "model", None) or model,
            usage=usage,
            latency_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        """Check the API key by listing models."""
        await self.client.models.list()
        return True

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
