"""
Google Gemini connector (google-genai SDK).
"""
from typing import List, Optional
import logging
import time

from google import genai
from google.genai import types

from brand_agents.core.exceptions import LLMResponseError
from brand_agents.core.llm_gateway import (
    LLMMessage,
    LLMRequestOptions,
    LLMResponse,
    TokenUsage,
    VisionMessage,
)

logger = logging.getLogger(__name__)

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_VISION_MODEL = "gemini-2.5-pro"


class GeminiProvider:
    """Gemini connector for the LLM gateway, using the SDK's async client."""

    name = "gemini"

    def __init__(self, api_key: str, client: Optional[genai.Client] = None) -> None:
        """
        Initialize the connector.

        Args:
            api_key: Gemini API key
            client: Pre-built client (tests)
        """
        self.client = client or genai.Client(api_key=api_key)

    def _config(
        self,
        options: LLMRequestOptions,
        system_instruction: Optional[str] = None,
    ) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system_instruction or None,
            temperature=options.temperature,
            max_output_tokens=options.max_tokens,
            response_mime_type="application/json" if options.json_mode else None,
        )

    async def generate_text(self, messages: List[LLMMessage], options: LLMRequestOptions) -> LLMResponse:
        """Generate from chat messages; system messages become the system instruction."""
        model = options.model_for(self.name, DEFAULT_TEXT_MODEL)
        system_instruction = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part.from_text(text=m.content)],
            )
            for m in messages
            if m.role != "system"
        ]
        return await self._generate(model, contents, self._config(options, system_instruction))

    async def generate_with_vision(self, message: VisionMessage, options: LLMRequestOptions) -> LLMResponse:
        """Generate from prompt text plus inline image bytes."""
        model = options.model_for(self.name, DEFAULT_VISION_MODEL)
        image_part = types.Part.from_bytes(
            data=message.image.raw_bytes,
            mime_type=message.image.mime_type,
        )
        return await self._generate(model, [message.text, image_part], self._config(options))

    async def _generate(self, model: str, contents, config: types.GenerateContentConfig) -> LLMResponse:
        start = time.perf_counter()
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
        latency_ms = int((time.perf_counter() - start) * 1000)

        text = (response.text or "").strip()
        if not text:
            raise LLMResponseError("Empty response from Gemini")

        usage = None
        metadata = getattr(response, "usage_metadata", None)
        if metadata is not None:
            usage = TokenUsage(
                prompt_tokens=metadata.prompt_token_count,
                completion_tokens=metadata.candidates_token_count,
                total_tokens=metadata.total_token_count,
            )

        logger.debug(f"[gemini] {model} completed in {latency_ms}ms")
        return LLMResponse(
            content=text,
            provider=self.name,
            model=model,
            usage=usage,
            latency_ms=latency_ms,
        )

    async def health_check(self) -> bool:
        """Check the API key by fetching the default model's metadata."""
        await self.client.aio.models.get(model=DEFAULT_TEXT_MODEL)
        return True

    async def close(self) -> None:
        """Close the provider."""
        return None
