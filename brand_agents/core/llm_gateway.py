"""
Multi-provider LLM gateway.

The gateway holds one client per configured provider, built once at
startup, and tries them in configured order for every call. Provider
switching is the only retry mechanism in the engine.
"""

from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    TYPE_CHECKING,
)
import logging
import time

from brand_agents.core.exceptions import (
    AllProvidersFailedError,
    LLMResponseError,
    ProviderNotConfiguredError,
    error_message,
)

if TYPE_CHECKING:
    from brand_agents.core.config import EvaluationConfig
    from brand_agents.models.request import VisionInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMMessage:
    """One chat message in OpenAI role/content form."""
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class VisionMessage:
    """Prompt text plus one inline image."""
    text: str
    image: "VisionInput"


@dataclass(frozen=True)
class TokenUsage:
    """Provider-reported token counts; any of them may be unknown."""
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class LLMRequestOptions:
    """
    Per-call generation options.

    ``models`` maps provider name to model id, so a fallback provider
    never receives another vendor's model name.
    """
    models: Dict[str, str] = field(default_factory=dict)
    temperature: float = 0.3
    max_tokens: int = 1000
    json_mode: bool = False

    def model_for(self, provider: str, default: str) -> str:
        """Model configured for a provider, or the provider's default."""
        return self.models.get(provider) or default


@dataclass
class LLMResponse:
    """Normalized response from any provider."""
    content: str
    provider: str
    model: str
    usage: Optional[TokenUsage] = None
    latency_ms: int = 0

    def to_dict(self, include_content: bool = True) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "usage": self.usage.to_dict() if self.usage else None,
            "latency_ms": self.latency_ms,
        }
        if include_content:
            data["content"] = self.content
        return data


class LLMProvider(Protocol):
    """What the gateway needs from a provider connector."""
    name: str

    async def generate_text(self, messages: List[LLMMessage], options: LLMRequestOptions) -> LLMResponse:
        ...

    async def generate_with_vision(self, message: VisionMessage, options: LLMRequestOptions) -> LLMResponse:
        ...

    async def health_check(self) -> bool:
        ...

    async def close(self) -> None:
        ...


FailureListener = Callable[[str, str], None]


class LLMGateway:
    """
    Ordered-fallback access to every configured LLM provider.

    Providers listed in ``order`` but missing from ``providers`` count as
    failures ("not configured") rather than being skipped silently.
    """

    def __init__(
        self,
        providers: Mapping[str, LLMProvider],
        order: Optional[Sequence[str]] = None,
        failure_listener: Optional[FailureListener] = None,
    ):
        """
        Initialize the gateway.

        Args:
            providers: Provider connectors by name
            order: Provider names in the order to try; defaults to mapping order
            failure_listener: Called with (provider, message) on each provider failure
        """
        self._providers: Dict[str, LLMProvider] = dict(providers)
        self.order: List[str] = list(order) if order is not None else list(self._providers)
        self.failure_listener = failure_listener

    @classmethod
    def from_config(
        cls,
        config: "EvaluationConfig",
        failure_listener: Optional[FailureListener] = None,
    ) -> "LLMGateway":
        """Build provider clients once from the evaluation config."""
        from brand_agents.connectors import build_providers

        providers = build_providers(config.providers)
        logger.info(
            f"[llm_gateway] Initialized providers {sorted(providers)} "
            f"(order: {', '.join(config.providers.provider_order) or 'none'})"
        )
        return cls(providers, order=config.providers.provider_order, failure_listener=failure_listener)

    @property
    def provider_names(self) -> List[str]:
        """Names of providers that actually have a client."""
        return [name for name in self.order if name in self._providers]

    async def generate_text(
        self,
        messages: List[LLMMessage],
        options: Optional[LLMRequestOptions] = None,
    ) -> LLMResponse:
        """
        Generate a text completion, falling back across providers.

        Raises:
            AllProvidersFailedError: If every provider failed
        """
        options = options or LLMRequestOptions()
        return await self._dispatch("text", lambda provider: provider.generate_text(messages, options))

    async def generate_with_vision(
        self,
        message: VisionMessage,
        options: Optional[LLMRequestOptions] = None,
    ) -> LLMResponse:
        """
        Generate a completion over text plus an image, falling back across providers.

        Raises:
            AllProvidersFailedError: If every provider failed
        """
        options = options or LLMRequestOptions()
        return await self._dispatch("vision", lambda provider: provider.generate_with_vision(message, options))

    async def _dispatch(
        self,
        operation: str,
        call: Callable[[LLMProvider], Awaitable[LLMResponse]],
    ) -> LLMResponse:
        if not self.order:
            raise AllProvidersFailedError("No LLM providers configured")

        failures: List[str] = []
        for name in self.order:
            start = time.perf_counter()
            try:
                provider = self._providers.get(name)
                if provider is None:
                    raise ProviderNotConfiguredError(f"Provider '{name}' is not configured")
                response = await call(provider)
                if not response.content or not response.content.strip():
                    raise LLMResponseError(f"Empty response from {name}")
                if not response.latency_ms:
                    response.latency_ms = int((time.perf_counter() - start) * 1000)
                return response

            except Exception as e:
                message = error_message(e)
                logger.warning(f"[llm_gateway] {operation} call via {name} failed: {message}")
                failures.append(f"{name} failed: {message}")
                if self.failure_listener is not None:
                    self.failure_listener(name, message)

        raise AllProvidersFailedError("All LLM providers failed", failures=failures)

    async def health_check(self) -> Dict[str, bool]:
        """Probe every listed provider independently. Never raises."""
        results: Dict[str, bool] = {}
        for name in self.order:
            provider = self._providers.get(name)
            if provider is None:
                results[name] = False
                continue
            try:
                results[name] = bool(await provider.health_check())
            except Exception as e:
                logger.warning(f"[llm_gateway] Health check for {name} failed: {e}")
                results[name] = False
        return results

    async def close(self) -> None:
        """Close every provider client."""
        for name, provider in self._providers.items():
            try:
                await provider.close()
            except Exception as e:
                logger.warning(f"[llm_gateway] Error closing {name}: {e}")
