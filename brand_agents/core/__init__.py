"""
Core engine pieces: agent contract, scoring arithmetic, configuration,
exceptions and the LLM gateway.
"""

from brand_agents.core.exceptions import (
    EvaluationError,
    AgentConfigError,
    AgentExecutionError,
    LLMClientError,
    ProviderNotConfiguredError,
    LLMResponseError,
    AllProvidersFailedError,
    CoordinationError,
)
from brand_agents.core.scoring import clamp_score, round_half_up, weighted_score
from brand_agents.core.llm_gateway import (
    LLMGateway,
    LLMMessage,
    LLMProvider,
    LLMRequestOptions,
    LLMResponse,
    TokenUsage,
    VisionMessage,
)
from brand_agents.core.config import (
    EvaluationConfig,
    ModelProfile,
    OrchestrationConfig,
    ProviderConfig,
    load_config,
)
from brand_agents.core.agent import (
    AgentResult,
    Evaluator,
    HeuristicAgent,
    LLMAgent,
    LLMScorerSpec,
    ScoreOutcome,
)

__all__ = [
    # Exceptions
    "EvaluationError",
    "AgentConfigError",
    "AgentExecutionError",
    "LLMClientError",
    "ProviderNotConfiguredError",
    "LLMResponseError",
    "AllProvidersFailedError",
    "CoordinationError",
    # Scoring
    "clamp_score",
    "round_half_up",
    "weighted_score",
    # Gateway
    "LLMGateway",
    "LLMMessage",
    "LLMProvider",
    "LLMRequestOptions",
    "LLMResponse",
    "TokenUsage",
    "VisionMessage",
    # Config
    "EvaluationConfig",
    "ModelProfile",
    "OrchestrationConfig",
    "ProviderConfig",
    "load_config",
    # Agents
    "AgentResult",
    "Evaluator",
    "HeuristicAgent",
    "LLMAgent",
    "LLMScorerSpec",
    "ScoreOutcome",
]
