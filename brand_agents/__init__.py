"""
Brand Agents - multi-agent evaluation engine for AI-generated brand assets.

Heuristic and LLM-backed scorers run concurrently over one evaluation
request; their results are aggregated into a final 0-100 score by a
fixed-weight or a brand-first strategy.
"""

# Models first: models.evaluation pulls in core.agent
from brand_agents import models
from brand_agents.models import (
    AgentStatus,
    BrandProfile,
    EvaluationRecord,
    EvaluationRequest,
    EvaluationStatus,
    MediaMetadata,
    VisionInput,
)
from brand_agents.core.agent import AgentResult, Evaluator, HeuristicAgent, LLMAgent
from brand_agents.core.config import EvaluationConfig, load_config
from brand_agents.core.exceptions import (
    EvaluationError,
    AgentConfigError,
    AgentExecutionError,
    LLMClientError,
    AllProvidersFailedError,
)
from brand_agents.core.llm_gateway import LLMGateway
from brand_agents.orchestration import EvaluationOrchestrator

__version__ = "0.1.0"

__all__ = [
    # Models
    "models",
    "AgentStatus",
    "BrandProfile",
    "EvaluationRecord",
    "EvaluationRequest",
    "EvaluationStatus",
    "MediaMetadata",
    "VisionInput",
    # Agents
    "AgentResult",
    "Evaluator",
    "HeuristicAgent",
    "LLMAgent",
    # Config
    "EvaluationConfig",
    "load_config",
    # Exceptions
    "EvaluationError",
    "AgentConfigError",
    "AgentExecutionError",
    "LLMClientError",
    "AllProvidersFailedError",
    # Engine
    "LLMGateway",
    "EvaluationOrchestrator",
]
