"""
Data models for evaluation requests and records.
"""

from brand_agents.models.enums import (
    AgentKind,
    AgentStatus,
    Channel,
    EvaluationStatus,
    MediaType,
    RunState,
)
from brand_agents.models.request import (
    BrandContext,
    BrandProfile,
    EvaluationRequest,
    MediaMetadata,
    VisionInput,
)
from brand_agents.models.evaluation import (
    CORE_AGENT_SLOTS,
    AgentResults,
    CoordinationSummary,
    EvaluationRecord,
)

__all__ = [
    "AgentKind",
    "AgentStatus",
    "Channel",
    "EvaluationStatus",
    "MediaType",
    "RunState",
    "BrandContext",
    "BrandProfile",
    "EvaluationRequest",
    "MediaMetadata",
    "VisionInput",
    "CORE_AGENT_SLOTS",
    "AgentResults",
    "CoordinationSummary",
    "EvaluationRecord",
]
