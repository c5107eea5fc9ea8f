"""
Shared enums for evaluation requests, agent results and runs.
"""

from enum import Enum
from typing import Any, Optional


class Channel(Enum):
    """Publishing channels with known asset dimensions."""
    INSTAGRAM = "Instagram"
    TIKTOK = "TikTok"
    LINKEDIN = "LinkedIn"
    FACEBOOK = "Facebook"

    @classmethod
    def parse(cls, value: Any) -> Optional["Channel"]:
        """Match a channel name case-insensitively, None if unknown."""
        if not value:
            return None
        for channel in cls:
            if channel.value.lower() == str(value).strip().lower():
                return channel
        return None


class MediaType(Enum):
    """Kind of generated asset."""
    IMAGE = "image"
    VIDEO = "video"


class AgentStatus(Enum):
    """Outcome of one agent invocation."""
    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"


class AgentKind(Enum):
    """Variant tag for the scorer family."""
    HEURISTIC = "heuristic"
    LLM = "llm"


class EvaluationStatus(Enum):
    """Terminal status of an evaluation run."""
    COMPLETED = "completed"
    FAILED = "failed"


class RunState(Enum):
    """Lifecycle of one evaluation run."""
    PENDING = "pending"
    RUNNING_BRAND_CONTEXT = "running_brand_context"  # brand-first only
    RUNNING_CORE_AGENTS = "running_core_agents"
    AGGREGATING = "aggregating"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.COMPLETED, RunState.FAILED)
