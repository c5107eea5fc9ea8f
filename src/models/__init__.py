"""Data models and schemas."""
from .schemas import (
    EvaluationRequestBody,
    AgentResultResponse,
    VisionResponse,
    StrategiesResponse,
    HealthResponse,
    ErrorResponse,
    ErrorDetail,
)

__all__ = [
    "EvaluationRequestBody",
    "AgentResultResponse",
    "VisionResponse",
    "StrategiesResponse",
    "HealthResponse",
    "ErrorResponse",
    "ErrorDetail",
]
