"""
Structured exceptions for the evaluation engine.

This module defines a hierarchy of exceptions with error codes for
consistent error handling. None of these escape the orchestrators: agents
and strategies convert them into result objects at their boundary.
"""

from typing import Any, Dict, List, Optional


class EvaluationError(Exception):
    """
    Base exception for all evaluation-engine errors.

    All custom exceptions in the engine inherit from this class,
    providing consistent error code and detail handling.
    """

    error_code: str = "EVALUATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class AgentConfigError(EvaluationError):
    """
    Configuration-related errors.

    Raised when the evaluation config is missing required settings
    or holds invalid values (e.g. weights that sum to zero).
    """

    error_code = "CONFIG_ERROR"


class AgentExecutionError(EvaluationError):
    """Raised inside a scorer when it cannot produce a score."""

    error_code = "EXECUTION_ERROR"


class LLMClientError(EvaluationError):
    """
    LLM provider errors.

    Base class for errors related to language-model calls.
    """

    error_code = "LLM_ERROR"


class ProviderNotConfiguredError(LLMClientError):
    """Raised when a provider is listed but has no client (missing key or unknown name)."""

    error_code = "PROVIDER_NOT_CONFIGURED"


class LLMResponseError(LLMClientError):
    """Raised when a provider returns empty content or content that breaks the JSON contract."""

    error_code = "LLM_RESPONSE_ERROR"


class AllProvidersFailedError(LLMClientError):
    """
    Every configured provider failed for one call.

    The message embeds each provider's failure so that the agent's
    error result explains what was tried.
    """

    error_code = "ALL_PROVIDERS_FAILED"

    def __init__(
        self,
        message: str,
        failures: Optional[List[str]] = None,
        **kwargs,
    ):
        """
        Initialize the aggregate error.

        Args:
            message: Error message prefix
            failures: One "<provider> failed: <reason>" entry per provider
            **kwargs: Additional arguments for parent class
        """
        self.failures = failures or []
        full_message = f"{message}: {'; '.join(self.failures)}" if self.failures else message
        super().__init__(full_message, **kwargs)
        self.details["failures"] = self.failures


class CoordinationError(EvaluationError):
    """Raised when the coordination pass cannot produce a final judgment."""

    error_code = "COORDINATION_ERROR"


def error_message(exc: BaseException) -> str:
    """Plain message for storing on results and records, without the error code prefix."""
    if isinstance(exc, EvaluationError):
        return exc.message
    return str(exc) or type(exc).__name__
