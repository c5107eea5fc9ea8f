"""
Agent contract and the two scorer variants.

Every scorer satisfies the Evaluator protocol: an async ``evaluate``
that takes an EvaluationRequest and always returns an AgentResult.
Scorers come in two variants:

- HeuristicAgent: wraps a pure scoring function over the request.
- LLMAgent: builds a prompt, calls the LLM gateway, interprets the JSON reply.

Both convert any internal failure into an error result at their boundary,
so orchestrators never see exceptions from an agent.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Optional, Protocol, TYPE_CHECKING, runtime_checkable
import logging
import time

from brand_agents.core.exceptions import AgentExecutionError, error_message
from brand_agents.core.llm_gateway import (
    LLMGateway,
    LLMMessage,
    LLMRequestOptions,
    VisionMessage,
)
from brand_agents.core.scoring import clamp_score
from brand_agents.models.enums import AgentKind, AgentStatus

if TYPE_CHECKING:
    from brand_agents.models.request import EvaluationRequest

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return max(0, int((time.perf_counter() - start) * 1000))


@dataclass(frozen=True)
class AgentResult:
    """
    Standard result from one agent invocation.

    Use the ``success``, ``failure`` and ``timed_out`` constructors; they
    keep the score in range, the reasoning non-empty and ``error`` set
    exactly when the status is not success.
    """
    score: int
    reasoning: str
    execution_time_ms: int = 0
    status: AgentStatus = AgentStatus.SUCCESS
    error: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    agent_name: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is AgentStatus.SUCCESS

    @classmethod
    def success(
        cls,
        score: float,
        reasoning: str,
        execution_time_ms: int = 0,
        details: Optional[Dict[str, Any]] = None,
        agent_name: str = "",
    ) -> "AgentResult":
        """Successful result; score is rounded and clamped to 0-100."""
        return cls(
            score=clamp_score(score),
            reasoning=reasoning.strip() or f"{agent_name or 'Agent'} completed without commentary.",
            execution_time_ms=max(0, int(execution_time_ms)),
            status=AgentStatus.SUCCESS,
            details=details,
            agent_name=agent_name,
        )

    @classmethod
    def failure(
        cls,
        error: str,
        reasoning: Optional[str] = None,
        execution_time_ms: int = 0,
        details: Optional[Dict[str, Any]] = None,
        agent_name: str = "",
    ) -> "AgentResult":
        """Error result with score 0."""
        error = error or "Unknown error"
        return cls(
            score=0,
            reasoning=reasoning or f"Agent failed: {error}",
            execution_time_ms=max(0, int(execution_time_ms)),
            status=AgentStatus.ERROR,
            error=error,
            details=details,
            agent_name=agent_name,
        )

    @classmethod
    def timed_out(cls, timeout_ms: int, agent_name: str = "") -> "AgentResult":
        """Result substituted when an agent misses its deadline."""
        label = agent_name or "Agent"
        message = f"{label} timeout after {timeout_ms}ms"
        return cls(
            score=0,
            reasoning=f"Agent failed: {message}",
            execution_time_ms=max(0, int(timeout_ms)),
            status=AgentStatus.TIMEOUT,
            error=message,
            agent_name=agent_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "agent_name": self.agent_name,
            "score": self.score,
            "reasoning": self.reasoning,
            "execution_time_ms": self.execution_time_ms,
            "status": self.status.value,
            "error": self.error,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AgentResult":
        """Create from dictionary."""
        return cls(
            score=data.get("score", 0),
            reasoning=data.get("reasoning", ""),
            execution_time_ms=data.get("execution_time_ms", 0),
            status=AgentStatus(data.get("status", "success")),
            error=data.get("error"),
            details=data.get("details"),
            agent_name=data.get("agent_name", ""),
        )


@dataclass(frozen=True)
class ScoreOutcome:
    """What a scoring function produces before timing and status are attached."""
    score: float
    reasoning: str
    details: Dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class Evaluator(Protocol):
    """Capability shared by every scorer."""
    name: str

    async def evaluate(self, request: "EvaluationRequest") -> AgentResult:
        ...


@dataclass(frozen=True)
class HeuristicAgent:
    """
    Scorer backed by a pure function of the request.

    The function runs inline; heuristic agents never suspend.
    """
    name: str
    label: str
    scorer: Callable[["EvaluationRequest"], ScoreOutcome]

    kind: ClassVar[AgentKind] = AgentKind.HEURISTIC

    async def evaluate(self, request: "EvaluationRequest") -> AgentResult:
        start = time.perf_counter()
        try:
            outcome = self.scorer(request)
        except Exception as e:
            logger.error(f"[{self.name}] Scoring failed: {e}", exc_info=True)
            return AgentResult.failure(
                error=error_message(e),
                reasoning=f"Error evaluating {self.label}: {error_message(e)}",
                execution_time_ms=_elapsed_ms(start),
                agent_name=self.name,
            )

        result = AgentResult.success(
            score=outcome.score,
            reasoning=outcome.reasoning,
            execution_time_ms=_elapsed_ms(start),
            details=outcome.details,
            agent_name=self.name,
        )
        logger.debug(f"[{self.name}] score={result.score}")
        return result


@dataclass(frozen=True)
class LLMScorerSpec:
    """
    How an LLM-backed scorer talks to the model.

    Attributes:
        system_prompt: System instructions for text calls
        build_prompt: Renders the user prompt from the request
        interpret: Validates the raw reply and turns it into a ScoreOutcome;
            raises on any contract violation
        uses_vision: Send the request's image payload with the prompt
    """
    system_prompt: str
    build_prompt: Callable[["EvaluationRequest"], str]
    interpret: Callable[[str], ScoreOutcome]
    uses_vision: bool = False


@dataclass(frozen=True)
class LLMAgent:
    """Scorer that delegates judgment to a language model through the gateway."""
    name: str
    label: str
    gateway: LLMGateway
    spec: LLMScorerSpec
    options: LLMRequestOptions = field(default_factory=lambda: LLMRequestOptions(json_mode=True))

    kind: ClassVar[AgentKind] = AgentKind.LLM

    async def evaluate(self, request: "EvaluationRequest") -> AgentResult:
        start = time.perf_counter()
        try:
            prompt = self.spec.build_prompt(request)
            if self.spec.uses_vision:
                if request.image is None:
                    raise AgentExecutionError("No image payload supplied for vision evaluation")
                response = await self.gateway.generate_with_vision(
                    VisionMessage(text=prompt, image=request.image),
                    self.options,
                )
            else:
                response = await self.gateway.generate_text(
                    [
                        LLMMessage(role="system", content=self.spec.system_prompt),
                        LLMMessage(role="user", content=prompt),
                    ],
                    self.options,
                )
            outcome = self.spec.interpret(response.content)

        except Exception as e:
            message = error_message(e)
            logger.warning(f"[{self.name}] Evaluation failed: {message}")
            return AgentResult.failure(
                error=message,
                reasoning=f"Error evaluating {self.label}: {message}",
                execution_time_ms=_elapsed_ms(start),
                agent_name=self.name,
            )

        details = dict(outcome.details)
        details["llm_response"] = response.to_dict(include_content=False)
        logger.info(f"[{self.name}] score={outcome.score} via {response.provider}/{response.model}")
        return AgentResult.success(
            score=outcome.score,
            reasoning=outcome.reasoning,
            execution_time_ms=_elapsed_ms(start),
            details=details,
            agent_name=self.name,
        )
