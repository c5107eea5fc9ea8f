"""
Evaluation record models.

An EvaluationRecord is created fresh per run and handed to the persistence
collaborator, which stores it keyed by the originating prompt id.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from brand_agents.core.agent import AgentResult
from brand_agents.models.enums import EvaluationStatus, RunState
from brand_agents.utils import score_label

CORE_AGENT_SLOTS = ("size_compliance", "subject_adherence", "creativity", "mood_consistency")


@dataclass(frozen=True)
class AgentResults:
    """One result per configured agent, in fixed named slots."""
    size_compliance: AgentResult
    subject_adherence: AgentResult
    creativity: AgentResult
    mood_consistency: AgentResult
    brand_alignment: Optional[AgentResult] = None

    def core(self) -> Dict[str, AgentResult]:
        """The four core slots by name."""
        return {slot: getattr(self, slot) for slot in CORE_AGENT_SLOTS}

    def items(self) -> List[Tuple[str, AgentResult]]:
        """All populated slots, brand alignment first when present."""
        pairs = []
        if self.brand_alignment is not None:
            pairs.append(("brand_alignment", self.brand_alignment))
        pairs.extend(self.core().items())
        return pairs

    def to_dict(self) -> Dict[str, Any]:
        return {slot: result.to_dict() for slot, result in self.items()}


@dataclass(frozen=True)
class CoordinationSummary:
    """Holistic judgment produced by the coordination pass."""
    reasoning: str
    brand_value: str = ""
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reasoning": self.reasoning,
            "brand_value": self.brand_value,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class EvaluationRecord:
    """
    Output of one orchestration run.

    ``status`` is completed even when ``error`` carries a non-fatal note
    (partial degradation); a failed run always has ``final_score`` 0.
    """
    agents: AgentResults
    final_score: int
    aggregation_formula: str
    total_execution_time_ms: int
    status: EvaluationStatus = EvaluationStatus.COMPLETED
    error: Optional[str] = None
    strategy: str = ""
    prompt_id: Optional[str] = None
    coordination: Optional[CoordinationSummary] = None
    run_states: Tuple[RunState, ...] = ()
    evaluated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def succeeded(self) -> bool:
        return self.status is EvaluationStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the document shape stored by the persistence layer."""
        return {
            "promptId": self.prompt_id,
            "strategy": self.strategy,
            "agents": self.agents.to_dict(),
            "finalScore": self.final_score,
            "scoreLabel": score_label(self.final_score),
            "aggregationFormula": self.aggregation_formula,
            "totalExecutionTimeMs": self.total_execution_time_ms,
            "status": self.status.value,
            "error": self.error,
            "coordination": self.coordination.to_dict() if self.coordination else None,
            "runStates": [state.value for state in self.run_states],
            "evaluatedAt": self.evaluated_at.isoformat(),
        }
