"""
Fixed-weight strategy.

Runs the four heuristic agents concurrently and combines their scores with
a fixed weight table. Agents that did not succeed are dropped and the
remaining weights renormalized.
"""

from typing import Dict, Mapping, Optional
import logging

from brand_agents.core.agent import AgentResult
from brand_agents.core.exceptions import error_message
from brand_agents.core.scoring import clamp_score
from brand_agents.models.enums import EvaluationStatus, RunState
from brand_agents.models.evaluation import EvaluationRecord
from brand_agents.models.request import EvaluationRequest
from brand_agents.orchestration.base import (
    CoreAgents,
    RunTracker,
    failed_agent_results,
    format_formula,
    run_core_agents,
)

logger = logging.getLogger(__name__)


def aggregate_fixed_weight(
    results: Mapping[str, AgentResult],
    weights: Mapping[str, float],
) -> Optional[int]:
    """
    Weighted average over successful agents.

    Returns:
        The renormalized score, or None when no agent succeeded.
    """
    successful = {slot: result for slot, result in results.items() if result.succeeded}
    if not successful:
        return None

    total_weight = sum(weights.get(slot, 0.0) for slot in successful)
    if total_weight <= 0:
        return 0
    weighted_sum = sum(weights.get(slot, 0.0) * result.score for slot, result in successful.items())
    return clamp_score(weighted_sum / total_weight)


class FixedWeightStrategy:
    """Concurrent heuristic agents aggregated by a fixed weight table."""

    name = "fixed_weight"

    def __init__(
        self,
        agents: CoreAgents,
        weights: Dict[str, float],
        timeout_seconds: float = 30.0,
    ):
        """
        Initialize the strategy.

        Args:
            agents: Agents for the four core slots
            weights: Weight per core slot
            timeout_seconds: Per-agent deadline
        """
        self.agents = agents
        self.weights = dict(weights)
        self.timeout_seconds = timeout_seconds
        self.formula = format_formula(self.weights)

    async def evaluate(self, request: EvaluationRequest) -> EvaluationRecord:
        run = RunTracker(self.name, request.prompt_id)
        try:
            run.advance(RunState.RUNNING_CORE_AGENTS)
            agents = await run_core_agents(self.agents, request, self.timeout_seconds)

            run.advance(RunState.AGGREGATING)
            score = aggregate_fixed_weight(agents.core(), self.weights)

        except Exception as e:
            logger.error(f"[{self.name}] Evaluation failed: {e}", exc_info=True)
            run.advance(RunState.FAILED)
            return EvaluationRecord(
                agents=failed_agent_results("Agent execution failed"),
                final_score=0,
                aggregation_formula=self.formula,
                total_execution_time_ms=run.elapsed_ms,
                status=EvaluationStatus.FAILED,
                error=error_message(e),
                strategy=self.name,
                prompt_id=request.prompt_id,
                run_states=tuple(run.states),
            )

        if score is None:
            run.advance(RunState.FAILED)
            logger.warning(f"[{self.name}] All agents failed for prompt={request.prompt_id or '-'}")
            return EvaluationRecord(
                agents=agents,
                final_score=0,
                aggregation_formula=self.formula,
                total_execution_time_ms=run.elapsed_ms,
                status=EvaluationStatus.FAILED,
                error="All agents failed",
                strategy=self.name,
                prompt_id=request.prompt_id,
                run_states=tuple(run.states),
            )

        run.advance(RunState.COMPLETED)
        logger.info(f"[{self.name}] prompt={request.prompt_id or '-'} final_score={score}")
        return EvaluationRecord(
            agents=agents,
            final_score=score,
            aggregation_formula=self.formula,
            total_execution_time_ms=run.elapsed_ms,
            status=EvaluationStatus.COMPLETED,
            strategy=self.name,
            prompt_id=request.prompt_id,
            run_states=tuple(run.states),
        )
