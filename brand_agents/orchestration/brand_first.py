"""
Brand-first strategy.

1. Brand alignment runs alone; its verdict becomes brand context.
2. The four core agents run concurrently with that context.
3. A coordination LLM call produces the final score.

If any step raises, the core agents are re-run from scratch without brand
context and scored with the fixed fallback formula. The run still
completes, with the original error attached.
"""

from typing import Dict, Optional
import asyncio
import logging

from brand_agents.agents.brand_alignment import brand_context_from
from brand_agents.core.agent import AgentResult, Evaluator
from brand_agents.core.exceptions import error_message
from brand_agents.core.scoring import clamp_score
from brand_agents.models.enums import EvaluationStatus, RunState
from brand_agents.models.evaluation import AgentResults, EvaluationRecord
from brand_agents.models.request import EvaluationRequest
from brand_agents.orchestration.base import (
    CoreAgents,
    RunTracker,
    failed_agent_results,
    format_formula,
    run_core_agents,
    run_with_deadline,
)
from brand_agents.orchestration.coordinator import Coordinator

logger = logging.getLogger(__name__)

BRAND_FIRST_FORMULA = "Brand-first multi-agent evaluation with 4 core agents"
FALLBACK_FORMULA = "Fallback evaluation due to multi-agent failure"

FALLBACK_SHORT_NAMES = {
    "size_compliance": "size",
    "subject_adherence": "content",
    "creativity": "creativity",
    "mood_consistency": "mood",
}


def fallback_score(agents: AgentResults, weights: Dict[str, float]) -> int:
    """Raw weighted sum of the core scores; failed agents count with score 0."""
    return clamp_score(sum(weights[slot] * result.score for slot, result in agents.core().items()))


class BrandFirstStrategy:
    """Brand alignment first, then core agents with brand context, then coordination."""

    name = "brand_first"

    def __init__(
        self,
        brand_agent: Evaluator,
        agents: CoreAgents,
        coordinator: Coordinator,
        fallback_weights: Dict[str, float],
        timeout_seconds: float = 30.0,
    ):
        """
        Initialize the strategy.

        Args:
            brand_agent: Brand alignment agent, run first
            agents: Agents for the four core slots (subject slot is content quality)
            coordinator: Coordination pass producing the final score
            fallback_weights: Weights of the fallback formula per core slot
            timeout_seconds: Deadline per agent and for the coordination call
        """
        self.brand_agent = brand_agent
        self.agents = agents
        self.coordinator = coordinator
        self.fallback_weights = dict(fallback_weights)
        self.timeout_seconds = timeout_seconds
        self.fallback_formula = (
            f"{FALLBACK_FORMULA} ({format_formula(self.fallback_weights, FALLBACK_SHORT_NAMES)})"
        )

    async def evaluate(self, request: EvaluationRequest) -> EvaluationRecord:
        run = RunTracker(self.name, request.prompt_id)
        brand_result: Optional[AgentResult] = None
        try:
            run.advance(RunState.RUNNING_BRAND_CONTEXT)
            brand_result = await run_with_deadline(self.brand_agent, request, self.timeout_seconds)

            enriched = request
            if brand_result.succeeded:
                enriched = request.with_brand_context(
                    brand_context_from(brand_result.score, brand_result.reasoning, brand_result.details)
                )
            else:
                logger.warning(
                    f"[{self.name}] Brand alignment failed ({brand_result.error}); "
                    "running core agents without brand context"
                )

            run.advance(RunState.RUNNING_CORE_AGENTS)
            core = await run_core_agents(self.agents, enriched, self.timeout_seconds)

            run.advance(RunState.AGGREGATING)
            score, summary = await asyncio.wait_for(
                self.coordinator.coordinate(request, brand_result, core),
                timeout=self.timeout_seconds,
            )

        except Exception as e:
            error = error_message(e)
            code = getattr(e, "error_code", type(e).__name__)
            logger.error(f"[{self.name}] Multi-agent evaluation failed ({code}), using fallback: {error}")
            return await self._fallback(request, run, brand_result, error)

        run.advance(RunState.COMPLETED)
        logger.info(f"[{self.name}] prompt={request.prompt_id or '-'} final_score={score}")
        return EvaluationRecord(
            agents=AgentResults(brand_alignment=brand_result, **core.core()),
            final_score=score,
            aggregation_formula=BRAND_FIRST_FORMULA,
            total_execution_time_ms=run.elapsed_ms,
            status=EvaluationStatus.COMPLETED,
            strategy=self.name,
            prompt_id=request.prompt_id,
            coordination=summary,
            run_states=tuple(run.states),
        )

    async def _fallback(
        self,
        request: EvaluationRequest,
        run: RunTracker,
        brand_result: Optional[AgentResult],
        error: str,
    ) -> EvaluationRecord:
        """Re-run the core agents without brand context and apply the fallback formula."""
        try:
            if run.state is not RunState.RUNNING_CORE_AGENTS:
                run.advance(RunState.RUNNING_CORE_AGENTS)
            core = await run_core_agents(self.agents, request.without_brand_context(), self.timeout_seconds)
            run.advance(RunState.AGGREGATING)
            score = fallback_score(core, self.fallback_weights)

        except Exception as fallback_error:
            logger.error(f"[{self.name}] Fallback evaluation failed: {fallback_error}", exc_info=True)
            run.advance(RunState.FAILED)
            return EvaluationRecord(
                agents=failed_agent_results("Agent execution failed"),
                final_score=0,
                aggregation_formula=self.fallback_formula,
                total_execution_time_ms=run.elapsed_ms,
                status=EvaluationStatus.FAILED,
                error=f"{error}; fallback failed: {error_message(fallback_error)}",
                strategy=self.name,
                prompt_id=request.prompt_id,
                run_states=tuple(run.states),
            )

        run.advance(RunState.COMPLETED)
        logger.info(f"[{self.name}] prompt={request.prompt_id or '-'} fallback final_score={score}")
        return EvaluationRecord(
            agents=AgentResults(brand_alignment=brand_result, **core.core()),
            final_score=score,
            aggregation_formula=self.fallback_formula,
            total_execution_time_ms=run.elapsed_ms,
            status=EvaluationStatus.COMPLETED,
            error=error,
            strategy=self.name,
            prompt_id=request.prompt_id,
            run_states=tuple(run.states),
        )
