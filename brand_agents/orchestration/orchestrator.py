"""
Evaluation orchestrator facade.

Built once at process start from an EvaluationConfig; holds the gateway,
the agents and both strategies, and picks a strategy per request.
"""

from typing import Dict, Optional
import logging
import time

from brand_agents.agents import (
    brand_alignment_agent,
    content_quality_agent,
    creativity_agent,
    mood_consistency_agent,
    size_compliance_agent,
    subject_adherence_agent,
    vision_evaluator_agent,
)
from brand_agents.core.agent import AgentResult, Evaluator
from brand_agents.core.config import EvaluationConfig
from brand_agents.core.exceptions import AgentConfigError, error_message
from brand_agents.core.llm_gateway import LLMGateway
from brand_agents.models.enums import EvaluationStatus, RunState
from brand_agents.models.evaluation import EvaluationRecord
from brand_agents.models.request import EvaluationRequest
from brand_agents.orchestration.base import (
    CoreAgents,
    EvaluationStrategy,
    elapsed_ms,
    failed_agent_results,
    run_with_deadline,
)
from brand_agents.orchestration.brand_first import BrandFirstStrategy
from brand_agents.orchestration.coordinator import Coordinator
from brand_agents.orchestration.fixed_weight import FixedWeightStrategy

logger = logging.getLogger(__name__)


class EvaluationOrchestrator:
    """
    Entry point of the engine.

    ``evaluate`` never raises for a well-formed request; every failure is
    reported through the record's status and error fields.
    """

    def __init__(
        self,
        strategies: Dict[str, EvaluationStrategy],
        default_strategy: str,
        gateway: LLMGateway,
        vision_agent: Optional[Evaluator] = None,
        timeout_seconds: float = 30.0,
    ):
        if default_strategy not in strategies:
            raise AgentConfigError(
                f"Unknown default strategy '{default_strategy}'",
                details={"available": sorted(strategies)},
            )
        self.strategies = dict(strategies)
        self.default_strategy = default_strategy
        self.gateway = gateway
        self.vision_agent = vision_agent
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(
        cls,
        config: EvaluationConfig,
        gateway: Optional[LLMGateway] = None,
    ) -> "EvaluationOrchestrator":
        """
        Wire gateway, agents and strategies from configuration.

        Args:
            config: Loaded evaluation config
            gateway: Pre-built gateway; built from config when None
        """
        gateway = gateway or LLMGateway.from_config(config)
        orchestration = config.orchestration
        timeout = orchestration.agent_timeout_seconds

        size = size_compliance_agent()
        creativity = creativity_agent()
        mood = mood_consistency_agent()

        fixed_weight = FixedWeightStrategy(
            agents=CoreAgents(
                size_compliance=size,
                subject_adherence=subject_adherence_agent(),
                creativity=creativity,
                mood_consistency=mood,
            ),
            weights=orchestration.fixed_weights,
            timeout_seconds=timeout,
        )
        brand_first = BrandFirstStrategy(
            brand_agent=brand_alignment_agent(gateway, config.get_model_profile("brand_alignment")),
            agents=CoreAgents(
                size_compliance=size,
                subject_adherence=content_quality_agent(gateway, config.get_model_profile("content_quality")),
                creativity=creativity,
                mood_consistency=mood,
            ),
            coordinator=Coordinator(gateway, config.get_model_profile("coordinator").to_options(json_mode=True)),
            fallback_weights=orchestration.fallback_weights,
            timeout_seconds=timeout,
        )

        return cls(
            strategies={fixed_weight.name: fixed_weight, brand_first.name: brand_first},
            default_strategy=orchestration.default_strategy,
            gateway=gateway,
            vision_agent=vision_evaluator_agent(gateway, config.get_model_profile("vision_evaluator")),
            timeout_seconds=timeout,
        )

    @property
    def strategy_names(self):
        return sorted(self.strategies)

    def get_strategy(self, name: Optional[str] = None) -> EvaluationStrategy:
        """
        Strategy by name, or the default.

        Raises:
            AgentConfigError: If the name is unknown
        """
        name = name or self.default_strategy
        strategy = self.strategies.get(name)
        if strategy is None:
            raise AgentConfigError(
                f"Unknown strategy '{name}'",
                details={"available": self.strategy_names},
            )
        return strategy

    async def evaluate(self, request: EvaluationRequest, strategy: Optional[str] = None) -> EvaluationRecord:
        """Evaluate one request with the named (or default) strategy."""
        selected = self.get_strategy(strategy)
        logger.info(f"Evaluating prompt={request.prompt_id or '-'} with {selected.name}")
        start = time.perf_counter()
        try:
            return await selected.evaluate(request)
        except Exception as e:
            logger.error(f"[{selected.name}] Strategy raised: {e}", exc_info=True)
            return EvaluationRecord(
                agents=failed_agent_results("Agent execution failed"),
                final_score=0,
                aggregation_formula=f"No aggregation: {selected.name} strategy failed",
                total_execution_time_ms=elapsed_ms(start),
                status=EvaluationStatus.FAILED,
                error=error_message(e),
                strategy=selected.name,
                prompt_id=request.prompt_id,
                run_states=(RunState.PENDING, RunState.FAILED),
            )

    async def evaluate_vision(self, request: EvaluationRequest) -> AgentResult:
        """Run the optional vision evaluator on the request's image payload."""
        if self.vision_agent is None:
            return AgentResult.failure(error="Vision evaluator is not configured", agent_name="vision_evaluator")
        return await run_with_deadline(self.vision_agent, request, self.timeout_seconds)

    async def health_check(self) -> Dict[str, bool]:
        """Per-provider gateway health."""
        return await self.gateway.health_check()

    async def close(self) -> None:
        await self.gateway.close()
