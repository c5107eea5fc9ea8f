"""
Orchestration strategies and the orchestrator facade.
"""

from brand_agents.orchestration.base import (
    CoreAgents,
    EvaluationStrategy,
    RunTracker,
    run_core_agents,
    run_with_deadline,
)
from brand_agents.orchestration.fixed_weight import FixedWeightStrategy, aggregate_fixed_weight
from brand_agents.orchestration.coordinator import Coordinator
from brand_agents.orchestration.brand_first import BrandFirstStrategy, fallback_score
from brand_agents.orchestration.orchestrator import EvaluationOrchestrator

__all__ = [
    "CoreAgents",
    "EvaluationStrategy",
    "RunTracker",
    "run_core_agents",
    "run_with_deadline",
    "FixedWeightStrategy",
    "aggregate_fixed_weight",
    "Coordinator",
    "BrandFirstStrategy",
    "fallback_score",
    "EvaluationOrchestrator",
]
