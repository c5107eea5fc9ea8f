"""
Shared orchestration pieces: the strategy interface, deadline-bounded agent
runs and run-state tracking.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple
import asyncio
import logging
import time

from brand_agents.core.exceptions import error_message
from brand_agents.core.agent import AgentResult, Evaluator
from brand_agents.models.enums import RunState
from brand_agents.models.evaluation import CORE_AGENT_SLOTS, AgentResults, EvaluationRecord
from brand_agents.models.request import EvaluationRequest

logger = logging.getLogger(__name__)

# Short names used in aggregation formula strings
SLOT_SHORT_NAMES = {
    "size_compliance": "size",
    "subject_adherence": "subject",
    "creativity": "creativity",
    "mood_consistency": "mood",
}


class EvaluationStrategy(Protocol):
    """One aggregation policy. ``evaluate`` never raises for a well-formed request."""
    name: str

    async def evaluate(self, request: EvaluationRequest) -> EvaluationRecord:
        ...


@dataclass(frozen=True)
class CoreAgents:
    """The four agents filling the core result slots."""
    size_compliance: Evaluator
    subject_adherence: Evaluator
    creativity: Evaluator
    mood_consistency: Evaluator

    def items(self) -> List[Tuple[str, Evaluator]]:
        return [(slot, getattr(self, slot)) for slot in CORE_AGENT_SLOTS]


def elapsed_ms(start: float) -> int:
    return max(0, int((time.perf_counter() - start) * 1000))


def format_formula(weights: Dict[str, float], names: Optional[Dict[str, str]] = None) -> str:
    """Render a weight table as e.g. '0.20*size + 0.35*subject + ...'."""
    names = names or SLOT_SHORT_NAMES
    return " + ".join(f"{weights[slot]:.2f}*{names[slot]}" for slot in CORE_AGENT_SLOTS)


async def run_with_deadline(
    agent: Evaluator,
    request: EvaluationRequest,
    timeout_seconds: float,
) -> AgentResult:
    """
    Run one agent under a deadline.

    On expiry the agent's task is cancelled and a timeout result is
    substituted. A provider call that ignores cancellation may still be in
    flight afterwards. Anything an agent raises despite its contract is
    converted into an error result here.
    """
    try:
        return await asyncio.wait_for(agent.evaluate(request), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        timeout_ms = int(timeout_seconds * 1000)
        logger.warning(f"[{agent.name}] Timed out after {timeout_ms}ms")
        return AgentResult.timed_out(timeout_ms, agent_name=agent.name)
    except Exception as e:
        logger.error(f"[{agent.name}] Raised past its boundary: {e}", exc_info=True)
        return AgentResult.failure(
            error=error_message(e),
            reasoning=f"{agent.name} evaluation failed: {error_message(e)}",
            agent_name=agent.name,
        )


async def run_core_agents(
    agents: CoreAgents,
    request: EvaluationRequest,
    timeout_seconds: float,
) -> AgentResults:
    """Run the four core agents concurrently and wait for all of them to settle."""
    slots = agents.items()
    results = await asyncio.gather(
        *(run_with_deadline(agent, request, timeout_seconds) for _, agent in slots)
    )
    return AgentResults(**{slot: result for (slot, _), result in zip(slots, results)})


def failed_agent_results(message: str) -> AgentResults:
    """Error results for every core slot, used when a run fails outright."""
    return AgentResults(**{
        slot: AgentResult.failure(
            error=message,
            reasoning=f"{slot.replace('_', ' ').capitalize()} agent failed to execute",
            agent_name=slot,
        )
        for slot in CORE_AGENT_SLOTS
    })


class RunTracker:
    """Records and logs the state transitions of one evaluation run."""

    def __init__(self, strategy: str, prompt_id: Optional[str] = None):
        self.strategy = strategy
        self.prompt_id = prompt_id
        self.states: List[RunState] = [RunState.PENDING]
        self.started = time.perf_counter()

    @property
    def state(self) -> RunState:
        return self.states[-1]

    def advance(self, state: RunState) -> None:
        """Move to the next state; terminal states are final."""
        if self.state.is_terminal:
            raise RuntimeError(f"Run already finished in state {self.state.value}")
        logger.info(
            f"[{self.strategy}] prompt={self.prompt_id or '-'} "
            f"{self.state.value} -> {state.value}"
        )
        self.states.append(state)

    @property
    def elapsed_ms(self) -> int:
        return elapsed_ms(self.started)
