"""Tests for run-state tracking and deadline-bounded agent runs."""

import pytest

from conftest import SlowAgent, fixed_agent, make_request
from brand_agents.models import AgentStatus, RunState
from brand_agents.orchestration.base import RunTracker, run_with_deadline


class _RaisingAgent:
    name = "rogue"

    async def evaluate(self, request):
        raise ValueError("contract broken")


class TestRunTracker:

    def test_records_transitions(self):
        run = RunTracker("fixed_weight", "prompt-1")
        run.advance(RunState.RUNNING_CORE_AGENTS)
        run.advance(RunState.COMPLETED)
        assert run.states == [RunState.PENDING, RunState.RUNNING_CORE_AGENTS, RunState.COMPLETED]
        assert run.state.is_terminal
        assert run.elapsed_ms >= 0

    @pytest.mark.parametrize("terminal", [RunState.COMPLETED, RunState.FAILED])
    def test_terminal_states_are_final(self, terminal):
        run = RunTracker("brand_first")
        run.advance(terminal)
        with pytest.raises(RuntimeError, match="already finished"):
            run.advance(RunState.AGGREGATING)


class TestRunWithDeadline:

    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        result = await run_with_deadline(fixed_agent("creativity", 64), make_request(), 1.0)
        assert result.score == 64
        assert result.status == AgentStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_timeout(self):
        agent = SlowAgent("mood_consistency")
        result = await run_with_deadline(agent, make_request(), 0.02)
        assert result.status == AgentStatus.TIMEOUT
        assert result.error == "mood_consistency timeout after 20ms"
        assert agent.cancelled

    @pytest.mark.asyncio
    async def test_exception_becomes_error_result(self):
        result = await run_with_deadline(_RaisingAgent(), make_request(), 1.0)
        assert result.status == AgentStatus.ERROR
        assert result.score == 0
        assert result.error == "contract broken"
        assert result.agent_name == "rogue"
