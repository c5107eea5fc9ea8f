"""Tests for the brand-first coordination pass."""

import pytest

from conftest import COORDINATION_REPLY, llm_response, make_request
from brand_agents.core.agent import AgentResult
from brand_agents.core.exceptions import AllProvidersFailedError, CoordinationError
from brand_agents.models.evaluation import AgentResults
from brand_agents.orchestration.coordinator import MAX_REASONING_CHARS, Coordinator, build_prompt

BRAND_RESULT = AgentResult.success(score=84, reasoning="Palette matches", agent_name="brand_alignment")
CORE = AgentResults(
    size_compliance=AgentResult.success(score=100, reasoning="Perfect square"),
    subject_adherence=AgentResult.success(score=70, reasoning="Clear subject"),
    creativity=AgentResult.success(score=60, reasoning="Some novelty"),
    mood_consistency=AgentResult.failure(error="boom"),
)


class TestCoordinator:

    def test_prompt(self):
        prompt = build_prompt(make_request(), BRAND_RESULT, CORE)
        assert "Brand: ChromaBloom Studios" in prompt
        assert "84/100 - Palette matches" in prompt
        assert "Size Compliance: 100/100 - Perfect square" in prompt
        assert "Mood Consistency: 0/100 - Agent failed: boom" in prompt

    def test_prompt_truncates_long_reasoning(self):
        rambling = AgentResult.success(score=70, reasoning="x" * (MAX_REASONING_CHARS + 200))
        core = AgentResults(
            size_compliance=CORE.size_compliance,
            subject_adherence=rambling,
            creativity=CORE.creativity,
            mood_consistency=CORE.mood_consistency,
        )

        prompt = build_prompt(make_request(), BRAND_RESULT, core)

        assert f"Content Quality: 70/100 - {'x' * MAX_REASONING_CHARS}..." in prompt
        assert "x" * (MAX_REASONING_CHARS + 1) not in prompt

    @pytest.mark.asyncio
    async def test_success(self, mock_gateway):
        mock_gateway.generate_text.return_value = llm_response(COORDINATION_REPLY)

        score, summary = await Coordinator(mock_gateway).coordinate(make_request(), BRAND_RESULT, CORE)

        assert score == 78
        assert summary.brand_value == "Builds recognition with the core audience."
        assert summary.to_dict()["recommendations"] == ["Increase contrast"]

    @pytest.mark.asyncio
    async def test_score_clamped(self, mock_gateway):
        mock_gateway.generate_text.return_value = llm_response({"finalScore": 150})

        score, summary = await Coordinator(mock_gateway).coordinate(make_request(), BRAND_RESULT, CORE)

        assert score == 100
        assert summary.reasoning == ""

    @pytest.mark.asyncio
    async def test_gateway_failure_raises(self, mock_gateway):
        mock_gateway.generate_text.side_effect = AllProvidersFailedError(
            "All LLM providers failed", failures=["openai failed: 503"]
        )

        with pytest.raises(CoordinationError) as exc_info:
            await Coordinator(mock_gateway).coordinate(make_request(), BRAND_RESULT, CORE)

        assert exc_info.value.message.startswith("Coordination failed: All LLM providers failed")
        assert exc_info.value.details["failures"] == ["openai failed: 503"]

    @pytest.mark.asyncio
    async def test_reply_without_score_raises(self, mock_gateway):
        mock_gateway.generate_text.return_value = llm_response({"reasoning": "looks fine"})

        with pytest.raises(CoordinationError):
            await Coordinator(mock_gateway).coordinate(make_request(), BRAND_RESULT, CORE)
