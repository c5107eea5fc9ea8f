"""
Coordination pass for the brand-first strategy.

One LLM call reviews the brand alignment verdict and all core agent results
and returns a holistic final score. Unlike agents, the coordinator raises:
its failure is what sends the brand-first strategy to its fallback path.
"""

from typing import Optional, Tuple
import logging

from brand_agents.agents.llm_replies import CoordinationReply, parse_reply
from brand_agents.core.agent import AgentResult
from brand_agents.core.exceptions import CoordinationError, EvaluationError
from brand_agents.core.llm_gateway import LLMGateway, LLMMessage, LLMRequestOptions
from brand_agents.core.scoring import clamp_score
from brand_agents.models.evaluation import AgentResults, CoordinationSummary
from brand_agents.models.request import EvaluationRequest
from brand_agents.utils import truncate_text

logger = logging.getLogger(__name__)

MAX_REASONING_CHARS = 500

SYSTEM_PROMPT = (
    "You are an expert at coordinating multi-agent evaluations for brand content. "
    "Always respond with valid JSON."
)


def _summary(result: AgentResult) -> str:
    return f"{result.score}/100 - {truncate_text(result.reasoning, MAX_REASONING_CHARS)}"


def build_prompt(request: EvaluationRequest, brand_result: AgentResult, agents: AgentResults) -> str:
    return f"""
You are an evaluation coordinator. Review all the agent results and determine how well the generated image serves the brand's objectives and creates value.

Brand: {request.brand.name}
Channel: {request.channel}
Original Prompt: "{request.prompt}"

**Brand Context (from Brand Alignment Agent):**
{_summary(brand_result)}

**Core Agent Results:**
- Size Compliance: {_summary(agents.size_compliance)}
- Content Quality: {_summary(agents.subject_adherence)}
- Creativity: {_summary(agents.creativity)}
- Mood Consistency: {_summary(agents.mood_consistency)}

**Evaluation Task:**
Based on the brand alignment assessment and the 4 core evaluations, determine:
1. How well does this image match what the brand is asking for?
2. Does it create value for the brand (engagement, perception, positioning)?
3. What is the overall effectiveness for the brand's goals?

Consider the brand's vision, voice, target audience, and market positioning when calculating the final score (0 to 100).

Format your response as JSON:
{{
  "finalScore": number,
  "reasoning": "string",
  "brandValue": "string",
  "recommendations": ["string"]
}}
""".strip()


class Coordinator:
    """Holistic final judgment over all agent results."""

    def __init__(self, gateway: LLMGateway, options: Optional[LLMRequestOptions] = None):
        self.gateway = gateway
        self.options = options or LLMRequestOptions(json_mode=True)

    async def coordinate(
        self,
        request: EvaluationRequest,
        brand_result: AgentResult,
        agents: AgentResults,
    ) -> Tuple[int, CoordinationSummary]:
        """
        Ask the model for the final score.

        Raises:
            CoordinationError: If the gateway fails or the reply breaks the contract
        """
        try:
            response = await self.gateway.generate_text(
                [
                    LLMMessage(role="system", content=SYSTEM_PROMPT),
                    LLMMessage(role="user", content=build_prompt(request, brand_result, agents)),
                ],
                self.options,
            )
            reply = parse_reply(response.content, CoordinationReply)
        except EvaluationError as e:
            raise CoordinationError(f"Coordination failed: {e.message}", details=e.details) from e

        score = clamp_score(reply.final_score)
        logger.info(f"[coordinator] final_score={score} via {response.provider}/{response.model}")
        return score, CoordinationSummary(
            reasoning=reply.reasoning,
            brand_value=reply.brand_value,
            recommendations=list(reply.recommendations),
        )
