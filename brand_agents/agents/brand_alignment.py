"""
Brand Alignment scorer (LLM-backed).

Asks a language model, acting as a brand strategist, how well the asset
fits the brand's identity, values and positioning. In the brand-first
strategy its output becomes the brand context shared with the core agents.
"""

from typing import Optional

from brand_agents.agents.llm_replies import BrandAlignmentReply, parse_reply
from brand_agents.core.agent import LLMAgent, LLMScorerSpec, ScoreOutcome
from brand_agents.core.config import ModelProfile
from brand_agents.core.llm_gateway import LLMGateway
from brand_agents.core.scoring import clamp_score, weighted_score
from brand_agents.models.request import BrandContext, EvaluationRequest

SYSTEM_PROMPT = (
    "You are a senior brand strategist evaluating content alignment. "
    "Always respond with valid JSON."
)

WEIGHTS = {
    "visual_identity": 0.25,
    "brand_voice": 0.20,
    "brand_values": 0.20,
    "audience_alignment": 0.15,
    "market_positioning": 0.20,
}


def build_prompt(request: EvaluationRequest) -> str:
    brand = request.brand
    return f"""
You are a brand strategy expert. Evaluate how well this generated image aligns with the brand's core identity, values, and positioning.

**Brand Identity Assessment:**
1. **Visual Identity (25%)**: How well does the image reflect brand colors, style, and visual language?
2. **Brand Voice & Tone (20%)**: Does the image communicate the brand's personality and voice?
3. **Brand Values (20%)**: Does the image embody the brand's core values and mission?
4. **Target Audience Alignment (15%)**: Is this appropriate for the brand's target demographic?
5. **Market Positioning (20%)**: Does this strengthen the brand's position in its market?

**Content Context:**
- Channel: {request.channel}
- Original Prompt: "{request.prompt}"
- Brand: {brand.name}

**Brand Profile:**
- Style: {brand.style}
- Colors: {brand.colors}
- Vision: {brand.vision}
- Voice: {brand.voice}
- Description: {brand.description}

**Evaluation Focus:**
Analyze whether this image would strengthen or weaken the brand's market position and customer perception. Consider long-term brand equity impact.

Score every criterion from 0 to 100. Format your response as JSON:
{{
  "criteria": {{
    "visualIdentity": {{ "score": number, "reasoning": "string" }},
    "brandVoice": {{ "score": number, "reasoning": "string" }},
    "brandValues": {{ "score": number, "reasoning": "string" }},
    "audienceAlignment": {{ "score": number, "reasoning": "string" }},
    "marketPositioning": {{ "score": number, "reasoning": "string" }}
  }},
  "overallAlignment": number,
  "brandImpact": "string",
  "recommendations": ["string"],
  "finalScore": number
}}
""".strip()


def interpret(content: str) -> ScoreOutcome:
    """Use the model's finalScore when given, else the local weighted combination."""
    reply = parse_reply(content, BrandAlignmentReply)
    criteria = {name: getattr(reply.criteria, name) for name in WEIGHTS}

    if reply.final_score is not None:
        score = clamp_score(reply.final_score)
    else:
        score = weighted_score((WEIGHTS[name], criterion.score) for name, criterion in criteria.items())

    return ScoreOutcome(
        score=score,
        reasoning=reply.brand_impact or "Brand alignment assessed without a stated brand impact.",
        details={
            "criteria": {name: criterion.model_dump() for name, criterion in criteria.items()},
            "overall_alignment": reply.overall_alignment,
            "recommendations": reply.recommendations,
        },
    )


def brand_context_from(score: int, reasoning: str, details: Optional[dict]) -> BrandContext:
    """Brand context for the core agents, built from a brand alignment result."""
    recommendations = list((details or {}).get("recommendations") or [])
    return BrandContext(
        alignment_score=score,
        alignment_reasoning=reasoning,
        recommendations=recommendations,
    )


def brand_alignment_agent(gateway: LLMGateway, profile: Optional[ModelProfile] = None) -> LLMAgent:
    """Brand Alignment agent bound to a gateway."""
    profile = profile or ModelProfile(name="brand_alignment", max_tokens=1200)
    return LLMAgent(
        name="brand_alignment",
        label="brand alignment",
        gateway=gateway,
        spec=LLMScorerSpec(
            system_prompt=SYSTEM_PROMPT,
            build_prompt=build_prompt,
            interpret=interpret,
        ),
        options=profile.to_options(json_mode=True),
    )
