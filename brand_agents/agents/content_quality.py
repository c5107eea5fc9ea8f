"""
Content Quality scorer (LLM-backed subject adherence).

Takes the subject-adherence slot in the brand-first strategy. When the
request carries brand context, the model sees the brand alignment verdict
and its recommendations.
"""

from typing import Optional

from brand_agents.agents.llm_replies import ContentQualityReply, parse_reply
from brand_agents.core.agent import LLMAgent, LLMScorerSpec, ScoreOutcome
from brand_agents.core.config import ModelProfile
from brand_agents.core.llm_gateway import LLMGateway
from brand_agents.core.scoring import clamp_score, weighted_score
from brand_agents.models.request import EvaluationRequest

SYSTEM_PROMPT = (
    "You are a content quality specialist reviewing generated marketing assets. "
    "Always respond with valid JSON."
)

WEIGHTS = {
    "subject_accuracy": 0.35,
    "prompt_clarity": 0.25,
    "brand_fit": 0.25,
    "channel_suitability": 0.15,
}


def _brand_context_section(request: EvaluationRequest) -> str:
    context = request.brand_context
    if context is None:
        return ""
    lines = [
        "**Brand Context (from brand alignment review):**",
        f"- Alignment Score: {context.alignment_score}/100",
        f"- Assessment: {context.alignment_reasoning}",
    ]
    for recommendation in context.recommendations:
        lines.append(f"- Recommendation: {recommendation}")
    return "\n".join(lines) + "\n\n"


def build_prompt(request: EvaluationRequest) -> str:
    brand = request.brand
    return f"""
Evaluate how well the asset generated from this prompt will deliver the requested subject for {brand.name}.

**Content Context:**
- Channel: {request.channel}
- Media Type: {request.media_type.value}
- Generating Model: {request.llm_model}
- Original Prompt: "{request.prompt}"

**Brand Profile:**
- Style: {brand.style}
- Colors: {brand.colors}
- Voice: {brand.voice}

{_brand_context_section(request)}**Criteria:**
1. **Subject Accuracy (35%)**: Will the asset show what the prompt asks for?
2. **Prompt Clarity (25%)**: Is the prompt specific and unambiguous about subject, composition and style?
3. **Brand Fit (25%)**: Does the requested content suit the brand's style and colors?
4. **Channel Suitability (15%)**: Is the content appropriate for {request.channel}?

Score every criterion from 0 to 100. Format your response as JSON:
{{
  "criteria": {{
    "subjectAccuracy": {{ "score": number, "reasoning": "string" }},
    "promptClarity": {{ "score": number, "reasoning": "string" }},
    "brandFit": {{ "score": number, "reasoning": "string" }},
    "channelSuitability": {{ "score": number, "reasoning": "string" }}
  }},
  "overallAssessment": "string",
  "finalScore": number
}}
""".strip()


def interpret(content: str) -> ScoreOutcome:
    """Use the model's finalScore when given, else the local weighted combination."""
    reply = parse_reply(content, ContentQualityReply)
    criteria = {name: getattr(reply.criteria, name) for name in WEIGHTS}

    if reply.final_score is not None:
        score = clamp_score(reply.final_score)
    else:
        score = weighted_score((WEIGHTS[name], criterion.score) for name, criterion in criteria.items())

    return ScoreOutcome(
        score=score,
        reasoning=reply.overall_assessment or "Content quality assessed without an overall statement.",
        details={"criteria": {name: criterion.model_dump() for name, criterion in criteria.items()}},
    )


def content_quality_agent(gateway: LLMGateway, profile: Optional[ModelProfile] = None) -> LLMAgent:
    """Content Quality agent bound to a gateway."""
    profile = profile or ModelProfile(name="content_quality")
    return LLMAgent(
        name="content_quality",
        label="content quality",
        gateway=gateway,
        spec=LLMScorerSpec(
            system_prompt=SYSTEM_PROMPT,
            build_prompt=build_prompt,
            interpret=interpret,
        ),
        options=profile.to_options(json_mode=True),
    )
