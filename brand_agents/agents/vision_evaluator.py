"""
Vision Evaluator (LLM-backed, optional).

Sends the image payload supplied by the caller to a vision-capable model.
The final score is always recomputed locally from the four criteria.
"""

from typing import Optional

from brand_agents.agents.llm_replies import VisionReply, parse_reply
from brand_agents.core.agent import LLMAgent, LLMScorerSpec, ScoreOutcome
from brand_agents.core.config import ModelProfile
from brand_agents.core.llm_gateway import LLMGateway
from brand_agents.core.scoring import weighted_score
from brand_agents.models.request import EvaluationRequest

WEIGHTS = {
    "visual_brand_alignment": 0.30,
    "content_quality": 0.25,
    "subject_accuracy": 0.25,
    "brand_message_communication": 0.20,
}


def build_prompt(request: EvaluationRequest) -> str:
    brand = request.brand
    return f"""
You are an expert image evaluator for brand content. Analyze this image based on the following criteria:

**Brand Information:**
- Name: {brand.name}
- Style: {brand.style}
- Colors: {brand.colors}
- Vision: {brand.vision}
- Voice: {brand.voice}

**Original Prompt:** "{request.prompt}"

**Channel:** {request.channel}

Please evaluate the image on these aspects:

1. **Visual Brand Alignment (30%)**: How well does the image match the brand's visual style, colors, and aesthetic?
2. **Content Quality (25%)**: Technical quality, composition, lighting, and overall visual appeal?
3. **Subject Accuracy (25%)**: How accurately does the image represent what was requested in the prompt?
4. **Brand Message Communication (20%)**: How effectively does the image communicate the brand's vision and voice?

Score every criterion from 0 to 100. Format your response as JSON:
{{
  "criteria": {{
    "visualBrandAlignment": {{ "score": number, "reasoning": "string" }},
    "contentQuality": {{ "score": number, "reasoning": "string" }},
    "subjectAccuracy": {{ "score": number, "reasoning": "string" }},
    "brandMessageCommunication": {{ "score": number, "reasoning": "string" }}
  }},
  "overallAssessment": "string",
  "finalScore": number
}}
""".strip()


def interpret(content: str) -> ScoreOutcome:
    """Weighted combination of the criteria; the model's finalScore is only recorded."""
    reply = parse_reply(content, VisionReply)
    criteria = {name: getattr(reply.criteria, name) for name in WEIGHTS}
    score = weighted_score((WEIGHTS[name], criterion.score) for name, criterion in criteria.items())

    return ScoreOutcome(
        score=score,
        reasoning=reply.overall_assessment or "Image evaluated without an overall assessment.",
        details={
            "criteria": {name: criterion.model_dump() for name, criterion in criteria.items()},
            "model_final_score": reply.final_score,
        },
    )


def vision_evaluator_agent(gateway: LLMGateway, profile: Optional[ModelProfile] = None) -> LLMAgent:
    """Vision Evaluator agent bound to a gateway."""
    profile = profile or ModelProfile(name="vision_evaluator", max_tokens=1500)
    return LLMAgent(
        name="vision_evaluator",
        label="image with vision",
        gateway=gateway,
        spec=LLMScorerSpec(
            system_prompt="",
            build_prompt=build_prompt,
            interpret=interpret,
            uses_vision=True,
        ),
        options=profile.to_options(json_mode=True),
    )
