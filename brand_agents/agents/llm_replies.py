"""
JSON reply contracts for the LLM-backed scorers and the coordination pass.

Models answer in camelCase; the schemas accept those keys through aliases
and ignore anything extra. Scores are not range-checked here; scorers
clamp them.
"""
import json
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from brand_agents.core.exceptions import LLMResponseError

ReplyT = TypeVar("ReplyT", bound=BaseModel)


class ReplyModel(BaseModel):
    """Base for reply schemas: alias-or-name population, extra keys ignored."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CriterionScore(ReplyModel):
    """Score and rationale for one criterion."""
    score: float
    reasoning: str = ""


class BrandAlignmentCriteria(ReplyModel):
    visual_identity: CriterionScore = Field(..., alias="visualIdentity")
    brand_voice: CriterionScore = Field(..., alias="brandVoice")
    brand_values: CriterionScore = Field(..., alias="brandValues")
    audience_alignment: CriterionScore = Field(..., alias="audienceAlignment")
    market_positioning: CriterionScore = Field(..., alias="marketPositioning")


class BrandAlignmentReply(ReplyModel):
    criteria: BrandAlignmentCriteria
    overall_alignment: Optional[float] = Field(default=None, alias="overallAlignment")
    brand_impact: str = Field(default="", alias="brandImpact")
    recommendations: List[str] = Field(default_factory=list)
    final_score: Optional[float] = Field(default=None, alias="finalScore")


class ContentQualityCriteria(ReplyModel):
    subject_accuracy: CriterionScore = Field(..., alias="subjectAccuracy")
    prompt_clarity: CriterionScore = Field(..., alias="promptClarity")
    brand_fit: CriterionScore = Field(..., alias="brandFit")
    channel_suitability: CriterionScore = Field(..., alias="channelSuitability")


class ContentQualityReply(ReplyModel):
    criteria: ContentQualityCriteria
    overall_assessment: str = Field(default="", alias="overallAssessment")
    final_score: Optional[float] = Field(default=None, alias="finalScore")


class VisionCriteria(ReplyModel):
    visual_brand_alignment: CriterionScore = Field(..., alias="visualBrandAlignment")
    content_quality: CriterionScore = Field(..., alias="contentQuality")
    subject_accuracy: CriterionScore = Field(..., alias="subjectAccuracy")
    brand_message_communication: CriterionScore = Field(..., alias="brandMessageCommunication")


class VisionReply(ReplyModel):
    criteria: VisionCriteria
    overall_assessment: str = Field(default="", alias="overallAssessment")
    final_score: Optional[float] = Field(default=None, alias="finalScore")


class CoordinationReply(ReplyModel):
    final_score: float = Field(..., alias="finalScore")
    reasoning: str = ""
    brand_value: str = Field(default="", alias="brandValue")
    recommendations: List[str] = Field(default_factory=list)


def _strip_code_fence(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def parse_reply(content: str, schema: Type[ReplyT]) -> ReplyT:
    """
    Validate a model reply against a schema.

    Raises:
        LLMResponseError: If the reply is not JSON or breaks the schema
    """
    text = _strip_code_fence(content)
    try:
        return schema.model_validate_json(text)
    except ValidationError as e:
        try:
            json.loads(text)
        except json.JSONDecodeError as decode_error:
            raise LLMResponseError(
                f"Invalid JSON in model reply: {decode_error.msg}",
                details={"content": text[:500]},
            ) from e
        raise LLMResponseError(
            f"Model reply does not match {schema.__name__}: {e.error_count()} validation error(s)",
            details={"errors": e.errors(include_url=False), "content": text[:500]},
        ) from e
