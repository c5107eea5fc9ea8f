"""
Scorer implementations.

Heuristic scorers are pure functions wrapped in HeuristicAgent; LLM-backed
scorers are LLMAgent instances bound to a gateway.
"""

from brand_agents.agents.size_compliance import score_size_compliance, size_compliance_agent
from brand_agents.agents.subject_adherence import score_subject_adherence, subject_adherence_agent
from brand_agents.agents.creativity import score_creativity, creativity_agent
from brand_agents.agents.mood_consistency import score_mood_consistency, mood_consistency_agent
from brand_agents.agents.brand_alignment import brand_alignment_agent, brand_context_from
from brand_agents.agents.content_quality import content_quality_agent
from brand_agents.agents.vision_evaluator import vision_evaluator_agent

__all__ = [
    "score_size_compliance",
    "size_compliance_agent",
    "score_subject_adherence",
    "subject_adherence_agent",
    "score_creativity",
    "creativity_agent",
    "score_mood_consistency",
    "mood_consistency_agent",
    "brand_alignment_agent",
    "brand_context_from",
    "content_quality_agent",
    "vision_evaluator_agent",
]
