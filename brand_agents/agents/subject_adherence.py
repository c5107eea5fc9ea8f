"""
Subject Adherence scorer.

Judges how well the generation prompt pins down its subject and how much
of the brand's colors and style it carries. Four sub-scores:

- complexity (30%): word-count tiers
- specificity (25%): presence of detail, color and style vocabulary
- brand overlap (35%): brand color/style tokens found in the prompt
- coherence (10%): focused prompts touching 1-2 subject categories score higher
"""

from typing import Dict, List, Sequence

from brand_agents.agents.keywords import contains_any, count_matches, split_tokens, word_count
from brand_agents.core.agent import HeuristicAgent, ScoreOutcome
from brand_agents.core.scoring import weighted_score
from brand_agents.models.request import EvaluationRequest

WEIGHTS = {
    "complexity": 0.30,
    "specificity": 0.25,
    "brand_alignment": 0.35,
    "coherence": 0.10,
}

MAX_KEYWORDS = 20

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
    "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "should", "could", "may", "might", "must", "can", "this",
    "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
})

DETAIL_INDICATORS = (
    "detailed", "realistic", "professional", "high-quality", "perfect",
    "beautiful", "stunning", "dramatic", "vibrant", "soft", "natural",
    "modern", "vintage", "minimalist", "elegant", "sophisticated",
    "composition", "lighting", "texture", "background", "foreground",
)

COLOR_WORDS = (
    "red", "blue", "green", "yellow", "orange", "purple", "pink", "brown",
    "black", "white", "gray", "grey", "gold", "silver", "bronze", "beige",
    "cream", "tan", "navy", "teal", "cyan", "magenta", "violet", "indigo",
    "maroon", "olive", "lime", "aqua", "turquoise", "coral", "salmon",
)

STYLE_WORDS = (
    "realistic", "abstract", "minimalist", "vintage", "modern", "retro",
    "contemporary", "classic", "artistic", "photographic", "illustrated",
    "painted", "drawn", "sketched", "rendered", "3d", "2d", "flat",
    "detailed", "simple", "complex", "clean", "rustic", "industrial",
    "organic", "geometric", "natural", "artificial", "dramatic", "subtle",
)

SUBJECT_CATEGORIES: Dict[str, Sequence[str]] = {
    "people": ("person", "man", "woman", "child", "people", "human", "face", "portrait"),
    "nature": ("tree", "forest", "mountain", "river", "ocean", "sky", "cloud", "flower"),
    "objects": ("car", "building", "house", "furniture", "tool", "device", "machine"),
    "animals": ("dog", "cat", "bird", "animal", "creature", "wildlife"),
    "abstract": ("concept", "idea", "emotion", "feeling", "mood", "atmosphere"),
}

# Score by number of subject categories touched
COHERENCE_BY_CATEGORIES = {1: 95, 2: 85, 3: 70}
COHERENCE_SCATTERED = 60


def extract_keywords(text: str) -> List[str]:
    """Meaningful words (longer than 3 characters, not stop words), first 20."""
    words = [word for word in text.lower().split() if len(word) > 3 and word not in STOP_WORDS]
    return words[:MAX_KEYWORDS]


def complexity_score(words: int) -> int:
    if words > 20:
        return 90
    if words > 10:
        return 75
    if words > 5:
        return 60
    return 50


def specificity_score(has_details: bool, has_colors: bool, has_styles: bool) -> int:
    if has_details and has_colors and has_styles:
        return 95
    if has_details and (has_colors or has_styles):
        return 80
    if has_details:
        return 70
    return 60


def brand_overlap_score(prompt: str, brand_colors: str, brand_style: str) -> int:
    """Base 50, +10 per brand color token and +15 per brand style token found, capped at 100."""
    score = 50
    score += count_matches(prompt, split_tokens(brand_colors)) * 10
    score += count_matches(prompt, split_tokens(brand_style)) * 15
    return min(score, 100)


def coherence_score(keywords: Sequence[str]) -> int:
    """Reward keywords that stay within one or two subject categories."""
    touched = sum(
        1
        for terms in SUBJECT_CATEGORIES.values()
        if any(contains_any(keyword, terms) for keyword in keywords)
    )
    return COHERENCE_BY_CATEGORIES.get(touched, COHERENCE_SCATTERED)


def score_subject_adherence(request: EvaluationRequest) -> ScoreOutcome:
    """Score how specific the prompt is and how much brand vocabulary it carries."""
    prompt = request.prompt.lower()
    keywords = extract_keywords(prompt)
    words = word_count(prompt)

    has_details = contains_any(prompt, DETAIL_INDICATORS)
    has_colors = contains_any(prompt, COLOR_WORDS)
    has_styles = contains_any(prompt, STYLE_WORDS)

    complexity = complexity_score(words)
    specificity = specificity_score(has_details, has_colors, has_styles)
    brand_alignment = brand_overlap_score(prompt, request.brand.colors, request.brand.style)
    coherence = coherence_score(keywords)

    score = weighted_score([
        (WEIGHTS["complexity"], complexity),
        (WEIGHTS["specificity"], specificity),
        (WEIGHTS["brand_alignment"], brand_alignment),
        (WEIGHTS["coherence"], coherence),
    ])

    notes = [f"Prompt analysis: {words} words, {len(keywords)} key elements identified."]
    if brand_alignment >= 80:
        notes.append("Strong brand alignment detected.")
    elif brand_alignment >= 60:
        notes.append("Moderate brand alignment.")
    else:
        notes.append("Limited brand alignment.")

    if specificity >= 80:
        notes.append("Highly specific and detailed prompt.")
    else:
        notes.append("Moderately specific prompt.")

    notes.append(f"Expected to match {request.brand.name}'s {request.brand.style.lower()} style.")

    return ScoreOutcome(
        score=score,
        reasoning=" ".join(notes),
        details={
            "word_count": words,
            "keywords": keywords[:10],
            "has_specific_details": has_details,
            "has_color_mentions": has_colors,
            "has_style_mentions": has_styles,
            "brand_alignment": brand_alignment,
            "complexity_score": complexity,
            "specificity_score": specificity,
            "coherence_score": coherence,
        },
    )


def subject_adherence_agent() -> HeuristicAgent:
    """Subject Adherence agent."""
    return HeuristicAgent(
        name="subject_adherence",
        label="subject adherence",
        scorer=score_subject_adherence,
    )
