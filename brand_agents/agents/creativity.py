"""
Creativity scorer.

Four sub-scores, each clamped to 0-100:

- originality (30%): creative descriptors, cliches and unexpected category mixes
- complexity (25%): length, number of subjects, technical/resolution cues
- artistic elements (25%): composition, lighting, color theory and style vocabulary
- model capability (20%): static table of generator strengths
"""

from typing import Dict, Optional, Sequence, Tuple

from brand_agents.agents.keywords import contains_any, count_matches, matched_categories, word_count
from brand_agents.core.agent import HeuristicAgent, ScoreOutcome
from brand_agents.core.scoring import clamp, weighted_score
from brand_agents.models.request import EvaluationRequest, MediaMetadata

WEIGHTS = {
    "originality": 0.30,
    "complexity": 0.25,
    "artistic": 0.25,
    "model": 0.20,
}

CREATIVE_WORDS = (
    "unique", "unusual", "extraordinary", "innovative", "creative",
    "imaginative", "original", "distinctive", "unconventional", "artistic",
    "surreal", "abstract", "experimental", "avant-garde", "whimsical",
)

CLICHE_WORDS = (
    "stock photo", "generic", "typical", "standard", "basic", "simple",
    "plain", "ordinary", "common", "usual", "normal", "regular",
)

# Two or more of these co-occurring counts as an unexpected combination
COMBINATION_CATEGORIES: Dict[str, Sequence[str]] = {
    "tech": ("robot", "computer", "digital", "cyber", "futuristic", "ai"),
    "nature": ("forest", "ocean", "mountain", "flower", "tree", "natural"),
    "vintage": ("vintage", "retro", "old", "antique", "classic", "aged"),
    "modern": ("modern", "contemporary", "sleek", "minimalist", "clean"),
}

ELEMENTS = (
    "person", "people", "man", "woman", "child", "animal", "dog", "cat",
    "bird", "tree", "flower", "building", "house", "car", "vehicle",
    "mountain", "river", "ocean", "sky", "cloud", "sun", "moon", "star",
    "furniture", "table", "chair", "lamp", "book", "computer", "phone",
)

TECHNICAL_SPECS = (
    "8k", "4k", "hd", "uhd", "resolution", "dpi", "megapixel",
    "iso", "aperture", "shutter", "focal length", "lens",
    "render", "ray tracing", "anti-aliasing", "texture",
)

HIGH_RESOLUTION_TERMS = ("8k", "4k", "high resolution")

# (terms, points per match)
ARTISTIC_TERMS: Tuple[Tuple[Sequence[str], int], ...] = (
    ((
        "composition", "framing", "perspective", "angle", "viewpoint",
        "rule of thirds", "symmetry", "balance", "focal point", "depth",
    ), 10),
    ((
        "lighting", "light", "shadow", "illumination", "glow", "bright",
        "dark", "contrast", "dramatic lighting", "soft light", "natural light",
        "golden hour", "backlit", "rim light", "ambient",
    ), 8),
    ((
        "color palette", "vibrant", "muted", "saturated", "desaturated",
        "warm tones", "cool tones", "complementary colors", "monochrome",
        "color harmony", "gradient", "hue", "tint", "shade",
    ), 8),
    ((
        "impressionist", "expressionist", "surrealist", "minimalist",
        "baroque", "renaissance", "modern", "contemporary", "abstract",
        "realistic", "hyperrealistic", "photorealistic", "painterly",
    ), 7),
)

# Checked in order; first substring hit wins
MODEL_CAPABILITIES: Tuple[Tuple[str, int], ...] = (
    ("openai/chatgpt5o", 90),
    ("openai/chatgpt-4", 85),
    ("google/gemini2.5-pro", 88),
    ("google/gemini-pro", 82),
    ("anthropic/claude-3", 85),
    ("midjourney", 95),
    ("stable-diffusion", 80),
    ("dall-e-3", 88),
    ("deepseek", 75),
)
DEFAULT_MODEL_CAPABILITY = 70


def has_unexpected_combination(prompt: str) -> bool:
    return len(matched_categories(prompt, COMBINATION_CATEGORIES)) >= 2


def originality_score(prompt: str) -> int:
    score = 60
    score += count_matches(prompt, CREATIVE_WORDS) * 8
    score -= count_matches(prompt, CLICHE_WORDS) * 10
    if has_unexpected_combination(prompt):
        score += 15
    return int(clamp(score))


def complexity_score(prompt: str, metadata: Optional[MediaMetadata] = None) -> int:
    score = 50

    words = word_count(prompt)
    if words > 30:
        score += 25
    elif words > 20:
        score += 20
    elif words > 10:
        score += 10
    elif words < 5:
        score -= 10

    score += min(count_matches(prompt, ELEMENTS) * 5, 25)

    if contains_any(prompt, TECHNICAL_SPECS):
        score += 10

    if metadata is not None and metadata.width and metadata.width > 2000:
        score += 5
    if contains_any(prompt, HIGH_RESOLUTION_TERMS):
        score += 5

    return int(clamp(score))


def artistic_score(prompt: str) -> int:
    score = 50
    for terms, points in ARTISTIC_TERMS:
        score += count_matches(prompt, terms) * points
    return int(clamp(score))


def model_capability_score(model: str, prompt: str) -> int:
    """Capability of the generating model, nudged by how much the prompt asks of it."""
    model = (model or "").lower()
    score = DEFAULT_MODEL_CAPABILITY
    for key, capability in MODEL_CAPABILITIES:
        if key in model:
            score = capability
            break

    words = word_count(prompt)
    if words > 25 and score >= 85:
        score += 5
    elif words < 10 and score < 80:
        score -= 5

    return int(clamp(score))


def _tiered(score: int, high: str, mid: str, low: str) -> str:
    if score >= 80:
        return high
    if score >= 60:
        return mid
    return low


def build_reasoning(originality: int, complexity: int, artistic: int, model: int, model_name: str) -> str:
    notes = [
        _tiered(
            originality,
            "Highly original and creative concept.",
            "Moderately creative approach.",
            "Conventional concept with limited originality.",
        ),
        _tiered(
            complexity,
            "Complex composition with multiple elements.",
            "Moderate complexity in design.",
            "Simple, straightforward composition.",
        ),
        _tiered(
            artistic,
            "Strong artistic direction with attention to visual elements.",
            "Some artistic considerations present.",
            "Limited artistic refinement.",
        ),
    ]

    if model >= 85:
        verdict = "which is well-suited for this type of creative work."
    elif model >= 70:
        verdict = "which provides adequate creative capabilities."
    else:
        verdict = "which may have limitations for complex creative tasks."
    notes.append(f"Generated using {model_name or 'an unknown model'}, {verdict}")

    return " ".join(notes)


def score_creativity(request: EvaluationRequest) -> ScoreOutcome:
    """Score the creative ambition of the prompt and the generator's fitness for it."""
    prompt = request.prompt.lower()

    originality = originality_score(prompt)
    complexity = complexity_score(prompt, request.metadata)
    artistic = artistic_score(prompt)
    model = model_capability_score(request.llm_model, prompt)

    score = weighted_score([
        (WEIGHTS["originality"], originality),
        (WEIGHTS["complexity"], complexity),
        (WEIGHTS["artistic"], artistic),
        (WEIGHTS["model"], model),
    ])

    return ScoreOutcome(
        score=score,
        reasoning=build_reasoning(originality, complexity, artistic, model, request.llm_model),
        details={
            "originality_score": originality,
            "complexity_score": complexity,
            "artistic_score": artistic,
            "model_score": model,
            "llm_model": request.llm_model,
        },
    )


def creativity_agent() -> HeuristicAgent:
    """Creativity agent."""
    return HeuristicAgent(
        name="creativity",
        label="creativity",
        scorer=score_creativity,
    )
