"""
Mood Consistency scorer.

Reads the emotional tone and atmosphere of the prompt from keyword buckets
and compares them with the brand's mood profile:

- emotional alignment (40%): shared emotions, minus conflicting pairs
- voice alignment (35%): overlap with the brand voice text plus tone cues
- atmosphere alignment (25%): brand atmosphere terms and setting cues
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from brand_agents.agents.keywords import contains_any, count_matches, split_tokens
from brand_agents.core.agent import HeuristicAgent, ScoreOutcome
from brand_agents.core.scoring import clamp, weighted_score
from brand_agents.models.request import EvaluationRequest

WEIGHTS = {
    "emotional": 0.40,
    "voice": 0.35,
    "atmosphere": 0.25,
}


@dataclass(frozen=True)
class MoodProfile:
    """Expected emotions and atmosphere for a brand."""
    emotions: Tuple[str, ...]
    atmosphere: Tuple[str, ...]
    keywords: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "emotions": list(self.emotions),
            "atmosphere": list(self.atmosphere),
            "keywords": list(self.keywords),
        }


@dataclass(frozen=True)
class PromptMood:
    """Mood read from a prompt."""
    emotions: List[str] = field(default_factory=list)
    atmosphere: List[str] = field(default_factory=list)
    intensity: int = 50

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emotions": list(self.emotions),
            "atmosphere": list(self.atmosphere),
            "intensity": self.intensity,
        }


BRAND_MOOD_PROFILES: Dict[str, MoodProfile] = {
    "ChromaBloom Studios": MoodProfile(
        emotions=("calm", "peaceful", "inspirational", "serene", "gentle"),
        atmosphere=("organic", "natural", "earthy", "sophisticated", "refined"),
        keywords=(
            "nature", "botanical", "green", "sustainable", "eco-friendly",
            "artistic", "creative", "vibrant", "colorful", "harmonious",
        ),
    ),
    "PulseForge Fitness": MoodProfile(
        emotions=("energetic", "powerful", "motivated", "intense", "dynamic"),
        atmosphere=("aggressive", "bold", "strong", "athletic", "competitive"),
        keywords=(
            "fitness", "workout", "training", "strength", "power",
            "energy", "motion", "action", "performance", "athletic",
        ),
    ),
    "Æther & Crumb": MoodProfile(
        emotions=("cozy", "comfortable", "nostalgic", "warm", "inviting"),
        atmosphere=("sophisticated", "refined", "intimate", "rustic", "elegant"),
        keywords=(
            "coffee", "bakery", "artisan", "handcrafted", "vintage",
            "gothic", "dark", "wood", "cozy", "intimate",
        ),
    ),
}

NEUTRAL_PROFILE = MoodProfile(
    emotions=("neutral", "balanced", "professional"),
    atmosphere=("modern", "clean", "simple"),
    keywords=("quality", "professional", "reliable"),
)

MOOD_BUCKETS: Dict[str, Sequence[str]] = {
    "calm": ("calm", "peaceful", "serene", "tranquil", "quiet", "gentle", "soft"),
    "energetic": ("energetic", "dynamic", "vibrant", "lively", "active", "powerful"),
    "cozy": ("cozy", "warm", "comfortable", "inviting", "intimate", "homey"),
    "dramatic": ("dramatic", "intense", "bold", "striking", "powerful", "strong"),
    "sophisticated": ("sophisticated", "elegant", "refined", "classy", "polished"),
    "playful": ("playful", "fun", "whimsical", "cheerful", "lighthearted"),
    "mysterious": ("mysterious", "dark", "moody", "enigmatic", "shadowy"),
    "nostalgic": ("vintage", "retro", "old", "nostalgic", "classic", "timeless"),
    "modern": ("modern", "contemporary", "sleek", "minimalist", "clean"),
    "natural": ("natural", "organic", "earthy", "rustic", "raw"),
}

# Buckets read as emotions; every other bucket is atmosphere
EMOTION_BUCKETS = frozenset({"calm", "energetic", "cozy", "dramatic"})

INTENSITY_MODIFIERS = (
    "very", "extremely", "highly", "incredibly", "exceptionally",
    "dramatically", "intensely", "strongly", "deeply",
)

# Prompt emotion -> brand emotions it clashes with
EMOTION_CONFLICTS: Dict[str, Sequence[str]] = {
    "calm": ("energetic", "dramatic", "intense"),
    "energetic": ("calm", "peaceful", "serene"),
    "cozy": ("aggressive", "bold", "intense"),
    "dramatic": ("calm", "gentle", "soft"),
}

TONE_INDICATORS: Dict[str, Sequence[str]] = {
    "professional": ("professional", "expert", "quality", "premium"),
    "casual": ("casual", "friendly", "relaxed", "easy"),
    "formal": ("formal", "elegant", "sophisticated", "refined"),
    "playful": ("fun", "playful", "creative", "whimsical"),
    "serious": ("serious", "important", "significant", "critical"),
}

SETTING_KEYWORDS: Dict[str, Sequence[str]] = {
    "indoor": ("indoor", "interior", "inside", "room", "studio"),
    "outdoor": ("outdoor", "exterior", "outside", "landscape", "nature"),
    "urban": ("city", "urban", "street", "building", "downtown"),
    "natural": ("nature", "forest", "mountain", "ocean", "wilderness"),
}


def brand_mood_profile(brand_name: str) -> MoodProfile:
    """Mood profile for a brand name (case-insensitive), neutral when unknown."""
    wanted = (brand_name or "").strip().lower()
    for name, profile in BRAND_MOOD_PROFILES.items():
        if name.lower() == wanted:
            return profile
    return NEUTRAL_PROFILE


def analyze_prompt_mood(prompt: str) -> PromptMood:
    """Detect emotion/atmosphere buckets and an intensity score in lower-cased prompt text."""
    emotions: List[str] = []
    atmosphere: List[str] = []
    intensity = 50

    for mood, terms in MOOD_BUCKETS.items():
        hits = count_matches(prompt, terms)
        if hits:
            (emotions if mood in EMOTION_BUCKETS else atmosphere).append(mood)
            intensity += hits * 5

    if contains_any(prompt, INTENSITY_MODIFIERS):
        intensity += 15

    return PromptMood(emotions=emotions, atmosphere=atmosphere, intensity=min(intensity, 100))


def emotional_alignment(mood: PromptMood, brand_emotions: Sequence[str]) -> int:
    """Base 60, +20 per shared emotion, -15 per conflicting prompt/brand pair."""
    if not mood.emotions:
        return 60

    matches = sum(1 for emotion in mood.emotions if emotion in brand_emotions)
    conflicts = sum(
        1
        for emotion in mood.emotions
        for brand_emotion in brand_emotions
        if brand_emotion in EMOTION_CONFLICTS.get(emotion, ())
    )
    return int(clamp(60 + matches * 20 - conflicts * 15))


def voice_alignment(prompt: str, brand_voice: str) -> float:
    """Average of brand-voice token overlap and generic tone cues, capped at 100."""
    voice_tokens = [token for token in split_tokens(brand_voice, r"[,.\s]+") if len(token) > 3]
    overlap_score = 50 + count_matches(prompt, voice_tokens) * 15

    tone_score = 50
    for terms in TONE_INDICATORS.values():
        if contains_any(prompt, terms):
            tone_score += 10

    return min(100, (overlap_score + tone_score) / 2)


def atmosphere_alignment(prompt: str, brand_atmosphere: Sequence[str]) -> int:
    """Base 50, +15 per brand atmosphere term, +5 per setting bucket."""
    score = 50 + count_matches(prompt, brand_atmosphere) * 15
    for terms in SETTING_KEYWORDS.values():
        if contains_any(prompt, terms):
            score += 5
    return int(clamp(score))


def build_reasoning(
    brand_name: str,
    mood: PromptMood,
    profile: MoodProfile,
    emotional: float,
    voice: float,
    atmosphere: float,
) -> str:
    notes = [f"Mood analysis for {brand_name or 'brand'}:"]

    if emotional >= 80:
        notes.append("Strong emotional alignment detected.")
        if mood.emotions:
            notes.append(f"Prompt conveys {', '.join(mood.emotions)} mood, matching brand expectations.")
    elif emotional >= 60:
        notes.append("Moderate emotional alignment.")
    else:
        notes.append("Limited emotional alignment with brand.")
        if mood.emotions:
            notes.append(
                f"Prompt mood ({', '.join(mood.emotions)}) may not fully align with "
                f"{', '.join(profile.emotions)}."
            )

    if voice >= 80:
        notes.append("Excellent brand voice consistency.")
    elif voice >= 60:
        notes.append("Acceptable brand voice alignment.")
    else:
        notes.append("Brand voice could be stronger.")

    if atmosphere >= 80:
        notes.append("Atmosphere perfectly matches brand identity.")
    elif atmosphere >= 60:
        notes.append("Atmosphere is generally consistent with brand.")
    else:
        notes.append("Atmosphere may need adjustment to better reflect brand.")

    return " ".join(notes)


def score_mood_consistency(request: EvaluationRequest) -> ScoreOutcome:
    """Score how well the prompt's mood matches the brand's mood profile."""
    prompt = request.prompt.lower()
    profile = brand_mood_profile(request.brand.name)
    mood = analyze_prompt_mood(prompt)

    emotional = emotional_alignment(mood, profile.emotions)
    voice = voice_alignment(prompt, request.brand.voice)
    atmosphere = atmosphere_alignment(prompt, profile.atmosphere)

    score = weighted_score([
        (WEIGHTS["emotional"], emotional),
        (WEIGHTS["voice"], voice),
        (WEIGHTS["atmosphere"], atmosphere),
    ])

    return ScoreOutcome(
        score=score,
        reasoning=build_reasoning(request.brand.name, mood, profile, emotional, voice, atmosphere),
        details={
            "prompt_mood": mood.to_dict(),
            "brand_mood_profile": profile.to_dict(),
            "emotional_score": emotional,
            "voice_score": voice,
            "atmosphere_score": atmosphere,
        },
    )


def mood_consistency_agent() -> HeuristicAgent:
    """Mood Consistency agent."""
    return HeuristicAgent(
        name="mood_consistency",
        label="mood consistency",
        scorer=score_mood_consistency,
    )
