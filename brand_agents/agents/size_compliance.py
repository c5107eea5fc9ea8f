"""
Size Compliance scorer.

Compares the asset's dimensions with the expected size for its publishing
channel. Missing dimensions are not an error: the scorer returns a neutral
50 and says why.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from brand_agents.core.agent import HeuristicAgent, ScoreOutcome
from brand_agents.models.enums import Channel
from brand_agents.models.request import EvaluationRequest

NEUTRAL_SCORE = 50


@dataclass(frozen=True)
class ExpectedSize:
    """Expected width/height for a channel, with relative size tolerance."""
    width: int
    height: int
    tolerance: float

    @property
    def ratio(self) -> float:
        return self.width / self.height

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height, "tolerance": self.tolerance}


CHANNEL_SIZES: Dict[Channel, ExpectedSize] = {
    Channel.INSTAGRAM: ExpectedSize(1080, 1080, 0.10),  # square
    Channel.TIKTOK: ExpectedSize(1080, 1920, 0.10),  # 9:16
    Channel.LINKEDIN: ExpectedSize(1200, 627, 0.10),  # ~1.91:1
    Channel.FACEBOOK: ExpectedSize(1200, 630, 0.10),  # ~1.91:1
}

DEFAULT_SIZE = ExpectedSize(1200, 1200, 0.15)

# (max ratio deviation, score, verdict)
RATIO_TIERS = (
    (0.05, 100, "Perfect aspect ratio match for {channel}."),
    (0.15, 90, "Good aspect ratio for {channel}."),
    (0.30, 75, "Acceptable aspect ratio for {channel}."),
)
RATIO_FLOOR = (50, "Aspect ratio deviates significantly from {channel} standards.")

MODERATE_SIZE_DEVIATION = 0.25


def expected_size_for(channel: Optional[str]) -> ExpectedSize:
    """Expected size for a channel name; unknown channels get the default."""
    known = Channel.parse(channel)
    if known is None:
        return DEFAULT_SIZE
    return CHANNEL_SIZES.get(known, DEFAULT_SIZE)


def ratio_tier(ratio_deviation: float) -> tuple:
    """(score, verdict template) for an aspect-ratio deviation."""
    for limit, score, verdict in RATIO_TIERS:
        if ratio_deviation <= limit:
            return score, verdict
    return RATIO_FLOOR


def score_size_compliance(request: EvaluationRequest) -> ScoreOutcome:
    """Score the asset's dimensions against its channel's expected size."""
    expected = expected_size_for(request.channel)
    metadata = request.metadata
    width = (metadata.width if metadata else None) or 0
    height = (metadata.height if metadata else None) or 0
    actual = {"width": width, "height": height}

    if not width or not height:
        return ScoreOutcome(
            score=NEUTRAL_SCORE,
            reasoning="Unable to determine image dimensions. Metadata not available.",
            details={"expected": expected.to_dict(), "actual": actual},
        )

    ratio_deviation = abs(expected.ratio - width / height) / expected.ratio
    width_deviation = abs(width - expected.width) / expected.width
    height_deviation = abs(height - expected.height) / expected.height
    avg_deviation = (width_deviation + height_deviation) / 2

    channel = request.channel
    score, verdict = ratio_tier(ratio_deviation)
    notes = [verdict.format(channel=channel)]

    if avg_deviation <= expected.tolerance:
        notes.append("Dimensions are within acceptable range.")
    elif avg_deviation <= MODERATE_SIZE_DEVIATION:
        score = max(score - 10, 0)
        notes.append("Dimensions are slightly off from optimal size.")
    else:
        score = max(score - 20, 0)
        notes.append("Dimensions differ significantly from optimal size.")

    if width >= expected.width and height >= expected.height:
        score = min(score + 5, 100)
        notes.append("High resolution detected.")

    notes.append(
        f"Actual: {width}x{height}, Expected: {expected.width}x{expected.height} for {channel}."
    )
    return ScoreOutcome(
        score=score,
        reasoning=" ".join(notes),
        details={
            "expected": expected.to_dict(),
            "actual": actual,
            "ratio_deviation": f"{ratio_deviation:.3f}",
            "avg_deviation": f"{avg_deviation:.3f}",
        },
    )


def size_compliance_agent() -> HeuristicAgent:
    """Size Compliance agent."""
    return HeuristicAgent(
        name="size_compliance",
        label="size compliance",
        scorer=score_size_compliance,
    )
