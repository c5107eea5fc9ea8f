"""
Pytest Configuration and Fixtures
Global test configuration and reusable test fixtures
"""

import asyncio
import json
import os
import sys

# Override environment before config.settings is imported anywhere
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "ERROR"
os.environ["ENABLE_STRUCTURED_LOGGING"] = "false"
os.environ.setdefault("OPENAI_API_KEY", "")
os.environ.setdefault("GEMINI_API_KEY", "")

import pytest
from unittest.mock import AsyncMock, MagicMock

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from brand_agents.core.agent import AgentResult, HeuristicAgent, ScoreOutcome
from brand_agents.core.llm_gateway import LLMGateway, LLMResponse
from brand_agents.models import BrandProfile, EvaluationRequest, MediaMetadata, VisionInput


CHROMABLOOM = BrandProfile(
    name="ChromaBloom Studios",
    description="Botanical design studio creating nature-inspired art",
    style="organic, vibrant, artistic",
    vision="Bringing nature's colors into everyday spaces",
    voice="Calm, inspirational, creative and harmonious",
    colors="green, coral, gold",
    brand_id="brand-chromabloom",
)

PULSEFORGE = BrandProfile(
    name="PulseForge Fitness",
    description="High-intensity training gear and coaching",
    style="bold, dynamic, athletic",
    vision="Push every athlete past their limits",
    voice="Energetic, powerful, motivating",
    colors="red, black, silver",
    brand_id="brand-pulseforge",
)


def make_request(
    prompt: str = "A vibrant botanical arrangement with green leaves and coral flowers, soft natural lighting",
    channel: str = "Instagram",
    brand: BrandProfile = CHROMABLOOM,
    width=1080,
    height=1080,
    llm_model: str = "openai/chatgpt-4",
    image: VisionInput = None,
    prompt_id: str = "prompt-123",
) -> EvaluationRequest:
    """Build an evaluation request; pass width=None to omit metadata."""
    metadata = None
    if width is not None or height is not None:
        metadata = MediaMetadata(width=width, height=height, format="png")
    return EvaluationRequest(
        asset_path="assets/generated/prompt-123.png",
        prompt=prompt,
        llm_model=llm_model,
        channel=channel,
        brand=brand,
        metadata=metadata,
        image=image,
        prompt_id=prompt_id,
    )


def llm_response(content, provider: str = "openai", model: str = "gpt-4o-mini") -> LLMResponse:
    """Gateway response wrapping a dict (serialized to JSON) or raw text."""
    if not isinstance(content, str):
        content = json.dumps(content)
    return LLMResponse(content=content, provider=provider, model=model, latency_ms=12)


def mock_provider(name: str, content=None, error: Exception = None, healthy: bool = True) -> MagicMock:
    """Provider double returning content or raising error."""
    provider = MagicMock()
    provider.name = name
    if error is not None:
        provider.generate_text = AsyncMock(side_effect=error)
        provider.generate_with_vision = AsyncMock(side_effect=error)
    else:
        response = llm_response(content or {"ok": True}, provider=name)
        provider.generate_text = AsyncMock(return_value=response)
        provider.generate_with_vision = AsyncMock(return_value=response)
    provider.health_check = AsyncMock(return_value=healthy)
    provider.close = AsyncMock()
    return provider


def fixed_agent(name: str, score: float, details: dict = None) -> HeuristicAgent:
    """Heuristic agent that always returns the same score."""
    return HeuristicAgent(
        name=name,
        label=name,
        scorer=lambda request: ScoreOutcome(score=score, reasoning=f"{name} scored {score}", details=details or {}),
    )


def failing_agent(name: str, message: str = "scorer crashed") -> HeuristicAgent:
    """Heuristic agent whose scorer always raises."""
    def scorer(request):
        raise RuntimeError(message)

    return HeuristicAgent(name=name, label=name, scorer=scorer)


class SlowAgent:
    """Agent that sleeps past any short deadline."""

    def __init__(self, name: str, delay: float = 5.0):
        self.name = name
        self.delay = delay
        self.cancelled = False

    async def evaluate(self, request):
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return AgentResult.success(score=100, reasoning="too late", agent_name=self.name)


class CapturingAgent:
    """Agent that records every request it sees."""

    def __init__(self, name: str, score: int = 70):
        self.name = name
        self.score = score
        self.requests = []

    async def evaluate(self, request):
        self.requests.append(request)
        return AgentResult.success(score=self.score, reasoning=f"{self.name} saw the request", agent_name=self.name)


BRAND_ALIGNMENT_REPLY = {
    "criteria": {
        "visualIdentity": {"score": 90, "reasoning": "Palette matches"},
        "brandVoice": {"score": 80, "reasoning": "Calm tone"},
        "brandValues": {"score": 85, "reasoning": "Nature-first"},
        "audienceAlignment": {"score": 75, "reasoning": "Design lovers"},
        "marketPositioning": {"score": 70, "reasoning": "Premium studio"},
    },
    "overallAlignment": 82,
    "brandImpact": "Reinforces the studio's botanical identity.",
    "recommendations": ["Add more coral accents"],
    "finalScore": 84,
}

CONTENT_QUALITY_REPLY = {
    "criteria": {
        "subjectAccuracy": {"score": 80, "reasoning": "Clear subject"},
        "promptClarity": {"score": 70, "reasoning": "Mostly specific"},
        "brandFit": {"score": 90, "reasoning": "On brand"},
        "channelSuitability": {"score": 60, "reasoning": "Square crop works"},
    },
    "overallAssessment": "Solid, on-brand prompt.",
}

VISION_REPLY = {
    "criteria": {
        "visualBrandAlignment": {"score": 80, "reasoning": "Colors match"},
        "contentQuality": {"score": 70, "reasoning": "Good lighting"},
        "subjectAccuracy": {"score": 90, "reasoning": "Flowers present"},
        "brandMessageCommunication": {"score": 60, "reasoning": "Message is subtle"},
    },
    "overallAssessment": "Well-composed botanical image.",
    "finalScore": 99,
}

COORDINATION_REPLY = {
    "finalScore": 78,
    "reasoning": "Strong brand fit with minor creative gaps.",
    "brandValue": "Builds recognition with the core audience.",
    "recommendations": ["Increase contrast"],
}


@pytest.fixture
def chromabloom():
    """Brand with a known mood profile."""
    return CHROMABLOOM


@pytest.fixture
def pulseforge():
    """High-energy brand with a known mood profile."""
    return PULSEFORGE


@pytest.fixture
def sample_request():
    """Well-formed Instagram request for ChromaBloom."""
    return make_request()


@pytest.fixture
def sample_image_base64():
    """Sample base64-encoded test image (1x1 white pixel PNG)."""
    return "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/5+hHgAHggJ/PchI7wAAAABJRU5ErkJggg=="


@pytest.fixture
def mock_gateway():
    """Gateway double with async text and vision calls."""
    gateway = MagicMock(spec=LLMGateway)
    gateway.generate_text = AsyncMock()
    gateway.generate_with_vision = AsyncMock()
    gateway.health_check = AsyncMock(return_value={"openai": True, "gemini": True})
    gateway.close = AsyncMock()
    gateway.order = ["openai", "gemini"]
    gateway.provider_names = ["openai", "gemini"]
    return gateway


# Pytest configuration hooks
def pytest_configure(config):
    """Pytest configuration hook."""
    # Register custom markers
    config.addinivalue_line("markers", "integration: integration tests")
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "slow: slow-running tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection."""
    for item in items:
        # Add 'unit' marker to all tests by default
        if "integration" not in item.keywords and "slow" not in item.keywords:
            item.add_marker(pytest.mark.unit)
