"""
Unit tests for brand_agents.models (request, enums and evaluation records).
"""

import pytest

from conftest import make_request
from brand_agents.core.agent import AgentResult
from brand_agents.models import (
    AgentResults,
    BrandProfile,
    Channel,
    CoordinationSummary,
    EvaluationRecord,
    EvaluationRequest,
    EvaluationStatus,
    MediaType,
    RunState,
    VisionInput,
)
from brand_agents.models.request import BrandContext


class TestChannel:

    @pytest.mark.parametrize("value", ["Instagram", "instagram", " INSTAGRAM "])
    def test_parse_case_insensitive(self, value):
        assert Channel.parse(value) is Channel.INSTAGRAM

    def test_parse_unknown(self):
        assert Channel.parse("Pinterest") is None
        assert Channel.parse("") is None
        assert Channel.parse(None) is None

    def test_parse_non_string(self):
        assert Channel.parse(123) is None
        assert Channel.parse(0) is None


class TestRunState:

    def test_terminal_states(self):
        assert RunState.COMPLETED.is_terminal
        assert RunState.FAILED.is_terminal
        assert not RunState.AGGREGATING.is_terminal


class TestEvaluationRequest:

    def test_from_dict_camel_case(self):
        request = EvaluationRequest.from_dict({
            "_id": "prompt-9",
            "imagePath": "out/video.mp4",
            "prompt": "Sprinter at dawn",
            "llmModel": "google/gemini2.5-pro",
            "channel": "TikTok",
            "metadata": {"width": 1080, "height": 1920, "fileSize": 2048},
            "brand": {
                "brandName": "PulseForge Fitness",
                "brandVoice": "Energetic",
                "style": "bold",
                "colors": "red, black",
            },
        })

        assert request.prompt_id == "prompt-9"
        assert request.asset_path == "out/video.mp4"
        assert request.llm_model == "google/gemini2.5-pro"
        assert request.metadata.height == 1920
        assert request.metadata.file_size == 2048
        assert request.brand.name == "PulseForge Fitness"
        assert request.brand.voice == "Energetic"
        assert request.known_channel is Channel.TIKTOK
        assert request.media_type is MediaType.VIDEO

    def test_from_dict_snake_case_with_image(self, sample_image_base64):
        request = EvaluationRequest.from_dict({
            "asset_path": "a.png",
            "prompt": "p",
            "llm_model": "m",
            "channel": "LinkedIn",
            "brand": {"name": "Acme"},
            "image": {"data": sample_image_base64, "mime_type": "image/png"},
        })
        assert request.image.mime_type == "image/png"
        assert request.metadata is None
        assert request.media_type is MediaType.IMAGE

    def test_from_dict_coerces_loose_documents(self):
        request = EvaluationRequest.from_dict({
            "imagePath": "out/poster.webp",
            "prompt": "Poster",
            "channel": 123,
            "metadata": {"width": "1080", "height": 1350.0, "duration": "12.5", "fileSize": "big"},
            "brand": {"brandName": "Acme"},
            "image": {"data": "aGVsbG8="},
        })

        assert request.channel == "123"
        assert request.known_channel is None
        assert request.metadata.width == 1080
        assert request.metadata.height == 1350
        assert request.metadata.duration == 12.5
        assert request.metadata.file_size is None
        assert request.image.mime_type == "image/webp"

    def test_brand_context_copies(self):
        request = make_request()
        context = BrandContext(alignment_score=80, alignment_reasoning="On brand", recommendations=["x"])

        enriched = request.with_brand_context(context)

        assert enriched.brand_context == context
        assert request.brand_context is None
        assert enriched.without_brand_context().brand_context is None

    def test_to_dict_omits_image(self, sample_image_base64):
        request = make_request(image=VisionInput(data=sample_image_base64))
        data = request.to_dict()
        assert data["has_image"] is True
        assert "image" not in data


class TestVisionInput:

    def test_data_url(self):
        image = VisionInput.from_bytes(b"\x89PNG", mime_type="image/png")
        assert image.data_url.startswith("data:image/png;base64,")
        assert image.raw_bytes == b"\x89PNG"

    def test_invalid_base64(self):
        with pytest.raises(ValueError, match="Invalid base64"):
            VisionInput(data="not base64!!").raw_bytes


class TestEvaluationRecord:

    def _agents(self, brand=None):
        ok = AgentResult.success(score=80, reasoning="ok")
        return AgentResults(
            size_compliance=ok,
            subject_adherence=ok,
            creativity=ok,
            mood_consistency=ok,
            brand_alignment=brand,
        )

    def test_items_put_brand_alignment_first(self):
        agents = self._agents(brand=AgentResult.success(score=90, reasoning="brand"))
        assert [slot for slot, _ in agents.items()] == [
            "brand_alignment",
            "size_compliance",
            "subject_adherence",
            "creativity",
            "mood_consistency",
        ]

    def test_to_dict_layout(self):
        record = EvaluationRecord(
            agents=self._agents(),
            final_score=80,
            aggregation_formula="0.20*size",
            total_execution_time_ms=12,
            strategy="fixed_weight",
            prompt_id="prompt-1",
            coordination=CoordinationSummary(reasoning="r", brand_value="v", recommendations=["a"]),
            run_states=(RunState.PENDING, RunState.COMPLETED),
        )
        data = record.to_dict()

        assert data["promptId"] == "prompt-1"
        assert data["finalScore"] == 80
        assert data["scoreLabel"] == "Good"
        assert data["status"] == "completed"
        assert data["runStates"] == ["pending", "completed"]
        assert data["coordination"]["brand_value"] == "v"
        assert set(data["agents"]) == {"size_compliance", "subject_adherence", "creativity", "mood_consistency"}
        assert record.succeeded

    def test_failed_status(self):
        record = EvaluationRecord(
            agents=self._agents(),
            final_score=0,
            aggregation_formula="",
            total_execution_time_ms=0,
            status=EvaluationStatus.FAILED,
            error="All agents failed",
        )
        assert not record.succeeded
        assert record.to_dict()["error"] == "All agents failed"


class TestBrandProfile:

    def test_from_dict_defaults(self):
        brand = BrandProfile.from_dict({"brandName": "Acme"})
        assert brand.name == "Acme"
        assert brand.colors == ""
