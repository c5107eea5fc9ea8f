"""Tests for brand_agents.agents.subject_adherence module."""

import pytest

from conftest import CHROMABLOOM, make_request
from brand_agents.agents.subject_adherence import (
    brand_overlap_score,
    coherence_score,
    complexity_score,
    extract_keywords,
    score_subject_adherence,
    specificity_score,
)
from brand_agents.models import BrandProfile


class TestSubScores:

    @pytest.mark.parametrize("words,score", [(25, 90), (21, 90), (20, 75), (11, 75), (6, 60), (5, 50), (0, 50)])
    def test_complexity_tiers(self, words, score):
        assert complexity_score(words) == score

    def test_specificity_tiers(self):
        assert specificity_score(True, True, True) == 95
        assert specificity_score(True, True, False) == 80
        assert specificity_score(True, False, True) == 80
        assert specificity_score(True, False, False) == 70
        assert specificity_score(False, True, True) == 60

    def test_brand_overlap(self):
        assert brand_overlap_score("green and coral leaves", "green, coral, gold", "") == 70
        assert brand_overlap_score("organic vibrant forms", "", "organic, vibrant, artistic") == 80
        assert brand_overlap_score("green coral organic vibrant artistic", "green, coral", "organic, vibrant, artistic") == 100

    def test_empty_brand_tokens_do_not_match(self):
        assert brand_overlap_score("anything at all", "", "") == 50
        assert brand_overlap_score("anything at all", " , ,", "") == 50

    def test_coherence(self):
        assert coherence_score(["portrait", "woman"]) == 95
        assert coherence_score(["portrait", "forest"]) == 85
        assert coherence_score(["portrait", "forest", "dog"]) == 70
        assert coherence_score([]) == 60

    def test_extract_keywords(self):
        assert extract_keywords("The big red dog runs in the forest") == ["runs", "forest"]
        assert len(extract_keywords(" ".join(["longword"] * 30))) == 20


class TestScoreSubjectAdherence:

    def test_detailed_on_brand_prompt(self):
        request = make_request(
            prompt=(
                "A detailed, vibrant botanical arrangement of green leaves and coral flowers "
                "in an organic artistic style with soft natural lighting"
            ),
            brand=CHROMABLOOM,
        )
        outcome = score_subject_adherence(request)

        assert outcome.details["specificity_score"] == 95
        assert outcome.details["brand_alignment"] == 100
        assert outcome.score >= 80
        assert "Strong brand alignment detected." in outcome.reasoning
        assert "Highly specific and detailed prompt." in outcome.reasoning
        assert outcome.reasoning.endswith("Expected to match ChromaBloom Studios's organic, vibrant, artistic style.")

    def test_vague_prompt_scores_lower(self):
        vague = score_subject_adherence(make_request(prompt="a thing"))
        detailed = score_subject_adherence(make_request(
            prompt="A detailed vibrant botanical arrangement with green leaves and coral flowers, organic style"
        ))
        assert vague.score < detailed.score
        assert "Limited brand alignment." in vague.reasoning

    def test_empty_prompt_and_brand(self):
        request = make_request(prompt="", brand=BrandProfile(name=""))
        outcome = score_subject_adherence(request)
        assert 0 <= outcome.score <= 100
        assert outcome.details["word_count"] == 0
        assert outcome.reasoning
