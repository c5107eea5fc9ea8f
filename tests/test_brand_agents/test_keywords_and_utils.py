"""Tests for keyword helpers and shared utilities."""

import pytest

from brand_agents.agents.keywords import (
    contains_any,
    count_matches,
    matched_categories,
    matching_terms,
    split_tokens,
    word_count,
)
from brand_agents.models import MediaType
from brand_agents.utils import media_type_for, mime_type_for, score_label, truncate_text


class TestKeywords:

    def test_word_count(self):
        assert word_count("a  calm\tgarden\n") == 3
        assert word_count("") == 0
        assert word_count("   ") == 0

    def test_substring_matching(self):
        assert contains_any("soft lighting", ("light",))
        assert count_matches("soft lighting", ("light", "lighting", "dark")) == 2
        assert matching_terms("soft lighting", ("dark", "soft", "light")) == ["soft", "light"]

    def test_matched_categories(self):
        categories = {"tech": ("robot",), "nature": ("forest",), "modern": ("sleek",)}
        assert matched_categories("robot in a forest", categories) == ["tech", "nature"]

    def test_split_tokens(self):
        assert split_tokens("Green, Coral  gold") == ["green", "coral", "gold"]
        assert split_tokens("") == []
        assert split_tokens("Calm. Bold", r"[,.\s]+") == ["calm", "bold"]


class TestUtils:

    @pytest.mark.parametrize(
        "path,media_type",
        [
            ("assets/clip.MP4", MediaType.VIDEO),
            ("clip.webm", MediaType.VIDEO),
            ("image.png", MediaType.IMAGE),
            ("no-extension", MediaType.IMAGE),
            ("", MediaType.IMAGE),
            (None, MediaType.IMAGE),
        ],
    )
    def test_media_type_for(self, path, media_type):
        assert media_type_for(path) is media_type

    def test_mime_type_for(self):
        assert mime_type_for("a.PNG") == "image/png"
        assert mime_type_for("a.bmp") == "image/jpeg"

    @pytest.mark.parametrize(
        "score,label",
        [(95, "Excellent"), (90, "Excellent"), (85, "Good"), (72, "Fair"), (60, "Needs Improvement"), (10, "Poor")],
    )
    def test_score_label(self, score, label):
        assert score_label(score) == label

    def test_truncate_text(self):
        assert truncate_text("short", 10) == "short"
        assert truncate_text("abcdefghij", 4) == "abcd..."
