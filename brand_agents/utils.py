"""
Small helpers shared by the engine and its display/persistence callers.
"""

from pathlib import PurePosixPath
from typing import Optional

from brand_agents.models.enums import MediaType

VIDEO_EXTENSIONS = {"mp4", "webm", "ogg", "mov"}

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def media_type_for(path: Optional[str]) -> MediaType:
    """Classify an asset path as image or video by its extension."""
    suffix = PurePosixPath(path or "").suffix.lstrip(".").lower()
    if suffix in VIDEO_EXTENSIONS:
        return MediaType.VIDEO
    return MediaType.IMAGE


def mime_type_for(path: Optional[str]) -> str:
    """Image MIME type for a path; unknown extensions are treated as JPEG."""
    suffix = PurePosixPath(path or "").suffix.lower()
    return MIME_TYPES.get(suffix, "image/jpeg")


def score_label(score: int) -> str:
    """Human label for a 0-100 score."""
    if score >= 90:
        return "Excellent"
    if score >= 80:
        return "Good"
    if score >= 70:
        return "Fair"
    if score >= 60:
        return "Needs Improvement"
    return "Poor"


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to max_length characters, appending an ellipsis when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
