"""
Evaluation request models.

An EvaluationRequest is assembled by the caller from a persisted prompt
record joined with its brand record. It is immutable for one run; the
brand-first strategy derives a copy carrying brand context.
"""

import base64
import binascii
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

from brand_agents.models.enums import Channel, MediaType
from brand_agents.utils import media_type_for, mime_type_for


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key, accepting snake_case and camelCase documents."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _number(value: Any, cast: Callable[[float], Any]) -> Any:
    """Coerce a stored numeric field; None when absent or unparseable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return cast(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class BrandProfile:
    """Descriptive record of a brand's identity, used as scoring context."""
    name: str
    description: str = ""
    style: str = ""
    vision: str = ""
    voice: str = ""
    colors: str = ""
    brand_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "brand_id": self.brand_id,
            "name": self.name,
            "description": self.description,
            "style": self.style,
            "vision": self.vision,
            "voice": self.voice,
            "colors": self.colors,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrandProfile":
        """Create from a brand document (snake_case or persisted camelCase)."""
        return cls(
            name=_pick(data, "name", "brand_name", "brandName", default=""),
            description=_pick(data, "description", "brand_description", "brandDescription", default=""),
            style=_pick(data, "style", default=""),
            vision=_pick(data, "vision", "brand_vision", "brandVision", default=""),
            voice=_pick(data, "voice", "brand_voice", "brandVoice", default=""),
            colors=_pick(data, "colors", default=""),
            brand_id=_pick(data, "brand_id", "brandId"),
        )


@dataclass(frozen=True)
class MediaMetadata:
    """Optional technical metadata of the generated asset."""
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None
    duration: Optional[float] = None
    file_size: Optional[int] = None
    aspect_ratio: Optional[str] = None

    @property
    def has_dimensions(self) -> bool:
        """True when both dimensions are known and non-zero."""
        return bool(self.width) and bool(self.height)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "format": self.format,
            "duration": self.duration,
            "file_size": self.file_size,
            "aspect_ratio": self.aspect_ratio,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaMetadata":
        """Create from dictionary."""
        return cls(
            width=_number(_pick(data, "width"), int),
            height=_number(_pick(data, "height"), int),
            format=_pick(data, "format"),
            duration=_number(_pick(data, "duration"), float),
            file_size=_number(_pick(data, "file_size", "fileSize"), int),
            aspect_ratio=_pick(data, "aspect_ratio", "aspectRatio"),
        )


@dataclass(frozen=True)
class VisionInput:
    """
    Base64 image payload handed in by the caller for vision scoring.

    Reading the file is the caller's job; the engine only forwards the
    payload to a vision-capable provider.
    """
    data: str
    mime_type: str = "image/jpeg"

    @property
    def data_url(self) -> str:
        """Inline data URL, as expected by OpenAI image_url parts."""
        return f"data:{self.mime_type};base64,{self.data}"

    @property
    def raw_bytes(self) -> bytes:
        """Decoded image bytes."""
        try:
            return base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 image payload: {e}") from e

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str = "image/jpeg") -> "VisionInput":
        """Encode raw image bytes."""
        return cls(data=base64.b64encode(raw).decode("ascii"), mime_type=mime_type)


@dataclass(frozen=True)
class BrandContext:
    """Brand alignment output shared with the core agents in the brand-first strategy."""
    alignment_score: int
    alignment_reasoning: str
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "alignment_score": self.alignment_score,
            "alignment_reasoning": self.alignment_reasoning,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class EvaluationRequest:
    """Everything one evaluation run needs."""
    asset_path: str
    prompt: str
    llm_model: str
    channel: str
    brand: BrandProfile
    metadata: Optional[MediaMetadata] = None
    image: Optional[VisionInput] = None
    brand_context: Optional[BrandContext] = None
    prompt_id: Optional[str] = None

    @property
    def known_channel(self) -> Optional[Channel]:
        """The channel as an enum member, None when not one of the known channels."""
        return Channel.parse(self.channel)

    @property
    def media_type(self) -> MediaType:
        """Image or video, from the asset path."""
        return media_type_for(self.asset_path)

    def with_brand_context(self, context: BrandContext) -> "EvaluationRequest":
        """Copy of this request carrying brand context."""
        return replace(self, brand_context=context)

    def without_brand_context(self) -> "EvaluationRequest":
        """Copy of this request with brand context removed."""
        return replace(self, brand_context=None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (image payload omitted)."""
        return {
            "prompt_id": self.prompt_id,
            "asset_path": self.asset_path,
            "prompt": self.prompt,
            "llm_model": self.llm_model,
            "channel": self.channel,
            "media_type": self.media_type.value,
            "brand": self.brand.to_dict(),
            "metadata": self.metadata.to_dict() if self.metadata else None,
            "has_image": self.image is not None,
            "brand_context": self.brand_context.to_dict() if self.brand_context else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EvaluationRequest":
        """
        Create from a prompt document joined with its brand.

        Accepts both snake_case keys and the persisted camelCase layout
        (imagePath, llmModel, brand.brandName, ...).
        """
        metadata_data = _pick(data, "metadata")
        image_data = _pick(data, "image")
        asset_path = str(_pick(data, "asset_path", "image_path", "imagePath", default=""))
        image = None
        if image_data:
            image = VisionInput(
                data=_pick(image_data, "data", "base64"),
                mime_type=_pick(image_data, "mime_type", "mimeType", default=mime_type_for(asset_path)),
            )

        return cls(
            asset_path=asset_path,
            prompt=str(_pick(data, "prompt", default="")),
            llm_model=str(_pick(data, "llm_model", "llmModel", default="")),
            channel=str(_pick(data, "channel", default="")),
            brand=BrandProfile.from_dict(_pick(data, "brand", default={})),
            metadata=MediaMetadata.from_dict(metadata_data) if metadata_data else None,
            image=image,
            prompt_id=_pick(data, "prompt_id", "promptId", "_id"),
        )
