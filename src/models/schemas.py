"""
Request and response schemas for API endpoints.
"""
from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from brand_agents.models import BrandProfile, EvaluationRequest, MediaMetadata, VisionInput
from brand_agents.utils import mime_type_for


class CamelModel(BaseModel):
    """Accepts snake_case field names as well as the camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)


# Evaluation Schemas
class BrandSchema(CamelModel):
    """Brand the asset was generated for."""
    name: str = Field(..., alias="brandName", description="Brand name")
    description: str = Field(default="", alias="brandDescription", description="Brand description")
    style: str = Field(default="", description="Visual style keywords")
    vision: str = Field(default="", alias="brandVision", description="Brand vision statement")
    voice: str = Field(default="", alias="brandVoice", description="Brand voice keywords")
    colors: str = Field(default="", description="Brand colour keywords")
    brand_id: Optional[str] = Field(default=None, alias="brandId")

    def to_profile(self) -> BrandProfile:
        return BrandProfile(
            name=self.name,
            description=self.description,
            style=self.style,
            vision=self.vision,
            voice=self.voice,
            colors=self.colors,
            brand_id=self.brand_id,
        )


class MetadataSchema(CamelModel):
    """Technical metadata of the generated asset."""
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    format: Optional[str] = None
    duration: Optional[float] = Field(default=None, ge=0)
    file_size: Optional[int] = Field(default=None, alias="fileSize", ge=0)
    aspect_ratio: Optional[str] = Field(default=None, alias="aspectRatio")


class ImageSchema(CamelModel):
    """Base64 image payload for vision scoring."""
    data: str = Field(..., description="Base64-encoded image bytes")
    mime_type: Optional[str] = Field(default=None, alias="mimeType", description="Inferred from imagePath when omitted")


class EvaluationRequestBody(CamelModel):
    """Request to evaluate one generated asset."""
    prompt: str = Field(..., description="Generation prompt")
    channel: str = Field(default="", description="Target channel (instagram, facebook, ...)")
    llm_model: str = Field(default="", alias="llmModel", description="Model that produced the asset")
    asset_path: str = Field(default="", alias="imagePath", description="Path or URL of the asset")
    brand: BrandSchema
    metadata: Optional[MetadataSchema] = None
    image: Optional[ImageSchema] = None
    prompt_id: Optional[str] = Field(default=None, alias="promptId")
    strategy: Optional[str] = Field(default=None, description="Aggregation strategy override (fixed_weight, brand_first)")

    def to_request(self) -> EvaluationRequest:
        metadata = None
        if self.metadata is not None:
            metadata = MediaMetadata(**self.metadata.model_dump())
        image = None
        if self.image is not None:
            image = VisionInput(data=self.image.data, mime_type=self.image.mime_type or mime_type_for(self.asset_path))
        return EvaluationRequest(
            asset_path=self.asset_path,
            prompt=self.prompt,
            llm_model=self.llm_model,
            channel=self.channel,
            brand=self.brand.to_profile(),
            metadata=metadata,
            image=image,
            prompt_id=self.prompt_id,
        )


class AgentResultResponse(BaseModel):
    """Single agent outcome."""
    score: int
    reasoning: str
    execution_time_ms: int
    status: str
    error: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    agent_name: Optional[str] = None


class VisionResponse(BaseModel):
    """Vision evaluator outcome."""
    prompt_id: Optional[str] = None
    result: AgentResultResponse


class StrategiesResponse(BaseModel):
    """Available aggregation strategies."""
    default: str
    available: list[str]


# Health Check Schemas
class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = "0.1.0"
    services: dict[str, bool]


# Error Schemas
class ErrorDetail(BaseModel):
    """Error detail."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error response."""
    error: ErrorDetail
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: Optional[str] = None
