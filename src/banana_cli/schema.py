from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field


Model = Literal["gemini-2.0-flash-exp", "imagen-3.0-generate-002"]

AspectRatio = Literal[
    "1:1",
    "2:3",
    "3:2",
    "3:4",
    "4:3",
    "4:5",
    "5:4",
    "9:16",
    "16:9",
    "21:9",
]

ImageSize = Literal["1K", "2K", "4K"]

DEFAULT_MODEL: Model = "gemini-2.0-flash-exp"

AVAILABLE_MODELS: tuple[str, ...] = get_args(Model)
AVAILABLE_ASPECT_RATIOS: tuple[str, ...] = get_args(AspectRatio)
AVAILABLE_IMAGE_SIZES: tuple[str, ...] = get_args(ImageSize)

MODEL_DESCRIPTIONS: dict[str, str] = {
    "gemini-2.0-flash-exp": "Gemini 2.0 Flash (experimental) - Fast, general-purpose",
    "imagen-3.0-generate-002": "Imagen 3 - High quality image generation",
}


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class InlineData(_WireModel):
    mime_type: str = Field(alias="mimeType")
    data: str


class ContentPart(_WireModel):
    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(default=None, alias="inlineData")


class Content(_WireModel):
    parts: list[ContentPart] = Field(default_factory=list)
    role: Optional[str] = None


class ImageConfig(_WireModel):
    aspect_ratio: Optional[AspectRatio] = Field(default=None, alias="aspectRatio")
    image_size: Optional[ImageSize] = Field(default=None, alias="imageSize")


class GenerationConfig(_WireModel):
    response_modalities: list[str] = Field(alias="responseModalities")
    image_config: Optional[ImageConfig] = Field(default=None, alias="imageConfig")


class GenerateContentRequest(_WireModel):
    contents: list[Content]
    generation_config: GenerationConfig = Field(alias="generationConfig")

    def to_payload(self) -> dict:
        # Unset optional blocks must be absent from the wire, not null.
        return self.model_dump(by_alias=True, exclude_none=True)


class SafetyRating(_WireModel):
    category: str
    probability: str


class PromptFeedback(_WireModel):
    block_reason: Optional[str] = Field(default=None, alias="blockReason")
    safety_ratings: list[SafetyRating] = Field(default_factory=list, alias="safetyRatings")


class Candidate(_WireModel):
    content: Optional[Content] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")
    index: Optional[int] = None


class ApiError(_WireModel):
    code: Optional[int] = None
    message: Optional[str] = None
    status: Optional[str] = None


class GenerateContentResponse(_WireModel):
    candidates: Optional[list[Candidate]] = None
    prompt_feedback: Optional[PromptFeedback] = Field(default=None, alias="promptFeedback")
    error: Optional[ApiError] = None
