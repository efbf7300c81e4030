from __future__ import annotations

from ..schema import (
    Content,
    ContentPart,
    GenerateContentRequest,
    GenerationConfig,
    ImageConfig,
    InlineData,
)
from .codec import encode_payload
from .types import GenerationRequest

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


def endpoint_url(model: str, base_url: str = API_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{model}:generateContent"


def request_headers(api_key: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "x-goog-api-key": api_key,
    }


def build_request_body(req: GenerationRequest) -> GenerateContentRequest:
    # Text comes before the image; the model reads parts in order.
    parts = [ContentPart(text=req.prompt)]
    if req.input_image is not None:
        parts.append(
            ContentPart(
                inline_data=InlineData(
                    mime_type=req.input_image.mime_type,
                    data=encode_payload(req.input_image.data),
                )
            )
        )

    image_config = None
    if req.aspect_ratio or req.image_size:
        image_config = ImageConfig(
            aspect_ratio=req.aspect_ratio or None,
            image_size=req.image_size or None,
        )

    return GenerateContentRequest(
        contents=[Content(parts=parts)],
        generation_config=GenerationConfig(
            response_modalities=list(RESPONSE_MODALITIES),
            image_config=image_config,
        ),
    )
