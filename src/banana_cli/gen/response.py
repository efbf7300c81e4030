from __future__ import annotations

from typing import Any, Optional

from ..schema import GenerateContentResponse
from .codec import decode_payload
from .types import GeneratedImage, GenerationFailure, GenerationResult, GenerationSuccess


def _error_message(body: Any) -> Optional[str]:
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return message if isinstance(message, str) and message else None


def interpret_response(
    ok: bool,
    status_code: int,
    reason: str,
    body: Any,
) -> GenerationResult:
    """Turn a generateContent HTTP response into a generation result.

    An error status never raises: the vendor's ``error.message`` is used when
    present, otherwise the status line.

    Raises:
        ValueError: If a successful body does not match the response schema or
            carries undecodable image data. The provider reports these as
            transport failures.
    """
    if not ok:
        return GenerationFailure(error=_error_message(body) or f"HTTP {status_code}: {reason}")

    data = GenerateContentResponse.model_validate(body if body is not None else {})

    if data.prompt_feedback and data.prompt_feedback.block_reason:
        return GenerationFailure(error=f"Content blocked: {data.prompt_feedback.block_reason}")

    if not data.candidates:
        return GenerationFailure(error="No candidates returned from API")

    images: list[GeneratedImage] = []
    text: Optional[str] = None
    for candidate in data.candidates:
        if candidate.content is None:
            continue
        for part in candidate.content.parts:
            if part.inline_data is not None:
                images.append(
                    GeneratedImage(
                        data=decode_payload(part.inline_data.data),
                        mime_type=part.inline_data.mime_type,
                    )
                )
            # Later text parts replace earlier ones.
            if part.text:
                text = part.text

    if not images:
        return GenerationFailure(
            error="No images generated. The API returned only text.",
            text=text,
        )

    return GenerationSuccess(images=images, text=text)
