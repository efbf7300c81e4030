from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..schema import AspectRatio, ImageSize, Model


@dataclass(frozen=True)
class InputImage:
    data: bytes = field(repr=False)
    mime_type: str


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    api_key: str = field(repr=False)
    model: Model
    aspect_ratio: Optional[AspectRatio] = None
    image_size: Optional[ImageSize] = None
    number_of_images: int = 1
    input_image: Optional[InputImage] = None


@dataclass(frozen=True)
class GeneratedImage:
    data: bytes = field(repr=False)
    mime_type: str


@dataclass(frozen=True)
class GenerationSuccess:
    images: list[GeneratedImage] = field(default_factory=list)
    text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class GenerationFailure:
    error: str
    text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False


GenerationResult = Union[GenerationSuccess, GenerationFailure]
