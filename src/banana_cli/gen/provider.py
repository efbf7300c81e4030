from __future__ import annotations

from abc import ABC, abstractmethod

from .types import GenerationRequest, GenerationResult


class ImageProvider(ABC):
    @property
    @abstractmethod
    def provider_id(self) -> str: ...

    @abstractmethod
    def generate(self, req: GenerationRequest) -> GenerationResult:
        """Send one generation request and return the interpreted result."""
        raise NotImplementedError
