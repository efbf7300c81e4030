from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..io import load_input_image, save_image
from ..naming import OutputNamer
from ..validate import GenerateOptions, validate_api_key, validate_options
from .config import BananaConfig
from .credentials import CredentialSource, resolve_api_key
from .provider import ImageProvider
from .providers.gemini import GeminiProvider
from .types import GenerationFailure, GenerationRequest, InputImage

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]


@dataclass
class RunResult:
    saved: list[Path] = field(default_factory=list)
    error: Optional[str] = None
    text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def _fail(message: str, text: Optional[str] = None, saved: Optional[list[Path]] = None) -> RunResult:
    logger.info("Generation stopped: %s", message)
    return RunResult(saved=saved or [], error=message, text=text)


def generate_images(
    options: GenerateOptions,
    config: Optional[BananaConfig] = None,
    credentials: Optional[CredentialSource] = None,
    provider: Optional[ImageProvider] = None,
    namer: Optional[OutputNamer] = None,
    report: Optional[Reporter] = None,
    cwd: Optional[Path] = None,
    max_images: Optional[int] = None,
) -> RunResult:
    """Run one generation: validate, request, then write every returned image.

    Nothing is sent when the credential or the options are rejected, and the
    first failed write stops the run. ``report`` receives progress lines; it
    defaults to the module logger.
    """
    if config is None:
        config = BananaConfig()
    if credentials is None:
        credentials = config.credential_source()
    if report is None:
        report = logger.info

    api_key = resolve_api_key(options.key, credentials)
    key_error = validate_api_key(api_key, credentials.name)
    if key_error:
        return _fail(key_error)

    options_error = validate_options(options)
    if options_error:
        return _fail(options_error)

    model = options.model or config.default_model
    report(f'Generating image with prompt: "{options.prompt}"')
    report(f"Model: {model}")
    if options.aspect_ratio:
        report(f"Aspect ratio: {options.aspect_ratio}")
    if options.size:
        report(f"Size: {options.size}")

    input_image: Optional[InputImage] = None
    if options.image:
        report(f"Input image: {options.image}")
        try:
            input_image = load_input_image(options.image, cwd=cwd)
        except FileNotFoundError as e:
            return _fail(str(e))
        except OSError as e:
            return _fail(f"Failed to read input image: {e}")
        report(f"Loaded input image ({input_image.mime_type})")

    request = GenerationRequest(
        prompt=options.prompt,
        api_key=api_key,
        model=model,
        aspect_ratio=options.aspect_ratio or None,
        image_size=options.size or None,
        number_of_images=options.count if options.count is not None else 1,
        input_image=input_image,
    )

    if provider is None:
        provider = GeminiProvider(base_url=config.base_url)
    logger.info("Requesting %s from %s", model, provider.provider_id)
    result = provider.generate(request)

    if isinstance(result, GenerationFailure):
        return _fail(result.error, text=result.text)

    if not result.images:
        return _fail("No images were generated", text=result.text)

    images = result.images if max_images is None else result.images[:max_images]
    if namer is None:
        namer = OutputNamer(options.output, cwd=cwd)

    run = RunResult(text=result.text)
    for i, image in enumerate(images):
        out_path = namer.path_for(i, image.mime_type)
        try:
            save_image(image.data, out_path)
        except OSError as e:
            return _fail(f"Error saving image {i + 1}: {e}", text=result.text, saved=run.saved)
        run.saved.append(out_path)
        report(f"Image saved: {out_path}")

    return run
