from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .schema import AVAILABLE_ASPECT_RATIOS, AVAILABLE_IMAGE_SIZES, AVAILABLE_MODELS

MIN_API_KEY_LENGTH = 10
MIN_COUNT = 1
MAX_COUNT = 4


@dataclass(frozen=True)
class GenerateOptions:
    """Options collected from the command line or an MCP tool call.

    Values are kept as the caller gave them; ``validate_options`` decides
    whether they belong to the supported sets.
    """

    prompt: Optional[str] = None
    key: Optional[str] = None
    output: Optional[Path] = None
    model: Optional[str] = None
    aspect_ratio: Optional[str] = None
    size: Optional[str] = None
    count: Union[int, str, None] = 1
    image: Optional[Path] = None


def parse_count(raw: Optional[str]) -> Union[int, str, None]:
    """Parse a count the way the CLI receives it; unparseable text is returned as-is."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return raw


def _is_valid_count(count: Union[int, str, None]) -> bool:
    if isinstance(count, bool) or not isinstance(count, int):
        return False
    return MIN_COUNT <= count <= MAX_COUNT


def validate_options(options: GenerateOptions) -> Optional[str]:
    if not options.prompt or not options.prompt.strip():
        return "Prompt is required. Use -i or --input to specify a prompt."

    if options.model and options.model not in AVAILABLE_MODELS:
        return f"Invalid model. Available models: {', '.join(AVAILABLE_MODELS)}"

    if options.aspect_ratio and options.aspect_ratio not in AVAILABLE_ASPECT_RATIOS:
        return f"Invalid aspect ratio. Available ratios: {', '.join(AVAILABLE_ASPECT_RATIOS)}"

    if options.size and options.size not in AVAILABLE_IMAGE_SIZES:
        return f"Invalid size. Available sizes: {', '.join(AVAILABLE_IMAGE_SIZES)}"

    if options.count is not None and not _is_valid_count(options.count):
        return f"Count must be a number between {MIN_COUNT} and {MAX_COUNT}."

    return None


def validate_api_key(api_key: Optional[str], env_var: str = "GEMINI_API_KEY") -> Optional[str]:
    if not api_key:
        return f"API key is required. Set {env_var} environment variable or use -k/--key option."
    if len(api_key) < MIN_API_KEY_LENGTH:
        return "API key appears to be invalid (too short)."
    return None
