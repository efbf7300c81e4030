"""MCP server exposing image generation as tools.

Runs over stdio, so anything human-readable goes to stderr.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from rich.console import Console

from .gen.config import BananaConfig, resolve_config
from .gen.credentials import CredentialSource
from .gen.generate import generate_images
from .gen.provider import ImageProvider
from .logging_utils import configure_logging
from .schema import AVAILABLE_ASPECT_RATIOS, AVAILABLE_IMAGE_SIZES, AVAILABLE_MODELS, DEFAULT_MODEL
from .validate import GenerateOptions

SERVER_NAME = "banana-mcp"
API_KEY_URL = "https://aistudio.google.com/apikey"

logger = logging.getLogger(__name__)

_MODEL_PROPERTY = {
    "type": "string",
    "enum": list(AVAILABLE_MODELS),
    "description": f"Model to use for generation. Default: {DEFAULT_MODEL}",
}

TOOLS = [
    types.Tool(
        name="generate_image",
        description=(
            "Generate an image from a text description using Google Gemini's image generation API. "
            "Returns the path to the generated image file."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Text description of the image to generate",
                },
                "output": {
                    "type": "string",
                    "description": (
                        "Output file path (e.g., 'image.png'). "
                        "If not provided, generates a timestamped filename."
                    ),
                },
                "model": _MODEL_PROPERTY,
                "aspectRatio": {
                    "type": "string",
                    "enum": list(AVAILABLE_ASPECT_RATIOS),
                    "description": "Aspect ratio of the output image",
                },
                "size": {
                    "type": "string",
                    "enum": list(AVAILABLE_IMAGE_SIZES),
                    "description": "Output image resolution",
                },
            },
            "required": ["prompt"],
        },
    ),
    types.Tool(
        name="modify_image",
        description=(
            "Modify an existing image based on a text description. "
            "Takes an input image and transforms it according to the prompt. "
            "Use for style transfer, adding elements, changing colors, etc."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": (
                        "Instructions for how to modify the image "
                        "(e.g., 'Make it look like a watercolor painting')"
                    ),
                },
                "inputImage": {
                    "type": "string",
                    "description": "Path to the input image file to modify",
                },
                "output": {
                    "type": "string",
                    "description": (
                        "Output file path for the modified image. "
                        "If not provided, generates a timestamped filename."
                    ),
                },
                "model": _MODEL_PROPERTY,
            },
            "required": ["prompt", "inputImage"],
        },
    ),
]


class ToolFailure(Exception):
    pass


class ToolCallError(Exception):
    """Raised with the JSON error payload as its message.

    The MCP server reports the message verbatim as the text of an ``isError``
    result.
    """


def _require_api_key(credentials: CredentialSource) -> str:
    api_key = credentials.get()
    if not api_key:
        raise ToolFailure(
            f"{credentials.name} environment variable is required. "
            f"Get your API key from {API_KEY_URL}"
        )
    return api_key


def _generate_first_image(
    options: GenerateOptions,
    config: BananaConfig,
    credentials: CredentialSource,
    provider: Optional[ImageProvider],
    cwd: Optional[Path],
    fallback_error: str,
) -> tuple[Path, Optional[str]]:
    run = generate_images(
        options,
        config=config,
        credentials=credentials,
        provider=provider,
        cwd=cwd,
        max_images=1,
    )
    if not run.ok or not run.saved:
        raise ToolFailure(run.error or fallback_error)
    return run.saved[0], run.text


def handle_generate_image(
    prompt: str,
    output: Optional[str] = None,
    model: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
    size: Optional[str] = None,
    config: Optional[BananaConfig] = None,
    credentials: Optional[CredentialSource] = None,
    provider: Optional[ImageProvider] = None,
    cwd: Optional[Path] = None,
) -> dict[str, Any]:
    if config is None:
        config = resolve_config()
    if credentials is None:
        credentials = config.credential_source()

    options = GenerateOptions(
        prompt=prompt,
        key=_require_api_key(credentials),
        output=Path(output) if output else None,
        model=model,
        aspect_ratio=aspect_ratio,
        size=size,
    )
    path, text = _generate_first_image(
        options, config, credentials, provider, cwd, "Failed to generate image"
    )

    payload: dict[str, Any] = {
        "success": True,
        "path": str(path),
        "message": f"Image generated successfully: {path}",
    }
    if text:
        payload["description"] = text
    return payload


def handle_modify_image(
    prompt: str,
    input_image: str,
    output: Optional[str] = None,
    model: Optional[str] = None,
    config: Optional[BananaConfig] = None,
    credentials: Optional[CredentialSource] = None,
    provider: Optional[ImageProvider] = None,
    cwd: Optional[Path] = None,
) -> dict[str, Any]:
    if config is None:
        config = resolve_config()
    if credentials is None:
        credentials = config.credential_source()

    api_key = _require_api_key(credentials)
    input_path = Path(input_image)
    if not input_path.is_absolute():
        input_path = (cwd if cwd is not None else Path.cwd()) / input_path
    input_path = input_path.resolve()

    options = GenerateOptions(
        prompt=prompt,
        key=api_key,
        output=Path(output) if output else None,
        model=model,
        image=input_path,
    )
    path, text = _generate_first_image(
        options, config, credentials, provider, cwd, "Failed to modify image"
    )

    payload: dict[str, Any] = {
        "success": True,
        "path": str(path),
        "message": f"Image modified successfully: {path}",
        "inputImage": str(input_path),
    }
    if text:
        payload["description"] = text
    return payload


def _required(arguments: dict[str, Any], name: str) -> str:
    value = arguments.get(name)
    if not isinstance(value, str):
        raise ToolFailure(f"Missing required argument: {name}")
    return value


def dispatch_tool(name: str, arguments: dict[str, Any]) -> str:
    """Run a tool by name and return its JSON result text.

    Raises:
        ToolCallError: With ``{"success": false, "error": ...}`` as the message.
    """
    try:
        if name == "generate_image":
            payload = handle_generate_image(
                prompt=_required(arguments, "prompt"),
                output=arguments.get("output"),
                model=arguments.get("model"),
                aspect_ratio=arguments.get("aspectRatio"),
                size=arguments.get("size"),
            )
        elif name == "modify_image":
            payload = handle_modify_image(
                prompt=_required(arguments, "prompt"),
                input_image=_required(arguments, "inputImage"),
                output=arguments.get("output"),
                model=arguments.get("model"),
            )
        else:
            raise ToolFailure(f"Unknown tool: {name}")
    except Exception as e:
        logger.warning("Tool %s failed: %s", name, e)
        raise ToolCallError(json.dumps({"success": False, "error": str(e)})) from e
    return json.dumps(payload)


server: Server = Server(SERVER_NAME)


@server.list_tools()
async def list_tools() -> list[types.Tool]:
    return TOOLS


@server.call_tool()
async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=dispatch_tool(name, arguments or {}))]


async def serve() -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    configure_logging()
    Console(stderr=True).print("Banana MCP server started")
    asyncio.run(serve())


if __name__ == "__main__":
    main()
