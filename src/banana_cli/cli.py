from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .gen.config import ConfigError, resolve_config
from .gen.generate import generate_images
from .logging_utils import configure_logging
from .schema import (
    AVAILABLE_ASPECT_RATIOS,
    AVAILABLE_IMAGE_SIZES,
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    MODEL_DESCRIPTIONS,
)
from .validate import GenerateOptions, parse_count

HELP = """Generate images using the Google Gemini API (nano-banana).

Examples:

  $ banana -i "A cute monkey eating a banana"

  $ banana -i "A sunset over mountains" -o sunset.png

  $ banana -i "Abstract art" --aspect-ratio 16:9 --size 2K

  $ banana -i "Make it a watercolor" --image photo.jpg
"""

app = typer.Typer(add_completion=False, help=HELP)
console = Console(soft_wrap=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"banana {__version__}")
        raise typer.Exit()


def _print_models() -> None:
    table = Table(title="Models")
    table.add_column("Model")
    table.add_column("Description")
    for name in AVAILABLE_MODELS:
        table.add_row(name, MODEL_DESCRIPTIONS[name])
    console.print(table)
    console.print(f"Aspect ratios: {', '.join(AVAILABLE_ASPECT_RATIOS)}")
    console.print(f"Sizes: {', '.join(AVAILABLE_IMAGE_SIZES)}")


def _report(line: str) -> None:
    console.print(escape(line))


@app.command()
def generate(
    prompt: Optional[str] = typer.Option(None, "-i", "--input", help="Image generation prompt (required)"),
    key: Optional[str] = typer.Option(
        None, "-k", "--key", help="Gemini API key (defaults to the GEMINI_API_KEY env variable)"
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output file path (defaults to generated_<timestamp>.png)"
    ),
    model: Optional[str] = typer.Option(
        None, "-m", "--model", help=f"Model to use: {', '.join(AVAILABLE_MODELS)} [default: {DEFAULT_MODEL}]"
    ),
    aspect_ratio: Optional[str] = typer.Option(
        None, "-a", "--aspect-ratio", help=f"Aspect ratio: {', '.join(AVAILABLE_ASPECT_RATIOS)}"
    ),
    size: Optional[str] = typer.Option(None, "-s", "--size", help=f"Image size: {', '.join(AVAILABLE_IMAGE_SIZES)}"),
    count: str = typer.Option("1", "-n", "--count", help="Number of images to generate (1-4)"),
    image: Optional[Path] = typer.Option(None, "--image", help="Input image path for image-to-image modification"),
    config: Optional[Path] = typer.Option(None, "--config", dir_okay=False, help="Path to banana.toml"),
    list_models: bool = typer.Option(False, "--list-models", help="Show models, aspect ratios and sizes"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Generate one or more images from a text prompt."""
    configure_logging(verbose)

    if list_models:
        _print_models()
        raise typer.Exit(code=0)

    try:
        cfg = resolve_config(config)
    except ConfigError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    options = GenerateOptions(
        prompt=prompt,
        key=key,
        output=output,
        model=model,
        aspect_ratio=aspect_ratio,
        size=size,
        count=parse_count(count),
        image=image,
    )
    run = generate_images(options, config=cfg, report=_report)

    if not run.ok:
        console.print(f"[bold red]Error:[/bold red] {escape(run.error or '')}")
        if run.text:
            console.print(f"API response text: {escape(run.text)}")
        raise typer.Exit(code=1)

    if run.text:
        console.print(f"\nAPI response: {escape(run.text)}")

    console.print(f"\n[bold green]Successfully generated {len(run.saved)} image(s).[/bold green]")
    raise typer.Exit(code=0)


if __name__ == "__main__":
    app()
