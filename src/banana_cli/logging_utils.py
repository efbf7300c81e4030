from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Route log records to stderr through rich.

    stdout stays free for command output and, in the MCP server, for the
    protocol stream.
    """
    if console is None:
        console = Console(stderr=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.INFO if verbose else logging.WARNING)
