from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

DEFAULT_EXTENSION = ".png"
DEFAULT_MIME_TYPE = "image/png"

MIME_EXTENSIONS: dict[str, str] = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
}

EXTENSION_MIME_TYPES: dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
}


def extension_for_mime_type(mime_type: str) -> str:
    return MIME_EXTENSIONS.get(mime_type, DEFAULT_EXTENSION)


def mime_type_for_path(path: str | Path) -> str:
    ext = str(path).lower().rsplit(".", 1)[-1]
    return EXTENSION_MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def now_ms() -> int:
    return int(time.time() * 1000)


def output_filename(
    output: Optional[str | Path],
    index: int,
    mime_type: str,
    timestamp_ms: int,
    cwd: Optional[Path] = None,
) -> Path:
    """Compute where the image at ``index`` of a result should be written.

    With a user path the directory, stem and (when present) extension come
    from it; otherwise the file lands in ``cwd`` as ``generated_<timestamp>``
    with the extension implied by ``mime_type``. Every image after the first
    gets a ``_<index+1>`` suffix before the extension.
    """
    base_dir = cwd if cwd is not None else Path.cwd()

    if output:
        out = Path(output)
        directory = base_dir / out.parent
        stem = out.stem
        ext = out.suffix or extension_for_mime_type(mime_type)
    else:
        directory = base_dir
        stem = f"generated_{timestamp_ms}"
        ext = extension_for_mime_type(mime_type)

    name = f"{stem}{ext}" if index == 0 else f"{stem}_{index + 1}{ext}"
    return (directory / name).resolve()


class OutputNamer:
    """Names every image of one invocation; the timestamp is sampled once."""

    def __init__(
        self,
        output: Optional[str | Path] = None,
        timestamp_ms: Optional[int] = None,
        cwd: Optional[Path] = None,
    ):
        self.output = output
        self.timestamp_ms = timestamp_ms if timestamp_ms is not None else now_ms()
        self.cwd = cwd

    def path_for(self, index: int, mime_type: str) -> Path:
        return output_filename(self.output, index, mime_type, self.timestamp_ms, cwd=self.cwd)
