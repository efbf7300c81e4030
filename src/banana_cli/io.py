from __future__ import annotations

from pathlib import Path

from .gen.types import InputImage
from .naming import mime_type_for_path


def load_input_image(path: str | Path, cwd: Path | None = None) -> InputImage:
    p = Path(path)
    if not p.is_absolute():
        p = (cwd if cwd is not None else Path.cwd()) / p
    p = p.resolve()
    if not p.exists():
        raise FileNotFoundError(f"Input image not found: {p}")
    return InputImage(data=p.read_bytes(), mime_type=mime_type_for_path(p))


def save_image(data: bytes, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(data)
    return out_path
