from __future__ import annotations

import re
from pathlib import Path

import pytest

from banana_cli.naming import (
    OutputNamer,
    extension_for_mime_type,
    mime_type_for_path,
    output_filename,
)


class TestMimeTables:
    @pytest.mark.parametrize(
        "mime_type,ext",
        [
            ("image/png", ".png"),
            ("image/jpeg", ".jpg"),
            ("image/webp", ".webp"),
            ("image/gif", ".gif"),
            ("unknown/type", ".png"),
        ],
    )
    def test_extension_for_mime_type(self, mime_type: str, ext: str) -> None:
        assert extension_for_mime_type(mime_type) == ext

    @pytest.mark.parametrize(
        "path,mime_type",
        [
            ("image.png", "image/png"),
            ("/path/to/image.PNG", "image/png"),
            ("photo.jpg", "image/jpeg"),
            ("photo.JPEG", "image/jpeg"),
            ("image.webp", "image/webp"),
            ("animation.gif", "image/gif"),
            ("file.unknown", "image/png"),
            ("no_extension", "image/png"),
        ],
    )
    def test_mime_type_for_path(self, path: str, mime_type: str) -> None:
        assert mime_type_for_path(path) == mime_type


class TestOutputFilename:
    def test_generated_name_without_output(self, tmp_path: Path) -> None:
        path = output_filename(None, 0, "image/png", 1700000000000, cwd=tmp_path)
        assert path == (tmp_path / "generated_1700000000000.png").resolve()

    def test_second_generated_image_gets_suffix(self, tmp_path: Path) -> None:
        path = output_filename(None, 1, "image/png", 1700000000000, cwd=tmp_path)
        assert re.fullmatch(r"generated_\d+_2\.png", path.name)

    def test_generated_name_uses_mime_extension(self, tmp_path: Path) -> None:
        path = output_filename(None, 0, "image/jpeg", 42, cwd=tmp_path)
        assert path.name == "generated_42.jpg"

    def test_user_extension_wins_over_mime(self, tmp_path: Path) -> None:
        path = output_filename("out.jpg", 0, "image/png", 42, cwd=tmp_path)
        assert path.name == "out.jpg"
        assert str(path).endswith("out.jpg")

    def test_user_path_without_extension_uses_mime(self, tmp_path: Path) -> None:
        path = output_filename("images/result", 0, "image/webp", 42, cwd=tmp_path)
        assert path == (tmp_path / "images" / "result.webp").resolve()

    def test_user_path_index_suffix(self, tmp_path: Path) -> None:
        path = output_filename("out/pic.png", 2, "image/png", 42, cwd=tmp_path)
        assert path == (tmp_path / "out" / "pic_3.png").resolve()

    def test_absolute_user_path(self, tmp_path: Path) -> None:
        target = tmp_path / "abs" / "art.gif"
        path = output_filename(target, 0, "image/png", 42, cwd=Path("/elsewhere"))
        assert path == target.resolve()

    def test_result_is_absolute(self) -> None:
        assert output_filename("relative.png", 0, "image/png", 42).is_absolute()

    def test_same_arguments_give_same_path(self, tmp_path: Path) -> None:
        first = output_filename("out.png", 1, "image/png", 1, cwd=tmp_path)
        second = output_filename("out.png", 1, "image/png", 999, cwd=tmp_path)
        assert first == second


class TestOutputNamer:
    def test_timestamp_is_shared_across_batch(self, tmp_path: Path) -> None:
        namer = OutputNamer(cwd=tmp_path)
        first = namer.path_for(0, "image/png")
        second = namer.path_for(1, "image/png")
        assert first.stem + "_2" == second.stem

    def test_fixed_timestamp(self, tmp_path: Path) -> None:
        namer = OutputNamer(timestamp_ms=123, cwd=tmp_path)
        assert namer.path_for(0, "image/gif").name == "generated_123.gif"
        assert namer.path_for(3, "image/gif").name == "generated_123_4.gif"
