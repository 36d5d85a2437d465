import io
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image


def _image_bytes(color: tuple[int, int, int], fmt: str, size: tuple[int, int]) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A small solid-red PNG."""
    return _image_bytes((255, 0, 0), "PNG", (16, 16))


@pytest.fixture()
def make_image_file(tmp_path: Path) -> Callable[..., Path]:
    """Write a solid-color image to tmp_path and return its path."""

    def _make(
        name: str = "scan.png",
        color: tuple[int, int, int] = (255, 255, 255),
        size: tuple[int, int] = (32, 32),
    ) -> Path:
        fmt = "JPEG" if name.lower().endswith((".jpg", ".jpeg")) else "PNG"
        path = tmp_path / name
        path.write_bytes(_image_bytes(color, fmt, size))
        return path

    return _make
