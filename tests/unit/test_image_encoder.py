import base64
import io
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from omniextract.imaging.encoder import ImageEncoder, contrast_factor, enhance
from omniextract.imaging.exceptions import EncodingError


def _decode(payload: str) -> Image.Image:
    return Image.open(io.BytesIO(base64.b64decode(payload)))


class TestContrast:
    def test_zero_contrast_is_identity_factor(self) -> None:
        assert contrast_factor(0) == pytest.approx(1.0)

    def test_default_contrast_slightly_stretches(self) -> None:
        assert contrast_factor(1.2) > 1.0

    def test_enhance_converts_to_grayscale(self) -> None:
        image = Image.new("RGB", (4, 4), (255, 0, 0))
        assert enhance(image, 0).mode == "L"

    def test_enhance_keeps_luma_without_contrast(self) -> None:
        image = Image.new("RGB", (4, 4), (0, 255, 0))
        expected = image.convert("L").getpixel((0, 0))
        assert enhance(image, 0).getpixel((0, 0)) == expected

    def test_enhance_clamps_to_valid_range(self) -> None:
        dark = Image.new("RGB", (2, 2), (255, 0, 0))
        light = Image.new("RGB", (2, 2), (255, 255, 255))
        assert enhance(dark, 255).getpixel((0, 0)) == 0
        assert enhance(light, 255).getpixel((0, 0)) == 255


class TestEncode:
    def test_encodes_file_path_as_base64_jpeg(
        self, make_image_file: Callable[..., Path]
    ) -> None:
        path = make_image_file("card.png", color=(10, 200, 30))
        payload = ImageEncoder(enhance_images=False).encode(path)
        decoded = _decode(payload)
        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"
        assert decoded.size == (32, 32)

    def test_encodes_raw_bytes(self, png_bytes: bytes) -> None:
        payload = ImageEncoder().encode(png_bytes)
        assert not payload.startswith("data:")
        assert _decode(payload).format == "JPEG"

    def test_enhanced_output_is_grayscale(self, png_bytes: bytes) -> None:
        payload = ImageEncoder(enhance_images=True).encode(png_bytes)
        assert _decode(payload).mode == "L"

    def test_is_deterministic(self, png_bytes: bytes) -> None:
        encoder = ImageEncoder()
        assert encoder.encode(png_bytes) == encoder.encode(png_bytes)


class TestEncodeErrors:
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(EncodingError, match="not found"):
            ImageEncoder().encode(tmp_path / "missing.png")

    def test_undecodable_bytes_raise(self) -> None:
        with pytest.raises(EncodingError, match="Cannot decode"):
            ImageEncoder().encode(b"definitely not an image")

    def test_oversized_image_raises(
        self, png_bytes: bytes, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        with pytest.raises(EncodingError, match="too large"):
            ImageEncoder().encode(png_bytes)
