import io
from collections.abc import Callable

import pytest
from PIL import Image, ImageDraw


def _image_bytes(width: int, height: int, fmt: str = "PNG") -> bytes:
    img = Image.new("RGB", (width, height), color="white")
    draw = ImageDraw.Draw(img)
    draw.text((10, 40), "sample line", fill="black")
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def make_image_bytes() -> Callable[..., bytes]:
    """Factory for in-memory images of a given size."""
    return _image_bytes


@pytest.fixture()
def scan_png_bytes() -> bytes:
    """A page-sized PNG comfortably larger than the crop margins."""
    return _image_bytes(400, 300)


@pytest.fixture()
def tiny_png_bytes() -> bytes:
    """A PNG narrower than the right crop band."""
    return _image_bytes(80, 60)
