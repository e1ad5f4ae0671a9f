import pytest
from PIL import Image

from ansify.sampler import PixelBuffer


def solid_buffer(width, height, rgb, alpha=255):
    r, g, b = rgb
    return PixelBuffer(width, height, bytes([r, g, b, alpha]) * (width * height))


@pytest.fixture
def make_solid():
    return solid_buffer


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    # Never read the developer's real config file.
    monkeypatch.setenv("ANSIFY_CONFIG", str(tmp_path / "missing.json"))


@pytest.fixture
def png_path(tmp_path):
    def _make(width=28, height=52, color=(255, 0, 0), name="img.png"):
        p = tmp_path / name
        Image.new("RGB", (width, height), color).save(p)
        return p
    return _make
