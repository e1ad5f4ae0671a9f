import pytest
from PIL import Image

from ansify.classifier import GlyphClass
from ansify.config import make_art_config
from ansify.errors import EmptyImageError
from ansify.pipeline import ansify_buffer, ansify_image
from ansify.sampler import PixelBuffer


def _flatten(rows):
    return [b for row in rows for b in row]


def test_red_2x2_with_shading_is_shaded(make_solid):
    rows = list(ansify_buffer(make_solid(28, 52, (255, 0, 0)),
                              {"shading": True, "ignoreWhitespaces": True, "legacyStyle": False}))
    assert len(rows) == 2
    blocks = _flatten(rows)
    assert len(blocks) == 4
    assert all(b.hex == "#ff0000" for b in blocks)
    assert all(b.glyph_class is GlyphClass.SHADED for b in blocks)


def test_red_2x2_legacy_without_shading(make_solid):
    blocks = _flatten(ansify_buffer(make_solid(28, 52, (255, 0, 0)),
                                    {"legacyStyle": True, "shading": False}))
    assert len(blocks) == 4
    assert all(b.glyph_class is GlyphClass.SHADED for b in blocks)


@pytest.mark.parametrize("opts", [
    {"ignore_whitespaces": True},
    {"ignore_whitespaces": True, "shading": True},
    {"ignore_whitespaces": True, "legacy_style": True},
    {"ignore_whitespaces": True, "shading": True, "legacy_style": True, "brightness_threshold": 255},
])
def test_white_image_is_all_whitespace(make_solid, opts):
    blocks = _flatten(ansify_buffer(make_solid(28, 52, (255, 255, 255)), opts))
    assert len(blocks) == 4
    assert all(b.glyph_class is GlyphClass.WHITESPACE for b in blocks)


def test_gray_at_threshold(make_solid):
    blocks = _flatten(ansify_buffer(make_solid(14, 26, (125, 125, 125)), make_art_config({"shading": True})))
    assert [b.glyph_class for b in blocks] == [GlyphClass.SHADED]


def test_custom_cell_size(make_solid):
    rows = list(ansify_buffer(make_solid(10, 10, (0, 0, 0)), {"cell_width": 5, "cell_height": 5}))
    assert [len(r) for r in rows] == [2, 2]


def test_ansify_image():
    img = Image.new("RGB", (28, 26), (0, 255, 0))
    rows = list(ansify_image(img))
    assert len(rows) == 1
    assert [b.hex for b in rows[0]] == ["#00ff00", "#00ff00"]


def test_empty_image_fails_before_iteration():
    with pytest.raises(EmptyImageError):
        ansify_buffer(PixelBuffer(0, 5, b""))


def test_caller_mapping_not_mutated(make_solid):
    opts = {"shading": True}
    list(ansify_buffer(make_solid(14, 26, (0, 0, 0)), opts))
    assert opts == {"shading": True}
