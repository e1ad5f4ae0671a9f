import pytest
from PIL import Image

from ansify.colormath import Color
from ansify.errors import EmptyImageError, PixelBufferError
from ansify.sampler import (
    Block,
    PixelBuffer,
    Position,
    block_count,
    cell_origins,
    grid_shape,
    sample_blocks,
)


def _brute_force_count(w, h, cw, ch):
    cols = sum(1 for x in range(0, w, cw) if (x + cw - w) * 2 <= cw)
    rows = sum(1 for y in range(0, h, ch) if (y + ch - h) * 2 <= ch)
    return cols * rows


@pytest.mark.parametrize("w, h", [
    (1, 1), (6, 12), (7, 13), (13, 25), (14, 26), (20, 38), (21, 39),
    (27, 51), (28, 52), (35, 65), (36, 66), (100, 100), (141, 263),
])
def test_block_count_matches_retention_rule(make_solid, w, h):
    blocks = sample_blocks(make_solid(w, h, (10, 20, 30)))
    expected = _brute_force_count(w, h, 14, 26)
    assert len(blocks) == expected
    assert block_count(w, h) == expected


def test_grid_shape_closed_form_small_cells():
    for cw in range(1, 7):
        for ch in range(1, 7):
            for w in range(1, 25):
                for h in range(1, 25):
                    cols, rows = grid_shape(w, h, cw, ch)
                    assert cols * rows == _brute_force_count(w, h, cw, ch)
                    assert len(cell_origins(w, cw)) == cols
                    assert len(cell_origins(h, ch)) == rows


def test_grid_shape_rejects_bad_cells():
    with pytest.raises(ValueError):
        grid_shape(10, 10, 0, 5)


def test_half_cut_cell_is_kept_and_sampled_in_bounds():
    # 21 px wide: the second 14 px cell overhangs by exactly 7 px (half).
    img = Image.new("RGB", (21, 26), (255, 0, 0))
    img.paste((0, 0, 255), (14, 0, 21, 26))
    blocks = sample_blocks(PixelBuffer.from_image(img))
    assert [b.position for b in blocks] == [Position(0, 0), Position(14, 0)]
    assert blocks[0].color == Color(255, 0, 0)
    assert blocks[1].color == Color(0, 0, 255)


def test_more_than_half_cut_cell_is_dropped(make_solid):
    blocks = sample_blocks(make_solid(20, 26, (1, 2, 3)))
    assert [b.position for b in blocks] == [Position(0, 0)]


def test_white_block_is_exact(make_solid):
    blocks = sample_blocks(make_solid(14, 26, (255, 255, 255)))
    assert blocks == [Block(Position(0, 0), Color(255, 255, 255))]


def test_rms_not_arithmetic_mean():
    img = Image.new("RGB", (2, 1), (0, 0, 0))
    img.putpixel((1, 0), (200, 0, 100))
    blocks = sample_blocks(PixelBuffer.from_image(img), cell_width=2, cell_height=1)
    # sqrt((0 + 200^2) / 2) = 141.42, sqrt(100^2 / 2) = 70.71
    assert blocks[0].color == Color(141, 0, 71)


def test_alpha_is_ignored(make_solid):
    blocks = sample_blocks(make_solid(14, 26, (40, 50, 60), alpha=0))
    assert blocks[0].color == Color(40, 50, 60)


def test_row_major_order(make_solid):
    blocks = sample_blocks(make_solid(42, 52, (9, 9, 9)))
    assert [b.position for b in blocks] == [
        Position(0, 0), Position(14, 0), Position(28, 0),
        Position(0, 26), Position(14, 26), Position(28, 26),
    ]


def test_threaded_sampling_keeps_order():
    img = Image.new("RGB", (70, 130))
    for y in range(130):
        for x in range(70):
            img.putpixel((x, y), (x * 3, y, (x + y) % 256))
    buf = PixelBuffer.from_image(img)
    assert sample_blocks(buf, workers=4) == sample_blocks(buf)


def test_zero_size_image_fails_fast():
    with pytest.raises(EmptyImageError):
        sample_blocks(PixelBuffer(0, 0, b""))
    with pytest.raises(EmptyImageError):
        sample_blocks(PixelBuffer(10, 0, b""))


def test_image_smaller_than_half_cell_yields_nothing(make_solid):
    assert sample_blocks(make_solid(6, 12, (1, 1, 1))) == []


def test_buffer_length_validated():
    with pytest.raises(PixelBufferError):
        PixelBuffer(2, 2, b"\x00" * 15)


def test_from_image_converts_mode():
    buf = PixelBuffer.from_image(Image.new("L", (3, 2), 128))
    assert (buf.width, buf.height) == (3, 2)
    assert buf.data[:4] == bytes([128, 128, 128, 255])


def test_invalid_cell_size(make_solid):
    with pytest.raises(ValueError):
        sample_blocks(make_solid(14, 26, (0, 0, 0)), cell_width=0)


def test_out_of_range_window_is_rejected():
    import numpy as np

    from ansify.errors import SamplingError
    from ansify.sampler import _rms_color

    window = np.full((2, 2, 4), 300, dtype=np.int64)
    with pytest.raises(SamplingError):
        _rms_color(window)
