import pytest

from hpcwork.mandelbrot import (
    Region,
    color,
    escape_count,
    main,
    render,
    render_interleaved,
    render_row,
    row_mapping,
)
from hpcwork.pngwriter import read_rgb_png


@pytest.fixture
def region():
    return Region(iters=40, left=-2.0, right=1.0, lower=-1.0, upper=1.0, width=12, height=9)


def test_origin_never_escapes():
    assert escape_count(0.0, 0.0, 100) == 100


def test_far_point_escapes_after_one_step():
    assert escape_count(2.0, 0.0, 50) == 1


def test_escape_count_bounded_by_iters():
    for x0 in (-2.0, -0.5, 0.3, 1.5):
        for y0 in (-1.0, 0.0, 0.7):
            assert 0 <= escape_count(x0, y0, 30) <= 30


def test_zero_iterations():
    assert escape_count(0.25, 0.25, 0) == 0


def test_color_inside_set_is_black():
    assert color(7, 7) == (0, 0, 0)


def test_color_with_bit_16():
    assert color(16, 100) == (240, 0, 0)


def test_color_shades_are_consistent():
    for p in range(64):
        r, g, b = color(p, 1000)
        if p & 16:
            assert r == 240 and g == b == (p & 15) * 16
        else:
            assert g == b == 0 and r == (p & 15) * 16


def test_render_row_length(region):
    row = render_row(region, 0)
    assert len(row) == 3 * region.width


def test_render_row_out_of_range(region):
    with pytest.raises(ValueError):
        render_row(region, region.height)


def test_render_flips_rows(region):
    rows = render(region, workers=2)
    assert len(rows) == region.height
    assert rows[0] == render_row(region, region.height - 1)
    assert rows[-1] == render_row(region, 0)


def test_render_independent_of_workers(region):
    assert render(region, workers=1) == render(region, workers=4)


def test_render_rejects_bad_workers(region):
    with pytest.raises(ValueError):
        render(region, workers=0)


def test_row_mapping_small_case():
    assert row_mapping(5, 2) == [2, 4, 1, 3, 0]


@pytest.mark.parametrize("height,size", [(1, 1), (7, 3), (10, 4), (3, 5)])
def test_row_mapping_is_permutation(height, size):
    assert sorted(row_mapping(height, size)) == list(range(height))


def test_row_mapping_single_rank_reverses():
    assert row_mapping(6, 1) == list(reversed(range(6)))


def test_row_mapping_rejects_bad_size():
    with pytest.raises(ValueError):
        row_mapping(4, 0)


@pytest.mark.parametrize("ranks", [1, 2, 3, 20])
def test_interleaved_matches_threaded(region, ranks):
    assert render_interleaved(region, ranks) == render(region, workers=2)


def test_interleaved_rejects_bad_ranks(region):
    with pytest.raises(ValueError):
        render_interleaved(region, 0)


def test_region_validation():
    with pytest.raises(ValueError):
        Region(10, -2.0, 1.0, -1.0, 1.0, 0, 5)
    with pytest.raises(ValueError):
        Region(-1, -2.0, 1.0, -1.0, 1.0, 5, 5)


def test_region_offsets(region):
    assert region.x_offset == pytest.approx((region.right - region.left) / region.width)
    assert region.y_offset == pytest.approx((region.upper - region.lower) / region.height)


def test_main_writes_png(tmp_path, region):
    out = tmp_path / "out.png"
    argv = [str(out), "40", "-2", "1", "-1", "1", "12", "9", "--workers", "2"]
    assert main(argv) == 0
    width, height, rows = read_rgb_png(out)
    assert (width, height) == (12, 9)
    assert rows == render(region, workers=1)


def test_main_with_ranks(tmp_path, region):
    out = tmp_path / "ranks.png"
    argv = [str(out), "40", "-2", "1", "-1", "1", "12", "9", "--ranks", "3"]
    assert main(argv) == 0
    _, _, rows = read_rgb_png(out)
    assert rows == render(region, workers=1)


def test_main_rejects_bad_size(tmp_path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "x.png"), "10", "-2", "1", "-1", "1", "0", "4"])