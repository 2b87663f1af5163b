import numpy as np
import pytest

from perlin.noise_2d import (
    cell_gradients,
    cell_sample,
    debug_sample,
    noise_2d,
    pixel_centers,
    render_cell,
)


def _right_edge_sentinel(x, y):
    # Non-zero gradient only on lattice column x >= 3.
    x = np.asarray(x)
    on = np.broadcast_to(x >= 3, np.broadcast(x, np.asarray(y)).shape)
    gx = np.where(on, 1.0, 0.0).astype(np.float32)
    return gx, np.zeros_like(gx)


def test_noise_2d_single_pixel_is_cell_center():
    buf = noise_2d(1, 1, 1)
    assert buf.shape == (1,)
    expected = cell_sample(cell_gradients(0, 0), np.float32(0.5), np.float32(0.5))
    assert np.allclose(buf[0], expected)


def test_noise_2d_blocks_come_from_one_cell_each():
    z = noise_2d(4, 4, 2).reshape(4, 4)
    ts = pixel_centers(2)
    for cy in range(2):
        for cx in range(2):
            expected = cell_sample(cell_gradients(cx, cy), ts[None, :], ts[:, None])
            block = z[2 * cy : 2 * cy + 2, 2 * cx : 2 * cx + 2]
            assert np.allclose(block, expected)


def test_noise_2d_length_and_dtype():
    for w, h, s in [(1, 1, 1), (7, 3, 2), (10, 10, 10), (33, 17, 8), (5, 9, 20)]:
        buf = noise_2d(w, h, s)
        assert buf.shape == (w * h,)
        assert buf.dtype == np.float32
        assert np.isfinite(buf).all()


def test_noise_2d_deterministic():
    a = noise_2d(37, 23, 5)
    b = noise_2d(37, 23, 5)
    assert np.array_equal(a, b)


def test_noise_2d_bounded():
    z = noise_2d(100, 100, 10)
    assert float(np.max(np.abs(z))) <= 1.0


def test_noise_2d_continuous_across_cell_edges():
    z = noise_2d(128, 64, 64).reshape(64, 128)
    assert float(np.max(np.abs(np.diff(z, axis=1)))) < 0.1
    assert float(np.max(np.abs(np.diff(z, axis=0)))) < 0.1


def test_partial_right_cell_does_not_spill_into_next_row():
    # Width 5 with 2 px cells: the last cell column has one visible pixel.
    z = noise_2d(5, 4, 2, gradient=_right_edge_sentinel).reshape(4, 5)
    assert np.all(z[:, 4] != 0.0)
    assert np.all(z[:, :4] == 0.0)


def test_partial_bottom_cell_is_clipped():
    z = noise_2d(4, 5, 2).reshape(5, 4)
    ts = pixel_centers(2)
    expected = cell_sample(cell_gradients(1, 2), ts[None, :], ts[:, None])
    assert np.allclose(z[4, 2:4], expected[0])


def test_render_cell_stops_row_at_stride_boundary():
    buf = np.full(12, np.nan, dtype=np.float32)
    render_cell(0, 0, 3, buf, offset=2, stride=4)
    written = np.flatnonzero(~np.isnan(buf))
    assert written.tolist() == [2, 3, 6, 7, 10, 11]


def test_render_cell_drops_writes_past_end():
    buf = np.full(8, np.nan, dtype=np.float32)
    render_cell(0, 0, 4, buf, offset=0, stride=4)
    assert np.isfinite(buf).all()


def test_render_cell_matches_cell_sample():
    buf = np.zeros(36, dtype=np.float32)
    render_cell(3, 4, 6, buf, offset=0, stride=6)
    ts = pixel_centers(6)
    expected = cell_sample(cell_gradients(3, 4), ts[None, :], ts[:, None])
    assert np.allclose(buf.reshape(6, 6), expected)


def test_debug_sample_matches_cell_sample():
    dbg = debug_sample(2, 5, 0.3, 0.8)
    out = cell_sample(cell_gradients(2, 5), np.float32(0.3), np.float32(0.8))
    assert np.allclose(dbg["noise"], float(out), atol=1e-6)
    assert "interpolation" in dbg
    assert "m0" in dbg["interpolation"]
    assert "m1" in dbg["interpolation"]
    assert set(dbg["corners"]) == {"c00", "c01", "c10", "c11"}


def test_noise_2d_rejects_bad_sizes():
    for args in [(0, 4, 1), (4, 0, 1), (4, 4, 0)]:
        with pytest.raises(ValueError):
            noise_2d(*args)


def test_tall_cell_over_one_row_builds_only_that_row():
    # A full scale x scale grid here would not fit in memory.
    scale = 200_000
    buf = np.full(scale, np.nan, dtype=np.float32)
    render_cell(0, 0, scale, buf, offset=0, stride=scale)
    ts = pixel_centers(scale)
    expected = cell_sample(cell_gradients(0, 0), ts, ts[:1])
    assert np.isfinite(buf).all()
    assert np.allclose(buf, expected)


def test_cell_starting_past_end_writes_nothing():
    buf = np.full(6, np.nan, dtype=np.float32)
    render_cell(0, 0, 4, buf, offset=8, stride=3)
    assert np.isnan(buf).all()


def test_wide_scale_on_single_row_image():
    z = noise_2d(20_000, 1, 20_000)
    assert z.shape == (20_000,)
    assert np.isfinite(z).all()


def test_debug_sample_is_exact_float32_cell_sample():
    for cx, cy, u, v in [(2, 5, 0.3, 0.8), (0, 0, 0.5, 0.5), (7, 1, 0.05, 0.95)]:
        dbg = debug_sample(cx, cy, u, v)
        out = cell_sample(
            cell_gradients(np.array([cx]), np.array([cy])),
            np.array([u], dtype=np.float32),
            np.array([v], dtype=np.float32),
        )
        assert out.dtype == np.float32
        assert dbg["noise"] == float(out[0])
