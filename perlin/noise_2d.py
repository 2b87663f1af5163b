from __future__ import annotations

from typing import Protocol

import numpy as np

from .core import Corner2D, corner_gradient, corner_hash, fade, lerp_fade
from .log import get_logger

logger = get_logger(__name__)

Gradient = tuple[np.ndarray, np.ndarray]
CellCorners = tuple[Gradient, Gradient, Gradient, Gradient]


class GradientSource(Protocol):
    def __call__(self, x, y) -> Gradient:  # pragma: no cover
        ...


def cell_gradients(cx, cy, *, gradient: GradientSource = corner_gradient) -> CellCorners:
    """Corner gradients of cell (cx, cy) in the order g00, g01, g10, g11.

    The first index steps along x, the second along y. `cx`/`cy` may be arrays;
    coordinates wrap as unsigned 32-bit integers.
    """

    cx = np.asarray(cx, dtype=np.int64)
    cy = np.asarray(cy, dtype=np.int64)
    return (
        gradient(cx, cy),
        gradient(cx, cy + 1),
        gradient(cx + 1, cy),
        gradient(cx + 1, cy + 1),
    )


def cell_sample(corners: CellCorners, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Noise value at offset (u, v) inside a cell with the given corners."""
    (gx00, gy00), (gx01, gy01), (gx10, gy10), (gx11, gy11) = corners

    # Vector from corner (a, b) to the sample is (u - a, v - b).
    d00 = gx00 * u + gy00 * v
    d01 = gx01 * u + gy01 * (v - 1.0)
    d10 = gx10 * (u - 1.0) + gy10 * v
    d11 = gx11 * (u - 1.0) + gy11 * (v - 1.0)

    m0 = lerp_fade(d00, d01, v)
    m1 = lerp_fade(d10, d11, v)
    return lerp_fade(m0, m1, u)


def pixel_centers(count: int) -> np.ndarray:
    """Centers of `count` equal sub-cells of [0, 1] as float32."""
    step = np.float32(1.0) / np.float32(count)
    return step / np.float32(2.0) + step * np.arange(count, dtype=np.float32)


def render_cell(
    cx: int,
    cy: int,
    scale: int,
    buf: np.ndarray,
    offset: int,
    stride: int,
    *,
    gradient: GradientSource = corner_gradient,
) -> None:
    """Write the scale x scale samples of cell (cx, cy) into a flat buffer.

    Sample (i, j) goes to `offset + i * stride + j`. A row stops at the first
    column (after the first) that lands on a multiple of `stride`: that index is
    the start of the next image row, so the rest of the cell lies past the right
    edge. Indices past the end of `buf` are dropped.
    """

    cols = min(scale, stride - offset % stride)
    # Rows starting at or past the end of `buf` are never built.
    nrows = min(scale, -(-(buf.shape[0] - offset) // stride))
    if nrows <= 0:
        return

    ts = pixel_centers(scale)
    rows = np.arange(nrows, dtype=np.int64)
    idx = offset + rows[:, None] * stride + np.arange(cols, dtype=np.int64)[None, :]

    values = cell_sample(
        cell_gradients(cx, cy, gradient=gradient), ts[None, :cols], ts[:nrows, None]
    )
    values = np.broadcast_to(values, idx.shape)

    inside = idx < buf.shape[0]
    buf[idx[inside]] = values[inside]


def noise_2d(
    width: int,
    height: int,
    scale: int,
    *,
    gradient: GradientSource = corner_gradient,
) -> np.ndarray:
    """Tile a width x height image with unit cells of scale x scale pixels.

    Returns a flat, row-major float32 buffer of length width * height. Cells are
    visited row by row; cells that overhang the right or bottom edge are clipped.
    """

    width = int(width)
    height = int(height)
    scale = int(scale)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    if scale <= 0:
        raise ValueError("scale must be > 0")

    buf = np.zeros(width * height, dtype=np.float32)

    rx = (width - 1) // scale + 1
    ry = (height - 1) // scale + 1
    logger.debug("tiling %dx%d image with %dx%d cells of %d px", width, height, rx, ry, scale)

    xstride = scale
    ystride = width * scale
    for cy in range(ry):
        for cx in range(rx):
            render_cell(cx, cy, scale, buf, cx * xstride + cy * ystride, width, gradient=gradient)
    return buf


def debug_sample(cx: int, cy: int, u: float, v: float) -> dict:
    # Scalar breakdown for inspection; matches cell_sample on the same inputs.
    cx = int(cx)
    cy = int(cy)
    # One-element arrays keep every step in float32, as in cell_sample.
    u32 = np.array([u], dtype=np.float32)
    v32 = np.array([v], dtype=np.float32)

    def corner(x: int, y: int, dx: np.ndarray, dy: np.ndarray) -> tuple[Corner2D, np.ndarray]:
        gx, gy = corner_gradient(np.array([x]), np.array([y]))
        dot = gx * dx + gy * dy
        c = Corner2D(
            gx=float(gx[0]), gy=float(gy[0]), dx=float(dx[0]), dy=float(dy[0]), dot=float(dot[0])
        )
        return c, dot

    c00, d00 = corner(cx, cy, u32, v32)
    c01, d01 = corner(cx, cy + 1, u32, v32 - 1.0)
    c10, d10 = corner(cx + 1, cy, u32 - 1.0, v32)
    c11, d11 = corner(cx + 1, cy + 1, u32 - 1.0, v32 - 1.0)

    m0 = lerp_fade(d00, d01, v32)
    m1 = lerp_fade(d10, d11, v32)
    n = lerp_fade(m0, m1, u32)

    return {
        "cell": {"cx": cx, "cy": cy},
        "offset": {"u": float(u32[0]), "v": float(v32[0])},
        "fade": {"u": float(fade(u32)[0]), "v": float(fade(v32)[0])},
        "hash": {
            "h00": int(corner_hash(cx, cy)),
            "h01": int(corner_hash(cx, cy + 1)),
            "h10": int(corner_hash(cx + 1, cy)),
            "h11": int(corner_hash(cx + 1, cy + 1)),
        },
        "corners": {
            "c00": c00.__dict__,
            "c01": c01.__dict__,
            "c10": c10.__dict__,
            "c11": c11.__dict__,
        },
        "interpolation": {"m0": float(m0[0]), "m1": float(m1[0])},
        "noise": float(n[0]),
    }
