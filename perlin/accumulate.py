"""Additive noise layers on existing 2D buffers.

Every call adds `amplitude * noise` into the array it is given; nothing is
overwritten. Callers that want a fresh layer must zero the buffer first.
Octaves are composed by repeated calls with different scales and amplitudes.
"""

from __future__ import annotations

import math

import numpy as np

from .core import corner_gradient
from .log import get_logger
from .noise_2d import GradientSource, cell_gradients, cell_sample, pixel_centers

logger = get_logger(__name__)


def _check_target(arr: np.ndarray) -> None:
    if not isinstance(arr, np.ndarray) or arr.ndim != 2:
        raise ValueError("expected a 2D numpy array")
    if not np.issubdtype(arr.dtype, np.floating):
        raise ValueError("expected a floating point array")


def _check_amplitude(amplitude: float) -> float:
    amplitude = float(amplitude)
    if not math.isfinite(amplitude):
        raise ValueError("amplitude must be finite")
    return amplitude


def _layer(
    shape: tuple[int, int],
    scale: int,
    *,
    x0: int = 0,
    y0: int = 0,
    gradient: GradientSource = corner_gradient,
) -> np.ndarray:
    """Raw noise over `shape`, spanning scale x scale cells from cell (x0, y0)."""
    nrows, ncols = shape
    s = np.float32(scale)

    xs = pixel_centers(ncols) * s
    ys = pixel_centers(nrows) * s
    cx = np.minimum(np.floor(xs), s - 1.0)
    cy = np.minimum(np.floor(ys), s - 1.0)
    u = (xs - cx)[None, :]
    v = (ys - cy)[:, None]

    corners = cell_gradients(
        cx.astype(np.int64)[None, :] + x0,
        cy.astype(np.int64)[:, None] + y0,
        gradient=gradient,
    )
    return cell_sample(corners, u, v)


def perlin_inplace(
    arr: np.ndarray,
    x: int,
    y: int,
    *,
    amplitude: float = 1.0,
    gradient: GradientSource = corner_gradient,
) -> np.ndarray:
    """Add one unit cell of noise stretched over the whole of `arr`.

    The cell's corners are (x, y), (x, y + 1), (x + 1, y) and (x + 1, y + 1).
    Pixel (i, j) of an (H, W) array samples the cell at offset
    ((j + 0.5) / W, (i + 0.5) / H).
    """

    _check_target(arr)
    amplitude = _check_amplitude(amplitude)
    if arr.size == 0:
        return arr

    values = _layer(arr.shape, 1, x0=int(x), y0=int(y), gradient=gradient)
    arr += amplitude * values.astype(arr.dtype, copy=False)
    return arr


def add_perlin_noise(
    arr: np.ndarray,
    scale: int,
    amplitude: float,
    *,
    gradient: GradientSource = corner_gradient,
) -> np.ndarray:
    """Add a layer of `scale` x `scale` cells, starting at cell (0, 0), to `arr`.

    With scale 1 the whole array is the single cell (0, 0), exactly as
    `perlin_inplace(arr, 0, 0)`. Larger scales give finer detail; adjacent
    cells share corner gradients so the layer is seamless.
    """

    _check_target(arr)
    scale = int(scale)
    if scale <= 0:
        raise ValueError("scale must be > 0")
    amplitude = _check_amplitude(amplitude)
    if arr.size == 0:
        return arr

    logger.debug("adding %dx%d cell layer at amplitude %g to %s buffer", scale, scale, amplitude, arr.shape)
    values = _layer(arr.shape, scale, gradient=gradient)
    arr += amplitude * values.astype(arr.dtype, copy=False)
    return arr
