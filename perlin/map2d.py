from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from perlin.generator import ImageGenerator
from perlin.log import get_logger
from perlin.noise_2d import noise_2d

logger = get_logger(__name__)


def noise_map_2d(
    *,
    width: int,
    height: int,
    scale: int,
    method: str = "tiled",
    layers: Sequence[tuple[int, float]] | None = None,
    normalize: bool = False,
    dtype: np.dtype | None = None,
) -> np.ndarray:
    """Generate a deterministic (height, width) noise map.

    `method="tiled"` covers the image with cells of `scale` pixels.
    `method="layered"` adds each `(scale, amplitude)` of `layers` into one
    image, defaulting to a single layer of `scale` cells at amplitude 1.

    This is the shared entry point used by scripts and benchmarks.
    """

    width = int(width)
    height = int(height)
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    scale = int(scale)
    if scale <= 0:
        raise ValueError("scale must be > 0")

    method = str(method)
    if method == "tiled":
        z = noise_2d(width, height, scale).reshape(height, width)
    elif method == "layered":
        if layers is None:
            layers = [(scale, 1.0)]
        gen = ImageGenerator(width, height)
        for layer_scale, amplitude in layers:
            gen.add_perlin_noise(int(layer_scale), float(amplitude))
        z = gen.image_data().reshape(height, width).copy()
    else:
        raise ValueError(f"unknown method: {method}")

    logger.debug("built %s noise map %dx%d", method, width, height)

    if dtype is not None:
        z = np.asarray(z, dtype=dtype)

    if not bool(normalize):
        return z

    z = np.asarray(z, dtype=np.float64)
    zmin = float(np.min(z))
    zmax = float(np.max(z))
    if math.isclose(zmin, zmax):
        return np.zeros_like(z)
    return (z - zmin) / (zmax - zmin)
