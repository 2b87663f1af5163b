from __future__ import annotations

import io

import numpy as np
from PIL import Image

# Largest magnitude a single raw sample can reach with unit gradients.
RAW_NOISE_RANGE = (-np.sqrt(0.5), np.sqrt(0.5))


def buffer_to_map(buf: np.ndarray, width: int) -> np.ndarray:
    """View a flat row-major noise buffer as a (height, width) map.

    Accepts what `noise_2d` and `ImageGenerator.image_data()` return; 2D maps
    pass through unchanged.
    """

    z = np.asarray(buf)
    width = int(width)
    if width <= 0:
        raise ValueError("width must be > 0")
    if z.ndim == 2:
        if z.shape[1] != width:
            raise ValueError("map width does not match")
        return z
    if z.ndim != 1 or z.size % width != 0:
        raise ValueError("buffer length must be a multiple of width")
    return z.reshape(-1, width)


def buffer_to_image(
    buf: np.ndarray,
    width: int,
    *,
    value_range: tuple[float, float] | None = None,
) -> Image.Image:
    """Grayscale preview of a noise buffer.

    With `value_range=None` the buffer's own min/max map to 0..255, and a
    constant buffer (such as a fresh generator) is black. A fixed range, e.g.
    `RAW_NOISE_RANGE`, keeps several layers on the same scale; values outside
    it are clipped.
    """

    z = buffer_to_map(buf, width).astype(np.float64)
    if value_range is None:
        lo, hi = float(np.min(z)), float(np.max(z))
    else:
        lo, hi = float(value_range[0]), float(value_range[1])
        if not hi > lo:
            raise ValueError("value_range must be increasing")

    if hi == lo:
        img = np.zeros(z.shape, dtype=np.uint8)
    else:
        zn = (z - lo) / (hi - lo)
        img = np.clip(zn * 255.0, 0.0, 255.0).astype(np.uint8)
    return Image.fromarray(img)


def buffer_to_png_bytes(
    buf: np.ndarray,
    width: int,
    *,
    value_range: tuple[float, float] | None = None,
) -> bytes:
    out = io.BytesIO()
    buffer_to_image(buf, width, value_range=value_range).save(out, format="PNG")
    return out.getvalue()


def buffer_to_npy_bytes(buf: np.ndarray, width: int) -> bytes:
    # Stored as a (height, width) float32 map.
    z = np.asarray(buffer_to_map(buf, width), dtype=np.float32)
    out = io.BytesIO()
    np.save(out, z)
    return out.getvalue()
