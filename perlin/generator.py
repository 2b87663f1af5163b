from __future__ import annotations

import numpy as np

from .accumulate import add_perlin_noise
from .log import get_logger

logger = get_logger(__name__)


class ImageGenerator:
    """A width x height float32 image that noise layers are added into.

    The buffer starts at zero and only changes through `add_perlin_noise` and
    `clear`. Hosts read it through `image_data()`, which hands out a new view
    on every call; do not hold a view across calls that may reallocate.
    """

    def __init__(self, width: int, height: int):
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._data = np.zeros((height, width), dtype=np.float32)
        logger.debug("allocated %dx%d image buffer", width, height)

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def image_data(self) -> np.ndarray:
        """Flat row-major view of the image: element (i, j) is at i * width + j."""
        return self._data.reshape(-1)

    def add_perlin_noise(self, scale: int, amplitude: float) -> None:
        add_perlin_noise(self._data, scale, amplitude)

    def clear(self) -> None:
        self._data.fill(0.0)

    def __repr__(self) -> str:
        return f"ImageGenerator(width={self.width}, height={self.height})"
