from __future__ import annotations

import time

import numpy as np

from perlin.log import setup_logging
from perlin.map2d import noise_map_2d


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark.

    Tiled cost grows with the number of cells (one vectorized call per cell);
    layered cost grows with the number of layers (one pass over the image each).
    """

    setup_logging("WARNING")

    _timeit(
        "Tiled: noise_2d 512x512, 32 px cells",
        lambda: noise_map_2d(width=512, height=512, scale=32, method="tiled"),
    )
    _timeit(
        "Tiled: noise_2d 512x512, 4 px cells",
        lambda: noise_map_2d(width=512, height=512, scale=4, method="tiled"),
    )

    octaves = [(2**k, 0.5**k) for k in range(6)]

    def run_layered() -> None:
        z = noise_map_2d(width=512, height=512, scale=1, method="layered", layers=octaves)
        _ = float(np.mean(z))

    _timeit("Layered: 6 octaves 512x512", run_layered)


if __name__ == "__main__":
    main()
