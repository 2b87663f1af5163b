from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))

    from perlin.generator import ImageGenerator
    from perlin.log import get_logger, setup_logging
    from perlin.noise_2d import noise_2d
    from viz.export import RAW_NOISE_RANGE, buffer_to_png_bytes

    setup_logging("INFO")
    logger = get_logger("generate_readme_assets")

    out_dir = root / "assets"
    out_dir.mkdir(parents=True, exist_ok=True)

    # One cell per 32 px, with a partial column and row at the edges.
    width, height = 500, 300
    tiled = noise_2d(width, height, 32)
    (out_dir / "tiled_noise.png").write_bytes(
        buffer_to_png_bytes(tiled, width, value_range=RAW_NOISE_RANGE)
    )

    # Six octaves, each twice as fine and half as strong as the last.
    gen = ImageGenerator(512, 512)
    for k in range(6):
        gen.add_perlin_noise(2**k, 0.5**k)
    (out_dir / "layered_noise.png").write_bytes(buffer_to_png_bytes(gen.image_data(), gen.width))

    logger.info("wrote previews to %s", out_dir)


if __name__ == "__main__":
    main()
