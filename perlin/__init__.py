from .accumulate import add_perlin_noise, perlin_inplace
from .core import corner_gradient, corner_hash, fade, lerp_fade
from .generator import ImageGenerator
from .noise_2d import noise_2d, render_cell

__all__ = [
    "ImageGenerator",
    "add_perlin_noise",
    "corner_gradient",
    "corner_hash",
    "fade",
    "lerp_fade",
    "noise_2d",
    "perlin_inplace",
    "render_cell",
]
