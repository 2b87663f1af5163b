from __future__ import annotations

from dataclasses import dataclass

import numpy as np

_U32 = 0xFFFFFFFF

# (rotation, rotation, key) per mixing round.
_MIX_ROUNDS = (
    (3, 17, 0x730D319B),
    (4, 27, 0x6373CD28),
    (6, 21, 0x6373CD28),
)

_TWO_PI = np.float32(2.0 * np.pi)


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def lerp_fade(a0: np.ndarray, a1: np.ndarray, w: np.ndarray) -> np.ndarray:
    return lerp(a0, a1, fade(w))


def as_u32(a) -> np.ndarray:
    """Coerce integer coordinates to uint32, wrapping modulo 2**32."""
    arr = np.asarray(a)
    if arr.dtype == np.uint32:
        return arr
    return (arr.astype(np.int64) & _U32).astype(np.uint32)


def rotl32(v: np.ndarray, r) -> np.ndarray:
    v = as_u32(v)
    r = as_u32(r) & np.uint32(31)
    # A zero rotation must not shift by 32, hence the second mask.
    return (v << r) | (v >> ((np.uint32(32) - r) & np.uint32(31)))


def rotr32(v: np.ndarray, r) -> np.ndarray:
    r = as_u32(r) & np.uint32(31)
    return rotl32(v, (np.uint32(32) - r) & np.uint32(31))


def mix32(v: np.ndarray) -> np.ndarray:
    keyed = as_u32(v)
    for r1, r2, key in _MIX_ROUNDS:
        keyed = keyed ^ rotl32(keyed, r1) ^ rotl32(keyed, r2) ^ np.uint32(key)
    return keyed


def corner_hash(x, y) -> np.ndarray:
    """Hash an integer lattice corner down to one byte.

    The mixed word is rotated right by the low nibble of the packed coordinate
    before the low byte is taken.
    """

    packed = as_u32(x) | rotl32(y, 16)
    rotated = rotr32(mix32(packed), packed & np.uint32(0xF))
    return (rotated & np.uint32(0xFF)).astype(np.uint8)


def corner_gradient(x, y) -> tuple[np.ndarray, np.ndarray]:
    """Unit gradient at lattice corner (x, y), one of 256 angles on the circle."""
    b = corner_hash(x, y).astype(np.float32)
    theta = (b / np.float32(255.0)) * _TWO_PI
    return np.cos(theta), np.sin(theta)


@dataclass(frozen=True)
class Corner2D:
    gx: float
    gy: float
    dx: float
    dy: float
    dot: float
