"""
Procedural source images.

Used when no image file is given.  Each pattern is a generator
``(width, height) -> (height, width, 4) uint8 RGBA`` registered by key,
so the CLI and the control panel can list and pick them by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

import numpy as np

Generator = Callable[[int, int], np.ndarray]


@dataclass(frozen=True)
class Pattern:
    """A named procedural image."""
    name: str
    make: Generator


def _grid(width: int, height: int):
    y, x = np.mgrid[0:height, 0:width]
    return x / max(width - 1, 1), y / max(height - 1, 1)


def _rgba(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    img = np.empty(r.shape + (4,), dtype=np.uint8)
    img[..., 0] = np.clip(r * 255, 0, 255)
    img[..., 1] = np.clip(g * 255, 0, 255)
    img[..., 2] = np.clip(b * 255, 0, 255)
    img[..., 3] = 255
    return img


def checker(width: int, height: int, cells: int = 12) -> np.ndarray:
    y, x = np.mgrid[0:height, 0:width]
    # square cells regardless of image aspect
    side = max(width, height) / cells
    on = ((x // side + y // side) % 2).astype(bool)
    u, v = _grid(width, height)
    light = np.where(on, 0.92, 0.12)
    return _rgba(light * (0.6 + 0.4 * u), light * 0.85, light * (0.6 + 0.4 * v))


def stripes(width: int, height: int, count: int = 18) -> np.ndarray:
    u, v = _grid(width, height)
    s = 0.5 + 0.5 * np.sin((u + v * 0.35) * count * np.pi)
    return _rgba(0.15 + 0.8 * s, 0.25 + 0.5 * s * v, 0.55 + 0.4 * (1 - s))


def rings(width: int, height: int, count: int = 14) -> np.ndarray:
    u, v = _grid(width, height)
    d = np.sqrt((u - 0.5) ** 2 + ((v - 0.5) * height / max(width, 1)) ** 2)
    s = 0.5 + 0.5 * np.cos(d * count * 2 * np.pi)
    return _rgba(0.9 * s + 0.1, 0.35 + 0.3 * s, 0.8 - 0.5 * s)


def gradient(width: int, height: int) -> np.ndarray:
    u, v = _grid(width, height)
    return _rgba(u, 0.3 + 0.4 * v, 1.0 - u * 0.7)


# ── Registry ─────────────────────────────────────────────────────────────

PATTERNS: Dict[str, Pattern] = {
    "checker": Pattern(name="Checkerboard", make=checker),
    "stripes": Pattern(name="Diagonal Stripes", make=stripes),
    "rings": Pattern(name="Concentric Rings", make=rings),
    "gradient": Pattern(name="Soft Gradient", make=gradient),
}

DEFAULT_SIZE = (1920, 1080)


def get_pattern(key: str) -> Pattern:
    """Look up a pattern by key (raises KeyError)."""
    if key not in PATTERNS:
        raise KeyError(f"Unknown pattern '{key}'. Available: {', '.join(PATTERNS)}")
    return PATTERNS[key]


def list_patterns() -> List[str]:
    return list(PATTERNS.keys())


def render_pattern(key: str, width: int = DEFAULT_SIZE[0], height: int = DEFAULT_SIZE[1]) -> np.ndarray:
    return get_pattern(key).make(width, height)
