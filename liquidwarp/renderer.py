"""
Warp renderer — numpy-vectorised shading of the source image.

Does on the CPU what a fragment shader would do per pixel: cover-fit
the UV, look up the nearest offset cell, shift the UV by it and sample
the image.  Renders at a reduced resolution and returns an (H, W, 4)
RGBA uint8 array suitable for display in a QImage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Tuple

import numpy as np

if TYPE_CHECKING:
    from .coverfit import CoverFitFactors

logger = logging.getLogger(__name__)

# UV shift per unit of cell offset
DEFAULT_DISPLACEMENT = 0.002


def pixel_uv(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """Pixel-centre UVs for a ``width × height`` target, V growing upwards."""
    py, px = np.meshgrid(np.arange(height), np.arange(width), indexing="ij")
    u = (px + 0.5) / width
    v = 1.0 - (py + 0.5) / height
    return u, v


def sample_offsets(offsets: np.ndarray, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Nearest-neighbour lookup into a ``(rows, cols, 4)`` offset grid.

    Row 0 of the grid is the bottom of the screen (``v = 0``).
    """
    rows, cols = offsets.shape[:2]
    col = np.clip(np.floor(u * cols), 0, cols - 1).astype(np.intp)
    row = np.clip(np.floor(v * rows), 0, rows - 1).astype(np.intp)
    return offsets[row, col]


def sample_image(image: np.ndarray, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Nearest-neighbour, clamp-to-edge lookup into an (H, W, C) image."""
    ih, iw = image.shape[:2]
    col = np.clip(np.floor(u * iw), 0, iw - 1).astype(np.intp)
    row = np.clip(np.floor((1.0 - v) * ih), 0, ih - 1).astype(np.intp)
    return image[row, col]


def render_frame(
    image: np.ndarray,
    offsets: np.ndarray,
    fit: "CoverFitFactors",
    width: int,
    height: int,
    render_scale: float = 0.5,
    displacement: float = DEFAULT_DISPLACEMENT,
) -> np.ndarray:
    """Render one warped frame → (height', width', 4) uint8 RGBA array.

    Parameters:
        image:        Source image, (H, W, 4) uint8, row 0 at the top.
        offsets:      Offset grid, (rows, cols, 4) float; channels 0/1 used.
        fit:          Cover-fit UV scale factors for the current viewport.
        width:        Viewport width in pixels.
        height:       Viewport height in pixels.
        render_scale: Fraction to render at (e.g. 0.5 = 50%).
        displacement: UV shift per unit of offset.
    """
    rw = max(4, int(width * render_scale))
    rh = max(4, int(height * render_scale))

    u, v = pixel_uv(rw, rh)

    # background-size: cover
    cover_u = (u - 0.5) * fit.w_factor + 0.5
    cover_v = (v - 0.5) * fit.h_factor + 0.5

    # offsets follow the screen, not the image
    off = sample_offsets(offsets, u, v)
    warped_u = cover_u - displacement * off[..., 0]
    warped_v = cover_v - displacement * off[..., 1]

    img = sample_image(image, warped_u, warped_v)
    if img.shape[-1] == 3:
        alpha = np.full(img.shape[:2] + (1,), 255, dtype=np.uint8)
        img = np.concatenate([img, alpha], axis=-1)
    return np.ascontiguousarray(img, dtype=np.uint8)
