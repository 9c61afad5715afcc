"""
Distortion field — the grid of per-cell offset vectors.

The field is a square ``size × size`` grid of RGBA float cells held in a
flat float32 buffer (cell ``(i, j)`` starts at ``4 * (i + size * j)``).
Channels 0/1 are the live offsets: they relax every tick and receive
pointer impulses.  Channels 2/3 are seeded at regeneration and left
alone afterwards.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from .config import GridConfig
    from .pointer import PointerTracker

logger = logging.getLogger(__name__)

CHANNELS = 4
MAX_POWER = 10.0
IMPULSE_SCALE = 100.0


# ---------------------------------------------------------------------------
# Texture
# ---------------------------------------------------------------------------

class DataTexture:
    """CPU-side float texture backed by a flat RGBA buffer.

    Always nearest-filtered.  Writers call :meth:`mark_dirty`; the
    renderer calls :meth:`upload` once per frame to pick up a fresh copy.
    """

    filter = "nearest"

    def __init__(self, data: np.ndarray, width: int, height: int) -> None:
        if data.size != CHANNELS * width * height:
            raise ValueError(
                f"buffer of {data.size} floats does not fit {width}x{height}x{CHANNELS}"
            )
        self.data = data
        self.width = width
        self.height = height
        self.needs_update = True
        self.version = 0

    def mark_dirty(self) -> None:
        self.needs_update = True
        self.version += 1

    def view(self) -> np.ndarray:
        """Zero-copy ``(height, width, 4)`` view of the buffer."""
        return self.data.reshape(self.height, self.width, CHANNELS)

    def upload(self) -> np.ndarray:
        """Snapshot the buffer for sampling and clear the dirty flag."""
        self.needs_update = False
        return self.view().copy()


# ---------------------------------------------------------------------------
# Field
# ---------------------------------------------------------------------------

class DistortionField:
    """Owns the offset grid and its texture.

    Parameters:
        size: Initial grid side length.
        seed: RNG seed for reproducibility (None = random).
    """

    def __init__(self, size: int = 15, seed: Optional[int] = None) -> None:
        self.rng = np.random.default_rng(seed)
        self.size = 0
        self.texture: DataTexture
        self.regenerate(size)

    @property
    def data(self) -> np.ndarray:
        return self.texture.data

    def cells(self) -> np.ndarray:
        """``(size, size, 4)`` view indexed as ``[j, i, channel]``."""
        return self.texture.view()

    # ── regeneration ──────────────────────────────────────────────────────

    def regenerate(self, size: int) -> None:
        """Replace the grid with a fresh randomised one of side *size*."""
        count = size * size
        r = self.rng.random(count) * 255 - 125
        r1 = self.rng.random(count) * 255 - 125

        data = np.empty(CHANNELS * count, dtype=np.float32)
        data[0::4] = r
        data[1::4] = r1
        data[2::4] = r
        data[3::4] = r

        # swap in only once fully written
        self.texture = DataTexture(data, size, size)
        self.size = size
        self.texture.mark_dirty()
        logger.info("Distortion grid regenerated: %dx%d", size, size)

    # ── per-frame update ──────────────────────────────────────────────────

    def relax(self, relaxation: float) -> None:
        cells = self.cells()
        cells[..., 0:2] *= relaxation

    def inject(
        self,
        pointer: "PointerTracker",
        config: "GridConfig",
        viewport_aspect: float,
    ) -> None:
        """Add velocity impulses to every cell within reach of the pointer."""
        size = self.size
        # pointer.x/y is 0..1, grid Y grows upwards
        grid_mouse_x = size * pointer.x
        grid_mouse_y = size * (1.0 - pointer.y)
        max_dist = size * config.area_of_effect
        max_dist_sq = max_dist ** 2

        idx = np.arange(size, dtype=np.float64)
        # rows are j, columns are i
        jj, ii = np.meshgrid(idx, idx, indexing="ij")
        distance = (grid_mouse_x - ii) ** 2 / viewport_aspect + (grid_mouse_y - jj) ** 2

        hit = distance < max_dist_sq
        if not hit.any():
            return

        # the closer to the pointer, the stronger the push; zero distance
        # divides to inf and clips to the ceiling
        root = np.sqrt(distance[hit])
        power = np.divide(
            max_dist, root,
            out=np.full_like(root, np.inf), where=root > 0,
        )
        power = np.clip(power, 0.0, MAX_POWER)

        gain = config.strength * IMPULSE_SCALE * power
        cells = self.cells()
        cells[hit, 0] += (gain * pointer.v_x).astype(np.float32)
        cells[hit, 1] -= (gain * pointer.v_y).astype(np.float32)

    def tick(
        self,
        pointer: "PointerTracker",
        config: "GridConfig",
        viewport_aspect: float,
    ) -> None:
        """Relax, inject, decay pointer velocity, flag the texture."""
        self.relax(config.relaxation)
        self.inject(pointer, config, viewport_aspect)
        pointer.decay_velocity()
        self.texture.mark_dirty()
