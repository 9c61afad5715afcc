"""
Simulation step — per-frame orchestration of pointer, field and fit.

All mutable simulation state lives in one :class:`SimulationContext`
owned by the :class:`SimulationStep`.  The host (a Qt widget, a test)
forwards pointer, resize and frame events into the step; nothing here
touches a window directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import ConfigError, GridConfig
from .coverfit import CoverFitFactors, compute_fit
from .field import DataTexture, DistortionField
from .pointer import PointerTracker

logger = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """Everything the simulation reads or writes between frames."""
    config: GridConfig
    pointer: PointerTracker
    field: DistortionField
    viewport: Tuple[int, int] = (800, 600)
    image_size: Tuple[int, int] = (1, 1)
    fit: CoverFitFactors = CoverFitFactors(1.0, 1.0)
    frame: int = 0
    elapsed: float = 0.0

    @property
    def viewport_aspect(self) -> float:
        """Height over width, as used by the impulse distance metric."""
        w, h = self.viewport
        return h / w


class SimulationStep:
    """Drives the distortion field from pointer state once per frame.

    Parameters:
        config:     Tunables (or defaults).  Validated on construction.
        viewport:   Initial viewport size ``(width, height)``.
        image_size: Source image size ``(width, height)``.
        seed:       RNG seed for the field (None = random).
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        viewport: Tuple[int, int] = (800, 600),
        image_size: Tuple[int, int] = (1, 1),
        seed: Optional[int] = None,
    ) -> None:
        config = config or GridConfig()
        config.validate()
        self.ctx = SimulationContext(
            config=config,
            pointer=PointerTracker(),
            field=DistortionField(config.grid_size, seed=seed),
        )
        config.on_grid_size_changed(self._on_grid_size_changed)
        self.set_image_size(*image_size)
        self.on_resize(*viewport)

    # ── shortcuts ─────────────────────────────────────────────────────────

    @property
    def config(self) -> GridConfig:
        return self.ctx.config

    @property
    def texture(self) -> DataTexture:
        return self.ctx.field.texture

    @property
    def fit(self) -> CoverFitFactors:
        return self.ctx.fit

    # ── host events ───────────────────────────────────────────────────────

    def on_pointer_move(self, x: float, y: float, width: float, height: float) -> None:
        self.ctx.pointer.on_pointer_move(x, y, width, height)

    def on_resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ConfigError(f"viewport must be positive, got {width}x{height}")
        self.ctx.viewport = (width, height)
        self._update_fit()

    def set_image_size(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ConfigError(f"image must be positive, got {width}x{height}")
        self.ctx.image_size = (width, height)
        self._update_fit()
        logger.info("Source image size set to %dx%d", width, height)

    def regenerate(self) -> None:
        """Re-seed the grid at the current size."""
        self.ctx.field.regenerate(self.ctx.config.grid_size)

    def tick(self, interval: float, elapsed: float) -> None:
        """Advance one frame.

        *interval* is the time since the previous frame and *elapsed* the
        total time since start; the field update itself is per-frame, not
        per-second, so only the bookkeeping uses them.
        """
        ctx = self.ctx
        ctx.field.tick(ctx.pointer, ctx.config, ctx.viewport_aspect)
        ctx.frame += 1
        ctx.elapsed = elapsed

    # ── internals ─────────────────────────────────────────────────────────

    def _update_fit(self) -> None:
        vw, vh = self.ctx.viewport
        iw, ih = self.ctx.image_size
        self.ctx.fit = compute_fit(vw, vh, iw, ih)
        logger.debug(
            "Cover fit for %dx%d viewport, %dx%d image: w=%.4f h=%.4f",
            vw, vh, iw, ih, *self.ctx.fit,
        )

    def _on_grid_size_changed(self, size: int) -> None:
        self.ctx.field.regenerate(size)
