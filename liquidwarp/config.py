"""
Tunable parameters for the distortion field.

The control panel writes the plain float tunables directly; only the
grid size needs a setter, since changing it has to rebuild the field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a tunable or a dimension is outside its valid range."""


# name → (lo, hi, step)
PARAM_RANGES: Dict[str, Tuple[float, float, float]] = {
    "grid_size": (1, 500, 1),
    "area_of_effect": (0.0, 2.0, 0.02),
    "strength": (0.0, 2.0, 0.02),
    "relaxation": (0.0, 1.0, 0.01),
}


def check_range(name: str, value: float) -> None:
    lo, hi, _ = PARAM_RANGES[name]
    if not (lo <= value <= hi):
        raise ConfigError(f"{name} must be {lo}–{hi}, got {value!r}")


@dataclass
class GridConfig:
    """All tuneable field constants.

    Attributes:
        grid_size:      Side of the square offset grid, in cells.
        area_of_effect: Impulse radius as a fraction of ``grid_size``.
        strength:       Impulse magnitude multiplier.
        relaxation:     Per-tick decay factor applied to active channels.
    """
    grid_size: int = 15
    area_of_effect: float = 0.13
    strength: float = 0.15
    relaxation: float = 0.9

    _listeners: List[Callable[[int], None]] = field(
        default_factory=list, repr=False, compare=False,
    )

    def validate(self) -> None:
        if isinstance(self.grid_size, bool) or not isinstance(self.grid_size, int):
            raise ConfigError(f"grid_size must be an integer, got {self.grid_size!r}")
        for name in PARAM_RANGES:
            check_range(name, getattr(self, name))

    def on_grid_size_changed(self, callback: Callable[[int], None]) -> None:
        """Register *callback(new_size)* to run whenever the grid size changes."""
        self._listeners.append(callback)

    def set_grid_size(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise ConfigError(f"grid_size must be an integer, got {size!r}")
        check_range("grid_size", size)
        if size == self.grid_size:
            return
        logger.debug("Grid size %d -> %d", self.grid_size, size)
        self.grid_size = size
        for cb in list(self._listeners):
            cb(size)
