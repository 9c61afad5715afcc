"""
Pointer tracking — raw move events to normalised position and velocity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VELOCITY_DECAY = 0.9


@dataclass
class PointerState:
    """Pointer position as viewport fractions plus per-event velocity."""
    x: float = 0.0
    y: float = 0.0
    prev_x: float = 0.0
    prev_y: float = 0.0
    v_x: float = 0.0
    v_y: float = 0.0


class PointerTracker:
    """Owns a :class:`PointerState` and mutates it on pointer events.

    Coordinates outside the viewport are accepted as-is and simply map
    outside ``[0, 1]``.
    """

    def __init__(self, state: Optional[PointerState] = None) -> None:
        self.state = state or PointerState()

    def on_pointer_move(
        self,
        event_x: float,
        event_y: float,
        viewport_width: float,
        viewport_height: float,
    ) -> None:
        s = self.state
        s.x = event_x / viewport_width
        s.y = event_y / viewport_height

        # going left: v_x negative; going up: v_y negative
        s.v_x = s.x - s.prev_x
        s.v_y = s.y - s.prev_y

        s.prev_x = s.x
        s.prev_y = s.y

    def decay_velocity(self) -> None:
        """Taper velocity once per tick so a stopped pointer fades out."""
        self.state.v_x *= VELOCITY_DECAY
        self.state.v_y *= VELOCITY_DECAY

    # convenience read-through
    @property
    def x(self) -> float:
        return self.state.x

    @property
    def y(self) -> float:
        return self.state.y

    @property
    def v_x(self) -> float:
        return self.state.v_x

    @property
    def v_y(self) -> float:
        return self.state.v_y
