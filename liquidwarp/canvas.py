"""
Warp canvas widget — animated display with QTimer-driven simulation.

Simulation and rendering both happen in the Qt main thread, so pointer
events and field ticks never interleave.  Mouse tracking is always on:
plain hovering stirs the image, no button press needed.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import numpy as np
from PyQt5.QtCore import QTimer, Qt, pyqtSignal
from PyQt5.QtGui import QColor, QImage, QPainter, QPixmap
from PyQt5.QtWidgets import QWidget

from .engine import SimulationStep
from .renderer import DEFAULT_DISPLACEMENT, render_frame

logger = logging.getLogger(__name__)


def qimage_to_array(qimg: QImage) -> np.ndarray:
    """Copy a QImage into an (H, W, 4) RGBA uint8 array."""
    img = qimg.convertToFormat(QImage.Format_RGBA8888)
    w, h = img.width(), img.height()
    ptr = img.constBits()
    ptr.setsize(img.sizeInBytes())
    rows = np.frombuffer(ptr, dtype=np.uint8).reshape(h, img.bytesPerLine())
    return rows[:, : w * 4].reshape(h, w, 4).copy()


def load_image(path: str) -> Optional[np.ndarray]:
    """Load an image file through Qt; ``None`` if it cannot be decoded."""
    qimg = QImage(path)
    if qimg.isNull():
        logger.error("Could not load image: %s", path)
        return None
    logger.info("Loaded image %s (%dx%d)", path, qimg.width(), qimg.height())
    return qimage_to_array(qimg)


class WarpCanvas(QWidget):
    """Animated liquid-warp display.

    Signals:
        fps_changed(float):   current rendering FPS
    """

    fps_changed = pyqtSignal(float)

    def __init__(
        self,
        step: SimulationStep,
        image: np.ndarray,
        render_scale: float = 0.5,
        displacement: float = DEFAULT_DISPLACEMENT,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.step = step
        self.render_scale = render_scale
        self.displacement = displacement
        self._image = image
        self._offsets = step.texture.upload()
        self._pixmap: Optional[QPixmap] = None
        self._paused = False

        # Timing
        self._start_time = time.perf_counter()
        self._last_time = self._start_time
        self._frame_count = 0
        self._fps_accum = 0.0

        self.setMinimumSize(320, 240)
        self.setMouseTracking(True)
        self.set_image(image)

        # Animation timer (~60 fps)
        self._timer = QTimer(self)
        self._timer.setInterval(16)
        self._timer.timeout.connect(self._tick)
        self._timer.start()

    # ── properties ────────────────────────────────────────────────────────

    @property
    def paused(self) -> bool:
        return self._paused

    @paused.setter
    def paused(self, val: bool) -> None:
        self._paused = val
        if not val:
            self._last_time = time.perf_counter()

    def set_image(self, image: np.ndarray) -> None:
        h, w = image.shape[:2]
        self._image = image
        self.step.set_image_size(w, h)

    def set_render_scale(self, scale: float) -> None:
        self.render_scale = max(0.1, min(1.0, scale))

    def set_displacement(self, value: float) -> None:
        self.displacement = max(0.0, value)

    # ── animation loop ────────────────────────────────────────────────────

    def _tick(self) -> None:
        now = time.perf_counter()
        dt = now - self._last_time
        self._last_time = now

        if not self._paused:
            self.step.tick(dt, now - self._start_time)

        # Re-upload only when the field changed (or was replaced)
        texture = self.step.texture
        if texture.needs_update:
            self._offsets = texture.upload()

        img = render_frame(
            self._image, self._offsets, self.step.fit,
            self.width(), self.height(),
            self.render_scale, self.displacement,
        )

        h, w, ch = img.shape
        qimg = QImage(img.data, w, h, ch * w, QImage.Format_RGBA8888).copy()
        self._pixmap = QPixmap.fromImage(qimg).scaled(
            self.width(), self.height(),
            Qt.IgnoreAspectRatio,
            Qt.FastTransformation,
        )
        self.update()

        # FPS tracking
        self._frame_count += 1
        self._fps_accum += dt
        if self._fps_accum >= 1.0:
            fps = self._frame_count / self._fps_accum
            self.fps_changed.emit(fps)
            self._frame_count = 0
            self._fps_accum = 0.0

    # ── painting ──────────────────────────────────────────────────────────

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0))
        if self._pixmap:
            painter.drawPixmap(0, 0, self._pixmap)

        if self._paused:
            painter.setPen(QColor(255, 255, 255, 200))
            painter.drawText(self.rect(), Qt.AlignCenter, "⏸ PAUSED")

        painter.end()

    # ── host events ───────────────────────────────────────────────────────

    def resizeEvent(self, event):
        size = event.size()
        if size.width() > 0 and size.height() > 0:
            self.step.on_resize(size.width(), size.height())
        super().resizeEvent(event)

    def mouseMoveEvent(self, event):
        if self.width() <= 0 or self.height() <= 0:
            return
        pos = event.pos()
        self.step.on_pointer_move(pos.x(), pos.y(), self.width(), self.height())

    # ── save ──────────────────────────────────────────────────────────────

    def get_image(self) -> Optional[QImage]:
        if self._pixmap:
            return self._pixmap.toImage()
        return None
