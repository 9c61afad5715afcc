"""
Control panel — user-adjustable parameters for the distortion.

Organised into groups:
  - Field (grid size, area of effect, strength, relaxation)
  - Image (source pattern, open file)
  - Rendering (quality, displacement)
  - Actions (pause, regenerate, save)
"""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QComboBox,
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from .canvas import WarpCanvas
from .config import ConfigError, PARAM_RANGES
from .engine import SimulationStep
from .patterns import PATTERNS, list_patterns, render_pattern

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Labelled slider helper
# ---------------------------------------------------------------------------

class LSlider(QWidget):
    """Horizontal slider with label and readout.

    The slider works in integer ticks; *scale* converts ticks to the
    displayed (and emitted) float value.
    """

    valueChanged = pyqtSignal(float)

    def __init__(self, label, lo, hi, val, scale=1.0, fmt="{:g}", parent=None):
        super().__init__(parent)
        lay = QHBoxLayout(self)
        lay.setContentsMargins(0, 1, 0, 1)

        self._scale = scale
        self._fmt = fmt

        self._lbl = QLabel(label)
        self._lbl.setFixedWidth(110)
        lay.addWidget(self._lbl)

        self._slider = QSlider(Qt.Horizontal)
        self._slider.setRange(round(lo / scale), round(hi / scale))
        self._slider.setValue(round(val / scale))
        lay.addWidget(self._slider, stretch=1)

        self._ro = QLabel(fmt.format(val))
        self._ro.setFixedWidth(48)
        self._ro.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        lay.addWidget(self._ro)

        self._slider.valueChanged.connect(self._changed)

    def _changed(self, ticks):
        v = ticks * self._scale
        self._ro.setText(self._fmt.format(v))
        self.valueChanged.emit(v)

    def value(self):
        return self._slider.value() * self._scale

    def setValue(self, v):
        self._slider.setValue(round(v / self._scale))


def param_slider(label: str, name: str, val: float, fmt: str = "{:.2f}") -> LSlider:
    lo, hi, step = PARAM_RANGES[name]
    return LSlider(label, lo, hi, val, scale=step, fmt=fmt)


# ---------------------------------------------------------------------------
# Control panel
# ---------------------------------------------------------------------------

class ControlPanel(QWidget):
    """Side panel with all warp controls."""

    save_requested = pyqtSignal()
    open_requested = pyqtSignal()

    def __init__(
        self,
        canvas: WarpCanvas,
        step: SimulationStep,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.canvas = canvas
        self.step = step
        self.setFixedWidth(320)
        cfg = step.config

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        outer.addWidget(scroll)

        inner = QWidget()
        scroll.setWidget(inner)
        layout = QVBoxLayout(inner)
        layout.setSpacing(8)

        # ══════════════════════════════════════════════════════════════════
        # FIELD
        # ══════════════════════════════════════════════════════════════════
        field_group = QGroupBox("Distortion Field")
        fg = QVBoxLayout(field_group)

        self._grid_slider = param_slider("Grid Size", "grid_size", cfg.grid_size, "{:.0f}")
        self._grid_slider.valueChanged.connect(self._on_grid_size)
        fg.addWidget(self._grid_slider)

        self._aoe_slider = param_slider("Area of Effect", "area_of_effect", cfg.area_of_effect)
        self._aoe_slider.valueChanged.connect(
            lambda v: setattr(self.step.config, "area_of_effect", v)
        )
        fg.addWidget(self._aoe_slider)

        self._strength_slider = param_slider("Strength", "strength", cfg.strength)
        self._strength_slider.valueChanged.connect(
            lambda v: setattr(self.step.config, "strength", v)
        )
        fg.addWidget(self._strength_slider)

        self._relax_slider = param_slider("Relaxation", "relaxation", cfg.relaxation)
        self._relax_slider.valueChanged.connect(
            lambda v: setattr(self.step.config, "relaxation", v)
        )
        fg.addWidget(self._relax_slider)

        layout.addWidget(field_group)

        # ══════════════════════════════════════════════════════════════════
        # IMAGE
        # ══════════════════════════════════════════════════════════════════
        image_group = QGroupBox("Image")
        ig = QVBoxLayout(image_group)

        self._pattern_combo = QComboBox()
        for key in list_patterns():
            self._pattern_combo.addItem(PATTERNS[key].name, key)
        self._pattern_combo.currentIndexChanged.connect(self._on_pattern_changed)
        ig.addWidget(self._pattern_combo)

        open_btn = QPushButton("Open Image…")
        open_btn.clicked.connect(self.open_requested.emit)
        ig.addWidget(open_btn)

        layout.addWidget(image_group)

        # ══════════════════════════════════════════════════════════════════
        # RENDERING
        # ══════════════════════════════════════════════════════════════════
        render_group = QGroupBox("Rendering")
        rg = QVBoxLayout(render_group)

        self._quality_slider = LSlider(
            "Quality", 10, 100, round(canvas.render_scale * 100), fmt="{:.0f}%",
        )
        self._quality_slider.valueChanged.connect(
            lambda v: self.canvas.set_render_scale(v / 100)
        )
        rg.addWidget(self._quality_slider)

        self._disp_slider = LSlider(
            "Displacement", 0, 0.02, canvas.displacement, scale=0.0005, fmt="{:.4f}",
        )
        self._disp_slider.valueChanged.connect(self.canvas.set_displacement)
        rg.addWidget(self._disp_slider)

        layout.addWidget(render_group)

        # ══════════════════════════════════════════════════════════════════
        # ACTIONS
        # ══════════════════════════════════════════════════════════════════
        action_group = QGroupBox("Actions")
        ag = QGridLayout(action_group)

        self._pause_btn = QPushButton("⏸  Pause")
        self._pause_btn.setCheckable(True)
        self._pause_btn.toggled.connect(self._on_pause)
        ag.addWidget(self._pause_btn, 0, 0)

        regen_btn = QPushButton("↻  Regenerate")
        regen_btn.clicked.connect(self._on_regenerate)
        ag.addWidget(regen_btn, 0, 1)

        save_btn = QPushButton("↓  Save PNG")
        save_btn.clicked.connect(self.save_requested.emit)
        ag.addWidget(save_btn, 1, 0, 1, 2)

        layout.addWidget(action_group)

        # ── Status ────────────────────────────────────────────────────────
        self._status = QLabel("Ready — move the pointer over the image")
        self._status.setWordWrap(True)
        self._status.setStyleSheet("color: #888; font-size: 11px; font-style: italic;")
        layout.addWidget(self._status)

        # ── Help ──────────────────────────────────────────────────────────
        help_lbl = QLabel(
            "<b>How it works:</b><br>"
            "A coarse grid of offsets sits over the image. Moving the pointer "
            "pushes the cells near it along the pointer's velocity; every frame "
            "the offsets relax back towards rest.<br><br>"
            "• <b>Grid Size</b> rebuilds the grid (coarser = blockier)<br>"
            "• <b>Area of Effect</b> is the push radius<br>"
            "• <b>Relaxation</b> near 1 keeps the ripples longer"
        )
        help_lbl.setWordWrap(True)
        help_lbl.setStyleSheet(
            "color: #777; font-size: 11px; padding: 8px; "
            "background: #16181a; border-radius: 4px;"
        )
        layout.addWidget(help_lbl)

        layout.addStretch()

        canvas.fps_changed.connect(self._on_fps)

    # ── field slots ───────────────────────────────────────────────────────

    def _on_grid_size(self, value: float) -> None:
        try:
            self.step.config.set_grid_size(int(round(value)))
        except ConfigError as e:
            logger.error("Grid size rejected: %s", e)

    def _on_regenerate(self) -> None:
        self.step.regenerate()

    # ── image slots ───────────────────────────────────────────────────────

    def _on_pattern_changed(self, idx: int) -> None:
        key = self._pattern_combo.currentData()
        try:
            self.canvas.set_image(render_pattern(key))
        except KeyError as e:
            logger.error("Pattern error: %s", e)

    # ── action slots ──────────────────────────────────────────────────────

    def _on_pause(self, checked: bool) -> None:
        self.canvas.paused = checked
        self._pause_btn.setText("▶  Play" if checked else "⏸  Pause")

    def _on_fps(self, fps: float) -> None:
        n = self.step.config.grid_size
        self._status.setText(
            f"{n}×{n} grid  •  {fps:.0f} fps  •  frame {self.step.ctx.frame}"
        )
