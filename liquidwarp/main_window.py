"""
Main window — assembles the warp canvas, control panel, and menu bar.
"""

from __future__ import annotations

import logging

import numpy as np
from PyQt5.QtGui import QKeySequence
from PyQt5.QtWidgets import (
    QAction,
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QWidget,
)

from . import __version__
from .canvas import WarpCanvas, load_image
from .controls import ControlPanel
from .engine import SimulationStep
from .renderer import DEFAULT_DISPLACEMENT

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window for Liquid Warp."""

    def __init__(
        self,
        step: SimulationStep,
        image: np.ndarray,
        render_scale: float = 0.5,
        displacement: float = DEFAULT_DISPLACEMENT,
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"Liquid Warp  v{__version__}")
        self.setMinimumSize(760, 480)

        self.step = step
        self.canvas = WarpCanvas(step, image, render_scale, displacement)
        self.controls = ControlPanel(self.canvas, step)

        central = QWidget()
        self.setCentralWidget(central)
        h_layout = QHBoxLayout(central)
        h_layout.setContentsMargins(0, 0, 8, 0)
        h_layout.setSpacing(8)
        h_layout.addWidget(self.canvas, stretch=1)
        h_layout.addWidget(self.controls)

        self._build_menu()
        self.statusBar().showMessage("Move the pointer over the image")

        self.controls.save_requested.connect(self._save)
        self.controls.open_requested.connect(self._open)

    def _build_menu(self) -> None:
        menu = self.menuBar()

        file_menu = menu.addMenu("&File")
        open_act = QAction("&Open Image…", self)
        open_act.setShortcut(QKeySequence.Open)
        open_act.triggered.connect(self._open)
        file_menu.addAction(open_act)
        save_act = QAction("&Save Frame…", self)
        save_act.setShortcut(QKeySequence.Save)
        save_act.triggered.connect(self._save)
        file_menu.addAction(save_act)
        file_menu.addSeparator()
        quit_act = QAction("&Quit", self)
        quit_act.setShortcut(QKeySequence.Quit)
        quit_act.triggered.connect(self.close)
        file_menu.addAction(quit_act)

        edit_menu = menu.addMenu("&Edit")
        pause_act = QAction("&Pause / Resume", self)
        pause_act.setShortcut(QKeySequence("Space"))
        pause_act.triggered.connect(self._toggle_pause)
        edit_menu.addAction(pause_act)
        regen_act = QAction("&Regenerate Grid", self)
        regen_act.setShortcut(QKeySequence("Ctrl+R"))
        regen_act.triggered.connect(self.step.regenerate)
        edit_menu.addAction(regen_act)

        help_menu = menu.addMenu("&Help")
        about_act = QAction("&About", self)
        about_act.triggered.connect(self._about)
        help_menu.addAction(about_act)

    def _open(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Image", "",
            "Images (*.png *.jpg *.jpeg *.bmp *.gif);;All (*)",
        )
        if not path:
            return
        image = load_image(path)
        if image is None:
            QMessageBox.warning(self, "Open Error", f"Could not load image:\n{path}")
            return
        self.canvas.set_image(image)
        self.statusBar().showMessage(f"Loaded {path}")

    def _save(self) -> None:
        img = self.canvas.get_image()
        if img is None:
            QMessageBox.warning(self, "Save Error", "No frame to save yet.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Frame", "liquidwarp.png",
            "PNG (*.png);;JPEG (*.jpg);;All (*)",
        )
        if path:
            if img.save(path):
                self.statusBar().showMessage(f"Saved to {path}")
            else:
                QMessageBox.critical(self, "Save Error", f"Failed to save:\n{path}")

    def _toggle_pause(self) -> None:
        self.canvas.paused = not self.canvas.paused
        self.controls._pause_btn.setChecked(self.canvas.paused)

    def _about(self) -> None:
        QMessageBox.about(
            self,
            "About Liquid Warp",
            f"<h3>Liquid Warp v{__version__}</h3>"
            "<p>Mouse-reactive liquid distortion over a still image.</p>"
            "<p><b>Model:</b></p>"
            "<ul>"
            "<li>Square grid of per-cell offset vectors</li>"
            "<li>Velocity impulses around the pointer, clamped near it</li>"
            "<li>Geometric relaxation every frame</li>"
            "<li>Cover-fit image sampling (crop, never letterbox)</li>"
            "</ul>",
        )
