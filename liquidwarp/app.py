"""
Application entry point — CLI parsing, dependency checks, Qt launch.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import ConfigError, GridConfig


def _check_deps() -> list:
    missing = []
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")
    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing.append("PyQt5")
    return missing


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="liquidwarp",
        description="Liquid Warp — mouse-reactive liquid distortion over an image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                            # checkerboard, 15x15 grid\n"
            "  %(prog)s --image photo.jpg          # warp your own image\n"
            "  %(prog)s --grid 60 --relaxation 0.96  # finer, longer-lived ripples\n"
            "  %(prog)s --list-patterns            # show built-in patterns\n"
            "  %(prog)s -v                         # verbose logging\n"
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--grid", type=int, default=15, help="Grid size in cells (1–500, default 15)")
    p.add_argument("--aoe", type=float, default=0.13, help="Area of effect (0–2, default 0.13)")
    p.add_argument("--strength", type=float, default=0.15, help="Impulse strength (0–2, default 0.15)")
    p.add_argument("--relaxation", type=float, default=0.9, help="Per-frame decay (0–1, default 0.9)")
    p.add_argument("--image", type=str, default=None, help="Image file to warp")
    p.add_argument("--pattern", type=str, default="checker", help="Built-in pattern when no image")
    p.add_argument("--quality", type=int, default=50, help="Render quality %% (10–100, default 50)")
    p.add_argument("--displacement", type=float, default=None, help="UV shift per unit offset")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for the grid")
    p.add_argument("--list-patterns", action="store_true", help="List built-in patterns and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> GridConfig:
    """Tunables from CLI args; raises ConfigError when out of range."""
    cfg = GridConfig(
        grid_size=args.grid,
        area_of_effect=args.aoe,
        strength=args.strength,
        relaxation=args.relaxation,
    )
    cfg.validate()
    return cfg


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("liquidwarp")

    if args.list_patterns:
        from .patterns import PATTERNS, list_patterns
        print("Available patterns:")
        for key in list_patterns():
            print(f"  {key:10s}  {PATTERNS[key].name}")
        sys.exit(0)

    missing = _check_deps()
    if missing:
        print(f"ERROR: Missing packages: {', '.join(missing)}\n"
              f"Install: pip install {' '.join(missing)}", file=sys.stderr)
        sys.exit(1)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    if not (10 <= args.quality <= 100):
        print("ERROR: --quality must be 10–100.", file=sys.stderr)
        sys.exit(1)

    from .patterns import PATTERNS, list_patterns, render_pattern
    if args.image is None and args.pattern not in PATTERNS:
        avail = ", ".join(list_patterns())
        print(f"ERROR: Unknown pattern '{args.pattern}'. Available: {avail}", file=sys.stderr)
        sys.exit(1)

    from PyQt5.QtWidgets import QApplication
    from .canvas import load_image
    from .engine import SimulationStep
    from .main_window import MainWindow
    from .renderer import DEFAULT_DISPLACEMENT

    logger.info("Starting Liquid Warp v%s", __version__)
    logger.info(
        "Grid: %d, AoE: %.2f, Strength: %.2f, Relaxation: %.2f",
        config.grid_size, config.area_of_effect, config.strength, config.relaxation,
    )

    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    app.setApplicationName("Liquid Warp")
    app.setApplicationVersion(__version__)

    # QImage decoding needs the QApplication
    if args.image is not None:
        image = load_image(args.image)
        if image is None:
            print(f"ERROR: Could not load image '{args.image}'.", file=sys.stderr)
            sys.exit(1)
    else:
        image = render_pattern(args.pattern)

    app.setStyleSheet("""
        QMainWindow, QWidget {
            background: #141618;
            color: #b8c0c8;
        }
        QGroupBox {
            font-weight: bold;
            font-size: 12px;
            color: #8fb8d8;
            border: 1px solid #2a3038;
            border-radius: 6px;
            margin-top: 8px;
            padding-top: 14px;
        }
        QGroupBox::title {
            subcontrol-origin: margin;
            subcontrol-position: top left;
            padding: 2px 8px;
        }
        QPushButton {
            background: #1e242a;
            border: 1px solid #3a4450;
            border-radius: 5px;
            padding: 5px 12px;
            color: #b8c0c8;
            font-size: 12px;
        }
        QPushButton:hover {
            background: #2a323a;
        }
        QPushButton:checked {
            background: #34506a;
            color: #e0f0ff;
        }
        QComboBox {
            background: #1e242a;
            border: 1px solid #3a4450;
            border-radius: 4px;
            padding: 4px 8px;
        }
        QSlider::groove:horizontal {
            height: 4px;
            background: #2a3038;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            background: #4a90c4;
            width: 14px;
            height: 14px;
            margin: -5px 0;
            border-radius: 7px;
        }
        QLabel {
            font-size: 12px;
        }
        QStatusBar {
            color: #7a848e;
            font-size: 11px;
        }
    """)

    h, w = image.shape[:2]
    step = SimulationStep(config, image_size=(w, h), seed=args.seed)
    displacement = DEFAULT_DISPLACEMENT if args.displacement is None else args.displacement

    window = MainWindow(step, image, render_scale=args.quality / 100, displacement=displacement)
    window.resize(1200, 720)
    window.show()

    sys.exit(app.exec_())
