"""
Liquid Warp
===========

A mouse-reactive "liquid distortion" effect over a still image.

Moving the pointer perturbs a low-resolution grid of offset vectors.
Each frame the grid relaxes back towards rest while fresh impulses are
injected around the pointer:

  - Pointer motion is tracked as normalised position + velocity
  - Velocity-driven impulses fall off with distance, clamped near the cursor
  - Offsets decay geometrically by the relaxation factor every tick
  - The source image is cover-fitted to the viewport (crop, never letterbox)
  - A numpy shading stage warps the image by nearest-sampled offsets
"""

__version__ = "1.0.0"
__author__ = "Liquid Warp"
