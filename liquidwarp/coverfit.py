"""
Cover-fit UV scaling.

Works out how much to shrink the sampled UV range so the source image
fills the whole viewport at its own aspect ratio, like CSS
``background-size: cover``.  The overflowing axis is cropped.
"""

from __future__ import annotations

from typing import NamedTuple

from .config import ConfigError


class CoverFitFactors(NamedTuple):
    w_factor: float
    h_factor: float


def compute_fit(
    viewport_width: float,
    viewport_height: float,
    image_width: float,
    image_height: float,
) -> CoverFitFactors:
    """Return the UV scale factors that cover the viewport with the image."""
    if min(viewport_width, viewport_height, image_width, image_height) <= 0:
        raise ConfigError(
            f"dimensions must be positive: viewport={viewport_width}x{viewport_height} "
            f"image={image_width}x{image_height}"
        )

    img_aspect = image_height / image_width
    if viewport_height / viewport_width > img_aspect:
        # fit until the image height matches the viewport, crop the sides
        height_ratio = viewport_height / image_height
        w_factor = viewport_width / (image_width * height_ratio)
        h_factor = 1.0
    else:
        # fit until the image width matches the viewport, crop top/bottom
        width_ratio = viewport_width / image_width
        w_factor = 1.0
        h_factor = viewport_height / (image_height * width_ratio)
    return CoverFitFactors(w_factor, h_factor)
