"""Tests for cover-fit UV scaling."""

import pytest

from liquidwarp.config import ConfigError
from liquidwarp.coverfit import compute_fit


def test_landscape_viewport_wider_image_is_height_bound():
    """800x600 over a 1920x1080 image crops the sides."""
    fit = compute_fit(800, 600, 1920, 1080)

    assert fit.w_factor == pytest.approx(0.75)
    assert fit.h_factor == 1.0


def test_portrait_viewport_is_height_bound():
    """A tall viewport still binds on height and crops more width."""
    fit = compute_fit(600, 800, 1920, 1080)

    assert fit.h_factor == 1.0
    assert fit.w_factor == pytest.approx(600 / (1920 * (800 / 1080)))
    assert 0 < fit.w_factor < 1


def test_wide_viewport_is_width_bound():
    """A viewport flatter than the image crops top and bottom."""
    fit = compute_fit(1920, 600, 1920, 1080)

    assert fit.w_factor == 1.0
    assert fit.h_factor == pytest.approx(600 / 1080)


def test_matching_aspect_needs_no_scaling():
    """Equal aspect ratios take the width branch and scale nothing."""
    fit = compute_fit(960, 540, 1920, 1080)

    assert fit.w_factor == 1.0
    assert fit.h_factor == pytest.approx(1.0)


def test_factors_never_exceed_one():
    """Cover never samples outside the image, so neither factor exceeds 1."""
    for vw, vh in [(300, 900), (900, 300), (1000, 1000), (1, 500)]:
        fit = compute_fit(vw, vh, 640, 480)
        assert 0 < fit.w_factor <= 1.0
        assert 0 < fit.h_factor <= 1.0


def test_non_positive_dimensions_raise():
    """Zero or negative sizes are rejected."""
    with pytest.raises(ConfigError):
        compute_fit(0, 600, 1920, 1080)
    with pytest.raises(ConfigError):
        compute_fit(800, 600, 1920, -1)
