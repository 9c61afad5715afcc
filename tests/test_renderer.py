"""Tests for the numpy warp renderer."""

import numpy as np

from liquidwarp.coverfit import CoverFitFactors
from liquidwarp.renderer import pixel_uv, render_frame, sample_offsets


def _image(w, h):
    img = np.zeros((h, w, 4), dtype=np.uint8)
    img[..., 0] = np.arange(w)[np.newaxis, :]
    img[..., 1] = np.arange(h)[:, np.newaxis]
    img[..., 3] = 255
    return img


def test_pixel_uv_v_grows_upwards():
    """Top row has the largest V, left column the smallest U."""
    u, v = pixel_uv(4, 2)

    assert u.shape == v.shape == (2, 4)
    assert v[0, 0] > v[1, 0]
    assert u[0, 0] < u[0, 3]


def test_sample_offsets_is_nearest_and_clamped():
    """Lookups snap to the containing cell and clamp at the edges."""
    offsets = np.zeros((2, 2, 4), dtype=np.float32)
    offsets[..., 0] = [[1, 2], [3, 4]]

    u = np.array([0.1, 0.9, 0.1, 1.5, -0.5])
    v = np.array([0.1, 0.1, 0.9, 0.9, 0.1])
    got = sample_offsets(offsets, u, v)[..., 0]

    np.testing.assert_array_equal(got, [1, 2, 3, 4, 1])


def test_zero_offsets_identity_fit_reproduces_image():
    """No warp and no crop gives back the source pixels."""
    img = _image(8, 6)
    out = render_frame(
        img, np.zeros((3, 3, 4), dtype=np.float32), CoverFitFactors(1.0, 1.0),
        8, 6, render_scale=1.0,
    )

    np.testing.assert_array_equal(out, img)


def test_render_scale_sets_output_size():
    """Output is the viewport size times the render scale."""
    img = _image(16, 16)
    out = render_frame(
        img, np.zeros((4, 4, 4), dtype=np.float32), CoverFitFactors(1.0, 1.0),
        100, 80, render_scale=0.5,
    )

    assert out.shape == (40, 50, 4)
    assert out.dtype == np.uint8


def test_large_offset_clamps_to_edge():
    """A push of a full UV width samples the image's first column."""
    img = _image(8, 6)
    offsets = np.zeros((2, 2, 4), dtype=np.float32)
    offsets[..., 0] = 100.0

    out = render_frame(
        img, offsets, CoverFitFactors(1.0, 1.0), 8, 6,
        render_scale=1.0, displacement=0.01,
    )

    assert np.all(out[..., 0] == 0)
    np.testing.assert_array_equal(out[..., 1], img[..., 1])


def test_cover_fit_crops_the_sides():
    """Half the U range samples only the middle columns."""
    img = _image(8, 4)
    out = render_frame(
        img, np.zeros((1, 1, 4), dtype=np.float32), CoverFitFactors(0.5, 1.0),
        8, 4, render_scale=1.0,
    )

    assert out[..., 0].min() == 2
    assert out[..., 0].max() == 5


def test_rgb_image_gains_alpha():
    """Three-channel sources come out as opaque RGBA."""
    img = _image(8, 6)[..., :3].copy()
    out = render_frame(
        img, np.zeros((2, 2, 4), dtype=np.float32), CoverFitFactors(1.0, 1.0),
        8, 6, render_scale=1.0,
    )

    assert out.shape == (6, 8, 4)
    assert np.all(out[..., 3] == 255)
