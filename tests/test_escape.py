from decimal import Decimal, localcontext

import mpmath
import numpy as np
import pytest

from pymandel.escape import (
    SHADER_MAX_ITERATIONS,
    escape_time,
    escape_time_grid,
    intensity,
    shade_pixel,
    shader_color,
)


@pytest.mark.parametrize(
    "c_re, c_im, expected",
    [
        (0.0, 0.0, 100),   # origin, fixed point
        (-1.0, 0.0, 100),  # period-2 cycle
        (-2.0, 0.0, 100),  # tip of the set, |z|^2 stays exactly 4
        (1.0, 0.0, 2),     # 1, 2, 5
        (2.0, 0.0, 1),     # 2, 6
        (3.0, 0.0, 0),     # 3
        (0.5, 0.0, 4),
        (0.0, 3.0, 0),
    ],
)
def test_escape_time_float(c_re, c_im, expected):
    assert escape_time(c_re, c_im, 100, 4.0) == expected


def test_escape_time_decimal_matches_float():
    with localcontext() as ctx:
        ctx.prec = 40
        radius_sq = Decimal(4)
        for value in ["0.5", "1", "2", "-1", "0.25", "-0.75"]:
            c = Decimal(value)
            assert escape_time(c, Decimal(0), 1000, radius_sq) == \
                escape_time(float(value), 0.0, 1000, 4.0)


def test_escape_time_mpmath():
    with mpmath.workdps(30):
        assert escape_time(mpmath.mpf("0.5"), mpmath.mpf(0), 1000, mpmath.mpf(4)) == 4
        assert escape_time(mpmath.mpf("-1"), mpmath.mpf(0), 1000, mpmath.mpf(4)) == 1000


def test_escape_time_respects_max_iterations():
    assert escape_time(0.0, 0.0, 1, 4.0) == 1
    assert escape_time(0.0, 0.0, 0, 4.0) == 0


def test_intensity_saturated_is_black():
    for max_iterations in (1, 100, 1000):
        assert intensity(max_iterations, max_iterations) == 0


@pytest.mark.parametrize("k", [0, 1, 3, 4, 50, 99, 500, 999])
def test_intensity_escaped(k):
    max_iterations = 1000 if k >= 100 else 100
    assert intensity(k, max_iterations) == (255 * k) // max_iterations


def test_intensity_values():
    assert intensity(50, 100) == 127
    assert intensity(999, 1000) == 254
    assert intensity(1, 1000) == 0


def test_shader_color_saturated_is_white():
    assert shader_color(100, 100) == (1.0, 1.0, 1.0, 1.0)
    r, g, b, a = shader_color(25, 100)
    assert r == g == b == np.float32(0.25)
    assert a == 1.0


def test_shade_pixel_center_of_view():
    assert shade_pixel((400, 300), (800, 600), (0.0, 0.0), 0.5) == (1.0, 1.0, 1.0, 1.0)


def test_shade_pixel_outside_the_set():
    # Pixel (0, 0) maps to -2 - 2i, |c|^2 = 8
    r, g, b, a = shade_pixel((0, 0), (800, 600), (0.0, 0.0), 0.5)
    assert r == g == b == 0.0
    assert a == 1.0


def test_grid_matches_scalar():
    rng = np.random.default_rng(1234)
    c_re = rng.uniform(-2.0, 1.0, size=(12, 9)).astype(np.float32)
    c_im = rng.uniform(-1.5, 1.5, size=(12, 9)).astype(np.float32)

    counts = escape_time_grid(c_re, c_im, SHADER_MAX_ITERATIONS, 4.0)

    assert counts.shape == (12, 9)
    assert counts.dtype == np.int32
    for index in np.ndindex(counts.shape):
        expected = escape_time(c_re[index], c_im[index], SHADER_MAX_ITERATIONS, np.float32(4.0))
        assert counts[index] == expected


def test_grid_far_points_escape_at_zero():
    c_re = np.array([1e30, -1e30, 3.0], dtype=np.float32)
    c_im = np.zeros(3, dtype=np.float32)
    assert escape_time_grid(c_re, c_im, 100, 4.0).tolist() == [0, 0, 0]
