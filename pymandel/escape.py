"""Escape-time evaluation of the Mandelbrot recurrence z <- z^2 + c."""

import numpy as np

from .mapping import unit_square_to_complex
from .viewport import Viewport

# Shader renderer: GPU single precision, interactive
SHADER_MAX_ITERATIONS = 100
SHADER_ESCAPE_RADIUS_SQ = 4.0

# Host renderer: decimal precision, slow but stable at deep zoom
HOST_MAX_ITERATIONS = 1000
HOST_ESCAPE_RADIUS_SQ = 4


def escape_time(c_re, c_im, max_iterations: int, escape_radius_sq) -> int:
    """Count iterations until |z|^2 exceeds ``escape_radius_sq``.

    Starts from z = 0 and applies z <- z^2 + c up to ``max_iterations`` times.
    Returns the index of the iteration at which escape was detected, or
    ``max_iterations`` if the orbit never escaped. Works for any scalar type
    with the usual arithmetic operators (float, Decimal, mpf, numpy scalars);
    the caller owns the arithmetic context.
    """
    z_re = c_re - c_re
    z_im = c_im - c_im
    for i in range(max_iterations):
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, 2 * z_re * z_im + c_im
        if z_re * z_re + z_im * z_im > escape_radius_sq:
            return i
    return max_iterations


def intensity(iteration: int, max_iterations: int) -> int:
    """Grayscale byte for an iteration count. Points that never escape are black."""
    if iteration >= max_iterations:
        return 0
    return 255 * iteration // max_iterations


def shader_color(iteration, max_iterations):
    """RGBA floats the fragment shader writes; a saturated count is white."""
    value = np.float32(iteration) / np.float32(max_iterations)
    return (value, value, value, np.float32(1.0))


def shade_pixel(pixel, resolution, offset, zoom,
                max_iterations=SHADER_MAX_ITERATIONS,
                escape_radius_sq=SHADER_ESCAPE_RADIUS_SQ):
    """Color of one output pixel of the shader renderer.

    This is the function the fragment shader runs once per pixel, with
    ``resolution``, ``offset`` and ``zoom`` as its uniforms. Invocations share
    no state. Arithmetic is float32 like the GPU.
    """
    viewport = Viewport(center_re=offset[0], center_im=offset[1], zoom=zoom)
    c_re, c_im = unit_square_to_complex(pixel, resolution, viewport)
    iteration = escape_time(c_re, c_im, max_iterations, np.float32(escape_radius_sq))
    return shader_color(iteration, max_iterations)


def escape_time_grid(c_re: np.ndarray, c_im: np.ndarray, max_iterations: int,
                     escape_radius_sq) -> np.ndarray:
    """Vectorized ``escape_time`` over arrays of points.

    Every element follows exactly the same arithmetic as the scalar version in
    the dtype of the inputs; elements stop updating once they escape.

    Returns:
        int32 array of iteration counts, same shape as the inputs
    """
    dtype = c_re.dtype
    radius_sq = dtype.type(escape_radius_sq)
    two = dtype.type(2.0)
    z_re = np.zeros_like(c_re)
    z_im = np.zeros_like(c_im)
    counts = np.full(c_re.shape, max_iterations, dtype=np.int32)
    active = np.ones(c_re.shape, dtype=bool)

    # Escaped points are frozen, but far-out points can still overflow float32
    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(max_iterations):
            if not active.any():
                break
            new_re = z_re * z_re - z_im * z_im + c_re
            new_im = two * z_re * z_im + c_im
            z_re = np.where(active, new_re, z_re)
            z_im = np.where(active, new_im, z_im)
            escaped = active & (z_re * z_re + z_im * z_im > radius_sq)
            counts[escaped] = i
            active &= ~escaped

    return counts
