"""Pixel to complex-plane mapping.

Two conventions are used by the two renderers and are deliberately kept
apart; they scale the view differently.

unit_square_to_complex
    Shader renderer. The pixel is normalized to [0, 1]², rescaled to [-1, 1]²,
    divided by zoom and translated by the center. The aspect ratio is not
    corrected, so non-square viewports stretch the set.

pixel_centered_to_complex
    Host renderer. The pixel is offset by half the viewport so the origin sits
    in the middle of the surface, divided by zoom (pixels per plane unit) and
    translated by the center.

Row 0 is the bottom row of the displayed image in both conventions.
"""

import numpy as np


def unit_square_to_complex(pixel, size, viewport, dtype=np.float32):
    """Map ``pixel`` to the complex plane the way the fragment shader does.

    Args:
        pixel: (x, y) pixel coordinate; x and y may be arrays of coordinates
        size: (width, height) of the viewport in pixels
        viewport: Viewport with float-compatible scalars
        dtype: numpy scalar type the arithmetic runs in (GPU floats by default)

    Returns:
        (re, im) as ``dtype`` scalars, or arrays shaped like x and y
    """
    x, y = pixel
    width, height = size
    one = dtype(1.0)
    two = dtype(2.0)
    zoom = dtype(viewport.zoom)

    u = dtype(x) / dtype(width)
    v = dtype(y) / dtype(height)
    re = (u * two - one) / zoom + dtype(viewport.center_re)
    im = (v * two - one) / zoom + dtype(viewport.center_im)
    return re, im


def pixel_centered_to_complex(pixel, size, viewport, backend):
    """Map ``pixel`` to the complex plane at the backend's precision.

    Args:
        pixel: (x, y) pixel coordinate
        size: (width, height) of the viewport in pixels
        viewport: Viewport whose scalars come from ``backend``
        backend: precision backend used for all arithmetic

    Returns:
        (re, im) as backend scalars
    """
    x, y = pixel
    width, height = size
    two = backend.scalar(2)
    with backend.context():
        re = (backend.scalar(x) - backend.scalar(width) / two) / viewport.zoom + viewport.center_re
        im = (backend.scalar(y) - backend.scalar(height) / two) / viewport.zoom + viewport.center_im
    return re, im
