"""Render a single frame without a window and write it to an image file."""

import time

import numpy as np
from PIL import Image

from .config import SHADER
from .frames import compute_pixel_buffer, emulate_shader_frame


def save_frame(path, rgba: np.ndarray):
    """Write an RGBA buffer (row 0 at the bottom) with the top row first."""
    img = Image.fromarray(np.ascontiguousarray(np.flipud(rgba), dtype=np.uint8))
    img.save(path)


def render_snapshot(config) -> np.ndarray:
    """Render one frame of the configured renderer and save it to ``config.out_file``."""
    backend = config.make_backend()
    viewport = config.make_viewport(backend)

    t0 = time.perf_counter()
    if config.variant == SHADER:
        rgba = emulate_shader_frame(viewport, config.dims, config.imax)
    else:
        rgba = compute_pixel_buffer(viewport, config.dims, backend, config.imax)
    elapsed_ms = (time.perf_counter() - t0) * 1000

    save_frame(config.out_file, rgba)
    if config.verbose:
        print(f"Rendered {config.dims[0]}x{config.dims[1]} in {elapsed_ms:.0f}ms")
        print(f"Saved: {config.out_file}")
    return rgba
