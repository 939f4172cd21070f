"""Frame producers for the two renderers.

ShaderFrameProducer hands three uniforms to the GPU, which evaluates every
pixel in parallel. TextureFrameProducer evaluates every pixel on the host at
the backend's precision, then uploads the result as a texture. Both expose
``render_frame(viewport, size)``.
"""

import numpy as np

from .escape import (
    HOST_ESCAPE_RADIUS_SQ,
    HOST_MAX_ITERATIONS,
    SHADER_ESCAPE_RADIUS_SQ,
    SHADER_MAX_ITERATIONS,
    escape_time,
    escape_time_grid,
    intensity,
)
from .mapping import pixel_centered_to_complex, unit_square_to_complex
from .shaders import TEXTURE_FRAGMENT_SHADER, VERTEX_SHADER, mandelbrot_fragment_shader


# =============================================================================
# Host Evaluation
# =============================================================================

def compute_pixel_buffer(viewport, size, backend,
                         max_iterations: int = HOST_MAX_ITERATIONS,
                         escape_radius_sq=HOST_ESCAPE_RADIUS_SQ) -> np.ndarray:
    """Evaluate every pixel sequentially at the backend's precision.

    Args:
        viewport: Viewport whose scalars come from ``backend``
        size: (width, height) in pixels
        backend: precision backend for mapping and iteration
        max_iterations: iteration limit
        escape_radius_sq: bailout on |z|^2

    Returns:
        uint8 array of shape (height, width, 4), row 0 at the bottom
    """
    width, height = size
    data = np.empty((height, width, 4), dtype=np.uint8)
    data[..., 3] = 255

    with backend.context():
        radius_sq = backend.scalar(escape_radius_sq)
        for y in range(height):
            for x in range(width):
                c_re, c_im = pixel_centered_to_complex((x, y), size, viewport, backend)
                iteration = escape_time(c_re, c_im, max_iterations, radius_sq)
                data[y, x, :3] = intensity(iteration, max_iterations)

    return data


def emulate_shader_frame(viewport, size,
                         max_iterations: int = SHADER_MAX_ITERATIONS,
                         escape_radius_sq: float = SHADER_ESCAPE_RADIUS_SQ) -> np.ndarray:
    """Host rendition of the fragment shader over a whole frame.

    Runs the unit-square mapping and the escape loop vectorized in float32,
    then quantizes colors the way a unorm8 framebuffer does.

    Returns:
        uint8 array of shape (height, width, 4), row 0 at the bottom
    """
    width, height = size
    f32 = np.float32
    px, py = np.meshgrid(np.arange(width, dtype=f32), np.arange(height, dtype=f32))
    c_re, c_im = unit_square_to_complex((px, py), size, viewport)

    counts = escape_time_grid(c_re, c_im, max_iterations, escape_radius_sq)
    color = counts.astype(f32) / f32(max_iterations)

    data = np.empty((height, width, 4), dtype=np.uint8)
    data[..., :3] = np.rint(color * 255.0).astype(np.uint8)[..., np.newaxis]
    data[..., 3] = 255
    return data


# =============================================================================
# Producers
# =============================================================================

class ShaderFrameProducer:
    """Per-pixel evaluation on the GPU, single precision."""

    def __init__(self, display, max_iterations: int = SHADER_MAX_ITERATIONS):
        self.display = display
        self.max_iterations = max_iterations
        self.program = display.compile_program(
            VERTEX_SHADER, mandelbrot_fragment_shader(max_iterations)
        )
        display.use_program(self.program)

    def render_frame(self, viewport, size):
        view = viewport.snapshot()
        width, height = size
        self.display.set_uniform_vec2(self.program, "u_resolution", float(width), float(height))
        self.display.set_uniform_vec2(
            self.program, "u_offset", float(view.center_re), float(view.center_im)
        )
        self.display.set_uniform_float(self.program, "u_zoom", float(view.zoom))
        self.display.draw_full_viewport_quad()


class TextureFrameProducer:
    """Per-pixel evaluation on the host at high precision, shown as a texture.

    Each frame costs width * height * max_iterations backend operations and
    blocks until done. Nothing is cached between frames.
    """

    def __init__(self, display, backend, max_iterations: int = HOST_MAX_ITERATIONS):
        self.display = display
        self.backend = backend
        self.max_iterations = max_iterations
        self.program = display.compile_program(VERTEX_SHADER, TEXTURE_FRAGMENT_SHADER)
        display.use_program(self.program)

    def render_frame(self, viewport, size):
        view = viewport.snapshot()
        width, height = size
        data = compute_pixel_buffer(view, size, self.backend, self.max_iterations)
        self.display.upload_texture(width, height, data)
        self.display.set_uniform_int(self.program, "uTexture", 0)
        self.display.draw_full_viewport_quad()
