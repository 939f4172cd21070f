"""Interactive Mandelbrot viewer with a GPU shader renderer and a decimal host renderer."""

from .controller import InputController, InputState, pixel_centered_pan, unit_square_pan
from .escape import escape_time, intensity, shade_pixel, shader_color
from .frames import (
    ShaderFrameProducer,
    TextureFrameProducer,
    compute_pixel_buffer,
    emulate_shader_frame,
)
from .mapping import pixel_centered_to_complex, unit_square_to_complex
from .precision import DecimalBackend, FloatBackend, MpmathBackend, get_backend
from .viewport import DragState, Viewport, ViewportSize

__all__ = [
    "DecimalBackend",
    "DragState",
    "FloatBackend",
    "InputController",
    "InputState",
    "MpmathBackend",
    "ShaderFrameProducer",
    "TextureFrameProducer",
    "Viewport",
    "ViewportSize",
    "compute_pixel_buffer",
    "emulate_shader_frame",
    "escape_time",
    "get_backend",
    "intensity",
    "pixel_centered_to_complex",
    "shade_pixel",
    "shader_color",
    "unit_square_to_complex",
]
