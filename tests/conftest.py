import sys
from pathlib import Path

import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from pymandel.precision import get_backend
from pymandel.viewport import Viewport


@pytest.fixture
def float_backend():
    return get_backend("float")


@pytest.fixture
def decimal_backend():
    return get_backend("decimal", 50)


@pytest.fixture
def shader_viewport(float_backend):
    """Default view of the shader renderer."""
    return Viewport.create(float_backend, "0.5")


@pytest.fixture
def decimal_viewport(decimal_backend):
    """Default view of the decimal renderer."""
    return Viewport.create(decimal_backend, "200")


class FakeDisplay:
    """Records the collaborator calls a frame producer makes."""

    def __init__(self):
        self.calls = []
        self.programs = 0

    def compile_program(self, vertex_source, fragment_source):
        self.programs += 1
        self.calls.append(("compile_program", vertex_source, fragment_source))
        return f"program-{self.programs}"

    def use_program(self, program):
        self.calls.append(("use_program", program))

    def set_uniform_vec2(self, program, name, x, y):
        self.calls.append(("set_uniform_vec2", program, name, x, y))

    def set_uniform_float(self, program, name, value):
        self.calls.append(("set_uniform_float", program, name, value))

    def set_uniform_int(self, program, name, value):
        self.calls.append(("set_uniform_int", program, name, value))

    def upload_texture(self, width, height, rgba):
        self.calls.append(("upload_texture", width, height, rgba))
        return "texture"

    def draw_full_viewport_quad(self):
        self.calls.append(("draw_full_viewport_quad",))

    def resize(self, size):
        self.calls.append(("resize", tuple(size)))

    def flip(self):
        self.calls.append(("flip",))

    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_display():
    return FakeDisplay()
