"""Interactive Mandelbrot viewer.

Controls:
    Left drag       Pan view
    Mouse wheel     Zoom in/out
    Q/ESC           Quit
"""

import sys
import time

import pygame

from .config import SHADER
from .controller import InputController, pixel_centered_pan, unit_square_pan
from .errors import DisplayError, UnsupportedPlatform
from .frames import ShaderFrameProducer, TextureFrameProducer
from .viewport import ViewportSize

POINTER_BUTTONS = (1, 2, 3)


class MandelbrotViewer:
    """Wires the display, the input controller and a frame producer together."""

    def __init__(self, config):
        self.config = config
        self.backend = config.make_backend()
        self.viewport = config.make_viewport(self.backend)
        self.size = ViewportSize(*config.dims)
        pan = unit_square_pan if config.variant == SHADER else pixel_centered_pan
        self.controller = InputController(
            self.viewport, self.backend, self.size, redraw=self._render, pan=pan
        )
        self.running = True

        # Set up in run()
        self.display = None
        self.producer = None
        self.clock = None

        self.frame_times: list[float] = []

    def log(self, message):
        if self.config.verbose:
            print(message)

    def run(self) -> int:
        """Main entry point. Returns a process exit status."""
        try:
            self._init_display()
        except DisplayError as e:
            print(e, file=sys.stderr)
            if self.display is not None:
                self.display.close()
            return 1

        self.clock = pygame.time.Clock()
        self._render()
        while self.running:
            self._handle_events()
            self.clock.tick(60)

        self._print_stats()
        self.display.close()
        return 0

    def _init_display(self):
        try:
            # PyOpenGL loads libGL on import
            from .display import Display
        except ImportError as e:
            raise UnsupportedPlatform(f"Unable to initialize OpenGL. ({e})") from e

        title = f"Mandelbrot ({self.config.variant})"
        self.display = Display.create(self.size, title)
        self.log(f"OpenGL version: {self.display.gl_version}")

        if self.config.variant == SHADER:
            self.producer = ShaderFrameProducer(self.display, self.config.imax)
        else:
            self.producer = TextureFrameProducer(self.display, self.backend, self.config.imax)
            self.log(f"Precision: {self.backend}")
        self.log(f"Max iterations: {self.config.imax}")

    def _print_stats(self):
        """Print rendering statistics on exit."""
        if self.frame_times:
            avg_ms = sum(self.frame_times) / len(self.frame_times)
            print(f"\nRendered {len(self.frame_times)} frames")
            print(f"Average frame time: {avg_ms:.1f}ms")

    # =========================================================================
    # Event Handling
    # =========================================================================

    def _handle_events(self):
        """Process pygame events in arrival order."""
        for event in pygame.event.get():
            self._dispatch(event)

    def _dispatch(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self._on_resize(event.size)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button in POINTER_BUTTONS:
            self.controller.pointer_down(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button in POINTER_BUTTONS:
            self.controller.pointer_up(event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self.controller.pointer_move(event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            # pygame reports scroll-up as positive y
            self.controller.wheel(-event.y)

    def _on_resize(self, size):
        size = ViewportSize(*size)
        if size == self.size:
            return
        self.size = size
        self.display.resize(size)
        self.controller.resize(size)
        self._render()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _render(self):
        t0 = time.perf_counter()
        self.producer.render_frame(self.viewport, self.size)
        self.display.flip()
        self.frame_times.append((time.perf_counter() - t0) * 1000)
