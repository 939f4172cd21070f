"""Pointer and wheel input as an explicit two-state machine.

    IDLE --pointer_down--> DRAGGING --pointer_move--> DRAGGING (pan, redraw)
    DRAGGING --pointer_up--> IDLE
    any --wheel--> same state (zoom, redraw)

pointer_move while IDLE is ignored. The controller mutates the Viewport it
was given and calls ``redraw`` synchronously after every change.
"""

from enum import Enum

from .viewport import ZOOM_STEP, DragState, ViewportSize


class InputState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


# =============================================================================
# Pan Policies
# =============================================================================

def unit_square_pan(viewport, dx, dy, size, backend):
    """Pan for the shader renderer: pixel deltas scaled by viewport size and zoom."""
    with backend.context():
        width = backend.scalar(size.width)
        height = backend.scalar(size.height)
        viewport.center_re -= backend.scalar(dx) / (width * viewport.zoom)
        viewport.center_im += backend.scalar(dy) / (height * viewport.zoom)


def pixel_centered_pan(viewport, dx, dy, size, backend):
    """Pan for the host renderer: zoom is already pixels per plane unit."""
    with backend.context():
        viewport.center_re -= backend.scalar(dx) / viewport.zoom
        viewport.center_im += backend.scalar(dy) / viewport.zoom


# =============================================================================
# Controller
# =============================================================================

class InputController:
    """Turns pointer drags and wheel steps into viewport updates."""

    def __init__(self, viewport, backend, size, redraw=None, pan=unit_square_pan):
        self.viewport = viewport
        self.backend = backend
        self.size = ViewportSize(*size)
        self.redraw = redraw
        self.pan = pan
        self.state = InputState.IDLE
        self.drag = DragState()

    def resize(self, size):
        """Resynchronize the surface size; the viewport itself is untouched."""
        self.size = ViewportSize(*size)

    def pointer_down(self, pos):
        self.state = InputState.DRAGGING
        self.drag.active = True
        self.drag.last_pos = tuple(pos)

    def pointer_move(self, pos):
        if self.state is not InputState.DRAGGING:
            return
        dx = pos[0] - self.drag.last_pos[0]
        dy = pos[1] - self.drag.last_pos[1]
        self.pan(self.viewport, dx, dy, self.size, self.backend)
        self.drag.last_pos = tuple(pos)
        self._request_redraw()

    def pointer_up(self, pos=None):
        self.state = InputState.IDLE
        self.drag.active = False
        self.drag.last_pos = None

    def wheel(self, delta_y) -> bool:
        """Zoom in for negative ``delta_y`` (scroll up), out otherwise.

        Returns True: the event is consumed and must not scroll anything else.
        """
        with self.backend.context():
            step = self.backend.scalar(ZOOM_STEP)
            if delta_y < 0:
                self.viewport.zoom = self.viewport.zoom * step
            else:
                self.viewport.zoom = self.viewport.zoom / step
        self._request_redraw()
        return True

    def _request_redraw(self):
        if self.redraw is not None:
            self.redraw()
