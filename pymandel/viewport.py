"""View state shared by the input controller and the frame producers."""

from dataclasses import dataclass
from typing import NamedTuple, Optional

# Wheel zoom step, parsed by the active backend so decimal zooms stay exact
ZOOM_STEP = "1.1"


class ViewportSize(NamedTuple):
    """Size of the display surface in pixels."""
    width: int
    height: int


@dataclass
class Viewport:
    """Center offset and zoom in the complex plane.

    The scalars are whatever the active precision backend produces. Zoom is
    only ever scaled multiplicatively, so it stays positive.
    """
    center_re: object
    center_im: object
    zoom: object

    def __post_init__(self):
        if not self.zoom > 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")

    @classmethod
    def create(cls, backend, zoom, center_re=0, center_im=0) -> "Viewport":
        """Build a viewport with all three scalars from ``backend``."""
        with backend.context():
            return cls(
                center_re=backend.scalar(center_re),
                center_im=backend.scalar(center_im),
                zoom=backend.scalar(zoom),
            )

    def snapshot(self) -> "Viewport":
        """Copy of the current values, read once at the start of a frame."""
        return Viewport(self.center_re, self.center_im, self.zoom)


@dataclass
class DragState:
    """Mouse drag state for panning."""
    active: bool = False
    last_pos: Optional[tuple] = None
