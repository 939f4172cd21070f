"""Viewer configuration and the per-renderer defaults."""

from dataclasses import dataclass
from typing import Optional

from .escape import HOST_MAX_ITERATIONS, SHADER_MAX_ITERATIONS
from .precision import DEFAULT_PRECISION, get_backend
from .viewport import Viewport

# Renderers
SHADER = "shader"
DECIMAL = "decimal"
VARIANTS = (SHADER, DECIMAL)

DEFAULT_DIMS = {
    SHADER: (800, 600),
    # Host evaluation is slow at 1000 iterations; keep the default surface small
    DECIMAL: (160, 120),
}
DEFAULT_ZOOM = {
    SHADER: "0.5",
    DECIMAL: "200",
}
DEFAULT_IMAX = {
    SHADER: SHADER_MAX_ITERATIONS,
    DECIMAL: HOST_MAX_ITERATIONS,
}
DEFAULT_CENTER = ("0", "0")


@dataclass
class ViewerConfig:
    """Everything needed to start a viewer or render a snapshot."""
    variant: str = SHADER
    dims: Optional[tuple] = None
    zoom: Optional[str] = None
    center: tuple = DEFAULT_CENTER
    imax: Optional[int] = None
    precision: int = DEFAULT_PRECISION
    backend: str = "decimal"
    out_file: Optional[str] = None
    verbose: bool = False

    def __post_init__(self):
        if self.variant not in VARIANTS:
            raise ValueError(f"Unknown variant: {self.variant}")
        if self.dims is None:
            self.dims = DEFAULT_DIMS[self.variant]
        if self.zoom is None:
            self.zoom = DEFAULT_ZOOM[self.variant]
        if self.imax is None:
            self.imax = DEFAULT_IMAX[self.variant]

    def make_backend(self):
        """Float arithmetic for the shader renderer, high precision for the host one."""
        if self.variant == SHADER:
            return get_backend("float")
        return get_backend(self.backend, self.precision)

    def make_viewport(self, backend) -> Viewport:
        return Viewport.create(backend, self.zoom, self.center[0], self.center[1])
