"""Startup failures of the display layer. All of them are fatal for a session."""


class DisplayError(Exception):
    """Base class for display setup failures."""


class UnsupportedPlatform(DisplayError):
    """No compatible OpenGL context could be created."""


class CompileError(DisplayError):
    """A shader failed to compile."""

    def __init__(self, log: str):
        super().__init__(f"An error occurred compiling the shaders: {log}")
        self.log = log


class LinkError(DisplayError):
    """A shader program failed to link."""

    def __init__(self, log: str):
        super().__init__(f"Unable to initialize the shader program: {log}")
        self.log = log
