"""pygame window with an OpenGL context, and the few GL calls the renderers need."""

from contextlib import contextmanager

import numpy as np
import pygame
from OpenGL.GL import (
    GL_ARRAY_BUFFER,
    GL_COLOR_BUFFER_BIT,
    GL_COMPILE_STATUS,
    GL_FALSE,
    GL_FLOAT,
    GL_FRAGMENT_SHADER,
    GL_LINEAR,
    GL_LINK_STATUS,
    GL_RGBA,
    GL_STATIC_DRAW,
    GL_TEXTURE0,
    GL_TEXTURE_2D,
    GL_TEXTURE_MAG_FILTER,
    GL_TEXTURE_MIN_FILTER,
    GL_TRIANGLE_STRIP,
    GL_UNPACK_ALIGNMENT,
    GL_UNSIGNED_BYTE,
    GL_VERSION,
    GL_VERTEX_SHADER,
    glActiveTexture,
    glAttachShader,
    glBindBuffer,
    glBindTexture,
    glBufferData,
    glClear,
    glClearColor,
    glCompileShader,
    glCreateProgram,
    glCreateShader,
    glDeleteBuffers,
    glDeleteProgram,
    glDeleteShader,
    glDeleteTextures,
    glDrawArrays,
    glEnableVertexAttribArray,
    glGenBuffers,
    glGenTextures,
    glGetAttribLocation,
    glGetProgramInfoLog,
    glGetProgramiv,
    glGetShaderInfoLog,
    glGetShaderiv,
    glGetString,
    glGetUniformLocation,
    glLinkProgram,
    glPixelStorei,
    glShaderSource,
    glTexImage2D,
    glTexParameteri,
    glUniform1f,
    glUniform1i,
    glUniform2f,
    glUseProgram,
    glVertexAttribPointer,
    glViewport,
)
from OpenGL.error import Error as GLError

from .errors import CompileError, LinkError, UnsupportedPlatform

QUAD_POSITIONS = np.array([-1, -1, 1, -1, -1, 1, 1, 1], dtype=np.float32)
POSITION_ATTRIBUTE = "aVertexPosition"


def _decode(log) -> str:
    if isinstance(log, bytes):
        return log.decode(errors="replace")
    return str(log)


class Display:
    """Display surface plus program, uniform, texture and quad helpers."""

    def __init__(self, size, title: str = "Mandelbrot"):
        self.size = tuple(size)
        self.title = title
        self.gl_version = None
        self.program = None
        self._uniforms: dict = {}
        self._texture = None
        self._quad_buffer = None
        self._context_lost = False

    @classmethod
    def create(cls, size, title: str = "Mandelbrot") -> "Display":
        """Open a resizable OpenGL window.

        Raises:
            UnsupportedPlatform: no usable OpenGL context
        """
        display = cls(size, title)
        pygame.init()
        try:
            pygame.display.set_mode(display.size, pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE)
        except pygame.error as e:
            pygame.quit()
            raise UnsupportedPlatform(
                f"Unable to initialize OpenGL. Your system may not support it. ({e})"
            ) from e
        try:
            with display._context_errors():
                version = glGetString(GL_VERSION)
                if not version:
                    raise UnsupportedPlatform(
                        "Unable to initialize OpenGL. No context version reported."
                    )
                display.gl_version = _decode(version)
                display._init_quad()
        except UnsupportedPlatform:
            pygame.quit()
            raise
        pygame.display.set_caption(title)
        return display

    @contextmanager
    def _context_errors(self):
        """Report PyOpenGL failures from a missing or dead context as UnsupportedPlatform."""
        try:
            yield
        except GLError as e:
            self._context_lost = True
            raise UnsupportedPlatform(f"Unable to initialize OpenGL. ({e})") from e

    def _init_quad(self):
        self._quad_buffer = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self._quad_buffer)
        glBufferData(GL_ARRAY_BUFFER, QUAD_POSITIONS.nbytes, QUAD_POSITIONS, GL_STATIC_DRAW)

    # =========================================================================
    # Programs and Uniforms
    # =========================================================================

    def _compile_shader(self, shader_type, source: str):
        shader = glCreateShader(shader_type)
        glShaderSource(shader, source)
        glCompileShader(shader)
        if not glGetShaderiv(shader, GL_COMPILE_STATUS):
            log = _decode(glGetShaderInfoLog(shader))
            glDeleteShader(shader)
            raise CompileError(log)
        return shader

    def compile_program(self, vertex_source: str, fragment_source: str):
        """Compile and link a program.

        Raises:
            CompileError: either shader failed to compile
            LinkError: the program failed to link
        """
        with self._context_errors():
            vertex_shader = self._compile_shader(GL_VERTEX_SHADER, vertex_source)
            try:
                fragment_shader = self._compile_shader(GL_FRAGMENT_SHADER, fragment_source)
            except CompileError:
                glDeleteShader(vertex_shader)
                raise

            program = glCreateProgram()
            glAttachShader(program, vertex_shader)
            glAttachShader(program, fragment_shader)
            glLinkProgram(program)
            glDeleteShader(vertex_shader)
            glDeleteShader(fragment_shader)

            if not glGetProgramiv(program, GL_LINK_STATUS):
                log = _decode(glGetProgramInfoLog(program))
                glDeleteProgram(program)
                raise LinkError(log)
        return program

    def use_program(self, program):
        with self._context_errors():
            glUseProgram(program)
            self.program = program

            location = glGetAttribLocation(program, POSITION_ATTRIBUTE)
            glBindBuffer(GL_ARRAY_BUFFER, self._quad_buffer)
            glEnableVertexAttribArray(location)
            glVertexAttribPointer(location, 2, GL_FLOAT, GL_FALSE, 0, None)

    def _uniform_location(self, program, name: str):
        key = (program, name)
        if key not in self._uniforms:
            # -1 for uniforms the compiler dropped; glUniform ignores it
            self._uniforms[key] = glGetUniformLocation(program, name)
        return self._uniforms[key]

    def set_uniform_vec2(self, program, name: str, x: float, y: float):
        glUniform2f(self._uniform_location(program, name), x, y)

    def set_uniform_float(self, program, name: str, value: float):
        glUniform1f(self._uniform_location(program, name), value)

    def set_uniform_int(self, program, name: str, value: int):
        glUniform1i(self._uniform_location(program, name), value)

    # =========================================================================
    # Textures and Drawing
    # =========================================================================

    def upload_texture(self, width: int, height: int, rgba: np.ndarray):
        """Upload an RGBA byte buffer, row 0 at the bottom, linearly filtered."""
        if self._texture is None:
            self._texture = glGenTextures(1)
        glActiveTexture(GL_TEXTURE0)
        glBindTexture(GL_TEXTURE_2D, self._texture)
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexImage2D(
            GL_TEXTURE_2D, 0, GL_RGBA, width, height, 0,
            GL_RGBA, GL_UNSIGNED_BYTE, np.ascontiguousarray(rgba, dtype=np.uint8),
        )
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
        return self._texture

    def draw_full_viewport_quad(self):
        width, height = self.size
        glViewport(0, 0, width, height)
        glClearColor(0.0, 0.0, 0.0, 1.0)
        glClear(GL_COLOR_BUFFER_BIT)
        glDrawArrays(GL_TRIANGLE_STRIP, 0, 4)

    # =========================================================================
    # Window
    # =========================================================================

    def resize(self, size):
        """Track a new surface size; only geometry changes."""
        self.size = tuple(size)

    def flip(self):
        pygame.display.flip()

    def close(self):
        if self._context_lost:
            # Nothing can be deleted without a context
            self._texture = self._quad_buffer = self.program = None
        if self._texture is not None:
            glDeleteTextures([self._texture])
            self._texture = None
        if self._quad_buffer is not None:
            glDeleteBuffers(1, [self._quad_buffer])
            self._quad_buffer = None
        if self.program is not None:
            glDeleteProgram(self.program)
            self.program = None
        pygame.quit()
