"""GLSL sources for both renderers.

Both programs share a vertex shader that passes a full-viewport quad through
and derives texture coordinates from clip-space positions.
"""

from .escape import SHADER_ESCAPE_RADIUS_SQ, SHADER_MAX_ITERATIONS

VERTEX_SHADER = """
#version 120
attribute vec4 aVertexPosition;
varying vec2 vTextureCoord;
void main() {
    gl_Position = aVertexPosition;
    vTextureCoord = (aVertexPosition.xy + 1.0) / 2.0;
}
"""

# Displays the host-computed pixel buffer
TEXTURE_FRAGMENT_SHADER = """
#version 120
varying vec2 vTextureCoord;
uniform sampler2D uTexture;
void main() {
    gl_FragColor = texture2D(uTexture, vTextureCoord);
}
"""

_MANDELBROT_FRAGMENT_BODY = """
uniform vec2 u_resolution;
uniform vec2 u_offset;
uniform float u_zoom;

void main() {
    // gl_FragCoord addresses pixel centers; shift back to integer pixels
    vec2 pixel = gl_FragCoord.xy - 0.5;
    vec2 uv = pixel / u_resolution;
    vec2 c = (uv * 2.0 - 1.0) / u_zoom + u_offset;

    vec2 z = vec2(0.0, 0.0);
    int iteration = MAX_ITERATIONS;
    for (int i = 0; i < MAX_ITERATIONS; i++) {
        z = vec2(z.x * z.x - z.y * z.y + c.x, 2.0 * z.x * z.y + c.y);
        if (z.x * z.x + z.y * z.y > ESCAPE_RADIUS_SQ) {
            iteration = i;
            break;
        }
    }

    float color = float(iteration) / float(MAX_ITERATIONS);
    gl_FragColor = vec4(color, color, color, 1.0);
}
"""


def mandelbrot_fragment_shader(max_iterations: int = SHADER_MAX_ITERATIONS,
                               escape_radius_sq: float = SHADER_ESCAPE_RADIUS_SQ) -> str:
    """Fragment shader source with the loop bounds baked in as constants."""
    return (
        "#version 120\n"
        f"#define MAX_ITERATIONS {int(max_iterations)}\n"
        f"#define ESCAPE_RADIUS_SQ {float(escape_radius_sq)!r}\n"
        + _MANDELBROT_FRAGMENT_BODY
    )
