"""Graphics module: snapshot rendering into numpy buffers."""

from laneshooter.graphics.renderer import SceneRenderer, Palette
from laneshooter.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_triangle,
    clear,
    new_buffer,
)

__all__ = [
    "SceneRenderer",
    "Palette",
    "draw_rect",
    "draw_circle",
    "draw_triangle",
    "clear",
    "new_buffer",
]
