"""Basic drawing primitives for the playfield buffer."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black RGB buffer of shape (height, width, 3)."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def clear(buffer: Buffer, color: Color = (0, 0, 0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw a 1px outline
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    if x2 <= x1 or y2 <= y1:
        return
    buffer[y1, x1:x2] = color
    buffer[y2 - 1, x1:x2] = color
    buffer[y1:y2, x1] = color
    buffer[y1:y2, x2 - 1] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a circle using a distance mask.

    Args:
        buffer: Target numpy array (height, width, 3)
        cx: Center x coordinate
        cy: Center y coordinate
        radius: Circle radius in pixels
        color: RGB color tuple
        filled: If True, fill circle; if False, draw a 1px ring
    """
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2

    if filled:
        mask = dist_sq <= radius ** 2
    else:
        inner = max(radius - 1, 0)
        mask = (dist_sq <= radius ** 2) & (dist_sq >= inner ** 2)
    buffer[mask] = color


def draw_triangle(buffer: Buffer, a: Point, b: Point, c: Point, color: Color) -> None:
    """Draw a filled triangle using edge functions."""
    h, w = buffer.shape[:2]
    ys, xs = np.mgrid[:h, :w]

    def edge(p: Point, q: Point) -> NDArray[np.float64]:
        return (q[0] - p[0]) * (ys - p[1]) - (q[1] - p[1]) * (xs - p[0])

    e1, e2, e3 = edge(a, b), edge(b, c), edge(c, a)
    inside = ((e1 >= 0) & (e2 >= 0) & (e3 >= 0)) | ((e1 <= 0) & (e2 <= 0) & (e3 <= 0))
    buffer[inside] = color
