from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((max(0, height), max(0, width), 4), dtype=np.uint8)
    fill(canvas, color)
    return canvas


def fill(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]
    dst[:, :, 3] = color[3]


def draw_line(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    """Bresenham line stamped with a round brush of the given width."""
    if width <= 0:
        return
    box = line_bounds(dst.shape[:2], x0, y0, x1, y1, width)
    if box is None:
        return
    bx0, by0, bx1, by1 = box
    radius = max(0, width // 2)
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    mask = np.zeros((by1 - by0, bx1 - bx0), dtype=bool)

    while True:
        _brush_mask(mask, x0 - bx0, y0 - by0, radius)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    # Each covered pixel is blended exactly once.
    _blend_mask(dst[by0:by1, bx0:bx1], mask, color)


def line_bounds(
    shape: tuple[int, ...], x0: int, y0: int, x1: int, y1: int, width: int
) -> tuple[int, int, int, int] | None:
    """Canvas-clipped `(x0, y0, x1, y1)` box covering a brushed line, end-exclusive."""
    h, w = shape[0], shape[1]
    radius = max(0, width // 2)
    bx0 = max(0, min(x0, x1) - radius)
    by0 = max(0, min(y0, y1) - radius)
    bx1 = min(w, max(x0, x1) + radius + 1)
    by1 = min(h, max(y0, y1) + radius + 1)
    if bx0 >= bx1 or by0 >= by1:
        return None
    return (bx0, by0, bx1, by1)


def fill_circle(dst: np.ndarray, cx: int, cy: int, radius: int, color: RGBA) -> None:
    if radius <= 0:
        return
    box = line_bounds(dst.shape[:2], cx, cy, cx, cy, radius * 2)
    if box is None:
        return
    x0, y0, x1, y1 = box
    yy, xx = np.ogrid[y0:y1, x0:x1]
    inside = (xx - cx) ** 2 + (yy - cy) ** 2 <= radius * radius
    _blend_mask(dst[y0:y1, x0:x1], inside, color)


def _brush_mask(mask: np.ndarray, x: int, y: int, radius: int) -> None:
    h, w = mask.shape
    ya = max(0, y - radius)
    yb = min(h, y + radius + 1)
    xa = max(0, x - radius)
    xb = min(w, x + radius + 1)
    if ya >= yb or xa >= xb:
        return
    if radius == 0:
        mask[ya:yb, xa:xb] = True
        return
    yy, xx = np.ogrid[ya:yb, xa:xb]
    mask[ya:yb, xa:xb] |= (xx - x) ** 2 + (yy - y) ** 2 <= radius * radius


def _blend_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA) -> None:
    if not np.any(mask):
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    src = np.asarray(color[0:3], dtype=np.float32)
    current = dst[mask, :3].astype(np.float32)
    dst[mask, 0:3] = (src * a + current * inv).astype(np.uint8)
    dst[mask, 3] = 255
