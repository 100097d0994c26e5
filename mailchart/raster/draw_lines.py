from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from mailchart.raster.canvas import RGBA, blend_mask


Point = tuple[float, float]
# Inclusive pixel bounds: (left, top, right, bottom).
ClipRect = tuple[float, float, float, float]

_CLIP_EPS = 1e-9


def clip_segment(start: Point, end: Point, rect: ClipRect) -> tuple[Point, Point] | None:
    """Liang-Barsky clip of one segment; ``None`` when it misses ``rect``.

    Endpoints already inside ``rect`` come back unchanged, so consecutive
    clipped segments still share their joints.
    """
    x0, y0 = start
    x1, y1 = end
    left, top, right, bottom = rect
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - left), (dx, right - x0), (-dy, y0 - top), (dy, bottom - y0)):
        q += _CLIP_EPS
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    a = start if t0 == 0.0 else (x0 + t0 * dx, y0 + t0 * dy)
    b = end if t1 == 1.0 else (x0 + t1 * dx, y0 + t1 * dy)
    return (a, b)


def clip_polyline(points: Sequence[Point], rect: ClipRect) -> list[tuple[Point, ...]]:
    """Split a polyline into the runs that lie inside ``rect``."""
    if len(points) == 1:
        return [tuple(points)] if clip_segment(points[0], points[0], rect) is not None else []
    runs: list[tuple[Point, ...]] = []
    current: list[Point] = []
    for a, b in zip(points[:-1], points[1:]):
        clipped = clip_segment(a, b, rect)
        if clipped is None:
            if current:
                runs.append(tuple(current))
                current = []
            continue
        ca, cb = clipped
        if current and current[-1] == ca:
            current.append(cb)
            continue
        if current:
            runs.append(tuple(current))
        current = [ca, cb]
    if current:
        runs.append(tuple(current))
    return runs


def draw_line(dst: np.ndarray, start: Point, end: Point, color: RGBA, width: int = 1) -> None:
    draw_polyline(dst, (start, end), color, width=width)


def draw_polyline(
    dst: np.ndarray,
    points: Sequence[Point],
    color: RGBA,
    width: int = 1,
    clip: ClipRect | None = None,
) -> None:
    if len(points) < 2:
        return
    radius = max(0, width // 2)
    height, width_px = dst.shape[:2]
    # Segments are walked only over the canvas, padded by the brush radius.
    bounds = (-radius, -radius, width_px - 1 + radius, height - 1 + radius)
    mask = np.zeros(dst.shape[:2], dtype=np.bool_)
    for a, b in zip(points[:-1], points[1:]):
        clipped = clip_segment(a, b, bounds)
        if clipped is None:
            continue
        (xa, ya), (xb, yb) = clipped
        _stroke_segment(mask, int(round(xa)), int(round(ya)), int(round(xb)), int(round(yb)), width=width)
    if clip is not None:
        _restrict_mask(mask, clip)
    blend_mask(dst, mask, color)


def _restrict_mask(mask: np.ndarray, clip: ClipRect) -> None:
    left, top, right, bottom = (int(np.floor(clip[0])), int(np.floor(clip[1])), int(np.ceil(clip[2])), int(np.ceil(clip[3])))
    h, w = mask.shape
    mask[: max(0, min(h, top)), :] = False
    mask[max(0, bottom + 1) :, :] = False
    mask[:, : max(0, min(w, left))] = False
    mask[:, max(0, right + 1) :] = False


def _stroke_segment(mask: np.ndarray, x0: int, y0: int, x1: int, y1: int, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _stamp_square_brush(mask, x0, y0, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp_square_brush(mask: np.ndarray, x: int, y: int, width: int) -> None:
    radius = max(0, width // 2)
    top = max(0, y - radius)
    bottom = min(mask.shape[0], y + radius + 1)
    left = max(0, x - radius)
    right = min(mask.shape[1], x + radius + 1)
    if bottom <= top or right <= left:
        return
    mask[top:bottom, left:right] = True
