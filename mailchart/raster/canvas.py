from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]
TRANSPARENT: RGBA = (0, 0, 0, 0)


def new_canvas(width: int, height: int, color: RGBA = TRANSPARENT) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def _blend_span(span: np.ndarray, color: RGBA) -> None:
    # Source-over onto a possibly transparent destination.
    src_a = color[3] / 255.0
    if src_a <= 0.0:
        return
    dst_a = span[..., 3:4].astype(np.float32) / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)
    src_rgb = np.asarray(color[0:3], dtype=np.float32)
    num = src_rgb * src_a + span[..., :3].astype(np.float32) * dst_a * (1.0 - src_a)
    span[..., :3] = np.clip(num / np.maximum(out_a, 1e-6), 0, 255).astype(np.uint8)
    span[..., 3:4] = np.clip(out_a * 255.0 + 0.5, 0, 255).astype(np.uint8)


def fill_rect(dst: np.ndarray, x: int, y: int, width: int, height: int, color: RGBA) -> None:
    left = max(0, int(x))
    top = max(0, int(y))
    right = min(dst.shape[1], int(x) + int(width))
    bottom = min(dst.shape[0], int(y) + int(height))
    if right <= left or bottom <= top:
        return
    _blend_span(dst[top:bottom, left:right], color)


def blend_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA, x: int = 0, y: int = 0) -> None:
    """Blend ``color`` into ``dst`` wherever ``mask`` is set.

    ``mask`` is boolean or uint8 coverage and its top-left corner lands on
    ``(x, y)``; parts outside the canvas are dropped. Pixels with zero
    coverage are left untouched.
    """
    mh, mw = mask.shape
    left = max(0, x)
    top = max(0, y)
    right = min(dst.shape[1], x + mw)
    bottom = min(dst.shape[0], y + mh)
    if right <= left or bottom <= top:
        return
    visible = mask[top - y : bottom - y, left - x : right - x]
    ys, xs = np.nonzero(visible)
    if ys.size == 0:
        return
    y0, y1 = int(ys.min()), int(ys.max()) + 1
    x0, x1 = int(xs.min()), int(xs.max()) + 1
    patch = dst[top + y0 : top + y1, left + x0 : left + x1]
    if mask.dtype == np.bool_:
        cov = visible[y0:y1, x0:x1].astype(np.float32)
    else:
        cov = visible[y0:y1, x0:x1].astype(np.float32) / 255.0
    src_a = (color[3] / 255.0) * cov[:, :, None]
    dst_a = patch[:, :, 3:4].astype(np.float32) / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)
    src_rgb = np.asarray(color[0:3], dtype=np.float32).reshape(1, 1, 3)
    num = src_rgb * src_a + patch[:, :, :3].astype(np.float32) * dst_a * (1.0 - src_a)
    touched = cov > 0
    rgb = np.clip(num / np.maximum(out_a, 1e-6), 0, 255).astype(np.uint8)
    alpha = np.clip(out_a[:, :, 0] * 255.0 + 0.5, 0, 255).astype(np.uint8)
    patch[:, :, :3][touched] = rgb[touched]
    patch[:, :, 3][touched] = alpha[touched]
