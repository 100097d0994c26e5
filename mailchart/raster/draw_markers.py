from __future__ import annotations

import numpy as np

from mailchart.raster.canvas import RGBA, blend_mask


def fill_ellipse(dst: np.ndarray, cx: float, cy: float, rx: float, ry: float, color: RGBA) -> None:
    if rx <= 0 or ry <= 0:
        return
    top = max(0, int(np.floor(cy - ry)))
    bottom = min(dst.shape[0], int(np.ceil(cy + ry)) + 1)
    left = max(0, int(np.floor(cx - rx)))
    right = min(dst.shape[1], int(np.ceil(cx + rx)) + 1)
    if bottom <= top or right <= left:
        return
    # Sample pixel centres against the ellipse equation.
    yy, xx = np.mgrid[top:bottom, left:right].astype(np.float32)
    inside = ((xx + 0.5 - cx) / rx) ** 2 + ((yy + 0.5 - cy) / ry) ** 2 <= 1.0
    mask = np.zeros(dst.shape[:2], dtype=np.bool_)
    mask[top:bottom, left:right] = inside
    blend_mask(dst, mask, color)
