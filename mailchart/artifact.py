from __future__ import annotations

import base64
from dataclasses import dataclass
import html
import io
from pathlib import Path

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class ChartImage:
    """Rendered chart pixels plus the encodings a caller can embed."""

    rgba: np.ndarray
    scale: int = 1
    mime_type: str = "image/png"

    def __post_init__(self) -> None:
        if self.rgba.dtype != np.uint8:
            raise ValueError("rgba must be uint8")
        if self.rgba.ndim != 3 or self.rgba.shape[2] != 4:
            raise ValueError("rgba must have shape (H, W, 4)")
        self.rgba.flags.writeable = False

    @property
    def width(self) -> int:
        return int(self.rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self.rgba.shape[0])

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.rgba.copy())

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.to_pil().save(buffer, format="PNG")
        return buffer.getvalue()

    def to_base64(self) -> str:
        return base64.b64encode(self.to_png_bytes()).decode("ascii")

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    def to_img_tag(self, *, alt: str = "chart") -> str:
        # Pixels are rendered at `scale` x the nominal size; the tag shows nominal size.
        width = self.width // max(1, self.scale)
        height = self.height // max(1, self.scale)
        return (
            f'<img src="{self.to_data_uri()}" alt="{html.escape(alt, quote=True)}" '
            f'width="{width}" height="{height}" />'
        )

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.write_bytes(self.to_png_bytes())
        return out
