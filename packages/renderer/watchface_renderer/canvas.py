"""Pillow-backed drawing surface with a save/restore transform stack."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from io import BytesIO

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from . import geometry
from .geometry import Path
from .models import RenderBounds


class PaintStyle(str, Enum):
    FILL = "Fill"
    STROKE = "Stroke"
    FILL_AND_STROKE = "FillAndStroke"


@dataclass
class Paint:
    color: str = "#FFFFFF"
    style: PaintStyle = PaintStyle.FILL
    stroke_width: float = 1.0
    text_size: int = 18


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    if len(value) != 7 or not value.startswith("#"):
        raise ValueError(f"Expected #RRGGBB color, got {value!r}")
    return tuple(int(value[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore[return-value]


class PillowCanvas:
    """Draws onto an RGB image; every draw call goes through the current matrix."""

    def __init__(self, width: int, height: int, background: str = "#000000") -> None:
        self.width = width
        self.height = height
        self._image = Image.new("RGB", (width, height), hex_to_rgb(background))
        self._draw = ImageDraw.Draw(self._image)
        self._matrix = geometry.identity()
        self._stack: list[np.ndarray] = []
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    @property
    def bounds(self) -> RenderBounds:
        return RenderBounds.of_size(self.width, self.height)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def save_count(self) -> int:
        return len(self._stack)

    def save(self) -> int:
        self._stack.append(self._matrix.copy())
        return len(self._stack)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() called without a matching save()")
        self._matrix = self._stack.pop()

    def rotate(self, degrees: float, px: float = 0.0, py: float = 0.0) -> None:
        self._matrix = self._matrix @ geometry.rotation(degrees, px, py)

    def scale(self, sx: float, sy: float, px: float = 0.0, py: float = 0.0) -> None:
        self._matrix = self._matrix @ geometry.scaling(sx, sy, px, py)

    def draw_color(self, color: str) -> None:
        self._draw.rectangle((0, 0, self.width, self.height), fill=hex_to_rgb(color))

    def draw_path(self, path: Path, paint: Paint) -> None:
        points = [tuple(p) for p in path.transformed(self._matrix).points]
        rgb = hex_to_rgb(paint.color)
        if paint.style == PaintStyle.FILL:
            self._draw.polygon(points, fill=rgb)
        elif paint.style == PaintStyle.STROKE:
            self._draw.polygon(points, outline=rgb, width=self._stroke_px(paint))
        else:
            self._draw.polygon(points, fill=rgb, outline=rgb, width=self._stroke_px(paint))

    def draw_circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        (x, y), = geometry.apply(self._matrix, np.array([[cx, cy]], dtype=np.float64))
        r = radius * self._linear_scale()
        box = (x - r, y - r, x + r, y + r)
        rgb = hex_to_rgb(paint.color)
        if paint.style == PaintStyle.STROKE:
            self._draw.ellipse(box, outline=rgb, width=self._stroke_px(paint))
        elif paint.style == PaintStyle.FILL:
            self._draw.ellipse(box, fill=rgb)
        else:
            grow = paint.stroke_width * self._linear_scale() / 2.0
            self._draw.ellipse((box[0] - grow, box[1] - grow, box[2] + grow, box[3] + grow), fill=rgb)

    def text_bounds(self, text: str, paint: Paint) -> tuple[float, float, float, float]:
        left, top, right, bottom = self._draw.textbbox((0, 0), text, font=self._font(paint.text_size))
        return float(left), float(top), float(right), float(bottom)

    def draw_text(self, text: str, x: float, y: float, paint: Paint) -> None:
        # Glyphs are not rotated; only the origin follows the current matrix.
        (tx, ty), = geometry.apply(self._matrix, np.array([[x, y]], dtype=np.float64))
        self._draw.text((tx, ty), text, font=self._font(paint.text_size), fill=hex_to_rgb(paint.color))

    def to_image(self) -> Image.Image:
        return self._image.copy()

    def to_png_bytes(self) -> bytes:
        buf = BytesIO()
        self._image.save(buf, format="PNG")
        return buf.getvalue()

    def _linear_scale(self) -> float:
        return math.sqrt(abs(float(np.linalg.det(self._matrix[:2, :2]))))

    def _stroke_px(self, paint: Paint) -> int:
        return max(1, int(round(paint.stroke_width * self._linear_scale())))

    def _font(self, size: int):
        font = self._fonts.get(size)
        if font is not None:
            return font
        try:
            font = ImageFont.truetype("DejaVuSans.ttf", size)
        except OSError:
            try:
                font = ImageFont.truetype("Arial.ttf", size)
            except OSError:
                font = ImageFont.load_default()
        self._fonts[size] = font
        return font
