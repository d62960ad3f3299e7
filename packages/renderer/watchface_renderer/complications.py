"""Complication slots rendered as themed circular badges."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol

from .canvas import Paint, PaintStyle, PillowCanvas
from .models import ComplicationTheme, RenderParameters
from .themes import COMPLICATION_WHITE, get_complication_theme

LEFT_COMPLICATION_ID = 100
RIGHT_COMPLICATION_ID = 101


class ComplicationSlot(Protocol):
    enabled: bool

    def render(self, canvas: PillowCanvas, time: datetime, render_parameters: RenderParameters) -> None: ...

    def apply_theme(self, theme: ComplicationTheme) -> None: ...


@dataclass(frozen=True)
class SlotBounds:
    """Slot rectangle as fractions of the face bounds."""

    left: float
    top: float
    right: float
    bottom: float


def day_of_month(time: datetime) -> str:
    return f"{time.day:02d}"


def weekday_short(time: datetime) -> str:
    return time.strftime("%a").upper()


class CanvasComplication:
    def __init__(
        self,
        slot_id: int,
        bounds: SlotBounds,
        text_provider: Callable[[datetime], str] = day_of_month,
        enabled: bool = True,
        theme: ComplicationTheme | None = None,
    ) -> None:
        self.slot_id = slot_id
        self.bounds = bounds
        self.text_provider = text_provider
        self.enabled = enabled
        self.theme = theme or get_complication_theme(COMPLICATION_WHITE)

    def apply_theme(self, theme: ComplicationTheme) -> None:
        self.theme = theme

    def render(self, canvas: PillowCanvas, time: datetime, render_parameters: RenderParameters) -> None:
        face = canvas.bounds
        left = face.left + self.bounds.left * face.width
        right = face.left + self.bounds.right * face.width
        top = face.top + self.bounds.top * face.height
        bottom = face.top + self.bounds.bottom * face.height
        cx, cy = (left + right) / 2.0, (top + bottom) / 2.0
        radius = min(right - left, bottom - top) / 2.0
        stroke = max(1.0, radius * 0.08)

        if render_parameters.ambient:
            canvas.draw_circle(cx, cy, radius, Paint(color=self.theme.border_color, style=PaintStyle.STROKE, stroke_width=stroke))
            text_color = self.theme.border_color
        else:
            canvas.draw_circle(cx, cy, radius, Paint(color=self.theme.background_color))
            canvas.draw_circle(cx, cy, radius, Paint(color=self.theme.border_color, style=PaintStyle.STROKE, stroke_width=stroke))
            text_color = self.theme.text_color

        text = self.text_provider(time)
        paint = Paint(color=text_color, text_size=max(8, int(radius * 0.7)))
        l, t, r, b = canvas.text_bounds(text, paint)
        canvas.draw_text(text, cx - (l + r) / 2.0, cy - (t + b) / 2.0, paint)


def default_complications() -> dict[int, CanvasComplication]:
    return {
        LEFT_COMPLICATION_ID: CanvasComplication(
            LEFT_COMPLICATION_ID, SlotBounds(0.2, 0.4, 0.4, 0.6), text_provider=weekday_short
        ),
        RIGHT_COMPLICATION_ID: CanvasComplication(
            RIGHT_COMPLICATION_ID, SlotBounds(0.6, 0.4, 0.8, 0.6), text_provider=day_of_month
        ),
    }
