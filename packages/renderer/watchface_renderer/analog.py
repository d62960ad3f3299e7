"""Analog watch face renderer driven by reactive style and dimension snapshots."""

from __future__ import annotations

import logging
import math
import threading
from datetime import datetime
from typing import Callable, Mapping, Protocol

from .canvas import Paint, PaintStyle, PillowCanvas
from .complications import ComplicationSlot
from .geometry import HandGeometry, Path, TimeSample, angles_for, build_hand_from
from .models import Layer, RenderBounds, RenderParameters, RenderState, WatchFaceData
from .themes import get_complication_theme

logger = logging.getLogger("watchface.renderer")

# Painted at 3, 6, 9 and 12 o'clock; dots fill the remaining hour positions.
HOUR_MARKS = ("3", "6", "9", "12")

# Uniform scale applied around the center before drawing hands. Always 1.0 for now.
WATCH_HAND_SCALE = 1.0

NO_COMPLICATION_STYLE = -1


class Subscription(Protocol):
    def close(self) -> None: ...


class WatchFaceDataSource(Protocol):
    def subscribe(self, callback: Callable[[WatchFaceData | None], None]) -> Subscription: ...


class AnalogWatchRenderer:
    """Draws background, complications, hands and the hour-pip ring.

    The renderer subscribes to ``source`` on construction and keeps the last
    delivered snapshot. Hand outlines are rebuilt only when the bounds passed to
    :meth:`render` change or the minute-hand length changes; every other frame
    reuses the stored :class:`HandGeometry`. Call :meth:`close` (or use the
    renderer as a context manager) to drop the subscription.
    """

    def __init__(
        self,
        source: WatchFaceDataSource,
        complications: Mapping[int, ComplicationSlot] | None = None,
        hand_stroke_width: float = 2.0,
        hour_mark_text_size: int = 18,
    ) -> None:
        self.complications: dict[int, ComplicationSlot] = dict(complications or {})
        self.hand_stroke_width = hand_stroke_width
        self.hour_mark_text_size = hour_mark_text_size

        self._lock = threading.RLock()
        self._data: WatchFaceData | None = None
        self._state = RenderState.NO_DATA
        self._geometry: HandGeometry | None = None
        self._current_bounds = RenderBounds.empty()
        self._arm_length_changed = False
        self.geometry_recomputations = 0

        self._subscription: Subscription | None = source.subscribe(self._on_watch_face_data)

    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def watch_face_data(self) -> WatchFaceData | None:
        return self._data

    @property
    def hand_geometry(self) -> HandGeometry | None:
        return self._geometry

    def close(self) -> None:
        with self._lock:
            subscription = self._subscription
            if subscription is None:
                return
            self._subscription = None
            self._state = RenderState.DISPOSED
        # The source takes its own lock on unsubscribe; never hold ours across it.
        subscription.close()
        logger.info("renderer disposed", extra={"event": "renderer_disposed"})

    def __enter__(self) -> "AnalogWatchRenderer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _on_watch_face_data(self, data: WatchFaceData | None) -> None:
        # First delivery from a fresh source may be empty.
        if data is None:
            return

        with self._lock:
            # A delivery already in flight when close() ran.
            if self._state == RenderState.DISPOSED:
                return
            previous = self._data

            previous_style = previous.active_color_style.complication_style_id if previous else NO_COMPLICATION_STYLE
            new_style = data.active_color_style.complication_style_id
            if previous_style != new_style:
                logger.debug(
                    "complication style changed to %s",
                    new_style,
                    extra={"event": "complication_style_changed"},
                )
                theme = get_complication_theme(new_style)
                for complication in self.complications.values():
                    complication.apply_theme(theme)

            previous_length = previous.minute_hand.length_fraction if previous else 0.0
            if previous_length != data.minute_hand.length_fraction:
                logger.debug(
                    "minute hand length changed to %s",
                    data.minute_hand.length_fraction,
                    extra={"event": "minute_hand_length_changed"},
                )
                self._arm_length_changed = True

            self._data = data
            if self._state == RenderState.NO_DATA:
                self._state = RenderState.READY

    def render(
        self,
        canvas: PillowCanvas,
        bounds: RenderBounds,
        time: datetime,
        render_parameters: RenderParameters | None = None,
    ) -> None:
        params = render_parameters or RenderParameters()
        with self._lock:
            if self._state == RenderState.DISPOSED:
                raise RuntimeError("render() called on a disposed renderer")
            data = self._data
            if data is None:
                return
            geometry = self._ensure_geometry(bounds, data)

        canvas.draw_color(data.color_style_for(params).background_color)

        self._draw_complications(canvas, time, params)

        if not params.layer_hidden(Layer.TOP):
            self._draw_clock_hands(canvas, bounds, TimeSample.from_datetime(time), data, geometry, params)

        if not params.ambient and not params.layer_hidden(Layer.BASE) and data.watch_face.draw_hour_pips:
            self._draw_number_style_outer_element(canvas, bounds, data)

    def _ensure_geometry(self, bounds: RenderBounds, data: WatchFaceData) -> HandGeometry:
        # Usually runs once, when the host first reports the surface size.
        if self._geometry is None or self._current_bounds != bounds or self._arm_length_changed:
            self._arm_length_changed = False
            self._current_bounds = bounds
            self._geometry = self._recalculate_clock_hands(bounds, data)
        return self._geometry

    def _recalculate_clock_hands(self, bounds: RenderBounds, data: WatchFaceData) -> HandGeometry:
        self.geometry_recomputations += 1
        logger.debug(
            "recalculating clock hands for %sx%s",
            bounds.width,
            bounds.height,
            extra={"event": "clock_hands_recalculated"},
        )
        return HandGeometry(
            hour=build_hand_from(bounds, data.hour_hand, data.watch_face),
            minute=build_hand_from(bounds, data.minute_hand, data.watch_face),
            second=build_hand_from(bounds, data.second_hand, data.watch_face),
        )

    def _draw_complications(self, canvas: PillowCanvas, time: datetime, params: RenderParameters) -> None:
        for complication in self.complications.values():
            if complication.enabled:
                complication.render(canvas, time, params)

    def _draw_clock_hands(
        self,
        canvas: PillowCanvas,
        bounds: RenderBounds,
        sample: TimeSample,
        data: WatchFaceData,
        geometry: HandGeometry,
        params: RenderParameters,
    ) -> None:
        angles = angles_for(sample)
        cx, cy = bounds.center_x, bounds.center_y

        canvas.save()
        canvas.scale(WATCH_HAND_SCALE, WATCH_HAND_SCALE, cx, cy)
        if params.ambient:
            paint = Paint(
                color=data.ambient_color_style.primary_color,
                style=PaintStyle.STROKE,
                stroke_width=self.hand_stroke_width,
            )
            self._draw_hand(canvas, geometry.hour, angles.hour, cx, cy, paint)
            self._draw_hand(canvas, geometry.minute, angles.minute, cx, cy, paint)
        else:
            paint = Paint(color=data.active_color_style.primary_color, style=PaintStyle.FILL)
            self._draw_hand(canvas, geometry.hour, angles.hour, cx, cy, paint)
            self._draw_hand(canvas, geometry.minute, angles.minute, cx, cy, paint)

            second_paint = Paint(color=data.active_color_style.secondary_color, style=PaintStyle.FILL)
            self._draw_hand(canvas, geometry.second, angles.second, cx, cy, second_paint)
        canvas.restore()

    @staticmethod
    def _draw_hand(canvas: PillowCanvas, path: Path, angle: float, cx: float, cy: float, paint: Paint) -> None:
        canvas.save()
        canvas.rotate(angle, cx, cy)
        canvas.draw_path(path, paint)
        canvas.restore()

    def _draw_number_style_outer_element(self, canvas: PillowCanvas, bounds: RenderBounds, data: WatchFaceData) -> None:
        face = data.watch_face
        width = bounds.width
        color = data.active_color_style.outer_element_color

        text_paint = Paint(color=color, text_size=self.hour_mark_text_size)
        for i, mark in enumerate(HOUR_MARKS):
            rotation = 0.5 * (i + 1) * math.pi
            dx = math.sin(rotation) * face.number_radius_fraction * width
            dy = -math.cos(rotation) * face.number_radius_fraction * width
            left, top, right, bottom = canvas.text_bounds(mark, text_paint)
            canvas.draw_text(
                mark,
                bounds.center_x + dx - (left + right) / 2.0,
                bounds.center_y + dy - (top + bottom) / 2.0,
                text_paint,
            )

        radius_fraction = face.number_style_outer_circle_radius_fraction
        pip_paint = Paint(
            color=color,
            style=PaintStyle.FILL_AND_STROKE,
            stroke_width=radius_fraction * width,
        )
        # Rotation accumulates across all twelve steps; restored once afterwards.
        canvas.save()
        for i in range(12):
            if i % 3 != 0:
                self._draw_top_middle_circle(canvas, bounds, radius_fraction, face.gap_between_outer_circle_and_border_fraction, pip_paint)
            canvas.rotate(360.0 / 12.0, bounds.center_x, bounds.center_y)
        canvas.restore()

    @staticmethod
    def _draw_top_middle_circle(
        canvas: PillowCanvas,
        bounds: RenderBounds,
        radius_fraction: float,
        gap_fraction: float,
        paint: Paint,
    ) -> None:
        width = bounds.width
        canvas.draw_circle(
            bounds.center_x,
            bounds.top + width * (gap_fraction + radius_fraction),
            radius_fraction * width,
            paint,
        )
