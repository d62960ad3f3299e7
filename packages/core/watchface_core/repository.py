"""User style repository that publishes watch face snapshots to subscribers."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Callable, Optional

from watchface_renderer.models import WatchFaceData
from watchface_renderer.themes import default_watch_face_data

from .config import StyleConfig, clamp_minute_hand_length
from .logging_setup import get_logger

Callback = Callable[[Optional[WatchFaceData]], None]


def build_watch_face_data(style: StyleConfig) -> WatchFaceData:
    base = default_watch_face_data(style.color_style)
    return replace(
        base,
        minute_hand=replace(base.minute_hand, length_fraction=clamp_minute_hand_length(style.minute_hand_length_fraction)),
        watch_face=replace(base.watch_face, draw_hour_pips=bool(style.draw_hour_pips)),
    )


class Subscription:
    def __init__(self, repository: "WatchFaceRepository", callback: Callback) -> None:
        self._repository = repository
        self._callback = callback
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._repository._remove(self._callback)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class WatchFaceRepository:
    """Holds the current user style and pushes a new snapshot on every change.

    New subscribers receive the current value immediately, which is ``None``
    until :meth:`load` or :meth:`update_user_style` has run.

    Callbacks run outside ``_lock`` so a subscriber may unsubscribe from any
    thread while a delivery is in flight. ``_delivery_lock`` keeps deliveries
    in publish order.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._delivery_lock = threading.RLock()
        self._style: StyleConfig | None = None
        self._current: WatchFaceData | None = None
        self._callbacks: list[Callback] = []

    @property
    def current(self) -> WatchFaceData | None:
        return self._current

    @property
    def style(self) -> StyleConfig | None:
        return self._style

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def subscribe(self, callback: Callback) -> Subscription:
        with self._delivery_lock:
            with self._lock:
                self._callbacks.append(callback)
                current = self._current
            callback(current)
        return Subscription(self, callback)

    def _remove(self, callback: Callback) -> None:
        with self._lock:
            self._callbacks.remove(callback)

    def load(self, style: StyleConfig) -> WatchFaceData:
        return self.update_user_style(
            color_style=style.color_style,
            draw_hour_pips=style.draw_hour_pips,
            minute_hand_length_fraction=style.minute_hand_length_fraction,
        )

    def update_user_style(
        self,
        color_style: str | None = None,
        draw_hour_pips: bool | None = None,
        minute_hand_length_fraction: float | None = None,
    ) -> WatchFaceData:
        with self._delivery_lock:
            with self._lock:
                style = replace(self._style) if self._style is not None else StyleConfig()
                if color_style is not None:
                    style.color_style = color_style
                if draw_hour_pips is not None:
                    style.draw_hour_pips = draw_hour_pips
                if minute_hand_length_fraction is not None:
                    style.minute_hand_length_fraction = clamp_minute_hand_length(minute_hand_length_fraction)

                data = build_watch_face_data(style)
                self._style = style
                self._current = data
                callbacks = list(self._callbacks)
            get_logger().info(
                "user style updated",
                extra={"event": "user_style_updated"},
            )
            for callback in callbacks:
                callback(data)
            return data
