"""Periodic render driver with frame pacing and budget feedback."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from watchface_renderer import AnalogWatchRenderer, PillowCanvas, RenderParameters

from .logging_setup import get_logger
from .performance import BudgetStatus, PerformanceController


@dataclass
class LoopStatus:
    frames: int = 0
    fps: float = 0.0
    last_render_ms: float = 0.0
    max_render_ms: float = 0.0
    frame_ms: int = 16
    budget: BudgetStatus | None = None
    samples: list[BudgetStatus] = field(default_factory=list)


class FrameLoop:
    def __init__(
        self,
        renderer: AnalogWatchRenderer,
        canvas: PillowCanvas,
        render_parameters: RenderParameters | None = None,
        interactive_frame_ms: int = 16,
        ambient_frame_ms: int = 60_000,
        performance: PerformanceController | None = None,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = time.sleep,
        sample_every: int = 30,
    ) -> None:
        self.renderer = renderer
        self.canvas = canvas
        self.render_parameters = render_parameters or RenderParameters()
        self.interactive_frame_ms = interactive_frame_ms
        self.ambient_frame_ms = ambient_frame_ms
        self.performance = performance
        self.sample_every = max(1, sample_every)
        self._clock = clock
        self._sleep = sleep
        self._status = LoopStatus(frame_ms=self._mode_frame_ms())
        self._events: list[dict[str, Any]] = []

    @property
    def status(self) -> LoopStatus:
        return self._status

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        return self._events[-limit:]

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {"ts_utc": datetime.now(timezone.utc).isoformat(), "event": event}
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]

    def _mode_frame_ms(self) -> int:
        return self.ambient_frame_ms if self.render_parameters.ambient else self.interactive_frame_ms

    def set_render_parameters(self, params: RenderParameters) -> None:
        self.render_parameters = params
        self._status.frame_ms = self._mode_frame_ms()
        self._log_event("mode_changed", draw_mode=params.draw_mode.value, frame_ms=self._status.frame_ms)

    def tick(self) -> float:
        start = time.perf_counter()
        self.renderer.render(self.canvas, self.canvas.bounds, self._clock(), self.render_parameters)
        render_ms = (time.perf_counter() - start) * 1000.0

        self._status.frames += 1
        self._status.last_render_ms = render_ms
        self._status.max_render_ms = max(self._status.max_render_ms, render_ms)
        return render_ms

    def run(self, seconds: float, on_frame: Callable[[PillowCanvas], None] | None = None) -> LoopStatus:
        logger = get_logger()
        logger.info("frame loop started", extra={"event": "frame_loop_started"})
        start = time.perf_counter()
        deadline = start + seconds

        while time.perf_counter() < deadline:
            frame_start = time.perf_counter()
            render_ms = self.tick()
            if on_frame is not None:
                on_frame(self.canvas)

            elapsed = max(time.perf_counter() - start, 1e-9)
            self._status.fps = self._status.frames / elapsed

            if self.performance is not None and self._status.frames % self.sample_every == 0:
                budget = self.performance.sample(self._status.fps, render_ms, self._status.frame_ms)
                self._status.budget = budget
                self._status.samples.append(budget)
                if budget.recommended_frame_ms != self._status.frame_ms and not self.render_parameters.ambient:
                    self._log_event(
                        "frame_period_adjusted",
                        warning=budget.warning,
                        previous_ms=self._status.frame_ms,
                        frame_ms=budget.recommended_frame_ms,
                    )
                    self._status.frame_ms = budget.recommended_frame_ms

            remaining = self._status.frame_ms / 1000.0 - (time.perf_counter() - frame_start)
            remaining = min(remaining, deadline - time.perf_counter())
            if remaining > 0:
                self._sleep(remaining)

        logger.info(
            f"frame loop stopped frames={self._status.frames}",
            extra={"event": "frame_loop_stopped"},
        )
        return self._status
