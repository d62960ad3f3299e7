"""Render budget sampling and frame period tuning hints."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class PerformanceTargets:
    cpu_percent_max: float = 8.0
    rss_mb_max: float = 300.0
    fps_min: float = 1.0
    fps_max: float = 60.0


@dataclass(frozen=True)
class BudgetStatus:
    cpu_percent: float
    rss_mb: float
    fps: float
    render_ms: float
    overloaded: bool
    warning: str | None
    recommended_frame_ms: int


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(self, fps: float, render_ms: float, frame_ms: int) -> BudgetStatus:
        cpu = float(self._process.cpu_percent(interval=None))
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)
        overloaded = cpu > self.targets.cpu_percent_max or rss_mb > self.targets.rss_mb_max

        slowest_ms = int(1000.0 / self.targets.fps_min)
        fastest_ms = max(1, int(1000.0 / self.targets.fps_max))

        warning = None
        rec_frame = frame_ms

        if overloaded:
            warning = "resource_overload"
            rec_frame = min(slowest_ms, int(frame_ms * 1.25) + 4)
        elif render_ms > frame_ms:
            warning = "render_over_frame_budget"
            rec_frame = min(slowest_ms, int(render_ms) + 1)
        elif fps < self.targets.fps_min:
            warning = "below_fps_target"
            rec_frame = max(fastest_ms, frame_ms - 4)
        elif fps > self.targets.fps_max:
            warning = "above_fps_target"
            rec_frame = min(slowest_ms, frame_ms + 4)

        return BudgetStatus(
            cpu_percent=cpu,
            rss_mb=rss_mb,
            fps=float(fps),
            render_ms=float(render_ms),
            overloaded=overloaded,
            warning=warning,
            recommended_frame_ms=max(fastest_ms, min(slowest_ms, rec_frame)),
        )
