"""Core app services for settings, style publishing, frame pacing, and logging."""

from .config import AppConfig, load_config, save_config
from .frame_loop import FrameLoop, LoopStatus
from .performance import BudgetStatus, PerformanceController, PerformanceTargets
from .repository import Subscription, WatchFaceRepository, build_watch_face_data

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "FrameLoop",
    "LoopStatus",
    "PerformanceController",
    "PerformanceTargets",
    "Subscription",
    "WatchFaceRepository",
    "build_watch_face_data",
    "load_config",
    "save_config",
]
