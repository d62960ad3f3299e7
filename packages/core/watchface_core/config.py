"""App settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from watchface_renderer.themes import COLOR_STYLES, DEFAULT_COLOR_STYLE


CONFIG_VERSION = 1

MINUTE_HAND_LENGTH_MIN = 0.10
MINUTE_HAND_LENGTH_MAX = 0.45
DEFAULT_MINUTE_HAND_LENGTH = 0.37383


@dataclass
class DisplayConfig:
    width: int = 454
    height: int = 454
    interactive_frame_ms: int = 16
    ambient_frame_ms: int = 60_000


@dataclass
class StyleConfig:
    color_style: str = DEFAULT_COLOR_STYLE
    draw_hour_pips: bool = True
    minute_hand_length_fraction: float = DEFAULT_MINUTE_HAND_LENGTH


@dataclass
class RenderConfig:
    ambient: bool = False
    hide_top_layer: bool = False
    hide_base_layer: bool = False
    hand_stroke_width: float = 2.0
    hour_mark_text_size: int = 18


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class PerformanceConfig:
    cpu_percent_max: float = 8.0
    rss_mb_max: float = 300.0
    fps_min: float = 1.0
    fps_max: float = 60.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    display: DisplayConfig = field(default_factory=DisplayConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


DEFAULT_CONFIG = AppConfig()


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "WatchFace"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "WatchFace"
    return Path.home() / ".config" / "watchface"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def clamp_minute_hand_length(value: float) -> float:
    return float(max(MINUTE_HAND_LENGTH_MIN, min(MINUTE_HAND_LENGTH_MAX, float(value))))


def _normalize_display(cfg: AppConfig) -> None:
    cfg.display.width = max(16, int(cfg.display.width))
    cfg.display.height = max(16, int(cfg.display.height))
    cfg.display.interactive_frame_ms = max(1, min(1000, int(cfg.display.interactive_frame_ms)))
    cfg.display.ambient_frame_ms = max(1000, int(cfg.display.ambient_frame_ms))


def _normalize_style(cfg: AppConfig) -> None:
    if cfg.style.color_style not in COLOR_STYLES or cfg.style.color_style == "ambient":
        cfg.style.color_style = DEFAULT_COLOR_STYLE
    cfg.style.draw_hour_pips = bool(cfg.style.draw_hour_pips)
    cfg.style.minute_hand_length_fraction = clamp_minute_hand_length(cfg.style.minute_hand_length_fraction)


def _normalize_performance(cfg: AppConfig) -> None:
    cfg.performance.cpu_percent_max = float(max(1.0, cfg.performance.cpu_percent_max))
    cfg.performance.rss_mb_max = float(max(64.0, cfg.performance.rss_mb_max))
    cfg.performance.fps_min = float(max(0.01, cfg.performance.fps_min))
    cfg.performance.fps_max = float(max(cfg.performance.fps_min, cfg.performance.fps_max))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppConfig()

    if not isinstance(data, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        display=_merge(DisplayConfig, data.get("display", {})),
        style=_merge(StyleConfig, data.get("style", {})),
        render=_merge(RenderConfig, data.get("render", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_display(cfg)
    _normalize_style(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
