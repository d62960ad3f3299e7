"""Renderer package for analog watch face composition."""

from .analog import HOUR_MARKS, WATCH_HAND_SCALE, AnalogWatchRenderer
from .canvas import Paint, PaintStyle, PillowCanvas
from .complications import CanvasComplication, SlotBounds, default_complications
from .geometry import HandGeometry, Path, TimeSample, build_hand, hand_angles
from .models import (
    ColorStyle,
    ComplicationTheme,
    DrawMode,
    HandAngles,
    HandDimensions,
    Layer,
    LayerMode,
    RenderBounds,
    RenderParameters,
    RenderState,
    WatchFaceConstants,
    WatchFaceData,
)
from .themes import DEFAULT_COLOR_STYLE, default_watch_face_data, get_color_style, list_color_styles

__all__ = [
    "AnalogWatchRenderer",
    "CanvasComplication",
    "ColorStyle",
    "ComplicationTheme",
    "DEFAULT_COLOR_STYLE",
    "DrawMode",
    "HOUR_MARKS",
    "HandAngles",
    "HandDimensions",
    "HandGeometry",
    "Layer",
    "LayerMode",
    "Paint",
    "PaintStyle",
    "Path",
    "PillowCanvas",
    "RenderBounds",
    "RenderParameters",
    "RenderState",
    "SlotBounds",
    "TimeSample",
    "WATCH_HAND_SCALE",
    "WatchFaceConstants",
    "WatchFaceData",
    "build_hand",
    "default_complications",
    "default_watch_face_data",
    "get_color_style",
    "hand_angles",
    "list_color_styles",
]
