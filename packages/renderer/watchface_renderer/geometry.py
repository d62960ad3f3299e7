"""Hand angle math, hand outline construction and affine helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from .models import HandAngles, HandDimensions, RenderBounds, WatchFaceConstants

# Line segments used to flatten each rounded corner.
CORNER_SEGMENTS = 8


@dataclass(frozen=True)
class TimeSample:
    hours: int
    minutes: int
    seconds: float

    @classmethod
    def from_datetime(cls, value: datetime) -> "TimeSample":
        return cls(
            hours=value.hour % 12,
            minutes=value.minute,
            seconds=value.second + value.microsecond / 1_000_000.0,
        )


def hand_angles(hours: float, minutes: float, seconds: float) -> HandAngles:
    """Degrees clockwise from 12 o'clock for each hand."""
    return HandAngles(
        hour=(hours + minutes / 60.0 + seconds / 3600.0) / 12.0 * 360.0,
        minute=(minutes + seconds / 60.0) / 60.0 * 360.0,
        second=seconds / 60.0 * 360.0,
    )


def angles_for(sample: TimeSample) -> HandAngles:
    return hand_angles(sample.hours, sample.minutes, sample.seconds)


def identity() -> np.ndarray:
    return np.identity(3, dtype=np.float64)


def translation(dx: float, dy: float) -> np.ndarray:
    m = identity()
    m[0, 2] = dx
    m[1, 2] = dy
    return m


def rotation(degrees: float, px: float = 0.0, py: float = 0.0) -> np.ndarray:
    """Clockwise rotation in screen space (y grows downward) about (px, py)."""
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    r = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
    return translation(px, py) @ r @ translation(-px, -py)


def scaling(sx: float, sy: float, px: float = 0.0, py: float = 0.0) -> np.ndarray:
    s = np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]], dtype=np.float64)
    return translation(px, py) @ s @ translation(-px, -py)


def apply(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    homogeneous = np.hstack([points, np.ones((points.shape[0], 1))])
    return (homogeneous @ matrix.T)[:, :2]


@dataclass(frozen=True)
class Path:
    """Closed polygon outline in screen coordinates."""

    points: tuple[tuple[float, float], ...]

    def as_array(self) -> np.ndarray:
        return np.asarray(self.points, dtype=np.float64).reshape((-1, 2))

    def transformed(self, matrix: np.ndarray) -> "Path":
        out = apply(matrix, self.as_array())
        return Path(tuple((float(x), float(y)) for x, y in out))

    def bounds(self) -> tuple[float, float, float, float]:
        arr = self.as_array()
        return (
            float(arr[:, 0].min()),
            float(arr[:, 1].min()),
            float(arr[:, 0].max()),
            float(arr[:, 1].max()),
        )

    def signed_area(self) -> float:
        arr = self.as_array()
        x, y = arr[:, 0], arr[:, 1]
        return float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y) / 2.0)

    def is_clockwise(self) -> bool:
        # Positive shoelace area is clockwise when y grows downward.
        return self.signed_area() > 0


def _rect(left: float, top: float, right: float, bottom: float) -> Path:
    return Path(((left, top), (right, top), (right, bottom), (left, bottom)))


def _round_rect(left: float, top: float, right: float, bottom: float, rx: float, ry: float) -> Path:
    rx = min(abs(rx), (right - left) / 2.0)
    ry = min(abs(ry), (bottom - top) / 2.0)
    corners = (
        (right - rx, top + ry, -90.0),
        (right - rx, bottom - ry, 0.0),
        (left + rx, bottom - ry, 90.0),
        (left + rx, top + ry, 180.0),
    )
    points: list[tuple[float, float]] = []
    for cx, cy, start in corners:
        for step in range(CORNER_SEGMENTS + 1):
            theta = math.radians(start + 90.0 * step / CORNER_SEGMENTS)
            points.append((cx + rx * math.cos(theta), cy + ry * math.sin(theta)))
    return Path(tuple(points))


def build_hand(
    bounds: RenderBounds,
    length_fraction: float,
    width_fraction: float,
    gap_fraction: float,
    corner_rx: float = 0.0,
    corner_ry: float = 0.0,
) -> Path:
    """Returns a hand pointing at 12 o'clock.

    Length, width, gap and corner radii are fractions of ``bounds.width``. The
    hand spans from ``gap`` above the center to ``gap + length`` above it. A
    nonzero corner radius gives a rounded rectangle, otherwise a plain one.
    """
    for value in (length_fraction, width_fraction, gap_fraction, corner_rx, corner_ry):
        assert math.isfinite(value), f"non-finite hand dimension: {value!r}"

    width = bounds.width
    left = bounds.center_x - width_fraction / 2.0 * width
    right = bounds.center_x + width_fraction / 2.0 * width
    top = bounds.center_y - (gap_fraction + length_fraction) * width
    bottom = bounds.center_y - gap_fraction * width

    if corner_rx != 0.0 or corner_ry != 0.0:
        return _round_rect(left, top, right, bottom, corner_rx * width, corner_ry * width)
    return _rect(left, top, right, bottom)


def build_hand_from(bounds: RenderBounds, dims: HandDimensions, face: WatchFaceConstants) -> Path:
    return build_hand(
        bounds,
        dims.length_fraction,
        dims.width_fraction,
        face.gap_between_hand_and_center_fraction,
        dims.x_radius_rounded_corners,
        dims.y_radius_rounded_corners,
    )


@dataclass(frozen=True)
class HandGeometry:
    """One outline per hand; fill vs. border is a paint choice at draw time."""

    hour: Path
    minute: Path
    second: Path
