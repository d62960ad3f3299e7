"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DrawMode(str, Enum):
    INTERACTIVE = "Interactive"
    AMBIENT = "Ambient"


class Layer(str, Enum):
    TOP = "Top"
    BASE = "Base"


class LayerMode(str, Enum):
    DRAW = "Draw"
    HIDE = "Hide"


class RenderState(str, Enum):
    NO_DATA = "NoData"
    READY = "Ready"
    DISPOSED = "Disposed"


@dataclass(frozen=True)
class RenderParameters:
    draw_mode: DrawMode = DrawMode.INTERACTIVE
    layer_parameters: dict[Layer, LayerMode] = field(default_factory=dict)

    @property
    def ambient(self) -> bool:
        return self.draw_mode == DrawMode.AMBIENT

    def layer_hidden(self, layer: Layer) -> bool:
        return self.layer_parameters.get(layer, LayerMode.DRAW) == LayerMode.HIDE


@dataclass(frozen=True)
class RenderBounds:
    left: int
    top: int
    right: int
    bottom: int

    @classmethod
    def empty(cls) -> "RenderBounds":
        return cls(0, 0, 0, 0)

    @classmethod
    def of_size(cls, width: int, height: int) -> "RenderBounds":
        return cls(0, 0, width, height)

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2.0

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2.0


@dataclass(frozen=True)
class ColorStyle:
    id: str
    background_color: str
    primary_color: str
    secondary_color: str
    outer_element_color: str
    complication_style_id: int


@dataclass(frozen=True)
class ComplicationTheme:
    id: int
    background_color: str
    border_color: str
    text_color: str
    highlight_color: str


@dataclass(frozen=True)
class HandDimensions:
    length_fraction: float
    width_fraction: float
    x_radius_rounded_corners: float = 0.0
    y_radius_rounded_corners: float = 0.0


@dataclass(frozen=True)
class WatchFaceConstants:
    gap_between_hand_and_center_fraction: float = 0.01869
    number_radius_fraction: float = 0.45
    number_style_outer_circle_radius_fraction: float = 0.00584
    gap_between_outer_circle_and_border_fraction: float = 0.03738
    draw_hour_pips: bool = True


DEFAULT_HOUR_HAND = HandDimensions(
    length_fraction=0.21028,
    width_fraction=0.02336,
    x_radius_rounded_corners=0.0,
    y_radius_rounded_corners=0.0,
)
DEFAULT_MINUTE_HAND = HandDimensions(
    length_fraction=0.37383,
    width_fraction=0.01868,
    x_radius_rounded_corners=0.0,
    y_radius_rounded_corners=0.0,
)
DEFAULT_SECOND_HAND = HandDimensions(
    length_fraction=0.37383,
    width_fraction=0.00934,
    x_radius_rounded_corners=0.0,
    y_radius_rounded_corners=0.0,
)


@dataclass(frozen=True)
class WatchFaceData:
    """Immutable style and dimension snapshot; replaced wholesale on update."""

    active_color_style: ColorStyle
    ambient_color_style: ColorStyle
    hour_hand: HandDimensions = DEFAULT_HOUR_HAND
    minute_hand: HandDimensions = DEFAULT_MINUTE_HAND
    second_hand: HandDimensions = DEFAULT_SECOND_HAND
    watch_face: WatchFaceConstants = field(default_factory=WatchFaceConstants)

    def color_style_for(self, params: RenderParameters) -> ColorStyle:
        return self.ambient_color_style if params.ambient else self.active_color_style


@dataclass(frozen=True)
class HandAngles:
    hour: float
    minute: float
    second: float
