"""Built-in watch face color styles and complication themes."""

from __future__ import annotations

from .models import ColorStyle, ComplicationTheme, WatchFaceData

DEFAULT_COLOR_STYLE = "white"
AMBIENT_COLOR_STYLE = "ambient"

COMPLICATION_RED = 1
COMPLICATION_GREEN = 2
COMPLICATION_BLUE = 3
COMPLICATION_WHITE = 4

COLOR_STYLES: dict[str, ColorStyle] = {
    "red": ColorStyle(
        id="red",
        background_color="#000000",
        primary_color="#FF5252",
        secondary_color="#FFFFFF",
        outer_element_color="#FF8A80",
        complication_style_id=COMPLICATION_RED,
    ),
    "green": ColorStyle(
        id="green",
        background_color="#000000",
        primary_color="#69F0AE",
        secondary_color="#FFFFFF",
        outer_element_color="#B9F6CA",
        complication_style_id=COMPLICATION_GREEN,
    ),
    "blue": ColorStyle(
        id="blue",
        background_color="#000000",
        primary_color="#448AFF",
        secondary_color="#FFFFFF",
        outer_element_color="#82B1FF",
        complication_style_id=COMPLICATION_BLUE,
    ),
    "white": ColorStyle(
        id="white",
        background_color="#000000",
        primary_color="#FFFFFF",
        secondary_color="#FF5252",
        outer_element_color="#FFFFFF",
        complication_style_id=COMPLICATION_WHITE,
    ),
    "ambient": ColorStyle(
        id="ambient",
        background_color="#000000",
        primary_color="#FFFFFF",
        secondary_color="#FFFFFF",
        outer_element_color="#FFFFFF",
        complication_style_id=COMPLICATION_WHITE,
    ),
}

COMPLICATION_THEMES: dict[int, ComplicationTheme] = {
    COMPLICATION_RED: ComplicationTheme(
        id=COMPLICATION_RED,
        background_color="#000000",
        border_color="#FF5252",
        text_color="#FFFFFF",
        highlight_color="#FF8A80",
    ),
    COMPLICATION_GREEN: ComplicationTheme(
        id=COMPLICATION_GREEN,
        background_color="#000000",
        border_color="#69F0AE",
        text_color="#FFFFFF",
        highlight_color="#B9F6CA",
    ),
    COMPLICATION_BLUE: ComplicationTheme(
        id=COMPLICATION_BLUE,
        background_color="#000000",
        border_color="#448AFF",
        text_color="#FFFFFF",
        highlight_color="#82B1FF",
    ),
    COMPLICATION_WHITE: ComplicationTheme(
        id=COMPLICATION_WHITE,
        background_color="#000000",
        border_color="#FFFFFF",
        text_color="#FFFFFF",
        highlight_color="#BDBDBD",
    ),
}


def list_color_styles() -> list[str]:
    return sorted(name for name in COLOR_STYLES if name != AMBIENT_COLOR_STYLE)


def get_color_style(name: str | None) -> ColorStyle:
    if not name:
        return COLOR_STYLES[DEFAULT_COLOR_STYLE]
    return COLOR_STYLES[name]


def get_complication_theme(style_id: int) -> ComplicationTheme:
    return COMPLICATION_THEMES[style_id]


def default_watch_face_data(color_style: str | None = None, **overrides) -> WatchFaceData:
    """Assembles a complete snapshot with the stock hand and face dimensions."""
    return WatchFaceData(
        active_color_style=get_color_style(color_style),
        ambient_color_style=COLOR_STYLES[AMBIENT_COLOR_STYLE],
        **overrides,
    )
