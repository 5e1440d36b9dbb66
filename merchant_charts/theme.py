from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

_COLOR_TOKENS = (
    "text",
    "text_secondary",
    "background",
    "card",
    "border",
    "border_light",
    "primary",
    "info",
    "warning",
)


@dataclass(frozen=True)
class ChartTheme:
    """Color and font tokens shared by every chart family."""

    text: str = "#11181C"
    text_secondary: str = "#6B7280"
    background: str = "#FFFFFF"
    card: str = "#FFFFFF"
    border: str = "#E5E7EB"
    border_light: str = "#F3F4F6"
    primary: str = "#7C3AED"
    info: str = "#3B82F6"
    warning: str = "#F59E0B"
    palette: tuple[str, ...] = (
        "#7C3AED",
        "#10B981",
        "#6366F1",
        "#3B82F6",
        "#F59E0B",
        "#EC4899",
        "#8B5CF6",
        "#14B8A6",
    )
    font_size_px: float = 10.0

    def palette_color(self, index: int) -> str:
        return self.palette[index % len(self.palette)]


LIGHT_THEME = ChartTheme()

DARK_THEME = ChartTheme(
    text="#ECEDEE",
    text_secondary="#D1D5DB",
    background="#151718",
    card="#1F2937",
    border="#374151",
    border_light="#374151",
    primary="#8B5CF6",
    info="#60A5FA",
    warning="#FBBF24",
    palette=(
        "#8B5CF6",
        "#34D399",
        "#818CF8",
        "#60A5FA",
        "#FBBF24",
        "#EC4899",
        "#8B5CF6",
        "#14B8A6",
    ),
)


def theme_for_scheme(scheme: str | None) -> ChartTheme:
    return DARK_THEME if scheme == "dark" else LIGHT_THEME


def validate_theme_tokens(overrides: Mapping[str, Any] | None = None, *, base: ChartTheme = LIGHT_THEME) -> ChartTheme:
    """Validate and merge token overrides on top of `base`."""

    raw: dict[str, Any] = asdict(base)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    palette = raw["palette"]
    if isinstance(palette, str) or not isinstance(palette, (list, tuple)) or not palette:
        raise ValueError("Token `palette` must be a non-empty sequence of hex colors")
    for color in palette:
        if not isinstance(color, str) or not _HEX_COLOR.match(color):
            raise ValueError("Token `palette` must be a non-empty sequence of hex colors")

    if not isinstance(raw["font_size_px"], (int, float)) or float(raw["font_size_px"]) <= 0:
        raise ValueError("Token `font_size_px` must be a positive number")

    return ChartTheme(
        text=str(raw["text"]),
        text_secondary=str(raw["text_secondary"]),
        background=str(raw["background"]),
        card=str(raw["card"]),
        border=str(raw["border"]),
        border_light=str(raw["border_light"]),
        primary=str(raw["primary"]),
        info=str(raw["info"]),
        warning=str(raw["warning"]),
        palette=tuple(str(c) for c in palette),
        font_size_px=float(raw["font_size_px"]),
    )
