from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Sequence, Union


RGBA = tuple[int, int, int, int]
ColorLike = Union[str, tuple[int, int, int], tuple[int, int, int, int]]

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def coerce_color(color: ColorLike, alpha: float = 1.0) -> RGBA:
    """Resolve `#RGB`, `#RRGGBB`, `#RRGGBBAA` or an int tuple into RGBA.

    `alpha` scales the resulting alpha channel and is clamped into [0, 1].
    """

    if isinstance(color, str):
        raw = color.strip()
        if not _HEX_COLOR.match(raw):
            raise ValueError(f"invalid color: {color!r}")
        digits = raw[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        r = int(digits[0:2], 16)
        g = int(digits[2:4], 16)
        b = int(digits[4:6], 16)
        a = int(digits[6:8], 16) if len(digits) == 8 else 255
    elif len(color) == 3:
        r, g, b = color  # type: ignore[misc]
        a = 255
    elif len(color) == 4:
        r, g, b, a = color  # type: ignore[misc]
    else:
        raise ValueError(f"invalid color: {color!r}")
    out_a = int(round(max(0.0, min(1.0, alpha)) * int(a)))
    return (int(r), int(g), int(b), out_a)


@dataclass(frozen=True)
class DataPoint:
    x: float | str
    y: float
    label: str | None = None


@dataclass(frozen=True)
class Series:
    series_id: str
    name: str
    data: tuple[DataPoint, ...]
    color: ColorLike = "#7C3AED"
    dashed: bool = False
    confidence_upper: tuple[float, ...] | None = None
    confidence_lower: tuple[float, ...] | None = None
    show_confidence_interval: bool = True

    def __post_init__(self) -> None:
        # Callers often pass lists; store tuples so the series stays hashable and immutable.
        object.__setattr__(self, "data", tuple(self.data))
        if self.confidence_upper is not None:
            object.__setattr__(self, "confidence_upper", tuple(self.confidence_upper))
        if self.confidence_lower is not None:
            object.__setattr__(self, "confidence_lower", tuple(self.confidence_lower))

    def has_band(self) -> bool:
        if not self.show_confidence_interval:
            return False
        if self.confidence_upper is None or self.confidence_lower is None:
            return False
        n = len(self.data)
        return n > 0 and len(self.confidence_upper) == n and len(self.confidence_lower) == n


@dataclass(frozen=True)
class CategoricalBar:
    label: str
    value: float
    color: ColorLike | None = None
    group_values: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        if self.group_values is not None:
            object.__setattr__(self, "group_values", tuple(self.group_values))


@dataclass(frozen=True)
class SegmentDatum:
    segment_id: str
    label: str
    value: float
    color: ColorLike | None = None


def points_from_values(values: Sequence[float], *, xs: Sequence[float | str] | None = None) -> tuple[DataPoint, ...]:
    if xs is None:
        return tuple(DataPoint(x=i, y=float(v)) for i, v in enumerate(values))
    if len(xs) != len(values):
        raise ValueError(f"x and y length mismatch: {len(xs)} != {len(values)}")
    return tuple(DataPoint(x=x, y=float(v)) for x, v in zip(xs, values))
