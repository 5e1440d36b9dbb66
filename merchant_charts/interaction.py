from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Literal, Mapping, Protocol, Union

from merchant_charts.geometry import BoundingBox


PressPhase = Literal["down", "up", "single", "double", "cancel"]

DEFAULT_TOOLTIP_SIZE = (100.0, 60.0)
DEFAULT_TOOLTIP_OFFSET = (50.0, 60.0)


class HitShape(Protocol):
    def distance_to(self, x: float, y: float) -> float:
        ...


@dataclass(frozen=True)
class PointTarget:
    series_id: str
    point_index: int

    @property
    def target_id(self) -> str:
        return self.series_id


@dataclass(frozen=True)
class BarTarget:
    bar_index: int
    group_index: int | None = None

    @property
    def target_id(self) -> str:
        return bar_key(self.bar_index)


@dataclass(frozen=True)
class SegmentTarget:
    segment_id: str
    segment_index: int

    @property
    def target_id(self) -> str:
        return self.segment_id


@dataclass(frozen=True)
class LegendTarget:
    entry_id: str

    @property
    def target_id(self) -> str:
        return self.entry_id


HitTarget = Union[PointTarget, BarTarget, SegmentTarget, LegendTarget]


@dataclass(frozen=True)
class HitRegion:
    region_id: str
    shape: HitShape
    target: HitTarget
    anchor: tuple[float, float]
    tolerance: float = 0.0


@dataclass(frozen=True)
class HitResult:
    region: HitRegion
    distance: float

    @property
    def target(self) -> HitTarget:
        return self.region.target


@dataclass(frozen=True)
class TooltipAnchor:
    x: float
    y: float
    width: float
    height: float
    target_id: str
    point_index: int | None = None


@dataclass(frozen=True)
class PointerPressEvent:
    """Pointer press contract consumed by chart facades."""

    phase: PressPhase
    x: float
    y: float

    @property
    def is_press(self) -> bool:
        return self.phase in ("up", "single")


def bar_key(index: int) -> str:
    return f"bar-{index}"


def group_key(index: int) -> str:
    return f"group-{index}"


def parse_pointer_event(event_type: str, payload: object) -> PointerPressEvent | None:
    """Parse a host `press` payload (`{"phase": ..., "x": ..., "y": ...}`).

    Unknown phases and payloads without finite coordinates are ignored rather than raised.
    """

    if event_type != "press" or not isinstance(payload, Mapping):
        return None
    phase = payload.get("phase")
    if phase not in {"down", "up", "single", "double", "cancel"}:
        return None
    try:
        x = float(payload.get("x"))  # type: ignore[arg-type]
        y = float(payload.get("y"))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return PointerPressEvent(phase=phase, x=x, y=y)


def resolve_hit(regions: tuple[HitRegion, ...] | list[HitRegion], x: float, y: float) -> HitResult | None:
    """Closest region whose shape contains the point or lies within its tolerance.

    Regions are registered in draw order, so on equal distance the region registered
    last (drawn on top) wins.
    """

    best: HitResult | None = None
    for region in reversed(regions):
        distance = region.shape.distance_to(x, y)
        if distance > region.tolerance:
            continue
        if best is None or distance < best.distance:
            best = HitResult(region=region, distance=distance)
            if distance == 0.0:
                break
    return best


def place_tooltip(
    anchor_x: float,
    anchor_y: float,
    bounds: BoundingBox,
    *,
    target_id: str,
    point_index: int | None = None,
    size: tuple[float, float] = DEFAULT_TOOLTIP_SIZE,
    offset: tuple[float, float] = DEFAULT_TOOLTIP_OFFSET,
) -> TooltipAnchor:
    width = min(size[0], bounds.width)
    height = min(size[1], bounds.height)
    x = anchor_x - offset[0]
    y = anchor_y - offset[1]
    x = max(bounds.x, min(bounds.right - width, x))
    y = max(bounds.y, min(bounds.bottom - height, y))
    return TooltipAnchor(x=x, y=y, width=width, height=height, target_id=target_id, point_index=point_index)
