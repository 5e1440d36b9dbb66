from __future__ import annotations

import dataclasses
from dataclasses import dataclass
import math
from typing import Literal, Union

from merchant_charts.geometry import FULL_TURN_DEG, BoundingBox, arc_points, pointer_angle
from merchant_charts.model import RGBA


Point = tuple[float, float]
TextAnchor = Literal["start", "middle", "end"]


def _format_coord(value: float) -> str:
    out = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if out == "-0" else out


@dataclass(frozen=True)
class Polyline:
    primitive_id: str
    points: tuple[Point, ...]
    color: RGBA
    width: int = 2
    dashed: bool = False
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0

    def segments(self) -> list[tuple[Point, Point]]:
        return [(self.points[i], self.points[i + 1]) for i in range(len(self.points) - 1)]


@dataclass(frozen=True)
class Polygon:
    primitive_id: str
    points: tuple[Point, ...]
    fill: RGBA
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0

    @property
    def vertex_count(self) -> int:
        return len(self.points)

    def path(self) -> str:
        if not self.points:
            return ""
        head, *rest = self.points
        parts = [f"M {_format_coord(head[0])} {_format_coord(head[1])}"]
        parts.extend(f"L {_format_coord(x)} {_format_coord(y)}" for x, y in rest)
        parts.append("Z")
        return " ".join(parts)


@dataclass(frozen=True)
class Marker:
    primitive_id: str
    cx: float
    cy: float
    radius: float
    color: RGBA
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0

    def distance_to(self, x: float, y: float) -> float:
        return max(0.0, math.hypot(x - self.cx, y - self.cy) - self.radius)


@dataclass(frozen=True)
class Rect:
    primitive_id: str
    x: float
    y: float
    width: float
    height: float
    fill: RGBA
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0

    @property
    def bounds(self) -> BoundingBox:
        return BoundingBox(self.x, self.y, max(0.0, self.width), max(0.0, self.height))

    def distance_to(self, x: float, y: float) -> float:
        return self.bounds.distance_to(x, y)


@dataclass(frozen=True)
class Wedge:
    primitive_id: str
    cx: float
    cy: float
    outer_radius: float
    inner_radius: float
    start_angle: float
    end_angle: float
    fill: RGBA
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2.0

    def contains(self, x: float, y: float) -> bool:
        r = math.hypot(x - self.cx, y - self.cy)
        if r > self.outer_radius or r < self.inner_radius:
            return False
        if self.sweep >= FULL_TURN_DEG - 1e-9:
            return True
        angle = pointer_angle(self.cx, self.cy, x, y)
        return self.start_angle <= angle < self.end_angle

    def distance_to(self, x: float, y: float) -> float:
        return 0.0 if self.contains(x, y) else math.inf

    def outline(self, max_step_deg: float = 4.0) -> tuple[Point, ...]:
        """Closed arc outline: outer arc clockwise, then inner arc (or center) back."""

        outer = arc_points(self.cx, self.cy, self.outer_radius, self.start_angle, self.end_angle, max_step_deg=max_step_deg)
        if self.inner_radius > 0:
            inner = arc_points(self.cx, self.cy, self.inner_radius, self.end_angle, self.start_angle, max_step_deg=max_step_deg)
        else:
            inner = [(self.cx, self.cy)]
        return tuple(outer + inner)


@dataclass(frozen=True)
class Circle:
    primitive_id: str
    cx: float
    cy: float
    radius: float
    fill: RGBA
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0


@dataclass(frozen=True)
class TextLabel:
    primitive_id: str
    x: float
    y: float
    text: str
    color: RGBA
    font_size_px: float = 10.0
    anchor: TextAnchor = "middle"
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0


@dataclass(frozen=True)
class GridLine:
    primitive_id: str
    x0: float
    y0: float
    x1: float
    y1: float
    color: RGBA
    selection_keys: tuple[str, ...] = ()
    opacity: float = 1.0


Primitive = Union[Polyline, Polygon, Marker, Rect, Wedge, Circle, TextLabel, GridLine]


def with_opacity(primitive: Primitive, opacity: float) -> Primitive:
    if primitive.opacity == opacity:
        return primitive
    return dataclasses.replace(primitive, opacity=opacity)
