from __future__ import annotations

from dataclasses import dataclass
import math


FULL_TURN_DEG = 360.0
START_ANGLE_DEG = -90.0


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("BoundingBox width/height must be >= 0")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def distance_to(self, x: float, y: float) -> float:
        dx = max(self.x - x, 0.0, x - self.right)
        dy = max(self.y - y, 0.0, y - self.bottom)
        return math.hypot(dx, dy)


def polar_to_cartesian(cx: float, cy: float, radius: float, angle_deg: float) -> tuple[float, float]:
    """Angles are screen angles: 0 points right, -90 points up, positive turns clockwise."""

    rad = math.radians(angle_deg)
    return (cx + radius * math.cos(rad), cy + radius * math.sin(rad))


def pointer_angle(cx: float, cy: float, x: float, y: float) -> float:
    """Screen angle of (x, y) around the center, normalized into [-90, 270)."""

    angle = math.degrees(math.atan2(y - cy, x - cx))
    while angle < START_ANGLE_DEG:
        angle += FULL_TURN_DEG
    while angle >= START_ANGLE_DEG + FULL_TURN_DEG:
        angle -= FULL_TURN_DEG
    return angle


def arc_points(
    cx: float,
    cy: float,
    radius: float,
    start_deg: float,
    end_deg: float,
    *,
    max_step_deg: float = 4.0,
) -> list[tuple[float, float]]:
    sweep = end_deg - start_deg
    steps = max(1, int(math.ceil(abs(sweep) / max(0.1, max_step_deg))))
    return [polar_to_cartesian(cx, cy, radius, start_deg + sweep * (i / steps)) for i in range(steps + 1)]
