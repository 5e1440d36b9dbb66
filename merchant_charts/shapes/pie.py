from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal, Sequence

from merchant_charts.adapters import segment_values
from merchant_charts.geometry import FULL_TURN_DEG, START_ANGLE_DEG, polar_to_cartesian
from merchant_charts.interaction import HitRegion, SegmentTarget
from merchant_charts.model import ColorLike, SegmentDatum, coerce_color
from merchant_charts.primitives import Circle, Primitive, TextLabel, Wedge


LOGGER = logging.getLogger(__name__)

PieType = Literal["pie", "donut"]

DONUT_HOLE_RATIO = 0.6
PIE_LABEL_RADIUS_RATIO = 0.7
DONUT_LABEL_RADIUS_RATIO = 0.8
LABEL_VISIBILITY_THRESHOLD_PCT = 5.0


@dataclass(frozen=True)
class PieSlice:
    segment: SegmentDatum
    index: int
    value: float
    percentage: float
    start_angle: float
    end_angle: float
    color: ColorLike

    @property
    def angle(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return (self.start_angle + self.end_angle) / 2.0


@dataclass(frozen=True)
class PieGeometry:
    slices: tuple[PieSlice, ...]
    primitives: tuple[Primitive, ...]
    hit_regions: tuple[HitRegion, ...]
    total: float


def compute_slices(segments: Sequence[SegmentDatum], palette: Sequence[ColorLike] = ("#7C3AED",)) -> tuple[PieSlice, ...]:
    """Contiguous clockwise slices starting at 12 o'clock; empty when the total is not positive."""

    values = segment_values(segments)
    total = float(values.sum())
    if total <= 0:
        LOGGER.debug("pie total is %s; no slices", total)
        return ()
    out: list[PieSlice] = []
    current = START_ANGLE_DEG
    for i, segment in enumerate(segments):
        percentage = float(values[i]) / total * 100.0
        angle = percentage / 100.0 * FULL_TURN_DEG
        end = current + angle
        if i == len(segments) - 1:
            end = START_ANGLE_DEG + FULL_TURN_DEG
        out.append(
            PieSlice(
                segment=segment,
                index=i,
                value=float(values[i]),
                percentage=percentage,
                start_angle=current,
                end_angle=end,
                color=segment.color if segment.color is not None else palette[i % len(palette)],
            )
        )
        current = end
    return tuple(out)


def generate_pie_shapes(
    segments: Sequence[SegmentDatum],
    *,
    cx: float,
    cy: float,
    radius: float,
    pie_type: PieType = "donut",
    palette: Sequence[ColorLike] = ("#7C3AED",),
    show_percentages: bool = True,
    background: ColorLike = "#FFFFFF",
    label_color: ColorLike = "#FFFFFF",
    center_label: str | None = None,
    center_value: str | None = None,
    center_text_color: ColorLike = "#11181C",
    font_size_px: float = 10.0,
) -> PieGeometry:
    slices = compute_slices(segments, palette)
    donut = pie_type == "donut"
    inner_radius = radius * DONUT_HOLE_RATIO if donut else 0.0
    label_ratio = DONUT_LABEL_RADIUS_RATIO if donut else PIE_LABEL_RADIUS_RATIO
    text_rgba = coerce_color(label_color)

    wedges: list[Primitive] = []
    labels: list[Primitive] = []
    regions: list[HitRegion] = []
    for item in slices:
        keys = (item.segment.segment_id,)
        # The donut mask covers the hole, so hit-testing uses the ring while the wedge itself is drawn solid.
        wedge = Wedge(
            primitive_id=f"segment:{item.segment.segment_id}",
            cx=cx,
            cy=cy,
            outer_radius=radius,
            inner_radius=0.0,
            start_angle=item.start_angle,
            end_angle=item.end_angle,
            fill=coerce_color(item.color),
            selection_keys=keys,
        )
        wedges.append(wedge)
        hit_shape = wedge if not donut else Wedge(
            primitive_id=wedge.primitive_id,
            cx=cx,
            cy=cy,
            outer_radius=radius,
            inner_radius=inner_radius,
            start_angle=item.start_angle,
            end_angle=item.end_angle,
            fill=wedge.fill,
            selection_keys=keys,
        )
        anchor = polar_to_cartesian(cx, cy, radius * label_ratio, item.mid_angle)
        regions.append(
            HitRegion(
                region_id=wedge.primitive_id,
                shape=hit_shape,
                target=SegmentTarget(segment_id=item.segment.segment_id, segment_index=item.index),
                anchor=anchor,
            )
        )
        if show_percentages and item.percentage > LABEL_VISIBILITY_THRESHOLD_PCT:
            labels.append(
                TextLabel(
                    primitive_id=f"segment:{item.segment.segment_id}:pct",
                    x=anchor[0],
                    y=anchor[1] - font_size_px / 2.0,
                    text=f"{item.percentage:.0f}%",
                    color=text_rgba,
                    font_size_px=font_size_px,
                    selection_keys=keys,
                )
            )

    overlay: list[Primitive] = []
    if donut:
        overlay.append(Circle(primitive_id="donut:hole", cx=cx, cy=cy, radius=inner_radius, fill=coerce_color(background)))
        center_rgba = coerce_color(center_text_color)
        if center_value:
            overlay.append(
                TextLabel(
                    primitive_id="donut:center-value",
                    x=cx,
                    y=cy - font_size_px * 1.6,
                    text=center_value,
                    color=center_rgba,
                    font_size_px=font_size_px * 1.8,
                )
            )
        if center_label:
            overlay.append(
                TextLabel(
                    primitive_id="donut:center-label",
                    x=cx,
                    y=cy + font_size_px * 0.4,
                    text=center_label,
                    color=center_rgba,
                    font_size_px=font_size_px * 1.2,
                )
            )

    total = float(sum(item.value for item in slices))
    return PieGeometry(
        slices=slices,
        primitives=tuple(wedges + overlay + labels),
        hit_regions=tuple(regions),
        total=total,
    )
