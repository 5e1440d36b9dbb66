from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Literal, Sequence

from merchant_charts.adapters import BarMode, clamp_non_negative
from merchant_charts.interaction import BarTarget, HitRegion, bar_key, group_key
from merchant_charts.model import CategoricalBar, ColorLike, coerce_color
from merchant_charts.primitives import Primitive, Rect, TextLabel
from merchant_charts.scales import LinearScale


LOGGER = logging.getLogger(__name__)

Orientation = Literal["vertical", "horizontal"]

BAR_SPACING = 8.0
GROUP_SPACING = 20.0
GROUP_INNER_MARGIN = 1.0
VALUE_LABEL_GAP = 4.0


@dataclass(frozen=True)
class BarSlot:
    """Category-axis slot, measured from the plot origin along the category axis."""

    offset: float
    thickness: float

    @property
    def center(self) -> float:
        return self.offset + self.thickness / 2.0


@dataclass(frozen=True)
class BarGeometry:
    primitives: tuple[Primitive, ...]
    hit_regions: tuple[HitRegion, ...]
    slots: tuple[BarSlot, ...]


def category_slots(
    count: int,
    extent: float,
    *,
    bar_spacing: float = BAR_SPACING,
    group_spacing: float = GROUP_SPACING,
) -> tuple[BarSlot, ...]:
    if count <= 0:
        return ()
    thickness = max(1.0, (extent - (count - 1) * group_spacing) / count - bar_spacing)
    step = thickness + bar_spacing + group_spacing
    return tuple(BarSlot(offset=i * step + bar_spacing / 2.0, thickness=thickness) for i in range(count))


def category_extent(scale: LinearScale, orientation: Orientation) -> float:
    return scale.width if orientation == "vertical" else scale.height


def place_bar(
    scale: LinearScale,
    orientation: Orientation,
    *,
    cat_offset: float,
    cat_thickness: float,
    value_from: float,
    value_to: float,
) -> tuple[float, float, float, float]:
    """Shared placement for both orientations; only the final axis assignment differs."""

    lo_v = scale.domain.min_domain
    hi_v = scale.domain.max_domain
    a = scale.scale_value(min(hi_v, max(lo_v, value_from)))
    b = scale.scale_value(min(hi_v, max(lo_v, value_to)))
    start = min(a, b)
    length = abs(a - b)
    if orientation == "vertical":
        return (scale.origin_x + cat_offset, start, cat_thickness, length)
    return (start, scale.origin_y + cat_offset, length, cat_thickness)


def _fill_for(bar: CategoricalBar, index: int, palette: Sequence[ColorLike]) -> ColorLike:
    return bar.color if bar.color is not None else palette[index % len(palette)]


def generate_bar_shapes(
    bars: Sequence[CategoricalBar],
    scale: LinearScale,
    *,
    mode: BarMode = "single",
    orientation: Orientation = "vertical",
    palette: Sequence[ColorLike] = ("#7C3AED",),
    show_values: bool = False,
    value_formatter: Callable[[float], str] = lambda v: str(int(v)),
    label_color: ColorLike = "#6B7280",
    font_size_px: float = 10.0,
) -> BarGeometry:
    if not bars:
        LOGGER.debug("no bars to draw")
        return BarGeometry(primitives=(), hit_regions=(), slots=())
    slots = category_slots(len(bars), category_extent(scale, orientation))
    text_rgba = coerce_color(label_color)
    primitives: list[Primitive] = []
    labels: list[Primitive] = []
    regions: list[HitRegion] = []

    def emit(
        rect_id: str,
        rect: tuple[float, float, float, float],
        fill: ColorLike,
        keys: tuple[str, ...],
        target: BarTarget,
    ) -> Rect:
        x, y, w, h = rect
        shape = Rect(primitive_id=rect_id, x=x, y=y, width=w, height=h, fill=coerce_color(fill), selection_keys=keys)
        primitives.append(shape)
        regions.append(HitRegion(region_id=rect_id, shape=shape, target=target, anchor=bar_end(shape, orientation)))
        return shape

    def emit_value_label(label_id: str, shape: Rect, value: float, keys: tuple[str, ...]) -> None:
        if not show_values:
            return
        ex, ey = bar_end(shape, orientation)
        if orientation == "vertical":
            pos = (ex, ey - VALUE_LABEL_GAP - font_size_px)
            anchor = "middle"
        else:
            pos = (ex + VALUE_LABEL_GAP, ey - font_size_px / 2.0)
            anchor = "start"
        labels.append(
            TextLabel(
                primitive_id=label_id,
                x=pos[0],
                y=pos[1],
                text=value_formatter(value),
                color=text_rgba,
                font_size_px=font_size_px,
                anchor=anchor,  # type: ignore[arg-type]
                selection_keys=keys,
            )
        )

    for i, (bar, slot) in enumerate(zip(bars, slots)):
        base_keys = (bar_key(i),)
        groups = bar.group_values if mode != "single" else None
        if not groups:
            value = clamp_non_negative(bar.value)
            rect = place_bar(
                scale,
                orientation,
                cat_offset=slot.offset,
                cat_thickness=slot.thickness,
                value_from=0.0,
                value_to=value,
            )
            shape = emit(f"bar:{i}", rect, _fill_for(bar, i, palette), base_keys, BarTarget(bar_index=i))
            emit_value_label(f"bar:{i}:value", shape, value, base_keys)
            continue

        values = [clamp_non_negative(v) for v in groups]
        if mode == "grouped":
            sub = slot.thickness / len(values)
            margin = GROUP_INNER_MARGIN if sub > 2 * GROUP_INNER_MARGIN else 0.0
            for g, value in enumerate(values):
                rect = place_bar(
                    scale,
                    orientation,
                    cat_offset=slot.offset + g * sub + margin,
                    cat_thickness=sub - 2 * margin,
                    value_from=0.0,
                    value_to=value,
                )
                keys = base_keys + (group_key(g),)
                shape = emit(f"bar:{i}:{g}", rect, palette[g % len(palette)], keys, BarTarget(bar_index=i, group_index=g))
                emit_value_label(f"bar:{i}:{g}:value", shape, value, keys)
            continue

        running = 0.0
        last: Rect | None = None
        for g, value in enumerate(values):
            rect = place_bar(
                scale,
                orientation,
                cat_offset=slot.offset,
                cat_thickness=slot.thickness,
                value_from=running,
                value_to=running + value,
            )
            running += value
            keys = base_keys + (group_key(g),)
            last = emit(f"bar:{i}:{g}", rect, palette[g % len(palette)], keys, BarTarget(bar_index=i, group_index=g))
        if last is not None:
            total_rect = place_bar(
                scale,
                orientation,
                cat_offset=slot.offset,
                cat_thickness=slot.thickness,
                value_from=0.0,
                value_to=running,
            )
            x, y, w, h = total_rect
            total_shape = Rect(primitive_id=f"bar:{i}:total", x=x, y=y, width=w, height=h, fill=last.fill)
            emit_value_label(f"bar:{i}:value", total_shape, running, base_keys)

    return BarGeometry(primitives=tuple(primitives + labels), hit_regions=tuple(regions), slots=slots)


def bar_end(shape: Rect, orientation: Orientation) -> tuple[float, float]:
    """Point at the value end of a bar: top-center when vertical, right-middle when horizontal."""

    if orientation == "vertical":
        return (shape.x + shape.width / 2.0, shape.y)
    return (shape.x + shape.width, shape.y + shape.height / 2.0)
