from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Generic, Sequence, TypeVar

import numpy as np

from merchant_charts.adapters import BarMode, bar_extent, normalize_series
from merchant_charts.geometry import BoundingBox
from merchant_charts.interaction import (
    BarTarget,
    HitRegion,
    HitResult,
    HitTarget,
    LegendTarget,
    PointTarget,
    SegmentTarget,
    TooltipAnchor,
    bar_key,
    parse_pointer_event,
    place_tooltip,
    resolve_hit,
)
from merchant_charts.model import CategoricalBar, SegmentDatum, Series, coerce_color
from merchant_charts.primitives import Primitive, Rect, TextLabel
from merchant_charts.scales import DomainBounds, build_scale, combined_domain, compute_domain
from merchant_charts.selection import (
    LegendEntry,
    SelectionState,
    apply_legend_selection,
    apply_selection,
    clear_selection,
    group_legend,
    segment_legend,
    select,
    series_legend,
    toggle_selection,
)
from merchant_charts.shapes import Orientation, PieType, generate_bar_shapes, generate_line_shapes, generate_pie_shapes
from merchant_charts.theme import LIGHT_THEME, ChartTheme
from merchant_charts.ticks import (
    DEFAULT_MAX_CATEGORY_LABELS,
    DEFAULT_TICK_COUNT,
    CategoryLabel,
    LabelFormatter,
    ValueFormatter,
    ValueTick,
    category_labels,
    grid_lines,
    truncate_formatter,
    value_ticks,
)


LOGGER = logging.getLogger(__name__)

CHART_PADDING = 40
LEGEND_HEIGHT = 40
HORIZONTAL_LABEL_GUTTER = 110
PIE_CHART_SIZE = 200
PIE_TOP_PAD = 10
LEGEND_SWATCH = 12
LEGEND_ITEM_GAP = 15
LEGEND_ROW_HEIGHT = 22
AXIS_LABEL_GAP = 6
TOOLTIP_PAD = 8


@dataclass(frozen=True)
class ChartFrame:
    """Everything one render pass produced, in draw order."""

    width: int
    height: int
    plot_area: BoundingBox
    primitives: tuple[Primitive, ...]
    hit_regions: tuple[HitRegion, ...]
    value_ticks: tuple[ValueTick, ...] = ()
    category_labels: tuple[CategoryLabel, ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    tooltip: TooltipAnchor | None = None
    domain: DomainBounds | None = None
    theme: ChartTheme = LIGHT_THEME

    @property
    def bounds(self) -> BoundingBox:
        return BoundingBox(0.0, 0.0, float(self.width), float(self.height))


def _validate_common(width: int, height: int, tick_count: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    if tick_count < 1:
        raise ValueError("tick_count must be >= 1")


@dataclass(frozen=True)
class LineChartConfig:
    series: tuple[Series, ...]
    width: int = 360
    height: int = 250
    show_legend: bool = True
    show_grid: bool = True
    show_tooltip: bool = True
    x_axis_label: str | None = None
    y_axis_label: str | None = None
    format_y_value: ValueFormatter = truncate_formatter
    format_x_value: LabelFormatter = str
    tick_count: int = DEFAULT_TICK_COUNT
    max_x_labels: int = DEFAULT_MAX_CATEGORY_LABELS
    theme: ChartTheme = LIGHT_THEME
    on_point_select: Callable[[str, int], None] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "series", tuple(self.series))
        _validate_common(self.width, self.height, self.tick_count)
        if self.max_x_labels < 1:
            raise ValueError("max_x_labels must be >= 1")

    def identity(self) -> tuple[Any, ...]:
        return tuple(s.series_id for s in self.series)


@dataclass(frozen=True)
class BarChartConfig:
    bars: tuple[CategoricalBar, ...]
    width: int = 360
    height: int = 300
    orientation: Orientation = "vertical"
    mode: BarMode = "single"
    show_values: bool = True
    show_grid: bool = True
    show_legend: bool = True
    format_value: ValueFormatter = truncate_formatter
    bar_colors: tuple[str, ...] | None = None
    group_labels: tuple[str, ...] | None = None
    max_value: float | None = None
    headroom: float = 1.0
    tick_count: int = DEFAULT_TICK_COUNT
    max_category_labels: int | None = None
    theme: ChartTheme = LIGHT_THEME
    on_bar_press: Callable[[CategoricalBar, int], None] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bars", tuple(self.bars))
        if self.bar_colors is not None:
            object.__setattr__(self, "bar_colors", tuple(self.bar_colors))
        if self.group_labels is not None:
            object.__setattr__(self, "group_labels", tuple(self.group_labels))
        _validate_common(self.width, self.height, self.tick_count)
        if self.orientation not in ("vertical", "horizontal"):
            raise ValueError("orientation must be 'vertical' or 'horizontal'")
        if self.mode not in ("single", "grouped", "stacked"):
            raise ValueError("mode must be 'single', 'grouped' or 'stacked'")
        if self.headroom <= 0:
            raise ValueError("headroom must be > 0")
        if self.bar_colors is not None and not self.bar_colors:
            raise ValueError("bar_colors must not be empty")
        if self.max_category_labels is not None and self.max_category_labels < 1:
            raise ValueError("max_category_labels must be >= 1")

    def identity(self) -> tuple[Any, ...]:
        return (self.mode, self.orientation) + tuple(b.label for b in self.bars)

    def palette(self) -> tuple[str, ...]:
        return self.bar_colors or self.theme.palette


@dataclass(frozen=True)
class PieChartConfig:
    segments: tuple[SegmentDatum, ...]
    width: int = 360
    height: int = 320
    pie_type: PieType = "donut"
    show_legend: bool = True
    show_percentages: bool = True
    center_label: str | None = None
    center_value: str | None = None
    theme: ChartTheme = LIGHT_THEME
    on_segment_press: Callable[[SegmentDatum], None] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))
        _validate_common(self.width, self.height, 1)
        if self.pie_type not in ("pie", "donut"):
            raise ValueError("pie_type must be 'pie' or 'donut'")

    def identity(self) -> tuple[Any, ...]:
        return tuple(s.segment_id for s in self.segments)


ConfigT = TypeVar("ConfigT", LineChartConfig, BarChartConfig, PieChartConfig)


class _ChartFacade(Generic[ConfigT]):
    """Owns selection and tooltip state for one chart instance and re-renders on every change."""

    def __init__(self, config: ConfigT) -> None:
        self._config = config
        self._selection = SelectionState()
        self._tooltip: TooltipAnchor | None = None
        self._last_press: tuple[str, int | None] | None = None
        self._last_frame: ChartFrame | None = None

    @property
    def config(self) -> ConfigT:
        return self._config

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def tooltip(self) -> TooltipAnchor | None:
        return self._tooltip

    @property
    def last_frame(self) -> ChartFrame | None:
        return self._last_frame

    def update(self, config: ConfigT) -> ChartFrame:
        if config.identity() != self._config.identity():
            self.reset()
        self._config = config
        return self.render()

    def reset(self) -> None:
        self._selection = SelectionState()
        self._tooltip = None
        self._last_press = None

    def render(self) -> ChartFrame:
        frame = self._build()
        primitives = apply_selection(frame.primitives, self._selection)
        legend = apply_legend_selection(frame.legend, self._selection)
        if self._tooltip is not None:
            primitives = primitives + self._tooltip_primitives(self._tooltip)
        out = ChartFrame(
            width=frame.width,
            height=frame.height,
            plot_area=frame.plot_area,
            primitives=primitives,
            hit_regions=frame.hit_regions,
            value_ticks=frame.value_ticks,
            category_labels=frame.category_labels,
            legend=legend,
            tooltip=self._tooltip,
            domain=frame.domain,
            theme=frame.theme,
        )
        self._last_frame = out
        return out

    def press(self, x: float, y: float) -> HitTarget | None:
        """Resolve a press against the geometry currently on screen and emit the chart's event."""

        frame = self._last_frame if self._last_frame is not None else self.render()
        hit = resolve_hit(frame.hit_regions, x, y)
        if hit is None:
            return None
        if isinstance(hit.target, LegendTarget):
            self.press_legend(hit.target.entry_id)
            return hit.target
        self._on_hit(hit, frame)
        self.render()
        return hit.target

    def press_legend(self, entry_id: str) -> SelectionState:
        self._selection = toggle_selection(self._selection, entry_id)
        self._last_press = None
        if self._tooltip is not None and self._tooltip.target_id != self._selection.highlighted_id:
            self._tooltip = None
        self._on_legend(entry_id)
        self.render()
        return self._selection

    def handle_event(self, event_type: str, payload: object) -> HitTarget | None:
        event = parse_pointer_event(event_type, payload)
        if event is None or not event.is_press:
            return None
        return self.press(event.x, event.y)

    def to_rgba(self) -> np.ndarray:
        from merchant_charts.raster import rasterize

        return rasterize(self.render())

    def _press_primitive(
        self,
        key: str,
        hit: HitResult,
        frame: ChartFrame,
        *,
        point_index: int | None = None,
        show_tooltip: bool = True,
    ) -> None:
        """Select the pressed primitive, or clear the selection when the same primitive is pressed again."""

        pressed = (key, point_index)
        if self._last_press == pressed and self._selection.highlighted_id == key:
            self._selection = clear_selection(self._selection)
            self._tooltip = None
            self._last_press = None
            return
        self._selection = select(self._selection, key)
        self._last_press = pressed
        if not show_tooltip:
            self._tooltip = None
            return
        ax, ay = hit.region.anchor
        self._tooltip = place_tooltip(ax, ay, frame.bounds, target_id=key, point_index=point_index)

    def _legend_primitives(
        self,
        entries: Sequence[LegendEntry],
        *,
        top: float,
        stacked_rows: bool,
    ) -> tuple[list[Primitive], list[HitRegion]]:
        theme = self._config.theme
        font = theme.font_size_px * 1.2
        text_rgba = coerce_color(theme.text)
        prims: list[Primitive] = []
        regions: list[HitRegion] = []
        x = float(CHART_PADDING)
        y = top
        for entry in entries:
            text = entry.label if entry.detail is None else f"{entry.label}  {entry.detail}"
            text_w = len(text) * font * 0.6
            item_w = LEGEND_SWATCH + 6 + text_w
            if not stacked_rows and x + item_w > self._config.width - CHART_PADDING and x > CHART_PADDING:
                x = float(CHART_PADDING)
                y += LEGEND_ROW_HEIGHT
            swatch = Rect(
                primitive_id=f"legend:{entry.entry_id}:swatch",
                x=x,
                y=y + (LEGEND_ROW_HEIGHT - LEGEND_SWATCH) / 2.0,
                width=LEGEND_SWATCH,
                height=LEGEND_SWATCH if not entry.dashed else LEGEND_SWATCH / 4.0,
                fill=entry.color,
                selection_keys=(entry.entry_id,),
            )
            label = TextLabel(
                primitive_id=f"legend:{entry.entry_id}:label",
                x=x + LEGEND_SWATCH + 6,
                y=y + (LEGEND_ROW_HEIGHT - font) / 2.0,
                text=text,
                color=text_rgba,
                font_size_px=font,
                anchor="start",
                selection_keys=(entry.entry_id,),
            )
            prims.extend((swatch, label))
            hit_box = Rect(
                primitive_id=f"legend:{entry.entry_id}",
                x=x,
                y=y,
                width=item_w,
                height=LEGEND_ROW_HEIGHT,
                fill=entry.color,
            )
            regions.append(
                HitRegion(
                    region_id=hit_box.primitive_id,
                    shape=hit_box,
                    target=LegendTarget(entry_id=entry.entry_id),
                    anchor=(x, y),
                )
            )
            if stacked_rows:
                y += LEGEND_ROW_HEIGHT
            else:
                x += item_w + LEGEND_ITEM_GAP
        return prims, regions

    def _tooltip_primitives(self, tooltip: TooltipAnchor) -> tuple[Primitive, ...]:
        theme = self._config.theme
        lines = self._tooltip_lines(tooltip)
        prims: list[Primitive] = [
            Rect(
                primitive_id="tooltip:card",
                x=tooltip.x,
                y=tooltip.y,
                width=tooltip.width,
                height=tooltip.height,
                fill=coerce_color(theme.card),
            )
        ]
        font = theme.font_size_px
        for i, (text, color) in enumerate(lines):
            prims.append(
                TextLabel(
                    primitive_id=f"tooltip:line:{i}",
                    x=tooltip.x + TOOLTIP_PAD,
                    y=tooltip.y + TOOLTIP_PAD / 2.0 + i * (font + 6),
                    text=text,
                    color=coerce_color(color),
                    font_size_px=font + (4 if i == 1 else 0),
                    anchor="start",
                )
            )
        return tuple(prims)

    def _build(self) -> ChartFrame:
        raise NotImplementedError

    def _on_hit(self, hit: HitResult, frame: ChartFrame) -> None:
        raise NotImplementedError

    def _on_legend(self, entry_id: str) -> None:
        _ = entry_id

    def _tooltip_lines(self, tooltip: TooltipAnchor) -> list[tuple[str, str]]:
        _ = tooltip
        return []


class LineChart(_ChartFacade[LineChartConfig]):
    def _build(self) -> ChartFrame:
        cfg = self._config
        theme = cfg.theme
        legend_h = LEGEND_HEIGHT if cfg.show_legend else 0
        plot = BoundingBox(
            float(CHART_PADDING),
            float(CHART_PADDING),
            float(max(1, cfg.width - CHART_PADDING * 2)),
            float(max(1, cfg.height - CHART_PADDING * 2 - legend_h)),
        )
        normalized = [normalize_series(s) for s in cfg.series]
        n_points = max((n.size for n in normalized), default=0)
        domain = combined_domain((n.y for n in normalized), baseline="line")
        scale = build_scale(domain, plot.width, plot.height, n_points, origin=(plot.x, plot.y))
        if n_points == 0:
            LOGGER.debug("line chart has no data points")

        prims: list[Primitive] = []
        ticks = value_ticks(domain, scale, count=cfg.tick_count, formatter=cfg.format_y_value)
        if cfg.show_grid:
            prims.extend(grid_lines(ticks, start=plot.x, end=plot.right, color=coerce_color(theme.border_light)))
        geometry = generate_line_shapes(cfg.series, scale)
        prims.extend(geometry.primitives)

        axis_rgba = coerce_color(theme.text_secondary)
        font = theme.font_size_px
        for i, tick in enumerate(ticks):
            prims.append(
                TextLabel(
                    primitive_id=f"y-label:{i}",
                    x=plot.x - 5,
                    y=tick.position - font / 2.0,
                    text=tick.label,
                    color=axis_rgba,
                    font_size_px=font,
                    anchor="end",
                )
            )

        longest = max(cfg.series, key=lambda s: len(s.data), default=None)
        x_values = [p.x for p in longest.data] if longest is not None else []
        positions = scale.map_indices(len(x_values)).tolist()
        cats = category_labels(x_values, positions, max_labels=cfg.max_x_labels, formatter=cfg.format_x_value)
        for cat in cats:
            prims.append(
                TextLabel(
                    primitive_id=f"x-label:{cat.index}",
                    x=cat.position,
                    y=plot.bottom + 10,
                    text=cat.label,
                    color=axis_rgba,
                    font_size_px=font,
                )
            )
        prims.extend(self._axis_titles(plot, font * 1.2))

        legend: tuple[LegendEntry, ...] = ()
        regions = list(geometry.hit_regions)
        if cfg.show_legend:
            legend = series_legend(cfg.series)
            legend_prims, legend_regions = self._legend_primitives(
                legend, top=cfg.height - legend_h + (legend_h - LEGEND_ROW_HEIGHT) / 2.0, stacked_rows=False
            )
            prims.extend(legend_prims)
            regions.extend(legend_regions)

        return ChartFrame(
            width=cfg.width,
            height=cfg.height,
            plot_area=plot,
            primitives=tuple(prims),
            hit_regions=tuple(regions),
            value_ticks=ticks,
            category_labels=cats,
            legend=legend,
            domain=domain,
            theme=theme,
        )

    def _axis_titles(self, plot: BoundingBox, font: float) -> list[Primitive]:
        cfg = self._config
        rgba = coerce_color(cfg.theme.text_secondary)
        out: list[Primitive] = []
        if cfg.y_axis_label:
            out.append(
                TextLabel(
                    primitive_id="y-title",
                    x=5,
                    y=max(0.0, plot.y - font - 8),
                    text=cfg.y_axis_label,
                    color=rgba,
                    font_size_px=font,
                    anchor="start",
                )
            )
        if cfg.x_axis_label:
            out.append(
                TextLabel(
                    primitive_id="x-title",
                    x=plot.x + plot.width / 2.0,
                    y=plot.bottom + 10 + font + 4,
                    text=cfg.x_axis_label,
                    color=rgba,
                    font_size_px=font,
                )
            )
        return out

    def _on_hit(self, hit: HitResult, frame: ChartFrame) -> None:
        target = hit.target
        if not isinstance(target, PointTarget):
            return
        self._press_primitive(
            target.series_id,
            hit,
            frame,
            point_index=target.point_index,
            show_tooltip=self._config.show_tooltip,
        )
        if self._config.on_point_select is not None:
            self._config.on_point_select(target.series_id, target.point_index)

    def _tooltip_lines(self, tooltip: TooltipAnchor) -> list[tuple[str, str]]:
        cfg = self._config
        series = next((s for s in cfg.series if s.series_id == tooltip.target_id), None)
        if series is None or tooltip.point_index is None or tooltip.point_index >= len(series.data):
            return []
        point = series.data[tooltip.point_index]
        color = series.color if isinstance(series.color, str) else cfg.theme.text
        return [
            (cfg.format_x_value(point.x), cfg.theme.text_secondary),
            (cfg.format_y_value(float(point.y)), cfg.theme.text),
            (series.name, color),
        ]


class BarChart(_ChartFacade[BarChartConfig]):
    def _build(self) -> ChartFrame:
        cfg = self._config
        theme = cfg.theme
        vertical = cfg.orientation == "vertical"
        legend_on = cfg.show_legend and cfg.mode != "single" and bool(cfg.group_labels)
        legend_h = LEGEND_HEIGHT if legend_on else 0
        if vertical:
            plot = BoundingBox(
                float(CHART_PADDING),
                float(CHART_PADDING),
                float(max(1, cfg.width - CHART_PADDING * 2)),
                float(max(1, cfg.height - CHART_PADDING * 2 - legend_h)),
            )
        else:
            plot = BoundingBox(
                float(HORIZONTAL_LABEL_GUTTER),
                float(CHART_PADDING),
                float(max(1, cfg.width - HORIZONTAL_LABEL_GUTTER - CHART_PADDING)),
                float(max(1, cfg.height - CHART_PADDING * 2 - legend_h)),
            )
        domain = compute_domain(
            [bar_extent(b, cfg.mode) for b in cfg.bars],
            baseline="zero",
            max_override=cfg.max_value,
            headroom=cfg.headroom,
        )
        scale = build_scale(domain, plot.width, plot.height, len(cfg.bars), origin=(plot.x, plot.y), invert=vertical)
        ticks = value_ticks(domain, scale, count=cfg.tick_count, formatter=cfg.format_value)

        prims: list[Primitive] = []
        grid_rgba = coerce_color(theme.border_light)
        if cfg.show_grid:
            if vertical:
                prims.extend(grid_lines(ticks, start=plot.x, end=plot.right, color=grid_rgba, horizontal=True))
            else:
                prims.extend(grid_lines(ticks, start=plot.y, end=plot.bottom, color=grid_rgba, horizontal=False))

        geometry = generate_bar_shapes(
            cfg.bars,
            scale,
            mode=cfg.mode,
            orientation=cfg.orientation,
            palette=cfg.palette(),
            show_values=cfg.show_values,
            value_formatter=cfg.format_value,
            label_color=theme.text_secondary,
            font_size_px=theme.font_size_px,
        )
        prims.extend(geometry.primitives)

        axis_rgba = coerce_color(theme.text_secondary)
        font = theme.font_size_px
        for i, tick in enumerate(ticks):
            if vertical:
                pos = (plot.x - 5, tick.position - font / 2.0)
                anchor = "end"
            else:
                pos = (tick.position, plot.bottom + 5)
                anchor = "middle"
            prims.append(
                TextLabel(
                    primitive_id=f"value-label:{i}",
                    x=pos[0],
                    y=pos[1],
                    text=tick.label,
                    color=axis_rgba,
                    font_size_px=font,
                    anchor=anchor,  # type: ignore[arg-type]
                )
            )

        origin = plot.x if vertical else plot.y
        positions = [origin + slot.center for slot in geometry.slots]
        cats = category_labels([b.label for b in cfg.bars], positions, max_labels=cfg.max_category_labels)
        for cat in cats:
            if vertical:
                label = TextLabel(
                    primitive_id=f"category-label:{cat.index}",
                    x=cat.position,
                    y=plot.bottom + AXIS_LABEL_GAP,
                    text=cat.label,
                    color=axis_rgba,
                    font_size_px=font,
                    selection_keys=(bar_key(cat.index),),
                )
            else:
                label = TextLabel(
                    primitive_id=f"category-label:{cat.index}",
                    x=plot.x - 8,
                    y=cat.position - font / 2.0,
                    text=cat.label,
                    color=axis_rgba,
                    font_size_px=font,
                    anchor="end",
                    selection_keys=(bar_key(cat.index),),
                )
            prims.append(label)

        legend: tuple[LegendEntry, ...] = ()
        regions = list(geometry.hit_regions)
        if legend_on and cfg.group_labels is not None:
            legend = group_legend(cfg.group_labels, cfg.palette())
            legend_prims, legend_regions = self._legend_primitives(
                legend, top=cfg.height - legend_h + (legend_h - LEGEND_ROW_HEIGHT) / 2.0, stacked_rows=False
            )
            prims.extend(legend_prims)
            regions.extend(legend_regions)

        return ChartFrame(
            width=cfg.width,
            height=cfg.height,
            plot_area=plot,
            primitives=tuple(prims),
            hit_regions=tuple(regions),
            value_ticks=ticks,
            category_labels=cats,
            legend=legend,
            domain=domain,
            theme=theme,
        )

    def _on_hit(self, hit: HitResult, frame: ChartFrame) -> None:
        target = hit.target
        if not isinstance(target, BarTarget):
            return
        self._press_primitive(bar_key(target.bar_index), hit, frame, point_index=target.group_index)
        if self._config.on_bar_press is not None:
            self._config.on_bar_press(self._config.bars[target.bar_index], target.bar_index)

    def _tooltip_lines(self, tooltip: TooltipAnchor) -> list[tuple[str, str]]:
        cfg = self._config
        if not tooltip.target_id.startswith("bar-"):
            return []
        index = int(tooltip.target_id[len("bar-") :])
        if index >= len(cfg.bars):
            return []
        bar = cfg.bars[index]
        group = tooltip.point_index
        if group is not None and bar.group_values is not None and group < len(bar.group_values):
            value = float(bar.group_values[group])
            name = cfg.group_labels[group] if cfg.group_labels and group < len(cfg.group_labels) else f"#{group + 1}"
        else:
            value = bar_extent(bar, cfg.mode)
            name = ""
        lines = [
            (bar.label, cfg.theme.text_secondary),
            (cfg.format_value(value), cfg.theme.text),
        ]
        if name:
            lines.append((name, cfg.theme.text_secondary))
        return lines


class PieChart(_ChartFacade[PieChartConfig]):
    def _build(self) -> ChartFrame:
        cfg = self._config
        theme = cfg.theme
        size = float(max(2, min(PIE_CHART_SIZE, cfg.width - 2 * PIE_TOP_PAD, cfg.height - 2 * PIE_TOP_PAD)))
        radius = size / 2.0
        cx = cfg.width / 2.0
        cy = PIE_TOP_PAD + radius
        plot = BoundingBox(cx - radius, cy - radius, size, size)

        geometry = generate_pie_shapes(
            cfg.segments,
            cx=cx,
            cy=cy,
            radius=radius,
            pie_type=cfg.pie_type,
            palette=theme.palette,
            show_percentages=cfg.show_percentages,
            background=theme.background,
            center_label=cfg.center_label,
            center_value=cfg.center_value,
            center_text_color=theme.text,
            font_size_px=theme.font_size_px,
        )
        prims: list[Primitive] = list(geometry.primitives)
        regions = list(geometry.hit_regions)

        legend: tuple[LegendEntry, ...] = ()
        if cfg.show_legend:
            legend = segment_legend(cfg.segments, theme.palette)
            legend_prims, legend_regions = self._legend_primitives(legend, top=plot.bottom + 16, stacked_rows=True)
            prims.extend(legend_prims)
            regions.extend(legend_regions)

        return ChartFrame(
            width=cfg.width,
            height=cfg.height,
            plot_area=plot,
            primitives=tuple(prims),
            hit_regions=tuple(regions),
            legend=legend,
            theme=theme,
        )

    def _on_hit(self, hit: HitResult, frame: ChartFrame) -> None:
        target = hit.target
        if not isinstance(target, SegmentTarget):
            return
        self._press_primitive(target.segment_id, hit, frame)
        if self._config.on_segment_press is not None:
            self._config.on_segment_press(self._config.segments[target.segment_index])

    def _on_legend(self, entry_id: str) -> None:
        if self._config.on_segment_press is None:
            return
        for segment in self._config.segments:
            if segment.segment_id == entry_id:
                self._config.on_segment_press(segment)
                return

    def _tooltip_lines(self, tooltip: TooltipAnchor) -> list[tuple[str, str]]:
        cfg = self._config
        segment = next((s for s in cfg.segments if s.segment_id == tooltip.target_id), None)
        if segment is None:
            return []
        entry = next(e for e in segment_legend(cfg.segments, cfg.theme.palette) if e.entry_id == segment.segment_id)
        detail = entry.detail or ""
        return [
            (segment.label, cfg.theme.text_secondary),
            (detail, cfg.theme.text),
        ]
