from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterable, Sequence

from merchant_charts.adapters import segment_values
from merchant_charts.interaction import group_key
from merchant_charts.model import RGBA, ColorLike, SegmentDatum, Series, coerce_color
from merchant_charts.primitives import Primitive, with_opacity


DIMMED_OPACITY = 0.5


@dataclass(frozen=True)
class SelectionState:
    highlighted_id: str | None = None

    @property
    def active(self) -> bool:
        return self.highlighted_id is not None


@dataclass(frozen=True)
class LegendEntry:
    entry_id: str
    label: str
    color: RGBA
    dashed: bool = False
    detail: str | None = None
    opacity: float = 1.0


def toggle_selection(state: SelectionState, entry_id: str) -> SelectionState:
    """Selecting the highlighted id again clears it; any other id replaces it."""

    if state.highlighted_id == entry_id:
        return dataclasses.replace(state, highlighted_id=None)
    return dataclasses.replace(state, highlighted_id=entry_id)


def select(state: SelectionState, entry_id: str) -> SelectionState:
    return dataclasses.replace(state, highlighted_id=entry_id)


def clear_selection(state: SelectionState) -> SelectionState:
    return dataclasses.replace(state, highlighted_id=None)


def opacity_for(keys: Iterable[str], state: SelectionState, *, dim: float = DIMMED_OPACITY) -> float:
    if state.highlighted_id is None:
        return 1.0
    return 1.0 if state.highlighted_id in tuple(keys) else dim


def apply_selection(
    primitives: Sequence[Primitive],
    state: SelectionState,
    *,
    dim: float = DIMMED_OPACITY,
) -> tuple[Primitive, ...]:
    """Primitives without selection keys (grid, masks, axis text) are never dimmed."""

    if not state.active:
        return tuple(primitives)
    return tuple(
        with_opacity(p, opacity_for(p.selection_keys, state, dim=dim)) if p.selection_keys else p for p in primitives
    )


def apply_legend_selection(
    entries: Sequence[LegendEntry],
    state: SelectionState,
    *,
    dim: float = DIMMED_OPACITY,
) -> tuple[LegendEntry, ...]:
    return tuple(dataclasses.replace(e, opacity=opacity_for((e.entry_id,), state, dim=dim)) for e in entries)


def format_amount(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def series_legend(series: Sequence[Series]) -> tuple[LegendEntry, ...]:
    return tuple(
        LegendEntry(entry_id=s.series_id, label=s.name, color=coerce_color(s.color), dashed=s.dashed) for s in series
    )


def group_legend(group_labels: Sequence[str], palette: Sequence[ColorLike]) -> tuple[LegendEntry, ...]:
    return tuple(
        LegendEntry(entry_id=group_key(g), label=name, color=coerce_color(palette[g % len(palette)]))
        for g, name in enumerate(group_labels)
    )


def segment_legend(segments: Sequence[SegmentDatum], palette: Sequence[ColorLike]) -> tuple[LegendEntry, ...]:
    """One entry per segment with a `value (pct%)` detail; a non-positive total reads as 0%."""

    values = segment_values(segments)
    total = float(values.sum())
    out: list[LegendEntry] = []
    for i, segment in enumerate(segments):
        value = float(values[i])
        pct = value / total * 100.0 if total > 0 else 0.0
        color = segment.color if segment.color is not None else palette[i % len(palette)]
        out.append(
            LegendEntry(
                entry_id=segment.segment_id,
                label=segment.label,
                color=coerce_color(color),
                detail=f"{format_amount(value)} ({pct:.1f}%)",
            )
        )
    return tuple(out)
