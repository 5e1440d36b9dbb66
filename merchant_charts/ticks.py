from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Sequence

import numpy as np

from merchant_charts.model import RGBA
from merchant_charts.primitives import GridLine
from merchant_charts.scales import DomainBounds, LinearScale


ValueFormatter = Callable[[float], str]
LabelFormatter = Callable[[object], str]

DEFAULT_TICK_COUNT = 5
DEFAULT_MAX_CATEGORY_LABELS = 6


@dataclass(frozen=True)
class ValueTick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class CategoryLabel:
    index: int
    position: float
    label: str


def truncate_formatter(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    out = str(int(value))
    return "0" if out == "-0" else out


def value_ticks(
    domain: DomainBounds,
    scale: LinearScale,
    *,
    count: int = DEFAULT_TICK_COUNT,
    formatter: ValueFormatter = truncate_formatter,
) -> tuple[ValueTick, ...]:
    """`count` equal intervals from min to max inclusive, so `count + 1` ticks."""

    if count < 1:
        raise ValueError("tick count must be >= 1")
    values = np.linspace(domain.min_domain, domain.max_domain, count + 1)
    values[np.isclose(values, 0.0, rtol=0.0, atol=abs(domain.span) * 1e-12)] = 0.0
    return tuple(
        ValueTick(value=float(v), position=float(scale.scale_value(float(v))), label=formatter(float(v)))
        for v in values.tolist()
    )


def label_stride(count: int, max_labels: int = DEFAULT_MAX_CATEGORY_LABELS) -> int:
    if max_labels < 1:
        raise ValueError("max_labels must be >= 1")
    return max(1, count // max_labels)


def category_label_indices(count: int, max_labels: int = DEFAULT_MAX_CATEGORY_LABELS) -> list[int]:
    """Every stride-th index plus the last one, so both ends of the axis stay labelled."""

    if count <= 0:
        return []
    stride = label_stride(count, max_labels)
    indices = [i for i in range(count) if i % stride == 0]
    if indices[-1] != count - 1:
        indices.append(count - 1)
    return indices


def category_labels(
    labels: Sequence[object],
    positions: Sequence[float],
    *,
    max_labels: int | None = DEFAULT_MAX_CATEGORY_LABELS,
    formatter: LabelFormatter = str,
) -> tuple[CategoryLabel, ...]:
    count = min(len(labels), len(positions))
    indices = list(range(count)) if max_labels is None else category_label_indices(count, max_labels)
    return tuple(CategoryLabel(index=i, position=float(positions[i]), label=formatter(labels[i])) for i in indices)


def grid_lines(
    ticks: Sequence[ValueTick],
    *,
    start: float,
    end: float,
    color: RGBA,
    horizontal: bool = True,
) -> tuple[GridLine, ...]:
    out: list[GridLine] = []
    for i, tick in enumerate(ticks):
        if horizontal:
            out.append(GridLine(primitive_id=f"grid:{i}", x0=start, y0=tick.position, x1=end, y1=tick.position, color=color))
        else:
            out.append(GridLine(primitive_id=f"grid:{i}", x0=tick.position, y0=start, x1=tick.position, y1=end, color=color))
    return tuple(out)
