from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from merchant_charts.adapters import NormalizedSeries, normalize_series
from merchant_charts.interaction import HitRegion, PointTarget
from merchant_charts.model import Series, coerce_color
from merchant_charts.primitives import Marker, Polygon, Polyline, Primitive
from merchant_charts.scales import LinearScale


LOGGER = logging.getLogger(__name__)

MARKER_RADIUS = 4.0
MARKER_HIT_TOLERANCE = 8.0
LINE_WIDTH = 2
BAND_ALPHA = 0x20 / 255.0


@dataclass(frozen=True)
class LineGeometry:
    primitives: tuple[Primitive, ...]
    hit_regions: tuple[HitRegion, ...]


def contiguous_finite_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def band_polygon(norm: NormalizedSeries, scale: LinearScale) -> tuple[tuple[float, float], ...] | None:
    """Upper bound left to right, then lower bound right to left: 2n vertices."""

    if norm.upper is None or norm.lower is None or norm.size == 0:
        return None
    if not (np.all(np.isfinite(norm.upper)) and np.all(np.isfinite(norm.lower))):
        LOGGER.warning("confidence bounds for series %s contain non-finite values; band skipped", norm.series_id)
        return None
    xs = scale.map_indices(norm.size)
    upper = scale.map_values(norm.upper)
    lower = scale.map_values(norm.lower)
    forward = [(float(xs[i]), float(upper[i])) for i in range(norm.size)]
    backward = [(float(xs[i]), float(lower[i])) for i in range(norm.size - 1, -1, -1)]
    return tuple(forward + backward)


def generate_line_shapes(
    series: Sequence[Series],
    scale: LinearScale,
    *,
    marker_radius: float = MARKER_RADIUS,
    line_width: int = LINE_WIDTH,
    hit_tolerance: float = MARKER_HIT_TOLERANCE,
) -> LineGeometry:
    primitives: list[Primitive] = []
    regions: list[HitRegion] = []
    for spec in series:
        norm = normalize_series(spec)
        if norm.size == 0:
            LOGGER.debug("series %s is empty; nothing to draw", spec.series_id)
            continue
        color = coerce_color(spec.color)
        keys = (spec.series_id,)

        band = band_polygon(norm, scale)
        if band is not None:
            primitives.append(
                Polygon(
                    primitive_id=f"{spec.series_id}:band",
                    points=band,
                    fill=coerce_color(spec.color, alpha=BAND_ALPHA),
                    selection_keys=keys,
                )
            )

        xs = scale.map_indices(norm.size)
        ys = scale.map_values(norm.y)
        for run_no, (start, stop) in enumerate(contiguous_finite_runs(norm.mask)):
            if stop - start < 2:
                continue
            primitives.append(
                Polyline(
                    primitive_id=f"{spec.series_id}:line:{run_no}",
                    points=tuple((float(xs[i]), float(ys[i])) for i in range(start, stop)),
                    color=color,
                    width=line_width,
                    dashed=spec.dashed,
                    selection_keys=keys,
                )
            )

        for i in np.flatnonzero(norm.mask).tolist():
            marker = Marker(
                primitive_id=f"{spec.series_id}:point:{i}",
                cx=float(xs[i]),
                cy=float(ys[i]),
                radius=marker_radius,
                color=color,
                selection_keys=keys,
            )
            primitives.append(marker)
            regions.append(
                HitRegion(
                    region_id=marker.primitive_id,
                    shape=marker,
                    target=PointTarget(series_id=spec.series_id, point_index=i),
                    anchor=(marker.cx, marker.cy),
                    tolerance=hit_tolerance,
                )
            )
    return LineGeometry(primitives=tuple(primitives), hit_regions=tuple(regions))
