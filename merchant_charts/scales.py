from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

import numpy as np


Baseline = Literal["line", "zero"]


@dataclass(frozen=True)
class DomainBounds:
    min_domain: float
    max_domain: float

    @property
    def span(self) -> float:
        return self.max_domain - self.min_domain


@dataclass(frozen=True)
class LinearScale:
    """Pixel mapping for one render pass.

    The category/index axis runs along x for `invert=True` (vertical charts) and the
    value axis is flipped because pixel rows grow downward. Horizontal bar charts use
    `invert=False`, where values grow along +x from the origin.
    """

    domain: DomainBounds
    width: float
    height: float
    n_points: int
    origin_x: float = 0.0
    origin_y: float = 0.0
    invert: bool = True

    def scale_index(self, index: float) -> float:
        denom = (self.n_points - 1) or 1
        return self.origin_x + (index / denom) * self.width

    def scale_value(self, value: float) -> float:
        frac = (value - self.domain.min_domain) / self.domain.span
        if self.invert:
            return self.origin_y + self.height - frac * self.height
        return self.origin_x + frac * self.width

    def invert_value(self, pixel: float) -> float:
        if self.invert:
            frac = (self.origin_y + self.height - pixel) / self.height if self.height else 0.0
        else:
            frac = (pixel - self.origin_x) / self.width if self.width else 0.0
        return self.domain.min_domain + frac * self.domain.span

    def value_extent(self) -> float:
        return self.height if self.invert else self.width

    def map_indices(self, count: int) -> np.ndarray:
        denom = (self.n_points - 1) or 1
        return self.origin_x + (np.arange(count, dtype=np.float64) / denom) * self.width

    def map_values(self, values: np.ndarray) -> np.ndarray:
        frac = (np.asarray(values, dtype=np.float64) - self.domain.min_domain) / self.domain.span
        if self.invert:
            return self.origin_y + self.height - frac * self.height
        return self.origin_x + frac * self.width


def compute_domain(
    values: Iterable[float] | np.ndarray,
    *,
    baseline: Baseline = "line",
    max_override: float | None = None,
    headroom: float = 1.0,
) -> DomainBounds:
    """Union min/max of finite values, anchored at zero.

    `baseline="line"` keeps negative minima; `baseline="zero"` floors the minimum at 0
    for bar and area charts. Empty input resolves to (0, 1) and a flat range is widened
    to 1 so mapping never divides by zero.
    """

    arr = np.asarray(list(values) if not isinstance(values, np.ndarray) else values, dtype=np.float64)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        vmin = 0.0
        vmax = 0.0
    else:
        vmin = min(float(np.min(finite)), 0.0)
        vmax = float(np.max(finite))
    if baseline == "zero":
        vmin = 0.0
        vmax = max(vmax, 0.0)
    if headroom > 0 and vmax > 0:
        vmax = vmax * headroom
    if max_override is not None and np.isfinite(max_override) and max_override > vmin:
        vmax = float(max_override)
    if vmax == vmin:
        vmax = vmin + 1.0
    return DomainBounds(min_domain=vmin, max_domain=vmax)


def combined_domain(
    chunks: Iterable[np.ndarray],
    *,
    baseline: Baseline = "line",
    max_override: float | None = None,
    headroom: float = 1.0,
) -> DomainBounds:
    parts = [np.asarray(c, dtype=np.float64).ravel() for c in chunks]
    values = np.concatenate(parts) if parts else np.zeros(0, dtype=np.float64)
    return compute_domain(values, baseline=baseline, max_override=max_override, headroom=headroom)


def build_scale(
    domain: DomainBounds,
    width: float,
    height: float,
    n_points: int = 1,
    *,
    origin: tuple[float, float] = (0.0, 0.0),
    invert: bool = True,
) -> LinearScale:
    return LinearScale(
        domain=domain,
        width=float(max(0.0, width)),
        height=float(max(0.0, height)),
        n_points=max(0, int(n_points)),
        origin_x=float(origin[0]),
        origin_y=float(origin[1]),
        invert=invert,
    )
