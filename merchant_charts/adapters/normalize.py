from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
import logging
import math
from typing import Any, Literal

import numpy as np

from merchant_charts.errors import ChartDataError
from merchant_charts.model import CategoricalBar, ColorLike, DataPoint, SegmentDatum, Series


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


LOGGER = logging.getLogger(__name__)

BarMode = Literal["single", "grouped", "stacked"]


@dataclass(frozen=True)
class NormalizedSeries:
    series_id: str
    y: np.ndarray
    mask: np.ndarray
    upper: np.ndarray | None = None
    lower: np.ndarray | None = None

    @property
    def size(self) -> int:
        return int(self.y.size)


def normalize_series(series: Series) -> NormalizedSeries:
    """Flatten a Series into float arrays; non-finite values are masked out, never rejected."""

    y = np.asarray([_float_or_nan(p.y) for p in series.data], dtype=np.float64)
    mask = np.isfinite(y)
    upper: np.ndarray | None = None
    lower: np.ndarray | None = None
    if series.confidence_upper is not None and series.confidence_lower is not None and series.show_confidence_interval:
        if series.has_band():
            upper = np.asarray([_float_or_nan(v) for v in series.confidence_upper], dtype=np.float64)
            lower = np.asarray([_float_or_nan(v) for v in series.confidence_lower], dtype=np.float64)
        elif y.size:
            LOGGER.warning(
                "confidence bounds for series %s do not match data length (%d upper, %d lower, %d points); band skipped",
                series.series_id,
                len(series.confidence_upper),
                len(series.confidence_lower),
                y.size,
            )
    return NormalizedSeries(series_id=series.series_id, y=y, mask=mask, upper=upper, lower=lower)


def bar_extent(bar: CategoricalBar, mode: BarMode) -> float:
    """Value-axis extent a bar occupies: sum for stacked, max for grouped, value otherwise."""

    if mode != "single" and bar.group_values:
        values = [clamp_non_negative(v) for v in bar.group_values]
        return float(sum(values)) if mode == "stacked" else float(max(values))
    return clamp_non_negative(bar.value)


def segment_values(segments: Sequence[SegmentDatum]) -> np.ndarray:
    out = np.zeros(len(segments), dtype=np.float64)
    for i, segment in enumerate(segments):
        out[i] = clamp_non_negative(segment.value)
    return out


def series_from_values(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    series_id: str,
    name: str | None = None,
    color: ColorLike = "#7C3AED",
    dashed: bool = False,
    confidence_upper: Any = None,
    confidence_lower: Any = None,
) -> Series:
    """Build a Series from lists, numpy arrays, pandas columns or torch tensors."""

    y_values = _resolve_input(y=y, key="y", data=data)
    if y_values is None:
        raise ChartDataError("y input is required")
    y_arr = _coerce_1d_numeric(y_values, label="y")

    xs: list[float | str]
    if x is None:
        xs = list(range(y_arr.size))
    else:
        x_values = _resolve_input(y=x, key="x", data=data)
        xs = _coerce_labels(x_values, label="x")
        if len(xs) != y_arr.size:
            raise ChartDataError(f"x and y length mismatch: {len(xs)} != {y_arr.size}")

    upper = None
    lower = None
    if confidence_upper is not None:
        upper = tuple(_coerce_1d_numeric(_resolve_input(confidence_upper, "upper", data), label="upper").tolist())
    if confidence_lower is not None:
        lower = tuple(_coerce_1d_numeric(_resolve_input(confidence_lower, "lower", data), label="lower").tolist())

    points = tuple(DataPoint(x=xv, y=float(yv)) for xv, yv in zip(xs, y_arr.tolist()))
    return Series(
        series_id=series_id,
        name=name if name is not None else series_id,
        data=points,
        color=color,
        dashed=dashed,
        confidence_upper=upper,
        confidence_lower=lower,
    )


def _float_or_nan(value: Any) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def clamp_non_negative(value: Any) -> float:
    v = _float_or_nan(value)
    if not math.isfinite(v):
        LOGGER.warning("non-finite chart value %r treated as 0", value)
        return 0.0
    if v < 0:
        LOGGER.warning("negative chart value %r clamped to 0", value)
        return 0.0
    return v


def _resolve_input(y: Any, key: str, data: Any) -> Any:
    if data is not None:
        if pd is None:
            raise ChartDataError("pandas is required when using `data=`")
        if not isinstance(data, pd.DataFrame):
            raise ChartDataError("`data` must be a pandas DataFrame")
        if isinstance(y, str):
            if y not in data.columns:
                raise ChartDataError(f"column not found: {y}")
            return data[y]
        if y is None:
            if key == "y":
                numeric_cols = [c for c in data.columns if _is_numeric_dtype(data[c])]
                if len(numeric_cols) != 1:
                    raise ChartDataError("when y is omitted, data must have exactly one numeric column")
                return data[numeric_cols[0]]
            return None
        return y

    if pd is not None and isinstance(y, pd.DataFrame):
        numeric_cols = [c for c in y.columns if _is_numeric_dtype(y[c])]
        if len(numeric_cols) != 1:
            raise ChartDataError("1-D DataFrame input must contain exactly one numeric column")
        return y[numeric_cols[0]]

    return y


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_labels(value: Any, *, label: str) -> list[float | str]:
    if pd is not None and isinstance(value, pd.Series):
        value = value.tolist()
    elif isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        value = value.tolist()
    elif torch is not None and isinstance(value, torch.Tensor):
        return _coerce_1d_numeric(value, label=label).tolist()
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        out: list[float | str] = []
        for raw in value:
            if isinstance(raw, str):
                out.append(raw)
            elif isinstance(raw, Decimal):
                out.append(float(raw))
            elif isinstance(raw, (int, float, np.integer, np.floating)):
                out.append(float(raw))
            else:
                out.append(str(raw))
        return out
    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise ChartDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
