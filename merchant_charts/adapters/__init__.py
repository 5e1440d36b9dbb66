from .normalize import (
    BarMode,
    NormalizedSeries,
    bar_extent,
    clamp_non_negative,
    normalize_series,
    segment_values,
    series_from_values,
)

__all__ = [
    "BarMode",
    "NormalizedSeries",
    "bar_extent",
    "clamp_non_negative",
    "normalize_series",
    "segment_values",
    "series_from_values",
]
