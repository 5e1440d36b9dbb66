from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import logging
from typing import Sequence

from merchant_charts.charts import LineChartConfig
from merchant_charts.model import DataPoint, Series
from merchant_charts.theme import LIGHT_THEME, ChartTheme
from merchant_charts.ticks import ValueFormatter, truncate_formatter


LOGGER = logging.getLogger(__name__)

UPPER_BOUND_FACTOR = 1.1
LOWER_BOUND_FACTOR = 0.9


@dataclass(frozen=True)
class ForecastPoint:
    date: str | date
    actual: float | None = None
    predicted: float | None = None
    confidence_upper: float | None = None
    confidence_lower: float | None = None


@dataclass(frozen=True)
class KeyDate:
    date: str | date
    label: str
    color: str | None = None


def forecast_split_index(points: Sequence[ForecastPoint]) -> int:
    """Index of the first point carrying only a prediction, or -1 when there is none."""

    for i, point in enumerate(points):
        if point.actual is None and point.predicted is not None:
            return i
    return -1


def build_forecast_series(
    points: Sequence[ForecastPoint],
    theme: ChartTheme = LIGHT_THEME,
    *,
    show_confidence_interval: bool = True,
) -> tuple[Series, ...]:
    split = forecast_split_index(points)
    history_end = split if split >= 0 else len(points)
    out: list[Series] = []

    historical = [DataPoint(x=_date_key(p.date), y=float(p.actual)) for p in points[:history_end] if p.actual is not None]
    if historical:
        out.append(
            Series(
                series_id="historical",
                name="Historical",
                data=tuple(historical),
                color=theme.primary,
                show_confidence_interval=False,
            )
        )

    predicted = [p for p in points[max(0, split) :] if p.predicted is not None]
    if predicted:
        out.append(
            Series(
                series_id="forecast",
                name="Forecast",
                data=tuple(DataPoint(x=_date_key(p.date), y=float(p.predicted)) for p in predicted),  # type: ignore[arg-type]
                color=theme.info,
                dashed=True,
                confidence_upper=tuple(
                    float(p.confidence_upper) if p.confidence_upper is not None else float(p.predicted) * UPPER_BOUND_FACTOR  # type: ignore[arg-type]
                    for p in predicted
                ),
                confidence_lower=tuple(
                    float(p.confidence_lower) if p.confidence_lower is not None else float(p.predicted) * LOWER_BOUND_FACTOR  # type: ignore[arg-type]
                    for p in predicted
                ),
                show_confidence_interval=show_confidence_interval,
            )
        )
    if not out:
        LOGGER.debug("forecast input has neither actual nor predicted values")
    return tuple(out)


def format_month_day(value: object) -> str:
    """`M/D` for dates and ISO date strings; anything unparsable is shown as-is."""

    parsed = _parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.month}/{parsed.day}"


def key_date_indices(points: Sequence[ForecastPoint], key_dates: Sequence[KeyDate]) -> list[tuple[int, KeyDate]]:
    """Category index of each key date on the forecast axis; dates outside the data are skipped."""

    index = {_date_key(p.date): i for i, p in enumerate(points)}
    out: list[tuple[int, KeyDate]] = []
    for key_date in key_dates:
        i = index.get(_date_key(key_date.date))
        if i is None:
            LOGGER.debug("key date %s not found in forecast data", key_date.date)
            continue
        out.append((i, key_date))
    return out


def forecast_chart_config(
    points: Sequence[ForecastPoint],
    *,
    theme: ChartTheme = LIGHT_THEME,
    width: int = 360,
    height: int = 300,
    show_confidence_interval: bool = True,
    format_value: ValueFormatter = truncate_formatter,
) -> LineChartConfig:
    return LineChartConfig(
        series=build_forecast_series(points, theme, show_confidence_interval=show_confidence_interval),
        width=width,
        height=height,
        show_legend=True,
        show_grid=True,
        show_tooltip=True,
        x_axis_label="Date",
        y_axis_label="Value",
        format_y_value=format_value,
        format_x_value=format_month_day,
        theme=theme,
    )


def _date_key(value: str | date) -> str:
    if isinstance(value, date):
        return value.isoformat()[:10]
    return str(value)


def _parse_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    raw = value.strip()
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None
