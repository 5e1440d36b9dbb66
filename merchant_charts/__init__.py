from merchant_charts.charts import (
    BarChart,
    BarChartConfig,
    ChartFrame,
    LineChart,
    LineChartConfig,
    PieChart,
    PieChartConfig,
)
from merchant_charts.errors import ChartDataError
from merchant_charts.forecast import ForecastPoint, KeyDate, build_forecast_series, forecast_chart_config
from merchant_charts.model import CategoricalBar, DataPoint, SegmentDatum, Series
from merchant_charts.theme import DARK_THEME, LIGHT_THEME, ChartTheme, theme_for_scheme, validate_theme_tokens

__all__ = [
    "BarChart",
    "BarChartConfig",
    "CategoricalBar",
    "ChartDataError",
    "ChartFrame",
    "ChartTheme",
    "DARK_THEME",
    "DataPoint",
    "ForecastPoint",
    "KeyDate",
    "LIGHT_THEME",
    "LineChart",
    "LineChartConfig",
    "PieChart",
    "PieChartConfig",
    "SegmentDatum",
    "Series",
    "build_forecast_series",
    "forecast_chart_config",
    "theme_for_scheme",
    "validate_theme_tokens",
]
