from __future__ import annotations

from datetime import date
import unittest

from merchant_charts import DARK_THEME, ForecastPoint, KeyDate, LineChart, build_forecast_series, forecast_chart_config
from merchant_charts.forecast import forecast_split_index, format_month_day, key_date_indices


def _points() -> list[ForecastPoint]:
    return [
        ForecastPoint("2024-01-01", actual=10),
        ForecastPoint("2024-01-02", actual=12, predicted=11),
        ForecastPoint("2024-01-03", predicted=14),
        ForecastPoint("2024-01-04", predicted=16, confidence_upper=20, confidence_lower=12),
    ]


class ForecastSeriesTests(unittest.TestCase):
    def test_splits_history_and_forecast(self) -> None:
        self.assertEqual(forecast_split_index(_points()), 2)
        historical, forecast = build_forecast_series(_points())
        self.assertEqual(historical.series_id, "historical")
        self.assertEqual([p.y for p in historical.data], [10.0, 12.0])
        self.assertFalse(historical.dashed)
        self.assertFalse(historical.has_band())
        self.assertEqual(forecast.series_id, "forecast")
        self.assertTrue(forecast.dashed)
        self.assertEqual([p.x for p in forecast.data], ["2024-01-03", "2024-01-04"])

    def test_missing_bounds_default_to_ten_percent(self) -> None:
        _, forecast = build_forecast_series(_points())
        assert forecast.confidence_upper is not None and forecast.confidence_lower is not None
        self.assertAlmostEqual(forecast.confidence_upper[0], 15.4)
        self.assertAlmostEqual(forecast.confidence_lower[0], 12.6)
        self.assertEqual(forecast.confidence_upper[1], 20.0)
        self.assertEqual(forecast.confidence_lower[1], 12.0)
        self.assertTrue(forecast.has_band())

    def test_confidence_interval_can_be_hidden(self) -> None:
        _, forecast = build_forecast_series(_points(), show_confidence_interval=False)
        self.assertFalse(forecast.has_band())

    def test_series_colors_follow_theme(self) -> None:
        historical, forecast = build_forecast_series(_points(), DARK_THEME)
        self.assertEqual(historical.color, DARK_THEME.primary)
        self.assertEqual(forecast.color, DARK_THEME.info)

    def test_forecast_only_input(self) -> None:
        series = build_forecast_series([ForecastPoint("2024-02-01", predicted=5)])
        self.assertEqual([s.series_id for s in series], ["forecast"])

    def test_history_only_input(self) -> None:
        series = build_forecast_series([ForecastPoint("2024-02-01", actual=5), ForecastPoint("2024-02-02", actual=6)])
        self.assertEqual([s.series_id for s in series], ["historical"])
        self.assertEqual(build_forecast_series([]), ())


class ForecastFormattingTests(unittest.TestCase):
    def test_month_day(self) -> None:
        self.assertEqual(format_month_day("2024-03-05"), "3/5")
        self.assertEqual(format_month_day("2024-12-25T10:00:00Z"), "12/25")
        self.assertEqual(format_month_day(date(2024, 7, 4)), "7/4")
        self.assertEqual(format_month_day("next week"), "next week")

    def test_key_dates_resolve_to_indices(self) -> None:
        keys = [KeyDate("2024-01-03", "Promo"), KeyDate(date(2024, 1, 1), "Launch"), KeyDate("2025-01-01", "Later")]
        self.assertEqual([(i, k.label) for i, k in key_date_indices(_points(), keys)], [(2, "Promo"), (0, "Launch")])

    def test_chart_config_renders(self) -> None:
        config = forecast_chart_config(_points())
        self.assertEqual((config.x_axis_label, config.y_axis_label), ("Date", "Value"))
        frame = LineChart(config).render()
        self.assertEqual([c.label for c in frame.category_labels], ["1/1", "1/2"])
        self.assertEqual([e.entry_id for e in frame.legend], ["historical", "forecast"])
        self.assertIn("forecast:band", [p.primitive_id for p in frame.primitives])


if __name__ == "__main__":
    unittest.main()
