from __future__ import annotations

from decimal import Decimal
import importlib.util
import math
import unittest

import numpy as np

from merchant_charts import ChartDataError
from merchant_charts.adapters import bar_extent, normalize_series, segment_values, series_from_values
from merchant_charts.model import CategoricalBar, SegmentDatum


HAS_PANDAS = importlib.util.find_spec("pandas") is not None
HAS_TORCH = importlib.util.find_spec("torch") is not None


class SeriesFromValuesTests(unittest.TestCase):
    def test_accepts_decimal_and_none(self) -> None:
        series = series_from_values([1, Decimal("2.5"), None], series_id="s")
        self.assertEqual([p.x for p in series.data], [0, 1, 2])
        self.assertEqual(series.data[1].y, 2.5)
        self.assertTrue(math.isnan(series.data[2].y))
        self.assertEqual(series.name, "s")

    def test_numpy_and_labels(self) -> None:
        series = series_from_values(np.array([3, 4]), x=["Jan", "Feb"], series_id="rev", name="Revenue")
        self.assertEqual([(p.x, p.y) for p in series.data], [("Jan", 3.0), ("Feb", 4.0)])

    def test_confidence_bounds_are_coerced(self) -> None:
        series = series_from_values([1, 2], series_id="f", confidence_upper=np.array([2, 3]), confidence_lower=[0, 1])
        self.assertEqual(series.confidence_upper, (2.0, 3.0))
        self.assertTrue(series.has_band())

    def test_rejects_uncoercible_input(self) -> None:
        with self.assertRaises(ChartDataError):
            series_from_values(["a", "b"], series_id="s")
        with self.assertRaises(ChartDataError):
            series_from_values(np.zeros((2, 2)), series_id="s")
        with self.assertRaises(ChartDataError):
            series_from_values(None, series_id="s")
        with self.assertRaises(ChartDataError):
            series_from_values([1, 2], x=[1], series_id="s")
        with self.assertRaises(ChartDataError):
            series_from_values("123", series_id="s")

    def test_chart_data_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(ChartDataError, ValueError))

    @unittest.skipUnless(HAS_PANDAS, "pandas not installed")
    def test_pandas_columns(self) -> None:
        import pandas as pd

        df = pd.DataFrame({"day": ["Mon", "Tue"], "sales": [5, 7]})
        series = series_from_values("sales", x="day", data=df, series_id="s")
        self.assertEqual([(p.x, p.y) for p in series.data], [("Mon", 5.0), ("Tue", 7.0)])
        with self.assertRaises(ChartDataError):
            series_from_values("missing", data=df, series_id="s")

    @unittest.skipUnless(HAS_TORCH, "torch not installed")
    def test_torch_tensor(self) -> None:
        import torch

        series = series_from_values(torch.tensor([1.0, 2.0, 3.0]), series_id="s")
        self.assertEqual([p.y for p in series.data], [1.0, 2.0, 3.0])
        with self.assertRaises(ChartDataError):
            series_from_values(torch.zeros((2, 2)), series_id="s")


class NormalizeTests(unittest.TestCase):
    def test_normalize_masks_non_finite(self) -> None:
        series = series_from_values([1, None, float("inf"), 4], series_id="s")
        norm = normalize_series(series)
        self.assertEqual(norm.mask.tolist(), [True, False, False, True])
        self.assertEqual(norm.size, 4)

    def test_bar_extent_by_mode(self) -> None:
        bar = CategoricalBar("Jan", 12, group_values=(10, 20, 5))
        self.assertEqual(bar_extent(bar, "stacked"), 35.0)
        self.assertEqual(bar_extent(bar, "grouped"), 20.0)
        self.assertEqual(bar_extent(bar, "single"), 12.0)
        self.assertEqual(bar_extent(CategoricalBar("Feb", 7, group_values=()), "stacked"), 7.0)

    def test_segment_values_clamp(self) -> None:
        segments = [SegmentDatum("a", "A", 3), SegmentDatum("b", "B", -1), SegmentDatum("c", "C", float("nan"))]
        with self.assertLogs("merchant_charts.adapters.normalize", level="WARNING") as logs:
            values = segment_values(segments)
        self.assertEqual(values.tolist(), [3.0, 0.0, 0.0])
        self.assertEqual(len(logs.records), 2)


if __name__ == "__main__":
    unittest.main()
