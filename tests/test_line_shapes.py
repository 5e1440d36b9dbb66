from __future__ import annotations

import unittest

from merchant_charts.interaction import PointTarget, resolve_hit
from merchant_charts.model import DataPoint, Series, points_from_values
from merchant_charts.primitives import Marker, Polygon, Polyline
from merchant_charts.scales import build_scale, compute_domain
from merchant_charts.shapes import band_polygon, generate_line_shapes
from merchant_charts.adapters import normalize_series


def _scale(values: list[float], n: int):
    return build_scale(compute_domain(values), 100, 100, n)


class LineShapeTests(unittest.TestCase):
    def test_band_polygon_has_two_vertices_per_point_and_closes(self) -> None:
        series = Series(
            series_id="f",
            name="Forecast",
            data=points_from_values([10, 20, 15]),
            confidence_upper=[12, 22, 18],
            confidence_lower=[8, 18, 12],
        )
        geometry = generate_line_shapes([series], _scale([10, 20, 15], 3))
        bands = [p for p in geometry.primitives if isinstance(p, Polygon)]
        self.assertEqual(len(bands), 1)
        self.assertEqual(bands[0].vertex_count, 6)
        path = bands[0].path()
        self.assertTrue(path.startswith("M "))
        self.assertTrue(path.endswith("Z"))
        # Band is drawn before the line so the line stays on top.
        self.assertEqual(geometry.primitives[0].primitive_id, "f:band")

    def test_band_upper_runs_forward_and_lower_backward(self) -> None:
        series = Series(
            series_id="f",
            name="Forecast",
            data=points_from_values([10, 20]),
            confidence_upper=[12, 22],
            confidence_lower=[8, 18],
        )
        scale = _scale([10, 20], 2)
        band = band_polygon(normalize_series(series), scale)
        assert band is not None
        self.assertEqual([x for x, _ in band], [0.0, 100.0, 100.0, 0.0])
        self.assertAlmostEqual(band[0][1], scale.scale_value(12))
        self.assertAlmostEqual(band[3][1], scale.scale_value(8))

    def test_mismatched_bounds_skip_band_with_warning(self) -> None:
        series = Series(
            series_id="f",
            name="Forecast",
            data=points_from_values([10, 20, 15]),
            confidence_upper=[12, 22],
            confidence_lower=[8, 18, 12],
        )
        with self.assertLogs("merchant_charts.adapters.normalize", level="WARNING"):
            geometry = generate_line_shapes([series], _scale([10, 20, 15], 3))
        self.assertFalse(any(isinstance(p, Polygon) for p in geometry.primitives))
        self.assertEqual(sum(isinstance(p, Marker) for p in geometry.primitives), 3)

    def test_hidden_confidence_interval_draws_no_band(self) -> None:
        series = Series(
            series_id="f",
            name="Forecast",
            data=points_from_values([1, 2]),
            confidence_upper=[2, 3],
            confidence_lower=[0, 1],
            show_confidence_interval=False,
        )
        geometry = generate_line_shapes([series], _scale([1, 2], 2))
        self.assertFalse(any(isinstance(p, Polygon) for p in geometry.primitives))

    def test_missing_values_split_the_line(self) -> None:
        data = [DataPoint(0, 1.0), DataPoint(1, None), DataPoint(2, 3.0), DataPoint(3, 4.0)]  # type: ignore[arg-type]
        geometry = generate_line_shapes([Series("s", "Sales", data)], _scale([1, 3, 4], 4))
        lines = [p for p in geometry.primitives if isinstance(p, Polyline)]
        self.assertEqual(len(lines), 1)
        self.assertEqual(len(lines[0].points), 2)
        self.assertEqual(sum(isinstance(p, Marker) for p in geometry.primitives), 3)

    def test_dashed_flag_reaches_polyline(self) -> None:
        geometry = generate_line_shapes([Series("s", "Sales", points_from_values([1, 2]), dashed=True)], _scale([1, 2], 2))
        lines = [p for p in geometry.primitives if isinstance(p, Polyline)]
        self.assertTrue(lines[0].dashed)

    def test_single_point_draws_marker_only(self) -> None:
        geometry = generate_line_shapes([Series("s", "Sales", points_from_values([7]))], _scale([7], 1))
        self.assertEqual([type(p) for p in geometry.primitives], [Marker])

    def test_marker_hit_round_trips_to_series_and_index(self) -> None:
        scale = _scale([10, 20, 15], 3)
        geometry = generate_line_shapes([Series("s", "Sales", points_from_values([10, 20, 15]))], scale)
        x = scale.scale_index(1)
        y = scale.scale_value(20)
        hit = resolve_hit(geometry.hit_regions, x + 5, y + 5)
        assert hit is not None
        self.assertEqual(hit.target, PointTarget(series_id="s", point_index=1))
        self.assertIsNone(resolve_hit(geometry.hit_regions, x, y + 40))


if __name__ == "__main__":
    unittest.main()
