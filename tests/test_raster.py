from __future__ import annotations

import unittest

import numpy as np

from merchant_charts.raster import (
    blend_coverage,
    draw_polyline,
    draw_text,
    fill_circle,
    fill_polygon,
    fill_rect,
    new_canvas,
    polygon_mask,
    text_size,
)

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


class CanvasTests(unittest.TestCase):
    def test_fill_rect_is_inclusive_and_clipped(self) -> None:
        canvas = new_canvas(10, 10, WHITE)
        fill_rect(canvas, 2, 3, 4, 5, BLACK)
        self.assertEqual(int((canvas[:, :, 0] == 0).sum()), 9)
        fill_rect(canvas, -5, -5, 0, 0, BLACK)
        self.assertEqual(int(canvas[0, 0, 0]), 0)

    def test_half_alpha_blends(self) -> None:
        canvas = new_canvas(4, 4, WHITE)
        fill_rect(canvas, 0, 0, 3, 3, (0, 0, 0, 128))
        self.assertTrue(120 <= int(canvas[1, 1, 0]) <= 130)
        self.assertEqual(int(canvas[1, 1, 3]), 255)

    def test_coverage_weights_and_clips(self) -> None:
        canvas = new_canvas(4, 4, (255, 255, 255, 0))
        coverage = np.array([[1.0, 0.0], [0.5, 1.0]], dtype=np.float32)
        blend_coverage(canvas, 3, 3, coverage, BLACK)
        self.assertEqual(tuple(canvas[3, 3]), (0, 0, 0, 255))
        self.assertEqual(int(canvas[2, 2, 3]), 0)
        blend_coverage(canvas, 0, 0, coverage, BLACK)
        self.assertEqual(int(canvas[0, 1, 0]), 255)
        self.assertEqual(int(canvas[0, 1, 3]), 0)
        self.assertTrue(125 <= int(canvas[1, 0, 0]) <= 128)
        self.assertEqual(int(canvas[1, 0, 3]), 255)


class ShapeTests(unittest.TestCase):
    def test_polygon_mask_covers_square(self) -> None:
        mask = polygon_mask((20, 20), [(0, 0), (10, 0), (10, 10), (0, 10)])
        self.assertEqual(int(mask.sum()), 100)
        self.assertTrue(mask[9, 9])
        self.assertFalse(mask[10, 10])

    def test_degenerate_polygon_is_empty(self) -> None:
        self.assertFalse(polygon_mask((5, 5), [(0, 0), (4, 4)]).any())

    def test_fill_polygon_and_circle(self) -> None:
        canvas = new_canvas(20, 20, WHITE)
        fill_polygon(canvas, [(0, 0), (10, 0), (0, 10)], BLACK)
        self.assertEqual(tuple(canvas[1, 1, :3]), (0, 0, 0))
        self.assertEqual(tuple(canvas[9, 9, :3]), (255, 255, 255))
        fill_circle(canvas, 15, 15, 3, BLACK)
        self.assertEqual(tuple(canvas[15, 15, :3]), (0, 0, 0))
        self.assertEqual(tuple(canvas[19, 19, :3]), (255, 255, 255))

    def test_dashed_polyline_leaves_gaps(self) -> None:
        canvas = new_canvas(20, 10, WHITE)
        draw_polyline(canvas, [(0, 5), (19, 5)], BLACK, width=1, dashed=True)
        row = canvas[5, :, 0]
        self.assertEqual(row[:5].tolist(), [0] * 5)
        self.assertEqual(row[5:10].tolist(), [255] * 5)
        self.assertEqual(row[10:15].tolist(), [0] * 5)

    def test_solid_polyline_is_continuous(self) -> None:
        canvas = new_canvas(20, 10, WHITE)
        draw_polyline(canvas, [(0, 5), (19, 5)], BLACK, width=1)
        self.assertTrue(np.all(canvas[5, :, 0] == 0))


class TextTests(unittest.TestCase):
    def test_text_draws_glyph_coverage(self) -> None:
        canvas = new_canvas(120, 40, WHITE)
        draw_text(canvas, 5, 5, "Revenue", BLACK, font_size_px=16.0)
        self.assertTrue(np.any(canvas[:, :, 0] < 255))
        w, h = text_size("Revenue", font_size_px=16.0)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)

    def test_empty_text_is_noop(self) -> None:
        canvas = new_canvas(10, 10, WHITE)
        draw_text(canvas, 0, 0, "", BLACK)
        self.assertTrue(np.all(canvas == 255))


if __name__ == "__main__":
    unittest.main()
