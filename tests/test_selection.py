from __future__ import annotations

import unittest

from merchant_charts.model import SegmentDatum, Series, points_from_values
from merchant_charts.primitives import GridLine, Rect
from merchant_charts.selection import (
    DIMMED_OPACITY,
    LegendEntry,
    SelectionState,
    apply_legend_selection,
    apply_selection,
    clear_selection,
    group_legend,
    opacity_for,
    segment_legend,
    select,
    series_legend,
    toggle_selection,
)


class SelectionTests(unittest.TestCase):
    def test_toggle_selects_then_clears(self) -> None:
        state = toggle_selection(SelectionState(), "s1")
        self.assertEqual(state.highlighted_id, "s1")
        self.assertTrue(state.active)
        self.assertEqual(toggle_selection(state, "s2").highlighted_id, "s2")
        self.assertIsNone(toggle_selection(state, "s1").highlighted_id)

    def test_select_and_clear_are_pure(self) -> None:
        base = SelectionState()
        picked = select(base, "x")
        self.assertIsNone(base.highlighted_id)
        self.assertEqual(picked.highlighted_id, "x")
        self.assertEqual(select(picked, "x"), picked)
        self.assertEqual(clear_selection(picked), SelectionState())

    def test_opacity_for(self) -> None:
        self.assertEqual(opacity_for(("a",), SelectionState()), 1.0)
        self.assertEqual(opacity_for(("a",), SelectionState("a")), 1.0)
        self.assertEqual(opacity_for(("a",), SelectionState("b")), DIMMED_OPACITY)
        self.assertEqual(opacity_for(("bar-0", "group-1"), SelectionState("group-1")), 1.0)

    def test_apply_selection_dims_only_keyed_primitives(self) -> None:
        prims = (
            GridLine("grid:0", 0, 0, 10, 0, (0, 0, 0, 255)),
            Rect("bar:0", 0, 0, 5, 5, (0, 0, 0, 255), selection_keys=("bar-0",)),
            Rect("bar:1", 5, 0, 5, 5, (0, 0, 0, 255), selection_keys=("bar-1",)),
        )
        out = apply_selection(prims, SelectionState("bar-1"))
        self.assertEqual([p.opacity for p in out], [1.0, 0.5, 1.0])
        self.assertEqual(apply_selection(prims, SelectionState()), prims)

    def test_legend_entries_follow_selection(self) -> None:
        entries = (LegendEntry("a", "A", (0, 0, 0, 255)), LegendEntry("b", "B", (0, 0, 0, 255)))
        out = apply_legend_selection(entries, SelectionState("a"))
        self.assertEqual([e.opacity for e in out], [1.0, 0.5])


class LegendBuilderTests(unittest.TestCase):
    def test_series_legend_carries_dash_style(self) -> None:
        entries = series_legend([Series("f", "Forecast", points_from_values([1]), color="#3B82F6", dashed=True)])
        self.assertEqual(entries[0].entry_id, "f")
        self.assertEqual(entries[0].color, (0x3B, 0x82, 0xF6, 255))
        self.assertTrue(entries[0].dashed)

    def test_group_legend_cycles_palette(self) -> None:
        entries = group_legend(["Online", "Store", "App"], ["#000000", "#FFFFFF"])
        self.assertEqual([e.entry_id for e in entries], ["group-0", "group-1", "group-2"])
        self.assertEqual(entries[2].color, (0, 0, 0, 255))

    def test_segment_legend_details(self) -> None:
        segments = [SegmentDatum("a", "Online", 1250), SegmentDatum("b", "Store", 3750.5, color="#FF0000")]
        entries = segment_legend(segments, ["#000000"])
        self.assertEqual([e.detail for e in entries], ["1,250 (25.0%)", "3,750.50 (75.0%)"])
        self.assertEqual(entries[1].color, (255, 0, 0, 255))


if __name__ == "__main__":
    unittest.main()
