from .bars import BarGeometry, BarSlot, Orientation, category_slots, generate_bar_shapes, place_bar
from .line import LineGeometry, band_polygon, generate_line_shapes
from .pie import PieGeometry, PieSlice, PieType, compute_slices, generate_pie_shapes

__all__ = [
    "BarGeometry",
    "BarSlot",
    "LineGeometry",
    "Orientation",
    "PieGeometry",
    "PieSlice",
    "PieType",
    "band_polygon",
    "category_slots",
    "compute_slices",
    "generate_bar_shapes",
    "generate_line_shapes",
    "generate_pie_shapes",
    "place_bar",
]
