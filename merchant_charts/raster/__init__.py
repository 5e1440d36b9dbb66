from .canvas import blend_coverage, fill_mask, fill_rect, new_canvas
from .draw_lines import draw_polyline
from .draw_shapes import fill_circle, fill_polygon, polygon_mask
from .draw_text import draw_text, text_size
from .render import draw_primitive, rasterize

__all__ = [
    "blend_coverage",
    "draw_polyline",
    "draw_primitive",
    "draw_text",
    "fill_circle",
    "fill_mask",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "polygon_mask",
    "rasterize",
    "text_size",
]
