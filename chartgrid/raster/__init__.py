from .canvas import blend_mask, draw_hline, draw_pixel, draw_vline, fill_rect, new_canvas
from .draw_lines import dash_segments, draw_polyline
from .draw_markers import draw_markers, marker_mask
from .draw_text import draw_text, text_size
from .surface import RasterSurface

__all__ = [
    "RasterSurface",
    "blend_mask",
    "dash_segments",
    "draw_hline",
    "draw_markers",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "marker_mask",
    "new_canvas",
    "text_size",
]
