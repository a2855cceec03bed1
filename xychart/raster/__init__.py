from .canvas import blend, composite, fill_rect, new_canvas
from .draw_lines import draw_line, draw_polyline
from .draw_markers import draw_ring, fill_disc, fill_polygon
from .draw_text import draw_text, text_size
from .layers import LayerStack
from .surface import RasterSurface

__all__ = [
    "LayerStack",
    "RasterSurface",
    "blend",
    "composite",
    "draw_line",
    "draw_polyline",
    "draw_ring",
    "draw_text",
    "fill_disc",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "text_size",
]
