from .raster import draw_line, fill, fill_circle, line_bounds, new_canvas
from .style import Color, StrokeStyle

__all__ = ["Color", "StrokeStyle", "draw_line", "fill", "fill_circle", "line_bounds", "new_canvas"]
