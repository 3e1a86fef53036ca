from .legend import LegendSlot, WriteCounter, has_visible_name, legend_slot, write_name
from .shapes import EMITTERS, emit_series_shape
from .writer import PathData, SvgWriter, format_number, points_data

__all__ = [
    "EMITTERS",
    "LegendSlot",
    "PathData",
    "SvgWriter",
    "WriteCounter",
    "emit_series_shape",
    "format_number",
    "has_visible_name",
    "legend_slot",
    "points_data",
    "write_name",
]
