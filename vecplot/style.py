from __future__ import annotations


# After this many series the style classes repeat.
NUM_COLORS = 6

CLASS_PREFIX = "vecplot"
BACKGROUND_CLASS = f"{CLASS_PREFIX}_background"
TEXT_CLASS = f"{CLASS_PREFIX}_text"
AXIS_LINES_CLASS = f"{CLASS_PREFIX}_axis_lines"


def color_index(series_index: int) -> int:
    if series_index < 0:
        raise ValueError("series_index must be >= 0")
    return series_index % NUM_COLORS


def stroke_class(color: int) -> str:
    return f"{CLASS_PREFIX}{color}stroke"


def fill_class(color: int) -> str:
    return f"{CLASS_PREFIX}{color}fill"
