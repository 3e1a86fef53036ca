from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
import tomllib
from typing import Any, Mapping


DEFAULT_WIDTH = 800.0
DEFAULT_HEIGHT = 600.0
DEFAULT_PADDING = 150.0
DEFAULT_PADDING_Y = 100.0
DEFAULT_X_TICKS = 9
DEFAULT_Y_TICKS = 10


@dataclass(frozen=True)
class ChartConfig:
    """Canvas layout for one render call.

    ``padding`` is the horizontal gutter on both sides of the plot area and
    ``padding_y`` the vertical one; legend and label offsets derive from them.
    """

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    padding: float = DEFAULT_PADDING
    padding_y: float = DEFAULT_PADDING_Y
    x_ticks: int = DEFAULT_X_TICKS
    y_ticks: int = DEFAULT_Y_TICKS

    def __post_init__(self) -> None:
        if self.padding < 0 or self.padding_y < 0:
            raise ValueError("padding must be >= 0")
        if self.width <= 2 * self.padding:
            raise ValueError("width must be > 2 * padding")
        if self.height <= 2 * self.padding_y:
            raise ValueError("height must be > 2 * padding_y")
        if self.x_ticks < 2 or self.y_ticks < 2:
            raise ValueError("desired tick counts must be >= 2")

    @property
    def plot_left(self) -> float:
        return self.padding

    @property
    def plot_right(self) -> float:
        return self.width - self.padding

    @property
    def plot_top(self) -> float:
        return self.padding_y

    @property
    def plot_bottom(self) -> float:
        return self.height - self.padding_y


DEFAULT_CONFIG = ChartConfig()

_FLOAT_KEYS = ("width", "height", "padding", "padding_y")
_INT_KEYS = ("x_ticks", "y_ticks")


def validate_chart_config(overrides: Mapping[str, Any] | None = None) -> ChartConfig:
    """Merge user overrides over the defaults and validate the result."""

    raw: dict[str, Any] = asdict(DEFAULT_CONFIG)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown chart setting: {key}")
            raw[key] = value

    for key in _FLOAT_KEYS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Setting `{key}` must be a number")
    for key in _INT_KEYS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Setting `{key}` must be an integer")

    return ChartConfig(
        width=float(raw["width"]),
        height=float(raw["height"]),
        padding=float(raw["padding"]),
        padding_y=float(raw["padding_y"]),
        x_ticks=int(raw["x_ticks"]),
        y_ticks=int(raw["y_ticks"]),
    )


def load_chart_config(path: str | Path) -> ChartConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("chart", raw)
    if not isinstance(table, dict):
        raise ValueError("`chart` must be a table")
    return validate_chart_config(table)
