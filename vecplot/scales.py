from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import sys
from typing import Iterable, Iterator

import numpy as np

from vecplot.config import ChartConfig
from vecplot.series import Point


# Ranges narrower than this are treated as a single value.
DEGENERATE_RANGE_EPSILON = sys.float_info.min * 10.0

NICE_MULTIPLIERS = (1.0, 2.0, 5.0, 10.0)

OFFSET_DIGITS = 5

SCI_UPPER = 10_000_000.0
SCI_LOWER = 0.000_000_1


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float


@dataclass(frozen=True)
class TickSet:
    step: float
    count: int
    first: float
    offset: bool = False

    @property
    def last(self) -> float:
        return self.value(self.count - 1)

    def value(self, index: int) -> float:
        return _tick_value(self.first, self.step, index)

    def values(self) -> Iterator[float]:
        for i in range(self.count):
            yield self.value(i)

    def offsets(self) -> Iterator[float]:
        for i in range(self.count):
            yield i * self.step


def find_bounds(points: Iterable[Point]) -> DataLimits | None:
    it = iter(points)
    first = next(it, None)
    if first is None:
        return None
    xmin = xmax = first[0]
    ymin = ymax = first[1]
    for x, y in it:
        if x < xmin:
            xmin = x
        if x > xmax:
            xmax = x
        if y < ymin:
            ymin = y
        if y > ymax:
            ymax = y
    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def pad_degenerate_range(vmin: float, vmax: float) -> tuple[float, float]:
    if abs(vmax - vmin) < DEGENERATE_RANGE_EPSILON:
        return (vmin - 1.0, vmin + 1.0)
    return (vmin, vmax)


def pad_degenerate_limits(limits: DataLimits) -> DataLimits:
    xmin, xmax = pad_degenerate_range(limits.xmin, limits.xmax)
    ymin, ymax = pad_degenerate_range(limits.ymin, limits.ymax)
    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def find_good_step(desired_ticks: int, vmin: float, vmax: float) -> tuple[int, float, float]:
    """Pick a ``{1, 2, 5, 10} * 10**k`` step covering ``[vmin, vmax]``.

    Returns ``(tick_count, step, first_tick)``. The first tick sits on the
    step grid at or below ``vmin`` and the last one at or above ``vmax``.
    """
    if desired_ticks < 2:
        raise ValueError("desired_ticks must be >= 2")
    if not (np.isfinite(vmin) and np.isfinite(vmax)) or vmax <= vmin:
        raise ValueError("tick range must be finite and > 0")

    intervals = desired_ticks - 1
    span = vmax - vmin
    if np.isfinite(span):
        rough_step = span / intervals
    else:
        rough_step = vmax / intervals - vmin / intervals
    magnitude = float(10.0 ** -np.floor(np.log10(abs(rough_step))))
    normalized = rough_step * magnitude
    multiplier = next((m for m in NICE_MULTIPLIERS if m > normalized), NICE_MULTIPLIERS[-1])
    step = multiplier / magnitude

    index = float(np.floor(vmin / step))
    first = index * step
    if first > vmin:
        index -= 1.0
        first = index * step
    if not np.isfinite(first):
        # No grid point below vmin is representable.
        first = (index + 1.0) * step
    reach = vmax - first
    if np.isfinite(reach):
        count = int(np.ceil(reach / step)) + 1
    else:
        count = int(np.ceil(vmax / step - first / step)) + 1
    while _tick_value(first, step, count - 1) < vmax:
        count += 1
    return count, step, first


def should_use_offset(first_tick: float, last_tick: float, step: float) -> bool:
    if not np.isfinite(step) or step <= 0:
        return False
    peak = max(abs(first_tick), abs(last_tick))
    if peak <= step * 1e-9:
        return False
    digits = int(np.floor(np.log10(peak)) - np.floor(np.log10(step))) + 1
    return digits >= OFFSET_DIGITS


def compute_tick_set(desired_ticks: int, vmin: float, vmax: float) -> TickSet:
    count, step, first = find_good_step(desired_ticks, vmin, vmax)
    last = _tick_value(first, step, count - 1)
    return TickSet(step=step, count=count, first=first, offset=should_use_offset(first, last, step))


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    has_step = step is not None and np.isfinite(step) and step > 0
    if has_step and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    if abs_v != 0 and (abs_v > SCI_UPPER or abs_v < SCI_LOWER):
        precision = 0
        if has_step:
            precision = max(0, int(np.floor(np.log10(abs_v)) - np.floor(np.log10(step))))
        return f"{value:.{precision}e}"

    decimals = _decimals_from_step(step) if has_step else 6
    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


@dataclass(frozen=True)
class CoordinateMapper:
    limits: DataLimits
    left: float
    bottom: float
    scale_x: float
    scale_y: float

    def map_point(self, point: Point) -> Point:
        x, y = point
        return (self.map_x(x), self.map_y(y))

    def map_points(self, points: Iterable[Point]) -> Iterator[Point]:
        for point in points:
            yield self.map_point(point)

    def map_x(self, x: float) -> float:
        return self.left + _scaled_distance(x, self.limits.xmin, self.scale_x)

    def map_y(self, y: float) -> float:
        return self.bottom - _scaled_distance(y, self.limits.ymin, self.scale_y)


def build_mapper(limits: DataLimits, config: ChartConfig) -> CoordinateMapper:
    if limits.xmax <= limits.xmin or limits.ymax <= limits.ymin:
        raise ValueError("limits must span a positive range on both axes")
    scale_x = _scale_for(config.width - 2.0 * config.padding, limits.xmin, limits.xmax)
    scale_y = _scale_for(config.height - 2.0 * config.padding_y, limits.ymin, limits.ymax)
    return CoordinateMapper(
        limits=limits,
        left=config.padding,
        bottom=config.height - config.padding_y,
        scale_x=scale_x,
        scale_y=scale_y,
    )


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    return max(0, -int(exp))


def _tick_value(first: float, step: float, index: int) -> float:
    value = first + index * step
    if np.isfinite(value):
        return value
    # index * step can overflow even when the tick itself is representable.
    return 2.0 * (first / 2.0 + index * (step / 2.0))


def _scale_for(pixels: float, lo: float, hi: float) -> float:
    span = hi - lo
    if np.isfinite(span):
        return pixels / span
    return (pixels / 2.0) / (hi / 2.0 - lo / 2.0)


def _scaled_distance(value: float, origin: float, scale: float) -> float:
    delta = value - origin
    if np.isfinite(delta):
        return delta * scale
    return value * scale - origin * scale
