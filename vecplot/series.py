from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Iterable, Iterator, Literal, TextIO, Union

from vecplot.errors import PlotDataError


PlotType = Literal["scatter", "line", "histogram", "line_fill"]
PLOT_TYPES: tuple[PlotType, ...] = ("scatter", "line", "histogram", "line_fill")

Point = tuple[float, float]

# A series name is either plain text or a callable that writes the name into a sink.
NameWriter = Callable[[TextIO], object]
SeriesName = Union[str, NameWriter]


def finite_points(points: Iterable[Iterable[float]]) -> Iterator[Point]:
    for raw in points:
        x, y = raw
        fx = float(x)
        fy = float(y)
        if math.isfinite(fx) and math.isfinite(fy):
            yield (fx, fy)


@dataclass(frozen=True)
class PointSource:
    """Two-pass access to one logical series.

    ``factory`` is invoked once for the bounds pass and once for the render
    pass, so each view is an independent lazy iterator over the same data.
    """

    factory: Callable[[], Iterable[Iterable[float]]]

    def bounds_view(self) -> Iterator[Point]:
        return finite_points(self.factory())

    def render_view(self) -> Iterator[Point]:
        return finite_points(self.factory())


def buffered(points: Iterable[Iterable[float]]) -> PointSource:
    """Store a one-shot iterable once so both passes can walk the same list.

    This trades memory proportional to the series length for the ability to
    accept generators that cannot be re-derived.
    """
    owned = [tuple(p) for p in points]
    return PointSource(factory=lambda: iter(owned))


@dataclass(frozen=True)
class PlotSeries:
    name: SeriesName
    plot_type: PlotType
    points: PointSource

    def __post_init__(self) -> None:
        if self.plot_type not in PLOT_TYPES:
            raise PlotDataError(f"unsupported plot type: {self.plot_type!r}")
