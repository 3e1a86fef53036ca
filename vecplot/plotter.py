from __future__ import annotations

from dataclasses import dataclass, field
import io
from typing import Any

from vecplot.adapters import normalize_points
from vecplot.config import ChartConfig
from vecplot.render import render_chart
from vecplot.series import PlotSeries, PlotType, SeriesName
from vecplot.svg.writer import TextSink


@dataclass
class Plotter:
    """Collects named series; nothing is read until ``render`` is called.

    Each series must be readable twice (bounds pass, then render pass), so
    inputs are either in-memory data, zero-argument factories or a
    ``PointSource``. Rendering consumes the collected series; build a new
    plotter to render again.
    """

    title: SeriesName = ""
    xname: SeriesName = ""
    yname: SeriesName = ""
    _series: list[PlotSeries] = field(default_factory=list)

    def line(self, name: SeriesName, points: Any = None, *, x: Any = None, y: Any = None) -> "Plotter":
        return self._add(name, "line", points, x=x, y=y)

    def scatter(self, name: SeriesName, points: Any = None, *, x: Any = None, y: Any = None) -> "Plotter":
        return self._add(name, "scatter", points, x=x, y=y)

    def histogram(self, name: SeriesName, points: Any = None, *, x: Any = None, y: Any = None) -> "Plotter":
        """Each bar's left edge lines up with a point; the last point only closes the previous bar."""
        return self._add(name, "histogram", points, x=x, y=y)

    def line_fill(self, name: SeriesName, points: Any = None, *, x: Any = None, y: Any = None) -> "Plotter":
        return self._add(name, "line_fill", points, x=x, y=y)

    @property
    def series(self) -> tuple[PlotSeries, ...]:
        return tuple(self._series)

    def render(self, sink: TextSink, config: ChartConfig | None = None) -> TextSink:
        series, self._series = self._series, []
        return render_chart(
            sink,
            series,
            title=self.title,
            xname=self.xname,
            yname=self.yname,
            config=config,
        )

    def render_to_string(self, config: ChartConfig | None = None) -> str:
        buf = io.StringIO()
        self.render(buf, config=config)
        return buf.getvalue()

    def _add(self, name: SeriesName, plot_type: PlotType, points: Any, *, x: Any, y: Any) -> "Plotter":
        source = normalize_points(points, x=x, y=y)
        self._series.append(PlotSeries(name=name, plot_type=plot_type, points=source))
        return self
