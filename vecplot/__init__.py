from vecplot.api import plot
from vecplot.config import ChartConfig, load_chart_config, validate_chart_config
from vecplot.errors import FormattingError, PlotDataError
from vecplot.plotter import Plotter
from vecplot.render import render_chart
from vecplot.scales import CoordinateMapper, DataLimits, TickSet, compute_tick_set, find_bounds, find_good_step
from vecplot.series import PLOT_TYPES, PlotSeries, PointSource, buffered

__all__ = [
    "ChartConfig",
    "CoordinateMapper",
    "DataLimits",
    "FormattingError",
    "PLOT_TYPES",
    "PlotDataError",
    "PlotSeries",
    "Plotter",
    "PointSource",
    "TickSet",
    "buffered",
    "compute_tick_set",
    "find_bounds",
    "find_good_step",
    "load_chart_config",
    "plot",
    "render_chart",
    "validate_chart_config",
]
