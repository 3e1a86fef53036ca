from __future__ import annotations

from vecplot.plotter import Plotter
from vecplot.series import SeriesName


def plot(title: SeriesName = "", xname: SeriesName = "", yname: SeriesName = "") -> Plotter:
    return Plotter(title=title, xname=xname, yname=yname)
