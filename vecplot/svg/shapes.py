from __future__ import annotations

from typing import Callable, Iterable

from vecplot.config import ChartConfig
from vecplot.series import Point, PlotType
from vecplot.style import fill_class, stroke_class
from vecplot.svg.legend import LegendSlot
from vecplot.svg.writer import PathData, SvgWriter, points_data


ShapeEmitter = Callable[..., None]


def marker_radius(config: ChartConfig) -> float:
    return config.padding / 30.0


def bar_gap(config: ChartConfig) -> float:
    return config.padding * 0.02


def _rounded_swatch(svg: SvgWriter, color: int, slot: LegendSlot, config: ChartConfig) -> None:
    svg.single(
        "rect",
        {
            "class": fill_class(color),
            "x": slot.swatch_x,
            "y": slot.swatch_y - config.padding / 30.0,
            "width": config.padding / 3.0,
            "height": config.padding / 20.0,
            "rx": config.padding / 30.0,
            "ry": config.padding / 30.0,
        },
    )


def emit_line(
    svg: SvgWriter,
    points: Iterable[Point],
    *,
    color: int,
    slot: LegendSlot,
    show_swatch: bool,
    config: ChartConfig,
) -> None:
    if show_swatch:
        svg.single(
            "line",
            {
                "class": stroke_class(color),
                "stroke": "black",
                "x1": slot.swatch_x,
                "x2": slot.swatch_x + config.padding / 3.0,
                "y1": slot.swatch_y,
                "y2": slot.swatch_y,
            },
        )
    svg.single(
        "polyline",
        {"class": stroke_class(color), "fill": "none", "stroke": "black"},
        data_attr="points",
        data=points_data(points),
    )


def emit_scatter(
    svg: SvgWriter,
    points: Iterable[Point],
    *,
    color: int,
    slot: LegendSlot,
    show_swatch: bool,
    config: ChartConfig,
) -> None:
    radius = marker_radius(config)
    if show_swatch:
        svg.single(
            "circle",
            {
                "class": fill_class(color),
                "cx": slot.swatch_x + radius,
                "cy": slot.swatch_y,
                "r": radius,
            },
        )
    with svg.elem("g", {"class": fill_class(color)}) as g:
        for x, y in points:
            g.single("circle", {"cx": x, "cy": y, "r": radius})


def emit_histogram(
    svg: SvgWriter,
    points: Iterable[Point],
    *,
    color: int,
    slot: LegendSlot,
    show_swatch: bool,
    config: ChartConfig,
) -> None:
    """One bar per consecutive pair; each bar starts at the earlier point."""
    if show_swatch:
        _rounded_swatch(svg, color, slot, config)
    gap = bar_gap(config)
    bottom = config.plot_bottom
    with svg.elem("g", {"class": fill_class(color)}) as g:
        last: Point | None = None
        for x, y in points:
            if last is not None:
                lx, ly = last
                g.single(
                    "rect",
                    {
                        "x": lx,
                        "y": ly,
                        "width": max(gap, (x - lx) - gap),
                        "height": bottom - ly,
                    },
                )
            last = (x, y)


def emit_line_fill(
    svg: SvgWriter,
    points: Iterable[Point],
    *,
    color: int,
    slot: LegendSlot,
    show_swatch: bool,
    config: ChartConfig,
) -> None:
    if show_swatch:
        _rounded_swatch(svg, color, slot, config)
    path = (
        PathData()
        .move_to(config.plot_left, config.plot_bottom)
        .lines_through(points)
        .line_to(config.plot_right, config.plot_bottom)
        .close()
    )
    svg.single("path", {"class": fill_class(color)}, data_attr="d", data=path.chunks())


EMITTERS: dict[PlotType, ShapeEmitter] = {
    "line": emit_line,
    "scatter": emit_scatter,
    "histogram": emit_histogram,
    "line_fill": emit_line_fill,
}


def emit_series_shape(
    svg: SvgWriter,
    plot_type: PlotType,
    points: Iterable[Point],
    *,
    color: int,
    slot: LegendSlot,
    show_swatch: bool,
    config: ChartConfig,
) -> None:
    try:
        emitter = EMITTERS[plot_type]
    except KeyError as exc:
        raise ValueError(f"unsupported plot type: {plot_type!r}") from exc
    emitter(svg, points, color=color, slot=slot, show_swatch=show_swatch, config=config)
