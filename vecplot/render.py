from __future__ import annotations

from itertools import chain
import logging
from typing import Sequence

from vecplot.config import DEFAULT_CONFIG, ChartConfig
from vecplot.errors import FormattingError
from vecplot.scales import (
    CoordinateMapper,
    TickSet,
    build_mapper,
    compute_tick_set,
    find_bounds,
    format_tick,
    pad_degenerate_limits,
)
from vecplot.series import PlotSeries, SeriesName
from vecplot.style import AXIS_LINES_CLASS, BACKGROUND_CLASS, CLASS_PREFIX, TEXT_CLASS, color_index
from vecplot.svg.legend import WriteCounter, legend_slot, write_name
from vecplot.svg.shapes import emit_series_shape
from vecplot.svg.writer import SVG_NAMESPACE, PathData, SvgWriter, TextSink, format_number


LOGGER = logging.getLogger(__name__)

X_OFFSET_SYMBOL = "j"
Y_OFFSET_SYMBOL = "k"


def render_chart(
    sink: TextSink,
    series: Sequence[PlotSeries],
    *,
    title: SeriesName = "",
    xname: SeriesName = "",
    yname: SeriesName = "",
    config: ChartConfig | None = None,
) -> TextSink:
    """Write one SVG chart for ``series`` into ``sink`` and return the sink.

    Each series is walked twice: once through its bounds view to find the
    global data limits and once through its render view to emit geometry.
    A failed write aborts the render with ``FormattingError``; whatever was
    already written stays in the sink.
    """
    cfg = config or DEFAULT_CONFIG
    svg = SvgWriter(sink)
    try:
        _render_document(svg, series, title=title, xname=xname, yname=yname, config=cfg)
    except FormattingError as exc:
        LOGGER.warning("chart render aborted: %s", exc)
        raise
    return sink


def _render_document(
    svg: SvgWriter,
    series: Sequence[PlotSeries],
    *,
    title: SeriesName,
    xname: SeriesName,
    yname: SeriesName,
    config: ChartConfig,
) -> None:
    plots = list(series)
    width = config.width
    height = config.height
    root_attrs = {
        "class": CLASS_PREFIX,
        "width": width,
        "height": height,
        "viewBox": f"0 0 {format_number(width)} {format_number(height)}",
        "xmlns": SVG_NAMESPACE,
    }
    with svg.elem("svg", root_attrs):
        svg.raw("\n")
        svg.single(
            "rect",
            {"class": BACKGROUND_CLASS, "fill": "white", "x": 0, "y": 0, "width": width, "height": height},
        )

        bounds = find_bounds(chain.from_iterable(s.points.bounds_view() for s in plots))
        if bounds is None:
            LOGGER.debug("no finite points in %d series; drawing background only", len(plots))
            return

        limits = pad_degenerate_limits(bounds)
        mapper = build_mapper(limits, config)
        xticks = compute_tick_set(config.x_ticks, limits.xmin, limits.xmax)
        yticks = compute_tick_set(config.y_ticks, limits.ymin, limits.ymax)
        LOGGER.debug("chart limits=%s xticks=%s yticks=%s", limits, xticks, yticks)

        _emit_x_ticks(svg, xticks, mapper, config)
        _emit_y_ticks(svg, yticks, mapper, config)
        _emit_axis_lines(svg, config)

        for index, plot in enumerate(plots):
            color = color_index(index)
            slot = legend_slot(index, config)
            with svg.elem(
                "text",
                {
                    "class": TEXT_CLASS,
                    "alignment-baseline": "middle",
                    "text-anchor": "start",
                    "font-size": "large",
                    "x": slot.text_x,
                    "y": slot.text_y,
                },
            ) as text:
                counter = WriteCounter(text.text_sink())
                write_name(counter, plot.name)
            emit_series_shape(
                svg,
                plot.plot_type,
                mapper.map_points(plot.points.render_view()),
                color=color,
                slot=slot,
                show_swatch=counter.count > 0,
                config=config,
            )

        _emit_label(svg, title, x=width / 2.0, y=config.padding / 4.0)
        _emit_label(svg, xname, x=width / 2.0, y=height - config.padding / 8.0)
        _emit_label(
            svg,
            yname,
            x=config.padding / 4.0,
            y=height / 2.0,
            transform=f"rotate(-90,{format_number(config.padding / 4.0)},{format_number(height / 2.0)})",
        )


def _emit_x_ticks(svg: SvgWriter, ticks: TickSet, mapper: CoordinateMapper, config: ChartConfig) -> None:
    symbol = X_OFFSET_SYMBOL
    if ticks.offset:
        _emit_offset_base(svg, symbol, ticks, x=config.width * 0.55, y=config.padding_y * 0.7)

    bottom = config.plot_bottom
    text_y = bottom + config.padding_y * 0.3
    for value, offset in zip(ticks.values(), ticks.offsets()):
        xx = mapper.map_x(value)
        svg.single(
            "line",
            {
                "class": AXIS_LINES_CLASS,
                "stroke": "black",
                "x1": xx,
                "x2": xx,
                "y1": bottom,
                "y2": config.height - config.padding_y * 0.95,
            },
        )
        with svg.elem(
            "text",
            {
                "class": TEXT_CLASS,
                "alignment-baseline": "start",
                "text-anchor": "middle",
                "x": xx,
                "y": text_y,
            },
        ) as text:
            text.text(_tick_label(ticks, symbol, value, offset))


def _emit_y_ticks(svg: SvgWriter, ticks: TickSet, mapper: CoordinateMapper, config: ChartConfig) -> None:
    symbol = Y_OFFSET_SYMBOL
    if ticks.offset:
        _emit_offset_base(svg, symbol, ticks, x=config.padding, y=config.padding_y * 0.7)

    left = config.plot_left
    text_x = left - config.padding * 0.1
    for value, offset in zip(ticks.values(), ticks.offsets()):
        yy = mapper.map_y(value)
        svg.single(
            "line",
            {
                "class": AXIS_LINES_CLASS,
                "stroke": "black",
                "x1": left,
                "x2": config.padding * 0.96,
                "y1": yy,
                "y2": yy,
            },
        )
        with svg.elem(
            "text",
            {
                "class": TEXT_CLASS,
                "alignment-baseline": "middle",
                "text-anchor": "end",
                "x": text_x,
                "y": yy,
            },
        ) as text:
            text.text(_tick_label(ticks, symbol, value, offset))


def _tick_label(ticks: TickSet, symbol: str, value: float, offset: float) -> str:
    if ticks.offset:
        return f"{symbol}+{format_tick(offset, step=ticks.step)}"
    return format_tick(value, step=ticks.step)


def _emit_offset_base(svg: SvgWriter, symbol: str, ticks: TickSet, *, x: float, y: float) -> None:
    with svg.elem(
        "text",
        {
            "class": TEXT_CLASS,
            "alignment-baseline": "middle",
            "text-anchor": "start",
            "x": x,
            "y": y,
        },
    ) as text:
        text.text(f"Where {symbol} = {format_tick(ticks.first, step=ticks.step)}")


def _emit_axis_lines(svg: SvgWriter, config: ChartConfig) -> None:
    path = (
        PathData()
        .move_to(config.plot_left, config.plot_top)
        .line_to(config.plot_left, config.plot_bottom)
        .line_to(config.plot_right, config.plot_bottom)
    )
    svg.single(
        "path",
        {"class": AXIS_LINES_CLASS, "stroke": "black", "fill": "none"},
        data_attr="d",
        data=path.chunks(),
    )


def _emit_label(svg: SvgWriter, label: SeriesName, *, x: float, y: float, transform: str | None = None) -> None:
    attrs: dict[str, str | float] = {
        "class": TEXT_CLASS,
        "alignment-baseline": "start",
        "text-anchor": "middle",
        "font-size": "x-large",
    }
    if transform is not None:
        attrs["transform"] = transform
    attrs["x"] = x
    attrs["y"] = y
    with svg.elem("text", attrs) as text:
        write_name(text.text_sink(), label)
