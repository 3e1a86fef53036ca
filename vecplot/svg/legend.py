from __future__ import annotations

from dataclasses import dataclass

from vecplot.config import ChartConfig
from vecplot.errors import FormattingError
from vecplot.series import SeriesName
from vecplot.svg.writer import TextSink


class WriteCounter:
    """Forwards writes to ``inner`` and counts the UTF-8 bytes that went through."""

    def __init__(self, inner: TextSink) -> None:
        self.inner = inner
        self.count = 0

    def write(self, text: str) -> int:
        self.inner.write(text)
        self.count += len(text.encode("utf-8"))
        return len(text)


class _NullSink:
    def write(self, text: str) -> int:
        return len(text)


def write_name(sink: TextSink, name: SeriesName) -> None:
    if isinstance(name, str):
        if name:
            sink.write(name)
        return
    try:
        name(sink)
    except FormattingError:
        raise
    except Exception as exc:
        raise FormattingError(f"name writer failed: {exc}") from exc


def has_visible_name(name: SeriesName) -> bool:
    counter = WriteCounter(_NullSink())
    write_name(counter, name)
    return counter.count > 0


@dataclass(frozen=True)
class LegendSlot:
    text_x: float
    text_y: float
    swatch_x: float
    swatch_y: float


def legend_slot(index: int, config: ChartConfig) -> LegendSlot:
    # Slots are positional: a series without a visible name still takes its row.
    spacing = config.padding / 3.0
    return LegendSlot(
        text_x=config.width - config.padding / 1.2,
        text_y=config.padding_y + index * spacing,
        swatch_x=config.width - config.padding / 1.2 + config.padding / 30.0,
        swatch_y=config.padding_y - config.padding / 8.0 + index * spacing,
    )
