from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping, Protocol
from xml.sax.saxutils import escape, quoteattr

from vecplot.errors import FormattingError
from vecplot.series import Point


SVG_NAMESPACE = "http://www.w3.org/2000/svg"

AttrValue = str | int | float


class TextSink(Protocol):
    def write(self, text: str) -> object: ...


def format_number(value: float) -> str:
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric attribute value")
    if isinstance(value, int):
        return str(value)
    value = float(value)
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def format_attr(value: AttrValue) -> str:
    if isinstance(value, str):
        return value
    return format_number(value)


def points_data(points: Iterable[Point]) -> Iterator[str]:
    """Polyline ``points`` attribute content, one chunk per point."""
    sep = ""
    for x, y in points:
        yield f"{sep}{format_number(x)},{format_number(y)}"
        sep = " "


class PathData:
    """Builds path ``d`` content as a lazy stream of command chunks."""

    def __init__(self) -> None:
        self._parts: list[Iterable[str]] = []

    def move_to(self, x: float, y: float) -> "PathData":
        self._parts.append((f"M {format_number(x)} {format_number(y)}",))
        return self

    def line_to(self, x: float, y: float) -> "PathData":
        self._parts.append((f"L {format_number(x)} {format_number(y)}",))
        return self

    def lines_through(self, points: Iterable[Point]) -> "PathData":
        self._parts.append(f"L {format_number(x)} {format_number(y)}" for x, y in points)
        return self

    def close(self) -> "PathData":
        self._parts.append(("Z",))
        return self

    def chunks(self) -> Iterator[str]:
        sep = ""
        for part in self._parts:
            for chunk in part:
                yield sep + chunk
                sep = " "


class _EscapingSink:
    def __init__(self, writer: "SvgWriter") -> None:
        self._writer = writer

    def write(self, text: str) -> int:
        self._writer.raw(escape(text))
        return len(text)


class SvgWriter:
    """Streams SVG markup straight into a caller-owned text sink.

    Nothing is buffered: every tag and attribute is written as soon as it is
    produced, and a failing ``sink.write`` surfaces as ``FormattingError``.
    """

    def __init__(self, sink: TextSink) -> None:
        self._sink = sink

    @property
    def sink(self) -> TextSink:
        return self._sink

    def raw(self, markup: str) -> None:
        try:
            self._sink.write(markup)
        except FormattingError:
            raise
        except Exception as exc:
            raise FormattingError(f"output sink rejected write: {exc}") from exc

    def text(self, content: str) -> None:
        self.raw(escape(content))

    def text_sink(self) -> TextSink:
        return _EscapingSink(self)

    def single(
        self,
        tag: str,
        attrs: Mapping[str, AttrValue] | None = None,
        *,
        data_attr: str | None = None,
        data: Iterable[str] | None = None,
    ) -> None:
        self._open_tag(tag, attrs, data_attr=data_attr, data=data)
        self.raw("/>\n")

    @contextmanager
    def elem(self, tag: str, attrs: Mapping[str, AttrValue] | None = None) -> Iterator["SvgWriter"]:
        self._open_tag(tag, attrs)
        self.raw(">")
        yield self
        self.raw(f"</{tag}>\n")

    def _open_tag(
        self,
        tag: str,
        attrs: Mapping[str, AttrValue] | None,
        *,
        data_attr: str | None = None,
        data: Iterable[str] | None = None,
    ) -> None:
        self.raw(f"<{tag}")
        for key, value in (attrs or {}).items():
            self.raw(f" {key}={quoteattr(format_attr(value))}")
        if data_attr is not None:
            self.raw(f' {data_attr}="')
            for chunk in data or ():
                self.raw(chunk)
            self.raw('"')
