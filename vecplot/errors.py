from __future__ import annotations


class PlotDataError(ValueError):
    pass


class FormattingError(RuntimeError):
    """Raised when the output sink rejects a write or a name writer fails."""
