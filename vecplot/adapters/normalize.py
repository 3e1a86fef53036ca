from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any

import numpy as np

from vecplot.errors import PlotDataError
from vecplot.series import PointSource


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_points(points: Any = None, *, x: Any = None, y: Any = None) -> PointSource:
    """Turn builder input into a two-pass ``PointSource``.

    Accepted forms: a ``PointSource``; a zero-argument factory returning an
    iterable of pairs; an ``(n, 2)`` array, tensor or two-column DataFrame;
    a sequence of pairs; or separate ``x``/``y`` columns (``y`` alone plots
    against its index). Bare iterators are rejected because they cannot be
    walked twice; wrap them with ``vecplot.series.buffered``.
    """
    if points is not None and (x is not None or y is not None):
        raise PlotDataError("pass either points or x/y columns, not both")

    if points is None:
        return _from_columns(x=x, y=y)

    if isinstance(points, PointSource):
        return points
    if isinstance(points, Iterator):
        raise PlotDataError("one-shot iterators cannot be read twice; wrap them with buffered()")
    if callable(points) and not _is_array_like(points):
        return PointSource(factory=points)

    pairs = _coerce_pairs(points)
    rows = pairs.tolist()
    return PointSource(factory=lambda: iter(rows))


def _from_columns(*, x: Any, y: Any) -> PointSource:
    if y is None:
        raise PlotDataError("y input is required")
    y_arr = _coerce_1d_numeric(y, label="y")
    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _coerce_1d_numeric(x, label="x")

    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")

    xs = x_arr.tolist()
    ys = y_arr.tolist()
    return PointSource(factory=lambda: zip(xs, ys))


def _is_array_like(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return True
    if torch is not None and isinstance(value, torch.Tensor):
        return True
    return pd is not None and isinstance(value, (pd.DataFrame, pd.Series))


def _coerce_pairs(value: Any) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return _check_pairs(tensor.to(torch.float64).numpy())

    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if len(numeric_cols) != 2:
            raise PlotDataError("DataFrame input must contain exactly two numeric columns (x, y)")
        return _check_pairs(_coerce_ndarray(value[numeric_cols].to_numpy(), label="points"))

    if isinstance(value, np.ndarray):
        return _check_pairs(_coerce_ndarray(value, label="points"))

    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray)):
        rows = list(value)
        if not rows:
            return np.empty((0, 2), dtype=np.float64)
        arr = np.empty((len(rows), 2), dtype=object)
        for i, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not hasattr(row, "__len__") or len(row) != 2:
                raise PlotDataError(f"point at index {i} is not an (x, y) pair: {row!r}")
            arr[i, 0], arr[i, 1] = row
        return _coerce_ndarray(arr, label="points")

    raise PlotDataError(f"unsupported points input type: {type(value)!r}")


def _check_pairs(arr: np.ndarray) -> np.ndarray:
    if arr.ndim == 1 and arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise PlotDataError(f"points must have shape (n, 2), got {arr.shape}")
    return arr


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    flat = arr.reshape(-1)
    out = np.empty(flat.shape[0], dtype=np.float64)
    for i, raw in enumerate(flat.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out.reshape(arr.shape)
