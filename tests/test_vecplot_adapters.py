from __future__ import annotations

from decimal import Decimal
import math
import unittest

import numpy as np

from vecplot import PlotDataError, PointSource, buffered
from vecplot.adapters.normalize import normalize_points


def _render_pass(source: PointSource) -> list[tuple[float, float]]:
    return list(source.render_view())


class NormalizePointsTests(unittest.TestCase):
    def test_sequence_of_pairs(self) -> None:
        source = normalize_points([(0, 1), (2, 3)])
        self.assertEqual(_render_pass(source), [(0.0, 1.0), (2.0, 3.0)])

    def test_views_are_independent(self) -> None:
        source = normalize_points([(0.0, 1.0), (2.0, 3.0)])
        bounds = source.bounds_view()
        render = source.render_view()
        self.assertEqual(list(bounds), [(0.0, 1.0), (2.0, 3.0)])
        self.assertEqual(list(render), [(0.0, 1.0), (2.0, 3.0)])

    def test_numpy_two_column_array(self) -> None:
        arr = np.asarray([[1.0, 2.0], [np.nan, 4.0], [5.0, 6.0]])
        source = normalize_points(arr)
        self.assertEqual(_render_pass(source), [(1.0, 2.0), (5.0, 6.0)])

    def test_numpy_wrong_shape_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_points(np.zeros((3, 3)))

    def test_decimal_and_none_values(self) -> None:
        source = normalize_points([(Decimal("1.5"), Decimal("2.25")), (None, 1), (3, Decimal("3.5"))])
        self.assertEqual(_render_pass(source), [(1.5, 2.25), (3.0, 3.5)])

    def test_non_pair_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_points([(1.0, 2.0, 3.0)])

    def test_non_numeric_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_points([("a", 1.0)])

    def test_empty_sequence_yields_no_points(self) -> None:
        self.assertEqual(_render_pass(normalize_points([])), [])

    def test_y_only_uses_index(self) -> None:
        source = normalize_points(y=[4.0, 5.0, 6.0])
        self.assertEqual(_render_pass(source), [(0.0, 4.0), (1.0, 5.0), (2.0, 6.0)])

    def test_x_and_y_columns(self) -> None:
        source = normalize_points(x=np.asarray([10, 20]), y=[1.0, float("inf")])
        self.assertEqual(_render_pass(source), [(10.0, 1.0)])

    def test_length_mismatch(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_points(x=[1.0, 2.0], y=[1.0])

    def test_points_and_columns_are_exclusive(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_points([(1.0, 2.0)], y=[1.0])

    def test_missing_y(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_points()

    def test_factory_is_called_per_pass(self) -> None:
        calls: list[int] = []

        def factory():
            calls.append(1)
            return ((float(i), math.sin(i)) for i in range(4))

        source = normalize_points(factory)
        self.assertEqual(len(list(source.bounds_view())), 4)
        self.assertEqual(len(list(source.render_view())), 4)
        self.assertEqual(len(calls), 2)

    def test_iterator_rejected_but_buffered_accepted(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_points(iter([(1.0, 2.0)]))
        source = normalize_points(buffered(iter([(1.0, 2.0)])))
        self.assertEqual(_render_pass(source), [(1.0, 2.0)])
        self.assertEqual(_render_pass(source), [(1.0, 2.0)])

    def test_torch_tensor(self) -> None:
        try:
            import torch
        except Exception:
            self.skipTest("torch is not installed")

        pairs = torch.tensor([[1, 2], [3, 4]], dtype=torch.int64)
        self.assertEqual(_render_pass(normalize_points(pairs)), [(1.0, 2.0), (3.0, 4.0)])
        y = torch.tensor([1.0, 2.0], dtype=torch.float32)
        self.assertEqual(_render_pass(normalize_points(y=y)), [(0.0, 1.0), (1.0, 2.0)])

    def test_pandas_inputs(self) -> None:
        try:
            import pandas as pd
        except Exception:
            self.skipTest("pandas is not installed")

        df = pd.DataFrame({"year": [2000, 2001], "value": [1.5, 2.5], "note": ["a", "b"]})
        self.assertEqual(_render_pass(normalize_points(df)), [(2000.0, 1.5), (2001.0, 2.5)])
        source = normalize_points(x=df["year"], y=df["value"])
        self.assertEqual(_render_pass(source), [(2000.0, 1.5), (2001.0, 2.5)])


if __name__ == "__main__":
    unittest.main()
