from __future__ import annotations

import math
import unittest

import numpy as np

from vecplot.config import ChartConfig
from vecplot.scales import (
    DataLimits,
    build_mapper,
    compute_tick_set,
    find_bounds,
    find_good_step,
    format_tick,
    pad_degenerate_limits,
    pad_degenerate_range,
    should_use_offset,
)
from vecplot.series import finite_points


def _is_nice(step: float) -> bool:
    exp = math.floor(math.log10(step))
    frac = step / (10.0**exp)
    return any(math.isclose(frac, m, rel_tol=1e-9) for m in (1.0, 2.0, 5.0, 10.0))


class BoundsTests(unittest.TestCase):
    def test_find_bounds_tracks_each_axis_independently(self) -> None:
        limits = find_bounds([(3.0, 1.0), (-2.0, 5.0), (7.0, -4.0)])
        self.assertEqual(limits, DataLimits(xmin=-2.0, xmax=7.0, ymin=-4.0, ymax=5.0))

    def test_find_bounds_of_nothing_is_none(self) -> None:
        self.assertIsNone(find_bounds([]))

    def test_find_bounds_single_point_sets_both_ends(self) -> None:
        self.assertEqual(find_bounds([(4.0, 9.0)]), DataLimits(4.0, 4.0, 9.0, 9.0))

    def test_bounds_enclose_every_retained_point(self) -> None:
        rng = np.random.default_rng(7)
        raw = rng.normal(scale=1e4, size=(500, 2))
        raw[::17, 0] = np.nan
        raw[::23, 1] = np.inf
        retained = list(finite_points(raw.tolist()))
        limits = find_bounds(finite_points(raw.tolist()))
        assert limits is not None
        for x, y in retained:
            self.assertLessEqual(limits.xmin, x)
            self.assertGreaterEqual(limits.xmax, x)
            self.assertLessEqual(limits.ymin, y)
            self.assertGreaterEqual(limits.ymax, y)

    def test_nan_point_is_filtered_from_bounds(self) -> None:
        limits = find_bounds(finite_points([(0.0, 0.0), (float("nan"), 50.0), (10.0, 10.0)]))
        self.assertEqual(limits, DataLimits(0.0, 10.0, 0.0, 10.0))

    def test_zero_range_is_padded_to_width_two(self) -> None:
        self.assertEqual(pad_degenerate_range(5.0, 5.0), (4.0, 6.0))
        self.assertEqual(pad_degenerate_range(1.0, 2.0), (1.0, 2.0))
        padded = pad_degenerate_limits(DataLimits(3.0, 3.0, -1.0, 4.0))
        self.assertEqual(padded, DataLimits(2.0, 4.0, -1.0, 4.0))


class StepTests(unittest.TestCase):
    def test_year_axis_uses_step_of_twenty(self) -> None:
        count, step, first = find_good_step(9, 1850.0, 2001.0)
        self.assertEqual(step, 20.0)
        self.assertEqual(first, 1840.0)
        self.assertEqual(count, 10)

    def test_small_range_steps(self) -> None:
        count, step, first = find_good_step(10, 10.0, 20.0)
        self.assertEqual((count, step, first), (6, 2.0, 10.0))

    def test_step_is_nice_and_ticks_cover_range(self) -> None:
        ranges = [
            (0.0, 1.0),
            (-5.0, 3.0),
            (1850.0, 2001.0),
            (0.0, 1e9),
            (1e-12, 5e-12),
            (0.000001, 0.000001000000001),
            (10000.0, 10010.0),
            (-0.37, 0.91),
            (0.5, 1.4),
        ]
        for vmin, vmax in ranges:
            for desired in (2, 3, 5, 9, 10, 17):
                with self.subTest(vmin=vmin, vmax=vmax, desired=desired):
                    count, step, first = find_good_step(desired, vmin, vmax)
                    self.assertGreaterEqual(count, 1)
                    self.assertTrue(_is_nice(step), step)
                    self.assertLessEqual(first, vmin)
                    self.assertGreaterEqual(first + (count - 1) * step, vmax)

    def test_range_wider_than_largest_float(self) -> None:
        count, step, first = find_good_step(9, -1e308, 1e308)
        self.assertTrue(math.isfinite(step))
        self.assertTrue(_is_nice(step))
        self.assertTrue(math.isfinite(first))
        self.assertLessEqual(first, -1e308)
        ticks = compute_tick_set(9, -1e308, 1e308)
        values = list(ticks.values())
        self.assertEqual(len(values), count)
        self.assertTrue(all(math.isfinite(v) for v in values))
        self.assertGreaterEqual(ticks.last, 1e308)

    def test_rejects_fewer_than_two_ticks(self) -> None:
        with self.assertRaises(ValueError):
            find_good_step(1, 0.0, 1.0)

    def test_rejects_empty_range(self) -> None:
        with self.assertRaises(ValueError):
            find_good_step(5, 2.0, 2.0)
        with self.assertRaises(ValueError):
            find_good_step(5, 0.0, float("inf"))

    def test_offset_notation_for_large_values_with_small_step(self) -> None:
        self.assertTrue(should_use_offset(10000.0, 10010.0, 2.0))
        self.assertFalse(should_use_offset(1840.0, 2020.0, 20.0))
        self.assertFalse(should_use_offset(0.0, 0.0, 1.0))

    def test_offset_notation_for_tiny_ranges(self) -> None:
        ticks = compute_tick_set(9, 0.000001, 0.000001000000001)
        self.assertTrue(ticks.offset)

    def test_tick_set_keeps_step_when_offset(self) -> None:
        ticks = compute_tick_set(9, 10000.0, 10010.0)
        self.assertEqual(ticks.step, 2.0)
        self.assertEqual(ticks.first, 10000.0)
        self.assertEqual(ticks.count, 6)
        self.assertEqual(ticks.last, 10010.0)
        self.assertTrue(ticks.offset)
        self.assertEqual(list(ticks.offsets()), [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])


class FormatTickTests(unittest.TestCase):
    def test_decimals_follow_step(self) -> None:
        self.assertEqual(format_tick(1.5, step=0.5), "1.5")
        self.assertEqual(format_tick(2.0, step=0.5), "2")
        self.assertEqual(format_tick(1840.0, step=20.0), "1840")

    def test_float_drift_is_hidden(self) -> None:
        self.assertEqual(format_tick(0.1 * 3, step=0.1), "0.3")
        self.assertEqual(format_tick(-4.4409e-16, step=1.0), "0")

    def test_scientific_for_extreme_magnitudes(self) -> None:
        self.assertEqual(format_tick(2e-16, step=2e-16), "2e-16")
        self.assertEqual(format_tick(1.5e8, step=1e7), "1.5e+08")

    def test_fine_steps_keep_every_decimal(self) -> None:
        value = 1.0000003e-6
        self.assertLess(abs(float(format_tick(value, step=2e-16)) - value), 2e-16)
        self.assertEqual(format_tick(1.0000000000001, step=1e-13), "1.0000000000001")

    def test_non_finite_passthrough(self) -> None:
        self.assertEqual(format_tick(float("inf")), "inf")


class CoordinateMapperTests(unittest.TestCase):
    def test_corners_and_center(self) -> None:
        mapper = build_mapper(DataLimits(0.0, 10.0, 0.0, 10.0), ChartConfig())
        self.assertEqual(mapper.map_point((0.0, 0.0)), (150.0, 500.0))
        self.assertEqual(mapper.map_point((10.0, 10.0)), (650.0, 100.0))
        self.assertEqual(mapper.map_point((5.0, 5.0)), (400.0, 300.0))

    def test_scales_follow_canvas_and_padding(self) -> None:
        mapper = build_mapper(DataLimits(1850.0, 2001.0, 10.0, 20.0), ChartConfig())
        self.assertAlmostEqual(mapper.scale_x, 500.0 / 151.0)
        self.assertAlmostEqual(mapper.scale_y, 40.0)

    def test_map_points_is_lazy(self) -> None:
        mapper = build_mapper(DataLimits(0.0, 1.0, 0.0, 1.0), ChartConfig(width=400, height=300, padding=50, padding_y=50))

        def source():
            yield (0.0, 0.0)
            raise AssertionError("consumed past first point")

        mapped = mapper.map_points(source())
        self.assertEqual(next(mapped), (50.0, 250.0))

    def test_limits_wider_than_largest_float(self) -> None:
        mapper = build_mapper(DataLimits(-1e308, 1e308, 0.0, 1.0), ChartConfig())
        x_left, _ = mapper.map_point((-1e308, 0.0))
        x_mid, _ = mapper.map_point((0.0, 0.0))
        x_right, _ = mapper.map_point((1e308, 0.0))
        self.assertAlmostEqual(x_left, 150.0)
        self.assertAlmostEqual(x_mid, 400.0)
        self.assertAlmostEqual(x_right, 650.0)

    def test_rejects_zero_width_limits(self) -> None:
        with self.assertRaises(ValueError):
            build_mapper(DataLimits(1.0, 1.0, 0.0, 1.0), ChartConfig())


if __name__ == "__main__":
    unittest.main()
