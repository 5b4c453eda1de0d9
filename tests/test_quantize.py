from __future__ import annotations

import math
import warnings

import numpy as np
import pytest

from termgraf.quantize import data_range, lerp, quantize, row_values, widen_range


def test_lerp_maps_between_ranges() -> None:
    assert lerp((0.0, 10.0), (0.0, 100.0), 5.0) == pytest.approx(50.0)
    assert lerp((-1.0, 1.0), (0.0, 4.0), -1.0) == pytest.approx(0.0)
    assert lerp((0.0, 4.0), (10.0, 20.0), 4.0) == pytest.approx(20.0)


def test_lerp_accepts_arrays() -> None:
    out = lerp((0.0, 2.0), (0.0, 1.0), np.array([0.0, 1.0, 2.0]))
    np.testing.assert_allclose(out, [0.0, 0.5, 1.0])


@pytest.mark.parametrize("y", np.linspace(-3.5, 12.25, 17))
def test_lerp_round_trip(y) -> None:
    in_range, out_range = (-3.5, 12.25), (0.0, 23.0)
    assert lerp(out_range, in_range, lerp(in_range, out_range, y)) == pytest.approx(y)


def test_lerp_on_degenerate_range_is_not_finite() -> None:
    with np.errstate(divide="ignore", invalid="ignore"):
        out = lerp((1.0, 1.0), (0.0, 10.0), np.float64(2.0))
    assert not math.isfinite(out)


def test_widen_range() -> None:
    assert widen_range(5.0, 5.0) == (4.0, 6.0)
    assert widen_range(1.0, 3.0) == (1.0, 3.0)


def test_data_range_ignores_gaps() -> None:
    assert data_range([1.0, math.nan, 4.0], [math.inf, -2.0]) == (-2.0, 4.0)
    assert data_range([7.0, 7.0]) == (6.0, 8.0)
    assert data_range([math.nan], []) == (-1.0, 1.0)


def test_quantize_rounds_to_nearest_row() -> None:
    rows = quantize([0.0, 1.0, 2.0, 3.0], (0.0, 3.0), 4)
    assert rows.tolist() == [0, 1, 2, 3]
    rows = quantize([0.0, 0.4, 0.6, 1.0], (0.0, 1.0), 3)
    assert rows.tolist() == [0, 1, 1, 2]


def test_quantize_widens_degenerate_range() -> None:
    assert quantize([5.0, 5.0, 5.0], (5.0, 5.0), 3).tolist() == [1, 1, 1]


def test_quantize_gaps_inherit_previous_row() -> None:
    rows = quantize([math.nan, 0.0, math.nan, math.nan, 2.0], (0.0, 2.0), 5)
    # leading gap sits in the middle row
    assert rows.tolist() == [2, 0, 0, 0, 4]


def test_quantize_holds_far_values_one_row_outside() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        rows = quantize([0.0, 1e20, -1e20, 1e308], (0.0, 1.0), 5)
    assert rows.tolist() == [0, 5, -1, 5]


def test_quantize_empty() -> None:
    assert quantize([], (0.0, 1.0), 4).tolist() == []


def test_row_values_are_inverse_of_quantize() -> None:
    values = row_values(5, (10.0, 20.0))
    np.testing.assert_allclose(values, [10.0, 12.5, 15.0, 17.5, 20.0])
    assert quantize(values, (10.0, 20.0), 5).tolist() == [0, 1, 2, 3, 4]


def test_row_values_on_degenerate_range() -> None:
    np.testing.assert_allclose(row_values(3, (2.0, 2.0)), [1.0, 2.0, 3.0])
